"""
Speech event handler for assessment sessions.

Mediator between a recognition service and an AssessmentSession. The
recognition service calls the handler from its own delivery thread; the
handler only turns each callback into a SessionEvent and puts it on the
session's bounded queue, so all state changes happen on the session's
consumer thread, one event at a time, in arrival order.
"""
from __future__ import annotations

import queue
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from loguru import logger

from speech.models import CancellationDetails, UtteranceResult


class EventKind(str, Enum):
    STARTED = "started"
    RECOGNIZED = "recognized"
    STOPPED = "stopped"
    CANCELED = "canceled"
    CLOSE = "close"

    @property
    def is_terminal(self) -> bool:
        return self in (EventKind.STOPPED, EventKind.CANCELED, EventKind.CLOSE)


@dataclass(frozen=True)
class SessionEvent:
    kind: EventKind
    payload: Any = None


class SpeechEventHandler:
    """
    Queues recognition events for the session consumer.

    Once a terminal event has been queued, later events are dropped: a
    session ends exactly once and nobody drains the queue afterwards.

    Attributes:
        events: Bounded queue shared with the session consumer
    """

    def __init__(self, events: "queue.Queue[SessionEvent]") -> None:
        self.events = events
        self._closed = False
        self._lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._closed

    def _put(self, event: SessionEvent) -> None:
        with self._lock:
            if self._closed:
                logger.debug(f"[session] dropping {event.kind.value} event after session end")
                return
            if event.kind.is_terminal:
                self._closed = True
        # Blocks while the queue is full, pushing back on the recognizer thread
        self.events.put(event)

    def on_session_started(self, session_id: str) -> None:
        logger.info(f"[session] started id={session_id}")
        self._put(SessionEvent(EventKind.STARTED, session_id))

    def on_recognized(self, result: UtteranceResult) -> None:
        logger.debug(f"[session] recognized '{result.text}'")
        self._put(SessionEvent(EventKind.RECOGNIZED, result))

    def on_session_stopped(self) -> None:
        logger.info("[session] stopped")
        self._put(SessionEvent(EventKind.STOPPED))

    def on_canceled(self, details: CancellationDetails) -> None:
        logger.warning(f"[session] canceled: {details}")
        self._put(SessionEvent(EventKind.CANCELED, details))

    def close(self, reason: Optional[str] = None) -> None:
        """Queue a close event so the consumer exits without a recognizer stop."""
        self._put(SessionEvent(EventKind.CLOSE, reason))

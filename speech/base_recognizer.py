from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Protocol

from speech.models import CancellationDetails, UtteranceResult


class RecognitionEventHandler(Protocol):
    """Callbacks a recognition service pushes session events into."""

    def on_session_started(self, session_id: str) -> None: ...

    def on_recognized(self, result: UtteranceResult) -> None: ...

    def on_session_stopped(self) -> None: ...

    def on_canceled(self, details: CancellationDetails) -> None: ...


class BaseRecognitionService(ABC):
    """
    Abstract base class for continuous recognition services.

    A service pushes utterance results one at a time, asynchronously, to the
    handler it is connected to, framed by a ``started`` event and exactly one
    terminal event (``stopped`` or ``canceled``). Concrete services only need
    to implement ``start_continuous_recognition`` and call the ``_emit_*``
    helpers from whatever thread delivers their results.
    """

    def __init__(self, language: str = "en-US") -> None:
        """Initialize common state.

        Args:
            language: Recognition language code (e.g. "en-US", "zh-CN")
        """
        self.language = language
        self._handler: Optional[RecognitionEventHandler] = None
        self._stop_flag = False

    def connect(self, handler: RecognitionEventHandler) -> None:
        """Attach the handler receiving session events."""
        self._handler = handler

    @abstractmethod
    def start_continuous_recognition(self) -> None:
        """Start delivering results. Must return without blocking."""
        raise NotImplementedError("Subclasses must implement start_continuous_recognition()")

    def stop_continuous_recognition(self) -> None:
        """Request the service to stop delivering results."""
        self._stop_flag = True

    def is_stopped(self) -> bool:
        return self._stop_flag

    # ---- Event emission helpers ----

    def _emit_started(self, session_id: str) -> None:
        if self._handler is not None:
            self._handler.on_session_started(session_id)

    def _emit_recognized(self, result: UtteranceResult) -> None:
        if self._handler is not None:
            self._handler.on_recognized(result)

    def _emit_stopped(self) -> None:
        if self._handler is not None:
            self._handler.on_session_stopped()

    def _emit_canceled(self, details: CancellationDetails) -> None:
        if self._handler is not None:
            self._handler.on_canceled(details)

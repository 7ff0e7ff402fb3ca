"""Recognition service replaying recorded backend results."""
from __future__ import annotations

import threading
import time
import uuid
from typing import Any, Dict, Iterable, List, Optional, Union

from loguru import logger

from core.error_handler import as_result

from .base_recognizer import BaseRecognitionService
from .models import CancellationDetails, UtteranceResult
from .result_parser import parse_backend_result

RecordedResult = Union[str, Dict[str, Any], UtteranceResult]


@as_result((ValueError, TypeError, AttributeError))
def _to_utterance(item: RecordedResult) -> UtteranceResult:
    return item if isinstance(item, UtteranceResult) else parse_backend_result(item)


class ReplayRecognitionService(BaseRecognitionService):
    """
    Replays a recorded session on a background thread.

    Each recorded item is either an UtteranceResult or a detailed backend
    JSON payload. Results are delivered in order, one at a time, followed by
    a ``stopped`` event, or by ``canceled`` when a cancellation is given.
    Useful to re-grade stored sessions offline.
    """

    def __init__(
        self,
        results: Iterable[RecordedResult],
        language: str = "en-US",
        cancellation: Optional[CancellationDetails] = None,
        delay_s: float = 0.0,
    ) -> None:
        """Initialize the replay service.

        Args:
            results: Recorded utterance results, in arrival order
            language: Recognition language code
            cancellation: If set, the session ends with this cancellation
            delay_s: Pause between two delivered results
        """
        super().__init__(language=language)
        self._results: List[RecordedResult] = list(results)
        self._cancellation = cancellation
        self._delay_s = delay_s
        self._thread: Optional[threading.Thread] = None
        self.session_id = uuid.uuid4().hex

    def start_continuous_recognition(self) -> None:
        self._stop_flag = False
        if self._thread is None or not self._thread.is_alive():
            self._thread = threading.Thread(target=self._run, name="replay-recognizer", daemon=True)
            self._thread.start()

    def stop_continuous_recognition(self, timeout: Optional[float] = 5.0) -> None:
        super().stop_continuous_recognition()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    def _run(self) -> None:
        self._emit_started(self.session_id)
        for item in self._results:
            if self.is_stopped():
                logger.debug("[replay] stop requested, ending replay early")
                break
            parsed = _to_utterance(item)
            if parsed.is_failure():
                logger.warning(f"[replay] skipping unreadable recorded result: {parsed.error}")
                continue
            self._emit_recognized(parsed.unwrap())
            if self._delay_s:
                time.sleep(self._delay_s)

        if self._cancellation is not None:
            self._emit_canceled(self._cancellation)
        else:
            self._emit_stopped()

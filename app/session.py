"""Assessment session lifecycle.

An AssessmentSession consumes the push stream of a continuous recognition
service and turns it into a FinalReport:

1. The recognition service calls the session's SpeechEventHandler, which
   queues events on a bounded queue.
2. A single consumer thread drains the queue in arrival order and merges
   every utterance into the session's own SessionAccumulator.
3. A terminal event (stopped or canceled) fires the one-shot completion
   gate; ``wait_for_completion`` blocks on it.
4. ``finalize`` tokenizes the reference text, aligns it against the
   recognized words and aggregates the scores. Cancellation does not stop
   this step: whatever was collected is assessed.
"""
from __future__ import annotations

import queue
import threading
import uuid
from typing import Iterable, Optional

from loguru import logger

from alignment.classifier import AlignmentClassifier
from app.accumulator import SessionAccumulator
from app.speech_event_handler import EventKind, SessionEvent, SpeechEventHandler
from app.use_cases import AssessSessionUseCase, BuildReferenceWordsUseCase, ScoreContentUseCase
from config.service import ConfigurationService
from core.error_handler import handle_exceptions
from core.exceptions import AssessmentError, ScorerUnavailableError, UpstreamCanceledError
from core.result import Failure, Result
from logger.session_logger import SessionLogger
from scoring.aggregator import FinalReport, ScoreAggregator
from scoring.essay_scorer import ChatEssayScorer, ContentScores, build_transcript
from segmentation.reference import ReferenceTokenizer
from speech.base_recognizer import BaseRecognitionService
from speech.models import CancellationDetails, UtteranceResult


class CompletionGate:
    """Single-fire completion signal.

    The first ``fire`` wins and records the reason; the gate cannot be reset.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self.reason: Optional[EventKind] = None

    def fire(self, reason: EventKind) -> bool:
        """Open the gate. Returns False if it was already open."""
        with self._lock:
            if self._event.is_set():
                return False
            self.reason = reason
            self._event.set()
            return True

    @property
    def fired(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self._event.wait(timeout)


class AssessmentSession:
    """
    One read-aloud assessment session.

    Sessions are isolated: each one owns its accumulator, queue, consumer
    thread and completion gate. Create a new session per recording.

    Attributes:
        reference_text: Text the learner reads aloud
        accumulator: State collected from utterances
        handler: Event handler to connect to a recognition service
        cancellation: Set when the recognition service canceled the session
    """

    def __init__(
        self,
        reference_text: str,
        config: ConfigurationService,
        dictionary: Optional[Iterable[str]] = None,
        essay_scorer: Optional[ChatEssayScorer] = None,
    ) -> None:
        """Create a session and start its consumer thread.

        Args:
            reference_text: Text the learner reads aloud
            config: Configuration facade
            dictionary: Known words, required for segmented languages
            essay_scorer: Optional content scorer
        """
        self.reference_text = reference_text
        self.config = config
        self.dictionary = frozenset(dictionary) if dictionary is not None else None
        self.session_id: str = uuid.uuid4().hex[:12]
        self.backend_session_id: Optional[str] = None

        self.accumulator = SessionAccumulator()
        self.cancellation: Optional[UpstreamCanceledError] = None

        self._events: "queue.Queue[SessionEvent]" = queue.Queue(maxsize=config.event_queue_size)
        self.handler = SpeechEventHandler(self._events)
        self._gate = CompletionGate()

        self._build_reference = BuildReferenceWordsUseCase(
            ReferenceTokenizer(config.language, config.segmented_languages)
        )
        self._assess = AssessSessionUseCase(
            AlignmentClassifier(
                enable_miscue=config.enable_miscue,
                pair_substitutions=config.pair_substitutions,
            ),
            ScoreAggregator(),
        )
        self._score_content = ScoreContentUseCase(essay_scorer, config.essay_title)

        self.session_log: Optional[SessionLogger] = None
        if config.session_log_dir:
            self.session_log = SessionLogger(config.session_log_dir, self.session_id)
            self.session_log.log_kv("Configuration", config.to_dict())

        self._consumer = threading.Thread(
            target=self._drain, name=f"assessment-{self.session_id}", daemon=True
        )
        self._consumer.start()

    # ---------- Event consumption ----------

    def _drain(self) -> None:
        while True:
            event = self._events.get()
            try:
                self._apply(event)
            finally:
                self._events.task_done()
            if event.kind.is_terminal:
                self._gate.fire(event.kind)
                return

    @handle_exceptions(message="Error applying recognition event")
    def _apply(self, event: SessionEvent) -> None:
        if event.kind is EventKind.STARTED:
            self.backend_session_id = event.payload
        elif event.kind is EventKind.RECOGNIZED:
            self._on_utterance(event.payload)
        elif event.kind is EventKind.CANCELED:
            self._on_canceled(event.payload)

    def _on_utterance(self, result: UtteranceResult) -> None:
        pron = result.pronunciation
        logger.info(
            f"[session] utterance '{result.text}': accuracy={pron.accuracy_score} "
            f"prosody={pron.prosody_score} pronunciation={pron.pronunciation_score} "
            f"completeness={pron.completeness_score} fluency={pron.fluency_score}"
        )
        self.accumulator.add_utterance(result)

    def _on_canceled(self, details: CancellationDetails) -> None:
        self.cancellation = UpstreamCanceledError(f"Recognition canceled: {details}", details)
        if details.is_error:
            logger.warning(f"[session] backend error code={details.error_code} details={details.error_details}")
        logger.warning("[session] assessing the partial session collected so far")

    # ---------- Lifecycle ----------

    @property
    def completed(self) -> bool:
        return self._gate.fired

    @property
    def was_canceled(self) -> bool:
        return self.cancellation is not None

    def wait_for_completion(self, timeout: Optional[float] = None) -> bool:
        """Block until the session has ended.

        Returns:
            True once a terminal event was processed, False on timeout
        """
        return self._gate.wait(timeout)

    def run(self, recognizer: BaseRecognitionService) -> Result[FinalReport, AssessmentError]:
        """Run a whole session against a recognition service.

        Connects the service, starts continuous recognition, waits for the
        end of the session (bounded by ``completion_timeout_s`` if set),
        stops the service and finalizes.
        """
        recognizer.connect(self.handler)
        recognizer.start_continuous_recognition()
        if not self.wait_for_completion(self.config.completion_timeout_s):
            logger.warning("[session] completion timeout reached, stopping recognition")
        recognizer.stop_continuous_recognition()
        if not self.wait_for_completion(self.config.completion_timeout_s):
            self.handler.close("timeout")
            self.wait_for_completion()
        return self.finalize()

    def finalize(self) -> Result[FinalReport, AssessmentError]:
        """Compute the final report of an ended session.

        Can be called any number of times; identical inputs give identical reports.
        """
        if not self.completed:
            return Failure(AssessmentError("Session is still running"))

        reference = self._build_reference.execute(self.reference_text, self.dictionary)
        if reference.is_failure():
            self._log_outcome("Assessment failed", str(reference.error))
            return reference

        result = self._assess.execute(reference.unwrap(), self.accumulator.snapshot())
        if result.is_success():
            self._log_outcome("Report", result.unwrap().to_dict())
        else:
            self._log_outcome("Assessment failed", str(result.error))
        return result

    def transcript(self) -> str:
        return build_transcript(self.accumulator.snapshot().transcripts)

    def score_content(self, title: Optional[str] = None) -> Result[ContentScores, ScorerUnavailableError]:
        """Score the session transcript with the essay scorer (non-fatal on failure)."""
        result = self._score_content.execute(self.transcript(), title)
        if result.is_success():
            self._log_outcome("Content scores", result.unwrap().to_dict())
        else:
            self._log_outcome("Content scoring unavailable", str(result.error))
        return result

    def close(self) -> None:
        """Tear the session down: end the consumer and the session log."""
        if not self.completed:
            self.handler.close("closed")
            self.wait_for_completion()
        if self.session_log is not None:
            self.session_log.log_end()

    def _log_outcome(self, key: str, value) -> None:
        if self.session_log is not None:
            self.session_log.log_kv(key, value)

"""Tests for the assessment session lifecycle."""
import pytest

from app.session import AssessmentSession, CompletionGate
from app.speech_event_handler import EventKind
from config.config import AppConfig, AssessmentConfig, EssayScorerConfig, SessionConfig
from config.service import ConfigurationService
from core.exceptions import AssessmentError, EmptyInputError, UpstreamCanceledError
from scoring.aggregator import pronunciation_score
from speech.models import (
    DURATION_PADDING_TICKS,
    CancellationDetails,
    ErrorType,
    PronunciationResult,
    UtteranceResult,
    WordAssessment,
    WordTiming,
)
from speech.replay_recognizer import ReplayRecognitionService


def _utterance(text, words, prosody):
    """words: (text, offset, duration, accuracy) tuples."""
    return UtteranceResult(
        text=text,
        words=tuple(WordTiming(w, o, d) for w, o, d, _ in words),
        pronunciation=PronunciationResult(
            accuracy_score=80.0,
            prosody_score=prosody,
            words=tuple(WordAssessment(w, ErrorType.NONE, a) for w, _, _, a in words),
        ),
    )


FIRST = _utterance(
    "Today was a",
    [("today", 0, 4_000_000, 90.0), ("was", 4_500_000, 2_000_000, 80.0), ("a", 7_000_000, 1_000_000, 70.0)],
    80.0,
)
SECOND = _utterance("day.", [("day", 9_000_000, 3_000_000, 100.0)], 70.0)


def _config(**session_overrides):
    session = dict(event_queue_size=4, completion_timeout_s=5.0)
    session.update(session_overrides)
    return ConfigurationService(
        AppConfig(AssessmentConfig(language="en-US"), SessionConfig(**session), EssayScorerConfig())
    )


class TestCompletionGate:
    """Tests for the single-fire completion gate."""

    def test_first_fire_wins(self):
        # Arrange
        gate = CompletionGate()

        # Act
        first = gate.fire(EventKind.STOPPED)
        second = gate.fire(EventKind.CANCELED)

        # Assert
        assert first is True
        assert second is False
        assert gate.reason is EventKind.STOPPED
        assert gate.fired
        assert gate.wait(0)

    def test_wait_times_out_before_fire(self):
        assert CompletionGate().wait(0.01) is False


class TestAssessmentSession:
    """End-to-end sessions driven by a replay recognizer."""

    def test_stopped_session_produces_report(self):
        # Arrange
        session = AssessmentSession("Today was a beautiful day.", _config())
        recognizer = ReplayRecognitionService([FIRST, SECOND])

        # Act
        result = session.run(recognizer)
        session.close()

        # Assert
        assert result.is_success()
        report = result.unwrap()
        assert [(w.text, w.error_type) for w in report.words] == [
            ("today", ErrorType.NONE),
            ("was", ErrorType.NONE),
            ("a", ErrorType.NONE),
            ("beautiful", ErrorType.OMISSION),
            ("day", ErrorType.NONE),
        ]
        assert report.accuracy == pytest.approx(68.0)
        assert report.prosody == pytest.approx(75.0)
        assert report.completeness == pytest.approx(80.0)
        spoken = 10_000_000 + 4 * DURATION_PADDING_TICKS
        span = 12_000_000 + DURATION_PADDING_TICKS
        assert report.fluency == pytest.approx(spoken / span * 100)
        assert report.pronunciation == pytest.approx(
            pronunciation_score(report.accuracy, report.prosody, report.completeness, report.fluency)
        )
        assert session.backend_session_id == recognizer.session_id
        assert not session.was_canceled
        assert session.transcript() == "Today was a day."

    def test_canceled_session_is_still_assessed(self):
        # Arrange
        session = AssessmentSession("Today was a", _config())
        details = CancellationDetails("Error", error_code="ConnectionFailure", error_details="socket closed")
        recognizer = ReplayRecognitionService([FIRST], cancellation=details)

        # Act
        result = session.run(recognizer)
        session.close()

        # Assert
        assert result.is_success()
        assert result.unwrap().completeness == pytest.approx(100.0)
        assert session.was_canceled
        assert isinstance(session.cancellation, UpstreamCanceledError)
        assert session.cancellation.details is details

    def test_recorded_json_payloads_are_replayed(self):
        # Arrange
        payload = {
            "DisplayText": "Hello.",
            "NBest": [
                {
                    "PronunciationAssessment": {"AccuracyScore": 90, "ProsodyScore": 60},
                    "Words": [
                        {
                            "Word": "hello",
                            "Offset": 100,
                            "Duration": 1000,
                            "PronunciationAssessment": {"AccuracyScore": 90, "ErrorType": "None"},
                        }
                    ],
                }
            ],
        }
        session = AssessmentSession("Hello", _config())

        # Act
        result = session.run(ReplayRecognitionService([payload, "{not json"]))
        session.close()

        # Assert
        assert result.unwrap().accuracy == pytest.approx(90.0)
        assert session.accumulator.utterance_count == 1

    def test_session_without_speech_fails(self):
        # Arrange
        session = AssessmentSession("Today was a", _config())

        # Act
        result = session.run(ReplayRecognitionService([]))
        session.close()

        # Assert
        assert result.is_failure()
        assert isinstance(result.error, EmptyInputError)

    def test_finalize_before_completion_fails(self):
        # Arrange
        session = AssessmentSession("Today was a", _config())

        # Act
        result = session.finalize()
        session.close()

        # Assert
        assert result.is_failure()
        assert isinstance(result.error, AssessmentError)
        assert session.completed

    def test_finalize_is_repeatable(self):
        # Arrange
        session = AssessmentSession("Today was a", _config())
        session.run(ReplayRecognitionService([FIRST]))

        # Act
        first = session.finalize()
        second = session.finalize()
        session.close()

        # Assert
        assert first.unwrap() == second.unwrap()

    def test_events_after_stop_are_dropped(self):
        # Arrange
        session = AssessmentSession("Today was a", _config())
        handler = session.handler

        # Act
        handler.on_session_started("abc")
        handler.on_recognized(FIRST)
        handler.on_session_stopped()
        handler.on_recognized(SECOND)
        handler.on_canceled(CancellationDetails("EndOfStream"))
        completed = session.wait_for_completion(5.0)

        # Assert
        assert completed
        assert session.backend_session_id == "abc"
        assert session.accumulator.utterance_count == 1
        assert not session.was_canceled

    def test_sessions_are_isolated(self):
        # Arrange
        first = AssessmentSession("Today was a", _config())
        second = AssessmentSession("Today was a", _config())

        # Act
        first.handler.on_recognized(FIRST)
        first.handler.on_session_stopped()
        first.wait_for_completion(5.0)
        second.close()

        # Assert
        assert first.accumulator.utterance_count == 1
        assert second.accumulator.utterance_count == 0
        assert first.session_id != second.session_id

    def test_session_log_is_written(self, tmp_path):
        # Arrange
        session = AssessmentSession("Today was a", _config(log_dir=str(tmp_path)))

        # Act
        session.run(ReplayRecognitionService([FIRST]))
        session.close()

        # Assert
        logs = list(tmp_path.glob("assessment_*.log"))
        assert len(logs) == 1
        content = logs[0].read_text(encoding="utf-8")
        assert "=== SESSION START ===" in content
        assert "Report" in content
        assert "=== SESSION END ===" in content

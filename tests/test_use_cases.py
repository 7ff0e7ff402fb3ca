"""Unit tests for use cases."""
from unittest.mock import Mock

from app.accumulator import SessionAccumulator
from app.use_cases import AssessSessionUseCase, BuildReferenceWordsUseCase, ScoreContentUseCase
from core.exceptions import AlignmentError, EmptyInputError, ScorerUnavailableError
from core.result import Success
from scoring.aggregator import FinalReport
from scoring.essay_scorer import ContentScores
from segmentation.reference import ReferenceTokenizer
from speech.models import WordToken


class TestBuildReferenceWordsUseCase:
    """Tests for BuildReferenceWordsUseCase."""

    def test_successful_tokenization(self):
        # Arrange
        use_case = BuildReferenceWordsUseCase(ReferenceTokenizer("en-US"))

        # Act
        result = use_case.execute("Hello there.")

        # Assert
        assert result.is_success()
        assert result.unwrap() == [WordToken("hello"), WordToken("there")]

    def test_missing_dictionary_is_a_failure(self):
        # Arrange
        use_case = BuildReferenceWordsUseCase(ReferenceTokenizer("zh-CN", ("zh-CN",)))

        # Act
        result = use_case.execute("中国人民")

        # Assert
        assert result.is_failure()
        assert isinstance(result.error, EmptyInputError)


class TestAssessSessionUseCase:
    """Tests for AssessSessionUseCase."""

    def test_successful_assessment(self):
        # Arrange
        mock_classifier = Mock()
        mock_classifier.classify.return_value = ["final"]
        mock_aggregator = Mock()
        report = Mock(spec=FinalReport)
        mock_aggregator.aggregate.return_value = report
        accumulator = SessionAccumulator(prosody_scores=[70.0], start_offset=0, end_offset=100)
        use_case = AssessSessionUseCase(mock_classifier, mock_aggregator)

        # Act
        result = use_case.execute([WordToken("a")], accumulator)

        # Assert
        assert result.is_success()
        assert result.unwrap() is report
        mock_aggregator.aggregate.assert_called_once_with(["final"], [70.0], 0, 100)

    def test_alignment_error_is_a_failure(self):
        # Arrange
        mock_classifier = Mock()
        mock_classifier.classify.side_effect = AlignmentError("out of step")
        mock_aggregator = Mock()
        use_case = AssessSessionUseCase(mock_classifier, mock_aggregator)

        # Act
        result = use_case.execute([WordToken("a")], SessionAccumulator())

        # Assert
        assert result.is_failure()
        assert isinstance(result.error, AlignmentError)
        mock_aggregator.aggregate.assert_not_called()

    def test_empty_session_is_a_failure(self):
        # Arrange
        mock_classifier = Mock()
        mock_classifier.classify.return_value = []
        mock_aggregator = Mock()
        mock_aggregator.aggregate.side_effect = EmptyInputError("nothing")
        use_case = AssessSessionUseCase(mock_classifier, mock_aggregator)

        # Act
        result = use_case.execute([WordToken("a")], SessionAccumulator())

        # Assert
        assert result.is_failure()
        assert isinstance(result.error, EmptyInputError)


class TestScoreContentUseCase:
    """Tests for ScoreContentUseCase."""

    def test_without_scorer(self):
        # Arrange
        use_case = ScoreContentUseCase(None)

        # Act
        result = use_case.execute("some text")

        # Assert
        assert result.is_failure()
        assert isinstance(result.error, ScorerUnavailableError)

    def test_default_title_is_used(self):
        # Arrange
        mock_scorer = Mock()
        scores = ContentScores(80.0, 70.0, 90.0)
        mock_scorer.score.return_value = Success(scores)
        use_case = ScoreContentUseCase(mock_scorer, default_title="autumn")

        # Act
        result = use_case.execute("some text")

        # Assert
        assert result.unwrap() is scores
        mock_scorer.score.assert_called_once_with("some text", "autumn")

    def test_explicit_title_wins(self):
        # Arrange
        mock_scorer = Mock()
        mock_scorer.score.return_value = Success(ContentScores(1.0, 2.0, 3.0))
        use_case = ScoreContentUseCase(mock_scorer, default_title="autumn")

        # Act
        use_case.execute("some text", "winter")

        # Assert
        mock_scorer.score.assert_called_once_with("some text", "winter")

"""Unit tests for the chat-based essay scorer."""
import pytest
import requests
from unittest.mock import Mock, patch

from core.exceptions import ScorerUnavailableError
from scoring.essay_scorer import (
    ChatEssayScorer,
    ContentScores,
    build_transcript,
    build_user_prompt,
    parse_content_scores,
)


def _response(content=None, status_error=None, payload=None):
    response = Mock()
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    response.json.return_value = payload if payload is not None else {
        "choices": [{"message": {"content": content}}]
    }
    return response


@pytest.fixture
def http():
    return Mock()


@pytest.fixture
def scorer(http):
    return ChatEssayScorer("myres", "gpt", "2024-02-01", "secret", timeout_s=5.0, session=http)


class TestChatEssayScorer:
    """Tests for ChatEssayScorer.score."""

    def test_successful_scoring(self, scorer, http):
        # Arrange
        http.post.return_value = _response('Sure: {"vocabulary": 81.5, "grammar": 70, "topic": 92}')

        # Act
        result = scorer.score("autumn is my favourite season", "the season of the fall")

        # Assert
        assert result.is_success()
        assert result.unwrap() == ContentScores(81.5, 70.0, 92.0)
        args, kwargs = http.post.call_args
        assert args[0] == "https://myres.openai.azure.com/openai/deployments/gpt/chat/completions"
        assert kwargs["params"] == {"api-version": "2024-02-01"}
        assert kwargs["headers"]["api-key"] == "secret"
        assert kwargs["timeout"] == 5.0
        messages = kwargs["json"]["messages"]
        assert messages[0]["role"] == "system"
        assert "autumn is my favourite season" in messages[1]["content"]
        assert "the season of the fall" in messages[1]["content"]

    def test_http_error(self, scorer, http):
        # Arrange
        http.post.return_value = _response(status_error=requests.exceptions.HTTPError("500"))

        # Act
        result = scorer.score("text", "title")

        # Assert
        assert result.is_failure()
        assert isinstance(result.error, ScorerUnavailableError)

    def test_connection_error(self, scorer, http):
        # Arrange
        http.post.side_effect = requests.exceptions.ConnectionError("down")

        # Act
        result = scorer.score("text", "title")

        # Assert
        assert isinstance(result.error, ScorerUnavailableError)

    def test_unexpected_payload(self, scorer, http):
        # Arrange
        http.post.return_value = _response(payload={"error": "nope"})

        # Act
        result = scorer.score("text", "title")

        # Assert
        assert isinstance(result.error, ScorerUnavailableError)

    def test_answer_without_scores(self, scorer, http):
        # Arrange
        http.post.return_value = _response('{"vocabulary": 80, "grammar": 70}')

        # Act
        result = scorer.score("text", "title")

        # Assert
        assert result.is_failure()
        assert "topic" in str(result.error)

    def test_empty_transcript_skips_request(self, scorer, http):
        # Act
        result = scorer.score("  ", "title")

        # Assert
        assert result.is_failure()
        http.post.assert_not_called()

    def test_missing_api_key_skips_request(self, http):
        # Arrange
        scorer = ChatEssayScorer("myres", "gpt", "2024-02-01", "", session=http)

        # Act
        result = scorer.score("text", "title")

        # Assert
        assert isinstance(result.error, ScorerUnavailableError)
        http.post.assert_not_called()


class TestHelpers:
    """Tests for transcript and answer helpers."""

    def test_build_transcript_skips_empty_utterances(self):
        assert build_transcript(["Hello there.", ".", "", "Bye."]) == "Hello there. Bye."

    def test_user_prompt_carries_scored_examples(self):
        prompt = build_user_prompt("my essay", "autumn")

        assert prompt.startswith("Example1: this essay: \"OK the movie")
        assert "scores of 80 and 80, respectively" in prompt
        assert "scores of 40 and 43, respectively" in prompt
        assert "Example3: this essay:" in prompt
        assert 'The essay for you to score is "my essay", and the title is "autumn".' in prompt

    def test_parse_content_scores_multiline(self):
        scores = parse_content_scores('Scores:\n{\n "vocabulary": 60,\n "grammar": 65.5,\n "topic": 70\n}\n')

        assert scores.to_dict() == {"vocabulary": 60.0, "grammar": 65.5, "topic": 70.0}

    def test_parse_content_scores_without_json(self):
        with pytest.raises(ValueError):
            parse_content_scores("I cannot grade this.")


class TestDefaultTransport:
    """Scorer without an injected session posts through the requests module."""

    @patch("scoring.essay_scorer.requests.post")
    def test_uses_requests_post(self, mock_post):
        # Arrange
        mock_post.return_value = _response('{"vocabulary": 50, "grammar": 60, "topic": 70}')
        scorer = ChatEssayScorer("myres", "gpt", "2024-02-01", "secret")

        # Act
        result = scorer.score("text", "title")

        # Assert
        assert result.unwrap() == ContentScores(50.0, 60.0, 70.0)
        mock_post.assert_called_once()

    @patch("scoring.essay_scorer.requests.post")
    def test_timeout_is_a_failure(self, mock_post):
        # Arrange
        mock_post.side_effect = requests.exceptions.Timeout("slow")
        scorer = ChatEssayScorer("myres", "gpt", "2024-02-01", "secret")

        # Act
        result = scorer.score("text", "title")

        # Assert
        assert isinstance(result.error, ScorerUnavailableError)

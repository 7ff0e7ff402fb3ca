"""Content scoring of a spoken essay through a chat-completions deployment."""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests
from loguru import logger

from core.exceptions import ScorerUnavailableError
from core.result import Failure, Result, Success

from .essay_examples import EXAMPLE_ESSAYS

SYSTEM_PROMPT = (
    "You are an English teacher and please help to grade a student's essay from vocabulary "
    "and grammar and topic relevance on how well the essay aligns with the title, and output "
    'format as: {"vocabulary": *.*(0-100), "grammar": *.*(0-100), "topic": *.*(0-100)}.'
)

USER_PROMPT = (
    'The essay for you to score is "{essay}", and the title is "{title}". '
    "The script is from speech recognition so that please first add punctuations when needed, "
    "remove duplicates and unnecessary un uh from oral speech, then find all the misuse of words "
    "and grammar errors in this essay, find advanced words and grammar usages, and finally give "
    "scores based on this information. Please only response as this format "
    '{{"vocabulary": *.*(0-100), "grammar": *.*(0-100), "topic": *.*(0-100)}}.'
)


def build_user_prompt(transcript: str, title: str) -> str:
    """User message: the scored example essays followed by the essay to score."""
    examples = "".join(
        f'Example{i}: this essay: "{text}" has vocabulary and grammar scores of '
        f"{vocabulary:g} and {grammar:g}, respectively. "
        for i, (text, vocabulary, grammar) in enumerate(EXAMPLE_ESSAYS, start=1)
    )
    return examples + USER_PROMPT.format(essay=transcript, title=title)


_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)

SCORE_KEYS = ("vocabulary", "grammar", "topic")


@dataclass(frozen=True)
class ContentScores:
    """Content assessment of a transcript."""
    vocabulary: float
    grammar: float
    topic: float

    def to_dict(self) -> Dict[str, float]:
        return {"vocabulary": self.vocabulary, "grammar": self.grammar, "topic": self.topic}


def build_transcript(texts: List[str]) -> str:
    """Join utterance texts, skipping utterances with no spoken content."""
    return " ".join(t for t in texts if t.rstrip("."))


def parse_content_scores(content: str) -> ContentScores:
    """Parse the model answer into ContentScores.

    Raises:
        ValueError: If no JSON object with the three scores can be read
    """
    match = _JSON_OBJECT.search(content or "")
    if match is None:
        raise ValueError(f"No JSON object in scorer answer: {content!r}")
    data = json.loads(match.group(0))
    missing = [k for k in SCORE_KEYS if k not in data]
    if missing:
        raise ValueError(f"Scorer answer is missing keys: {', '.join(missing)}")
    return ContentScores(
        vocabulary=float(data["vocabulary"]),
        grammar=float(data["grammar"]),
        topic=float(data["topic"]),
    )


class ChatEssayScorer:
    """
    Opaque vocabulary/grammar/topic scorer backed by a chat deployment.

    One request per session; every failure comes back as a
    ``Failure(ScorerUnavailableError)`` so pronunciation scores computed
    earlier stay usable.
    """

    def __init__(
        self,
        resource_name: str,
        deployment: str,
        api_version: str,
        api_key: str,
        timeout_s: float = 30.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.resource_name = resource_name
        self.deployment = deployment
        self.api_version = api_version
        self._api_key = api_key
        self.timeout_s = timeout_s
        self._http = session or requests

    @property
    def url(self) -> str:
        return (
            f"https://{self.resource_name}.openai.azure.com/openai/deployments/"
            f"{self.deployment}/chat/completions"
        )

    def build_payload(self, transcript: str, title: str) -> Dict[str, Any]:
        return {
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_user_prompt(transcript, title)},
            ],
            "temperature": 0,
            "top_p": 1,
        }

    def score(self, transcript: str, title: str) -> Result[ContentScores, ScorerUnavailableError]:
        """Score a transcript against an essay title.

        Args:
            transcript: Full recognized text of the session
            title: Essay title the learner spoke about

        Returns:
            Result containing ContentScores or ScorerUnavailableError
        """
        if not transcript.strip():
            return Failure(ScorerUnavailableError("Transcript is empty"))
        if not self._api_key:
            return Failure(ScorerUnavailableError("No API key configured for the essay scorer"))

        try:
            response = self._http.post(
                self.url,
                params={"api-version": self.api_version},
                headers={"api-key": self._api_key, "Content-Type": "application/json"},
                json=self.build_payload(transcript, title),
                timeout=self.timeout_s,
            )
            response.raise_for_status()
            content = response.json()["choices"][0]["message"]["content"]
        except requests.exceptions.RequestException as e:
            logger.warning(f"[essay] request failed: {e}")
            return Failure(ScorerUnavailableError(f"Essay scorer request failed: {e}"))
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.warning(f"[essay] unexpected response payload: {e}")
            return Failure(ScorerUnavailableError(f"Unexpected essay scorer response: {e}"))

        try:
            scores = parse_content_scores(content)
        except (ValueError, TypeError) as e:
            logger.warning(f"[essay] unparsable answer: {e}")
            return Failure(ScorerUnavailableError(f"Unparsable essay scorer answer: {e}"))

        logger.info(
            f"[essay] vocabulary={scores.vocabulary:.1f} grammar={scores.grammar:.1f} topic={scores.topic:.1f}"
        )
        return Success(scores)

"""Use cases for pronunciation assessment.

Each use case wraps one step of the pipeline and reports its outcome as a
Result instead of raising, so the session can decide what to surface.
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from loguru import logger

from alignment.classifier import AlignmentClassifier
from app.accumulator import SessionAccumulator
from core.exceptions import AssessmentError, ScorerUnavailableError
from core.result import Failure, Result, Success
from scoring.aggregator import FinalReport, ScoreAggregator
from scoring.essay_scorer import ChatEssayScorer, ContentScores
from segmentation.reference import ReferenceTokenizer
from speech.models import WordToken


class BuildReferenceWordsUseCase:
    """Turns the reference text into alignment tokens."""

    def __init__(self, tokenizer: ReferenceTokenizer):
        self.tokenizer = tokenizer

    def execute(
        self,
        reference_text: str,
        dictionary: Optional[Iterable[str]] = None,
    ) -> Result[List[WordToken], AssessmentError]:
        try:
            tokens = self.tokenizer.tokenize(reference_text, dictionary)
        except AssessmentError as e:
            logger.error(f"Failed to build reference words: {e}")
            return Failure(e)
        return Success(tokens)


class AssessSessionUseCase:
    """Aligns the accumulated words against the reference and aggregates scores."""

    def __init__(self, classifier: AlignmentClassifier, aggregator: ScoreAggregator):
        self.classifier = classifier
        self.aggregator = aggregator

    def execute(
        self,
        reference_tokens: Sequence[WordToken],
        accumulator: SessionAccumulator,
    ) -> Result[FinalReport, AssessmentError]:
        """Produce the final report.

        Args:
            reference_tokens: Reference words
            accumulator: Snapshot of the session state

        Returns:
            Result containing FinalReport or the AssessmentError that prevented it
        """
        try:
            final_words = self.classifier.classify(
                reference_tokens,
                accumulator.recognized_tokens,
                accumulator.recognized_words,
            )
            report = self.aggregator.aggregate(
                final_words,
                accumulator.prosody_scores,
                accumulator.start_offset,
                accumulator.end_offset,
            )
        except AssessmentError as e:
            logger.error(f"Failed to assess session: {e}")
            return Failure(e)
        return Success(report)


class ScoreContentUseCase:
    """Scores the session transcript for vocabulary, grammar and topic."""

    def __init__(self, scorer: Optional[ChatEssayScorer], default_title: str = ""):
        self.scorer = scorer
        self.default_title = default_title

    def execute(
        self,
        transcript: str,
        title: Optional[str] = None,
    ) -> Result[ContentScores, ScorerUnavailableError]:
        if self.scorer is None:
            return Failure(ScorerUnavailableError("Essay scorer is not configured"))
        return self.scorer.score(transcript, title or self.default_title)

"""Session-level score aggregation.

All functions are pure: the same words and prosody scores always produce
the same report.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from loguru import logger

from core.error_handler import log_execution_time
from core.exceptions import EmptyInputError
from speech.models import ErrorType, RecognizedWord

METRIC_WEIGHT: float = 0.2
# Extra weight applied to the weakest of the four metrics
MIN_METRIC_WEIGHT: float = 0.2


@dataclass(frozen=True)
class FinalReport:
    """Whole-session scores plus the reconciled word list."""
    accuracy: float
    prosody: float
    completeness: float
    fluency: float
    pronunciation: float
    words: Tuple[RecognizedWord, ...] = ()

    def to_dict(self) -> Dict[str, object]:
        return {
            "accuracy": self.accuracy,
            "prosody": self.prosody,
            "completeness": self.completeness,
            "fluency": self.fluency,
            "pronunciation": self.pronunciation,
            "words": [w.to_dict() for w in self.words],
        }


def accuracy_score(words: Sequence[RecognizedWord]) -> float:
    """Mean accuracy over words that are not insertions."""
    filtered = [w for w in words if w.error_type is not ErrorType.INSERTION]
    if not filtered:
        raise EmptyInputError("No reference words to compute accuracy from")
    return sum(w.accuracy_score for w in filtered) / len(filtered)


def prosody_score(prosody_scores: Sequence[float]) -> float:
    """Arithmetic mean of per-utterance prosody scores."""
    if not prosody_scores:
        raise EmptyInputError("No prosody scores were collected")
    return sum(prosody_scores) / len(prosody_scores)


def fluency_score(words: Sequence[RecognizedWord], start_offset: Optional[int], end_offset: Optional[int]) -> float:
    """Share of the spoken time span covered by correctly read words, in percent."""
    if start_offset is None or end_offset is None or end_offset - start_offset <= 0:
        raise EmptyInputError(f"Invalid speech time span: start={start_offset} end={end_offset}")
    durations_sum = sum(w.duration_ticks for w in words if w.error_type is ErrorType.NONE)
    return durations_sum * 1.0 / (end_offset - start_offset) * 100


def completeness_score(words: Sequence[RecognizedWord]) -> float:
    """Share of reference words read correctly, in percent, capped at 100."""
    filtered_count = sum(1 for w in words if w.error_type is not ErrorType.INSERTION)
    if not filtered_count:
        raise EmptyInputError("No reference words to compute completeness from")
    correct = sum(1 for w in words if w.error_type is ErrorType.NONE)
    return min(correct / filtered_count * 100, 100.0)


def pronunciation_score(accuracy: float, prosody: float, completeness: float, fluency: float) -> float:
    """Weighted sum of the four metrics, counting the weakest one twice."""
    scores: List[float] = [accuracy, prosody, completeness, fluency]
    return sum(s * METRIC_WEIGHT for s in scores) + min(scores) * MIN_METRIC_WEIGHT


class ScoreAggregator:
    """Computes the FinalReport of a session."""

    @log_execution_time()
    def aggregate(
        self,
        final_words: Sequence[RecognizedWord],
        prosody_scores: Sequence[float],
        start_offset: Optional[int],
        end_offset: Optional[int],
    ) -> FinalReport:
        """Aggregate reconciled words and prosody scores.

        Args:
            final_words: Words after alignment
            prosody_scores: One prosody score per utterance
            start_offset: Offset of the first recognized word, in ticks
            end_offset: Padded end of the last recognized word, in ticks

        Returns:
            FinalReport

        Raises:
            EmptyInputError: On any zero-denominator condition
        """
        accuracy = accuracy_score(final_words)
        prosody = prosody_score(prosody_scores)
        completeness = completeness_score(final_words)
        fluency = fluency_score(final_words, start_offset, end_offset)
        pronunciation = pronunciation_score(accuracy, prosody, completeness, fluency)

        logger.info(
            f"[score] accuracy={accuracy:.2f} prosody={prosody:.2f} completeness={completeness:.2f} "
            f"fluency={fluency:.2f} pronunciation={pronunciation:.2f}"
        )
        return FinalReport(
            accuracy=accuracy,
            prosody=prosody,
            completeness=completeness,
            fluency=fluency,
            pronunciation=pronunciation,
            words=tuple(final_words),
        )

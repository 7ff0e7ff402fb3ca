"""Session scoring: pronunciation aggregation and content (essay) scoring."""
from __future__ import annotations

from .aggregator import (
    FinalReport,
    ScoreAggregator,
    accuracy_score,
    completeness_score,
    fluency_score,
    prosody_score,
    pronunciation_score,
)
from .essay_scorer import (
    ChatEssayScorer,
    ContentScores,
    build_transcript,
    build_user_prompt,
    parse_content_scores,
)

__all__ = [
    "FinalReport",
    "ScoreAggregator",
    "accuracy_score",
    "completeness_score",
    "fluency_score",
    "prosody_score",
    "pronunciation_score",
    "ChatEssayScorer",
    "ContentScores",
    "build_transcript",
    "build_user_prompt",
    "parse_content_scores",
]

"""Conversion of detailed backend JSON results into UtteranceResult objects."""
from __future__ import annotations

import json
from typing import Any, Dict, List, Union

from speech.models import (
    ErrorType,
    PronunciationResult,
    UtteranceResult,
    WordAssessment,
    WordTiming,
)


def _best_hypothesis(data: Dict[str, Any]) -> Dict[str, Any]:
    nbest = data.get("NBest") or [{}]
    return nbest[0] if nbest else {}


def parse_backend_result(payload: Union[str, Dict[str, Any]]) -> UtteranceResult:
    """Parse one detailed recognition result.

    The payload follows the detailed output format: the top hypothesis lives
    in ``NBest[0]`` and carries utterance scores under
    ``PronunciationAssessment`` and per-word timing plus assessment under
    ``Words``.

    Args:
        payload: Raw JSON string or already decoded dictionary

    Returns:
        Parsed UtteranceResult

    Raises:
        ValueError: If the payload is not valid JSON
    """
    data: Dict[str, Any] = json.loads(payload) if isinstance(payload, str) else dict(payload or {})
    top = _best_hypothesis(data)
    pa = top.get("PronunciationAssessment") or {}

    timings: List[WordTiming] = []
    assessments: List[WordAssessment] = []
    for item in top.get("Words") or []:
        word = item.get("Word", "")
        word_pa = item.get("PronunciationAssessment") or {}
        timings.append(
            WordTiming(
                word=word,
                offset=int(item.get("Offset", 0)),
                duration=int(item.get("Duration", 0)),
            )
        )
        assessments.append(
            WordAssessment(
                word=word,
                error_type=ErrorType.parse(word_pa.get("ErrorType")),
                accuracy_score=float(word_pa.get("AccuracyScore", 0.0)),
            )
        )

    prosody = pa.get("ProsodyScore")
    pronunciation = PronunciationResult(
        accuracy_score=float(pa.get("AccuracyScore", 0.0)),
        prosody_score=float(prosody) if prosody is not None else None,
        pronunciation_score=float(pa.get("PronScore", 0.0)),
        completeness_score=float(pa.get("CompletenessScore", 0.0)),
        fluency_score=float(pa.get("FluencyScore", 0.0)),
        words=tuple(assessments),
    )

    text = data.get("DisplayText") or top.get("Display") or top.get("Lexical") or ""
    return UtteranceResult(text=text, words=tuple(timings), pronunciation=pronunciation)

"""Speech recognition data model and service interfaces.

The assessment core consumes a continuous recognition service through the
BaseRecognitionService interface; transport to a real backend lives outside
this package. ReplayRecognitionService replays recorded detailed results.
"""
from .base_recognizer import BaseRecognitionService, RecognitionEventHandler
from .models import (
    DURATION_PADDING_TICKS,
    CancellationDetails,
    ErrorType,
    PronunciationResult,
    RecognizedWord,
    UtteranceResult,
    WordAssessment,
    WordTiming,
    WordToken,
)
from .replay_recognizer import ReplayRecognitionService
from .result_parser import parse_backend_result

__all__ = [
    "BaseRecognitionService",
    "RecognitionEventHandler",
    "ReplayRecognitionService",
    "parse_backend_result",
    "DURATION_PADDING_TICKS",
    "CancellationDetails",
    "ErrorType",
    "PronunciationResult",
    "RecognizedWord",
    "UtteranceResult",
    "WordAssessment",
    "WordTiming",
    "WordToken",
]

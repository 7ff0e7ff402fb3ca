"""Data model for recognition results and assessed words.

Offsets and durations are expressed in backend ticks (100 ns).
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Tuple

# Added to every word duration to compensate for truncation by the backend
DURATION_PADDING_TICKS: int = 100000

TICKS_PER_SECOND: int = 10_000_000


class ErrorType(str, Enum):
    """Per-word error classification as reported by the backend."""

    NONE = "None"
    OMISSION = "Omission"
    INSERTION = "Insertion"
    MISPRONUNCIATION = "Mispronunciation"
    UNEXPECTED_BREAK = "UnexpectedBreak"
    MISSING_BREAK = "MissingBreak"
    MONOTONE = "Monotone"

    @classmethod
    def parse(cls, value: Optional[str]) -> "ErrorType":
        """Map a backend string to an ErrorType, treating missing values as NONE."""
        if not value:
            return cls.NONE
        try:
            return cls(value)
        except ValueError:
            for member in cls:
                if member.value.lower() == value.strip().lower():
                    return member
            raise


@dataclass(frozen=True)
class WordToken:
    """A single word unit of the reference or recognized sequence."""
    text: str


@dataclass(frozen=True)
class RecognizedWord:
    """A word with its assessment metadata.

    Attributes:
        text: Word text
        error_type: Current error classification
        accuracy_score: Backend accuracy (0-100), meaningful only for NONE words
        duration_ticks: Padded duration in ticks
        offset_ticks: Offset from the start of the audio in ticks
    """
    text: str
    error_type: ErrorType = ErrorType.NONE
    accuracy_score: float = 0.0
    duration_ticks: int = 0
    offset_ticks: int = 0

    def with_error_type(self, error_type: ErrorType) -> "RecognizedWord":
        return replace(self, error_type=error_type)

    def to_dict(self) -> dict:
        return {
            "word": self.text,
            "error_type": self.error_type.value,
            "accuracy_score": self.accuracy_score,
            "duration": self.duration_ticks,
            "offset": self.offset_ticks,
        }


@dataclass(frozen=True)
class WordTiming:
    """Word timing as found in the recognizer's best hypothesis."""
    word: str
    offset: int
    duration: int


@dataclass(frozen=True)
class WordAssessment:
    """Per-word pronunciation assessment."""
    word: str
    error_type: ErrorType = ErrorType.NONE
    accuracy_score: float = 0.0


@dataclass(frozen=True)
class PronunciationResult:
    """Utterance-level pronunciation assessment."""
    accuracy_score: float = 0.0
    prosody_score: Optional[float] = None
    pronunciation_score: float = 0.0
    completeness_score: float = 0.0
    fluency_score: float = 0.0
    words: Tuple[WordAssessment, ...] = ()


@dataclass(frozen=True)
class UtteranceResult:
    """One recognized utterance pushed by the recognition service."""
    text: str
    words: Tuple[WordTiming, ...] = ()
    pronunciation: PronunciationResult = field(default_factory=PronunciationResult)

    @property
    def has_words(self) -> bool:
        return bool(self.words) or bool(self.pronunciation.words)


@dataclass(frozen=True)
class CancellationDetails:
    """Why the recognition service canceled the session."""
    reason: str
    error_code: Optional[str] = None
    error_details: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.reason.lower() == "error"

    def __str__(self) -> str:
        parts: List[str] = [f"reason={self.reason}"]
        if self.error_code:
            parts.append(f"error_code={self.error_code}")
        if self.error_details:
            parts.append(f"error_details={self.error_details}")
        return " ".join(parts)

"""Custom exception hierarchy for the assessment pipeline."""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from speech.models import CancellationDetails


class AssessmentError(Exception):
    """Base exception for all pronunciation assessment errors."""
    pass


class EmptyInputError(AssessmentError):
    """Raised when a computation has nothing to work on (empty text, dictionary or word list)."""
    pass


class AlignmentError(AssessmentError):
    """Raised when recognized texts and recognized words fall out of step."""
    pass


class UpstreamCanceledError(AssessmentError):
    """Raised (or recorded) when the recognition service cancels the session."""

    def __init__(self, message: str, details: Optional["CancellationDetails"] = None):
        super().__init__(message)
        self.details = details


class ScorerUnavailableError(AssessmentError):
    """Raised when the essay scorer fails or returns an unusable payload."""
    pass


class ConfigurationError(AssessmentError):
    """Raised when configuration is invalid or missing."""
    pass

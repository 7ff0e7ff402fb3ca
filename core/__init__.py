"""Core infrastructure: exception hierarchy, Result type and error handling helpers."""
from __future__ import annotations

from .exceptions import (
    AssessmentError,
    EmptyInputError,
    AlignmentError,
    UpstreamCanceledError,
    ScorerUnavailableError,
    ConfigurationError,
)
from .result import Result, Success, Failure

__all__ = [
    "AssessmentError",
    "EmptyInputError",
    "AlignmentError",
    "UpstreamCanceledError",
    "ScorerUnavailableError",
    "ConfigurationError",
    "Result",
    "Success",
    "Failure",
]

"""Alignment of recognized words against reference words."""
from __future__ import annotations

from .classifier import AlignmentClassifier
from .differ import AlignmentDelta, ChangeType, diff_words

__all__ = ["AlignmentClassifier", "AlignmentDelta", "ChangeType", "diff_words"]

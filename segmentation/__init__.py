"""Reference text segmentation.

Main components:
    WordSegmenter: bidirectional longest-match segmentation for unspaced text
    ReferenceTokenizer: chooses segmentation or whitespace splitting per language
    harvest_dictionary: builds the known-word set from a calibration utterance
"""
from __future__ import annotations

from .reference import ReferenceTokenizer
from .segmenter import WordSegmenter, harvest_dictionary
from .text_utils import remove_punctuation, split_reference_words, strip_token_punctuation

__all__ = [
    "ReferenceTokenizer",
    "WordSegmenter",
    "harvest_dictionary",
    "remove_punctuation",
    "split_reference_words",
    "strip_token_punctuation",
]

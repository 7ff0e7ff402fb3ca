"""Reference text tokenization for alignment."""
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from loguru import logger

from core.exceptions import EmptyInputError
from speech.models import WordToken

from .segmenter import WordSegmenter
from .text_utils import split_reference_words


class ReferenceTokenizer:
    """Turns a reference text into the word tokens used for alignment.

    Languages listed in ``segmented_languages`` are written without reliable
    word boundaries and go through the dictionary-driven WordSegmenter; all
    others are split on whitespace.
    """

    def __init__(self, language: str, segmented_languages: Sequence[str] = ("zh-CN",)) -> None:
        self.language = language
        self._segmented = {lang.lower() for lang in segmented_languages}

    @property
    def requires_segmentation(self) -> bool:
        return self.language.lower() in self._segmented

    def tokenize(self, reference_text: str, dictionary: Optional[Iterable[str]] = None) -> List[WordToken]:
        """Tokenize the reference text.

        Args:
            reference_text: Text the learner reads aloud
            dictionary: Known words, required for segmented languages

        Returns:
            Ordered reference tokens

        Raises:
            EmptyInputError: On empty reference text or a missing dictionary
        """
        if not reference_text or not reference_text.strip():
            raise EmptyInputError("Reference text is empty")

        if self.requires_segmentation:
            if dictionary is None:
                raise EmptyInputError(f"A word dictionary is required to segment {self.language} text")
            tokens = WordSegmenter(dictionary).segment(reference_text)
        else:
            tokens = [WordToken(w) for w in split_reference_words(reference_text)]

        if not tokens:
            raise EmptyInputError("Reference text contains no words")
        logger.debug(f"[segment] {len(tokens)} reference words ({self.language})")
        return tokens

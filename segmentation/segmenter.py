"""Dictionary-driven word segmentation for unspaced reference text."""
from __future__ import annotations

from typing import FrozenSet, Iterable, List

from loguru import logger

from core.exceptions import EmptyInputError
from speech.models import ErrorType, UtteranceResult, WordToken

from .text_utils import remove_punctuation


def harvest_dictionary(result: UtteranceResult) -> FrozenSet[str]:
    """Collect known words from a calibration utterance covering the reference text.

    Words the backend flagged as insertions are not part of the reference and
    are skipped.
    """
    return frozenset(
        w.word
        for w in result.pronunciation.words
        if w.word and w.error_type is not ErrorType.INSERTION
    )


class WordSegmenter:
    """Bidirectional longest-match segmenter.

    Both passes consume every character (unknown characters fall back to
    single-character tokens), so both candidates always rebuild the input.
    The candidate with fewer tokens wins; on a tie the one with fewer
    single-character tokens wins; on a full tie the right-to-left candidate
    is returned.

    Attributes:
        dictionary: Known words
        max_length: Length of the longest known word
    """

    def __init__(self, dictionary: Iterable[str]) -> None:
        self.dictionary: FrozenSet[str] = frozenset(w for w in dictionary if w)
        if not self.dictionary:
            raise EmptyInputError("Segmentation dictionary is empty")
        self.max_length: int = max(len(w) for w in self.dictionary)

    def left_to_right(self, text: str) -> List[str]:
        """Longest-prefix matching from the start of the text."""
        result: List[str] = []
        while text:
            sub_text = text[:self.max_length]
            while sub_text:
                if sub_text in self.dictionary or len(sub_text) == 1:
                    result.append(sub_text)
                    text = text[len(sub_text):]
                    break
                sub_text = sub_text[:-1]
        return result

    def right_to_left(self, text: str) -> List[str]:
        """Longest-suffix matching from the end of the text."""
        result: List[str] = []
        while text:
            sub_text = text[-self.max_length:]
            while sub_text:
                if sub_text in self.dictionary or len(sub_text) == 1:
                    result.append(sub_text)
                    text = text[:-len(sub_text)]
                    break
                sub_text = sub_text[1:]
        result.reverse()
        return result

    def _unmatched(self, tokens: List[str]) -> int:
        return sum(1 for t in tokens if t not in self.dictionary)

    def select(self, left_to_right: List[str], right_to_left: List[str]) -> List[str]:
        """Pick one of two candidate segmentations."""
        if len(left_to_right) != len(right_to_left):
            return left_to_right if len(left_to_right) < len(right_to_left) else right_to_left

        ltr_single = sum(1 for t in left_to_right if len(t) == 1)
        rtl_single = sum(1 for t in right_to_left if len(t) == 1)
        return left_to_right if ltr_single < rtl_single else right_to_left

    def segment_text(self, reference_text: str) -> List[str]:
        """Segment a reference text into word strings.

        Punctuation and whitespace are removed first, so the joined result
        equals the stripped reference.

        Raises:
            EmptyInputError: If nothing is left to segment
        """
        text = "".join(remove_punctuation(reference_text).split())
        if not text:
            raise EmptyInputError("Reference text is empty after removing punctuation")

        ltr = self.left_to_right(text)
        rtl = self.right_to_left(text)

        if self._unmatched(ltr) and self._unmatched(rtl):
            logger.warning(
                f"[segment] dictionary does not cover the reference text "
                f"(unmatched chars: ltr={self._unmatched(ltr)} rtl={self._unmatched(rtl)})"
            )
        if ltr != rtl:
            logger.debug(f"[segment] ambiguous segmentation ltr={ltr} rtl={rtl}")

        return self.select(ltr, rtl)

    def segment(self, reference_text: str) -> List[WordToken]:
        """Segment a reference text into word tokens."""
        return [WordToken(t) for t in self.segment_text(reference_text)]

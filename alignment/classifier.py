"""Miscue classification by aligning recognized words against the reference."""
from __future__ import annotations

from typing import List, Sequence

from loguru import logger

from core.error_handler import log_execution_time
from core.exceptions import AlignmentError
from speech.models import ErrorType, RecognizedWord, WordToken

from .differ import AlignmentDelta, ChangeType, diff_words


class AlignmentClassifier:
    """
    Reconciles the reference words with the words recognized over a session.

    In continuous mode the backend never reports omissions or insertions, so
    they are recovered here from a diff of the two word sequences.

    Attributes:
        enable_miscue: When False, recognized words are returned untouched
        pair_substitutions: Report substitutions as MODIFIED deltas
    """

    def __init__(self, enable_miscue: bool = True, pair_substitutions: bool = False) -> None:
        self.enable_miscue = enable_miscue
        self.pair_substitutions = pair_substitutions

    def deltas(
        self,
        reference_tokens: Sequence[WordToken],
        recognized_tokens: Sequence[WordToken],
    ) -> List[AlignmentDelta]:
        return diff_words(
            [t.text for t in reference_tokens],
            [t.text for t in recognized_tokens],
            pair_substitutions=self.pair_substitutions,
        )

    @log_execution_time()
    def classify(
        self,
        reference_tokens: Sequence[WordToken],
        recognized_tokens: Sequence[WordToken],
        recognized_words: Sequence[RecognizedWord],
    ) -> List[RecognizedWord]:
        """Build the final word list with corrected error types.

        Args:
            reference_tokens: Reference words, in reading order
            recognized_tokens: Recognized words used for the diff
            recognized_words: Assessed words, parallel to ``recognized_tokens``

        Returns:
            Final words in diff order

        Raises:
            AlignmentError: If recognized tokens and words are not parallel
        """
        if not self.enable_miscue:
            return list(recognized_words)

        if len(recognized_tokens) != len(recognized_words):
            raise AlignmentError(
                f"{len(recognized_tokens)} recognized tokens but {len(recognized_words)} assessed words"
            )

        final_words: List[RecognizedWord] = []
        idx = 0
        for delta in self.deltas(reference_tokens, recognized_tokens):
            if delta.type is ChangeType.UNCHANGED:
                final_words.append(recognized_words[idx])
                idx += 1
            elif delta.type is ChangeType.DELETED:
                final_words.append(
                    RecognizedWord(text=delta.reference, error_type=ErrorType.OMISSION)
                )
            else:
                word = recognized_words[idx]
                if word.error_type is ErrorType.NONE:
                    word = word.with_error_type(ErrorType.INSERTION)
                final_words.append(word)
                idx += 1
            logger.trace(f"[align] {delta.type.value} ref={delta.reference!r} rec={delta.recognized!r}")

        omissions = sum(1 for w in final_words if w.error_type is ErrorType.OMISSION)
        insertions = sum(1 for w in final_words if w.error_type is ErrorType.INSERTION)
        logger.debug(
            f"[align] {len(final_words)} final words, omissions={omissions} insertions={insertions}"
        )
        return final_words

"""Per-session accumulation of recognized utterances."""
from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import List, Optional

from loguru import logger

from speech.models import (
    DURATION_PADDING_TICKS,
    RecognizedWord,
    UtteranceResult,
    WordToken,
)


@dataclass
class SessionAccumulator:
    """Everything collected from the utterances of one assessment session.

    One instance per session, never shared. Every mutation takes the
    instance lock, so the accumulator stays consistent even if a host
    delivers events from several threads.

    Attributes:
        recognized_words: Assessed words, in arrival order
        recognized_tokens: Recognized word texts used for alignment, parallel to recognized_words
        prosody_scores: One prosody score per utterance that reported one
        transcripts: Display text of every utterance
        start_offset: Offset of the first word of the first contributing utterance
        end_offset: Padded end of the last word of the latest contributing utterance
        utterance_count: Number of utterances received
    """
    recognized_words: List[RecognizedWord] = field(default_factory=list)
    recognized_tokens: List[WordToken] = field(default_factory=list)
    prosody_scores: List[float] = field(default_factory=list)
    transcripts: List[str] = field(default_factory=list)
    start_offset: Optional[int] = None
    end_offset: Optional[int] = None
    utterance_count: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def add_utterance(self, result: UtteranceResult) -> None:
        """Merge one utterance result into the session state."""
        with self._lock:
            self.utterance_count += 1
            self.transcripts.append(result.text)

            pron = result.pronunciation
            if pron.prosody_score is not None:
                self.prosody_scores.append(pron.prosody_score)

            if len(pron.words) != len(result.words):
                logger.warning(
                    f"[session] utterance {self.utterance_count}: {len(pron.words)} assessed words "
                    f"but {len(result.words)} timed words, extra words are ignored"
                )

            for assessed, timing in zip(pron.words, result.words):
                self.recognized_words.append(
                    RecognizedWord(
                        text=assessed.word,
                        error_type=assessed.error_type,
                        accuracy_score=assessed.accuracy_score,
                        duration_ticks=timing.duration + DURATION_PADDING_TICKS,
                        offset_ticks=timing.offset,
                    )
                )
                self.recognized_tokens.append(WordToken(timing.word))

            if result.words:
                if self.start_offset is None:
                    self.start_offset = result.words[0].offset
                last = result.words[-1]
                self.end_offset = last.offset + last.duration + DURATION_PADDING_TICKS

    def snapshot(self) -> "SessionAccumulator":
        """Return a detached copy safe to read while utterances keep arriving."""
        with self._lock:
            return SessionAccumulator(
                recognized_words=list(self.recognized_words),
                recognized_tokens=list(self.recognized_tokens),
                prosody_scores=list(self.prosody_scores),
                transcripts=list(self.transcripts),
                start_offset=self.start_offset,
                end_offset=self.end_offset,
                utterance_count=self.utterance_count,
            )

"""Word-level sequence diff producing alignment deltas."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence

from rapidfuzz.distance import Indel


class ChangeType(str, Enum):
    UNCHANGED = "unchanged"
    DELETED = "deleted"
    INSERTED = "inserted"
    MODIFIED = "modified"


@dataclass(frozen=True)
class AlignmentDelta:
    """One step of the diff between reference and recognized words.

    Attributes:
        type: Kind of change
        reference: Reference word (None for insertions)
        recognized: Recognized word (None for deletions)
    """
    type: ChangeType
    reference: Optional[str] = None
    recognized: Optional[str] = None

    @classmethod
    def unchanged(cls, word: str) -> "AlignmentDelta":
        return cls(ChangeType.UNCHANGED, word, word)

    @classmethod
    def deleted(cls, reference: str) -> "AlignmentDelta":
        return cls(ChangeType.DELETED, reference, None)

    @classmethod
    def inserted(cls, recognized: str) -> "AlignmentDelta":
        return cls(ChangeType.INSERTED, None, recognized)

    @classmethod
    def modified(cls, reference: str, recognized: str) -> "AlignmentDelta":
        return cls(ChangeType.MODIFIED, reference, recognized)

    @property
    def consumes_recognized(self) -> bool:
        return self.type is not ChangeType.DELETED


def diff_words(
    reference: Sequence[str],
    recognized: Sequence[str],
    pair_substitutions: bool = False,
) -> List[AlignmentDelta]:
    """Diff two word sequences, one word per "line".

    Matching words follow a longest common subsequence of the two
    sequences. Between two matched runs, changes are reported inline: every
    reference word of the gap as DELETED, then every recognized word as
    INSERTED. With ``pair_substitutions`` the leading pairs of a gap are
    reported as MODIFIED instead, leftovers as DELETED or INSERTED.

    Args:
        reference: Reference words
        recognized: Recognized words

    Returns:
        Ordered deltas covering both sequences
    """
    reference = list(reference)
    recognized = list(recognized)
    deltas: List[AlignmentDelta] = []
    gap_ref: List[str] = []
    gap_rec: List[str] = []

    def flush() -> None:
        deltas.extend(_gap_deltas(gap_ref, gap_rec, pair_substitutions))
        gap_ref.clear()
        gap_rec.clear()

    for op in Indel.opcodes(reference, recognized):
        if op.tag == "equal":
            flush()
            deltas.extend(AlignmentDelta.unchanged(w) for w in reference[op.src_start:op.src_end])
        else:
            gap_ref.extend(reference[op.src_start:op.src_end])
            gap_rec.extend(recognized[op.dest_start:op.dest_end])
    flush()

    return deltas


def _gap_deltas(gap_ref: List[str], gap_rec: List[str], pair_substitutions: bool) -> List[AlignmentDelta]:
    paired = min(len(gap_ref), len(gap_rec)) if pair_substitutions else 0
    deltas = [AlignmentDelta.modified(r, w) for r, w in zip(gap_ref[:paired], gap_rec[:paired])]
    deltas.extend(AlignmentDelta.deleted(w) for w in gap_ref[paired:])
    deltas.extend(AlignmentDelta.inserted(w) for w in gap_rec[paired:])
    return deltas

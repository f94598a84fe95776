from __future__ import annotations

from typing import Dict, Iterator, List, Set, Tuple

from .affixes import Segmentation, classify_pieces
from .config import LAM_LAM_EXPANSIONS


def boundary_gaps(mask: int) -> Tuple[int, ...]:
    """Indices of the gaps that carry a boundary, ascending."""
    gaps = []
    gap = 0
    while mask >> gap:
        if mask >> gap & 1:
            gaps.append(gap)
        gap += 1
    return tuple(gaps)


def pieces_for_mask(word: str, mask: int) -> List[str]:
    """Cut ``word`` after character ``i`` for every set bit ``i`` of ``mask``."""
    pieces = []
    start = 0
    for gap in boundary_gaps(mask):
        pieces.append(word[start : gap + 1])
        start = gap + 1
    pieces.append(word[start:])
    return pieces


def lam_lam_expansion(word: str) -> str:
    for contracted, expanded in LAM_LAM_EXPANSIONS:
        if word.startswith(contracted):
            return expanded + word[len(contracted) :]
    return ""


class PartitionGenerator:
    """Enumerates the canonical segmentations reachable from a word's boundary lattice.

    The walk starts at the finest partition (a boundary in every gap) and
    repeatedly removes one boundary. Every partition is classified; only
    partitions whose canonical form is new are kept and expanded further,
    so the lattice collapses onto the few affix-lexicon outcomes.
    """

    def partitions_of(self, word: str) -> List[Segmentation]:
        word = word.strip()
        if not word:
            return []

        found: Dict[Segmentation, None] = {}
        full_mask = (1 << (len(word) - 1)) - 1

        finest = classify_pieces(pieces_for_mask(word, full_mask))
        if len(finest.stem) != 1 or len(word) == 1:
            found[finest] = None

        seen = set(found)
        for segmentation in self._walk(word, full_mask, seen):
            found[segmentation] = None
        return list(found)

    def _walk(self, word: str, start: int, seen: Set[Segmentation]) -> Iterator[Segmentation]:
        # Depth-first: a new child is expanded before its later siblings are tried.
        stack = [(start, boundary_gaps(start), 0)]
        while stack:
            mask, gaps, cursor = stack[-1]
            if cursor == len(gaps):
                stack.pop()
                continue
            stack[-1] = (mask, gaps, cursor + 1)

            child = mask & ~(1 << gaps[cursor])
            segmentation = classify_pieces(pieces_for_mask(word, child))
            if segmentation in seen:
                continue
            seen.add(segmentation)
            yield segmentation
            if child:
                stack.append((child, boundary_gaps(child), 0))

    def candidates(self, word: str) -> List[Segmentation]:
        word = word.strip()
        found = dict.fromkeys(self.partitions_of(word))
        expanded = lam_lam_expansion(word)
        if expanded:
            found.update(dict.fromkeys(self.partitions_of(expanded)))
        return list(found)

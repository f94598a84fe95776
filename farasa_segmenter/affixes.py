from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from .config import (
    FIELD_SEP,
    MULTI_PLUS_RE,
    PIECE_SEP,
    PREFIXES,
    SIN_ALLOWED_OPENINGS,
    SIN_PREFIX,
    SUFFIX_PLACEHOLDER,
    SUFFIXES,
)


@dataclass(frozen=True)
class Segmentation:
    """A prefix/stem/suffix split of one candidate string."""

    prefixes: Tuple[str, ...]
    stem: str
    suffixes: Tuple[str, ...]

    @property
    def prefix_field(self) -> str:
        return "".join(p + PIECE_SEP for p in self.prefixes)

    @property
    def suffix_field(self) -> str:
        return "".join(PIECE_SEP + s for s in self.suffixes)

    def render(self) -> str:
        return f"{self.prefix_field}{FIELD_SEP}{self.stem}{FIELD_SEP}{self.suffix_field}"

    def morphemes(self) -> List[str]:
        pieces = list(self.prefixes)
        if self.stem:
            pieces.append(self.stem)
        pieces.extend(self.suffixes)
        return pieces

    def joined(self) -> str:
        return PIECE_SEP.join(self.morphemes())

    def surface(self) -> str:
        return "".join(self.morphemes())

    @classmethod
    def parse(cls, text: str) -> "Segmentation":
        fields = text.split(FIELD_SEP)
        if len(fields) < 3:
            raise ValueError(f"not a prefix;stem;suffix string: {text!r}")
        # A stem may itself contain the field separator (tokens kept whole).
        prefix, suffix = fields[0].strip(), fields[-1].strip()
        stem = FIELD_SEP.join(fields[1:-1]).strip()
        return cls(
            prefixes=tuple(p for p in prefix.split(PIECE_SEP) if p),
            stem=stem,
            suffixes=tuple(s for s in suffix.split(PIECE_SEP) if s),
        )

    def __str__(self) -> str:
        return self.render()


def split_candidate(candidate: str) -> List[str]:
    cleaned = MULTI_PLUS_RE.sub(PIECE_SEP, candidate.replace(FIELD_SEP, "")).strip(PIECE_SEP)
    return cleaned.split(PIECE_SEP)


def classify_pieces(pieces: Sequence[str]) -> Segmentation:
    n = len(pieces)

    # Longest run of prefixes from the left, always leaving one piece for the stem.
    n_prefix = 0
    while n_prefix < n - 1 and pieces[n_prefix] in PREFIXES:
        n_prefix += 1

    # Longest run of suffixes from the right that does not reach the stem piece.
    suffix_start = n
    while suffix_start - 1 > n_prefix and (
        pieces[suffix_start - 1] in SUFFIXES or pieces[suffix_start - 1] == SUFFIX_PLACEHOLDER
    ):
        suffix_start -= 1

    prefixes = list(pieces[:n_prefix])
    stem = "".join(pieces[n_prefix:suffix_start])
    suffixes = tuple(pieces[suffix_start:])

    # sin marks the future tense only before imperfective openings.
    if prefixes and prefixes[-1] == SIN_PREFIX and not stem.startswith(SIN_ALLOWED_OPENINGS):
        prefixes.pop()
        stem = SIN_PREFIX + stem

    return Segmentation(prefixes=tuple(prefixes), stem=stem, suffixes=suffixes)


def classify(candidate: str) -> Segmentation:
    """Map a ``+``-separated candidate onto the closed affix lexicons.

    >>> classify("و+ال+كتاب+ه").render()
    'و+ال+;كتاب;+ه'
    """
    return classify_pieces(split_candidate(candidate))


def render_candidate(candidate: str) -> str:
    return classify(candidate).render()

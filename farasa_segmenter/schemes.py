from __future__ import annotations

from .affixes import render_candidate
from .config import FIELD_SEP, MULTI_PLUS_RE, PIECE_SEP, SCHEMES
from .text import normalize_full

DEFINITE_ARTICLE = "ال"
TEH_MARBUTA_PIECE = "ة"


def flatten(segmented: str) -> str:
    """``و+ال+;كتاب;+ه`` -> ``و+ال+كتاب+ه``."""
    return MULTI_PLUS_RE.sub(PIECE_SEP, segmented.replace(FIELD_SEP, ""))


def default_scheme(segmented: str, normalize: bool = True) -> str:
    out = flatten(segmented)
    return normalize_full(out) if normalize else out


def atb_scheme(segmented: str, normalize: bool = True) -> str:
    """Penn Arabic Treebank style: clitics grouped, article and ta-marbuta kept on the stem.

    ``و+ب+ال+;كتاب;+ه`` becomes ``وب+ الكتاب +ه``.
    """
    tmp = render_candidate(flatten(segmented))
    tmp = tmp.replace(DEFINITE_ARTICLE + PIECE_SEP + FIELD_SEP, FIELD_SEP + DEFINITE_ARTICLE)
    tmp = tmp.replace(FIELD_SEP + PIECE_SEP + TEH_MARBUTA_PIECE, TEH_MARBUTA_PIECE + FIELD_SEP)
    if normalize:
        tmp = normalize_full(tmp)

    fields = tmp.split(FIELD_SEP)
    prefix, suffix = fields[0].strip(), fields[-1].strip()
    stem = FIELD_SEP.join(fields[1:-1]).strip()
    output = ""
    prefix = prefix.replace(PIECE_SEP, "")
    if prefix:
        output += prefix + PIECE_SEP + " "
    output += stem
    suffix = suffix.replace(PIECE_SEP, "")
    if suffix:
        output += " " + PIECE_SEP + suffix
    return output.strip().strip(PIECE_SEP)


def apply_scheme(segmented: str, scheme: str = "default", normalize: bool = True) -> str:
    if scheme not in SCHEMES:
        raise ValueError(f"unknown scheme {scheme!r}; expected one of {', '.join(SCHEMES)}")
    if scheme == "atb":
        return atb_scheme(segmented, normalize)
    return default_scheme(segmented, normalize)

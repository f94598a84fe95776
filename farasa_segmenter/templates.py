from __future__ import annotations

from functools import lru_cache
from typing import Callable, List, NamedTuple, Optional, Tuple

from .data import StatisticalTables
from .text import (
    ALEF,
    ALEF_HAMZA_ABOVE,
    ALEF_HAMZA_BELOW,
    ALEF_MADDA,
    DOTLESS_YEH,
    HAMZA,
    HAMZA_ON_WAW,
    HAMZA_ON_YEH,
    TEH_MARBUTA,
    YEH,
    buck_to_morph,
    utf8_to_buck,
)

WEAK_LETTERS = ("w", "y", "A")
WILDCARD = "C"
GEMINATE_TEMPLATE = "fE"

TEH = "ت"
TAH = "ط"
DAL = "د"
WAW = "و"


class TemplateMatch(NamedTuple):
    template: str
    root: str


# Some template fits the stem, but no (template, root) pair has a positive weight.
UNRANKED = TemplateMatch("", "")


def extract_root(template: str, stem: str) -> Optional[str]:
    """Read the radicals of ``stem`` through ``template``; None if a slot conflicts.

    ``f`` and ``C`` always take the letter at their position. The first ``E``
    (and the first ``l``) take a letter and fix a slot; later occurrences must
    repeat it. Any other symbol must appear literally in the stem.
    """
    radicals: List[str] = []
    slots = {}
    for i, symbol in enumerate(template):
        ch = stem[i]
        if symbol == "f" or symbol == WILDCARD:
            radicals.append(ch)
        elif symbol == "E" or symbol == "l":
            first = slots.get(symbol)
            if first is None:
                slots[symbol] = i
                radicals.append(ch)
            elif stem[first] != ch:
                return None
        elif symbol != ch:
            return None
    return "".join(radicals)


def _drop_final_teh_marbuta_or_yeh(stem: str) -> Optional[str]:
    return stem[:-1] if stem.endswith((TEH_MARBUTA, YEH)) else None


def _drop_final_yeh_teh_marbuta(stem: str) -> Optional[str]:
    return stem[:-2] if stem.endswith(YEH + TEH_MARBUTA) else None


def _alef_maqsura_to_yeh(stem: str) -> Optional[str]:
    return stem[:-1] + YEH if stem.endswith(DOTLESS_YEH) else None


def _bare_alef(stem: str) -> Optional[str]:
    if not any(v in stem for v in (ALEF_HAMZA_ABOVE, ALEF_MADDA, ALEF_HAMZA_BELOW)):
        return None
    for variant in (ALEF_HAMZA_BELOW, ALEF_HAMZA_ABOVE, ALEF_MADDA):
        stem = stem.replace(variant, ALEF)
    return stem


def _double_last_letter(stem: str) -> Optional[str]:
    return stem + stem[-1] if len(stem) > 1 else None


def _waw_after_alef_teh(stem: str) -> Optional[str]:
    return stem[0] + WAW + stem[1:] if stem.startswith(ALEF + TEH) else None


def _teh_for_tah_or_dal(stem: str) -> Optional[str]:
    if len(stem) >= 5 and stem[2] in (TAH, DAL):
        return stem[:2] + TEH + stem[3:]
    return None


def _has_infixed_teh(match: TemplateMatch) -> bool:
    return len(match.template) > 3 and match.template[2] == "t"


def _expand_alef_madda(stem: str) -> Optional[str]:
    return stem.replace(ALEF_MADDA, ALEF_HAMZA_ABOVE + ALEF) if ALEF_MADDA in stem else None


def _bare_hamza(stem: str) -> Optional[str]:
    if HAMZA_ON_YEH not in stem and HAMZA_ON_WAW not in stem:
        return None
    return stem.replace(HAMZA_ON_YEH, HAMZA).replace(HAMZA_ON_WAW, HAMZA)


Rewrite = Callable[[str], Optional[str]]
Accept = Optional[Callable[[TemplateMatch], bool]]

# Orthographic variants tried, in this order, while a stem is still unmatched.
FALLBACKS: Tuple[Tuple[Rewrite, Accept], ...] = (
    (_drop_final_teh_marbuta_or_yeh, None),
    (_drop_final_yeh_teh_marbuta, None),
    (_alef_maqsura_to_yeh, None),
    (_bare_alef, None),
    (_double_last_letter, None),
    (_waw_after_alef_teh, None),
    (_teh_for_tah_or_dal, _has_infixed_teh),
    (_expand_alef_madda, None),
    (_bare_hamza, None),
)


class TemplateMatcher:
    """Root-and-pattern lookup over a stem.

    Stems are matched in Buckwalter transliteration against every template of
    the same length; extracted roots are looked up in the morph-encoded root
    dictionary. Results are memoized per instance since the tables never change.
    """

    def __init__(self, tables: StatisticalTables, cache_size: int = 65536):
        self.tables = tables
        self.fit = lru_cache(maxsize=cache_size)(self._fit)

    def _fit(self, stem: str) -> Optional[TemplateMatch]:
        match = self.fit_stem(utf8_to_buck(stem))
        for rewrite, accept in FALLBACKS:
            if match is not None:
                break
            variant = rewrite(stem)
            if variant is None:
                continue
            candidate = self.fit_stem(utf8_to_buck(variant))
            if candidate is not None and (accept is None or accept(candidate)):
                match = candidate
        return match

    def fit_stem(self, stem: str) -> Optional[TemplateMatch]:
        templates = self.tables.templates_by_length.get(len(stem))
        if not templates:
            return None
        roots = self.tables.roots

        if len(stem) == 2:
            root = buck_to_morph(stem + stem[1])
            return TemplateMatch(GEMINATE_TEMPLATE, root) if root in roots else None

        hits: List[TemplateMatch] = []
        for template in templates:
            root = extract_root(template, stem)
            if root is None:
                continue
            root = buck_to_morph(root)
            if root in roots:
                hits.append(TemplateMatch(template, root))
            else:
                hits.extend(TemplateMatch(template, alt) for alt in self.weak_letter_variants(root))

        if not hits:
            return None
        exact = [hit for hit in hits if WILDCARD not in hit.template]
        return self.best_match(exact or hits)

    def weak_letter_variants(self, root: str) -> List[str]:
        """Roots in the dictionary that differ from ``root`` in one weak letter."""
        variants = []
        for j, ch in enumerate(root):
            if ch not in WEAK_LETTERS:
                continue
            for weak in WEAK_LETTERS:
                candidate = root[:j] + weak + root[j + 1 :]
                if candidate in self.tables.roots:
                    variants.append(candidate)
        return variants

    def best_match(self, hits: List[TemplateMatch]) -> TemplateMatch:
        """First hit with the largest positive weight, else ``UNRANKED``."""
        best, best_score = UNRANKED, 0.0
        for hit in hits:
            score = self.weight(hit)
            if score > best_score:
                best, best_score = hit, score
        return best

    def weight(self, match: TemplateMatch) -> float:
        return self.tables.roots.get(match.root, 0.0) * self.tables.templates.get(match.template, 0.0)

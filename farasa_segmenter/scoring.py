from __future__ import annotations

import math
from typing import Collection, List, Mapping, Optional, Sequence

from .affixes import Segmentation
from .config import (
    MISSING_COOCCURRENCE,
    MISSING_LEXICON_ENTRY,
    MISSING_LOG_PROB,
    MISSING_WORD_COUNT,
    SCORE_WEIGHTS,
)
from .data import StatisticalTables
from .templates import TemplateMatcher
from .text import DOTLESS_YEH, TEH_MARBUTA, YEH

TEH = "ت"


def safe_log(value: float) -> float:
    """Natural log that maps non-positive values to -inf instead of raising."""
    return math.log(value) if value > 0 else float("-inf")


def dotless_variant(stem: str) -> str:
    """``stem`` with a final yeh spelled as alef maqsura, or "" if it has none."""
    return stem[:-1] + DOTLESS_YEH if stem.endswith(YEH) else ""


def teh_marbuta_variant(stem: str, suffix_field: str) -> str:
    """``stem`` + teh marbuta when the suffix run opens with teh and is longer than it."""
    trimmed = suffix_field.replace("+", "").replace(";", "").replace(",", "")
    if trimmed.startswith(TEH) and len(trimmed) > 1:
        return stem + TEH_MARBUTA
    return ""


def first_suffix(segmentation: Segmentation) -> str:
    return segmentation.suffixes[0] if segmentation.suffixes else ""


class ScoringModel:
    """Log-linear scorer over 18 lookup features of a segmentation.

    Every lookup miss falls back to a fixed penalty (or the complement
    probability for the Bernoulli-style membership features), so scoring
    never fails on unseen stems or affixes.
    """

    def __init__(
        self,
        tables: StatisticalTables,
        matcher: Optional[TemplateMatcher] = None,
        weights: Sequence[float] = SCORE_WEIGHTS,
    ):
        if len(weights) != len(SCORE_WEIGHTS):
            raise ValueError(f"expected {len(SCORE_WEIGHTS)} weights, got {len(weights)}")
        self.tables = tables
        self.matcher = matcher if matcher is not None else TemplateMatcher(tables)
        self.weights = tuple(weights)

    def score(self, segmentation: Segmentation) -> float:
        return sum(w * f for w, f in zip(self.weights, self.features(segmentation)))

    def features(self, segmentation: Segmentation) -> List[float]:
        t = self.tables
        general = t.general
        prefix = segmentation.prefix_field
        suffix = segmentation.suffix_field
        stem = segmentation.stem
        dotless = dotless_variant(stem)
        with_marbuta = teh_marbuta_variant(stem, suffix)
        match = self.matcher.fit(stem)

        return [
            self._log_prob(t.prefix_probs, prefix, MISSING_LOG_PROB),
            self._log_prob(t.suffix_probs, suffix, MISSING_LOG_PROB),
            self._word_count(stem, with_marbuta),
            self._log_prob(t.prefix_suffix_probs, (prefix, suffix), MISSING_COOCCURRENCE),
            self._log_prob(t.suffix_prefix_probs, (suffix, prefix), MISSING_COOCCURRENCE),
            self._bernoulli(match is not None, general["hasTemplate"]),
            self._bernoulli(self._listed(t.morph_list, stem, dotless), general["inMorphList"]),
            self._bernoulli(self._listed(t.gazetteer, stem, dotless), general["inGazList"]),
            self._log_prob(t.cond_prefix_probs, prefix, MISSING_COOCCURRENCE),
            self._log_prob(t.cond_suffix_probs, suffix, MISSING_COOCCURRENCE),
            self._stem_with_first_suffix_count(segmentation, dotless),
            self._log_prob(
                t.template_counts, match.template if match and match.template else None, MISSING_LOG_PROB
            ),
            safe_log(abs(len(stem) - general["averageStemLength"])),
            self._composite_lexicon(stem, dotless, with_marbuta),
            self._sign(self._listed(t.buckwalter_list, stem, dotless)),
            self._sign(stem in t.locations),
            self._sign(stem in t.people),
            self._sign(self._listed(t.stopwords, stem, dotless)),
        ]

    @staticmethod
    def _log_prob(table: Mapping, key, missing: float) -> float:
        if key is None or key not in table:
            return missing
        return safe_log(table[key])

    @staticmethod
    def _bernoulli(present: bool, probability: float) -> float:
        return safe_log(probability) if present else safe_log(1 - probability)

    @staticmethod
    def _sign(present: bool) -> float:
        return 1.0 if present else -1.0

    @staticmethod
    def _listed(entries: Collection[str], stem: str, dotless: str) -> bool:
        return stem in entries or (bool(dotless) and dotless in entries)

    def _word_count(self, stem: str, with_marbuta: str) -> float:
        counts = self.tables.word_counts
        if stem in counts:
            return counts[stem]
        if with_marbuta and with_marbuta in counts:
            return counts[with_marbuta]
        return MISSING_WORD_COUNT

    def _stem_with_first_suffix_count(self, segmentation: Segmentation, dotless: str) -> float:
        counts = self.tables.word_counts
        joined = segmentation.stem + first_suffix(segmentation)
        if joined in counts:
            return counts[joined]
        if dotless and dotless in counts:
            return counts[dotless]
        if joined.endswith(TEH):
            marbuta = joined[:-1] + TEH_MARBUTA
            if marbuta in counts:
                return counts[marbuta]
        return MISSING_WORD_COUNT

    def _composite_lexicon(self, stem: str, dotless: str, with_marbuta: str) -> float:
        # First listed spelling wins; its corpus count (or -10) is the feature.
        for spelling in (stem, dotless, with_marbuta):
            if spelling and spelling in self.tables.composite_lexicon:
                return self.tables.word_counts.get(spelling, MISSING_WORD_COUNT)
        return MISSING_LEXICON_ENTRY

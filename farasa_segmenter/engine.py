from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from .affixes import Segmentation, classify
from .config import PIECE_SEP
from .data import StatisticalTables
from .partitions import PartitionGenerator
from .scoring import ScoringModel
from .templates import TemplateMatcher


@dataclass(frozen=True, order=True)
class ScoredSegmentation:
    score: float
    segmentation: Segmentation = field(compare=False)

    def render(self) -> str:
        return self.segmentation.render()


class SegmentationEngine:
    """Scores candidate segmentations of a word and keeps the best ones.

    The engine holds no per-call state: results depend only on the tables
    and the word, so one instance can serve many threads. Memoizing results
    across a stream is left to the caller (see ``ResultCache``).
    """

    def __init__(
        self,
        tables: StatisticalTables,
        scorer: Optional[ScoringModel] = None,
        generator: Optional[PartitionGenerator] = None,
    ):
        self.tables = tables
        self.scorer = scorer if scorer is not None else ScoringModel(tables, TemplateMatcher(tables))
        self.generator = generator if generator is not None else PartitionGenerator()

    def candidates(self, word: str) -> List[Segmentation]:
        """Known tokenizations of frequent words, else the full partition lattice."""
        known = self.tables.known_tokenizations.get(word.replace(PIECE_SEP, ""))
        if known:
            return list(dict.fromkeys(classify(t) for t in known))
        return self.generator.candidates(word)

    def score_all(self, segmentations: Iterable[Segmentation]) -> List[ScoredSegmentation]:
        scored = [ScoredSegmentation(self.scorer.score(s), s) for s in segmentations]
        scored.sort()
        return scored

    def most_likely_partition(self, word: str, top_k: Optional[int] = 1) -> List[ScoredSegmentation]:
        """The ``top_k`` best segmentations, ascending by score (best last).

        ``top_k=None`` returns every candidate.
        """
        word = word.strip()
        if not word or (top_k is not None and top_k <= 0):
            return []
        scored = self.score_all(self.candidates(word))
        if top_k is not None and len(scored) > top_k:
            scored = scored[-top_k:]
        return scored

    def best(self, word: str) -> Segmentation:
        results = self.most_likely_partition(word, 1)
        if results:
            return results[-1].segmentation
        return Segmentation(prefixes=(), stem=word.strip(), suffixes=())

    def segment(self, word: str) -> str:
        return self.best(word).render()

    def segment_words(self, words: Sequence[str]) -> Dict[str, str]:
        return {w: self.segment(w) for w in words}

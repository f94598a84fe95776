from __future__ import annotations

from typing import Dict, List, NamedTuple, Sequence, Set


class BoundaryCounts(NamedTuple):
    tp: int
    fp: int
    fn: int


def split_word_to_boundaries(segments: Sequence[str]) -> Set[int]:
    """Character offsets at which a morpheme ends, excluding the word end."""
    offsets: Set[int] = set()
    pos = 0
    for seg in segments[:-1]:
        pos += len(seg)
        offsets.add(pos)
    return offsets


def boundary_counts(pred: Sequence[str], gold: Sequence[str]) -> BoundaryCounts:
    pb = split_word_to_boundaries(pred)
    gb = split_word_to_boundaries(gold)
    return BoundaryCounts(tp=len(pb & gb), fp=len(pb - gb), fn=len(gb - pb))


def _ratio(num: float, den: float) -> float:
    return num / den if den else 0.0


def metrics_from_sequences(preds: Sequence[List[str]], golds: Sequence[List[str]]) -> Dict[str, float]:
    n = len(golds)
    tp = fp = fn = 0
    exact = 0
    segments = 0
    for pred, gold in zip(preds, golds):
        counts = boundary_counts(pred, gold)
        tp += counts.tp
        fp += counts.fp
        fn += counts.fn
        exact += int(list(pred) == list(gold))
        segments += len(pred)

    precision = _ratio(tp, tp + fp)
    recall = _ratio(tp, tp + fn)
    return {
        "num_words": n,
        "exact_match": _ratio(exact, n),
        "boundary_precision": precision,
        "boundary_recall": recall,
        "boundary_f1": _ratio(2 * precision * recall, precision + recall),
        "avg_segments_per_word": _ratio(segments, n),
    }


def evaluate_predictions(
    preds: Dict[str, List[str]],
    refs: Dict[str, List[str]],
) -> Dict[str, float]:
    """Score ``preds`` against every gold word; a word without a prediction counts as unsplit."""
    words = list(refs)
    return metrics_from_sequences([preds.get(w, [w]) for w in words], [refs[w] for w in words])

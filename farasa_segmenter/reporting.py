from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List

import pandas as pd

from .config import PIECE_SEP
from .utils import ensure_dir


def write_metrics_json(report_root: Path, report: Dict[str, object]) -> Path:
    ensure_dir(report_root)
    out = report_root / "metrics.json"
    out.write_text(json.dumps(report, ensure_ascii=False, indent=2), encoding="utf-8")
    return out


def write_metrics_table(report_root: Path, metrics: Dict[str, float], scheme: str) -> Path:
    ensure_dir(report_root)
    table = report_root / "metrics_table.md"
    with table.open("w", encoding="utf-8") as f:
        f.write("| scheme | words | exact | boundary_p | boundary_r | boundary_f1 | avg_seg |\n")
        f.write("| --- | ---: | ---: | ---: | ---: | ---: | ---: |\n")
        f.write(
            f"| {scheme} | {metrics['num_words']} | {metrics['exact_match']:.4f} | {metrics['boundary_precision']:.4f} | {metrics['boundary_recall']:.4f} | {metrics['boundary_f1']:.4f} | {metrics['avg_segments_per_word']:.4f} |\n"
        )
    return table


def write_segmentation_compare_files(
    report_root: Path,
    refs: Dict[str, List[str]],
    preds: Dict[str, List[str]],
    canonical: Dict[str, str],
) -> Path:
    ensure_dir(report_root)
    rows: List[Dict[str, object]] = []
    for word, gold in refs.items():
        pred = preds.get(word, [word])
        rows.append(
            {
                "word": word,
                "gold": PIECE_SEP.join(gold),
                "predicted": PIECE_SEP.join(pred),
                "canonical": canonical.get(word, ""),
                "exact": pred == gold,
            }
        )

    df = pd.DataFrame(rows, columns=["word", "gold", "predicted", "canonical", "exact"])
    if not df.empty:
        df = df.sort_values(["exact", "word"], ascending=[True, True], kind="mergesort")
    tsv_path = report_root / "segmentation_compare.tsv"
    csv_path = report_root / "segmentation_compare.csv"
    df.to_csv(tsv_path, sep="\t", index=False, encoding="utf-8")
    df.to_csv(csv_path, index=False, encoding="utf-8-sig")
    return tsv_path

from __future__ import annotations

import argparse
import logging
import sys
from concurrent.futures import Executor, ThreadPoolExecutor
from contextlib import ExitStack
from pathlib import Path
from typing import Dict, List, Optional, Sequence, TextIO

from .affixes import Segmentation
from .cache import ResultCache
from .config import SCHEMES, RunConfig, resolve_data_dir
from .data import TableLoadError, load_eval_file, load_seen_before, load_tables
from .engine import SegmentationEngine
from .metrics import evaluate_predictions
from .reporting import write_metrics_json, write_metrics_table, write_segmentation_compare_files
from .schemes import apply_scheme
from .text import tokenize
from .utils import read_lines


def build_engine(data_dir: Path) -> SegmentationEngine:
    print("Initializing the system ....", end="", file=sys.stderr, flush=True)
    try:
        tables = load_tables(data_dir)
    except TableLoadError as exc:
        print(file=sys.stderr)
        raise SystemExit(f"Error initializing the segmenter: {exc}") from exc
    print("\rSystem ready!               ", file=sys.stderr)
    return SegmentationEngine(tables)


def fill_cache(
    engine: SegmentationEngine,
    cache: ResultCache,
    words: Sequence[str],
    executor: Optional[Executor] = None,
) -> None:
    pending = [w for w in dict.fromkeys(words) if w not in cache]
    if not pending:
        return
    if executor is None or len(pending) == 1:
        for word in pending:
            cache.get_or_compute(word, engine.segment)
        return
    for word, segmented in zip(pending, executor.map(engine.segment, pending)):
        cache.put(word, segmented)


def segment_line(
    engine: SegmentationEngine,
    cache: ResultCache,
    line: str,
    cfg: RunConfig,
    executor: Optional[Executor] = None,
) -> str:
    words = tokenize(line)
    fill_cache(engine, cache, words, executor)
    out = [
        apply_scheme(cache.get_or_compute(w, engine.segment), cfg.scheme, cfg.normalize)
        for w in words
    ]
    return " ".join(out)


def segment_stream(
    engine: SegmentationEngine,
    cache: ResultCache,
    source: TextIO,
    sink: TextIO,
    cfg: RunConfig,
) -> int:
    lines = 0
    with ExitStack() as stack:
        executor = None
        if cfg.workers > 1:
            executor = stack.enter_context(ThreadPoolExecutor(max_workers=cfg.workers))
        for line in read_lines(source):
            sink.write(segment_line(engine, cache, line, cfg, executor) + "\n")
            lines += 1
    return lines


def run_segment(cfg: RunConfig, input_path: Optional[Path], output_path: Optional[Path]) -> None:
    if input_path is not None and not input_path.exists():
        raise SystemExit(f"Input not found: {input_path}")
    engine = build_engine(cfg.data_dir)
    cache = ResultCache(load_seen_before(cfg.data_dir))

    with ExitStack() as stack:
        source = sys.stdin
        sink = sys.stdout
        if input_path is not None:
            source = stack.enter_context(input_path.open("r", encoding="utf-8"))
        if output_path is not None:
            sink = stack.enter_context(output_path.open("w", encoding="utf-8"))
        lines = segment_stream(engine, cache, source, sink, cfg)

    print(
        f"[segment] {lines} lines, {len(cache)} distinct words, cache hits={cache.hits} misses={cache.misses}",
        file=sys.stderr,
    )
    if output_path is not None:
        print(f"[segment] wrote {output_path}", file=sys.stderr)


def predict_gold_words(
    engine: SegmentationEngine,
    words: Sequence[str],
    cache: ResultCache,
) -> Dict[str, str]:
    return {w: cache.get_or_compute(w, engine.segment) for w in words}


def run_evaluate(cfg: RunConfig, gold_path: Path, report_root: Path) -> Dict[str, object]:
    if not gold_path.exists():
        raise SystemExit(f"Gold file not found: {gold_path}")
    refs = load_eval_file(gold_path)
    if not refs:
        raise SystemExit(f"No gold segmentations in {gold_path} (expected word/gold columns).")

    engine = build_engine(cfg.data_dir)
    cache = ResultCache()
    canonical = predict_gold_words(engine, list(refs.keys()), cache)
    preds: Dict[str, List[str]] = {
        w: Segmentation.parse(seg).morphemes() or [w] for w, seg in canonical.items()
    }
    metrics = evaluate_predictions(preds, refs)

    report = {
        "data_dir": str(cfg.data_dir),
        "gold": str(gold_path),
        "metrics": metrics,
        "paths": {
            "metrics_table": str(write_metrics_table(report_root, metrics, "canonical")),
            "compare": str(write_segmentation_compare_files(report_root, refs, preds, canonical)),
        },
    }
    out = write_metrics_json(report_root, report)
    print(f"[evaluate] wrote {out}", file=sys.stderr)
    return report


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Arabic prefix/stem/suffix segmenter.")
    parser.add_argument("mode", choices=["segment", "evaluate"])
    parser.add_argument("-i", "--input", type=Path, default=None, help="input file (default: stdin)")
    parser.add_argument("-o", "--output", type=Path, default=None, help="output file (default: stdout)")
    parser.add_argument("-c", "--scheme", choices=SCHEMES, default="default")
    parser.add_argument("--no-norm", action="store_true", help="do not normalize output letters")
    parser.add_argument("-d", "--data-dir", type=Path, default=None)
    parser.add_argument("--workers", type=int, default=1)
    parser.add_argument("--gold", type=Path, default=None, help="word<TAB>gold file for evaluate")
    parser.add_argument("--report-dir", type=Path, default=Path("reports"))
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    cfg = RunConfig(
        data_dir=resolve_data_dir(args.data_dir),
        scheme=args.scheme,
        normalize=not args.no_norm,
        workers=max(1, args.workers),
    )
    if args.mode == "segment":
        run_segment(cfg, input_path=args.input, output_path=args.output)
    else:
        if args.gold is None:
            raise SystemExit("evaluate needs --gold")
        run_evaluate(cfg, gold_path=args.gold, report_root=args.report_dir)

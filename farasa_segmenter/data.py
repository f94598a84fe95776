from __future__ import annotations

import csv
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Mapping, Sequence, Tuple

import pandas as pd

from .config import (
    GENERAL_VARIABLES,
    JSON_TABLES,
    PIECE_SEP,
    ROOTS_FILE,
    SEEN_BEFORE_TABLE,
    TEMPLATES_FILE,
)

logger = logging.getLogger(__name__)


class TableLoadError(RuntimeError):
    """A statistical table is missing or malformed; the segmenter cannot start."""

    def __init__(self, table: str, reason: str):
        super().__init__(f"statistical table {table!r}: {reason}")
        self.table = table
        self.reason = reason


def _frozen(mapping: Mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True, eq=False)
class StatisticalTables:
    """Read-only lookup tables consulted by the scorer and the template matcher.

    Membership lists are frozensets, numeric tables are read-only mappings.
    Co-occurrence tables are keyed by ``(outer, inner)`` pairs, e.g.
    ``prefix_suffix_probs[("و+ال+", "+ه")]``.
    """

    general: Mapping[str, float]
    word_counts: Mapping[str, float] = field(default_factory=dict)
    prefix_probs: Mapping[str, float] = field(default_factory=dict)
    suffix_probs: Mapping[str, float] = field(default_factory=dict)
    cond_prefix_probs: Mapping[str, float] = field(default_factory=dict)
    cond_suffix_probs: Mapping[str, float] = field(default_factory=dict)
    prefix_suffix_probs: Mapping[Tuple[str, str], float] = field(default_factory=dict)
    suffix_prefix_probs: Mapping[Tuple[str, str], float] = field(default_factory=dict)
    template_counts: Mapping[str, float] = field(default_factory=dict)
    morph_list: FrozenSet[str] = frozenset()
    gazetteer: FrozenSet[str] = frozenset()
    composite_lexicon: FrozenSet[str] = frozenset()
    buckwalter_list: FrozenSet[str] = frozenset()
    locations: FrozenSet[str] = frozenset()
    people: FrozenSet[str] = frozenset()
    stopwords: FrozenSet[str] = frozenset()
    known_tokenizations: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    roots: Mapping[str, float] = field(default_factory=dict)
    templates: Mapping[str, float] = field(default_factory=dict)
    templates_by_length: Mapping[int, Tuple[str, ...]] = field(init=False)

    def __post_init__(self) -> None:
        missing = [name for name in GENERAL_VARIABLES if name not in self.general]
        if missing:
            raise TableLoadError("generalVariables", f"missing {', '.join(missing)}")

        for name in (
            "general",
            "word_counts",
            "prefix_probs",
            "suffix_probs",
            "cond_prefix_probs",
            "cond_suffix_probs",
            "prefix_suffix_probs",
            "suffix_prefix_probs",
            "template_counts",
            "roots",
            "templates",
        ):
            object.__setattr__(self, name, _frozen(getattr(self, name)))
        for name in (
            "morph_list",
            "gazetteer",
            "composite_lexicon",
            "buckwalter_list",
            "locations",
            "people",
            "stopwords",
        ):
            object.__setattr__(self, name, frozenset(getattr(self, name)))
        object.__setattr__(
            self,
            "known_tokenizations",
            _frozen({w: tuple(t) for w, t in self.known_tokenizations.items()}),
        )

        by_length: Dict[int, List[str]] = {}
        for template in self.templates:
            by_length.setdefault(len(template), []).append(template)
        object.__setattr__(
            self,
            "templates_by_length",
            _frozen({n: tuple(ts) for n, ts in by_length.items()}),
        )


def read_json_table(data_dir: Path, name: str) -> object:
    path = data_dir / f"{name}.json"
    if not path.exists():
        raise TableLoadError(name, f"file not found: {path}")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise TableLoadError(name, f"cannot parse {path}: {exc}") from exc


def _as_dict(name: str, raw: object) -> Dict[str, object]:
    if not isinstance(raw, dict):
        raise TableLoadError(name, f"expected a JSON object, got {type(raw).__name__}")
    return raw


def _as_numeric(name: str, raw: object) -> Dict[str, float]:
    out: Dict[str, float] = {}
    for key, value in _as_dict(name, raw).items():
        try:
            out[str(key)] = float(value)
        except (TypeError, ValueError) as exc:
            raise TableLoadError(name, f"non-numeric value for {key!r}") from exc
    return out


def _as_keys(name: str, raw: object) -> FrozenSet[str]:
    return frozenset(str(k) for k in _as_dict(name, raw))


def _as_pairs(name: str, raw: object) -> Dict[Tuple[str, str], float]:
    flat: Dict[Tuple[str, str], float] = {}
    for outer, inner in _as_dict(name, raw).items():
        for key, value in _as_numeric(name, inner).items():
            flat[(str(outer), key)] = value
    return flat


def _as_lists(name: str, raw: object) -> Dict[str, Tuple[str, ...]]:
    out: Dict[str, Tuple[str, ...]] = {}
    for word, items in _as_dict(name, raw).items():
        if not isinstance(items, list):
            raise TableLoadError(name, f"expected a list for {word!r}")
        out[str(word)] = tuple(str(x) for x in items)
    return out


def read_weight_file(path: Path, table: str) -> List[Tuple[str, float]]:
    """Read a two-column ``key<TAB>weight`` file, keeping file order.

    Rows without exactly two fields or with a non-numeric weight are skipped.
    """
    if not path.exists():
        raise TableLoadError(table, f"file not found: {path}")
    df = pd.read_csv(
        path,
        sep="\t",
        header=None,
        names=["key", "weight"],
        dtype={"key": "string", "weight": "string"},
        keep_default_na=False,
        quoting=csv.QUOTE_NONE,
        on_bad_lines="skip",
        encoding="utf-8",
    )
    df["weight"] = pd.to_numeric(df["weight"], errors="coerce")
    df = df.dropna(subset=["weight"])
    df = df[df["key"] != ""]
    return [(str(k), float(w)) for k, w in zip(df["key"], df["weight"])]


def load_tables(data_dir: Path) -> StatisticalTables:
    data_dir = Path(data_dir)
    if not data_dir.is_dir():
        raise TableLoadError("data directory", f"not a directory: {data_dir}")

    raw = {name: read_json_table(data_dir, name) for name in JSON_TABLES}

    roots: Dict[str, float] = dict(read_weight_file(data_dir / ROOTS_FILE, "roots"))
    templates: Dict[str, float] = {}
    for template, weight in read_weight_file(data_dir / TEMPLATES_FILE, "template-count"):
        templates.setdefault(template, weight)

    tables = StatisticalTables(
        general=_as_numeric("generalVariables", raw["generalVariables"]),
        word_counts=_as_numeric("wordCount", raw["wordCount"]),
        prefix_probs=_as_numeric("probPrefixes", raw["probPrefixes"]),
        suffix_probs=_as_numeric("probSuffixes", raw["probSuffixes"]),
        cond_prefix_probs=_as_numeric("probCondPrefixes", raw["probCondPrefixes"]),
        cond_suffix_probs=_as_numeric("probCondSuffixes", raw["probCondSuffixes"]),
        prefix_suffix_probs=_as_pairs("probPrefixSuffix", raw["probPrefixSuffix"]),
        suffix_prefix_probs=_as_pairs("probSuffixPrefix", raw["probSuffixPrefix"]),
        template_counts=_as_numeric("hmTemplateCount", raw["hmTemplateCount"]),
        morph_list=_as_keys("hmListMorph", raw["hmListMorph"]),
        gazetteer=_as_keys("hmListGaz", raw["hmListGaz"]),
        composite_lexicon=_as_keys("hmAraLexCom", raw["hmAraLexCom"]),
        buckwalter_list=_as_keys("hmBuck", raw["hmBuck"]),
        locations=_as_keys("hmLocations", raw["hmLocations"]),
        people=_as_keys("hmPeople", raw["hmPeople"]),
        stopwords=_as_keys("hmStop", raw["hmStop"]),
        known_tokenizations=_as_lists(
            "hmPreviouslySeenTokenizations", raw["hmPreviouslySeenTokenizations"]
        ),
        roots=roots,
        templates=templates,
    )
    logger.info(
        "Loaded statistical tables from %s: %d roots, %d templates, %d word counts",
        data_dir,
        len(roots),
        len(templates),
        len(tables.word_counts),
    )
    return tables


def load_seen_before(data_dir: Path) -> Dict[str, str]:
    """Optional surface word -> segmentation table used to seed a ResultCache."""
    path = Path(data_dir) / f"{SEEN_BEFORE_TABLE}.json"
    if not path.exists():
        logger.debug("No %s table in %s", SEEN_BEFORE_TABLE, data_dir)
        return {}
    raw = _as_dict(SEEN_BEFORE_TABLE, read_json_table(Path(data_dir), SEEN_BEFORE_TABLE))
    return {str(k): str(v) for k, v in raw.items()}


def save_eval_file(path: Path, words: Sequence[str], refs: Dict[str, List[str]]) -> None:
    df = pd.DataFrame({"word": list(words), "gold": [PIECE_SEP.join(refs[w]) for w in words]})
    df.to_csv(path, sep="\t", index=False, encoding="utf-8")


def load_eval_file(path: Path) -> Dict[str, List[str]]:
    if not path.exists():
        return {}
    df = pd.read_csv(path, sep="\t", dtype="string", keep_default_na=False)
    if "word" not in df.columns or "gold" not in df.columns:
        return {}
    out: Dict[str, List[str]] = {}
    for row in df.itertuples(index=False):
        word = str(row.word).strip()
        if not word:
            continue
        seg = str(row.gold)
        out[word] = [s for s in seg.split(PIECE_SEP) if s]
    return out

"""
Pytest fixtures: a small in-memory table set and the same tables laid out as a data directory.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, Dict

import pytest

from farasa_segmenter.data import StatisticalTables

GENERAL = {
    "hasTemplate": 0.6,
    "inMorphList": 0.3,
    "inGazList": 0.1,
    "averageStemLength": 4.5,
}

ROOTS = {"ktb": 12.0, "qwl": 9.0, "mdd": 4.0}
TEMPLATES = {"fEl": 30.0, "fEAl": 20.0, "fE": 2.0, "fCl": 1.0}

RAW_TABLES: Dict[str, object] = {
    "hmListMorph": {"كتاب": 1},
    "hmListGaz": {"القاهرة": 1},
    "hmAraLexCom": {"كتاب": 1},
    "hmBuck": {"كتاب": 1},
    "hmLocations": {"القاهرة": 1},
    "hmPeople": {"محمد": 1},
    "hmStop": {"في": 1},
    "hmTemplateCount": {"fEl": 0.3, "fEAl": 0.2},
    "wordCount": {"كتاب": 8.2, "كتب": 7.5},
    "probPrefixes": {"": 0.5, "و+": 0.2, "ال+": 0.2, "و+ال+": 0.1},
    "probSuffixes": {"": 0.6, "+ه": 0.2, "+ها": 0.1},
    "probCondPrefixes": {"": 0.5, "و+": 0.2, "ال+": 0.2, "و+ال+": 0.1},
    "probCondSuffixes": {"": 0.6, "+ه": 0.2, "+ها": 0.1},
    "generalVariables": GENERAL,
    "hmPreviouslySeenTokenizations": {"والكتاب": ["و+ال+كتاب"]},
    "probPrefixSuffix": {"و+": {"+ه": 0.1}},
    "probSuffixPrefix": {"+ه": {"و+": 0.1}},
}


def build_tables(**overrides) -> StatisticalTables:
    fields = dict(
        general=GENERAL,
        word_counts=RAW_TABLES["wordCount"],
        prefix_probs=RAW_TABLES["probPrefixes"],
        suffix_probs=RAW_TABLES["probSuffixes"],
        cond_prefix_probs=RAW_TABLES["probCondPrefixes"],
        cond_suffix_probs=RAW_TABLES["probCondSuffixes"],
        prefix_suffix_probs={("و+", "+ه"): 0.1},
        suffix_prefix_probs={("+ه", "و+"): 0.1},
        template_counts=RAW_TABLES["hmTemplateCount"],
        morph_list=frozenset(RAW_TABLES["hmListMorph"]),
        gazetteer=frozenset(RAW_TABLES["hmListGaz"]),
        composite_lexicon=frozenset(RAW_TABLES["hmAraLexCom"]),
        buckwalter_list=frozenset(RAW_TABLES["hmBuck"]),
        locations=frozenset(RAW_TABLES["hmLocations"]),
        people=frozenset(RAW_TABLES["hmPeople"]),
        stopwords=frozenset(RAW_TABLES["hmStop"]),
        known_tokenizations=RAW_TABLES["hmPreviouslySeenTokenizations"],
        roots=ROOTS,
        templates=TEMPLATES,
    )
    fields.update(overrides)
    return StatisticalTables(**fields)


@pytest.fixture
def make_tables() -> Callable[..., StatisticalTables]:
    return build_tables


@pytest.fixture
def tables() -> StatisticalTables:
    return build_tables()


def write_data_dir(root: Path) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    for name, raw in RAW_TABLES.items():
        (root / f"{name}.json").write_text(json.dumps(raw, ensure_ascii=False), encoding="utf-8")
    (root / "roots.txt").write_text(
        "".join(f"{k}\t{v}\n" for k, v in ROOTS.items()), encoding="utf-8"
    )
    (root / "template-count.txt").write_text(
        "".join(f"{k}\t{v}\n" for k, v in TEMPLATES.items()), encoding="utf-8"
    )
    return root


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return write_data_dir(tmp_path / "data")

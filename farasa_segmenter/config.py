from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DATA_DIR_ENV = "FarasaDataDir"
DEFAULT_DATA_DIR = Path("data")

SCHEMES = ("default", "atb")

# Closed affix lexicons. Order is irrelevant; membership is what matters.
PREFIXES = frozenset(
    {"ال", "و", "ف", "ب", "ك", "ل", "لل", "س"}
)
SUFFIXES = frozenset(
    {
        "ه", "ها", "ك", "ي", "هما", "كما",
        "نا", "كم", "هم", "هن", "كن", "ا",
        "ان", "ين", "ون", "وا", "ات", "ت",
        "ن", "ة",
    }
)
SUFFIX_PLACEHOLDER = "_"
SIN_PREFIX = "س"
SIN_ALLOWED_OPENINGS = ("ي", "ن", "أ", "ت")

PIECE_SEP = "+"
FIELD_SEP = ";"
MULTI_PLUS_RE = re.compile(r"\++")

# Words opening with the lam-lam contraction and their article-expanded spelling.
LAM_LAM_EXPANSIONS = (
    ("لل", "لال"),
    ("ولل", "ولال"),
    ("فلل", "فلال"),
)

# Frozen log-linear weights, feature order 0..17.
SCORE_WEIGHTS = (
    -0.097825818,
    -0.03893654,
    0.13109569,
    0.18436976,
    0.11448806,
    0.53001714,
    0.21098258,
    -0.17760228,
    0.44223878,
    0.26183113,
    -0.05603376,
    0.055829503,
    -0.17745291,
    0.015865559,
    0.66909122,
    0.16948195,
    0.15397599,
    0.60355717,
)
MISSING_LOG_PROB = -10.0
MISSING_COOCCURRENCE = -20.0
MISSING_WORD_COUNT = -10.0
MISSING_LEXICON_ENTRY = -20.0

GENERAL_VARIABLES = ("hasTemplate", "inMorphList", "inGazList", "averageStemLength")

JSON_TABLES = (
    "hmListMorph",
    "hmListGaz",
    "hmAraLexCom",
    "hmBuck",
    "hmLocations",
    "hmPeople",
    "hmStop",
    "hmTemplateCount",
    "wordCount",
    "probPrefixes",
    "probSuffixes",
    "probCondPrefixes",
    "probCondSuffixes",
    "generalVariables",
    "hmPreviouslySeenTokenizations",
    "probPrefixSuffix",
    "probSuffixPrefix",
)
SEEN_BEFORE_TABLE = "SeenBefore"
ROOTS_FILE = "roots.txt"
TEMPLATES_FILE = "template-count.txt"


@dataclass(frozen=True)
class RunConfig:
    data_dir: Path
    scheme: str = "default"
    normalize: bool = True
    workers: int = 1


def resolve_data_dir(explicit: Optional[Path]) -> Path:
    if explicit is not None:
        return explicit
    env = os.environ.get(DATA_DIR_ENV, "").strip()
    if env:
        return Path(env)
    return DEFAULT_DATA_DIR

DIACRITICS_RE = re.compile(r"[\u0640\u064B-\u0652\u0670]")
NON_CHARACTERS_RE = re.compile(r"[\u0020\u2000-\u200F\u2028-\u202F\u205F-\u206F\uFEFF]+")
DELIMITER_RE = re.compile(r"[\x00-\x2F\x3A-\x40\x5B-\x60\x7B-\xBB\u0600-\u060C\u06D4-\u06ED\uFEFF]")
WORD_CHAR_RE = re.compile(
    r"[\u0621-\u063A\u0641-\u064A\u0660-\u0669\u0640\u064B-\u0652\u0670"
    r"A-Za-z0-9\u00C0-\u00C9\u00CB-\u00D6\u00D8-\u00F5\u00F8-\u00FF]"
)
ARABIC_LETTER_RE = re.compile(r"[\u0621-\u063A\u0641-\u064A]")
EMAIL_RE = re.compile(r"[a-zA-Z0-9\-._]+@[a-zA-Z0-9\-._]+")
TAB_NEWLINE_RE = re.compile(r"[\t\n\r]")
KEEP_WHOLE_PREFIXES = ("#", "@", ":", ";", "http://")

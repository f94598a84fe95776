"""
Farasa-style Arabic segmenter

Splits Arabic words into prefix, stem and suffix morphemes by enumerating
candidate partitions and ranking them with a log-linear model over
pre-trained lookup tables.
"""

from .affixes import Segmentation, classify, render_candidate
from .cache import ResultCache
from .config import RunConfig, resolve_data_dir
from .data import StatisticalTables, TableLoadError, load_tables
from .engine import ScoredSegmentation, SegmentationEngine
from .partitions import PartitionGenerator
from .schemes import apply_scheme
from .scoring import ScoringModel
from .templates import UNRANKED, TemplateMatch, TemplateMatcher
from .text import normalize_full, tokenize

__version__ = "0.1.0"

__all__ = [
    "Segmentation",
    "classify",
    "render_candidate",
    "ResultCache",
    "RunConfig",
    "resolve_data_dir",
    "StatisticalTables",
    "TableLoadError",
    "load_tables",
    "ScoredSegmentation",
    "SegmentationEngine",
    "PartitionGenerator",
    "apply_scheme",
    "ScoringModel",
    "TemplateMatch",
    "TemplateMatcher",
    "UNRANKED",
    "normalize_full",
    "tokenize",
]

import math

import pytest

from farasa_segmenter.affixes import Segmentation
from farasa_segmenter.config import (
    MISSING_COOCCURRENCE,
    MISSING_LEXICON_ENTRY,
    MISSING_LOG_PROB,
    MISSING_WORD_COUNT,
    SCORE_WEIGHTS,
)
from farasa_segmenter.scoring import ScoringModel, dotless_variant, safe_log, teh_marbuta_variant


def test_safe_log():
    assert safe_log(1.0) == 0.0
    assert safe_log(0.0) == float("-inf")
    assert safe_log(-3.0) == float("-inf")


def test_spelling_variants():
    assert dotless_variant("مستشفي") == "مستشفى"
    assert dotless_variant("كتاب") == ""
    assert teh_marbuta_variant("مدرس", "+ت+ها") == "مدرسة"
    assert teh_marbuta_variant("مدرس", "+ت") == ""
    assert teh_marbuta_variant("مدرس", "+ها") == ""


def test_features_are_finite_and_complete(tables):
    model = ScoringModel(tables)
    feats = model.features(Segmentation(prefixes=("و", "ال"), stem="كتاب", suffixes=()))
    assert len(feats) == len(SCORE_WEIGHTS)
    assert all(math.isfinite(f) for f in feats)
    assert feats[0] == pytest.approx(math.log(0.1))
    assert feats[2] == 8.2
    assert feats[5] == pytest.approx(math.log(0.6))


def test_lookup_misses_fall_back_to_penalties(tables):
    model = ScoringModel(tables)
    feats = model.features(Segmentation(prefixes=(), stem="زرع", suffixes=()))
    assert feats[2] == MISSING_WORD_COUNT
    assert feats[5] == pytest.approx(math.log(0.4))
    assert feats[13] == MISSING_LEXICON_ENTRY
    assert feats[14:] == [-1.0, -1.0, -1.0, -1.0]


def test_known_suffix_scores_strictly_higher(make_tables):
    """
    Expected: a suffix present in the suffix tables beats an unseen one, all else equal.
    """
    tables = make_tables(
        word_counts={"كتاب": 8.2},
        suffix_probs={"+ه": 0.2},
        cond_suffix_probs={"+ه": 0.2},
        prefix_suffix_probs={},
        suffix_prefix_probs={},
    )
    model = ScoringModel(tables)
    seen = model.score(Segmentation(prefixes=(), stem="كتاب", suffixes=("ه",)))
    unseen = model.score(Segmentation(prefixes=(), stem="كتاب", suffixes=("ها",)))
    assert seen > unseen


def test_weights_length_is_checked(tables):
    with pytest.raises(ValueError):
        ScoringModel(tables, weights=(1.0, 2.0))


def test_dotless_yeh_retry_per_feature(make_tables):
    """
    Expected: a stem listed only under its ى spelling is found by features
    6, 7, 10, 13, 14, 17 and missed by 2, 15, 16.
    """
    listed = frozenset({"مستشفى"})
    tables = make_tables(
        word_counts={"مستشفى": 3.0},
        morph_list=listed,
        gazetteer=listed,
        composite_lexicon=listed,
        buckwalter_list=listed,
        locations=listed,
        people=listed,
        stopwords=listed,
    )
    feats = ScoringModel(tables).features(Segmentation(prefixes=(), stem="مستشفي", suffixes=()))
    assert feats[2] == MISSING_WORD_COUNT
    assert feats[6] == pytest.approx(math.log(0.3))
    assert feats[7] == pytest.approx(math.log(0.1))
    assert feats[10] == 3.0
    assert feats[13] == 3.0
    assert feats[14:] == [1.0, -1.0, -1.0, 1.0]


def test_teh_marbuta_retry_for_stem_counts(make_tables):
    """
    Expected: before a ت-initial suffix run, features 2, 10 and 13 fall back to stem+ة.
    """
    tables = make_tables(
        word_counts={"مدرسة": 4.0},
        composite_lexicon=frozenset({"مدرسة"}),
    )
    model = ScoringModel(tables)
    feats = model.features(Segmentation(prefixes=(), stem="مدرس", suffixes=("ت", "ها")))
    assert feats[2] == 4.0
    assert feats[10] == 4.0
    assert feats[13] == 4.0

    # Without the ت-initial suffix run there is nothing to fall back to.
    plain = model.features(Segmentation(prefixes=(), stem="مدرس", suffixes=("ها",)))
    assert plain[2] == MISSING_WORD_COUNT
    assert plain[13] == MISSING_LEXICON_ENTRY


def test_composite_lexicon_tries_stem_first(make_tables):
    tables = make_tables(
        word_counts={"مستشفي": 5.0, "مستشفى": 3.0},
        composite_lexicon=frozenset({"مستشفي", "مستشفى"}),
    )
    feats = ScoringModel(tables).features(Segmentation(prefixes=(), stem="مستشفي", suffixes=()))
    assert feats[13] == 5.0

    # Listed but never counted: the word-count penalty, not the lexicon one.
    tables = make_tables(word_counts={}, composite_lexicon=frozenset({"مستشفى"}))
    feats = ScoringModel(tables).features(Segmentation(prefixes=(), stem="مستشفي", suffixes=()))
    assert feats[13] == MISSING_WORD_COUNT


def test_cooccurrence_keys_are_ordered(make_tables):
    tables = make_tables(
        prefix_suffix_probs={("و+", "+ه"): 0.1},
        suffix_prefix_probs={("+ه", "و+"): 0.4},
    )
    feats = ScoringModel(tables).features(Segmentation(prefixes=("و",), stem="كتاب", suffixes=("ه",)))
    assert feats[3] == pytest.approx(math.log(0.1))
    assert feats[4] == pytest.approx(math.log(0.4))

    swapped = make_tables(
        prefix_suffix_probs={("+ه", "و+"): 0.1},
        suffix_prefix_probs={("و+", "+ه"): 0.4},
    )
    feats = ScoringModel(swapped).features(Segmentation(prefixes=("و",), stem="كتاب", suffixes=("ه",)))
    assert feats[3] == MISSING_COOCCURRENCE
    assert feats[4] == MISSING_COOCCURRENCE


def test_unranked_template_counts_as_templated_but_misses_frequency(make_tables):
    tables = make_tables(roots={"ktb": 1.0}, templates={"fEl": 0.0}, template_counts={"fEl": 0.3})
    feats = ScoringModel(tables).features(Segmentation(prefixes=(), stem="كتب", suffixes=()))
    assert feats[5] == pytest.approx(math.log(0.6))
    assert feats[11] == MISSING_LOG_PROB

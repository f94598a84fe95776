from farasa_segmenter.affixes import Segmentation
from farasa_segmenter.partitions import (
    PartitionGenerator,
    boundary_gaps,
    lam_lam_expansion,
    pieces_for_mask,
)


def test_boundary_gaps_and_pieces():
    assert boundary_gaps(0) == ()
    assert boundary_gaps(0b101) == (0, 2)
    assert pieces_for_mask("abcd", 0b101) == ["a", "bc", "d"]
    assert pieces_for_mask("abcd", 0) == ["abcd"]
    assert pieces_for_mask("abcd", 0b111) == ["a", "b", "c", "d"]


def test_lam_lam_expansion():
    assert lam_lam_expansion("للكتاب") == "لالكتاب"
    assert lam_lam_expansion("وللكتاب") == "ولالكتاب"
    assert lam_lam_expansion("فللكتاب") == "فلالكتاب"
    assert lam_lam_expansion("كتاب") == ""


def test_empty_and_single_character_words():
    gen = PartitionGenerator()
    assert gen.partitions_of("") == []
    assert gen.partitions_of("  ") == []
    assert gen.partitions_of("ب") == [Segmentation(prefixes=(), stem="ب", suffixes=())]


def test_partitions_round_trip_and_are_unique():
    gen = PartitionGenerator()
    word = "وبالكتابه"
    segs = gen.partitions_of(word)
    assert segs
    assert len(segs) == len(set(segs))
    assert all(s.surface() == word for s in segs)


def test_partitions_reach_article_split():
    segs = PartitionGenerator().partitions_of("والكتاب")
    assert Segmentation(prefixes=("و", "ال"), stem="كتاب", suffixes=()) in segs
    assert Segmentation(prefixes=(), stem="والكتاب", suffixes=()) in segs


def test_lam_lam_candidates_include_expanded_form():
    cands = PartitionGenerator().candidates("للكتاب")
    surfaces = {c.surface() for c in cands}
    assert surfaces == {"للكتاب", "لالكتاب"}
    assert len(cands) == len(set(cands))

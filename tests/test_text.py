from farasa_segmenter.text import (
    buck_to_morph,
    buck_to_utf8,
    expand_lam_lam,
    normalize_full,
    remove_diacritics,
    split_word_characters,
    tokenize,
    utf8_to_buck,
)

FATHA = chr(0x064E)
TATWEEL = chr(0x0640)
RLM = chr(0x200F)


def test_buckwalter_round_trip():
    assert utf8_to_buck("كتاب") == "ktAb"
    assert buck_to_utf8("ktAb") == "كتاب"
    assert utf8_to_buck("abc") == "abc"


def test_buck_to_morph_folds_hamza_and_alef_maqsura():
    assert buck_to_morph("$Y'") == "PyA"
    assert buck_to_morph("ktb") == "ktb"


def test_remove_diacritics():
    assert remove_diacritics("ك" + FATHA + "ت" + TATWEEL + "ب" + FATHA) == "كتب"


def test_normalize():
    assert expand_lam_lam("للكتاب") == "لالكتاب"
    assert expand_lam_lam("وللكتاب") == "ولالكتاب"
    assert expand_lam_lam("كتاب") == "كتاب"
    assert normalize_full("أحمد إلى آخر مدرسة") == "احمد الي اخر مدرسه"


def test_split_word_characters_keeps_decimals():
    assert split_word_characters("3.5") == "3.5"
    assert split_word_characters("عام2020").split() == ["عام", "2020"]


def test_tokenize_splits_punctuation_and_expands_lam_lam():
    assert tokenize("ذهب للمدرسة") == ["ذهب", "لالمدرسة"]
    assert tokenize("كتب، قرأ.") == ["كتب", "،", "قرأ", "."]
    assert tokenize("عام2020 و3.5") == ["عام", "2020", "و", "3.5"]


def test_tokenize_keeps_hashtags_mentions_and_emails_whole():
    assert tokenize("#وسم @user user@example.com") == ["#وسم", "@user", "user@example.com"]


def test_tokenize_treats_invisible_marks_and_tabs_as_spaces():
    assert tokenize("كتاب" + RLM + "قلم") == ["كتاب", "قلم"]
    assert tokenize("كتاب\tقلم\n") == ["كتاب", "قلم"]
    assert tokenize("") == []

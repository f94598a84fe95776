from __future__ import annotations

from typing import List

from .config import (
    ARABIC_LETTER_RE,
    DELIMITER_RE,
    DIACRITICS_RE,
    EMAIL_RE,
    KEEP_WHOLE_PREFIXES,
    NON_CHARACTERS_RE,
    TAB_NEWLINE_RE,
    WORD_CHAR_RE,
)

ALEF = "\u0627"
ALEF_MADDA = "\u0622"
ALEF_HAMZA_ABOVE = "\u0623"
ALEF_HAMZA_BELOW = "\u0625"
HAMZA = "\u0621"
HAMZA_ON_WAW = "\u0624"
HAMZA_ON_YEH = "\u0626"
YEH = "\u064A"
DOTLESS_YEH = "\u0649"
TEH_MARBUTA = "\u0629"
HEH = "\u0647"

ARABIC_CHARS = (
    "\u0627\u0625\u0622\u0623\u0621\u0628\u062A\u062B\u062C\u062D\u062E\u062F\u0630\u0631\u0632"
    "\u0633\u0634\u0635\u0636\u0637\u0638\u0639\u063A\u0641\u0642\u0643\u0644\u0645\u0646\u0647"
    "\u0648\u064A\u0649\u0629\u0624\u0626\u064E\u064B\u064F\u064C\u0650\u064D\u0652\u0651"
)
BUCKWALTER_CHARS = "A<|>'btvjHxd*rzs$SDTZEgfqklmnhwyYp&}aFuNiKo~"

_UTF8_TO_BUCK = str.maketrans(ARABIC_CHARS, BUCKWALTER_CHARS)
_BUCK_TO_UTF8 = str.maketrans(BUCKWALTER_CHARS, ARABIC_CHARS)
# Root dictionary keys fold hamza/alef and yeh variants.
_BUCK_TO_MORPH = str.maketrans("$Y'|&}*<>", "PyAAAAOAA")


def utf8_to_buck(text: str) -> str:
    return text.translate(_UTF8_TO_BUCK)


def buck_to_utf8(text: str) -> str:
    return text.translate(_BUCK_TO_UTF8)


def buck_to_morph(text: str) -> str:
    return text.translate(_BUCK_TO_MORPH)


def remove_diacritics(text: str) -> str:
    return DIACRITICS_RE.sub("", text)


def remove_non_characters(text: str) -> str:
    return NON_CHARACTERS_RE.sub(" ", text)


def expand_lam_lam(text: str) -> str:
    """Rewrite a leading لل (or ولل) as the article-expanded لال (ولال)."""
    if text.startswith("لل"):
        text = "لال" + text[2:]
    if text.startswith("ولل"):
        text = "ولال" + text[3:]
    return text


def normalize_full(text: str) -> str:
    text = expand_lam_lam(text)
    for variant in (ALEF_MADDA, ALEF_HAMZA_ABOVE, ALEF_HAMZA_BELOW):
        text = text.replace(variant, ALEF)
    text = text.replace(DOTLESS_YEH, YEH)
    text = text.replace(HAMZA_ON_WAW, HAMZA).replace(HAMZA_ON_YEH, HAMZA)
    text = text.replace(TEH_MARBUTA, HEH)
    return remove_diacritics(text)


def _is_ascii_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def split_word_characters(word: str) -> str:
    """Pad punctuation and letter/digit transitions inside a word with spaces."""
    out: List[str] = []
    last = len(word) - 1
    for i, ch in enumerate(word):
        if ch in ".,":
            if i == 0:
                out.append(ch + " ")
            elif i == last:
                out.append(" " + ch)
            elif _is_ascii_digit(word[i - 1]) and _is_ascii_digit(word[i + 1]):
                out.append(ch)
            else:
                out.append(" " + ch + " ")
            continue
        if DELIMITER_RE.match(ch) or not WORD_CHAR_RE.match(ch):
            out.append(" " + ch + " ")
            continue
        if i > 0:
            prev = word[i - 1]
            if (_is_ascii_digit(ch) and ARABIC_LETTER_RE.match(prev)) or (
                _is_ascii_digit(prev) and ARABIC_LETTER_RE.match(ch)
            ):
                out.append(" " + ch)
                continue
        out.append(ch)
    return "".join(out)


def tokenize(line: str) -> List[str]:
    text = remove_non_characters(line)
    text = remove_diacritics(text)
    text = TAB_NEWLINE_RE.sub(" ", text)

    tokens: List[str] = []
    for word in text.split(" "):
        if not word:
            continue
        if word.startswith(KEEP_WHOLE_PREFIXES) or EMAIL_RE.search(word):
            tokens.append(word)
            continue
        for token in split_word_characters(word).split(" "):
            token = token.strip()
            if not token:
                continue
            if token.startswith("لل"):
                token = "لال" + token[2:]
            tokens.append(token)
    return tokens

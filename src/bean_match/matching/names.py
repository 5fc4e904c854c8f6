"""Coffee name normalization and name-based similarity."""

from __future__ import annotations

import re
import unicodedata

DEFAULT_NAME_THRESHOLD = 0.7

SUBSTRING_BONUS = 0.2
ORIGIN_BONUS = 0.15
PROCESS_BONUS = 0.10

ORIGIN_WORDS: tuple[str, ...] = (
    "honduras",
    "el salvador",
    "ethiopia",
    "kenya",
    "colombia",
    "brazil",
    "guatemala",
    "costa rica",
)
PROCESS_WORDS: tuple[str, ...] = ("honey", "washed", "natural", "anaerobic", "fermented")

_DISALLOWED_CHARS = re.compile(r"[^\w\s-]")
_FILLER_WORDS = re.compile(r"\b(?:coffee|café|espresso|roast(?:ed)?|beans?)\b")
_WHITESPACE = re.compile(r"\s+")


def normalize_coffee_name(name: str | None) -> str:
    """Normalize a coffee name for matching.

    Lower-cases, drops punctuation other than hyphens, and removes filler
    words such as "coffee" or "roasted" so that label variations of the
    same product compare equal.
    """
    if not name:
        return ""

    text = unicodedata.normalize("NFKC", name).lower()
    text = _WHITESPACE.sub(" ", text).strip()
    text = _DISALLOWED_CHARS.sub("", text)
    # Stripping can leave composable sequences adjacent.
    text = unicodedata.normalize("NFKC", text)
    text = _FILLER_WORDS.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()


def extract_coffee_terms(name: str | None) -> set[str]:
    """Return the distinctive terms (longer than two characters) of a name."""
    return {word for word in normalize_coffee_name(name).split() if len(word) > 2}


def name_similarity(name_a: str | None, name_b: str | None) -> float:
    """Score two coffee names between 0 and 1, where 1 means identical.

    Term-set Jaccard similarity plus bonuses for one name containing the
    other and for shared origin or process words.
    """
    terms_a = extract_coffee_terms(name_a)
    terms_b = extract_coffee_terms(name_b)
    if not terms_a or not terms_b:
        return 0.0

    jaccard = len(terms_a & terms_b) / len(terms_a | terms_b)

    norm_a = normalize_coffee_name(name_a)
    norm_b = normalize_coffee_name(name_b)

    substring_bonus = SUBSTRING_BONUS if norm_a in norm_b or norm_b in norm_a else 0.0

    words_a = norm_a.split()
    words_b = norm_b.split()
    pattern_bonus = 0.0
    if _shares_lexicon_word(ORIGIN_WORDS, words_a, words_b):
        pattern_bonus += ORIGIN_BONUS
    if _shares_lexicon_word(PROCESS_WORDS, words_a, words_b):
        pattern_bonus += PROCESS_BONUS

    return min(1.0, jaccard + substring_bonus + pattern_bonus)


def are_likely_same_by_name(
    name_a: str | None,
    name_b: str | None,
    threshold: float = DEFAULT_NAME_THRESHOLD,
) -> bool:
    return name_similarity(name_a, name_b) >= threshold


def _shares_lexicon_word(lexicon: tuple[str, ...], words_a: list[str], words_b: list[str]) -> bool:
    # Lexicon entries are matched inside single tokens, so multi-word entries never hit.
    return any(
        any(entry in word for word in words_a) and any(entry in word for word in words_b)
        for entry in lexicon
    )

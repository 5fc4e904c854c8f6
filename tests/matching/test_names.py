"""Tests for coffee name normalization and similarity."""

import pytest

from bean_match import are_likely_same_by_name, name_similarity, normalize_coffee_name
from bean_match.matching import extract_coffee_terms


def test_normalize_lowercases_and_collapses_whitespace():
    assert normalize_coffee_name("  Ethiopia   Yirgacheffe\tNatural ") == "ethiopia yirgacheffe natural"


def test_normalize_strips_punctuation_but_keeps_hyphens():
    assert normalize_coffee_name("Huila (Pink-Bourbon)!") == "huila pink-bourbon"


def test_normalize_removes_filler_words():
    assert normalize_coffee_name("Café Espresso Roast Blend") == "blend"
    assert normalize_coffee_name("Kenya Roasted Coffee Beans") == "kenya"
    assert normalize_coffee_name("Bean Town Roast") == "town"


def test_normalize_removes_standalone_roast():
    assert normalize_coffee_name("Ethiopia Roast") == normalize_coffee_name("Ethiopia")
    assert name_similarity("Kenya Kiambu Roast", "Kenya Kiambu") == 1.0


def test_normalize_composes_characters_joined_by_stripping():
    assert normalize_coffee_name("\u1100!\u1161 Kiambu") == "\uac00 kiambu"


def test_normalize_keeps_filler_words_inside_longer_words():
    assert normalize_coffee_name("Coffeeland Roastery") == "coffeeland roastery"


def test_normalize_empty_input():
    assert normalize_coffee_name("") == ""
    assert normalize_coffee_name(None) == ""
    assert normalize_coffee_name("   ") == ""


@pytest.mark.parametrize(
    "value",
    [
        "El Salvador Honey La Hondurita",
        "  Roasted -- Coffee  beans  ",
        "Café de Colombia, Huila",
        "Kenya AA Kiambu (Washed)",
        "coffee",
        "\u1100!\u1161 Kiambu",
        "",
    ],
)
def test_normalize_is_idempotent(value):
    once = normalize_coffee_name(value)
    assert normalize_coffee_name(once) == once


def test_extract_terms_drops_short_tokens():
    assert extract_coffee_terms("Kenya AA Kiambu") == {"kenya", "kiambu"}
    assert extract_coffee_terms("El Salvador La Hondurita") == {"salvador", "hondurita"}


def test_extract_terms_empty_when_nothing_qualifies():
    assert extract_coffee_terms("AA") == set()
    assert extract_coffee_terms("Coffee Beans") == set()


@pytest.mark.parametrize(
    ("name_a", "name_b", "expected"),
    [
        ("El Salvador Honey La Hondurita", "Honey El Salvador La Hondurita", True),
        ("Ethiopia Yirgacheffe Natural", "Natural Ethiopia Yirgacheffe", True),
        ("Colombia Huila Washed", "Brazil Santos", False),
        ("Kenya AA Kiambu", "Kenya AA Kiambu Washed", True),
    ],
)
def test_known_name_pairs(name_a, name_b, expected):
    assert are_likely_same_by_name(name_a, name_b) is expected
    assert (name_similarity(name_a, name_b) >= 0.7) is expected


def test_self_similarity_is_one():
    for name in ["Giant Steps", "Ethiopia Guji Hambela", "Kiambu"]:
        assert name_similarity(name, name) == 1.0


def test_similarity_is_symmetric():
    pairs = [
        ("Kiambu", "Kiambu Peaberry"),
        ("Ethiopia Guji", "Ethiopia Sidama"),
        ("Colombian Huila", "Colombia Narino"),
        ("Washed Guji", "Natural Guji"),
    ]
    for name_a, name_b in pairs:
        assert name_similarity(name_a, name_b) == name_similarity(name_b, name_a)


def test_similarity_zero_without_terms():
    assert name_similarity("", "Kenya Kiambu") == 0.0
    assert name_similarity("AA", "AA") == 0.0
    assert name_similarity(None, None) == 0.0


def test_substring_bonus():
    # jaccard 1/2 plus containment bonus
    assert name_similarity("Kiambu", "Kiambu Peaberry") == pytest.approx(0.7)


def test_origin_bonus():
    assert name_similarity("Ethiopia Guji", "Ethiopia Sidama") == pytest.approx(1 / 3 + 0.15)


def test_origin_bonus_matches_inside_token():
    assert name_similarity("Colombian Huila", "Colombia Narino") == pytest.approx(0.15)


def test_process_bonus():
    assert name_similarity("Washed Guji", "Washed Sidama") == pytest.approx(1 / 3 + 0.10)


def test_multi_word_origin_never_matches_single_token():
    assert name_similarity("El Salvador Pacamara", "El Salvador Bourbon") == pytest.approx(1 / 3)


def test_score_is_clamped_to_one():
    assert name_similarity("Kenya AA Kiambu", "Kenya AA Kiambu Washed") == 1.0


def test_custom_threshold():
    assert are_likely_same_by_name("Kiambu", "Kiambu Peaberry", threshold=0.9) is False
    assert are_likely_same_by_name("Ethiopia Guji", "Ethiopia Sidama", threshold=0.4) is True

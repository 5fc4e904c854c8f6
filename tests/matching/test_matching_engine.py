"""Tests for best-match selection."""

import pytest

from bean_match import (
    CoffeeDescriptor,
    MatchingConfig,
    MatchingEngine,
    find_best_match,
    find_best_match_by_name_only,
)


def test_unrelated_candidate_is_not_matched():
    target = CoffeeDescriptor(name="Yirgacheffe", origin_country="Ethiopia")
    candidates = [CoffeeDescriptor(name="Totally Different", origin_country="Brazil")]

    assert find_best_match(target, candidates, 0.8) is None


def test_matches_same_lot_with_different_label():
    target = CoffeeDescriptor(
        name="Ethiopia Sidama Bensa",
        origin_country="Ethiopia",
        region="Sidama",
        farm="Bensa",
    )
    candidates = [
        CoffeeDescriptor(id="c1", name="Santos", origin_country="Brazil"),
        CoffeeDescriptor(
            id="c2",
            name="Sidama Bensa",
            origin_country="Ethiopia",
            region="Sidama",
            farm="Bensa Washing Station",
        ),
    ]

    result = find_best_match(target, candidates)

    assert result is not None
    assert result.descriptor.id == "c2"
    # characteristics 1.0, name 2/3 + 0.2
    assert result.score == pytest.approx(0.7 + 0.3 * (2 / 3 + 0.2))


def test_ties_keep_first_candidate():
    target = CoffeeDescriptor(name="Giant Steps", origin_country="Ethiopia")
    candidates = [
        CoffeeDescriptor(id="first", name="Giant Steps", origin_country="Ethiopia"),
        CoffeeDescriptor(id="second", name="Giant Steps", origin_country="Ethiopia"),
    ]

    result = find_best_match(target, candidates)

    assert result is not None
    assert result.descriptor.id == "first"


def test_higher_score_wins_over_earlier_candidate():
    target = CoffeeDescriptor(name="Giant Steps", origin_country="Ethiopia", process="Washed")
    candidates = [
        CoffeeDescriptor(id="partial", name="Giant Steps", origin_country="Ethiopia", process="Natural"),
        CoffeeDescriptor(id="full", name="Giant Steps", origin_country="Ethiopia", process="Washed"),
    ]

    result = find_best_match(target, candidates, threshold=0.5)

    assert result is not None
    assert result.descriptor.id == "full"


def test_empty_candidates_return_none():
    assert find_best_match(CoffeeDescriptor(name="Giant Steps"), []) is None


def test_name_alone_cannot_clear_default_threshold():
    target = CoffeeDescriptor(name="Giant Steps")
    candidates = [CoffeeDescriptor(id="g", name="Giant Steps")]

    assert find_best_match(target, candidates) is None

    result = find_best_match(target, candidates, threshold=0.3)
    assert result is not None
    assert result.score == pytest.approx(0.3)


def test_result_never_below_threshold():
    target = CoffeeDescriptor(name="Kenya Kiambu", origin_country="Kenya", process="Washed")
    candidates = [
        CoffeeDescriptor(name="Kenya Nyeri", origin_country="Kenya", process="Natural"),
        CoffeeDescriptor(name="Kiambu", origin_country="Kenya"),
        CoffeeDescriptor(name="Huila", origin_country="Colombia", process="Washed"),
    ]

    for threshold in [0.0, 0.25, 0.5, 0.75, 0.9, 1.0]:
        result = find_best_match(target, candidates, threshold)
        if result is not None:
            assert result.score >= threshold


def test_name_only_match_keeps_first_tie():
    candidates = [
        CoffeeDescriptor(id="b", name="Brazil Santos"),
        CoffeeDescriptor(id="k1", name="Kenya AA Kiambu Washed"),
        CoffeeDescriptor(id="k2", name="Kenya Kiambu"),
    ]

    result = find_best_match_by_name_only("Kenya AA Kiambu", candidates)

    assert result is not None
    assert result.descriptor.id == "k1"
    assert result.score == 1.0


def test_name_only_returns_none_below_threshold():
    candidates = [CoffeeDescriptor(name="Brazil Santos")]

    assert find_best_match_by_name_only("Colombia Huila Washed", candidates) is None
    assert find_best_match_by_name_only("", candidates) is None


def test_engine_uses_configured_threshold():
    engine = MatchingEngine(MatchingConfig(threshold=0.3))
    target = CoffeeDescriptor(name="Giant Steps")

    result = engine.find_best_match(target, [CoffeeDescriptor(name="Giant Steps")])

    assert result is not None


def test_engine_uses_configured_weights():
    engine = MatchingEngine(MatchingConfig(characteristic_weight=0.0, name_weight=1.0))
    target = CoffeeDescriptor(name="Giant Steps", origin_country="Ethiopia")
    candidate = CoffeeDescriptor(name="Giant Steps", origin_country="Brazil")

    assert engine.score(target, candidate) == pytest.approx(1.0)


def test_score_candidates_preserves_order():
    engine = MatchingEngine()
    target = CoffeeDescriptor(name="Giant Steps", origin_country="Ethiopia")
    candidates = [
        CoffeeDescriptor(id="a", name="Santos", origin_country="Brazil"),
        CoffeeDescriptor(id="b", name="Giant Steps", origin_country="Ethiopia"),
    ]

    scored = engine.score_candidates(target, candidates)

    assert [item.descriptor.id for item in scored] == ["a", "b"]
    assert scored[0].score == 0.0
    assert scored[1].score == pytest.approx(1.0)


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("BEAN_MATCH_THRESHOLD", "0.65")
    monkeypatch.setenv("BEAN_MATCH_NAME_THRESHOLD", "0.5")
    monkeypatch.setenv("BEAN_MATCH_NAME_WEIGHT", "not-a-number")
    monkeypatch.delenv("BEAN_MATCH_CHARACTERISTIC_WEIGHT", raising=False)

    config = MatchingConfig.from_env()

    assert config.threshold == 0.65
    assert config.name_threshold == 0.5
    assert config.name_weight == 0.3
    assert config.characteristic_weight == 0.7


def test_config_from_env_ignores_non_finite_values(monkeypatch):
    monkeypatch.setenv("BEAN_MATCH_THRESHOLD", "nan")
    monkeypatch.setenv("BEAN_MATCH_NAME_THRESHOLD", "inf")

    config = MatchingConfig.from_env()

    assert config.threshold == 0.8
    assert config.name_threshold == 0.7
    target = CoffeeDescriptor(name="Giant Steps", origin_country="Ethiopia")
    assert MatchingEngine(config).find_best_match(target, [target]) is not None

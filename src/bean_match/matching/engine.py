"""Best-match selection over a roaster's existing coffees."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from bean_match.config import env_float
from bean_match.matching.characteristics import characteristic_similarity
from bean_match.matching.names import DEFAULT_NAME_THRESHOLD, name_similarity
from bean_match.schema import CoffeeDescriptor

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.8
DEFAULT_CHARACTERISTIC_WEIGHT = 0.7
DEFAULT_NAME_WEIGHT = 0.3


@dataclass(frozen=True)
class MatchResult:
    descriptor: CoffeeDescriptor
    score: float


@dataclass(frozen=True)
class MatchingConfig:
    threshold: float = DEFAULT_THRESHOLD
    name_threshold: float = DEFAULT_NAME_THRESHOLD
    characteristic_weight: float = DEFAULT_CHARACTERISTIC_WEIGHT
    name_weight: float = DEFAULT_NAME_WEIGHT

    @classmethod
    def from_env(cls) -> "MatchingConfig":
        return cls(
            threshold=env_float("BEAN_MATCH_THRESHOLD", DEFAULT_THRESHOLD),
            name_threshold=env_float("BEAN_MATCH_NAME_THRESHOLD", DEFAULT_NAME_THRESHOLD),
            characteristic_weight=env_float(
                "BEAN_MATCH_CHARACTERISTIC_WEIGHT", DEFAULT_CHARACTERISTIC_WEIGHT
            ),
            name_weight=env_float("BEAN_MATCH_NAME_WEIGHT", DEFAULT_NAME_WEIGHT),
        )


class MatchingEngine:
    """Decides whether a candidate coffee is already in the catalog."""

    def __init__(self, config: MatchingConfig | None = None):
        self.config = config or MatchingConfig()

    def score(self, target: CoffeeDescriptor, candidate: CoffeeDescriptor) -> float:
        char_score = characteristic_similarity(target, candidate)
        name_score = name_similarity(target.name, candidate.name)
        return char_score * self.config.characteristic_weight + name_score * self.config.name_weight

    def score_candidates(
        self,
        target: CoffeeDescriptor,
        candidates: Iterable[CoffeeDescriptor],
    ) -> list[MatchResult]:
        return [MatchResult(descriptor=c, score=self.score(target, c)) for c in candidates]

    def find_best_match(
        self,
        target: CoffeeDescriptor,
        candidates: Iterable[CoffeeDescriptor],
        threshold: float | None = None,
    ) -> MatchResult | None:
        """Return the highest-scoring candidate at or above the threshold.

        Ties keep the earliest candidate, so callers should pass candidates in
        a stable order such as creation order. Returns None when nothing
        clears the threshold.
        """
        resolved = threshold if threshold is not None else self.config.threshold
        best = _pick_best(self.score_candidates(target, candidates), resolved)
        _log_outcome(target.name, best, resolved)
        return best

    def find_best_match_by_name_only(
        self,
        target_name: str | None,
        candidates: Iterable[CoffeeDescriptor],
        threshold: float | None = None,
    ) -> MatchResult | None:
        """Name-only variant for callers without structured attributes."""
        resolved = threshold if threshold is not None else self.config.name_threshold
        scored = [
            MatchResult(descriptor=c, score=name_similarity(target_name, c.name)) for c in candidates
        ]
        best = _pick_best(scored, resolved)
        _log_outcome(target_name, best, resolved)
        return best


def find_best_match(
    target: CoffeeDescriptor,
    candidates: Iterable[CoffeeDescriptor],
    threshold: float = DEFAULT_THRESHOLD,
) -> MatchResult | None:
    """Find the catalog coffee that best matches ``target`` on attributes and name."""

    return MatchingEngine().find_best_match(target, candidates, threshold=threshold)


def find_best_match_by_name_only(
    target_name: str | None,
    candidates: Iterable[CoffeeDescriptor],
    threshold: float = DEFAULT_NAME_THRESHOLD,
) -> MatchResult | None:
    """Find the catalog coffee whose name best matches ``target_name``."""

    return MatchingEngine().find_best_match_by_name_only(target_name, candidates, threshold=threshold)


def _pick_best(scored: list[MatchResult], threshold: float) -> MatchResult | None:
    best: MatchResult | None = None
    for result in scored:
        if result.score >= threshold and (best is None or result.score > best.score):
            best = result
    return best


def _log_outcome(target_name: str | None, best: MatchResult | None, threshold: float) -> None:
    if best is None:
        logger.debug("no match for %r at threshold %.2f", target_name, threshold)
    else:
        logger.debug(
            "matched %r -> %r (id=%s, score=%.3f)",
            target_name,
            best.descriptor.name,
            best.descriptor.id,
            best.score,
        )

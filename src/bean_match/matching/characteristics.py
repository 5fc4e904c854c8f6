"""Weighted comparison of structured coffee attributes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from bean_match.schema import CoffeeDescriptor

Rule = Literal["exact", "contains"]


@dataclass(frozen=True)
class FieldRule:
    field: str
    weight: float
    rule: Rule


FIELD_RULES: tuple[FieldRule, ...] = (
    FieldRule("origin_country", 3.0, "exact"),
    FieldRule("region", 2.5, "contains"),
    FieldRule("farm", 2.0, "contains"),
    FieldRule("process", 1.5, "exact"),
    FieldRule("variety", 1.0, "contains"),
)


def characteristic_similarity(target: CoffeeDescriptor, candidate: CoffeeDescriptor) -> float:
    """Score two descriptors between 0 and 1 on their shared attributes.

    Only fields present on both sides are weighed. With no comparable
    field the score is 0.
    """
    score = 0.0
    total_weight = 0.0

    for rule in FIELD_RULES:
        left = _comparable(getattr(target, rule.field, None))
        right = _comparable(getattr(candidate, rule.field, None))
        if left is None or right is None:
            continue

        total_weight += rule.weight
        if _matches(rule.rule, left, right):
            score += rule.weight

    return score / total_weight if total_weight > 0 else 0.0


def _comparable(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    text = value.strip().lower()
    return text or None


def _matches(rule: Rule, left: str, right: str) -> bool:
    if rule == "exact":
        return left == right
    return left in right or right in left

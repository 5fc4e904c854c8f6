"""Coffee matching utilities for catalog deduplication."""

from bean_match.matching.characteristics import FIELD_RULES, characteristic_similarity
from bean_match.matching.engine import (
    DEFAULT_THRESHOLD,
    MatchingConfig,
    MatchingEngine,
    MatchResult,
    find_best_match,
    find_best_match_by_name_only,
)
from bean_match.matching.names import (
    DEFAULT_NAME_THRESHOLD,
    ORIGIN_WORDS,
    PROCESS_WORDS,
    are_likely_same_by_name,
    extract_coffee_terms,
    name_similarity,
    normalize_coffee_name,
)

__all__ = [
    "DEFAULT_NAME_THRESHOLD",
    "DEFAULT_THRESHOLD",
    "FIELD_RULES",
    "ORIGIN_WORDS",
    "PROCESS_WORDS",
    "MatchResult",
    "MatchingConfig",
    "MatchingEngine",
    "are_likely_same_by_name",
    "characteristic_similarity",
    "extract_coffee_terms",
    "find_best_match",
    "find_best_match_by_name_only",
    "name_similarity",
    "normalize_coffee_name",
]

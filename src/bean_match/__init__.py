"""bean-match: Deduplicate photographed coffee bags against a coffee catalog."""

from bean_match.ingestion import IngestionConfig, IngestionResult, ingest_bag
from bean_match.matching import (
    MatchingConfig,
    MatchingEngine,
    MatchResult,
    are_likely_same_by_name,
    characteristic_similarity,
    find_best_match,
    find_best_match_by_name_only,
    name_similarity,
    normalize_coffee_name,
)
from bean_match.brewing import build_brew, map_brewing_method
from bean_match.schema import CoffeeDescriptor, ExtractedBagInfo

__version__ = "0.1.0"

__all__ = [
    "CoffeeDescriptor",
    "ExtractedBagInfo",
    "IngestionConfig",
    "IngestionResult",
    "MatchResult",
    "MatchingConfig",
    "MatchingEngine",
    "are_likely_same_by_name",
    "build_brew",
    "characteristic_similarity",
    "find_best_match",
    "find_best_match_by_name_only",
    "ingest_bag",
    "map_brewing_method",
    "name_similarity",
    "normalize_coffee_name",
    "__version__",
]

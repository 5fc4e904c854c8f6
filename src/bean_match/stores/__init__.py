"""Catalog stores for bean-match."""

from bean_match.stores.base import CatalogStore
from bean_match.stores.memory import InMemoryCatalogStore

__all__ = ["CatalogStore", "InMemoryCatalogStore"]

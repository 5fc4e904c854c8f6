"""Catalog store interface."""

from abc import ABC, abstractmethod

from bean_match.schema import Bag, Coffee, Roaster


class CatalogStore(ABC):
    """Abstract base class for roaster/coffee/bag persistence."""

    @abstractmethod
    def find_roaster_by_name(self, name: str) -> Roaster | None:
        """Return the roaster whose name equals ``name`` ignoring case."""
        pass

    @abstractmethod
    def create_roaster(self, values: dict) -> Roaster:
        pass

    @abstractmethod
    def list_coffees(self, roaster_id: str) -> list[Coffee]:
        """Return a roaster's coffees in creation order."""
        pass

    @abstractmethod
    def create_coffee(self, values: dict) -> Coffee:
        pass

    @abstractmethod
    def create_bag(self, values: dict) -> Bag:
        pass

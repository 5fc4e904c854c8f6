"""In-memory catalog store."""

from __future__ import annotations

import json
import uuid
from datetime import datetime, timezone
from pathlib import Path

from bean_match.schema import Bag, Coffee, Roaster
from bean_match.stores.base import CatalogStore


class InMemoryCatalogStore(CatalogStore):
    """Dict-backed store that keeps rows in insertion order."""

    def __init__(
        self,
        roasters: list[Roaster] | None = None,
        coffees: list[Coffee] | None = None,
        bags: list[Bag] | None = None,
    ):
        self.roasters: dict[str, Roaster] = {r.id: r for r in roasters or []}
        self.coffees: dict[str, Coffee] = {c.id: c for c in coffees or []}
        self.bags: dict[str, Bag] = {b.id: b for b in bags or []}

    @classmethod
    def from_json_file(cls, path: str | Path) -> InMemoryCatalogStore:
        """Load a catalog snapshot of the form ``{"roasters": [...], "coffees": [...], "bags": [...]}``."""
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls(
            roasters=[Roaster.model_validate(item) for item in data.get("roasters", [])],
            coffees=[Coffee.model_validate(item) for item in data.get("coffees", [])],
            bags=[Bag.model_validate(item) for item in data.get("bags", [])],
        )

    def to_dict(self) -> dict[str, list[dict]]:
        return {
            "roasters": [r.model_dump(exclude_none=True) for r in self.roasters.values()],
            "coffees": [c.model_dump(exclude_none=True) for c in self.coffees.values()],
            "bags": [b.model_dump(exclude_none=True) for b in self.bags.values()],
        }

    def find_roaster_by_name(self, name: str) -> Roaster | None:
        wanted = name.strip().casefold()
        for roaster in self.roasters.values():
            if roaster.name.strip().casefold() == wanted:
                return roaster
        return None

    def create_roaster(self, values: dict) -> Roaster:
        roaster = Roaster(**_with_identity(values))
        self.roasters[roaster.id] = roaster
        return roaster

    def list_coffees(self, roaster_id: str) -> list[Coffee]:
        return [c for c in self.coffees.values() if c.roaster_id == roaster_id]

    def create_coffee(self, values: dict) -> Coffee:
        coffee = Coffee(**_with_identity(values))
        self.coffees[coffee.id] = coffee
        return coffee

    def create_bag(self, values: dict) -> Bag:
        bag = Bag(**_with_identity(values))
        self.bags[bag.id] = bag
        return bag


def _with_identity(values: dict) -> dict:
    row = dict(values)
    row.setdefault("id", str(uuid.uuid4()))
    row.setdefault("created_at", datetime.now(timezone.utc).isoformat())
    return row

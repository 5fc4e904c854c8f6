"""Turn extracted bag info into catalog rows without duplicating coffees."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from pathlib import Path
from urllib import error, request

from bean_match.config import env_float, env_optional_float, env_str
from bean_match.exceptions import CatalogError, IngestionError
from bean_match.matching.engine import MatchingEngine, MatchResult
from bean_match.schema import (
    Bag,
    Coffee,
    CoffeeDescriptor,
    ExtractedBag,
    ExtractedBagInfo,
    ExtractedCoffee,
    ExtractedRoaster,
    Roaster,
)
from bean_match.stores.base import CatalogStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IngestionConfig:
    review_queue_path: str | None = None
    review_min_score: float | None = None
    review_queue_webhook_url: str | None = None
    review_queue_webhook_timeout_sec: float = 2.0
    review_queue_webhook_token: str | None = None

    @classmethod
    def from_env(cls) -> "IngestionConfig":
        return cls(
            review_queue_path=env_str("REVIEW_QUEUE_PATH"),
            review_min_score=env_optional_float("REVIEW_QUEUE_MIN_SCORE"),
            review_queue_webhook_url=env_str("REVIEW_QUEUE_WEBHOOK_URL"),
            review_queue_webhook_timeout_sec=env_float("REVIEW_QUEUE_WEBHOOK_TIMEOUT_SEC", 2.0),
            review_queue_webhook_token=env_str("REVIEW_QUEUE_WEBHOOK_TOKEN"),
        )


@dataclass(frozen=True)
class IngestionResult:
    roaster: Roaster
    coffee: Coffee
    bag: Bag
    roaster_created: bool
    coffee_created: bool
    match_score: float | None = None


class BagIngestor:
    """Find-or-create workflow for a bag photographed by the user.

    Roasters are matched by exact name ignoring case. Coffees are matched
    against the roaster's existing coffees with the matching engine, so a
    second bag of the same lot attaches to the coffee already on file.
    """

    def __init__(
        self,
        store: CatalogStore,
        engine: MatchingEngine | None = None,
        config: IngestionConfig | None = None,
    ):
        self.store = store
        self.engine = engine or MatchingEngine()
        self.config = config or IngestionConfig()

    def ingest(self, info: ExtractedBagInfo) -> IngestionResult:
        roaster_name = info.roaster.name.strip()
        coffee_name = info.coffee.name.strip()
        if not roaster_name:
            raise IngestionError("Extracted bag info has no roaster name")
        if not coffee_name:
            raise IngestionError("Extracted bag info has no coffee name")

        logger.info("ingesting bag: roaster=%r coffee=%r", roaster_name, coffee_name)
        roaster, roaster_created = self._find_or_create_roaster(info.roaster)
        coffee, match = self._find_or_create_coffee(info.coffee, roaster)
        bag = self._create_bag(info.bag, coffee)
        logger.info(
            "bag %s stored under coffee %s (%s)",
            bag.id,
            coffee.id,
            "matched" if match else "new",
        )

        return IngestionResult(
            roaster=roaster,
            coffee=coffee,
            bag=bag,
            roaster_created=roaster_created,
            coffee_created=match is None,
            match_score=match.score if match else None,
        )

    def _find_or_create_roaster(self, extracted: ExtractedRoaster) -> tuple[Roaster, bool]:
        name = extracted.name.strip()
        existing = self._call_store("search for roaster", self.store.find_roaster_by_name, name)
        if existing is not None:
            logger.debug("roaster found: %s", existing.id)
            return existing, False

        values = _clean(extracted.model_dump())
        values["name"] = name
        roaster = self._call_store("create roaster", self.store.create_roaster, values)
        logger.debug("roaster created: %s", roaster.id)
        return roaster, True

    def _find_or_create_coffee(
        self,
        extracted: ExtractedCoffee,
        roaster: Roaster,
    ) -> tuple[Coffee, MatchResult | None]:
        existing = self._call_store("search for coffee", self.store.list_coffees, roaster.id)
        by_id = {coffee.id: coffee for coffee in existing}
        target = CoffeeDescriptor.from_extracted(extracted)
        candidates = [CoffeeDescriptor.from_coffee(coffee) for coffee in existing]

        match = self.engine.find_best_match(target, candidates)
        if match is not None and match.descriptor.id in by_id:
            return by_id[match.descriptor.id], match

        self._maybe_enqueue_review(target, roaster, candidates)

        values = _clean(extracted.model_dump())
        values["name"] = target.name.strip()
        values["roaster_id"] = roaster.id
        coffee = self._call_store("create coffee", self.store.create_coffee, values)
        logger.debug("coffee created: %s", coffee.id)
        return coffee, None

    def _create_bag(self, extracted: ExtractedBag, coffee: Coffee) -> Bag:
        values = _clean(extracted.model_dump())
        values["coffee_id"] = coffee.id
        values.setdefault("roast_date", date.today().isoformat())
        return self._call_store("create bag", self.store.create_bag, values)

    def _maybe_enqueue_review(
        self,
        target: CoffeeDescriptor,
        roaster: Roaster,
        candidates: list[CoffeeDescriptor],
    ) -> None:
        min_score = self.config.review_min_score
        if min_score is None or not candidates:
            return

        scored = self.engine.score_candidates(target, candidates)
        nearest = max(scored, key=lambda result: result.score)
        if nearest.score < min_score:
            return

        logger.info(
            "near miss for %r: %r scored %.3f below threshold",
            target.name,
            nearest.descriptor.name,
            nearest.score,
        )
        payload = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "roaster_id": roaster.id,
            "roaster_name": roaster.name,
            "target": target.model_dump(exclude_none=True),
            "candidate_id": nearest.descriptor.id,
            "candidate_name": nearest.descriptor.name,
            "score": round(nearest.score, 4),
            "threshold": self.engine.config.threshold,
            "reason": "near_miss",
        }
        self._enqueue_review(payload)

    def _enqueue_review(self, payload: dict) -> None:
        path_value = self.config.review_queue_path
        if path_value:
            path = Path(path_value)
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("a", encoding="utf-8") as f:
                f.write(json.dumps(payload, ensure_ascii=False) + "\n")

        webhook_url = self.config.review_queue_webhook_url
        if webhook_url:
            _send_review_webhook(
                webhook_url,
                payload,
                timeout_sec=self.config.review_queue_webhook_timeout_sec,
                token=self.config.review_queue_webhook_token,
            )

    @staticmethod
    def _call_store(action: str, func, *args):
        try:
            return func(*args)
        except Exception as e:
            logger.error("failed to %s: %s", action, e)
            raise CatalogError(f"Failed to {action}: {e}") from e


def ingest_bag(
    info: ExtractedBagInfo,
    store: CatalogStore,
    *,
    engine: MatchingEngine | None = None,
    config: IngestionConfig | None = None,
) -> IngestionResult:
    """Store a photographed bag, reusing an existing roaster and coffee when possible."""

    return BagIngestor(store, engine=engine, config=config).ingest(info)


def _clean(values: dict) -> dict:
    cleaned: dict = {}
    for key, value in values.items():
        if isinstance(value, str):
            value = value.strip() or None
        if value is None:
            continue
        cleaned[key] = value
    return cleaned


def _send_review_webhook(
    url: str,
    payload: dict,
    *,
    timeout_sec: float,
    token: str | None,
) -> None:
    data = json.dumps(payload, ensure_ascii=False).encode("utf-8")
    headers = {"Content-Type": "application/json"}
    if token:
        headers["x-webhook-token"] = token
    req = request.Request(url, data=data, headers=headers, method="POST")
    try:
        with request.urlopen(req, timeout=timeout_sec):
            pass
    except (error.URLError, TimeoutError, ValueError) as e:
        logger.warning("review webhook failed: %s", e)

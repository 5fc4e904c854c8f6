"""Brew method normalization and brew records."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Literal

from bean_match.schema import Brew

BrewMethod = Literal["espresso", "v60", "aeropress", "chemex", "kalita", "frenchpress"]

DEFAULT_BREW_METHOD: BrewMethod = "v60"
DEFAULT_DOSE_G = 18.0
DEFAULT_YIELD_G = 30.0
DEFAULT_TIME_S = 25.0
DEFAULT_WATER_TEMP_C = 93.0
DEFAULT_RATING = 5.0
DEFAULT_GRIND_SETTING = "medium"

BREWING_METHODS: dict[str, BrewMethod] = {
    "espresso": "espresso",
    "pour": "v60",
    "pour-over": "v60",
    "v60": "v60",
    "aeropress": "aeropress",
    "chemex": "chemex",
    "kalita": "kalita",
    "french": "frenchpress",
    "french-press": "frenchpress",
    "press": "frenchpress",
}


def map_brewing_method(detected: str | None) -> BrewMethod:
    """Map a free-text method reported by brew photo analysis to a BrewMethod.

    Tries an exact key first, then the first key contained in the text.
    Unknown or missing values fall back to v60.
    """
    if not detected:
        return DEFAULT_BREW_METHOD

    value = detected.strip().lower()
    if value in BREWING_METHODS:
        return BREWING_METHODS[value]

    for key, method in BREWING_METHODS.items():
        if key in value:
            return method

    return DEFAULT_BREW_METHOD


def build_brew(
    bag_id: str,
    *,
    detected_method: str | None = None,
    dose_g: float | None = None,
    yield_g: float | None = None,
    time_s: float | None = None,
    grind_setting: str | float | None = None,
    water_temp_c: float | None = None,
    rating: float | None = None,
    notes: str | None = None,
    brew_date: str | None = None,
) -> Brew:
    """Build a Brew row for a bag, filling unreported parameters with defaults."""
    return Brew(
        id=str(uuid.uuid4()),
        bag_id=bag_id,
        method=map_brewing_method(detected_method),
        dose_g=dose_g if dose_g is not None else DEFAULT_DOSE_G,
        yield_g=yield_g if yield_g is not None else DEFAULT_YIELD_G,
        time_s=time_s if time_s is not None else DEFAULT_TIME_S,
        grind_setting=str(grind_setting) if grind_setting else DEFAULT_GRIND_SETTING,
        water_temp_c=water_temp_c if water_temp_c is not None else DEFAULT_WATER_TEMP_C,
        rating=rating if rating is not None else DEFAULT_RATING,
        notes=notes or None,
        brew_date=brew_date or datetime.now(timezone.utc).isoformat(),
    )

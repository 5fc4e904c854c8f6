"""Environment parsing helpers."""

from __future__ import annotations

import math
import os


def env_str(name: str) -> str | None:
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def env_float(name: str, default: float) -> float:
    value = env_optional_float(name)
    return default if value is None else value


def env_optional_float(name: str) -> float | None:
    value = os.getenv(name)
    if not value:
        return None
    try:
        parsed = float(value)
    except ValueError:
        return None
    # nan and inf would make every threshold comparison fail
    return parsed if math.isfinite(parsed) else None

"""Calendar rollup of energy-log entries into daily / ISO-weekly / monthly buckets."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable

from intelliwatt.exceptions import ValidationError

logger = logging.getLogger(__name__)

MODES = ("daily", "weekly", "monthly")
DEFAULT_MODE = "daily"
MAX_BUCKETS = 60


@dataclass
class RollupBucket:
    key: str
    total_kwh: float
    total_cost: float
    entry_count: int = 0


def normalize_mode(mode: str | None) -> str:
    """Map a requested mode onto a supported one; unknown modes become daily."""
    normalized = str(mode or "").strip().lower()
    if normalized not in MODES:
        if normalized:
            logger.debug("Unsupported rollup mode %r — using %s", mode, DEFAULT_MODE)
        return DEFAULT_MODE
    return normalized


def _as_utc(timestamp: datetime) -> datetime:
    # Naive timestamps come from the store and are already UTC.
    if timestamp.tzinfo is None:
        return timestamp
    return timestamp.astimezone(timezone.utc).replace(tzinfo=None)


def bucket_key(timestamp: datetime, mode: str) -> str:
    """Bucket key of a timestamp: ``YYYY-MM-DD``, ``YYYY-Www`` (ISO) or ``YYYY-MM``."""
    ts = _as_utc(timestamp)
    mode = normalize_mode(mode)
    if mode == "weekly":
        iso_year, iso_week, _ = ts.isocalendar()
        return f"{iso_year:04d}-W{iso_week:02d}"
    if mode == "monthly":
        return ts.strftime("%Y-%m")
    return ts.strftime("%Y-%m-%d")


def rollup(
    entries: Iterable[Any],
    mode: str | None = DEFAULT_MODE,
    rate: float | None = None,
    limit: int = MAX_BUCKETS,
) -> list[RollupBucket]:
    """Group entries (anything with ``kwh``, ``cost`` and ``created_at``) into buckets.

    With an explicit ``rate`` the bucket cost is recomputed as ``total_kwh * rate``;
    otherwise it is the sum of the cost stored on each entry. Buckets are returned
    most recent first and never exceed ``MAX_BUCKETS``. Values are not rounded.
    """
    if rate is not None and not math.isfinite(rate):
        raise ValidationError(f"Invalid rate: {rate!r}")

    mode = normalize_mode(mode)
    buckets: dict[str, RollupBucket] = {}

    for entry in entries:
        key = bucket_key(entry.created_at, mode)
        bucket = buckets.get(key)
        if bucket is None:
            bucket = buckets[key] = RollupBucket(key=key, total_kwh=0.0, total_cost=0.0)
        bucket.total_kwh += entry.kwh
        bucket.total_cost += entry.cost
        bucket.entry_count += 1

    if rate is not None:
        for bucket in buckets.values():
            bucket.total_cost = bucket.total_kwh * rate

    ordered = sorted(buckets.values(), key=lambda b: b.key, reverse=True)
    return ordered[: max(0, min(limit, MAX_BUCKETS))]

"""History queries over the energy log."""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from intelliwatt.schemas.energy import HistoryRecord, HistoryResponse
from intelliwatt.services.reading_service import ReadingService
from intelliwatt.services.rollup import MAX_BUCKETS, RollupBucket, normalize_mode, rollup

logger = logging.getLogger(__name__)


def to_records(buckets: list[RollupBucket]) -> list[HistoryRecord]:
    return [HistoryRecord(date=b.key, kwh=b.total_kwh, cost=b.total_cost) for b in buckets]


class HistoryService:
    def __init__(self, reading_service: ReadingService):
        self._readings = reading_service

    async def get_history(
        self, db: AsyncSession, mode: str | None, rate: float | None = None
    ) -> HistoryResponse:
        """Rollup of the whole energy log for ``mode``, most recent bucket first."""
        mode = normalize_mode(mode)
        entries = await self._readings.list_energy_logs(db)
        buckets = rollup(entries, mode=mode, rate=rate, limit=MAX_BUCKETS)
        logger.debug("History %s: %d entries -> %d buckets", mode, len(entries), len(buckets))

        return HistoryResponse(
            mode=mode,
            rate=rate,
            records=to_records(buckets),
            total_kwh=sum(b.total_kwh for b in buckets),
            total_cost=sum(b.total_cost for b in buckets),
        )

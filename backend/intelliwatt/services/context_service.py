"""Composes the read model behind the dashboard and the chat assistant."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from intelliwatt.schemas.ai import AIContext
from intelliwatt.schemas.energy import LatestReading
from intelliwatt.services.appliance_service import ApplianceService
from intelliwatt.services.balance_service import BalanceService
from intelliwatt.services.history_service import to_records
from intelliwatt.services.reading_service import ReadingService
from intelliwatt.services.rollup import rollup

CONTEXT_HISTORY_DAYS = 7


class ContextService:
    """Latest reading + balance + appliances + last seven daily buckets."""

    def __init__(
        self,
        reading_service: ReadingService,
        appliance_service: ApplianceService,
        balance_service: BalanceService,
    ):
        self._readings = reading_service
        self._appliances = appliance_service
        self._balance = balance_service

    async def compose(self, db: AsyncSession) -> AIContext:
        """Build a fresh snapshot. Store errors propagate as StoreUnavailable."""
        reading = await self._readings.latest_reading(db)
        appliances = await self._appliances.list_appliances(db)
        entries = await self._readings.list_energy_logs(db)

        if reading is None:
            latest = LatestReading()
        else:
            latest = LatestReading(
                total_power_w=reading.total_power_w,
                temperature_c=reading.temperature_c,
                updated_at=reading.updated_at,
            )

        # Days without entries are absent, not zero-filled.
        buckets = rollup(entries, mode="daily", rate=None, limit=CONTEXT_HISTORY_DAYS)

        return AIContext(
            latest=latest,
            balance=self._balance.get_snapshot(),
            appliances=appliances,
            history_last_7_days=to_records(buckets),
        )

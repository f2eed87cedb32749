"""Reading ingest and energy-log queries."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from intelliwatt.config import settings
from intelliwatt.exceptions import StoreUnavailable, ValidationError
from intelliwatt.models.energy import EnergyLog
from intelliwatt.models.reading import Reading
from intelliwatt.utils.numbers import is_finite_number

logger = logging.getLogger(__name__)


def compute_energy(power_w: float, seconds: float, rate: float) -> tuple[float, float]:
    """Return (kWh, cost) for a constant load held for ``seconds``."""
    kwh = (power_w / 1000.0) * (seconds / 3600.0)
    return kwh, kwh * rate


def _utc_naive(timestamp: datetime | None) -> datetime:
    if timestamp is None:
        timestamp = datetime.now(timezone.utc)
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(timezone.utc).replace(tzinfo=None)
    return timestamp


class ReadingService:
    """Stores readings and the energy-log entry each one derives."""

    def __init__(
        self,
        sample_interval_seconds: float | None = None,
        rate_per_kwh: float | None = None,
    ):
        self.sample_interval_seconds = (
            sample_interval_seconds
            if sample_interval_seconds is not None
            else settings.energy_sample_interval_seconds
        )
        self.rate_per_kwh = (
            rate_per_kwh if rate_per_kwh is not None else settings.energy_default_rate_per_kwh
        )

    async def insert_reading(
        self,
        db: AsyncSession,
        power_w: float | str | None,
        temperature_c: float | str | None,
        timestamp: datetime | None = None,
    ) -> Reading:
        """Persist a reading plus its energy-log entry in one transaction."""
        if not is_finite_number(power_w) or not is_finite_number(temperature_c):
            raise ValidationError("Invalid power_w or temperature_c")
        power_w = float(power_w)
        temperature_c = float(temperature_c)
        if power_w < 0:
            raise ValidationError("power_w must not be negative")

        now = _utc_naive(timestamp)
        reading = Reading(
            total_power_w=power_w,
            temperature_c=temperature_c,
            created_at=now,
            updated_at=now,
        )
        kwh, cost = compute_energy(power_w, self.sample_interval_seconds, self.rate_per_kwh)

        try:
            db.add(reading)
            self.append_energy_log(db, kwh, cost, now)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Failed to store reading: %s", e)
            raise StoreUnavailable("Could not store reading") from e

        # Already committed; a failed reload keeps the in-memory values.
        try:
            await db.refresh(reading)
        except SQLAlchemyError as e:
            logger.warning("Stored reading but could not reload it: %s", e)

        logger.debug("Stored reading %s: %.1f W, %.1f °C -> %.5f kWh", reading.id, power_w, temperature_c, kwh)
        return reading

    def append_energy_log(
        self, db: AsyncSession, kwh: float, cost: float, timestamp: datetime
    ) -> EnergyLog:
        """Stage an energy-log entry; the caller owns the commit."""
        entry = EnergyLog(kwh=kwh, cost=cost, created_at=_utc_naive(timestamp))
        db.add(entry)
        return entry

    async def latest_reading(self, db: AsyncSession) -> Reading | None:
        try:
            result = await db.execute(select(Reading).order_by(Reading.id.desc()).limit(1))
        except SQLAlchemyError as e:
            logger.error("Latest reading query failed: %s", e)
            raise StoreUnavailable("Could not load latest reading") from e
        return result.scalar_one_or_none()

    async def list_energy_logs(self, db: AsyncSession) -> list[EnergyLog]:
        """All energy-log entries, oldest first."""
        try:
            result = await db.execute(
                select(EnergyLog).order_by(EnergyLog.created_at, EnergyLog.id)
            )
        except SQLAlchemyError as e:
            logger.error("Energy log query failed: %s", e)
            raise StoreUnavailable("Could not load energy logs") from e
        return list(result.scalars().all())

    async def count_energy_logs(self, db: AsyncSession) -> int:
        try:
            result = await db.execute(select(func.count()).select_from(EnergyLog))
        except SQLAlchemyError as e:
            raise StoreUnavailable("Could not count energy logs") from e
        return result.scalar() or 0

"""Appliance storage and power classification."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from intelliwatt.exceptions import StoreUnavailable, ValidationError
from intelliwatt.models.appliance import Appliance
from intelliwatt.schemas.appliance import ApplianceOut
from intelliwatt.utils.numbers import coerce_number, is_finite_number

logger = logging.getLogger(__name__)

# Power thresholds in watts
THRESHOLD_HIGH = 1000.0
THRESHOLD_MEDIUM = 200.0

HIGH_POWER = "High Power"
MEDIUM_POWER = "Medium Power"
LOW_POWER = "Low Power"


def power_category(power_w: float) -> str:
    """Classify an appliance by its rated wattage."""
    power_w = coerce_number(power_w)
    if power_w >= THRESHOLD_HIGH:
        return HIGH_POWER
    elif power_w >= THRESHOLD_MEDIUM:
        return MEDIUM_POWER
    return LOW_POWER


def to_out(appliance: Appliance) -> ApplianceOut:
    return ApplianceOut(
        id=appliance.id,
        name=appliance.name,
        power_w=appliance.power_w,
        created_at=appliance.created_at,
        category=power_category(appliance.power_w),
    )


class ApplianceService:
    """CRUD for saved appliances; category is attached on every read."""

    async def list_appliances(self, db: AsyncSession) -> list[ApplianceOut]:
        """Saved appliances, most recent first."""
        try:
            result = await db.execute(select(Appliance).order_by(Appliance.id.desc()))
        except SQLAlchemyError as e:
            logger.error("Appliance query failed: %s", e)
            raise StoreUnavailable("Could not load appliances") from e
        return [to_out(a) for a in result.scalars().all()]

    async def create_appliance(
        self, db: AsyncSession, name: str | None, power_w: float | str | None
    ) -> ApplianceOut:
        name = (name or "").strip()
        if not name or not is_finite_number(power_w):
            raise ValidationError("Missing/invalid fields (name, power_w)")
        if float(power_w) < 0:
            raise ValidationError("power_w must not be negative")

        appliance = Appliance(
            name=name,
            power_w=float(power_w),
            created_at=datetime.now(timezone.utc).replace(tzinfo=None),
        )
        try:
            db.add(appliance)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error("Failed to store appliance: %s", e)
            raise StoreUnavailable("Could not store appliance") from e

        try:
            await db.refresh(appliance)
        except SQLAlchemyError as e:
            logger.warning("Stored appliance but could not reload it: %s", e)

        logger.info("Added appliance %s (%s W)", appliance.name, appliance.power_w)
        return to_out(appliance)

    async def delete_appliance(self, db: AsyncSession, appliance_id: int) -> bool:
        """Delete by id. Returns False when no such appliance exists."""
        try:
            result = await db.execute(delete(Appliance).where(Appliance.id == appliance_id))
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            raise StoreUnavailable("Could not delete appliance") from e
        return bool(result.rowcount)

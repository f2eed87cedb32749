"""Business logic services — registry wired up at startup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from intelliwatt.config import settings

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from intelliwatt.services.appliance_service import ApplianceService
    from intelliwatt.services.balance_service import BalanceService
    from intelliwatt.services.context_service import ContextService
    from intelliwatt.services.history_service import HistoryService
    from intelliwatt.services.reading_service import ReadingService

logger = logging.getLogger(__name__)

_reading_service: ReadingService | None = None
_appliance_service: ApplianceService | None = None
_balance_service: BalanceService | None = None
_history_service: HistoryService | None = None
_context_service: ContextService | None = None


async def init_services(db_session: AsyncSession | None = None) -> None:
    """Create and wire up the stateless service objects."""
    global _reading_service, _appliance_service, _balance_service
    global _history_service, _context_service

    from intelliwatt.services.appliance_service import ApplianceService
    from intelliwatt.services.balance_service import BalanceService
    from intelliwatt.services.context_service import ContextService
    from intelliwatt.services.history_service import HistoryService
    from intelliwatt.services.reading_service import ReadingService

    _reading_service = ReadingService(
        sample_interval_seconds=settings.energy_sample_interval_seconds,
        rate_per_kwh=settings.energy_default_rate_per_kwh,
    )
    _appliance_service = ApplianceService()
    _balance_service = BalanceService(
        prepaid_balance=settings.balance_prepaid,
        low_threshold=settings.balance_low_threshold,
    )
    _history_service = HistoryService(_reading_service)
    _context_service = ContextService(_reading_service, _appliance_service, _balance_service)

    if db_session is not None:
        count = await _reading_service.count_energy_logs(db_session)
        logger.info("Energy log holds %d entries", count)
    logger.info(
        "Services initialized — %ds sample interval, %s%.2f/kWh",
        settings.energy_sample_interval_seconds,
        settings.currency_symbol,
        settings.energy_default_rate_per_kwh,
    )


def _require(service):
    if service is None:
        raise RuntimeError("Services not initialized — call init_services() first")
    return service


def get_reading_service() -> ReadingService:
    return _require(_reading_service)


def get_appliance_service() -> ApplianceService:
    return _require(_appliance_service)


def get_balance_service() -> BalanceService:
    return _require(_balance_service)


def get_history_service() -> HistoryService:
    return _require(_history_service)


def get_context_service() -> ContextService:
    return _require(_context_service)

"""Energy history and cost estimate routes."""

import math

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from intelliwatt.config import settings
from intelliwatt.database import get_db
from intelliwatt.exceptions import StoreUnavailable, ValidationError
from intelliwatt.schemas.energy import CostEstimate, HistoryResponse
from intelliwatt.services import get_history_service
from intelliwatt.services.reading_service import compute_energy

router = APIRouter()


@router.get("/history", response_model=HistoryResponse)
async def energy_history(
    mode: str = "daily",
    rate: float | None = None,
    db: AsyncSession = Depends(get_db),
):
    """Daily / weekly / monthly energy buckets, most recent first.

    Without ``rate`` each bucket's cost is the cost recorded at ingest time;
    with ``rate`` it is recomputed from the bucket's kWh.
    """
    history = get_history_service()
    try:
        return await history.get_history(db, mode, rate)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StoreUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.get("/cost/estimate", response_model=CostEstimate)
async def cost_estimate(power_w: float, hours: float = 1.0, rate: float | None = None):
    """Cost of holding ``power_w`` for ``hours`` at ``rate`` (default tariff if omitted)."""
    if rate is None:
        rate = settings.energy_default_rate_per_kwh
    if not all(math.isfinite(v) for v in (power_w, hours, rate)) or power_w < 0 or hours < 0:
        raise HTTPException(status_code=400, detail="Invalid power_w, hours or rate")
    kwh, cost = compute_energy(power_w, hours * 3600.0, rate)
    return CostEstimate(power_w=power_w, hours=hours, rate=rate, kwh=kwh, cost=cost)

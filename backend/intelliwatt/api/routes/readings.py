"""Meter reading ingest and latest-reading routes."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from intelliwatt.database import get_db
from intelliwatt.exceptions import StoreUnavailable, ValidationError
from intelliwatt.schemas.energy import LatestReading, ReadingCreate, ReadingSaved
from intelliwatt.services import get_reading_service

router = APIRouter()


@router.post("", response_model=ReadingSaved)
async def post_reading(body: ReadingCreate, db: AsyncSession = Depends(get_db)):
    """Store a power/temperature sample and its energy-log entry."""
    readings = get_reading_service()
    try:
        reading = await readings.insert_reading(db, body.power_w, body.temperature_c)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StoreUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    return ReadingSaved(
        latest=LatestReading(
            total_power_w=reading.total_power_w,
            temperature_c=reading.temperature_c,
            updated_at=reading.updated_at,
        )
    )


@router.get("/latest", response_model=LatestReading)
async def latest_reading(db: AsyncSession = Depends(get_db)):
    """Most recent reading, or zeros when nothing has been posted yet."""
    readings = get_reading_service()
    try:
        reading = await readings.latest_reading(db)
    except StoreUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    if reading is None:
        return LatestReading()
    return LatestReading(
        total_power_w=reading.total_power_w,
        temperature_c=reading.temperature_c,
        updated_at=reading.updated_at,
    )

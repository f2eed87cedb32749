"""Appliance management routes."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from intelliwatt.database import get_db
from intelliwatt.exceptions import StoreUnavailable, ValidationError
from intelliwatt.schemas.appliance import (
    ApplianceCreate,
    ApplianceCreated,
    ApplianceDeleted,
    ApplianceOut,
)
from intelliwatt.services import get_appliance_service

router = APIRouter()


@router.get("", response_model=list[ApplianceOut])
async def list_appliances(db: AsyncSession = Depends(get_db)):
    """Saved appliances with their power category, newest first."""
    appliances = get_appliance_service()
    try:
        return await appliances.list_appliances(db)
    except StoreUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.post("", response_model=ApplianceCreated, status_code=201)
async def create_appliance(body: ApplianceCreate, db: AsyncSession = Depends(get_db)):
    appliances = get_appliance_service()
    try:
        created = await appliances.create_appliance(db, body.name, body.power_w)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StoreUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    return ApplianceCreated(appliance=created)


@router.delete("/{appliance_id}", response_model=ApplianceDeleted)
async def delete_appliance(appliance_id: int, db: AsyncSession = Depends(get_db)):
    appliances = get_appliance_service()
    try:
        deleted = await appliances.delete_appliance(db, appliance_id)
    except StoreUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    if not deleted:
        raise HTTPException(status_code=404, detail="Appliance not found")
    return ApplianceDeleted(message="Deleted", deleted=True)

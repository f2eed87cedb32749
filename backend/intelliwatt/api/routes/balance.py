"""Prepaid balance route."""

from fastapi import APIRouter

from intelliwatt.schemas.balance import BalanceSnapshot
from intelliwatt.services import get_balance_service

router = APIRouter()


@router.get("", response_model=BalanceSnapshot)
async def get_balance():
    return get_balance_service().get_snapshot()

"""API route registration."""

from fastapi import APIRouter

from intelliwatt.api.routes import ai, appliances, balance, health, history, readings

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(readings.router, prefix="/readings", tags=["readings"])
api_router.include_router(balance.router, prefix="/balance", tags=["balance"])
api_router.include_router(appliances.router, prefix="/appliances", tags=["appliances"])
api_router.include_router(history.router, tags=["history"])
api_router.include_router(ai.router, prefix="/ai", tags=["ai"])

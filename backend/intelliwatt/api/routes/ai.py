"""Chat assistant routes — context snapshot and rule-based answers."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from intelliwatt.config import settings
from intelliwatt.database import get_db
from intelliwatt.exceptions import StoreUnavailable
from intelliwatt.schemas.ai import AIContext, AskRequest, AskResponse
from intelliwatt.services import get_context_service
from intelliwatt.services.answer import generate_answer

router = APIRouter()


@router.get("/context", response_model=AIContext)
async def ai_context(db: AsyncSession = Depends(get_db)):
    """Latest reading, balance, appliances and the last seven daily buckets."""
    context = get_context_service()
    try:
        return await context.compose(db)
    except StoreUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.post("/answer", response_model=AskResponse)
async def ai_answer(body: AskRequest, db: AsyncSession = Depends(get_db)):
    """Answer a question from a freshly composed context."""
    context = get_context_service()
    try:
        ctx = await context.compose(db)
    except StoreUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    question = body.question or ""
    answer = generate_answer(
        question,
        ctx,
        rate=settings.energy_default_rate_per_kwh,
        currency=settings.currency_symbol,
    )
    return AskResponse(question=question, answer=answer)

"""Reading, history and cost schemas."""

from datetime import datetime

from pydantic import BaseModel, field_serializer, field_validator

from intelliwatt.utils.numbers import coerce_number


class ReadingCreate(BaseModel):
    """Sample posted by the meter. Values stay loosely typed; the ingest service validates them."""
    power_w: float | str | None = None
    temperature_c: float | str | None = None


class LatestReading(BaseModel):
    """Most recent reading, or the zero placeholder when none exists."""
    total_power_w: float = 0.0
    temperature_c: float = 0.0
    updated_at: datetime | None = None

    @field_validator("total_power_w", "temperature_c", mode="before")
    @classmethod
    def _coerce(cls, value):
        return coerce_number(value)


class ReadingSaved(BaseModel):
    message: str = "Reading saved"
    latest: LatestReading


class HistoryRecord(BaseModel):
    """One rollup bucket as presented to clients."""
    date: str
    kwh: float = 0.0
    cost: float = 0.0

    @field_validator("kwh", "cost", mode="before")
    @classmethod
    def _coerce(cls, value):
        return coerce_number(value)

    @field_serializer("kwh", "cost")
    def _round(self, value: float) -> float:
        return round(value, 2)


class HistoryResponse(BaseModel):
    mode: str
    rate: float | None = None
    records: list[HistoryRecord] = []
    total_kwh: float = 0.0
    total_cost: float = 0.0

    @field_serializer("total_kwh", "total_cost")
    def _round(self, value: float) -> float:
        return round(value, 2)


class CostEstimate(BaseModel):
    """Cost of drawing a constant load for a number of hours."""
    power_w: float
    hours: float
    rate: float
    kwh: float
    cost: float

    @field_serializer("kwh", "cost")
    def _round(self, value: float) -> float:
        return round(value, 2)

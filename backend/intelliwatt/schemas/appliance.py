"""Appliance schemas."""

from datetime import datetime

from pydantic import BaseModel, field_validator

from intelliwatt.utils.numbers import coerce_number


class ApplianceCreate(BaseModel):
    name: str = ""
    power_w: float | str | None = None


class ApplianceOut(BaseModel):
    """Saved appliance with its derived power category."""
    id: int | None = None
    name: str = ""
    power_w: float = 0.0
    created_at: datetime | None = None
    category: str = "Low Power"

    @field_validator("power_w", mode="before")
    @classmethod
    def _coerce(cls, value):
        return coerce_number(value)


class ApplianceCreated(BaseModel):
    message: str = "Appliance added"
    appliance: ApplianceOut


class ApplianceDeleted(BaseModel):
    message: str
    deleted: bool

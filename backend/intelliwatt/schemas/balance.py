"""Prepaid balance schema."""

from pydantic import BaseModel, field_validator

from intelliwatt.utils.numbers import coerce_number


class BalanceSnapshot(BaseModel):
    prepaid_balance: float = 0.0
    low_threshold: float = 0.0

    @field_validator("prepaid_balance", "low_threshold", mode="before")
    @classmethod
    def _coerce(cls, value):
        return coerce_number(value)

    @property
    def is_low(self) -> bool:
        return self.prepaid_balance <= self.low_threshold

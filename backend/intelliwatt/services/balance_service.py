"""Prepaid balance provider."""

from __future__ import annotations

from intelliwatt.config import settings
from intelliwatt.schemas.balance import BalanceSnapshot


class BalanceService:
    """Static balance provider backed by configuration.

    Values are passed in at construction; nothing here mutates shared state.
    """

    def __init__(
        self,
        prepaid_balance: float | None = None,
        low_threshold: float | None = None,
    ):
        self._prepaid_balance = (
            prepaid_balance if prepaid_balance is not None else settings.balance_prepaid
        )
        self._low_threshold = (
            low_threshold if low_threshold is not None else settings.balance_low_threshold
        )

    def get_snapshot(self) -> BalanceSnapshot:
        return BalanceSnapshot(
            prepaid_balance=self._prepaid_balance,
            low_threshold=self._low_threshold,
        )

"""Chat assistant schemas — context read model and question/answer."""

from pydantic import BaseModel, Field

from intelliwatt.schemas.appliance import ApplianceOut
from intelliwatt.schemas.balance import BalanceSnapshot
from intelliwatt.schemas.energy import HistoryRecord, LatestReading


class AIContext(BaseModel):
    """Snapshot consumed by the dashboard and the answer generator.

    Every field has a default so consumers never branch on a missing key.
    """
    latest: LatestReading = Field(default_factory=LatestReading)
    balance: BalanceSnapshot = Field(default_factory=BalanceSnapshot)
    appliances: list[ApplianceOut] = []
    history_last_7_days: list[HistoryRecord] = []


class AskRequest(BaseModel):
    question: str | None = ""


class AskResponse(BaseModel):
    question: str
    answer: str

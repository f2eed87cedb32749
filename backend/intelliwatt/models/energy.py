"""Energy log model — append-only ledger derived from readings."""

from datetime import datetime

from sqlalchemy import DateTime, Float, Integer
from sqlalchemy.orm import Mapped, mapped_column

from intelliwatt.models.base import Base


class EnergyLog(Base):
    """kWh and cost covered by one reading's sample interval."""
    __tablename__ = "energy_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    kwh: Mapped[float] = mapped_column(Float, nullable=False)
    cost: Mapped[float] = mapped_column(Float, nullable=False)  # at the rate in force at ingest
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)

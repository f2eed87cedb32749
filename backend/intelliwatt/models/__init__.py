"""SQLAlchemy ORM models for IntelliWatt."""

from intelliwatt.models.base import Base
from intelliwatt.models.reading import Reading
from intelliwatt.models.energy import EnergyLog
from intelliwatt.models.appliance import Appliance

__all__ = [
    "Base",
    "Reading",
    "EnergyLog",
    "Appliance",
]

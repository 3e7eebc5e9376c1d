from sqlalchemy import Column, String, Date, Time, Enum

from echo.core.database import Base
from echo.core.types import IsoTimestamp
from echo.mood.schemas import EnergyLevel, MoodLevel


class MoodEnergyEntry(Base):
    __tablename__ = "mood_energy_entries"

    id = Column(String(36), primary_key=True)

    mood_level = Column(Enum(MoodLevel, native_enum=False, length=16), nullable=False)
    energy_level = Column(Enum(EnergyLevel, native_enum=False, length=16), nullable=False)
    note = Column(String, nullable=False, default="")
    date = Column(Date, index=True, nullable=False)
    time = Column(Time, nullable=False)

    created_at = Column(IsoTimestamp, nullable=False)

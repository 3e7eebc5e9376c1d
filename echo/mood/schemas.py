import datetime as _dt
from enum import Enum
from typing import Optional
from pydantic import BaseModel


class BaseSchema(BaseModel):
    class Config:
        from_attributes = True


class MoodLevel(str, Enum):
    VERY_BAD = "VERY_BAD"
    BAD = "BAD"
    NEUTRAL = "NEUTRAL"
    GOOD = "GOOD"
    VERY_GOOD = "VERY_GOOD"

    @property
    def icon(self) -> str:
        return _MOOD_DISPLAY[self][0]

    @property
    def label(self) -> str:
        return _MOOD_DISPLAY[self][1]


class EnergyLevel(str, Enum):
    VERY_LOW = "VERY_LOW"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    VERY_HIGH = "VERY_HIGH"

    @property
    def icon(self) -> str:
        return _ENERGY_DISPLAY[self][0]

    @property
    def label(self) -> str:
        return _ENERGY_DISPLAY[self][1]


_MOOD_DISPLAY = {
    MoodLevel.VERY_BAD: ("\U0001F61E", "Very Bad"),
    MoodLevel.BAD: ("\U0001F614", "Bad"),
    MoodLevel.NEUTRAL: ("\U0001F610", "Neutral"),
    MoodLevel.GOOD: ("\U0001F642", "Good"),
    MoodLevel.VERY_GOOD: ("\U0001F604", "Very Good"),
}

_ENERGY_DISPLAY = {
    EnergyLevel.VERY_LOW: ("\U0001F50B" * 1, "Very Low"),
    EnergyLevel.LOW: ("\U0001F50B" * 2, "Low"),
    EnergyLevel.MEDIUM: ("\U0001F50B" * 3, "Medium"),
    EnergyLevel.HIGH: ("\U0001F50B" * 4, "High"),
    EnergyLevel.VERY_HIGH: ("\U0001F50B" * 5, "Very High"),
}


class MoodEnergyEntryBase(BaseSchema):
    id: str
    mood_level: MoodLevel
    energy_level: EnergyLevel
    note: str = ""
    date: _dt.date
    time: _dt.time
    created_at: _dt.datetime


class MoodEnergyEntryCreate(BaseSchema):
    id: Optional[str] = None
    mood_level: MoodLevel
    energy_level: EnergyLevel
    note: str = ""
    date: _dt.date
    time: _dt.time


class MoodEnergyEntryResponse(MoodEnergyEntryBase):
    pass

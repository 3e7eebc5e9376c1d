from datetime import datetime
from enum import Enum
from pydantic import BaseModel


class ReflectionType(str, Enum):
    GOAL_ASSISTANCE = "GOAL_ASSISTANCE"  # Breaking a goal down into steps
    NARRATIVE = "NARRATIVE"  # What Echo is "really" up to
    MOTIVATION = "MOTIVATION"  # Encouragement when stuck
    REFLECTION = "REFLECTION"  # End-of-day reflection


class ReflectionBase(BaseModel):
    id: str
    message: str
    type: ReflectionType
    created_at: datetime


class ReflectionCreate(BaseModel):
    message: str
    type: ReflectionType


class ReflectionResponse(ReflectionBase):
    pass

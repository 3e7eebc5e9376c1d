from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel


class BaseSchema(BaseModel):
    class Config:
        from_attributes = True


class GoalBase(BaseSchema):
    id: str
    title: str
    description: str = ""
    start_date: date
    end_date: Optional[date] = None
    is_completed: bool = False
    created_at: datetime
    updated_at: datetime


class GoalCreate(BaseSchema):
    id: Optional[str] = None
    title: str
    description: str = ""
    start_date: date
    end_date: Optional[date] = None
    is_completed: bool = False


class GoalUpdate(BaseSchema):
    """Whole-row replacement: every field is written."""
    title: str
    description: str = ""
    start_date: date
    end_date: Optional[date] = None
    is_completed: bool = False


class GoalCompletion(BaseSchema):
    is_completed: bool


class GoalResponse(GoalBase):
    pass

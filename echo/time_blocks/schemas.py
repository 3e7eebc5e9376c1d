import datetime as _dt
from typing import Optional
from pydantic import BaseModel


class BaseSchema(BaseModel):
    class Config:
        from_attributes = True


class TimeBlockBase(BaseSchema):
    id: str
    task_id: str
    date: _dt.date
    start_time: _dt.time
    end_time: _dt.time
    is_completed: bool = False


class TimeBlockSlot(BaseSchema):
    """When a block happens, without the task it belongs to."""
    date: _dt.date
    start_time: _dt.time
    end_time: _dt.time


class TimeBlockCreate(TimeBlockSlot):
    id: Optional[str] = None
    task_id: str
    is_completed: bool = False


class TimeBlockUpdate(TimeBlockSlot):
    """Whole-row replacement: every field is written."""
    task_id: str
    is_completed: bool = False


class TimeBlockCompletion(BaseSchema):
    is_completed: bool


class TimeBlockResponse(TimeBlockBase):
    pass

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel

from echo.time_blocks.schemas import TimeBlockBase, TimeBlockSlot


class BaseSchema(BaseModel):
    class Config:
        from_attributes = True


class TaskPriority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class TaskBase(BaseSchema):
    id: str
    goal_id: str
    title: str
    description: str = ""
    is_completed: bool = False
    priority: TaskPriority = TaskPriority.MEDIUM
    created_at: datetime
    updated_at: datetime


class TaskCreate(BaseSchema):
    id: Optional[str] = None
    goal_id: str
    title: str
    description: str = ""
    is_completed: bool = False
    priority: TaskPriority = TaskPriority.MEDIUM


class TaskUpdate(BaseSchema):
    """Whole-row replacement: every field is written."""
    goal_id: str
    title: str
    description: str = ""
    is_completed: bool = False
    priority: TaskPriority = TaskPriority.MEDIUM


class TaskCompletion(BaseSchema):
    is_completed: bool


class TaskScheduleCreate(BaseSchema):
    """A task and, optionally, the block it is scheduled in; written together."""
    task: TaskCreate
    time_block: Optional[TimeBlockSlot] = None


class TaskResponse(TaskBase):
    pass


class TaskScheduleResponse(BaseSchema):
    task: TaskBase
    time_block: Optional[TimeBlockBase] = None

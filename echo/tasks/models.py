from sqlalchemy import Column, String, Enum

from echo.core.database import Base
from echo.core.types import IntegerBoolean, IsoTimestamp
from echo.tasks.schemas import TaskPriority


class Task(Base):
    __tablename__ = "tasks"

    id = Column(String(36), primary_key=True)
    # Plain column, no foreign key constraint: deleting a goal keeps its tasks.
    goal_id = Column(String(36), index=True, nullable=False)

    title = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    is_completed = Column(IntegerBoolean, nullable=False, default=False)
    priority = Column(
        Enum(TaskPriority, native_enum=False, length=16),
        nullable=False,
        default=TaskPriority.MEDIUM,
    )

    created_at = Column(IsoTimestamp, nullable=False)
    updated_at = Column(IsoTimestamp, nullable=False)

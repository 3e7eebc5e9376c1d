from typing import Optional, Sequence
from pydantic import BaseModel

from echo.tasks.schemas import TaskBase
from echo.time_blocks.schemas import TimeBlockBase

IDLE_MESSAGE = "Echo is ready to help you with your tasks"


class FocusStatus(BaseModel):
    task: Optional[TaskBase] = None
    time_block: Optional[TimeBlockBase] = None
    message: str


def current_focus(tasks: Sequence[TaskBase], time_blocks: Sequence[TimeBlockBase]) -> FocusStatus:
    """Picks the first incomplete task and, if scheduled, its first open time block."""
    task = next((t for t in tasks if not t.is_completed), None)
    if task is None:
        return FocusStatus(message=IDLE_MESSAGE)

    block = next((b for b in time_blocks if b.task_id == task.id and not b.is_completed), None)
    return FocusStatus(task=task, time_block=block, message=f"Echo is focused on {task.title}")

from uuid import uuid4
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from echo.core.errors import EntityNotFoundError
from echo.core.types import next_timestamp, utcnow
from echo.tasks.models import Task
from echo.tasks.schemas import TaskCreate, TaskUpdate
from echo.time_blocks.db import build_time_block
from echo.time_blocks.models import TimeBlock
from echo.time_blocks.schemas import TimeBlockCreate, TimeBlockSlot


def build_task(task: TaskCreate) -> Task:
    now = utcnow()
    return Task(
        id=task.id or str(uuid4()),
        goal_id=task.goal_id,
        title=task.title,
        description=task.description,
        is_completed=task.is_completed,
        priority=task.priority,
        created_at=now,
        updated_at=now,
    )


def create_task(db: Session, task: TaskCreate) -> Task:
    """
    Inserts a new task. The goal id is stored as given and not checked.

    Args:
        db (Session): SQLAlchemy session.
        task (TaskCreate): Input data for the task.

    Returns:
        Task: The created task.

    Raises:
        IntegrityError: If a task with the same id already exists.
    """
    new_task = build_task(task)
    db.add(new_task)
    db.commit()
    db.refresh(new_task)
    return new_task


def create_task_with_time_block(
    db: Session, task: TaskCreate, slot: TimeBlockSlot
) -> Tuple[Task, TimeBlock]:
    """
    Inserts a task and its first time block in one transaction.

    Either both rows are committed or neither is.

    Args:
        db (Session): SQLAlchemy session.
        task (TaskCreate): Input data for the task.
        slot (TimeBlockSlot): Date and times of the block.

    Returns:
        Tuple[Task, TimeBlock]: The created rows.
    """
    new_task = build_task(task)
    new_block = build_time_block(
        TimeBlockCreate(
            task_id=new_task.id,
            date=slot.date,
            start_time=slot.start_time,
            end_time=slot.end_time,
        )
    )
    try:
        db.add(new_task)
        db.add(new_block)
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(new_task)
    db.refresh(new_block)
    return new_task, new_block


def get_task(db: Session, task_id: str) -> Optional[Task]:
    return db.query(Task).filter(Task.id == task_id).first()


def get_all_tasks(db: Session) -> List[Task]:
    return db.query(Task).order_by(Task.created_at, Task.id).all()


def get_tasks_by_goal(db: Session, goal_id: str) -> List[Task]:
    """
    Retrieves the tasks that belong to one goal.

    Args:
        db (Session): SQLAlchemy session.
        goal_id (str): ID of the owning goal.

    Returns:
        List[Task]: Tasks of that goal, oldest first.
    """
    return db.query(Task).filter(
        Task.goal_id == goal_id
    ).order_by(Task.created_at, Task.id).all()


def _require_task(db: Session, task_id: str) -> Task:
    task = get_task(db, task_id)
    if task is None:
        raise EntityNotFoundError("Task", task_id)
    return task


def update_task(db: Session, task_id: str, updated_task: TaskUpdate) -> Task:
    """
    Replaces every editable column of a task and stamps ``updated_at``.

    Raises:
        EntityNotFoundError: If no task has this ID.
    """
    task = _require_task(db, task_id)
    for field, value in updated_task.model_dump().items():
        setattr(task, field, value)
    task.updated_at = next_timestamp(task.updated_at)
    db.commit()
    db.refresh(task)
    return task


def _set_task_completion(db: Session, task_id: str, is_completed: bool) -> Task:
    task = _require_task(db, task_id)
    task.is_completed = is_completed
    task.updated_at = next_timestamp(task.updated_at)
    db.commit()
    db.refresh(task)
    return task


def mark_task_completed(db: Session, task_id: str) -> Task:
    return _set_task_completion(db, task_id, True)


def mark_task_incomplete(db: Session, task_id: str) -> Task:
    return _set_task_completion(db, task_id, False)


def delete_task(db: Session, task_id: str) -> Task:
    """
    Deletes a single task by ID. Its time blocks are left in place.

    Raises:
        EntityNotFoundError: If no task has this ID.
    """
    task = _require_task(db, task_id)
    db.delete(task)
    db.commit()
    return task

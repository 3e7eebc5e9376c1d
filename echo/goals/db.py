from uuid import uuid4
from typing import List, Optional

from sqlalchemy.orm import Session

from echo.core.errors import EntityNotFoundError
from echo.core.types import next_timestamp, utcnow
from echo.goals.models import Goal
from echo.goals.schemas import GoalCreate, GoalUpdate


def build_goal(goal: GoalCreate) -> Goal:
    now = utcnow()
    return Goal(
        id=goal.id or str(uuid4()),
        title=goal.title,
        description=goal.description,
        start_date=goal.start_date,
        end_date=goal.end_date,
        is_completed=goal.is_completed,
        created_at=now,
        updated_at=now,
    )


def create_goal(db: Session, goal: GoalCreate) -> Goal:
    """
    Inserts a new goal.

    Args:
        db (Session): SQLAlchemy session.
        goal (GoalCreate): Input data for the goal. A fresh id is generated
            when none is supplied.

    Returns:
        Goal: The created goal row.

    Raises:
        IntegrityError: If a goal with the same id already exists.
    """
    new_goal = build_goal(goal)
    db.add(new_goal)
    db.commit()
    db.refresh(new_goal)
    return new_goal


def get_goal(db: Session, goal_id: str) -> Optional[Goal]:
    """
    Retrieves a goal by ID.

    Args:
        db (Session): SQLAlchemy session.
        goal_id (str): ID of the goal.

    Returns:
        Optional[Goal]: The goal if found, else None.
    """
    return db.query(Goal).filter(Goal.id == goal_id).first()


def get_all_goals(db: Session) -> List[Goal]:
    """
    Retrieves every goal, oldest first.

    Args:
        db (Session): SQLAlchemy session.

    Returns:
        List[Goal]: List of goals.
    """
    return db.query(Goal).order_by(Goal.created_at, Goal.id).all()


def _require_goal(db: Session, goal_id: str) -> Goal:
    goal = get_goal(db, goal_id)
    if goal is None:
        raise EntityNotFoundError("Goal", goal_id)
    return goal


def update_goal(db: Session, goal_id: str, updated_goal: GoalUpdate) -> Goal:
    """
    Replaces every editable column of a goal and stamps ``updated_at``.

    Args:
        db (Session): SQLAlchemy session.
        goal_id (str): ID of the goal to update.
        updated_goal (GoalUpdate): Full replacement payload.

    Returns:
        Goal: The updated goal.

    Raises:
        EntityNotFoundError: If no goal has this ID.
    """
    goal = _require_goal(db, goal_id)
    for field, value in updated_goal.model_dump().items():
        setattr(goal, field, value)
    goal.updated_at = next_timestamp(goal.updated_at)
    db.commit()
    db.refresh(goal)
    return goal


def _set_goal_completion(db: Session, goal_id: str, is_completed: bool) -> Goal:
    goal = _require_goal(db, goal_id)
    goal.is_completed = is_completed
    goal.updated_at = next_timestamp(goal.updated_at)
    db.commit()
    db.refresh(goal)
    return goal


def mark_goal_completed(db: Session, goal_id: str) -> Goal:
    return _set_goal_completion(db, goal_id, True)


def mark_goal_incomplete(db: Session, goal_id: str) -> Goal:
    return _set_goal_completion(db, goal_id, False)


def delete_goal(db: Session, goal_id: str) -> Goal:
    """
    Deletes a single goal by ID. Tasks that reference it are left in place.

    Args:
        db (Session): SQLAlchemy session.
        goal_id (str): ID of the goal.

    Returns:
        Goal: The deleted goal.

    Raises:
        EntityNotFoundError: If no goal has this ID.
    """
    goal = _require_goal(db, goal_id)
    db.delete(goal)
    db.commit()
    return goal

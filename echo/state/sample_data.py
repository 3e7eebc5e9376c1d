import datetime
import logging

from sqlalchemy.orm import Session

from echo.goals.db import build_goal
from echo.goals.schemas import GoalCreate
from echo.tasks.db import build_task
from echo.tasks.schemas import TaskCreate, TaskPriority
from echo.time_blocks.db import build_time_block
from echo.time_blocks.schemas import TimeBlockCreate

logger = logging.getLogger(__name__)

SAMPLE_TASKS = [
    # title, description, completed, priority, start, end
    ("Research competitors", "Analyze competitor products and features", True, TaskPriority.HIGH, "09:00", "10:30"),
    ("Draft project outline", "Create a detailed outline of the project scope", False, TaskPriority.HIGH, "11:00", "12:30"),
    ("Create mockups", "Design initial mockups for the client", False, TaskPriority.MEDIUM, "14:00", "16:00"),
]


def seed_sample_data(db: Session) -> str:
    """
    Writes one example goal with three tasks, each scheduled today.

    All rows go in a single commit.

    Returns:
        str: ID of the sample goal.
    """
    today = datetime.date.today()
    goal = build_goal(
        GoalCreate(
            title="Complete Project Proposal",
            description="Finish the project proposal for the client meeting",
            start_date=today,
        )
    )
    rows = [goal]
    for title, description, completed, priority, start, end in SAMPLE_TASKS:
        task = build_task(
            TaskCreate(
                goal_id=goal.id,
                title=title,
                description=description,
                is_completed=completed,
                priority=priority,
            )
        )
        block = build_time_block(
            TimeBlockCreate(
                task_id=task.id,
                date=today,
                start_time=datetime.time.fromisoformat(start),
                end_time=datetime.time.fromisoformat(end),
                is_completed=completed,
            )
        )
        rows.extend([task, block])

    try:
        db.add_all(rows)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info(f"Seeded sample goal {goal.id} with {len(SAMPLE_TASKS)} tasks")
    return goal.id

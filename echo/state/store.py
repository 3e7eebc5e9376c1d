"""
In-process state store that sits between the database and the presentation layer.

Every mutation is written through the data-access layer and then the whole
affected collection is reloaded and republished, so observers always see a
complete snapshot.
"""

import datetime
import logging
import threading
from typing import Callable, List, Tuple, Type
from uuid import uuid4

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from echo.core.config import SEED_SAMPLE_DATA
from echo.core.database import Database
from echo.core.types import utcnow
from echo.goals import db as goals_db
from echo.goals.schemas import GoalBase, GoalCreate, GoalUpdate
from echo.mood import db as mood_db
from echo.mood.schemas import MoodEnergyEntryBase, MoodEnergyEntryCreate
from echo.reflections.schemas import ReflectionBase, ReflectionCreate, ReflectionType
from echo.state.observable import ObservableState
from echo.state import sample_data
from echo.tasks import db as tasks_db
from echo.tasks.schemas import TaskBase, TaskCreate, TaskUpdate
from echo.time_blocks import db as time_blocks_db
from echo.time_blocks.schemas import TimeBlockBase, TimeBlockCreate, TimeBlockSlot, TimeBlockUpdate

logger = logging.getLogger(__name__)


class EchoStore:
    """
    Construct once at startup, call ``initialize()``, and ``close()`` at shutdown.

    The store assumes a single writer; the internal lock only serialises
    mutations so that a write and its reload are never interleaved.
    """

    def __init__(self, database: Database, seed_sample_data: bool = SEED_SAMPLE_DATA):
        self.database = database
        self.seed_sample_data = seed_sample_data
        self._lock = threading.RLock()

        self.goals: ObservableState[List[GoalBase]] = ObservableState("goals", [])
        self.tasks: ObservableState[List[TaskBase]] = ObservableState("tasks", [])
        self.time_blocks: ObservableState[List[TimeBlockBase]] = ObservableState("time_blocks", [])
        self.mood_energy_entries: ObservableState[List[MoodEnergyEntryBase]] = ObservableState(
            "mood_energy_entries", []
        )
        # Reflections are kept in memory only.
        self.reflections: ObservableState[List[ReflectionBase]] = ObservableState("reflections", [])

    # Lifecycle
    def initialize(self) -> None:
        """Creates the schema, seeds sample data into an empty store, then loads everything."""
        with self._lock:
            self.database.create_tables()
            if self.seed_sample_data:
                with self.database.session() as db:
                    if not goals_db.get_all_goals(db):
                        sample_data.seed_sample_data(db)
            self._load_all()

    def close(self) -> None:
        for state in (self.goals, self.tasks, self.time_blocks, self.mood_energy_entries, self.reflections):
            state.clear_subscribers()
        self.database.dispose()

    def __enter__(self) -> "EchoStore":
        self.initialize()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # Loading
    def _reload(self, state: ObservableState, loader: Callable[[Session], list], schema: Type[BaseModel]) -> None:
        try:
            with self.database.session() as db:
                snapshot = [schema.model_validate(row) for row in loader(db)]
        except SQLAlchemyError as e:
            logger.error(f"Reloading {state.name} failed, keeping the last snapshot: {e}")
            state.mark_stale(e)
            raise
        state.publish(snapshot)

    def _reload_goals(self) -> None:
        self._reload(self.goals, goals_db.get_all_goals, GoalBase)

    def _reload_tasks(self) -> None:
        self._reload(self.tasks, tasks_db.get_all_tasks, TaskBase)

    def _reload_time_blocks(self) -> None:
        self._reload(self.time_blocks, time_blocks_db.get_all_time_blocks, TimeBlockBase)

    def _reload_mood_energy_entries(self) -> None:
        self._reload(self.mood_energy_entries, mood_db.get_all_mood_energy_entries, MoodEnergyEntryBase)

    def _load_all(self) -> None:
        self._reload_goals()
        self._reload_tasks()
        self._reload_time_blocks()
        self._reload_mood_energy_entries()

    def reload(self) -> None:
        with self._lock:
            self._load_all()

    # Goals
    def add_goal(self, goal: GoalCreate) -> GoalBase:
        with self._lock:
            with self.database.session() as db:
                created = GoalBase.model_validate(goals_db.create_goal(db, goal))
            self._reload_goals()
        return created

    def update_goal(self, goal_id: str, goal: GoalUpdate) -> GoalBase:
        with self._lock:
            with self.database.session() as db:
                updated = GoalBase.model_validate(goals_db.update_goal(db, goal_id, goal))
            self._reload_goals()
        return updated

    def update_goal_completion(self, goal_id: str, is_completed: bool) -> GoalBase:
        mark = goals_db.mark_goal_completed if is_completed else goals_db.mark_goal_incomplete
        with self._lock:
            with self.database.session() as db:
                updated = GoalBase.model_validate(mark(db, goal_id))
            self._reload_goals()
        return updated

    def delete_goal(self, goal_id: str) -> GoalBase:
        """Deletes the goal only; its tasks stay in the task collection."""
        with self._lock:
            with self.database.session() as db:
                deleted = GoalBase.model_validate(goals_db.delete_goal(db, goal_id))
            self._reload_goals()
        return deleted

    # Tasks
    def add_task(self, task: TaskCreate) -> TaskBase:
        with self._lock:
            with self.database.session() as db:
                created = TaskBase.model_validate(tasks_db.create_task(db, task))
            self._reload_tasks()
        return created

    def add_task_with_time_block(self, task: TaskCreate, slot: TimeBlockSlot) -> Tuple[TaskBase, TimeBlockBase]:
        with self._lock:
            with self.database.session() as db:
                new_task, new_block = tasks_db.create_task_with_time_block(db, task, slot)
                created = (TaskBase.model_validate(new_task), TimeBlockBase.model_validate(new_block))
            self._reload_tasks()
            self._reload_time_blocks()
        return created

    def update_task(self, task_id: str, task: TaskUpdate) -> TaskBase:
        with self._lock:
            with self.database.session() as db:
                updated = TaskBase.model_validate(tasks_db.update_task(db, task_id, task))
            self._reload_tasks()
        return updated

    def update_task_completion(self, task_id: str, is_completed: bool) -> TaskBase:
        mark = tasks_db.mark_task_completed if is_completed else tasks_db.mark_task_incomplete
        with self._lock:
            with self.database.session() as db:
                updated = TaskBase.model_validate(mark(db, task_id))
            self._reload_tasks()
        return updated

    def delete_task(self, task_id: str) -> TaskBase:
        with self._lock:
            with self.database.session() as db:
                deleted = TaskBase.model_validate(tasks_db.delete_task(db, task_id))
            self._reload_tasks()
        return deleted

    def get_tasks_for_goal(self, goal_id: str) -> List[TaskBase]:
        with self.database.session() as db:
            return [TaskBase.model_validate(t) for t in tasks_db.get_tasks_by_goal(db, goal_id)]

    # Time blocks
    def add_time_block(self, time_block: TimeBlockCreate) -> TimeBlockBase:
        with self._lock:
            with self.database.session() as db:
                created = TimeBlockBase.model_validate(time_blocks_db.create_time_block(db, time_block))
            self._reload_time_blocks()
        return created

    def update_time_block(self, time_block_id: str, time_block: TimeBlockUpdate) -> TimeBlockBase:
        with self._lock:
            with self.database.session() as db:
                updated = TimeBlockBase.model_validate(
                    time_blocks_db.update_time_block(db, time_block_id, time_block)
                )
            self._reload_time_blocks()
        return updated

    def update_time_block_completion(self, time_block_id: str, is_completed: bool) -> TimeBlockBase:
        if is_completed:
            mark = time_blocks_db.mark_time_block_completed
        else:
            mark = time_blocks_db.mark_time_block_incomplete
        with self._lock:
            with self.database.session() as db:
                updated = TimeBlockBase.model_validate(mark(db, time_block_id))
            self._reload_time_blocks()
        return updated

    def delete_time_block(self, time_block_id: str) -> TimeBlockBase:
        with self._lock:
            with self.database.session() as db:
                deleted = TimeBlockBase.model_validate(time_blocks_db.delete_time_block(db, time_block_id))
            self._reload_time_blocks()
        return deleted

    def get_time_blocks_by_date(self, day: datetime.date) -> List[TimeBlockBase]:
        with self.database.session() as db:
            return [TimeBlockBase.model_validate(b) for b in time_blocks_db.get_time_blocks_by_date(db, day)]

    # Mood / energy
    def add_mood_energy_entry(self, entry: MoodEnergyEntryCreate) -> MoodEnergyEntryBase:
        with self._lock:
            with self.database.session() as db:
                created = MoodEnergyEntryBase.model_validate(mood_db.create_mood_energy_entry(db, entry))
            self._reload_mood_energy_entries()
        return created

    def delete_mood_energy_entry(self, entry_id: str) -> MoodEnergyEntryBase:
        with self._lock:
            with self.database.session() as db:
                deleted = MoodEnergyEntryBase.model_validate(mood_db.delete_mood_energy_entry(db, entry_id))
            self._reload_mood_energy_entries()
        return deleted

    def get_mood_energy_entries_by_date(self, day: datetime.date) -> List[MoodEnergyEntryBase]:
        with self.database.session() as db:
            return [
                MoodEnergyEntryBase.model_validate(e)
                for e in mood_db.get_mood_energy_entries_by_date(db, day)
            ]

    # Reflections
    def add_reflection(self, reflection: ReflectionCreate) -> ReflectionBase:
        created = ReflectionBase(
            id=str(uuid4()),
            message=reflection.message,
            type=reflection.type,
            created_at=utcnow(),
        )
        with self._lock:
            self.reflections.publish(self.reflections.value + [created])
        return created

    def get_all_reflections(self) -> List[ReflectionBase]:
        return list(self.reflections.value)

    def get_reflections_by_type(self, reflection_type: ReflectionType) -> List[ReflectionBase]:
        return [r for r in self.reflections.value if r.type == reflection_type]

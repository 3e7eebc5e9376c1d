from typing import List
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from echo.core.dependency import get_store
from echo.core.errors import EntityNotFoundError
from echo.goals.schemas import GoalCompletion, GoalCreate, GoalResponse, GoalUpdate
from echo.state.store import EchoStore
from echo.tasks.schemas import TaskResponse

router = APIRouter(prefix="/goals", tags=["Goals"])
logger = logging.getLogger(__name__)


@router.get(
    "",
    response_model=List[GoalResponse],
    summary="Get all goals",
    description="Retrieve every goal in the current snapshot, oldest first.",
    responses={
        200: {"description": "Goals retrieved successfully."},
    },
)
def read_goals_route(store: EchoStore = Depends(get_store)) -> List[GoalResponse]:
    return store.goals.value


@router.get(
    "/{goal_id}",
    response_model=GoalResponse,
    summary="Get a specific goal",
    description="Retrieve a specific goal by its unique ID.",
    responses={
        200: {"description": "Goal retrieved successfully."},
        404: {"description": "Goal not found."},
    },
)
def read_goal_route(goal_id: str, store: EchoStore = Depends(get_store)) -> GoalResponse:
    goal = next((g for g in store.goals.value if g.id == goal_id), None)
    if goal is None:
        raise HTTPException(status_code=404, detail="Goal not found")
    return goal


@router.get(
    "/{goal_id}/tasks",
    response_model=List[TaskResponse],
    summary="Get the tasks of a goal",
    description="Retrieve all tasks linked to the goal. Unknown goal IDs yield an empty list.",
    responses={
        200: {"description": "Tasks retrieved successfully."},
        500: {"description": "Failed to retrieve tasks."},
    },
)
def read_goal_tasks_route(goal_id: str, store: EchoStore = Depends(get_store)) -> List[TaskResponse]:
    try:
        return store.get_tasks_for_goal(goal_id)
    except SQLAlchemyError as e:
        logger.error(f"Failed to fetch tasks for goal {goal_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve tasks")


@router.post(
    "",
    response_model=GoalResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new goal",
    description="Create a new goal. An ID is generated when none is supplied.",
    responses={
        201: {"description": "Goal created successfully."},
        409: {"description": "A goal with this ID already exists."},
        500: {"description": "Goal creation failed."},
    },
)
def create_goal_route(goal: GoalCreate, store: EchoStore = Depends(get_store)) -> GoalResponse:
    try:
        return store.add_goal(goal)
    except IntegrityError as e:
        logger.error(f"Goal {goal.id} already exists: {e}")
        raise HTTPException(status_code=409, detail="Goal already exists")
    except SQLAlchemyError as e:
        logger.error(f"Failed to create goal: {e}")
        raise HTTPException(status_code=500, detail="Failed to create goal")


@router.put(
    "/{goal_id}",
    response_model=GoalResponse,
    summary="Replace an existing goal",
    description="Overwrite every editable field of a goal by its ID.",
    responses={
        200: {"description": "Goal updated successfully."},
        404: {"description": "Goal not found."},
        500: {"description": "Failed to update goal."},
    },
)
def update_goal_route(goal_id: str, goal: GoalUpdate, store: EchoStore = Depends(get_store)) -> GoalResponse:
    try:
        return store.update_goal(goal_id, goal)
    except EntityNotFoundError:
        raise HTTPException(status_code=404, detail="Goal not found")
    except SQLAlchemyError as e:
        logger.error(f"Failed to update goal {goal_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update goal")


@router.patch(
    "/{goal_id}/completion",
    response_model=GoalResponse,
    summary="Mark a goal completed or incomplete",
    responses={
        200: {"description": "Goal updated successfully."},
        404: {"description": "Goal not found."},
        500: {"description": "Failed to update goal."},
    },
)
def update_goal_completion_route(
    goal_id: str,
    completion: GoalCompletion,
    store: EchoStore = Depends(get_store),
) -> GoalResponse:
    try:
        return store.update_goal_completion(goal_id, completion.is_completed)
    except EntityNotFoundError:
        raise HTTPException(status_code=404, detail="Goal not found")
    except SQLAlchemyError as e:
        logger.error(f"Failed to update completion of goal {goal_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update goal")


@router.delete(
    "/{goal_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a goal",
    description="Delete a goal by its ID. Its tasks are kept.",
    responses={
        204: {"description": "Goal deleted successfully."},
        404: {"description": "Goal not found."},
        500: {"description": "Failed to delete goal."},
    },
)
def delete_goal_route(goal_id: str, store: EchoStore = Depends(get_store)) -> None:
    try:
        store.delete_goal(goal_id)
    except EntityNotFoundError:
        raise HTTPException(status_code=404, detail="Goal not found")
    except SQLAlchemyError as e:
        logger.error(f"Failed to delete goal {goal_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete goal")

from typing import List
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from echo.core.dependency import get_store
from echo.core.errors import EntityNotFoundError
from echo.state.store import EchoStore
from echo.tasks.schemas import (
    TaskCompletion,
    TaskResponse,
    TaskScheduleCreate,
    TaskScheduleResponse,
    TaskUpdate,
)

router = APIRouter(prefix="/tasks", tags=["Tasks"])
logger = logging.getLogger(__name__)


@router.get(
    "",
    response_model=List[TaskResponse],
    summary="Get all tasks",
    responses={
        200: {"description": "Tasks retrieved successfully."},
    },
)
def read_tasks_route(store: EchoStore = Depends(get_store)) -> List[TaskResponse]:
    return store.tasks.value


@router.get(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Get a specific task",
    responses={
        200: {"description": "Task retrieved successfully."},
        404: {"description": "Task not found."},
    },
)
def read_task_route(task_id: str, store: EchoStore = Depends(get_store)) -> TaskResponse:
    task = next((t for t in store.tasks.value if t.id == task_id), None)
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return task


@router.post(
    "",
    response_model=TaskScheduleResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new task",
    description=(
        "Create a task, optionally scheduled in a time block. "
        "When a time block is given both rows are written together or not at all."
    ),
    responses={
        201: {"description": "Task created successfully."},
        409: {"description": "A task or time block with this ID already exists."},
        500: {"description": "Task creation failed."},
    },
)
def create_task_route(
    schedule: TaskScheduleCreate,
    store: EchoStore = Depends(get_store),
) -> TaskScheduleResponse:
    try:
        if schedule.time_block is None:
            return TaskScheduleResponse(task=store.add_task(schedule.task))
        task, time_block = store.add_task_with_time_block(schedule.task, schedule.time_block)
        return TaskScheduleResponse(task=task, time_block=time_block)
    except IntegrityError as e:
        logger.error(f"Task {schedule.task.id} already exists: {e}")
        raise HTTPException(status_code=409, detail="Task already exists")
    except SQLAlchemyError as e:
        logger.error(f"Failed to create task: {e}")
        raise HTTPException(status_code=500, detail="Failed to create task")


@router.put(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Replace an existing task",
    responses={
        200: {"description": "Task updated successfully."},
        404: {"description": "Task not found."},
        500: {"description": "Failed to update task."},
    },
)
def update_task_route(task_id: str, task: TaskUpdate, store: EchoStore = Depends(get_store)) -> TaskResponse:
    try:
        return store.update_task(task_id, task)
    except EntityNotFoundError:
        raise HTTPException(status_code=404, detail="Task not found")
    except SQLAlchemyError as e:
        logger.error(f"Failed to update task {task_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update task")


@router.patch(
    "/{task_id}/completion",
    response_model=TaskResponse,
    summary="Mark a task completed or incomplete",
    responses={
        200: {"description": "Task updated successfully."},
        404: {"description": "Task not found."},
        500: {"description": "Failed to update task."},
    },
)
def update_task_completion_route(
    task_id: str,
    completion: TaskCompletion,
    store: EchoStore = Depends(get_store),
) -> TaskResponse:
    try:
        return store.update_task_completion(task_id, completion.is_completed)
    except EntityNotFoundError:
        raise HTTPException(status_code=404, detail="Task not found")
    except SQLAlchemyError as e:
        logger.error(f"Failed to update completion of task {task_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update task")


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a task",
    description="Delete a task by its ID. Its time blocks are kept.",
    responses={
        204: {"description": "Task deleted successfully."},
        404: {"description": "Task not found."},
        500: {"description": "Failed to delete task."},
    },
)
def delete_task_route(task_id: str, store: EchoStore = Depends(get_store)) -> None:
    try:
        store.delete_task(task_id)
    except EntityNotFoundError:
        raise HTTPException(status_code=404, detail="Task not found")
    except SQLAlchemyError as e:
        logger.error(f"Failed to delete task {task_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete task")

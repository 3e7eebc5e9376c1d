import datetime
from typing import List, Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from echo.core.dependency import get_store
from echo.core.errors import EntityNotFoundError
from echo.state.store import EchoStore
from echo.time_blocks.schemas import (
    TimeBlockCompletion,
    TimeBlockCreate,
    TimeBlockResponse,
    TimeBlockUpdate,
)

router = APIRouter(prefix="/time-blocks", tags=["Time Blocks"])
logger = logging.getLogger(__name__)


@router.get(
    "",
    response_model=List[TimeBlockResponse],
    summary="Get time blocks",
    description="Retrieve all time blocks, or only those on `date` ordered by start time.",
    responses={
        200: {"description": "Time blocks retrieved successfully."},
        500: {"description": "Failed to retrieve time blocks."},
    },
)
def read_time_blocks_route(
    date: Optional[datetime.date] = None,
    store: EchoStore = Depends(get_store),
) -> List[TimeBlockResponse]:
    if date is None:
        return store.time_blocks.value
    try:
        return store.get_time_blocks_by_date(date)
    except SQLAlchemyError as e:
        logger.error(f"Failed to fetch time blocks for {date}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve time blocks")


@router.post(
    "",
    response_model=TimeBlockResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new time block",
    responses={
        201: {"description": "Time block created successfully."},
        409: {"description": "A time block with this ID already exists."},
        500: {"description": "Time block creation failed."},
    },
)
def create_time_block_route(
    time_block: TimeBlockCreate,
    store: EchoStore = Depends(get_store),
) -> TimeBlockResponse:
    try:
        return store.add_time_block(time_block)
    except IntegrityError as e:
        logger.error(f"Time block {time_block.id} already exists: {e}")
        raise HTTPException(status_code=409, detail="Time block already exists")
    except SQLAlchemyError as e:
        logger.error(f"Failed to create time block: {e}")
        raise HTTPException(status_code=500, detail="Failed to create time block")


@router.put(
    "/{time_block_id}",
    response_model=TimeBlockResponse,
    summary="Replace an existing time block",
    responses={
        200: {"description": "Time block updated successfully."},
        404: {"description": "Time block not found."},
        500: {"description": "Failed to update time block."},
    },
)
def update_time_block_route(
    time_block_id: str,
    time_block: TimeBlockUpdate,
    store: EchoStore = Depends(get_store),
) -> TimeBlockResponse:
    try:
        return store.update_time_block(time_block_id, time_block)
    except EntityNotFoundError:
        raise HTTPException(status_code=404, detail="Time block not found")
    except SQLAlchemyError as e:
        logger.error(f"Failed to update time block {time_block_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update time block")


@router.patch(
    "/{time_block_id}/completion",
    response_model=TimeBlockResponse,
    summary="Mark a time block completed or incomplete",
    responses={
        200: {"description": "Time block updated successfully."},
        404: {"description": "Time block not found."},
        500: {"description": "Failed to update time block."},
    },
)
def update_time_block_completion_route(
    time_block_id: str,
    completion: TimeBlockCompletion,
    store: EchoStore = Depends(get_store),
) -> TimeBlockResponse:
    try:
        return store.update_time_block_completion(time_block_id, completion.is_completed)
    except EntityNotFoundError:
        raise HTTPException(status_code=404, detail="Time block not found")
    except SQLAlchemyError as e:
        logger.error(f"Failed to update completion of time block {time_block_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update time block")


@router.delete(
    "/{time_block_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a time block",
    responses={
        204: {"description": "Time block deleted successfully."},
        404: {"description": "Time block not found."},
        500: {"description": "Failed to delete time block."},
    },
)
def delete_time_block_route(time_block_id: str, store: EchoStore = Depends(get_store)) -> None:
    try:
        store.delete_time_block(time_block_id)
    except EntityNotFoundError:
        raise HTTPException(status_code=404, detail="Time block not found")
    except SQLAlchemyError as e:
        logger.error(f"Failed to delete time block {time_block_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete time block")

import datetime
from typing import List, Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from echo.core.dependency import get_store
from echo.core.errors import EntityNotFoundError
from echo.mood.schemas import MoodEnergyEntryCreate, MoodEnergyEntryResponse
from echo.state.store import EchoStore

router = APIRouter(prefix="/mood", tags=["Mood"])
logger = logging.getLogger(__name__)


@router.get(
    "",
    response_model=List[MoodEnergyEntryResponse],
    summary="Get mood and energy entries",
    description="Retrieve all entries, or only those recorded on `date` ordered by time.",
    responses={
        200: {"description": "Entries retrieved successfully."},
        500: {"description": "Failed to retrieve entries."},
    },
)
def read_mood_entries_route(
    date: Optional[datetime.date] = None,
    store: EchoStore = Depends(get_store),
) -> List[MoodEnergyEntryResponse]:
    if date is None:
        return store.mood_energy_entries.value
    try:
        return store.get_mood_energy_entries_by_date(date)
    except SQLAlchemyError as e:
        logger.error(f"Failed to fetch mood entries for {date}: {e}")
        raise HTTPException(status_code=500, detail="Failed to retrieve entries")


@router.post(
    "",
    response_model=MoodEnergyEntryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Record mood and energy",
    responses={
        201: {"description": "Entry created successfully."},
        409: {"description": "An entry with this ID already exists."},
        500: {"description": "Entry creation failed."},
    },
)
def create_mood_entry_route(
    entry: MoodEnergyEntryCreate,
    store: EchoStore = Depends(get_store),
) -> MoodEnergyEntryResponse:
    try:
        return store.add_mood_energy_entry(entry)
    except IntegrityError as e:
        logger.error(f"Mood entry {entry.id} already exists: {e}")
        raise HTTPException(status_code=409, detail="Entry already exists")
    except SQLAlchemyError as e:
        logger.error(f"Failed to create mood entry: {e}")
        raise HTTPException(status_code=500, detail="Failed to create entry")


@router.delete(
    "/{entry_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a mood and energy entry",
    responses={
        204: {"description": "Entry deleted successfully."},
        404: {"description": "Entry not found."},
        500: {"description": "Failed to delete entry."},
    },
)
def delete_mood_entry_route(entry_id: str, store: EchoStore = Depends(get_store)) -> None:
    try:
        store.delete_mood_energy_entry(entry_id)
    except EntityNotFoundError:
        raise HTTPException(status_code=404, detail="Entry not found")
    except SQLAlchemyError as e:
        logger.error(f"Failed to delete mood entry {entry_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete entry")

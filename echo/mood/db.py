import datetime
from uuid import uuid4
from typing import List, Optional

from sqlalchemy.orm import Session

from echo.core.errors import EntityNotFoundError
from echo.core.types import utcnow
from echo.mood.models import MoodEnergyEntry
from echo.mood.schemas import MoodEnergyEntryCreate


def create_mood_energy_entry(db: Session, entry: MoodEnergyEntryCreate) -> MoodEnergyEntry:
    """
    Inserts a new mood/energy self-report.

    Args:
        db (Session): SQLAlchemy session.
        entry (MoodEnergyEntryCreate): Input data for the entry.

    Returns:
        MoodEnergyEntry: The created entry.
    """
    new_entry = MoodEnergyEntry(
        id=entry.id or str(uuid4()),
        mood_level=entry.mood_level,
        energy_level=entry.energy_level,
        note=entry.note,
        date=entry.date,
        time=entry.time,
        created_at=utcnow(),
    )
    db.add(new_entry)
    db.commit()
    db.refresh(new_entry)
    return new_entry


def get_mood_energy_entry(db: Session, entry_id: str) -> Optional[MoodEnergyEntry]:
    return db.query(MoodEnergyEntry).filter(MoodEnergyEntry.id == entry_id).first()


def get_all_mood_energy_entries(db: Session) -> List[MoodEnergyEntry]:
    return db.query(MoodEnergyEntry).order_by(MoodEnergyEntry.created_at, MoodEnergyEntry.id).all()


def get_mood_energy_entries_by_date(db: Session, day: datetime.date) -> List[MoodEnergyEntry]:
    return db.query(MoodEnergyEntry).filter(
        MoodEnergyEntry.date == day
    ).order_by(MoodEnergyEntry.time).all()


def delete_mood_energy_entry(db: Session, entry_id: str) -> MoodEnergyEntry:
    """
    Deletes a single entry by ID.

    Raises:
        EntityNotFoundError: If no entry has this ID.
    """
    entry = get_mood_energy_entry(db, entry_id)
    if entry is None:
        raise EntityNotFoundError("MoodEnergyEntry", entry_id)
    db.delete(entry)
    db.commit()
    return entry

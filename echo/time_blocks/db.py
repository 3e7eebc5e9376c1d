import datetime
from uuid import uuid4
from typing import List, Optional

from sqlalchemy.orm import Session

from echo.core.errors import EntityNotFoundError
from echo.time_blocks.models import TimeBlock
from echo.time_blocks.schemas import TimeBlockCreate, TimeBlockUpdate


def build_time_block(time_block: TimeBlockCreate) -> TimeBlock:
    return TimeBlock(
        id=time_block.id or str(uuid4()),
        task_id=time_block.task_id,
        date=time_block.date,
        start_time=time_block.start_time,
        end_time=time_block.end_time,
        is_completed=time_block.is_completed,
    )


def create_time_block(db: Session, time_block: TimeBlockCreate) -> TimeBlock:
    """
    Inserts a new time block. Overlaps with other blocks are not checked.

    Args:
        db (Session): SQLAlchemy session.
        time_block (TimeBlockCreate): Input data for the block.

    Returns:
        TimeBlock: The created block.

    Raises:
        IntegrityError: If a block with the same id already exists.
    """
    new_block = build_time_block(time_block)
    db.add(new_block)
    db.commit()
    db.refresh(new_block)
    return new_block


def get_time_block(db: Session, time_block_id: str) -> Optional[TimeBlock]:
    return db.query(TimeBlock).filter(TimeBlock.id == time_block_id).first()


def get_all_time_blocks(db: Session) -> List[TimeBlock]:
    return db.query(TimeBlock).order_by(TimeBlock.date, TimeBlock.start_time, TimeBlock.id).all()


def get_time_blocks_by_task(db: Session, task_id: str) -> List[TimeBlock]:
    return db.query(TimeBlock).filter(
        TimeBlock.task_id == task_id
    ).order_by(TimeBlock.date, TimeBlock.start_time).all()


def get_time_blocks_by_date(db: Session, day: datetime.date) -> List[TimeBlock]:
    """
    Retrieves the blocks scheduled on one calendar day, earliest first.

    Args:
        db (Session): SQLAlchemy session.
        day (date): The calendar day.

    Returns:
        List[TimeBlock]: Blocks on that day.
    """
    return db.query(TimeBlock).filter(
        TimeBlock.date == day
    ).order_by(TimeBlock.start_time).all()


def _require_time_block(db: Session, time_block_id: str) -> TimeBlock:
    block = get_time_block(db, time_block_id)
    if block is None:
        raise EntityNotFoundError("TimeBlock", time_block_id)
    return block


def update_time_block(db: Session, time_block_id: str, updated_block: TimeBlockUpdate) -> TimeBlock:
    """
    Replaces every column of a time block.

    Raises:
        EntityNotFoundError: If no block has this ID.
    """
    block = _require_time_block(db, time_block_id)
    for field, value in updated_block.model_dump().items():
        setattr(block, field, value)
    db.commit()
    db.refresh(block)
    return block


def _set_time_block_completion(db: Session, time_block_id: str, is_completed: bool) -> TimeBlock:
    block = _require_time_block(db, time_block_id)
    block.is_completed = is_completed
    db.commit()
    db.refresh(block)
    return block


def mark_time_block_completed(db: Session, time_block_id: str) -> TimeBlock:
    return _set_time_block_completion(db, time_block_id, True)


def mark_time_block_incomplete(db: Session, time_block_id: str) -> TimeBlock:
    return _set_time_block_completion(db, time_block_id, False)


def delete_time_block(db: Session, time_block_id: str) -> TimeBlock:
    """
    Deletes a single time block by ID.

    Raises:
        EntityNotFoundError: If no block has this ID.
    """
    block = _require_time_block(db, time_block_id)
    db.delete(block)
    db.commit()
    return block

from sqlalchemy import Column, String, Date, Time

from echo.core.database import Base
from echo.core.types import IntegerBoolean


class TimeBlock(Base):
    __tablename__ = "time_blocks"

    id = Column(String(36), primary_key=True)
    task_id = Column(String(36), index=True, nullable=False)

    date = Column(Date, index=True, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    is_completed = Column(IntegerBoolean, nullable=False, default=False)

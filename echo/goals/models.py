from sqlalchemy import Column, String, Date

from echo.core.database import Base
from echo.core.types import IntegerBoolean, IsoTimestamp


class Goal(Base):
    __tablename__ = "goals"

    id = Column(String(36), primary_key=True)

    title = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    is_completed = Column(IntegerBoolean, nullable=False, default=False)

    created_at = Column(IsoTimestamp, nullable=False)
    updated_at = Column(IsoTimestamp, nullable=False)

"""
Database configuration, driver factories and session management for SQLAlchemy.
"""

import logging
import os
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from echo.core.config import DATA_DIR, DATABASE_IN_MEMORY, DATABASE_NAME

logger = logging.getLogger(__name__)

# Declarative Base
Base = declarative_base()


# Driver factories
class DriverFactory(ABC):
    """Builds the SQLAlchemy engine for one storage backend."""

    @abstractmethod
    def create_engine(self, database_name: str) -> Engine:
        ...


class FileDriverFactory(DriverFactory):
    """A single SQLite file under ``data_dir``."""

    def __init__(self, data_dir: str = DATA_DIR):
        self.data_dir = data_dir

    def create_engine(self, database_name: str) -> Engine:
        os.makedirs(self.data_dir, exist_ok=True)
        path = os.path.join(self.data_dir, database_name)
        logger.info(f"Opening database file {path}")
        return create_engine(
            f"sqlite:///{path}",
            connect_args={"check_same_thread": False},
        )


class InMemoryDriverFactory(DriverFactory):
    """An in-process SQLite database shared through one connection."""

    def create_engine(self, database_name: str) -> Engine:
        return create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )


def create_platform_driver_factory() -> DriverFactory:
    if DATABASE_IN_MEMORY:
        return InMemoryDriverFactory()
    return FileDriverFactory(DATA_DIR)


class Database:
    """Owns the engine and hands out short-lived sessions."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
        )

    @classmethod
    def from_factory(
        cls,
        driver_factory: Optional[DriverFactory] = None,
        database_name: str = DATABASE_NAME,
    ) -> "Database":
        factory = driver_factory or create_platform_driver_factory()
        return cls(factory.create_engine(database_name))

    def create_tables(self) -> None:
        Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """
        Yields a database session and makes sure it is closed afterwards.
        Commits are left to the data-access functions.
        """
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()


# Import all models to register them with the Base metadata
import echo.goals.models  # noqa: E402,F401
import echo.tasks.models  # noqa: E402,F401
import echo.time_blocks.models  # noqa: E402,F401
import echo.mood.models  # noqa: E402,F401

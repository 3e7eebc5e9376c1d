"""
Pytest configuration and shared fixtures for Echo tests.
"""

import datetime

import pytest

from echo.assistant.api_keys import ApiKeyManager
from echo.core.database import Database, InMemoryDriverFactory
from echo.goals.schemas import GoalCreate
from echo.state.store import EchoStore
from echo.tasks.schemas import TaskCreate, TaskPriority


@pytest.fixture
def database():
    """A fresh in-memory database with all tables created."""
    db = Database.from_factory(InMemoryDriverFactory())
    db.create_tables()
    yield db
    db.dispose()


@pytest.fixture
def session(database):
    with database.session() as db:
        yield db


@pytest.fixture
def store(database):
    """An initialised store over an empty database, without sample data."""
    echo_store = EchoStore(database, seed_sample_data=False)
    echo_store.initialize()
    yield echo_store
    echo_store.close()


@pytest.fixture
def api_key_manager():
    return ApiKeyManager()


@pytest.fixture
def goal_create():
    return GoalCreate(
        id="goal-1",
        title="Launch website",
        description="Ship the new marketing site",
        start_date=datetime.date(2025, 3, 1),
        end_date=datetime.date(2025, 3, 31),
    )


@pytest.fixture
def task_create():
    return TaskCreate(
        id="task-1",
        goal_id="goal-1",
        title="Write copy",
        description="Landing page text",
        priority=TaskPriority.HIGH,
    )


@pytest.fixture
def mock_claude_response():
    """A standard Claude messages API reply."""
    return {
        "id": "msg_test123",
        "type": "message",
        "role": "assistant",
        "content": [{"type": "text", "text": "Test response"}],
        "model": "claude-3-7-sonnet-20250219",
        "stop_reason": "end_turn",
    }


@pytest.fixture
def mock_gemini_response():
    """A standard Gemini generateContent reply."""
    return {
        "candidates": [
            {"content": {"parts": [{"text": "Gemini says hi"}], "role": "model"}}
        ]
    }

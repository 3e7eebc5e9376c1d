import logging
from typing import Optional

import requests
from fastapi import FastAPI

from echo.assistant import routes as assistant_router
from echo.assistant.api_keys import ApiKeyManager
from echo.assistant.client import AssistantClient
from echo.assistant.vendors import VENDORS
from echo.core.config import LOG_LEVEL, SEED_SAMPLE_DATA
from echo.core.database import Database, DriverFactory
from echo.goals import routes as goals_router
from echo.mood import routes as mood_router
from echo.state.store import EchoStore
from echo.tasks import routes as tasks_router
from echo.time_blocks import routes as time_blocks_router

logger = logging.getLogger(__name__)


def create_app(
    driver_factory: Optional[DriverFactory] = None,
    seed_sample_data: bool = SEED_SAMPLE_DATA,
    api_key_manager: Optional[ApiKeyManager] = None,
    http_session: Optional[requests.Session] = None,
) -> FastAPI:
    """
    Builds the API. The store and the assistant clients are created on
    startup and released on shutdown.
    """
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Echo API",
        version="1.0.0",
        description="Backend for Echo: goals, tasks, time blocks, mood tracking and an AI assistant.",
    )

    # Routers
    app.include_router(goals_router.router)
    app.include_router(tasks_router.router)
    app.include_router(time_blocks_router.router)
    app.include_router(mood_router.router)
    app.include_router(assistant_router.router)

    @app.on_event("startup")
    def open_store():
        store = EchoStore(Database.from_factory(driver_factory), seed_sample_data=seed_sample_data)
        store.initialize()
        manager = api_key_manager or ApiKeyManager.from_environment()

        app.state.store = store
        app.state.api_key_manager = manager
        app.state.assistant_clients = {
            model: AssistantClient(vendor, manager, session=http_session)
            for model, vendor in VENDORS.items()
        }
        logger.info("Echo store initialised")

    @app.on_event("shutdown")
    def close_store():
        # Startup may have failed before either was set.
        for client in getattr(app.state, "assistant_clients", {}).values():
            client.close()
        store = getattr(app.state, "store", None)
        if store is not None:
            store.close()
        logger.info("Echo store closed")

    return app


app = create_app()

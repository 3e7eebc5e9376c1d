from fastapi import Request
from echo.assistant.api_keys import AIModel, ApiKeyManager
from echo.assistant.client import AssistantClient
from echo.state.store import EchoStore
import logging

logger = logging.getLogger(__name__)


def get_store(request: Request) -> EchoStore:
    return request.app.state.store


def get_api_key_manager(request: Request) -> ApiKeyManager:
    return request.app.state.api_key_manager


def get_assistant_client(request: Request) -> AssistantClient:
    """
    FastAPI dependency that returns the assistant client for the `model`
    query parameter, or for the currently selected model when it is absent.
    """
    manager: ApiKeyManager = request.app.state.api_key_manager
    clients = request.app.state.assistant_clients

    requested = request.query_params.get("model")
    if requested is None:
        return clients[manager.selected_model]

    try:
        model = AIModel(requested.strip().lower())
    except ValueError:
        logger.warning(
            f"Unknown model '{requested}' requested. Falling back to '{manager.selected_model.value}'."
        )
        return clients[manager.selected_model]
    return clients[model]

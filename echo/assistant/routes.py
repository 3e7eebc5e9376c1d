from typing import List, Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from echo.assistant.api_keys import AIModel, ApiKeyManager
from echo.assistant.client import AssistantClient
from echo.assistant.errors import ApiKeyNotSetError
from echo.assistant.schemas import (
    ApiKeyPayload,
    ApiKeyStatus,
    ChatRequest,
    ChatResult,
    GreetingResponse,
    ModelSelection,
)
from echo.core.dependency import get_api_key_manager, get_assistant_client, get_store
from echo.focus.status import FocusStatus, current_focus
from echo.reflections.schemas import ReflectionCreate, ReflectionResponse, ReflectionType
from echo.state.store import EchoStore

router = APIRouter(prefix="/assistant", tags=["Assistant"])
logger = logging.getLogger(__name__)


@router.get(
    "/keys/{model}",
    response_model=ApiKeyStatus,
    summary="Check whether an API key is stored",
    description="Reports whether a key is held for the vendor. The key itself is never returned.",
)
def read_api_key_status_route(
    model: AIModel,
    manager: ApiKeyManager = Depends(get_api_key_manager),
) -> ApiKeyStatus:
    return ApiKeyStatus(model=model, is_set=manager.has_api_key(model))


@router.put(
    "/keys/{model}",
    response_model=ApiKeyStatus,
    summary="Store an API key",
    description="Store a key for the vendor for the lifetime of the process. Surrounding whitespace is trimmed.",
    responses={
        200: {"description": "Key stored."},
        400: {"description": "Key is blank."},
    },
)
def save_api_key_route(
    model: AIModel,
    payload: ApiKeyPayload,
    manager: ApiKeyManager = Depends(get_api_key_manager),
) -> ApiKeyStatus:
    try:
        manager.save_api_key(payload.api_key, model)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return ApiKeyStatus(model=model, is_set=True)


@router.delete(
    "/keys/{model}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Forget an API key",
)
def clear_api_key_route(
    model: AIModel,
    manager: ApiKeyManager = Depends(get_api_key_manager),
) -> None:
    manager.clear_api_key(model)


@router.put(
    "/model",
    response_model=ModelSelection,
    summary="Select the AI vendor",
    description="Choose which vendor answers when a request does not name one with `?model=`.",
)
def select_model_route(
    selection: ModelSelection,
    manager: ApiKeyManager = Depends(get_api_key_manager),
) -> ModelSelection:
    manager.select_model(selection.model)
    logger.info(f"Selected AI model {selection.model.display_name}")
    return ModelSelection(model=manager.selected_model)


@router.get(
    "/greeting",
    response_model=GreetingResponse,
    summary="Get the opening greeting",
    description="Built locally from the current tasks; no AI request is made.",
)
def read_greeting_route(
    store: EchoStore = Depends(get_store),
    client: AssistantClient = Depends(get_assistant_client),
) -> GreetingResponse:
    return GreetingResponse(
        model=client.vendor.name,
        text=client.generate_initial_greeting(store.tasks.value),
    )


@router.post(
    "/chat",
    response_model=ChatResult,
    summary="Chat with Echo",
    description="Send a message to the selected vendor with the current tasks as context.",
    responses={
        200: {"description": "Answer or a fallback message, see `status`."},
        400: {"description": "No API key stored for the vendor."},
    },
)
def chat_route(
    request: ChatRequest,
    store: EchoStore = Depends(get_store),
    client: AssistantClient = Depends(get_assistant_client),
) -> ChatResult:
    try:
        return client.send_message(request.message, store.tasks.value)
    except ApiKeyNotSetError as e:
        logger.error(f"Chat rejected: {e}")
        raise HTTPException(status_code=400, detail=str(e))


@router.post(
    "/reflection",
    response_model=ChatResult,
    summary="Reflect on mood and energy",
    description=(
        "Ask the selected vendor for a reflection on the recorded mood and energy entries. "
        "Successful reflections are kept in memory unless `save=false`."
    ),
    responses={
        200: {"description": "Reflection or a fallback message, see `status`."},
        400: {"description": "No API key stored for the vendor."},
    },
)
def reflection_route(
    save: bool = True,
    store: EchoStore = Depends(get_store),
    client: AssistantClient = Depends(get_assistant_client),
) -> ChatResult:
    try:
        result = client.generate_reflection(store.mood_energy_entries.value)
    except ApiKeyNotSetError as e:
        logger.error(f"Reflection rejected: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    if save and result.ok:
        store.add_reflection(ReflectionCreate(message=result.text, type=ReflectionType.REFLECTION))
    return result


@router.get(
    "/reflections",
    response_model=List[ReflectionResponse],
    summary="Get saved reflections",
    description="Reflections are held in memory and are lost on restart.",
)
def read_reflections_route(
    type: Optional[ReflectionType] = None,
    store: EchoStore = Depends(get_store),
) -> List[ReflectionResponse]:
    if type is None:
        return store.get_all_reflections()
    return store.get_reflections_by_type(type)


@router.get(
    "/focus",
    response_model=FocusStatus,
    summary="What Echo is focused on",
    description="The first incomplete task and its first open time block.",
)
def read_focus_route(store: EchoStore = Depends(get_store)) -> FocusStatus:
    return current_focus(store.tasks.value, store.time_blocks.value)

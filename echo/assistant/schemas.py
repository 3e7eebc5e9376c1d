from enum import Enum
from pydantic import BaseModel

from echo.assistant.api_keys import AIModel


class ChatStatus(str, Enum):
    SUCCESS = "success"
    EMPTY = "empty"  # vendor answered without any text
    RATE_LIMITED = "rate_limited"
    AUTH_FAILED = "auth_failed"
    NETWORK_FAILED = "network_failed"  # transport error, other HTTP error or malformed body
    NO_DATA = "no_data"  # nothing to reflect on, no request sent


class ChatResult(BaseModel):
    """
    Outcome of one assistant call.

    ``text`` always holds something displayable: the vendor's answer on
    success, otherwise the fixed fallback message for the status.
    """
    status: ChatStatus
    text: str
    model: AIModel

    @property
    def ok(self) -> bool:
        return self.status == ChatStatus.SUCCESS


class ChatRequest(BaseModel):
    message: str


class ApiKeyPayload(BaseModel):
    api_key: str


class ApiKeyStatus(BaseModel):
    model: AIModel
    is_set: bool


class ModelSelection(BaseModel):
    model: AIModel


class GreetingResponse(BaseModel):
    model: AIModel
    text: str

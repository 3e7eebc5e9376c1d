"""
Wire details of each AI vendor.

A descriptor knows how to build the request for a (system prompt, user
message) pair and where the answer text sits in the vendor's JSON reply.
Everything else, from key lookup to status mapping, is shared by
``AssistantClient``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional

from echo.assistant.api_keys import AIModel
from echo.core.config import (
    CLAUDE_API_VERSION,
    CLAUDE_BASE_URL,
    CLAUDE_MAX_TOKENS,
    CLAUDE_MODEL,
    GEMINI_BASE_URL,
    GEMINI_MODEL,
)


class AuthStyle(str, Enum):
    HEADER = "header"
    QUERY = "query"


@dataclass(frozen=True)
class VendorDescriptor:
    name: AIModel
    display_name: str
    base_url: str
    model: str
    auth_style: AuthStyle
    url_builder: Callable[["VendorDescriptor"], str]
    headers_builder: Callable[["VendorDescriptor", str], Dict[str, str]]
    payload_builder: Callable[["VendorDescriptor", str, str], Dict[str, Any]]
    text_extractor: Callable[[Dict[str, Any]], Optional[str]]

    def build_url(self) -> str:
        return self.url_builder(self)

    def build_headers(self, api_key: str) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        headers.update(self.headers_builder(self, api_key))
        return headers

    def build_params(self, api_key: str) -> Dict[str, str]:
        if self.auth_style == AuthStyle.QUERY:
            return {"key": api_key}
        return {}

    def build_payload(self, system_prompt: str, user_message: str) -> Dict[str, Any]:
        return self.payload_builder(self, system_prompt, user_message)

    def extract_text(self, body: Dict[str, Any]) -> Optional[str]:
        """
        Pulls the answer text out of a decoded reply.

        Raises:
            KeyError, IndexError, TypeError: If the reply does not have the vendor's shape.
        """
        return self.text_extractor(body)


def _as_text(value: Any) -> Optional[str]:
    if value is not None and not isinstance(value, str):
        raise TypeError(f"Expected answer text, got {type(value).__name__}")
    return value


# Claude
def _claude_url(vendor: VendorDescriptor) -> str:
    return f"{vendor.base_url}/messages"


def _claude_headers(vendor: VendorDescriptor, api_key: str) -> Dict[str, str]:
    return {"x-api-key": api_key, "anthropic-version": CLAUDE_API_VERSION}


def _claude_payload(vendor: VendorDescriptor, system_prompt: str, user_message: str) -> Dict[str, Any]:
    return {
        "model": vendor.model,
        "system": system_prompt,
        "messages": [{"role": "user", "content": user_message}],
        "max_tokens": CLAUDE_MAX_TOKENS,
    }


def _claude_text(body: Dict[str, Any]) -> Optional[str]:
    content = body["content"]
    if not content:
        return None
    return _as_text(content[0].get("text"))


# Gemini
def _gemini_url(vendor: VendorDescriptor) -> str:
    return f"{vendor.base_url}/{vendor.model}:generateContent"


def _gemini_headers(vendor: VendorDescriptor, api_key: str) -> Dict[str, str]:
    # Key travels as a query parameter.
    return {}


def _gemini_payload(vendor: VendorDescriptor, system_prompt: str, user_message: str) -> Dict[str, Any]:
    return {"contents": [{"parts": [{"text": system_prompt}, {"text": user_message}]}]}


def _gemini_text(body: Dict[str, Any]) -> Optional[str]:
    candidates = body.get("candidates") or []
    if not candidates:
        return None
    parts = candidates[0]["content"].get("parts") or []
    if not parts:
        return None
    return _as_text(parts[0].get("text"))


CLAUDE = VendorDescriptor(
    name=AIModel.CLAUDE,
    display_name="Claude",
    base_url=CLAUDE_BASE_URL,
    model=CLAUDE_MODEL,
    auth_style=AuthStyle.HEADER,
    url_builder=_claude_url,
    headers_builder=_claude_headers,
    payload_builder=_claude_payload,
    text_extractor=_claude_text,
)

GEMINI = VendorDescriptor(
    name=AIModel.GEMINI,
    display_name="Gemini",
    base_url=GEMINI_BASE_URL,
    model=GEMINI_MODEL,
    auth_style=AuthStyle.QUERY,
    url_builder=_gemini_url,
    headers_builder=_gemini_headers,
    payload_builder=_gemini_payload,
    text_extractor=_gemini_text,
)

VENDORS: Dict[AIModel, VendorDescriptor] = {CLAUDE.name: CLAUDE, GEMINI.name: GEMINI}
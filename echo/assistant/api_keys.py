import logging
import threading
from enum import Enum
from typing import Dict, Optional

from echo.core.config import CLAUDE_API_KEY, GEMINI_API_KEY

logger = logging.getLogger(__name__)


class AIModel(str, Enum):
    CLAUDE = "claude"
    GEMINI = "gemini"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class ApiKeyManager:
    """
    Keeps one API key per vendor and the currently selected vendor.

    Keys live in process memory for the session only; nothing is written
    to disk.
    """

    def __init__(self, selected_model: AIModel = AIModel.CLAUDE):
        self._keys: Dict[AIModel, str] = {}
        self._selected_model = selected_model
        self._lock = threading.Lock()

    @classmethod
    def from_environment(cls) -> "ApiKeyManager":
        manager = cls()
        for model, key in ((AIModel.CLAUDE, CLAUDE_API_KEY), (AIModel.GEMINI, GEMINI_API_KEY)):
            if key and key.strip():
                manager.save_api_key(key, model)
                logger.info(f"Loaded {model.display_name} API key from environment")
        return manager

    @property
    def selected_model(self) -> AIModel:
        return self._selected_model

    def select_model(self, model: AIModel) -> None:
        self._selected_model = model

    def save_api_key(self, api_key: str, model: AIModel = AIModel.CLAUDE) -> None:
        """
        Stores a trimmed key for ``model``.

        Raises:
            ValueError: If the key is blank after trimming.
        """
        sanitized = api_key.strip()
        if not sanitized:
            raise ValueError("API key must not be blank")
        with self._lock:
            self._keys[model] = sanitized

    def get_api_key(self, model: AIModel = AIModel.CLAUDE) -> Optional[str]:
        with self._lock:
            return self._keys.get(model)

    def has_api_key(self, model: AIModel = AIModel.CLAUDE) -> bool:
        return self.get_api_key(model) is not None

    def clear_api_key(self, model: AIModel = AIModel.CLAUDE) -> None:
        with self._lock:
            self._keys.pop(model, None)

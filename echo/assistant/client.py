import logging
from typing import Optional, Sequence, Tuple

import requests

from echo.assistant import prompts
from echo.assistant.api_keys import ApiKeyManager
from echo.assistant.errors import ApiKeyNotSetError
from echo.assistant.schemas import ChatResult, ChatStatus
from echo.assistant.vendors import VendorDescriptor
from echo.core.config import AI_REQUEST_TIMEOUT
from echo.mood.schemas import MoodEnergyEntryBase
from echo.tasks.schemas import TaskBase

logger = logging.getLogger(__name__)


class AssistantClient:
    """
    Talks to one AI vendor over HTTPS.

    Each call makes at most one request. Failures are reported through the
    returned ``ChatResult``; the only exception raised is ``ApiKeyNotSetError``,
    and it is raised before anything goes over the network.
    """

    def __init__(
        self,
        vendor: VendorDescriptor,
        api_key_manager: ApiKeyManager,
        session: Optional[requests.Session] = None,
        timeout: float = AI_REQUEST_TIMEOUT,
    ):
        self.vendor = vendor
        self.api_key_manager = api_key_manager
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session or requests.Session()

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def _require_api_key(self) -> str:
        api_key = self.api_key_manager.get_api_key(self.vendor.name)
        if not api_key:
            raise ApiKeyNotSetError(self.vendor.name)
        return api_key

    def _result(self, status: ChatStatus, text: str) -> ChatResult:
        return ChatResult(status=status, text=text, model=self.vendor.name)

    def _post(self, api_key: str, system_prompt: str, user_message: str) -> Tuple[ChatStatus, Optional[str]]:
        """
        Sends one request and classifies the outcome.

        Returns:
            tuple: The status and, on success, the answer text.
        """
        try:
            resp = self.session.post(
                self.vendor.build_url(),
                headers=self.vendor.build_headers(api_key),
                params=self.vendor.build_params(api_key),
                json=self.vendor.build_payload(system_prompt, user_message),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            # The Gemini URL carries the key, so only the exception type is logged.
            logger.warning(f"{self.vendor.display_name} request failed: {type(e).__name__}")
            return ChatStatus.NETWORK_FAILED, None

        if resp.status_code == 429:
            logger.warning(f"{self.vendor.display_name} rate limited the request")
            return ChatStatus.RATE_LIMITED, None
        if resp.status_code in (401, 403):
            logger.warning(f"{self.vendor.display_name} rejected the API key ({resp.status_code})")
            return ChatStatus.AUTH_FAILED, None
        if resp.status_code >= 400:
            logger.warning(f"{self.vendor.display_name} returned HTTP {resp.status_code}")
            return ChatStatus.NETWORK_FAILED, None

        try:
            text = self.vendor.extract_text(resp.json())
        except (ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
            logger.warning(f"{self.vendor.display_name} sent a malformed reply: {type(e).__name__}")
            return ChatStatus.NETWORK_FAILED, None

        if not text or not text.strip():
            logger.warning(f"{self.vendor.display_name} answered without any text")
            return ChatStatus.EMPTY, None
        return ChatStatus.SUCCESS, text

    def send_message(self, user_text: str, tasks: Sequence[TaskBase]) -> ChatResult:
        """
        Asks the vendor about ``user_text`` with the user's tasks as context.

        Raises:
            ApiKeyNotSetError: If no key is stored for this vendor.
        """
        api_key = self._require_api_key()
        status, text = self._post(api_key, prompts.build_system_prompt(tasks), user_text)
        if status == ChatStatus.SUCCESS:
            return self._result(status, text)
        if status == ChatStatus.EMPTY:
            return self._result(status, prompts.CHAT_EMPTY_MESSAGE.format(vendor=self.vendor.display_name))
        return self._result(status, prompts.CHAT_FAILED_MESSAGE.format(vendor=self.vendor.display_name))

    def generate_initial_greeting(self, tasks: Sequence[TaskBase]) -> str:
        return prompts.build_greeting(tasks, self.vendor.display_name)

    def generate_reflection(self, entries: Sequence[MoodEnergyEntryBase]) -> ChatResult:
        """
        Asks the vendor to reflect on recent mood and energy entries.

        Raises:
            ApiKeyNotSetError: If no key is stored for this vendor.
        """
        api_key = self._require_api_key()
        if not entries:
            return self._result(ChatStatus.NO_DATA, prompts.REFLECTION_NO_DATA_MESSAGE)

        status, text = self._post(
            api_key, prompts.build_reflection_prompt(entries), prompts.REFLECTION_USER_MESSAGE
        )
        if status == ChatStatus.SUCCESS:
            return self._result(status, text)
        if status == ChatStatus.EMPTY:
            return self._result(status, prompts.REFLECTION_EMPTY_MESSAGE)
        return self._result(status, prompts.REFLECTION_FAILED_MESSAGE)

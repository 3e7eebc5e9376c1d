"""
Tests for AssistantClient, the vendor descriptors and prompt building.

The HTTP session is always a mock; no test touches the network.
"""

import datetime

import pytest
import requests

from echo.assistant import prompts
from echo.assistant.api_keys import AIModel, ApiKeyManager
from echo.assistant.client import AssistantClient
from echo.assistant.errors import ApiKeyNotSetError
from echo.assistant.schemas import ChatStatus
from echo.assistant.vendors import CLAUDE, GEMINI
from echo.core.types import utcnow
from echo.mood.schemas import EnergyLevel, MoodEnergyEntryBase, MoodLevel
from echo.tasks.schemas import TaskBase, TaskPriority


def _task(title, priority=TaskPriority.MEDIUM, completed=False, description=""):
    now = utcnow()
    return TaskBase(
        id=title.lower().replace(" ", "-"),
        goal_id="goal-1",
        title=title,
        description=description,
        priority=priority,
        is_completed=completed,
        created_at=now,
        updated_at=now,
    )


def _mood(entry_id, mood, energy=EnergyLevel.MEDIUM, note=""):
    return MoodEnergyEntryBase(
        id=entry_id,
        mood_level=mood,
        energy_level=energy,
        note=note,
        date=datetime.date(2025, 3, 3),
        time=datetime.time(9, 15),
        created_at=utcnow(),
    )


@pytest.fixture
def http_session(mocker):
    return mocker.Mock(spec=requests.Session)


@pytest.fixture
def respond(mocker, http_session):
    """Makes the mocked session answer with ``status_code`` and ``body``."""
    def _respond(status_code=200, body=None):
        response = mocker.Mock()
        response.status_code = status_code
        response.json.return_value = body
        http_session.post.return_value = response
        return response
    return _respond


@pytest.fixture
def claude_client(api_key_manager, http_session):
    api_key_manager.save_api_key("sk-test", AIModel.CLAUDE)
    return AssistantClient(CLAUDE, api_key_manager, session=http_session, timeout=5)


@pytest.fixture
def gemini_client(api_key_manager, http_session):
    api_key_manager.save_api_key("gm-test", AIModel.GEMINI)
    return AssistantClient(GEMINI, api_key_manager, session=http_session, timeout=5)


class TestMissingKey:

    def test_send_message_raises_before_any_request(self, api_key_manager, http_session):
        client = AssistantClient(CLAUDE, api_key_manager, session=http_session)

        with pytest.raises(ApiKeyNotSetError) as exc_info:
            client.send_message("Hello", [])

        assert str(exc_info.value) == "Claude API key not set"
        http_session.post.assert_not_called()

    def test_reflection_checks_key_before_data(self, api_key_manager, http_session):
        client = AssistantClient(GEMINI, api_key_manager, session=http_session)

        with pytest.raises(ApiKeyNotSetError):
            client.generate_reflection([])
        http_session.post.assert_not_called()


class TestClaudeRequests:

    def test_success(self, claude_client, http_session, respond, mock_claude_response):
        respond(200, mock_claude_response)

        result = claude_client.send_message("What next?", [_task("Draft", TaskPriority.HIGH)])

        assert result.status == ChatStatus.SUCCESS
        assert result.ok
        assert result.text == "Test response"
        assert result.model == AIModel.CLAUDE

        _, kwargs = http_session.post.call_args
        assert http_session.post.call_args[0][0] == "https://api.anthropic.com/v1/messages"
        assert kwargs["headers"]["x-api-key"] == "sk-test"
        assert kwargs["headers"]["anthropic-version"] == "2023-06-01"
        assert kwargs["params"] == {}
        assert kwargs["timeout"] == 5
        payload = kwargs["json"]
        assert payload["messages"] == [{"role": "user", "content": "What next?"}]
        assert "Draft (Priority: HIGH)" in payload["system"]
        assert payload["max_tokens"] == 1024

    @pytest.mark.parametrize("status_code,expected", [
        (429, ChatStatus.RATE_LIMITED),
        (401, ChatStatus.AUTH_FAILED),
        (403, ChatStatus.AUTH_FAILED),
        (500, ChatStatus.NETWORK_FAILED),
        (404, ChatStatus.NETWORK_FAILED),
    ])
    def test_http_errors_map_to_status(self, claude_client, respond, status_code, expected):
        respond(status_code, {"error": {"message": "nope"}})

        result = claude_client.send_message("Hi", [])

        assert result.status == expected
        assert result.text == prompts.CHAT_FAILED_MESSAGE.format(vendor="Claude")

    def test_transport_error(self, claude_client, http_session):
        http_session.post.side_effect = requests.ConnectionError("unreachable")

        result = claude_client.send_message("Hi", [])

        assert result.status == ChatStatus.NETWORK_FAILED

    def test_malformed_json(self, claude_client, respond):
        response = respond(200)
        response.json.side_effect = ValueError("not json")

        assert claude_client.send_message("Hi", []).status == ChatStatus.NETWORK_FAILED

    def test_unexpected_shape(self, claude_client, respond):
        respond(200, {"unexpected": True})

        assert claude_client.send_message("Hi", []).status == ChatStatus.NETWORK_FAILED

    @pytest.mark.parametrize("text", [42, ["a", "b"], {"value": "hi"}])
    def test_non_string_text_is_malformed(self, claude_client, respond, text):
        respond(200, {"content": [{"type": "text", "text": text}]})

        result = claude_client.send_message("Hi", [])

        assert result.status == ChatStatus.NETWORK_FAILED
        assert result.text == prompts.CHAT_FAILED_MESSAGE.format(vendor="Claude")

    def test_empty_content(self, claude_client, respond):
        respond(200, {"content": []})

        result = claude_client.send_message("Hi", [])

        assert result.status == ChatStatus.EMPTY
        assert result.text == prompts.CHAT_EMPTY_MESSAGE.format(vendor="Claude")


class TestGeminiRequests:

    def test_success_sends_key_as_query_parameter(self, gemini_client, http_session, respond, mock_gemini_response):
        respond(200, mock_gemini_response)

        result = gemini_client.send_message("Hi", [])

        assert result.status == ChatStatus.SUCCESS
        assert result.text == "Gemini says hi"
        args, kwargs = http_session.post.call_args
        assert args[0].endswith("/models/gemini-2.0-flash:generateContent")
        assert kwargs["params"] == {"key": "gm-test"}
        assert "x-api-key" not in kwargs["headers"]
        parts = kwargs["json"]["contents"][0]["parts"]
        assert parts[0]["text"].startswith("You are Echo")
        assert parts[1]["text"] == "Hi"

    def test_no_candidates_is_empty(self, gemini_client, respond):
        respond(200, {"candidates": []})

        assert gemini_client.send_message("Hi", []).status == ChatStatus.EMPTY

    def test_non_string_text_in_reflection(self, gemini_client, respond):
        respond(200, {"candidates": [{"content": {"parts": [{"text": 7}]}}]})

        result = gemini_client.generate_reflection([_mood("1", MoodLevel.GOOD)])

        assert result.status == ChatStatus.NETWORK_FAILED
        assert result.text == prompts.REFLECTION_FAILED_MESSAGE


class TestGreeting:

    def test_no_tasks(self, claude_client, http_session):
        greeting = claude_client.generate_initial_greeting([])

        assert greeting == prompts.GREETING_NO_TASKS.format(vendor="Claude")
        http_session.post.assert_not_called()

    def test_mentions_high_priority_task(self, claude_client):
        greeting = claude_client.generate_initial_greeting([_task("Draft", TaskPriority.HIGH)])

        assert '"Draft"' in greeting
        assert "1 high-priority tasks" in greeting

    def test_counts_open_tasks(self, gemini_client):
        tasks = [_task("Read"), _task("Write"), _task("Done", completed=True)]

        greeting = gemini_client.generate_initial_greeting(tasks)

        assert "powered by Gemini" in greeting
        assert "2 tasks in progress" in greeting

    def test_works_without_key(self, api_key_manager):
        client = AssistantClient(CLAUDE, api_key_manager)
        assert "powered by Claude" in client.generate_initial_greeting([])
        client.close()


class TestReflection:

    def test_no_entries_returns_no_data_without_request(self, claude_client, http_session):
        result = claude_client.generate_reflection([])

        assert result.status == ChatStatus.NO_DATA
        assert result.text == prompts.REFLECTION_NO_DATA_MESSAGE
        http_session.post.assert_not_called()

    def test_prompt_includes_entries_and_summary(self, claude_client, http_session, respond, mock_claude_response):
        respond(200, mock_claude_response)
        entries = [
            _mood("1", MoodLevel.GOOD, note="Productive morning"),
            _mood("2", MoodLevel.GOOD),
            _mood("3", MoodLevel.BAD),
        ]

        result = claude_client.generate_reflection(entries)

        assert result.status == ChatStatus.SUCCESS
        system = http_session.post.call_args[1]["json"]["system"]
        assert "Entry 3:" in system
        assert "Productive morning" in system
        assert "Most common mood: Good" in system

    def test_failure_uses_reflection_fallback(self, claude_client, respond):
        respond(503, None)

        result = claude_client.generate_reflection([_mood("1", MoodLevel.NEUTRAL)])

        assert result.status == ChatStatus.NETWORK_FAILED
        assert result.text == prompts.REFLECTION_FAILED_MESSAGE


class TestPrompts:

    def test_system_prompt_lists_at_most_three_completed_tasks(self):
        tasks = [_task(f"Done {i}", completed=True) for i in range(5)] + [
            _task("Open", TaskPriority.LOW, description="still to do")
        ]

        prompt = prompts.build_system_prompt(tasks)

        assert "- Open (Priority: LOW): still to do" in prompt
        assert "Done 2" in prompt
        assert "Done 3" not in prompt

    def test_summary_needs_three_entries(self):
        prompt = prompts.build_reflection_prompt([_mood("1", MoodLevel.GOOD), _mood("2", MoodLevel.GOOD)])
        assert "Summary" not in prompt

"""Tests for the task suggestion service — all API calls are mocked."""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import anthropic
import httpx
import pytest

from conexpro.exceptions import TaskSuggestionError
from conexpro.services.task_suggester import (
    FAILURE_MESSAGE,
    NO_TASKS_MESSAGE,
    SUCCESS_MESSAGE,
    VALIDATION_MESSAGE,
    TaskSuggester,
    get_tasks_from_description,
    parse_tasks,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _mock_api_response(text: str) -> MagicMock:
    """Create a mock Anthropic API response."""
    text_block = MagicMock()
    text_block.type = "text"
    text_block.text = text
    response = MagicMock()
    response.content = [text_block]
    return response


def _tasks_json(tasks: list[str]) -> str:
    return f"```json\n{json.dumps({'tasks': tasks}, indent=2)}\n```"


@pytest.fixture()
def suggester() -> TaskSuggester:
    """Create a TaskSuggester with a fake API key."""
    return TaskSuggester(api_key="test-key-not-real")


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class TestParseTasks:
    def test_fenced_object(self) -> None:
        assert parse_tasks(_tasks_json(["Excavate footing", "Set rebar"])) == [
            "Excavate footing",
            "Set rebar",
        ]

    def test_bare_list(self) -> None:
        assert parse_tasks('["Pour slab"]') == ["Pour slab"]

    def test_blanks_and_duplicates_dropped(self) -> None:
        assert parse_tasks(_tasks_json(["Pour slab", " ", "Pour slab", "Cure"])) == [
            "Pour slab",
            "Cure",
        ]

    def test_no_json(self) -> None:
        assert parse_tasks("Here are some tasks: pour, finish") is None

    def test_invalid_json(self) -> None:
        assert parse_tasks("```json\n{tasks: [}\n```") is None

    def test_wrong_shape(self) -> None:
        assert parse_tasks('```json\n{"steps": ["a"]}\n```') is None


# ---------------------------------------------------------------------------
# API calls
# ---------------------------------------------------------------------------


class TestSuggestTasks:
    def test_well_formed_response(self, suggester: TaskSuggester) -> None:
        mock_response = _mock_api_response(_tasks_json(["Set forms", "Pour slab"]))

        with patch.object(suggester._client.messages, "create", return_value=mock_response) as create:
            tasks = suggester.suggest_tasks("Pour a 20x10 garage slab")

        assert tasks == ["Set forms", "Pour slab"]
        messages = create.call_args.kwargs["messages"]
        assert "Pour a 20x10 garage slab" in messages[0]["content"]

    def test_retries_once_on_malformed_response(self, suggester: TaskSuggester) -> None:
        responses = [
            _mock_api_response("no json here"),
            _mock_api_response(_tasks_json(["Finish surface"])),
        ]

        with patch.object(suggester._client.messages, "create", side_effect=responses) as create:
            tasks = suggester.suggest_tasks("Finish the patio")

        assert tasks == ["Finish surface"]
        assert create.call_count == 2

    def test_raises_after_retries(self, suggester: TaskSuggester) -> None:
        with patch.object(
            suggester._client.messages,
            "create",
            return_value=_mock_api_response("still no json"),
        ), pytest.raises(TaskSuggestionError):
            suggester.suggest_tasks("Finish the patio")

    def test_api_error_wrapped(self, suggester: TaskSuggester) -> None:
        error = anthropic.APIConnectionError(
            request=httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        )
        with patch.object(suggester._client.messages, "create", side_effect=error), pytest.raises(
            TaskSuggestionError
        ):
            suggester.suggest_tasks("Finish the patio")


# ---------------------------------------------------------------------------
# Failure-tolerant wrapper
# ---------------------------------------------------------------------------


class TestGetTasksFromDescription:
    def test_success(self) -> None:
        suggester = MagicMock(spec=TaskSuggester)
        suggester.suggest_tasks.return_value = ["Set forms"]

        result = get_tasks_from_description(suggester, "  Garage slab ")

        assert result.message == SUCCESS_MESSAGE
        assert result.ok
        assert result.tasks == ["Set forms"]
        suggester.suggest_tasks.assert_called_once_with("Garage slab")

    def test_empty_description(self) -> None:
        suggester = MagicMock(spec=TaskSuggester)

        result = get_tasks_from_description(suggester, "   ")

        assert result.message == VALIDATION_MESSAGE
        assert "job_description" in result.field_errors
        suggester.suggest_tasks.assert_not_called()

    def test_no_tasks(self) -> None:
        suggester = MagicMock(spec=TaskSuggester)
        suggester.suggest_tasks.return_value = []

        result = get_tasks_from_description(suggester, "Garage slab")

        assert result.message == NO_TASKS_MESSAGE
        assert result.tasks == []
        assert not result.ok

    def test_failure_is_not_raised(self) -> None:
        suggester = MagicMock(spec=TaskSuggester)
        suggester.suggest_tasks.side_effect = TaskSuggestionError("down")

        result = get_tasks_from_description(suggester, "Garage slab")

        assert result.message == FAILURE_MESSAGE
        assert result.tasks == []

    def test_missing_suggester(self) -> None:
        result = get_tasks_from_description(None, "Garage slab")
        assert result.message == FAILURE_MESSAGE

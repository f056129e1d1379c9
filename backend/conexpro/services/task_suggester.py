"""Task suggestion service — turns a free-text job description into tasks.

Sends the description to the Anthropic Messages API and parses a JSON list
of short, actionable task strings from the reply. Suggestions are a
convenience: :func:`get_tasks_from_description` never raises, so a failed
call only means "no suggestions".
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

import anthropic

from conexpro.exceptions import TaskSuggestionError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Result model
# ---------------------------------------------------------------------------


SUCCESS_MESSAGE = "success"
VALIDATION_MESSAGE = "Validation error."
NO_TASKS_MESSAGE = "Could not generate tasks from the description."
FAILURE_MESSAGE = "An error occurred while communicating with the AI."


@dataclass(frozen=True)
class TaskSuggestionResult:
    """Outcome of a suggestion request, ready to show next to the form."""

    message: str
    tasks: list[str] = field(default_factory=list)
    field_errors: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.message == SUCCESS_MESSAGE


# ---------------------------------------------------------------------------
# System prompt
# ---------------------------------------------------------------------------

SYSTEM_PROMPT = (
    "You are a project manager assistant for a concrete contracting "
    "company. Your task is to parse the given job description into a "
    "list of actionable tasks.\n\n"
    "Each task must be short (under 12 words), start with a verb and "
    "describe one piece of work a crew can check off.\n\n"
    "Output a JSON object matching EXACTLY this schema:\n\n"
    "```json\n"
    "{\n"
    '  "tasks": ["<task>", "<task>"]\n'
    "}\n"
    "```\n\n"
    "Wrap the JSON in ```json ... ``` code fences and output nothing else."
)

_MAX_RETRIES = 1
_MAX_TASKS = 25


class TaskSuggester:
    """Suggests job tasks from a description using Anthropic's API."""

    def __init__(
        self,
        api_key: str,
        model: str = "claude-sonnet-4-5-20250929",
        timeout: float = 30.0,
    ) -> None:
        self._client = anthropic.Anthropic(api_key=api_key, timeout=timeout)
        self._model = model

    def suggest_tasks(self, description: str) -> list[str]:
        """Return the suggested tasks for ``description``.

        Raises
        ------
        TaskSuggestionError
            If the API call fails or the reply cannot be parsed after a retry.
        """
        for attempt in range(_MAX_RETRIES + 1):
            try:
                raw_response = self._call_api(description)
            except anthropic.APIError as exc:
                msg = f"Task suggestion request failed: {exc}"
                raise TaskSuggestionError(msg) from exc

            tasks = parse_tasks(raw_response)
            if tasks is not None:
                return tasks
            logger.warning(
                "Malformed task suggestion response (attempt %d/%d)",
                attempt + 1,
                _MAX_RETRIES + 1,
            )

        msg = "Task suggestion returned unparseable response after retries"
        raise TaskSuggestionError(msg)

    def _call_api(self, description: str) -> str:
        response = self._client.messages.create(
            model=self._model,
            max_tokens=1024,
            system=SYSTEM_PROMPT,
            messages=[
                {"role": "user", "content": f"Job Description: {description}\n\nTasks:"},
            ],
        )
        text_blocks = [block.text for block in response.content if block.type == "text"]
        return "\n".join(text_blocks)


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------


def _extract_json(text: str) -> str | None:
    """Extract JSON from ```json ... ``` code fences, or the bare text."""
    start = text.find("```json")
    if start == -1:
        start = text.find("```")
        if start == -1:
            stripped = text.strip()
            return stripped if stripped.startswith(("{", "[")) else None
        start += 3
    else:
        start += 7

    end = text.find("```", start)
    if end == -1:
        return None
    return text[start:end].strip()


def parse_tasks(raw_response: str) -> list[str] | None:
    """Parse the task list from a model reply, or None if it is malformed.

    Accepts ``{"tasks": [...]}`` or a bare list. Blank entries and
    duplicates are dropped.
    """
    json_str = _extract_json(raw_response)
    if json_str is None:
        logger.warning("No JSON block found in task suggestion response")
        return None

    try:
        data: Any = json.loads(json_str)
    except json.JSONDecodeError:
        logger.warning("Invalid JSON in task suggestion response")
        return None

    if isinstance(data, dict):
        data = data.get("tasks")
    if not isinstance(data, list):
        return None

    tasks = [item.strip() for item in data if isinstance(item, str) and item.strip()]
    return list(dict.fromkeys(tasks))[:_MAX_TASKS]


def get_tasks_from_description(
    suggester: TaskSuggester | None,
    description: str | None,
) -> TaskSuggestionResult:
    """Validate the description and ask for suggestions, never raising.

    A missing suggester (no API key configured) is reported the same way as
    a failed call.
    """
    text = (description or "").strip()
    if not text:
        return TaskSuggestionResult(
            message=VALIDATION_MESSAGE,
            field_errors={"job_description": "Job description cannot be empty."},
        )

    if suggester is None:
        logger.warning("Task suggestion requested but no suggester is configured")
        return TaskSuggestionResult(message=FAILURE_MESSAGE)

    try:
        tasks = suggester.suggest_tasks(text)
    except TaskSuggestionError:
        logger.warning("Task suggestion failed", exc_info=True)
        return TaskSuggestionResult(message=FAILURE_MESSAGE)

    if not tasks:
        return TaskSuggestionResult(message=NO_TASKS_MESSAGE)
    return TaskSuggestionResult(message=SUCCESS_MESSAGE, tasks=tasks)

"""Custom exception hierarchy for the ConexPro backend."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from conexpro.validation import FieldIssue


class ConexProError(Exception):
    """Base exception for all ConexPro errors."""


class QuoteValidationError(ConexProError):
    """Raised when quote form input fails per-field validation."""

    def __init__(self, issues: list[FieldIssue]) -> None:
        self.issues = list(issues)
        fields = ", ".join(issue.path for issue in self.issues)
        super().__init__(f"Invalid quote form fields: {fields}")


class RecordNotFoundError(ConexProError):
    """Raised when a job, quote or team member id is not in its collection."""

    def __init__(self, collection: str, record_id: str) -> None:
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"No record '{record_id}' in '{collection}'")


class StoreError(ConexProError):
    """Raised when a write or read against the document store fails."""


class InvalidTransitionError(ConexProError):
    """Raised when a status change is not allowed."""


class TaskSuggestionError(ConexProError):
    """Raised when task suggestion from a job description fails."""

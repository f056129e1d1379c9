"""Per-field validation for the quote estimator form.

Structural problems (negative numbers, fractional counts, wrong types) are
rejected by the pydantic models themselves. This module adds the checks a
form needs before a quote is submitted: required fields in rows the user
has started filling in, and positive sizes and counts.

Rows with nothing entered are skipped; a freshly added row is a normal
state, not an error. Issues are reported per dotted field path (e.g.
``slabs.0.thickness``) so they can be shown next to the offending input.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError
from pydantic.alias_generators import to_snake

from conexpro.exceptions import QuoteValidationError
from conexpro.models.quote import QuoteFormData

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pydantic import BaseModel


@dataclass(frozen=True)
class FieldIssue:
    """A validation problem attached to one form field."""

    path: str
    message: str


@dataclass(frozen=True)
class _RowRule:
    required: tuple[str, ...]
    optional_positive: tuple[str, ...] = ()
    any_of: tuple[str, ...] = ()


# section -> rule. Required fields must be entered and > 0.
_ROW_RULES: dict[str, _RowRule] = {
    "slabs": _RowRule(
        required=("length", "width", "thickness"),
        optional_positive=("rebar_spacing",),
    ),
    "footings": _RowRule(required=("length", "width", "depth")),
    "round_pier_holes": _RowRule(required=("count", "diameter", "depth")),
    "square_pier_holes": _RowRule(required=("count", "length", "width", "depth")),
    "travel_costs": _RowRule(required=("trips", "trucks", "miles")),
    "labor": _RowRule(required=("employees", "days", "cost_per_day")),
    "equipment": _RowRule(required=("days_used", "price_per_day")),
    "other_expenses": _RowRule(required=(), any_of=("cost", "cost_per_sq_ft")),
}

_LABEL_FIELDS = frozenset({"name"})


def _row_is_empty(row: BaseModel) -> bool:
    for name, value in row:
        if name in _LABEL_FIELDS:
            if value:
                return False
        elif value is not None:
            return False
    return True


def _validate_row(section: str, index: int, row: BaseModel, rule: _RowRule) -> list[FieldIssue]:
    issues: list[FieldIssue] = []
    prefix = f"{section}.{index}"

    for name in rule.required:
        value = getattr(row, name)
        if value is None:
            issues.append(FieldIssue(f"{prefix}.{name}", f"{name} is required"))
        elif value <= 0:
            issues.append(FieldIssue(f"{prefix}.{name}", f"{name} must be positive"))

    for name in rule.optional_positive:
        value = getattr(row, name)
        if value is not None and value <= 0:
            issues.append(FieldIssue(f"{prefix}.{name}", f"{name} must be positive"))

    if rule.any_of and all(getattr(row, name) is None for name in rule.any_of):
        names = " or ".join(rule.any_of)
        issues.append(FieldIssue(f"{prefix}.{rule.any_of[0]}", f"{names} is required"))

    return issues


def validate_quote_form(form_data: QuoteFormData) -> list[FieldIssue]:
    """Return every per-field issue in the form; empty when it can be submitted."""
    issues: list[FieldIssue] = []
    for section, rule in _ROW_RULES.items():
        rows: list[BaseModel] = getattr(form_data, section)
        for index, row in enumerate(rows):
            if _row_is_empty(row):
                continue
            issues.extend(_validate_row(section, index, row, rule))
    return issues


def ensure_valid_quote_form(form_data: QuoteFormData) -> None:
    """Raise :class:`QuoteValidationError` if the form has any issue."""
    issues = validate_quote_form(form_data)
    if issues:
        raise QuoteValidationError(issues)


def issues_from_validation_error(exc: ValidationError) -> list[FieldIssue]:
    """Convert a pydantic ``ValidationError`` into per-field issues."""
    return [
        FieldIssue(
            path=".".join(
                to_snake(part) if isinstance(part, str) else str(part)
                for part in error["loc"]
            ),
            message=error["msg"],
        )
        for error in exc.errors()
    ]


def parse_and_validate_form(raw: Mapping[str, Any]) -> tuple[QuoteFormData | None, list[FieldIssue]]:
    """Parse a raw form payload and collect every issue.

    Returns ``(form, issues)``; ``form`` is None when the payload is
    structurally invalid (e.g. a negative count).
    """
    try:
        form_data = QuoteFormData.model_validate(raw)
    except ValidationError as exc:
        return None, issues_from_validation_error(exc)
    return form_data, validate_quote_form(form_data)

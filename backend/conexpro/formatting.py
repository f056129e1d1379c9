"""Formatting helpers for estimate output.

Rounding happens here and only here; the estimator itself returns
unrounded values.
"""

from __future__ import annotations


def round_money(amount: float) -> float:
    """Round a figure to 2 decimals for presentation."""
    return round(amount, 2)


def format_currency(amount: float) -> str:
    """Format a dollar amount with cents and comma separators (e.g. '$1,234.50')."""
    return f"${amount:,.2f}"


def format_quantity(value: float) -> str:
    """Format a quantity to 2 decimals with comma separators."""
    return f"{value:,.2f}"

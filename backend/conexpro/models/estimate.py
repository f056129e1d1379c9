"""Estimator output model for the ConexPro quote engine."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from conexpro.models.base import FrozenCamelModel

# Fields rounded for presentation; rebar_sticks is already a whole number.
_ROUNDED_FIELDS: tuple[str, ...] = (
    "total_slab_sq_ft",
    "total_cubic_ft",
    "total_cubic_yards",
    "concrete_cost",
    "rebar_linear_ft",
    "rebar_cost",
    "labor_cost",
    "equipment_cost",
    "travel_cost",
    "other_expenses_cost",
    "total_costs",
    "total_cost_per_sq_ft",
    "profit_amount",
    "quote_total",
)


class QuoteCalculations(FrozenCamelModel):
    """Derived quantities and costs for one quote form snapshot.

    Values are kept at full floating precision so they compose exactly
    (``quote_total == total_costs + profit_amount``). Use :meth:`rounded`
    or :meth:`to_summary_dict` for display.
    """

    total_slab_sq_ft: float = 0.0
    total_cubic_ft: float = 0.0
    total_cubic_yards: float = 0.0
    concrete_cost: float = 0.0
    rebar_linear_ft: float = 0.0
    rebar_sticks: int = Field(default=0, ge=0)
    rebar_cost: float = 0.0
    labor_cost: float = 0.0
    equipment_cost: float = 0.0
    travel_cost: float = 0.0
    other_expenses_cost: float = 0.0
    total_costs: float = 0.0
    total_cost_per_sq_ft: float = 0.0
    profit_amount: float = 0.0
    quote_total: float = 0.0

    def rounded(self) -> QuoteCalculations:
        """Return a copy with every figure rounded to 2 decimals independently."""
        from conexpro.formatting import round_money

        return self.model_copy(
            update={name: round_money(getattr(self, name)) for name in _ROUNDED_FIELDS}
        )

    def to_summary_dict(self) -> dict[str, Any]:
        """Produce a flat dict of display strings for the quote form footer."""
        from conexpro.formatting import format_currency, format_quantity

        return {
            "total_slab_sq_ft_formatted": f"{format_quantity(self.total_slab_sq_ft)} SF",
            "total_cubic_yards_formatted": f"{format_quantity(self.total_cubic_yards)} yd³",
            "concrete_cost_formatted": format_currency(self.concrete_cost),
            "rebar_sticks": self.rebar_sticks,
            "rebar_cost_formatted": format_currency(self.rebar_cost),
            "labor_cost_formatted": format_currency(self.labor_cost),
            "equipment_cost_formatted": format_currency(self.equipment_cost),
            "travel_cost_formatted": format_currency(self.travel_cost),
            "other_expenses_cost_formatted": format_currency(self.other_expenses_cost),
            "total_costs_formatted": format_currency(self.total_costs),
            "total_cost_per_sq_ft_formatted": format_currency(self.total_cost_per_sq_ft),
            "profit_amount_formatted": format_currency(self.profit_amount),
            "quote_total_formatted": format_currency(self.quote_total),
        }

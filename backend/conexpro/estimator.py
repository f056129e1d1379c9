"""Quote estimation engine.

:func:`compute_quote_estimate` turns a :class:`QuoteFormData` snapshot into
a :class:`QuoteCalculations` result:

1. **Quantities**: slab area, concrete volume (slabs, footings, round and
   square piers) and rebar linear footage, via :mod:`conexpro.quantities`.
2. **Material costs**: concrete by the cubic yard, rebar by the whole
   20 ft stick after a 10% waste allowance.
3. **Section costs**: labor, equipment, travel and other expenses, each
   a pure function of its own rows.
4. **Totals**: total costs, cost per slab square foot, profit and the
   quote total.

The function is pure and recomputes everything on every call. Incomplete
forms are normal: absent values count as zero and zero denominators give
zero, so estimation never raises for a partially filled form.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from conexpro.models.estimate import QuoteCalculations
from conexpro.quantities import (
    cubic_feet_to_yards,
    footing_cubic_feet,
    footing_rebar_feet,
    rebar_stick_count,
    round_pier_cubic_feet,
    slab_cubic_feet,
    slab_rebar_feet,
    slab_square_feet,
    square_pier_cubic_feet,
    value_or_zero,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from conexpro.models.quote import (
        Equipment,
        Labor,
        OtherExpense,
        QuoteFormData,
        QuoteProfit,
        TravelCost,
    )


def labor_cost(labor: Iterable[Labor]) -> float:
    return math.fsum(
        value_or_zero(row.employees) * value_or_zero(row.days) * value_or_zero(row.cost_per_day)
        for row in labor
    )


def equipment_cost(equipment: Iterable[Equipment]) -> float:
    return math.fsum(
        value_or_zero(row.days_used) * value_or_zero(row.price_per_day)
        for row in equipment
    )


def travel_cost(travel: Iterable[TravelCost], price_per_mile: float | None) -> float:
    rate = value_or_zero(price_per_mile)
    return math.fsum(
        value_or_zero(row.trips) * value_or_zero(row.trucks) * value_or_zero(row.miles) * rate
        for row in travel
    )


def other_expenses_cost(expenses: Iterable[OtherExpense], slab_sq_ft: float) -> float:
    """Flat cost plus the per-square-foot rate scaled by total slab area."""
    return math.fsum(
        value_or_zero(row.cost) + value_or_zero(row.cost_per_sq_ft) * slab_sq_ft
        for row in expenses
    )


def profit_amount(profit: QuoteProfit, slab_sq_ft: float) -> float:
    return value_or_zero(profit.fixed_amount) + value_or_zero(profit.per_square_foot) * slab_sq_ft


def compute_quote_estimate(form_data: QuoteFormData) -> QuoteCalculations:
    """Derive quantities, sub-costs and the quote total for a form snapshot.

    Args:
        form_data: The current quote form. It is not modified.

    Returns:
        Unrounded calculations; round at presentation time with
        :meth:`QuoteCalculations.rounded`.
    """
    costs = form_data.costs

    # 1. Quantities
    total_slab_sq_ft = slab_square_feet(form_data.slabs)
    total_cubic_ft = math.fsum(
        (
            slab_cubic_feet(form_data.slabs),
            footing_cubic_feet(form_data.footings),
            round_pier_cubic_feet(form_data.round_pier_holes),
            square_pier_cubic_feet(form_data.square_pier_holes),
        )
    )
    total_cubic_yards = cubic_feet_to_yards(total_cubic_ft)
    rebar_linear_ft = slab_rebar_feet(form_data.slabs) + footing_rebar_feet(form_data.footings)
    rebar_sticks = rebar_stick_count(rebar_linear_ft)

    # 2. Material costs
    concrete = total_cubic_yards * value_or_zero(costs.concrete_price)
    rebar = rebar_sticks * value_or_zero(costs.rebar_price)

    # 3. Section costs
    labor = labor_cost(form_data.labor)
    equipment = equipment_cost(form_data.equipment)
    travel = travel_cost(form_data.travel_costs, costs.travel_price)
    other = other_expenses_cost(form_data.other_expenses, total_slab_sq_ft)

    # 4. Totals
    total_costs = math.fsum((concrete, rebar, labor, equipment, travel, other))
    cost_per_sq_ft = total_costs / total_slab_sq_ft if total_slab_sq_ft > 0 else 0.0
    profit = profit_amount(form_data.profit, total_slab_sq_ft)

    return QuoteCalculations(
        total_slab_sq_ft=total_slab_sq_ft,
        total_cubic_ft=total_cubic_ft,
        total_cubic_yards=total_cubic_yards,
        concrete_cost=concrete,
        rebar_linear_ft=rebar_linear_ft,
        rebar_sticks=rebar_sticks,
        rebar_cost=rebar,
        labor_cost=labor,
        equipment_cost=equipment,
        travel_cost=travel,
        other_expenses_cost=other,
        total_costs=total_costs,
        total_cost_per_sq_ft=cost_per_sq_ft,
        profit_amount=profit,
        quote_total=total_costs + profit,
    )

"""Quote and quote-form domain models.

Every measurement on a form row is optional: ``None`` means "not entered
yet" and is kept as-is in the stored record. The estimator reads absent
values as zero without touching the model.
"""

from __future__ import annotations

import datetime as dt

from pydantic import Field

from conexpro.models.base import CamelModel, FrozenCamelModel
from conexpro.models.enums import QuoteStatus


class Slab(FrozenCamelModel):
    """Rectangular poured slab with a two-way rebar grid."""

    length: float | None = Field(default=None, ge=0)  # ft
    width: float | None = Field(default=None, ge=0)  # ft
    thickness: float | None = Field(default=None, ge=0)  # in
    rebar_spacing: float | None = Field(default=None, ge=0)  # in


class Footing(FrozenCamelModel):
    """Linear footing trench with longitudinal rebar rows."""

    length: float | None = Field(default=None, ge=0)  # ft
    width: float | None = Field(default=None, ge=0)  # in
    depth: float | None = Field(default=None, ge=0)  # in
    rebar_rows: int | None = Field(default=None, ge=0)


class RoundPierHole(FrozenCamelModel):
    """A set of identical round pier holes."""

    count: int | None = Field(default=None, ge=0)
    diameter: float | None = Field(default=None, ge=0)  # in
    depth: float | None = Field(default=None, ge=0)  # in


class SquarePierHole(FrozenCamelModel):
    """A set of identical square pier holes."""

    count: int | None = Field(default=None, ge=0)
    length: float | None = Field(default=None, ge=0)  # in
    width: float | None = Field(default=None, ge=0)  # in
    depth: float | None = Field(default=None, ge=0)  # in


class TravelCost(FrozenCamelModel):
    trips: int | None = Field(default=None, ge=0)
    trucks: int | None = Field(default=None, ge=0)
    miles: float | None = Field(default=None, ge=0)  # per trip


class Labor(FrozenCamelModel):
    employees: int | None = Field(default=None, ge=0)
    days: float | None = Field(default=None, ge=0)
    cost_per_day: float | None = Field(default=None, ge=0)  # per employee


class Equipment(FrozenCamelModel):
    name: str | None = None
    days_used: float | None = Field(default=None, ge=0)
    price_per_day: float | None = Field(default=None, ge=0)


class OtherExpense(FrozenCamelModel):
    """Flat expense plus an optional rate scaled by total slab area."""

    name: str | None = None
    cost: float | None = Field(default=None, ge=0)
    cost_per_sq_ft: float | None = Field(default=None, ge=0)


class QuoteCosts(FrozenCamelModel):
    """Global rate sheet for a quote."""

    concrete_price: float | None = Field(default=None, ge=0)  # per yd³
    rebar_price: float | None = Field(default=None, ge=0)  # per 20 ft stick
    travel_price: float | None = Field(default=None, ge=0)  # per mile


class QuoteProfit(FrozenCamelModel):
    fixed_amount: float | None = Field(default=None, ge=0)
    per_square_foot: float | None = Field(default=None, ge=0)


class QuoteFormData(FrozenCamelModel):
    """Snapshot of the full quote estimator form."""

    job_details: str | None = None
    slabs: list[Slab] = Field(default_factory=list)
    footings: list[Footing] = Field(default_factory=list)
    round_pier_holes: list[RoundPierHole] = Field(default_factory=list)
    square_pier_holes: list[SquarePierHole] = Field(default_factory=list)
    travel_costs: list[TravelCost] = Field(default_factory=list)
    labor: list[Labor] = Field(default_factory=list)
    equipment: list[Equipment] = Field(default_factory=list)
    other_expenses: list[OtherExpense] = Field(default_factory=list)
    costs: QuoteCosts = Field(default_factory=QuoteCosts)
    profit: QuoteProfit = Field(default_factory=QuoteProfit)


class Client(CamelModel):
    """Customer a quote or job is for."""

    id: str
    name: str = Field(min_length=1)
    contact_person: str = ""
    phone: str = ""
    email: str = ""


class Quote(CamelModel):
    """A priced proposal for a job.

    ``total`` is the estimator's quote total at presentation precision,
    refreshed whenever ``form_data`` changes through the quote service.
    """

    id: str
    quote_number: str
    client: Client
    dates: list[dt.date] = Field(min_length=1)
    valid_until: dt.date
    status: QuoteStatus = QuoteStatus.DRAFT
    form_data: QuoteFormData = Field(default_factory=QuoteFormData)
    total: float = 0.0

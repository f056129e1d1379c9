"""ConexPro quote estimation backend.

Usage::

    from conexpro import QuoteFormData, Slab, QuoteCosts, compute_quote_estimate

    form = QuoteFormData(
        slabs=[Slab(length=20, width=10, thickness=4, rebar_spacing=18)],
        costs=QuoteCosts(concrete_price=200, rebar_price=5),
    )
    result = compute_quote_estimate(form).rounded()
"""

from conexpro.estimator import compute_quote_estimate
from conexpro.models.enums import JobStatus, QuoteStatus, TeamMemberRole
from conexpro.models.estimate import QuoteCalculations
from conexpro.models.job import Job, Task, TeamMember
from conexpro.models.quote import (
    Client,
    Equipment,
    Footing,
    Labor,
    OtherExpense,
    Quote,
    QuoteCosts,
    QuoteFormData,
    QuoteProfit,
    RoundPierHole,
    Slab,
    SquarePierHole,
    TravelCost,
)
from conexpro.validation import FieldIssue, validate_quote_form

__all__ = [
    "Client",
    "Equipment",
    "FieldIssue",
    "Footing",
    "Job",
    "JobStatus",
    "Labor",
    "OtherExpense",
    "Quote",
    "QuoteCalculations",
    "QuoteCosts",
    "QuoteFormData",
    "QuoteProfit",
    "QuoteStatus",
    "RoundPierHole",
    "Slab",
    "SquarePierHole",
    "Task",
    "TeamMember",
    "TeamMemberRole",
    "TravelCost",
    "compute_quote_estimate",
    "validate_quote_form",
]

"""Domain models for the ConexPro backend."""

from conexpro.models.enums import Collection, JobStatus, QuoteStatus, TeamMemberRole
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

__all__ = [
    "Client",
    "Collection",
    "Equipment",
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
]

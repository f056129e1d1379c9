"""Enums for the ConexPro domain models."""

from enum import StrEnum


class QuoteStatus(StrEnum):
    """Lifecycle states of a price quote."""

    DRAFT = "Draft"
    SENT = "Sent"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"


class JobStatus(StrEnum):
    """Lifecycle states of a scheduled job."""

    SCHEDULED = "Scheduled"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    ON_HOLD = "On Hold"
    COMPLETED_AND_PAID = "Completed and Paid"


class TeamMemberRole(StrEnum):
    """Crew roles a team member can hold."""

    FOREMAN = "Foreman"
    LABORER = "Laborer"
    FINISHER = "Finisher"
    DRIVER = "Driver"


class Collection(StrEnum):
    """Names of the document store collections."""

    JOBS = "jobs"
    QUOTES = "quotes"
    TEAM_MEMBERS = "teamMembers"

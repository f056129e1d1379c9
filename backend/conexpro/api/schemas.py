"""Request bodies for the HTTP API."""

from __future__ import annotations

import datetime as dt

from pydantic import Field

from conexpro.models.base import CamelModel
from conexpro.models.enums import JobStatus, QuoteStatus, TeamMemberRole
from conexpro.models.job import Task
from conexpro.models.quote import Client, QuoteFormData


class QuoteCreateRequest(CamelModel):
    client: Client
    dates: list[dt.date] = Field(min_length=1)
    valid_until: dt.date
    form_data: QuoteFormData = Field(default_factory=QuoteFormData)
    status: QuoteStatus = QuoteStatus.DRAFT
    quote_number: str | None = None


class QuoteStatusRequest(CamelModel):
    status: QuoteStatus


class JobStatusRequest(CamelModel):
    status: JobStatus


class JobTasksRequest(CamelModel):
    tasks: list[Task]


class TeamMemberRequest(CamelModel):
    name: str
    role: TeamMemberRole = TeamMemberRole.LABORER
    avatar_url: str = ""


class TaskSuggestionRequest(CamelModel):
    job_description: str = ""

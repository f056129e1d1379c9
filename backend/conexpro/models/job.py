"""Job, task and team member domain models."""

from __future__ import annotations

import datetime as dt

from pydantic import Field, field_validator

from conexpro.models.base import CamelModel
from conexpro.models.enums import JobStatus, TeamMemberRole
from conexpro.models.quote import Client, Quote


class TeamMember(CamelModel):
    """A crew member that can be assigned to jobs."""

    id: str
    name: str
    role: TeamMemberRole = TeamMemberRole.LABORER
    avatar_url: str = ""

    @field_validator("name")
    @classmethod
    def name_must_have_two_chars(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            msg = "name must be at least 2 characters"
            raise ValueError(msg)
        return v

    @field_validator("avatar_url")
    @classmethod
    def avatar_url_must_be_http(cls, v: str) -> str:
        if v and not v.startswith(("http://", "https://")):
            msg = "avatar_url must be empty or an http(s) URL"
            raise ValueError(msg)
        return v


class Task(CamelModel):
    id: str
    description: str = Field(min_length=1)
    completed: bool = False


class Job(CamelModel):
    """A scheduled unit of work, optionally promoted from a quote."""

    id: str
    title: str
    location: str = ""
    dates: list[dt.date] = Field(default_factory=list)
    client: Client
    team: list[TeamMember] = Field(default_factory=list)
    tasks: list[Task] = Field(default_factory=list)
    status: JobStatus = JobStatus.SCHEDULED
    description: str = ""
    quote_details: Quote | None = None

    @property
    def task_progress(self) -> float:
        """Percentage of completed tasks, 0 when the job has none."""
        if not self.tasks:
            return 0.0
        done = sum(1 for task in self.tasks if task.completed)
        return done / len(self.tasks) * 100

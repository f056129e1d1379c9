"""Job service — job records, their task checklists and crews."""

from __future__ import annotations

import logging
import uuid
from collections import defaultdict
from typing import TYPE_CHECKING

from conexpro.exceptions import InvalidTransitionError, RecordNotFoundError
from conexpro.models.enums import Collection, JobStatus
from conexpro.models.job import Job, Task
from conexpro.services.quote_service import job_title_from_details, quote_total
from conexpro.validation import ensure_valid_quote_form

if TYPE_CHECKING:
    import datetime as dt
    from collections.abc import Callable, Iterable

    from conexpro.models.job import TeamMember
    from conexpro.models.quote import QuoteFormData
    from conexpro.store.base import DocumentStore, Record, Unsubscribe

logger = logging.getLogger(__name__)


class JobService:
    """Read and edit job records over a :class:`DocumentStore`."""

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def list_jobs(self) -> list[Job]:
        records = await self._store.list_all(Collection.JOBS)
        return [Job.model_validate(r) for r in records]

    async def get_job(self, job_id: str) -> Job:
        record = await self._store.get(Collection.JOBS, job_id)
        if record is None:
            raise RecordNotFoundError(Collection.JOBS, job_id)
        return Job.model_validate(record)

    async def update_job_status(self, job_id: str, status: JobStatus) -> Job:
        job = await self.get_job(job_id)
        return await self._save(job.model_copy(update={"status": JobStatus(status)}))

    async def set_tasks(self, job_id: str, tasks: list[Task]) -> Job:
        job = await self.get_job(job_id)
        return await self._save(job.model_copy(update={"tasks": list(tasks)}))

    async def add_tasks(self, job_id: str, descriptions: Iterable[str]) -> Job:
        """Append uncompleted tasks; blank descriptions are skipped."""
        job = await self.get_job(job_id)
        new_tasks = [
            Task(id=uuid.uuid4().hex, description=text.strip())
            for text in descriptions
            if text.strip()
        ]
        return await self._save(job.model_copy(update={"tasks": [*job.tasks, *new_tasks]}))

    async def toggle_task(self, job_id: str, task_id: str) -> Job:
        job = await self.get_job(job_id)
        if not any(task.id == task_id for task in job.tasks):
            raise RecordNotFoundError(f"{Collection.JOBS}/{job_id}/tasks", task_id)
        tasks = [
            task.model_copy(update={"completed": not task.completed}) if task.id == task_id else task
            for task in job.tasks
        ]
        return await self._save(job.model_copy(update={"tasks": tasks}))

    async def assign_team(self, job_id: str, members: list[TeamMember]) -> Job:
        """Replace the job's crew; duplicate member ids are collapsed."""
        job = await self.get_job(job_id)
        unique = list({member.id: member for member in members}.values())
        return await self._save(job.model_copy(update={"team": unique}))

    async def update_job_quote(self, job_id: str, form_data: QuoteFormData) -> Job:
        """Edit the quote embedded in a job.

        The embedded quote total is re-derived and the job title follows the
        new job details.
        """
        job = await self.get_job(job_id)
        if job.quote_details is None:
            msg = f"Job {job_id} was not created from a quote"
            raise InvalidTransitionError(msg)

        ensure_valid_quote_form(form_data)
        quote = job.quote_details.model_copy(
            update={"form_data": form_data, "total": quote_total(form_data)}
        )
        title = job_title_from_details(form_data.job_details, quote.quote_number)
        return await self._save(job.model_copy(update={"quote_details": quote, "title": title}))

    async def delete_job(self, job_id: str) -> None:
        await self._store.delete(Collection.JOBS, job_id)
        logger.info("Deleted job %s", job_id)

    async def jobs_by_date(self) -> dict[dt.date, list[Job]]:
        """Group jobs under each of their scheduled dates, in date order."""
        grouped: dict[dt.date, list[Job]] = defaultdict(list)
        for job in await self.list_jobs():
            for day in dict.fromkeys(job.dates):
                grouped[day].append(job)
        return {day: grouped[day] for day in sorted(grouped)}

    def observe_jobs(self, listener: Callable[[list[Job]], None]) -> Unsubscribe:
        def on_records(records: list[Record]) -> None:
            listener([Job.model_validate(r) for r in records])

        return self._store.subscribe(Collection.JOBS, on_records)

    async def _save(self, job: Job) -> Job:
        await self._store.set(Collection.JOBS, job.id, job.model_dump(mode="json", by_alias=True))
        return job

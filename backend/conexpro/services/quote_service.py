"""Quote service — keeps quote records in the store in sync with the estimator.

Every write recomputes the quote total from its form data, so a stored
quote never carries a stale total. Accepting a quote promotes it to a Job
and removes it from the active quote collection.
"""

from __future__ import annotations

import datetime as dt
import logging
import uuid
from typing import TYPE_CHECKING

from conexpro.estimator import compute_quote_estimate
from conexpro.exceptions import InvalidTransitionError, RecordNotFoundError
from conexpro.formatting import round_money
from conexpro.models.enums import Collection, JobStatus, QuoteStatus
from conexpro.models.job import Job
from conexpro.models.quote import Client, Quote, QuoteFormData
from conexpro.validation import ensure_valid_quote_form

if TYPE_CHECKING:
    from collections.abc import Callable

    from conexpro.store.base import DocumentStore, Record, Unsubscribe

logger = logging.getLogger(__name__)

_MAX_TITLE_LENGTH = 80


def job_title_from_details(job_details: str | None, quote_number: str) -> str:
    """Title for a job: first non-empty line of the job details, else a quote reference."""
    for line in (job_details or "").splitlines():
        line = line.strip()
        if line:
            return line[:_MAX_TITLE_LENGTH]
    return f"Job for Quote {quote_number}"


def job_from_quote(quote: Quote, job_id: str | None = None) -> Job:
    """Build the scheduled Job an accepted quote turns into.

    The job id defaults to the quote id, so promoting the same quote twice
    rewrites one job instead of adding a second.
    """
    accepted = quote.model_copy(update={"status": QuoteStatus.ACCEPTED}, deep=True)
    return Job(
        id=job_id or quote.id,
        title=job_title_from_details(quote.form_data.job_details, quote.quote_number),
        dates=list(quote.dates),
        client=quote.client.model_copy(deep=True),
        team=[],
        tasks=[],
        status=JobStatus.SCHEDULED,
        description=quote.form_data.job_details or "",
        quote_details=accepted,
    )


def quote_total(form_data: QuoteFormData) -> float:
    """Quote total at presentation precision."""
    return round_money(compute_quote_estimate(form_data).quote_total)


def _dump(model: Quote | Job) -> Record:
    return model.model_dump(mode="json", by_alias=True)


class QuoteService:
    """Create, edit, promote and delete quotes over a :class:`DocumentStore`.

    Args:
        store: The document store holding the ``quotes`` and ``jobs``
            collections.
    """

    def __init__(self, store: DocumentStore) -> None:
        self._store = store

    async def list_quotes(self) -> list[Quote]:
        records = await self._store.list_all(Collection.QUOTES)
        return [Quote.model_validate(r) for r in records]

    async def get_quote(self, quote_id: str) -> Quote:
        record = await self._store.get(Collection.QUOTES, quote_id)
        if record is None:
            raise RecordNotFoundError(Collection.QUOTES, quote_id)
        return Quote.model_validate(record)

    async def create_quote(
        self,
        client: Client,
        dates: list[dt.date],
        valid_until: dt.date,
        form_data: QuoteFormData | None = None,
        status: QuoteStatus = QuoteStatus.DRAFT,
        quote_number: str | None = None,
    ) -> Quote:
        """Validate the form, price it and store a new quote.

        Raises:
            QuoteValidationError: If any form field is invalid.
            InvalidTransitionError: If ``status`` is Accepted; quotes are
                accepted through :meth:`update_quote_status`.
        """
        if status == QuoteStatus.ACCEPTED:
            msg = "A new quote cannot start as Accepted"
            raise InvalidTransitionError(msg)

        form_data = form_data or QuoteFormData()
        ensure_valid_quote_form(form_data)

        quote_id = uuid.uuid4().hex
        quote = Quote(
            id=quote_id,
            quote_number=quote_number or self._new_quote_number(quote_id),
            client=client,
            dates=dates,
            valid_until=valid_until,
            status=status,
            form_data=form_data,
            total=quote_total(form_data),
        )
        await self._store.set(Collection.QUOTES, quote.id, _dump(quote))
        logger.info("Created quote %s (total %.2f)", quote.quote_number, quote.total)
        return quote

    async def update_quote(self, quote: Quote) -> Quote:
        """Replace an active quote, re-validating and re-pricing its form."""
        if quote.status == QuoteStatus.ACCEPTED:
            msg = "Use update_quote_status to accept a quote"
            raise InvalidTransitionError(msg)
        await self.get_quote(quote.id)

        ensure_valid_quote_form(quote.form_data)
        updated = quote.model_copy(update={"total": quote_total(quote.form_data)})
        await self._store.set(Collection.QUOTES, updated.id, _dump(updated))
        return updated

    async def update_quote_form(self, quote_id: str, form_data: QuoteFormData) -> Quote:
        quote = await self.get_quote(quote_id)
        return await self.update_quote(quote.model_copy(update={"form_data": form_data}))

    async def update_quote_status(self, quote_id: str, status: QuoteStatus) -> Job | None:
        """Change a quote's status.

        Accepted promotes the quote: a Job is written, then the quote is
        deleted. The Job is returned. A failed write leaves the quote in
        place, and retrying rewrites the same Job. Any other status is a
        plain field update and returns None.
        """
        status = QuoteStatus(status)
        quote = await self.get_quote(quote_id)

        if status != QuoteStatus.ACCEPTED:
            await self._store.update(Collection.QUOTES, quote_id, {"status": status.value})
            logger.info("Quote %s status %s -> %s", quote.quote_number, quote.status, status)
            return None

        job = job_from_quote(quote)
        await self._store.set(Collection.JOBS, job.id, _dump(job))
        await self._store.delete(Collection.QUOTES, quote_id)
        logger.info("Quote %s accepted and promoted to job %s", quote.quote_number, job.id)
        return job

    async def delete_quote(self, quote_id: str) -> None:
        await self._store.delete(Collection.QUOTES, quote_id)
        logger.info("Deleted quote %s", quote_id)

    def observe_quotes(self, listener: Callable[[list[Quote]], None]) -> Unsubscribe:
        """Call ``listener`` with the parsed active quotes on every change."""

        def on_records(records: list[Record]) -> None:
            listener([Quote.model_validate(r) for r in records])

        return self._store.subscribe(Collection.QUOTES, on_records)

    @staticmethod
    def _new_quote_number(quote_id: str) -> str:
        return f"Q-{dt.date.today():%Y%m%d}-{quote_id[:4].upper()}"

"""FastAPI application — create_app factory with /api endpoints."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

# Load .env from project root (backend/../.env or backend/.env)
_backend_dir = Path(__file__).resolve().parent.parent.parent
_project_root = _backend_dir.parent
load_dotenv(_project_root / ".env")
load_dotenv(_backend_dir / ".env")

from conexpro.api.deps import cors_origins
from conexpro.api.schemas import (  # noqa: TCH001 (FastAPI resolves at runtime)
    JobStatusRequest,
    JobTasksRequest,
    QuoteCreateRequest,
    QuoteStatusRequest,
    TaskSuggestionRequest,
    TeamMemberRequest,
)
from conexpro.estimator import compute_quote_estimate
from conexpro.exceptions import (
    InvalidTransitionError,
    QuoteValidationError,
    RecordNotFoundError,
    StoreError,
)
from conexpro.models.job import TeamMember  # noqa: TCH001
from conexpro.models.quote import Quote, QuoteFormData  # noqa: TCH001
from conexpro.services.job_service import JobService
from conexpro.services.quote_service import QuoteService
from conexpro.services.task_suggester import get_tasks_from_description
from conexpro.services.team_service import TeamService
from conexpro.validation import (
    FieldIssue,
    issues_from_validation_error,
    parse_and_validate_form,
    validate_quote_form,
)

if TYPE_CHECKING:
    from conexpro.services.task_suggester import TaskSuggester
    from conexpro.store.base import DocumentStore

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"


def _issues_payload(issues: list[FieldIssue]) -> list[dict[str, str]]:
    return [{"path": issue.path, "message": issue.message} for issue in issues]


def _dump(model: Any) -> dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True)


def create_app(
    *,
    store: DocumentStore | None = None,
    task_suggester: TaskSuggester | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    store
        Optional document store for dependency injection (e.g. tests). If
        not provided, one is created from environment variables on first
        request.
    task_suggester
        Optional pre-built task suggester for /api/tasks/suggest. If not
        provided, one is created from ANTHROPIC_API_KEY on each request;
        without a key, suggestions report a failure message.
    """
    app = FastAPI(title="ConexPro", version=API_VERSION)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Store on app state so tests can inject mocks
    app.state.store = store
    app.state.task_suggester = task_suggester

    def _get_store() -> DocumentStore:
        st: DocumentStore | None = app.state.store
        if st is not None:
            return st
        from conexpro.api.deps import create_store

        st = create_store()
        app.state.store = st
        return st

    def _get_task_suggester() -> TaskSuggester | None:
        suggester: TaskSuggester | None = app.state.task_suggester
        if suggester is not None:
            return suggester
        from conexpro.api.deps import create_task_suggester

        return create_task_suggester()

    # ------------------------------------------------------------------
    # Error mapping
    # ------------------------------------------------------------------

    @app.exception_handler(RecordNotFoundError)
    async def not_found(request: Request, exc: RecordNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(QuoteValidationError)
    async def invalid_form(request: Request, exc: QuoteValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc), "issues": _issues_payload(exc.issues)},
        )

    @app.exception_handler(ValidationError)
    async def invalid_model(request: Request, exc: ValidationError) -> JSONResponse:
        issues = issues_from_validation_error(exc)
        return JSONResponse(
            status_code=422,
            content={"detail": "Invalid record", "issues": _issues_payload(issues)},
        )

    @app.exception_handler(InvalidTransitionError)
    async def invalid_transition(request: Request, exc: InvalidTransitionError) -> JSONResponse:
        return JSONResponse(status_code=409, content={"detail": str(exc)})

    @app.exception_handler(StoreError)
    async def store_failure(request: Request, exc: StoreError) -> JSONResponse:
        logger.error("Store error during %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=503,
            content={"detail": "The record store is unavailable; your changes were not saved."},
        )

    # ------------------------------------------------------------------
    # GET /api/health
    # ------------------------------------------------------------------

    @app.get("/api/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "version": API_VERSION}

    # ------------------------------------------------------------------
    # Estimation
    # ------------------------------------------------------------------

    @app.post("/api/estimate")
    def estimate(form_data: QuoteFormData) -> dict[str, Any]:
        calculations = compute_quote_estimate(form_data)
        return {
            "calculations": _dump(calculations),
            "rounded": _dump(calculations.rounded()),
            "summary": calculations.to_summary_dict(),
            "issues": _issues_payload(validate_quote_form(form_data)),
        }

    @app.post("/api/quotes/validate")
    def validate_form(payload: dict[str, Any]) -> dict[str, Any]:
        _, issues = parse_and_validate_form(payload)
        return {"valid": not issues, "issues": _issues_payload(issues)}

    # ------------------------------------------------------------------
    # Quotes
    # ------------------------------------------------------------------

    @app.get("/api/quotes")
    async def list_quotes() -> list[dict[str, Any]]:
        quotes = await QuoteService(_get_store()).list_quotes()
        return [_dump(q) for q in quotes]

    @app.post("/api/quotes", status_code=201)
    async def create_quote(body: QuoteCreateRequest) -> dict[str, Any]:
        quote = await QuoteService(_get_store()).create_quote(
            client=body.client,
            dates=body.dates,
            valid_until=body.valid_until,
            form_data=body.form_data,
            status=body.status,
            quote_number=body.quote_number,
        )
        return _dump(quote)

    @app.get("/api/quotes/{quote_id}")
    async def get_quote(quote_id: str) -> dict[str, Any]:
        return _dump(await QuoteService(_get_store()).get_quote(quote_id))

    @app.put("/api/quotes/{quote_id}")
    async def update_quote(quote_id: str, quote: Quote) -> dict[str, Any]:
        if quote.id != quote_id:
            raise HTTPException(status_code=400, detail="Quote id does not match the URL")
        return _dump(await QuoteService(_get_store()).update_quote(quote))

    @app.patch("/api/quotes/{quote_id}/status")
    async def update_quote_status(quote_id: str, body: QuoteStatusRequest) -> dict[str, Any]:
        job = await QuoteService(_get_store()).update_quote_status(quote_id, body.status)
        return {"status": body.status.value, "job": _dump(job) if job is not None else None}

    @app.delete("/api/quotes/{quote_id}", status_code=204)
    async def delete_quote(quote_id: str) -> None:
        await QuoteService(_get_store()).delete_quote(quote_id)

    # ------------------------------------------------------------------
    # Jobs
    # ------------------------------------------------------------------

    @app.get("/api/jobs")
    async def list_jobs() -> list[dict[str, Any]]:
        jobs = await JobService(_get_store()).list_jobs()
        return [_dump(j) | {"taskProgress": j.task_progress} for j in jobs]

    @app.get("/api/jobs/{job_id}")
    async def get_job(job_id: str) -> dict[str, Any]:
        job = await JobService(_get_store()).get_job(job_id)
        return _dump(job) | {"taskProgress": job.task_progress}

    @app.patch("/api/jobs/{job_id}/status")
    async def update_job_status(job_id: str, body: JobStatusRequest) -> dict[str, Any]:
        return _dump(await JobService(_get_store()).update_job_status(job_id, body.status))

    @app.put("/api/jobs/{job_id}/quote")
    async def update_job_quote(job_id: str, form_data: QuoteFormData) -> dict[str, Any]:
        return _dump(await JobService(_get_store()).update_job_quote(job_id, form_data))

    @app.put("/api/jobs/{job_id}/tasks")
    async def set_job_tasks(job_id: str, body: JobTasksRequest) -> dict[str, Any]:
        return _dump(await JobService(_get_store()).set_tasks(job_id, body.tasks))

    @app.post("/api/jobs/{job_id}/tasks/{task_id}/toggle")
    async def toggle_job_task(job_id: str, task_id: str) -> dict[str, Any]:
        job = await JobService(_get_store()).toggle_task(job_id, task_id)
        return _dump(job) | {"taskProgress": job.task_progress}

    @app.put("/api/jobs/{job_id}/team")
    async def assign_job_team(job_id: str, members: list[TeamMember]) -> dict[str, Any]:
        return _dump(await JobService(_get_store()).assign_team(job_id, members))

    @app.delete("/api/jobs/{job_id}", status_code=204)
    async def delete_job(job_id: str) -> None:
        await JobService(_get_store()).delete_job(job_id)

    @app.get("/api/calendar")
    async def calendar() -> dict[str, list[dict[str, Any]]]:
        grouped = await JobService(_get_store()).jobs_by_date()
        return {day.isoformat(): [_dump(j) for j in jobs] for day, jobs in grouped.items()}

    # ------------------------------------------------------------------
    # Team
    # ------------------------------------------------------------------

    @app.get("/api/team")
    async def list_team() -> list[dict[str, Any]]:
        return [_dump(m) for m in await TeamService(_get_store()).list_members()]

    @app.post("/api/team", status_code=201)
    async def add_team_member(body: TeamMemberRequest) -> dict[str, Any]:
        member = await TeamService(_get_store()).add_member(
            name=body.name, role=body.role, avatar_url=body.avatar_url
        )
        return _dump(member)

    @app.put("/api/team/{member_id}")
    async def update_team_member(member_id: str, member: TeamMember) -> dict[str, Any]:
        if member.id != member_id:
            raise HTTPException(status_code=400, detail="Member id does not match the URL")
        return _dump(await TeamService(_get_store()).update_member(member))

    @app.delete("/api/team/{member_id}", status_code=204)
    async def delete_team_member(member_id: str) -> None:
        await TeamService(_get_store()).delete_member(member_id)

    # ------------------------------------------------------------------
    # POST /api/tasks/suggest
    # ------------------------------------------------------------------

    @app.post("/api/tasks/suggest")
    def suggest_tasks(body: TaskSuggestionRequest) -> dict[str, Any]:
        result = get_tasks_from_description(_get_task_suggester(), body.job_description)
        return {
            "message": result.message,
            "tasks": result.tasks,
            "fields": result.field_errors,
        }

    return app

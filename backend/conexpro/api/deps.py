"""Dependency construction for FastAPI endpoints, driven by environment variables."""

from __future__ import annotations

import logging
import os

from conexpro.services.task_suggester import TaskSuggester
from conexpro.store.json_file import JsonFileDocumentStore
from conexpro.store.memory import InMemoryDocumentStore

logger = logging.getLogger(__name__)

DEFAULT_CORS_ORIGINS = ("http://localhost:3000",)


def create_store() -> InMemoryDocumentStore:
    """Create the document store.

    Uses a JSON file at ``CONEXPRO_DATA_FILE`` when set, otherwise an
    in-memory store whose data is lost on restart.
    """
    data_file = os.environ.get("CONEXPRO_DATA_FILE", "").strip()
    if data_file:
        logger.info("Using JSON file store at %s", data_file)
        return JsonFileDocumentStore(data_file)
    logger.warning("CONEXPRO_DATA_FILE is not set; records are kept in memory only")
    return InMemoryDocumentStore()


def create_task_suggester() -> TaskSuggester | None:
    """Create a TaskSuggester, or None when ANTHROPIC_API_KEY is not set."""
    api_key = os.environ.get("ANTHROPIC_API_KEY", "")
    if not api_key:
        return None
    model = os.environ.get("CONEXPRO_TASK_MODEL", "").strip()
    if model:
        return TaskSuggester(api_key=api_key, model=model)
    return TaskSuggester(api_key=api_key)


def cors_origins() -> list[str]:
    """Allowed CORS origins from ``CONEXPRO_CORS_ORIGINS`` (comma separated)."""
    raw = os.environ.get("CONEXPRO_CORS_ORIGINS", "")
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or list(DEFAULT_CORS_ORIGINS)

"""Document store persisted to a single JSON file."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from conexpro.exceptions import StoreError
from conexpro.store.memory import InMemoryDocumentStore

logger = logging.getLogger(__name__)


class JsonFileDocumentStore(InMemoryDocumentStore):
    """In-memory store that rewrites a JSON file after every change.

    The file holds ``{collection: {record_id: record}}``. A missing file
    starts an empty store; an unreadable one raises :class:`StoreError`.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        super().__init__(self._load())

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, dict[str, dict[str, object]]]:
        if not self._path.exists():
            logger.info("Store file %s not found, starting empty", self._path)
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            msg = f"Could not read store file {self._path}: {exc}"
            raise StoreError(msg) from exc
        if not isinstance(data, dict):
            msg = f"Store file {self._path} must contain a JSON object"
            raise StoreError(msg)
        return data

    def _persist(self) -> None:
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(
                json.dumps(self._collections, indent=2, sort_keys=True),
                encoding="utf-8",
            )
            tmp_path.replace(self._path)
        except OSError as exc:
            msg = f"Could not write store file {self._path}: {exc}"
            raise StoreError(msg) from exc

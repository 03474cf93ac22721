"""Single-slot persistence for in-progress partner cards.

The form keeps one saved copy of the record. Saving overwrites it (last write
wins) and retrieving replaces the form contents wholesale. Storage is passed
in as a port so the same helpers work against a dict in tests and a directory
on disk in the app.
"""
from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Dict, Optional, Protocol

from partnercard.core.models import PartnerRecord

logger = logging.getLogger(__name__)

PROGRESS_KEY = "partnerCardProgress"


class StoragePort(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStorage:
    """Dictionary-backed storage, handy for tests and one-off scripts."""

    def __init__(self) -> None:
        self._items: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove(self, key: str) -> None:
        self._items.pop(key, None)


class FileStorage:
    """Stores each key as ``<directory>/<key>.json``."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def _path(self, key: str) -> Path:
        safe = re.sub(r"[^A-Za-z0-9_.-]", "_", key)
        return self.directory / f"{safe}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(".tmp")
        try:
            tmp_path.write_text(value, encoding="utf-8")
            tmp_path.replace(path)
        finally:
            tmp_path.unlink(missing_ok=True)

    def remove(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


def save_progress(storage: StoragePort, record: PartnerRecord) -> None:
    storage.set(PROGRESS_KEY, json.dumps(record.to_dict()))
    logger.info("Saved progress for %r", record.company_name or "(no company)")


def retrieve_progress(storage: StoragePort) -> Optional[PartnerRecord]:
    """Return the saved record, or ``None`` when nothing has been saved.

    Raises ``ValueError`` when the slot holds something other than a saved card.
    """

    raw = storage.get(PROGRESS_KEY)
    if raw is None:
        return None
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Saved progress is not valid JSON: {exc.msg}") from exc
    if not isinstance(payload, dict):
        raise ValueError("Saved progress does not contain a partner card")
    return PartnerRecord.from_dict(payload)


def clear_progress(storage: StoragePort) -> None:
    storage.remove(PROGRESS_KEY)
    logger.info("Cleared saved progress")

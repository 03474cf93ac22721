"""Parse partner card JSON files exported earlier (or saved progress) back into records."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from partnercard.core.errors import ImportValidationError
from partnercard.core.models import PartnerRecord

logger = logging.getLogger(__name__)

REQUIRED_STRING_KEYS = ("companyName", "date")


def parse_import(raw: str | bytes) -> PartnerRecord:
    """Validate imported JSON and return the record it describes.

    Only the shape is checked: the payload must be a JSON object whose
    ``companyName`` and ``date`` are strings. Everything else goes through
    :meth:`PartnerRecord.from_dict` untouched.
    """

    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ImportValidationError("The file is not UTF-8 encoded text.") from exc

    try:
        payload: Any = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ImportValidationError(f"The file is not valid JSON: {exc.msg} (line {exc.lineno}).") from exc

    if not isinstance(payload, dict):
        raise ImportValidationError("The file does not contain a partner card object.")

    for key in REQUIRED_STRING_KEYS:
        if not isinstance(payload.get(key), str):
            raise ImportValidationError(
                f"The file is not a partner card: '{key}' is missing or not text."
            )

    record = PartnerRecord.from_dict(payload)
    logger.info("Imported partner card for %r", record.company_name or "(no company)")
    return record


def load_import(path: Path) -> PartnerRecord:
    """Read ``path`` and parse it with :func:`parse_import`."""

    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise ImportValidationError(f"Could not read {path.name}: {exc.strerror or exc}") from exc
    return parse_import(raw)

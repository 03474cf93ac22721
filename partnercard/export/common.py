"""Helpers shared by every export format."""
from __future__ import annotations

from pathlib import Path


def build_filename(base: str, company_name: str | None, date: str | None, extension: str) -> str:
    """Return ``"<base> <company> <date>.<ext>"``, dropping empty parts.

    >>> build_filename("Partner Card", "  ", "", "csv")
    'Partner Card.csv'
    """

    parts = [base.strip()]
    for part in (company_name, date):
        if part and part.strip():
            parts.append(part.strip())
    return f"{' '.join(parts)}.{extension}"


def ensure_output_dir(output_path: Path) -> None:
    """Create parent folders for export outputs when missing."""

    output_path.parent.mkdir(parents=True, exist_ok=True)

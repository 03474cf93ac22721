"""Dispatch a record to one of the export formats and write the result to disk."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from partnercard.core.config import Settings
from partnercard.core.models import PartnerRecord
from partnercard.export.common import build_filename, ensure_output_dir
from partnercard.export.csv_export import to_csv
from partnercard.export.json_export import to_json
from partnercard.export.pdf_export import LogoSource, to_pdf
from partnercard.export.xlsx_export import to_xlsx

logger = logging.getLogger(__name__)

FORMATS = ("csv", "json", "xlsx", "pdf")
MIME_TYPES = {
    "csv": "text/csv",
    "json": "application/json",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "pdf": "application/pdf",
}


def render(
    record: PartnerRecord,
    fmt: str,
    settings: Settings | None = None,
    logo: LogoSource | None = None,
) -> bytes:
    """Return the encoded bytes of ``record`` in ``fmt``."""

    settings = settings or Settings()
    if fmt == "csv":
        return to_csv(record).encode("utf-8")
    if fmt == "json":
        return to_json(record).encode("utf-8")
    if fmt == "xlsx":
        return to_xlsx(record, organisation=settings.organisation, title=settings.title)
    if fmt == "pdf":
        return to_pdf(record, logo=logo, organisation=settings.organisation, title=settings.title)
    raise ValueError(f"Unknown export format '{fmt}'. Choose one of: {', '.join(FORMATS)}")


def export_filename(record: PartnerRecord, fmt: str, settings: Settings | None = None) -> str:
    settings = settings or Settings()
    return build_filename(settings.base_filename, record.company_name, record.date, fmt)


def export_record(
    record: PartnerRecord,
    fmt: str,
    output_dir: Path,
    settings: Settings | None = None,
    logo: LogoSource | None = None,
) -> Path:
    """Write ``record`` as ``fmt`` into ``output_dir`` and return the file path."""

    payload = render(record, fmt, settings=settings, logo=logo)
    output_path = output_dir / export_filename(record, fmt, settings)
    ensure_output_dir(output_path)
    output_path.write_bytes(payload)
    logger.info("Wrote %s export to %s (%d bytes)", fmt.upper(), output_path, len(payload))
    return output_path


def export_all(
    record: PartnerRecord,
    output_dir: Path,
    settings: Settings | None = None,
    logo: LogoSource | None = None,
) -> List[Path]:
    return [export_record(record, fmt, output_dir, settings=settings, logo=logo) for fmt in FORMATS]

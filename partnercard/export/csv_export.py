"""CSV export: one header row and one fully quoted value row."""
from __future__ import annotations

import csv
import io
from typing import Any

from partnercard.core.models import PartnerRecord, field_names


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return "" if value is None else str(value)


def to_csv(record: PartnerRecord) -> str:
    """Serialize a record as CSV text.

    Every value is quoted and embedded quotes are doubled, so commas, quotes
    and line breaks inside free text survive a round trip through any CSV
    reader.
    """

    headers = field_names()
    row = record.to_dict()
    buffer = io.StringIO()
    # Field names are plain identifiers, so the header row stays unquoted.
    buffer.write(",".join(headers) + "\n")
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow([_cell(row[header]) for header in headers])
    return buffer.getvalue()

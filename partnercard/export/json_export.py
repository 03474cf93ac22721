"""JSON export, also the format used for import and saved progress."""
import json

from partnercard.core.models import PartnerRecord


def to_json(record: PartnerRecord) -> str:
    """Pretty-print the record with two-space indentation in field order."""

    return json.dumps(record.to_dict(), indent=2, ensure_ascii=False)

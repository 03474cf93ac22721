"""Record helpers behind the form's toggles and edits."""
from __future__ import annotations

from dataclasses import fields, replace
from typing import Any, Dict, List

from partnercard.core.models import PartnerRecord

# Invoice mirror field -> company field it copies.
INVOICE_MIRROR = {
    "invoice_address": "address",
    "invoice_city_and_state": "city_and_state",
    "invoice_post_code": "post_code",
    "invoice_country": "country",
}

REQUIRED_FIELDS = {"company_name": "Company Name"}


def apply_edits(record: PartnerRecord, updates: Dict[str, Any]) -> PartnerRecord:
    """Return a copy of ``record`` with the form values in ``updates`` applied.

    Widgets that have not rendered yet report ``None`` and keep the current
    value. Keys that are not record attributes (other widget state) are skipped.
    """

    known = {field.name for field in fields(PartnerRecord)}
    changed = {name: value for name, value in updates.items() if name in known and value is not None}
    return replace(record, **changed)


def sync_invoice_address(record: PartnerRecord) -> PartnerRecord:
    """Copy the company address into the invoice address fields."""

    return replace(record, **{mirror: getattr(record, source) for mirror, source in INVOICE_MIRROR.items()})


def clear_invoice_address(record: PartnerRecord) -> PartnerRecord:
    """Blank the invoice address fields, used when "same as address" is switched off."""

    return replace(record, **{mirror: "" for mirror in INVOICE_MIRROR})


def missing_required(record: PartnerRecord) -> List[str]:
    """Labels of required fields that are still empty."""

    return [label for attr, label in REQUIRED_FIELDS.items() if not getattr(record, attr).strip()]

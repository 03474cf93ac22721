"""Data model for a single partner onboarding card."""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, List, Mapping

from partnercard.core.choices import CHOICE_PAIRS

logger = logging.getLogger(__name__)

REQUESTERS = ["Gert-Jan Dokter", "Jan Paul Douma"]
ROLES = {"debtor": "Debtor", "creditor": "Creditor"}
STATUSES = ["New", "Update"]
INVOICE_LANGUAGES = ["English", "Dutch"]
CURRENCIES = [
    "United States Dollars (USD)",
    "Euros (EUR)",
    "Ugandan Shillings (UGX)",
]

# Keys written by older exports of the form.
LEGACY_KEYS = {
    "eoriOrEinType": "eoriOrEin",
    "eoriOrEinValue": "eoriNo",
}

_TRUTHY = {"true", "1", "yes", "y", "x", "on"}


@dataclass
class PartnerRecord:
    """Everything captured by the partner card, stored as one flat record."""

    date: str = ""
    request_by: str = REQUESTERS[0]
    role: str = "debtor"
    status: str = "New"

    company_name: str = ""
    address: str = ""
    city_and_state: str = ""
    post_code: str = ""
    country: str = ""
    phone: str = ""
    website: str = ""

    invoice_address: str = ""
    invoice_city_and_state: str = ""
    invoice_post_code: str = ""
    invoice_country: str = ""
    invoice_language: str = INVOICE_LANGUAGES[0]
    default_currency: str = CURRENCIES[0]

    general_name: str = ""
    general_title: str = ""
    general_email: str = ""
    general_phone: str = ""
    general_mobile: str = ""

    finance_name: str = ""
    finance_title: str = ""
    finance_email: str = ""
    finance_phone: str = ""
    finance_mobile: str = ""

    vat_no: str = ""
    company_reg_no: str = ""
    eori_or_ein: str = "eori"
    eori_no: str = ""
    bank_name: str = ""
    account_name: str = ""
    bank_address: str = ""
    account_identifier_type: str = "accountNo"
    account_identifier_value: str = ""
    swift_or_bic_type: str = "swift"
    swift_or_bic_value: str = ""
    sort_or_routing_type: str = "sort"
    sort_or_routing_value: str = ""

    requested_credit_limit: str = ""
    requested_payment_terms: str = ""

    poa: bool = False
    scope: bool = False
    gdpr: bool = False
    credit: bool = False
    company_registration: bool = False
    passport: bool = False
    signed_quote: bool = False
    highrise: bool = False
    credit_check: bool = False
    it: bool = False
    exact: bool = False
    bank: bool = False

    debtor_no_scope: str = ""
    creditor_no_scope: str = ""

    remarks: str = ""
    agreement_date: str = ""
    signature: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Return the record keyed by wire names, in declaration order."""

        return {wire_name(key): value for key, value in asdict(self).items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PartnerRecord":
        """Build a record from wire names, filling gaps with defaults.

        Unknown keys are ignored. String fields accept any scalar, flags accept
        booleans or the usual truthy spellings, and discriminators outside their
        two options fall back to the pair's default.
        """

        normalized = dict(data)
        for legacy, current in LEGACY_KEYS.items():
            if legacy in normalized and current not in normalized:
                normalized[current] = normalized[legacy]

        values: Dict[str, Any] = {}
        for field in fields(cls):
            key = wire_name(field.name)
            if key not in normalized:
                continue
            raw = normalized[key]
            if field.type in (bool, "bool"):
                values[field.name] = _coerce_flag(raw)
            else:
                values[field.name] = "" if raw is None else str(raw)

        record = cls(**values)
        for pair in CHOICE_PAIRS:
            selected = getattr(record, pair.selector)
            if selected not in pair.labels:
                logger.warning(
                    "Unknown %s value %r; using %r", wire_name(pair.selector), selected, pair.default
                )
                setattr(record, pair.selector, pair.default)
        return record


def wire_name(attribute: str) -> str:
    """Convert ``city_and_state`` to ``cityAndState``."""

    head, *rest = attribute.split("_")
    return head + "".join(part.capitalize() for part in rest)


def field_names() -> List[str]:
    """Ordered wire names, used as the CSV header."""

    return [wire_name(field.name) for field in fields(PartnerRecord)]


def flag_names() -> List[str]:
    """Attribute names of the boolean checklist fields."""

    return [field.name for field in fields(PartnerRecord) if field.type in (bool, "bool")]


def _coerce_flag(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if raw is None:
        return False
    return str(raw).strip().lower() in _TRUTHY

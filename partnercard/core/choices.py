"""Discriminated field pairs and the internal checklist shared by every emitter."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class ChoicePair:
    """A type flag plus the value it qualifies, e.g. ``swift``/``bic`` + the code.

    Only the label of the selected option is ever rendered; the other option
    exists for the form's radio buttons.
    """

    selector: str
    value: str
    labels: Dict[str, str]
    default: str

    @property
    def options(self) -> Tuple[str, ...]:
        return tuple(self.labels)

    def label_for(self, record: Any) -> str:
        selected = getattr(record, self.selector)
        return self.labels.get(selected, self.labels[self.default])

    def value_for(self, record: Any) -> str:
        return getattr(record, self.value)

    def combined_label(self) -> str:
        """Label used above the radio buttons, e.g. ``"Swift Code / BIC"``."""

        return " / ".join(self.labels.values())


EORI_OR_EIN = ChoicePair(
    selector="eori_or_ein",
    value="eori_no",
    labels={"eori": "EORI No (EU)", "ein": "EIN No (US)"},
    default="eori",
)
ACCOUNT_IDENTIFIER = ChoicePair(
    selector="account_identifier_type",
    value="account_identifier_value",
    labels={"accountNo": "Account No.", "iban": "IBAN"},
    default="accountNo",
)
SWIFT_OR_BIC = ChoicePair(
    selector="swift_or_bic_type",
    value="swift_or_bic_value",
    labels={"swift": "Swift Code", "bic": "BIC"},
    default="swift",
)
SORT_OR_ROUTING = ChoicePair(
    selector="sort_or_routing_type",
    value="sort_or_routing_value",
    labels={"sort": "Sort Code", "routing": "Routing No. (ACH/Wire)"},
    default="sort",
)

CHOICE_PAIRS: Tuple[ChoicePair, ...] = (
    EORI_OR_EIN,
    ACCOUNT_IDENTIFIER,
    SWIFT_OR_BIC,
    SORT_OR_ROUTING,
)

# Four columns of three, in the order the paper form prints them.
CHECKLIST: Tuple[Tuple[Tuple[str, str], ...], ...] = (
    (("poa", "POA"), ("scope", "Scope"), ("gdpr", "GDPR")),
    (("credit", "Credit"), ("company_registration", "Company Registration"), ("passport", "Passport")),
    (("signed_quote", "Signed Quote"), ("highrise", "Highrise"), ("credit_check", "Credit Check")),
    (("it", "IT"), ("exact", "Exact"), ("bank", "Bank")),
)


def checklist_items() -> Tuple[Tuple[str, str], ...]:
    """Flatten ``CHECKLIST`` column by column."""

    return tuple(item for column in CHECKLIST for item in column)

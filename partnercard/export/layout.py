"""Declarative description of the printed partner card.

The XLSX and PDF renderers walk the same table of sections, blocks and
fields; only the geometry differs per format.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from partnercard.core.choices import (
    ACCOUNT_IDENTIFIER,
    EORI_OR_EIN,
    SORT_OR_ROUTING,
    SWIFT_OR_BIC,
    ChoicePair,
)

# Regions only drive background fills in the spreadsheet.
INTERNAL = "internal"
COMPANY = "company"
BANK = "bank"

TEXT = "text"
MULTILINE = "multiline"
ROLE = "role"


@dataclass(frozen=True)
class FieldSpec:
    attr: str
    label: str = ""
    choice: Optional[ChoicePair] = None
    kind: str = TEXT
    region: str = COMPANY

    def label_for(self, record: Any) -> str:
        if self.choice is not None:
            return self.choice.label_for(record)
        return self.label

    def value_for(self, record: Any) -> str:
        if self.choice is not None:
            return self.choice.value_for(record)
        value = getattr(record, self.attr)
        return "" if value is None else str(value)


@dataclass(frozen=True)
class Block:
    left: Tuple[FieldSpec, ...]
    right: Tuple[FieldSpec, ...] = ()
    title: str = ""
    rule_before: bool = False
    label_width: float = 120


@dataclass(frozen=True)
class Section:
    key: str
    heading: str
    blocks: Tuple[Block, ...]
    checklist: bool = False
    new_page: bool = False

    def heading_for(self, organisation: str) -> str:
        return self.heading.format(organisation=organisation)


def _choice(pair: ChoicePair, region: str) -> FieldSpec:
    return FieldSpec(attr=pair.value, choice=pair, region=region)


def _contact_block(prefix: str, title: str) -> Block:
    return Block(
        title=title,
        rule_before=True,
        label_width=80,
        left=(
            FieldSpec(f"{prefix}_name", "Name"),
            FieldSpec(f"{prefix}_title", "Title"),
            FieldSpec(f"{prefix}_email", "Email"),
        ),
        right=(
            FieldSpec(f"{prefix}_phone", "Phone"),
            FieldSpec(f"{prefix}_mobile", "Mobile"),
        ),
    )


SECTIONS: Tuple[Section, ...] = (
    Section(
        key="request",
        heading="To be completed by {organisation}",
        blocks=(
            Block(
                left=(
                    FieldSpec("date", "Date", region=INTERNAL),
                    FieldSpec("request_by", "Request By", region=INTERNAL),
                    FieldSpec("role", "Role", kind=ROLE, region=INTERNAL),
                ),
                right=(FieldSpec("status", "Status", region=INTERNAL),),
            ),
        ),
    ),
    Section(
        key="partner",
        heading="To be completed by Debtor / Creditor",
        blocks=(
            Block(
                left=(
                    FieldSpec("company_name", "Company Name"),
                    FieldSpec("address", "Address"),
                    FieldSpec("city_and_state", "City and State"),
                    FieldSpec("post_code", "Post Code"),
                    FieldSpec("country", "Country"),
                    FieldSpec("phone", "Phone"),
                    FieldSpec("website", "Website"),
                ),
                right=(
                    FieldSpec("invoice_address", "Invoice Address (If Other)", region=BANK),
                    FieldSpec("invoice_city_and_state", "City and State", region=BANK),
                    FieldSpec("invoice_post_code", "Post Code", region=BANK),
                    FieldSpec("invoice_country", "Country", region=BANK),
                    FieldSpec("invoice_language", "Invoice Language", region=BANK),
                    FieldSpec("default_currency", "Default Currency", region=BANK),
                ),
            ),
            _contact_block("general", "Contact General"),
            _contact_block("finance", "Contact Finance"),
            Block(
                rule_before=True,
                label_width=150,
                left=(
                    FieldSpec("vat_no", "VAT Number (if applicable)"),
                    FieldSpec("company_reg_no", "Company Reg No"),
                    _choice(EORI_OR_EIN, COMPANY),
                ),
                right=(
                    FieldSpec("bank_name", "Bank Name", region=BANK),
                    FieldSpec("account_name", "Account Name", region=BANK),
                    FieldSpec("bank_address", "Bank Address", region=BANK),
                    _choice(ACCOUNT_IDENTIFIER, BANK),
                    _choice(SWIFT_OR_BIC, BANK),
                    _choice(SORT_OR_ROUTING, BANK),
                ),
            ),
            Block(
                label_width=150,
                left=(
                    FieldSpec("requested_credit_limit", "Requested Credit Limit"),
                    FieldSpec("requested_payment_terms", "Requested Payment Terms (days)"),
                ),
            ),
        ),
    ),
    Section(
        key="checklist",
        heading="To be completed by {organisation}",
        checklist=True,
        new_page=True,
        blocks=(
            Block(
                label_width=110,
                left=(FieldSpec("debtor_no_scope", "Debtor No Scope", region=INTERNAL),),
                right=(FieldSpec("creditor_no_scope", "Creditor No Scope", region=INTERNAL),),
            ),
        ),
    ),
    Section(
        key="agreement",
        heading="Agreement Management",
        blocks=(
            Block(
                label_width=80,
                left=(FieldSpec("remarks", "Remarks", kind=MULTILINE),),
            ),
            Block(
                label_width=80,
                left=(FieldSpec("agreement_date", "Date"),),
                right=(FieldSpec("signature", "Signature"),),
            ),
        ),
    ),
)

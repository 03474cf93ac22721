"""Pytest configuration to make the local package importable without installation."""
import io
import os
import sys
from pathlib import Path

import pytest
from PIL import Image

# Ensure repository root is on sys.path for module resolution
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from partnercard.core.models import PartnerRecord


@pytest.fixture
def clean_environ(monkeypatch: pytest.MonkeyPatch) -> dict:
    """Give the test a private copy of the environment without partner card settings."""

    environ = {
        key: value
        for key, value in os.environ.items()
        if not key.startswith("PARTNERCARD_") and key != "LOG_LEVEL"
    }
    monkeypatch.setattr(os, "environ", environ)
    return environ


@pytest.fixture
def sample_record() -> PartnerRecord:
    """A realistically filled card for a creditor paying by IBAN."""

    return PartnerRecord(
        date="2024-05-01",
        request_by="Jan Paul Douma",
        role="creditor",
        status="Update",
        company_name="Acme Coffee Ltd",
        address="12 Roastery Lane",
        city_and_state="Kampala",
        post_code="256",
        country="Uganda",
        phone="+256 700 000000",
        website="https://acme.example",
        invoice_address="PO Box 1",
        invoice_city_and_state="Kampala",
        invoice_post_code="256",
        invoice_country="Uganda",
        invoice_language="Dutch",
        default_currency="Euros (EUR)",
        general_name="Grace Namuli",
        general_title="Director",
        general_email="grace@acme.example",
        general_phone="+256 700 000001",
        general_mobile="+256 700 000002",
        finance_name="Peter Okello",
        finance_title="Accountant",
        finance_email="finance@acme.example",
        finance_phone="+256 700 000003",
        finance_mobile="+256 700 000004",
        vat_no="UG123",
        company_reg_no="REG-42",
        eori_or_ein="ein",
        eori_no="12-3456789",
        bank_name="Stanbic",
        account_name="Acme Coffee Ltd",
        bank_address="Kampala Road 1",
        account_identifier_type="iban",
        account_identifier_value="NL91ABNA0417164300",
        swift_or_bic_type="bic",
        swift_or_bic_value="ABNANL2A",
        sort_or_routing_type="routing",
        sort_or_routing_value="021000021",
        requested_credit_limit="50,000",
        requested_payment_terms="30",
        poa=True,
        gdpr=True,
        bank=True,
        debtor_no_scope="D-100",
        creditor_no_scope="C-200",
        remarks='Prefers "green" beans, ships via Mombasa.\nCall before delivery.',
        agreement_date="2024-05-02",
        signature="G. Namuli",
    )


def _image_bytes(fmt: str, size=(60, 30)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color=(200, 30, 30)).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def png_logo() -> bytes:
    return _image_bytes("PNG")


@pytest.fixture
def jpeg_logo() -> bytes:
    return _image_bytes("JPEG", size=(40, 40))


@pytest.fixture
def gif_logo() -> bytes:
    return _image_bytes("GIF")


@pytest.fixture
def weasyprint_html():
    """Skip tests that need a working WeasyPrint (it needs Pango at import time)."""

    try:
        from weasyprint import HTML
    except (ImportError, OSError) as exc:
        pytest.skip(f"WeasyPrint unavailable: {exc}")
    return HTML

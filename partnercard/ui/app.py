"""Streamlit form for filling in a partner card and exporting it."""
from dataclasses import asdict
from pathlib import Path
from typing import Dict, Optional

import streamlit as st

# Allow running via "streamlit run partnercard/ui/app.py" without installing the package
# by ensuring the repository root is on ``sys.path``.
if __package__ in {None, ""}:
    import sys

    sys.path.append(str(Path(__file__).resolve().parents[2]))

from partnercard.core.choices import (
    ACCOUNT_IDENTIFIER,
    CHECKLIST,
    EORI_OR_EIN,
    SORT_OR_ROUTING,
    SWIFT_OR_BIC,
    ChoicePair,
)
from partnercard.core.config import Settings, load_settings
from partnercard.core.errors import ImportValidationError
from partnercard.core.logging import configure_logging
from partnercard.core.models import (
    CURRENCIES,
    INVOICE_LANGUAGES,
    REQUESTERS,
    ROLES,
    STATUSES,
    PartnerRecord,
)
from partnercard.export.service import MIME_TYPES, export_filename, render
from partnercard.ingestion.importer import parse_import
from partnercard.storage.progress import FileStorage, clear_progress, retrieve_progress, save_progress
from partnercard.ui.form import (
    INVOICE_MIRROR,
    apply_edits,
    clear_invoice_address,
    missing_required,
    sync_invoice_address,
)

FIELD_PREFIX = "f_"


def _key(attr: str) -> str:
    return f"{FIELD_PREFIX}{attr}"


def _load_into_widgets(record: PartnerRecord) -> None:
    """Replace every widget value with the record's values."""

    for name, value in asdict(record).items():
        st.session_state[_key(name)] = value
    st.session_state.pop("pdf_bytes", None)


def _record_from_widgets() -> PartnerRecord:
    values: Dict[str, object] = {
        key[len(FIELD_PREFIX):]: value
        for key, value in st.session_state.items()
        if isinstance(key, str) and key.startswith(FIELD_PREFIX)
    }
    return apply_edits(PartnerRecord(), values)


def _flash(message: str, level: str = "info") -> None:
    st.session_state["flash"] = {"message": message, "level": level}


def _show_flash() -> None:
    flash = st.session_state.pop("flash", None)
    if not flash:
        return
    renderer = {"success": st.success, "warning": st.warning, "error": st.error}.get(flash["level"], st.info)
    renderer(flash["message"])


def _on_same_address_change() -> None:
    record = _record_from_widgets()
    if st.session_state.get("same_address"):
        record = sync_invoice_address(record)
    else:
        record = clear_invoice_address(record)
    for mirror in INVOICE_MIRROR:
        st.session_state[_key(mirror)] = getattr(record, mirror)


def _on_save(storage: FileStorage) -> None:
    save_progress(storage, _record_from_widgets())
    _flash("Progress saved.", "success")


def _on_retrieve(storage: FileStorage) -> None:
    try:
        record = retrieve_progress(storage)
    except ValueError as exc:
        _flash(f"Saved progress could not be read: {exc}", "error")
        return
    if record is None:
        _flash("No saved progress found.", "warning")
        return
    st.session_state["same_address"] = False
    _load_into_widgets(record)
    _flash("Saved progress restored.", "success")


def _on_clear(storage: FileStorage) -> None:
    clear_progress(storage)
    _flash("Saved progress cleared.", "info")


def _on_import() -> None:
    uploaded = st.session_state.get("import_file")
    if uploaded is None:
        _flash("Choose a JSON file to import first.", "warning")
        return
    try:
        record = parse_import(uploaded.getvalue())
    except ImportValidationError as exc:
        _flash(f"Import failed: {exc}", "error")
        return
    st.session_state["same_address"] = False
    _load_into_widgets(record)
    _flash(f"Imported {uploaded.name}.", "success")


def _text(label: str, attr: str, disabled: bool = False, required: bool = False) -> None:
    st.text_input(f"{label} *" if required else label, key=_key(attr), disabled=disabled)


def _select(label: str, attr: str, options, format_func=str) -> None:
    st.selectbox(label, options=list(options), key=_key(attr), format_func=format_func)


def _choice(pair: ChoicePair) -> None:
    st.radio(
        pair.combined_label(),
        options=list(pair.options),
        format_func=lambda option: pair.labels[option],
        horizontal=True,
        key=_key(pair.selector),
    )
    st.text_input(pair.combined_label(), key=_key(pair.value), label_visibility="collapsed")


def _contact(prefix: str, title: str) -> None:
    st.markdown(f"#### {title}")
    left, right = st.columns(2)
    with left:
        _text("Name", f"{prefix}_name")
        _text("Title", f"{prefix}_title")
        _text("Email", f"{prefix}_email")
    with right:
        _text("Phone", f"{prefix}_phone")
        _text("Mobile", f"{prefix}_mobile")


def _render_form(settings: Settings) -> None:
    internal_heading = f"To be completed by {settings.organisation}"

    st.subheader(internal_heading)
    cols = st.columns(3)
    with cols[0]:
        _text("Date (YYYY-MM-DD)", "date")
    with cols[1]:
        _select("Request By", "request_by", REQUESTERS)
    with cols[2]:
        _select("Role", "role", ROLES, format_func=lambda value: ROLES[value])

    st.subheader("To be completed by Debtor / Creditor")
    left, right = st.columns(2)
    with left:
        _text("Company Name", "company_name", required=True)
        _text("Address", "address")
        _text("City and State", "city_and_state")
        _text("Post Code", "post_code")
        _text("Country", "country")
        _text("Phone", "phone")
        _text("Website", "website")

    same_address = bool(st.session_state.get("same_address"))
    if same_address:
        # Company inputs above are already instantiated, the invoice ones are not.
        for mirror, source in INVOICE_MIRROR.items():
            st.session_state[_key(mirror)] = st.session_state.get(_key(source), "")
    with right:
        st.checkbox("Same as address", key="same_address", on_change=_on_same_address_change)
        _text("Invoice Address (If Other)", "invoice_address", disabled=same_address)
        _text("City and State", "invoice_city_and_state", disabled=same_address)
        _text("Post Code", "invoice_post_code", disabled=same_address)
        _text("Country", "invoice_country", disabled=same_address)
        _select("Invoice Language", "invoice_language", INVOICE_LANGUAGES)
        _select("Default Currency", "default_currency", CURRENCIES)

    st.divider()
    _contact("general", "Contact General")
    st.divider()
    _contact("finance", "Contact Finance")
    st.divider()

    left, right = st.columns(2)
    with left:
        _text("VAT Number (if applicable)", "vat_no")
        _text("Company Reg No", "company_reg_no")
        _choice(EORI_OR_EIN)
        _text("Requested Credit Limit", "requested_credit_limit")
        _text("Requested Payment Terms (days)", "requested_payment_terms")
    with right:
        _text("Bank Name", "bank_name")
        _text("Account Name", "account_name")
        _text("Bank Address", "bank_address")
        _choice(ACCOUNT_IDENTIFIER)
        _choice(SWIFT_OR_BIC)
        _choice(SORT_OR_ROUTING)

    st.subheader(internal_heading)
    checklist_cols = st.columns(len(CHECKLIST))
    for column, items in zip(checklist_cols, CHECKLIST):
        with column:
            for attr, label in items:
                st.checkbox(label, key=_key(attr))
    left, right = st.columns(2)
    with left:
        _text("Debtor No Scope", "debtor_no_scope")
    with right:
        _text("Creditor No Scope", "creditor_no_scope")

    st.subheader("Agreement Management")
    st.text_area("Remarks", key=_key("remarks"), height=120)
    left, right = st.columns(2)
    with left:
        _text("Date (YYYY-MM-DD)", "agreement_date")
    with right:
        _text("Signature", "signature")


def _logo_bytes(settings: Settings) -> Optional[bytes]:
    uploaded = st.session_state.get("logo_file")
    if uploaded is not None:
        return uploaded.getvalue()
    if settings.logo_path and settings.logo_path.exists():
        return settings.logo_path.read_bytes()
    return None


def _render_exports(record: PartnerRecord, settings: Settings) -> None:
    st.markdown("### Export")
    missing = missing_required(record)
    if missing:
        st.warning(f"Required before exporting: {', '.join(missing)}")

    cols = st.columns(4)
    for column, fmt in zip(cols[:3], ("csv", "xlsx", "json")):
        with column:
            st.download_button(
                f"Export as {fmt.upper()}",
                data=render(record, fmt, settings=settings),
                file_name=export_filename(record, fmt, settings),
                mime=MIME_TYPES[fmt],
                disabled=bool(missing),
                use_container_width=True,
            )
    with cols[3]:
        if st.button("Build PDF", disabled=bool(missing), use_container_width=True):
            try:
                st.session_state["pdf_bytes"] = render(
                    record, "pdf", settings=settings, logo=_logo_bytes(settings)
                )
            except RuntimeError as exc:
                st.error(f"PDF export failed: {exc}")
        if st.session_state.get("pdf_bytes"):
            st.download_button(
                "Download PDF",
                data=st.session_state["pdf_bytes"],
                file_name=export_filename(record, "pdf", settings),
                mime=MIME_TYPES["pdf"],
                use_container_width=True,
            )


def main() -> None:
    """Launch the partner card form."""

    settings = load_settings()
    configure_logging(settings.log_level)
    storage = FileStorage(settings.storage_dir)

    st.set_page_config(page_title=settings.title, layout="wide")
    if "initialized" not in st.session_state:
        _load_into_widgets(PartnerRecord())
        st.session_state["initialized"] = True

    header, status_col = st.columns([4, 1])
    with header:
        st.title(settings.title)
        st.caption("Partner Onboarding Information")
    with status_col:
        _select("Status", "status", STATUSES)

    with st.sidebar:
        st.subheader("Progress")
        st.button("Save progress", on_click=_on_save, args=(storage,), use_container_width=True)
        st.button("Retrieve progress", on_click=_on_retrieve, args=(storage,), use_container_width=True)
        st.button("Clear saved progress", on_click=_on_clear, args=(storage,), use_container_width=True)
        st.subheader("Import")
        st.file_uploader("Partner card JSON", type=["json"], key="import_file")
        st.button("Import JSON", on_click=_on_import, use_container_width=True)
        st.subheader("PDF logo")
        st.file_uploader("Logo (PNG or JPEG)", type=["png", "jpg", "jpeg"], key="logo_file")

    _show_flash()
    _render_form(settings)
    _render_exports(_record_from_widgets(), settings)


if __name__ == "__main__":
    main()

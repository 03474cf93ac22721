"""Partner onboarding card: one record, exported as CSV, JSON, XLSX, or PDF."""
from partnercard.core import (
    CHECKLIST,
    CHOICE_PAIRS,
    ImportValidationError,
    PartnerRecord,
    Settings,
    UnsupportedLogoError,
    configure_logging,
    field_names,
    load_settings,
)
from partnercard.export import (
    FORMATS,
    build_filename,
    export_all,
    export_record,
    render,
    to_csv,
    to_json,
    to_pdf,
    to_xlsx,
)
from partnercard.ingestion import load_import, parse_import
from partnercard.storage import FileStorage, MemoryStorage, clear_progress, retrieve_progress, save_progress

__all__ = [
    "CHECKLIST",
    "CHOICE_PAIRS",
    "FORMATS",
    "FileStorage",
    "ImportValidationError",
    "MemoryStorage",
    "PartnerRecord",
    "Settings",
    "UnsupportedLogoError",
    "build_filename",
    "clear_progress",
    "configure_logging",
    "export_all",
    "export_record",
    "field_names",
    "load_import",
    "load_settings",
    "parse_import",
    "render",
    "retrieve_progress",
    "save_progress",
    "to_csv",
    "to_json",
    "to_pdf",
    "to_xlsx",
]

"""Exporters that turn a partner record into CSV, JSON, XLSX, or PDF."""
from partnercard.export.common import build_filename
from partnercard.export.csv_export import to_csv
from partnercard.export.json_export import to_json
from partnercard.export.pdf_export import load_logo, to_pdf
from partnercard.export.service import FORMATS, export_all, export_record, render
from partnercard.export.xlsx_export import to_xlsx

__all__ = [
    "FORMATS",
    "build_filename",
    "export_all",
    "export_record",
    "load_logo",
    "render",
    "to_csv",
    "to_json",
    "to_pdf",
    "to_xlsx",
]

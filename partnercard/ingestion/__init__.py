"""Importing partner cards from JSON files."""
from partnercard.ingestion.importer import load_import, parse_import

__all__ = ["load_import", "parse_import"]

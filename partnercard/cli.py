"""Command line entry point to export a partner card from a JSON file."""
import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from partnercard.core.config import load_settings
from partnercard.core.logging import configure_logging
from partnercard.core.models import PartnerRecord
from partnercard.export.service import FORMATS, export_all, export_record
from partnercard.ingestion.importer import load_import

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI entry point."""

    parser = argparse.ArgumentParser(description="Export a partner card to CSV, JSON, XLSX, or PDF")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--input",
        type=Path,
        help="Partner card JSON file (as exported by the form)",
    )
    source.add_argument(
        "--blank",
        action="store_true",
        help="Export an empty card with default values",
    )
    parser.add_argument(
        "--format",
        choices=[*FORMATS, "all"],
        default="all",
        help="Output format",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("output"),
        help="Directory to write exports to",
    )
    parser.add_argument(
        "--logo",
        type=Path,
        help="PNG or JPEG logo for the PDF header (defaults to PARTNERCARD_LOGO)",
    )
    parser.add_argument(
        "--base-name",
        help="Filename prefix (defaults to PARTNERCARD_BASE_FILENAME or 'Partner Card')",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=Path(".env"),
        help="Optional .env file with PARTNERCARD_* settings",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for running exports from the command line."""

    args = build_parser().parse_args(argv)
    settings = load_settings(args.env_file)
    configure_logging(settings.log_level)
    if args.base_name:
        settings = replace(settings, base_filename=args.base_name)

    try:
        record = load_import(args.input) if args.input else PartnerRecord()
    except ValueError as exc:
        logger.error("Could not import %s: %s", args.input, exc)
        return 1

    logo_path = args.logo or settings.logo_path
    logo = None
    if logo_path:
        try:
            logo = logo_path.read_bytes()
        except OSError as exc:
            logger.warning("Could not read logo %s: %s", logo_path, exc)

    try:
        if args.format == "all":
            paths = export_all(record, args.output_dir, settings=settings, logo=logo)
        else:
            paths = [export_record(record, args.format, args.output_dir, settings=settings, logo=logo)]
    except RuntimeError as exc:
        logger.error("Export failed: %s", exc)
        return 1

    for path in paths:
        print(f"Wrote {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

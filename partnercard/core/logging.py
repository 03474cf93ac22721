"""Logging setup shared by the CLI and the Streamlit form."""
from __future__ import annotations

import logging
import os

# WeasyPrint and the font subsetter it uses log every CSS and glyph detail at INFO.
NOISY_LOGGERS = ("weasyprint", "fontTools")


def configure_logging(level: str | None = None) -> None:
    """Initialize logging with the partner card format and level.

    The level comes from ``level`` or the ``LOG_LEVEL`` environment variable
    (``INFO`` by default). PDF rendering libraries are held at ``WARNING``
    unless debugging, so an export logs one line per written file.
    """

    resolved_level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=resolved_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if resolved_level != "DEBUG":
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

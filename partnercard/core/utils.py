"""Configuration lookups for the partner card settings."""
import logging
import os
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)


def get_config_value(key: str, default: str = "") -> str:
    """Return a ``PARTNERCARD_*`` style setting, stripped of surrounding whitespace.

    A hosted form reads its settings from Streamlit secrets; the CLI and local
    runs fall back to environment variables.
    """
    try:
        import streamlit as st
        if hasattr(st, 'secrets') and key in st.secrets:
            return str(st.secrets[key]).strip()
    except (ImportError, FileNotFoundError, KeyError):
        pass

    return os.getenv(key, default).strip()


def load_env_file(path: Path) -> List[str]:
    """Copy ``KEY=value`` lines from ``path`` into the environment.

    Variables already set win over the file. ``export KEY=value`` lines (as
    written for shells) are accepted. Returns the keys that were set.
    """
    if not path.exists():
        return []

    loaded: List[str] = []
    try:
        with path.open(encoding="utf-8") as handle:
            for raw_line in handle:
                line = raw_line.strip()
                if line.startswith("export "):
                    line = line[len("export "):]
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, value = line.split("=", 1)
                key = key.strip()
                if not key or key in os.environ:
                    continue
                os.environ[key] = value.strip().strip('"').strip("'")
                loaded.append(key)
    except OSError as exc:
        logger.debug("Could not load env file %s: %s", path, exc)
    if loaded:
        logger.debug("Loaded %s from %s", ", ".join(loaded), path)
    return loaded

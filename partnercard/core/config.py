"""Runtime settings resolved from Streamlit secrets, the environment, or a .env file."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from partnercard.core.utils import get_config_value, load_env_file

DEFAULT_ENV_FILE = Path(".env")
DEFAULT_ORGANISATION = "Red2Roast"
DEFAULT_BASE_FILENAME = "Partner Card"
DEFAULT_STORAGE_DIR = Path(".partnercard")


@dataclass(frozen=True)
class Settings:
    """Values the exporters and the form front end share."""

    organisation: str = DEFAULT_ORGANISATION
    base_filename: str = DEFAULT_BASE_FILENAME
    storage_dir: Path = DEFAULT_STORAGE_DIR
    logo_path: Optional[Path] = None
    log_level: str = "INFO"

    @property
    def title(self) -> str:
        return f"{self.organisation} {self.base_filename}".strip()


def load_settings(env_file: Path | None = None) -> Settings:
    """Build settings, loading ``env_file`` (default ``.env``) into the environment first."""

    load_env_file(env_file or DEFAULT_ENV_FILE)
    logo = get_config_value("PARTNERCARD_LOGO").strip()
    return Settings(
        organisation=get_config_value("PARTNERCARD_ORGANISATION", DEFAULT_ORGANISATION).strip()
        or DEFAULT_ORGANISATION,
        base_filename=get_config_value("PARTNERCARD_BASE_FILENAME", DEFAULT_BASE_FILENAME).strip()
        or DEFAULT_BASE_FILENAME,
        storage_dir=Path(get_config_value("PARTNERCARD_STORAGE_DIR", str(DEFAULT_STORAGE_DIR))),
        logo_path=Path(logo) if logo else None,
        log_level=get_config_value("LOG_LEVEL", "INFO").upper(),
    )

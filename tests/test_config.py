from pathlib import Path

from partnercard.core.config import Settings, load_settings
from partnercard.core.utils import load_env_file


def test_defaults_without_env(clean_environ, tmp_path):
    settings = load_settings(tmp_path / "missing.env")
    assert settings == Settings()
    assert settings.title == "Red2Roast Partner Card"
    assert settings.logo_path is None


def test_env_file_values_are_loaded(clean_environ, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# partner card settings\n"
        "PARTNERCARD_ORGANISATION='Blue Bean'\n"
        'PARTNERCARD_BASE_FILENAME="Supplier Card"\n'
        "PARTNERCARD_LOGO=assets/logo.png\n"
        "not a setting\n",
        encoding="utf-8",
    )

    settings = load_settings(env_file)

    assert settings.organisation == "Blue Bean"
    assert settings.title == "Blue Bean Supplier Card"
    assert settings.logo_path == Path("assets/logo.png")
    assert clean_environ["PARTNERCARD_ORGANISATION"] == "Blue Bean"


def test_environment_wins_over_env_file(clean_environ, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("PARTNERCARD_ORGANISATION=From File\n", encoding="utf-8")
    clean_environ["PARTNERCARD_ORGANISATION"] = "From Env"

    load_env_file(env_file)

    assert load_settings(env_file).organisation == "From Env"


def test_blank_values_fall_back_to_defaults(clean_environ, tmp_path):
    clean_environ["PARTNERCARD_ORGANISATION"] = "  "
    clean_environ["PARTNERCARD_STORAGE_DIR"] = "/tmp/cards"
    settings = load_settings(tmp_path / "missing.env")
    assert settings.organisation == "Red2Roast"
    assert settings.storage_dir == Path("/tmp/cards")


def test_env_file_accepts_shell_exports_and_reports_loaded_keys(clean_environ, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("export PARTNERCARD_LOGO=logo.png\nLOG_LEVEL=debug\n", encoding="utf-8")
    clean_environ["LOG_LEVEL"] = "warning"

    assert load_env_file(env_file) == ["PARTNERCARD_LOGO"]
    assert clean_environ["PARTNERCARD_LOGO"] == "logo.png"
    assert load_settings(env_file).log_level == "WARNING"

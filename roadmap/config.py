"""Environment-driven configuration.

Values are read on every call so tests can monkeypatch the environment.
Call `load_dotenv()` in entry points to pick up a local .env file.
"""

import logging
import os
from pathlib import Path

from roadmap.utils.paths import default_db_path

DEFAULT_API_URL = "http://localhost:8000"


def get_db_path() -> Path:
    """SQLite file holding node progress."""
    override = os.getenv("ROADMAP_DB_PATH")
    return Path(override) if override else default_db_path()


def get_roadmap_path() -> str | None:
    """Explicit roadmap definition file, if one is configured."""
    return os.getenv("ROADMAP_DATA_PATH") or None


def get_api_url() -> str:
    return os.getenv("ROADMAP_API_URL", DEFAULT_API_URL)


def get_cors_origins() -> list[str]:
    # comma-separated, "*" for all (development only)
    return os.getenv("CORS_ORIGINS", "*").split(",")


def configure_logging(level: str | None = None) -> None:
    """Set up root logging for the CLI and the server."""
    level_name = (level or os.getenv("ROADMAP_LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

"""Locate the progress database and the roadmap definition on disk.

Packaged desktop builds and development checkouts put files in different
places, so lookups walk an ordered list of candidates and take the first
one that exists.
"""

import os
import sys
from pathlib import Path

APP_DIR_NAME = "roadmap-progress"
DB_FILE_NAME = "roadmap-progress.db"
ROADMAP_FILE_NAME = "roadmap.json"

BUNDLED_ROADMAP_PATH = Path(__file__).parent.parent / "data" / "frontend_roadmap.json"


def user_data_dir(platform: str | None = None) -> Path:
    """Per-user application data directory for the current platform."""
    platform = platform or sys.platform
    if platform == "win32":
        base = os.getenv("APPDATA")
        root = Path(base) if base else Path.home() / "AppData" / "Roaming"
    elif platform == "darwin":
        root = Path.home() / "Library" / "Application Support"
    else:
        base = os.getenv("XDG_DATA_HOME")
        root = Path(base) if base else Path.home() / ".local" / "share"
    return root / APP_DIR_NAME


def default_db_path() -> Path:
    return user_data_dir() / DB_FILE_NAME


def roadmap_candidates(explicit: str | Path | None = None) -> list[Path]:
    """Ordered places to look for a roadmap definition file."""
    candidates: list[Path] = []
    if explicit:
        candidates.append(Path(explicit))
    cwd = Path.cwd()
    candidates.append(cwd / ROADMAP_FILE_NAME)
    candidates.append(cwd / "data" / ROADMAP_FILE_NAME)
    candidates.append(BUNDLED_ROADMAP_PATH)
    return candidates


def find_first_existing(candidates: list[Path]) -> Path | None:
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    return None

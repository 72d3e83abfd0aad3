"""Utility functions for the roadmap tracker."""

from roadmap.utils.identifiers import utc_timestamp
from roadmap.utils.paths import (
    default_db_path,
    find_first_existing,
    roadmap_candidates,
    user_data_dir,
)

__all__ = [
    "default_db_path",
    "find_first_existing",
    "roadmap_candidates",
    "user_data_dir",
    "utc_timestamp",
]

"""Load a roadmap definition from disk.

    from roadmap.sdk import load_roadmap
    roadmap = load_roadmap()                    # first file found
    roadmap = load_roadmap("my-roadmap.json")   # explicit file first
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from roadmap.config import get_roadmap_path
from roadmap.models.roadmap_graph import Roadmap
from roadmap.utils.paths import find_first_existing, roadmap_candidates


class RoadmapLoadError(Exception):
    """Exception raised when a roadmap definition cannot be loaded."""
    pass


def resolve_roadmap_path(path: str | Path | None = None) -> Path:
    """Find the definition file: explicit path, ROADMAP_DATA_PATH, cwd, bundled."""
    explicit = path or get_roadmap_path()
    if explicit and not Path(explicit).is_file():
        raise RoadmapLoadError(f"roadmap file not found: {explicit}")
    found = find_first_existing(roadmap_candidates(explicit))
    if found is None:
        raise RoadmapLoadError("no roadmap definition file found")
    return found


def parse_roadmap(raw: dict) -> Roadmap:
    """Validate a decoded definition.

    Accepts the full form ({"nodes": [...], "edges": [...], ...}).
    """
    try:
        return Roadmap.model_validate(raw)
    except ValidationError as e:
        raise RoadmapLoadError(f"invalid roadmap definition: {e}") from e


def load_roadmap(path: str | Path | None = None) -> Roadmap:
    source = resolve_roadmap_path(path)
    try:
        raw = json.loads(source.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise RoadmapLoadError(f"{source} is not valid JSON: {e}") from e
    return parse_roadmap(raw)

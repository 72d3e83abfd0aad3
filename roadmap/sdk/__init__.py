"""SDK for loading roadmap definitions."""

from roadmap.sdk.roadmap_loader import (
    RoadmapLoadError,
    load_roadmap,
    parse_roadmap,
    resolve_roadmap_path,
)

__all__ = [
    "RoadmapLoadError",
    "load_roadmap",
    "parse_roadmap",
    "resolve_roadmap_path",
]

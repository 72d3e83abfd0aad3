"""Core data models for the roadmap progress tracker."""

from roadmap.models.progress_record import ProgressRecord, ProgressStats
from roadmap.models.roadmap_graph import (
    KeyConcept,
    LearningStep,
    NodeData,
    Position,
    Resources,
    Roadmap,
    RoadmapEdge,
    RoadmapNode,
)
from roadmap.models.status import (
    NodeStatus,
    NodeType,
    PersistedStatus,
    from_persisted,
    is_trackable,
    to_persisted,
)
from roadmap.models.user_profile import UserProfile

__all__ = [
    # Graph
    "KeyConcept",
    "LearningStep",
    "NodeData",
    "Position",
    "Resources",
    "Roadmap",
    "RoadmapEdge",
    "RoadmapNode",
    # Status vocabularies
    "NodeStatus",
    "NodeType",
    "PersistedStatus",
    "from_persisted",
    "is_trackable",
    "to_persisted",
    # Persistence
    "ProgressRecord",
    "ProgressStats",
    # Session
    "UserProfile",
]

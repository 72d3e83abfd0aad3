"""Roadmap progress tracker - topic status, persistence and progress statistics."""

from roadmap.backends import HttpBackend, MemoryBackend, ProgressBackend, SqliteBackend
from roadmap.diagnostics import (
    DiagnosticEvent,
    DiagnosticsSink,
    ListDiagnostics,
    LoggingDiagnostics,
)
from roadmap.models.progress_record import ProgressRecord, ProgressStats
from roadmap.models.roadmap_graph import Roadmap, RoadmapEdge, RoadmapNode
from roadmap.models.status import NodeStatus, NodeType, PersistedStatus
from roadmap.sdk.roadmap_loader import load_roadmap
from roadmap.store import ProgressStore

__all__ = [
    # Graph
    "Roadmap",
    "RoadmapEdge",
    "RoadmapNode",
    "NodeStatus",
    "NodeType",
    "PersistedStatus",
    # Persistence
    "ProgressRecord",
    "ProgressBackend",
    "MemoryBackend",
    "SqliteBackend",
    "HttpBackend",
    # Diagnostics
    "DiagnosticEvent",
    "DiagnosticsSink",
    "ListDiagnostics",
    "LoggingDiagnostics",
    # High-level APIs
    "ProgressStats",
    "ProgressStore",
    "load_roadmap",
]

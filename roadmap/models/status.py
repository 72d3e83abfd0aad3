"""Status vocabularies for roadmap nodes.

The UI works with the english in-memory vocabulary. The progress database
stores a parallel four-value vocabulary inherited from the first desktop
release, so every write and read goes through the two mappings below.
"""

from enum import Enum


class NodeType(str, Enum):
    """Fixed role of a node in the roadmap graph."""

    required = "required"
    optional = "optional"
    phase = "phase"  # grouping only, never carries status


class NodeStatus(str, Enum):
    """Status values used in memory and over the presentation API."""

    pending = "pending"
    in_progress = "in-progress"
    completed = "completed"
    skipped = "skipped"


class PersistedStatus(str, Enum):
    """Status values as stored in the node_progress table."""

    pendiente = "pendiente"
    en_progreso = "en-progreso"
    completado = "completado"
    omitida = "omitida"


# node types that count towards progress statistics
TRACKABLE_TYPES = frozenset({NodeType.required, NodeType.optional})

STATUS_TO_PERSISTED: dict[NodeStatus, PersistedStatus] = {
    NodeStatus.pending: PersistedStatus.pendiente,
    NodeStatus.in_progress: PersistedStatus.en_progreso,
    NodeStatus.completed: PersistedStatus.completado,
    NodeStatus.skipped: PersistedStatus.omitida,
}

PERSISTED_TO_STATUS: dict[PersistedStatus, NodeStatus] = {
    persisted: status for status, persisted in STATUS_TO_PERSISTED.items()
}


def to_persisted(status: NodeStatus | str) -> PersistedStatus:
    """Convert an in-memory status to its stored value.

    Raises:
        ValueError: if the value is not one of the four in-memory statuses.
    """
    return STATUS_TO_PERSISTED[NodeStatus(status)]


def from_persisted(status: PersistedStatus | str) -> NodeStatus:
    """Convert a stored status to the in-memory vocabulary.

    Raises:
        ValueError: if the value is not one of the four stored statuses.
    """
    return PERSISTED_TO_STATUS[PersistedStatus(status)]


def is_trackable(node_type: NodeType | str) -> bool:
    """Whether nodes of this type carry status and count in statistics."""
    return NodeType(node_type) in TRACKABLE_TYPES

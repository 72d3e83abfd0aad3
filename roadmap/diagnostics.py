"""Diagnostics channel for storage failures.

The progress store never raises on storage problems: the UI keeps working
from in-memory state. Failures are reported here instead so they can be
logged, shown in a debug panel, or asserted on in tests.
"""

import logging
from enum import Enum

from pydantic import BaseModel, Field

from roadmap.utils.identifiers import utc_timestamp

logger = logging.getLogger(__name__)


class Severity(str, Enum):
    debug = "debug"
    warning = "warning"
    error = "error"


class DiagnosticEvent(BaseModel):
    """a single reported problem."""

    operation: str  # e.g. "upsert", "load", "update_node_status"
    message: str
    severity: Severity = Severity.error
    node_id: str | None = None
    source: str | None = None  # backend or component that reported it
    timestamp: str = Field(default_factory=utc_timestamp)


class DiagnosticsSink:
    """Protocol for receiving diagnostic events."""

    def report(self, event: DiagnosticEvent) -> None:
        """Receive a diagnostic event."""
        raise NotImplementedError


class LoggingDiagnostics(DiagnosticsSink):
    """Writes events to the standard logging system."""

    _levels = {
        Severity.debug: logging.DEBUG,
        Severity.warning: logging.WARNING,
        Severity.error: logging.ERROR,
    }

    def __init__(self, log: logging.Logger | None = None) -> None:
        self.log = log or logger

    def report(self, event: DiagnosticEvent) -> None:
        self.log.log(
            self._levels[event.severity],
            "%s failed%s: %s",
            event.operation,
            f" for node {event.node_id}" if event.node_id else "",
            event.message,
        )


class ListDiagnostics(DiagnosticsSink):
    """Stores events in a list."""

    def __init__(self) -> None:
        self.events: list[DiagnosticEvent] = []

    def report(self, event: DiagnosticEvent) -> None:
        self.events.append(event)

    def errors(self) -> list[DiagnosticEvent]:
        """Events at error severity."""
        return [e for e in self.events if e.severity == Severity.error]

    def clear(self) -> None:
        self.events.clear()

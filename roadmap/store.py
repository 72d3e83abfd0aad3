"""Progress store: in-memory node status kept in sync with a backend.

Usage:
    store = ProgressStore(SqliteBackend(path))
    await store.initialize_nodes(roadmap.nodes)
    store.update_node_status("node-html", "completed")
    print(store.stats.progress_percentage)

Status updates are optimistic. `apply_local` changes the node immediately,
then `schedule_persist` writes the record in the background. A failed
write is reported to diagnostics and the in-memory state stays as is.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Sequence

from roadmap.backends.base import ProgressBackend
from roadmap.diagnostics import DiagnosticEvent, DiagnosticsSink, Severity
from roadmap.models.progress_record import ProgressStats
from roadmap.models.roadmap_graph import RoadmapNode
from roadmap.models.status import (
    NodeStatus,
    NodeType,
    from_persisted,
    to_persisted,
)

logger = logging.getLogger(__name__)


class ProgressStore:
    """Tracks topic status for one roadmap and one user."""

    def __init__(
        self,
        backend: ProgressBackend,
        diagnostics: DiagnosticsSink | None = None,
    ) -> None:
        """
        Args:
            backend: where status records are persisted
            diagnostics: sink for store-level problems; defaults to the
                backend's sink so both report to the same place
        """
        self.backend = backend
        self.diagnostics = diagnostics or backend.diagnostics
        self._nodes: list[RoadmapNode] = []
        self._index: dict[str, RoadmapNode] = {}
        self._pending: set[asyncio.Task[bool]] = set()
        self.selected_node_id: str | None = None

    @property
    def nodes(self) -> Sequence[RoadmapNode]:
        return tuple(self._nodes)

    def _report(self, operation: str, message: str, node_id: str | None = None) -> None:
        self.diagnostics.report(
            DiagnosticEvent(
                operation=operation,
                message=message,
                severity=Severity.debug,
                node_id=node_id,
                source="store",
            )
        )

    # --- loading ---

    async def initialize_nodes(self, nodes: Iterable[RoadmapNode]) -> None:
        """Replace the working node list and apply persisted status to it."""
        self._nodes = list(nodes)
        self._index = {node.id: node for node in self._nodes}
        await self.load()

    async def load(self) -> None:
        """Overlay persisted status onto the in-memory nodes.

        Nodes without a record keep their current status. If the backend is
        unavailable this is a no-op (the backend reports the failure).
        """
        records = await self.backend.get_all()
        persisted = {record.id: record.status for record in records}
        applied = 0
        for node in self._nodes:
            status = persisted.get(node.id)
            if status is None or not node.trackable:
                continue
            node.data.status = from_persisted(status)
            applied += 1
        logger.debug("loaded %d progress records, applied %d", len(records), applied)

    # --- updates ---

    def get_node_by_id(self, node_id: str) -> RoadmapNode | None:
        return self._index.get(node_id)

    def apply_local(self, node_id: str, status: NodeStatus | str) -> RoadmapNode | None:
        """Set a node's in-memory status.

        Returns the updated node, or None when the id is unknown or the node
        is a phase. Neither case raises, whatever the status value.

        Raises:
            ValueError: if the node is trackable and status is not one of
                the four node statuses.
        """
        node = self._index.get(node_id)
        if node is None:
            self._report("update_node_status", "unknown node id", node_id)
            return None
        if not node.trackable:
            self._report("update_node_status", "phase nodes carry no status", node_id)
            return None
        node.data.status = NodeStatus(status)
        return node

    def schedule_persist(
        self, node_id: str, status: NodeStatus | str
    ) -> asyncio.Task[bool] | None:
        """Write a node's status to the backend without waiting for it.

        On a running event loop the write becomes a task and is returned.
        Without a loop (plain scripts) it runs to completion before returning.
        """
        persisted = to_persisted(status)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(self.backend.upsert(node_id, persisted))
            return None
        task = loop.create_task(self.backend.upsert(node_id, persisted))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    def update_node_status(self, node_id: str, status: NodeStatus | str) -> RoadmapNode | None:
        """Optimistically update a node's status and persist it."""
        node = self.apply_local(node_id, status)
        if node is None:
            return None
        self.schedule_persist(node_id, node.data.status)
        return node

    def reset_all_nodes(self) -> list[str]:
        """Set every required/optional node back to pending.

        Each node is persisted individually, so an interrupted reset leaves
        only some records reset. Returns the ids that were reset.
        """
        reset: list[str] = []
        for node in self._nodes:
            if not node.trackable:
                continue
            node.data.status = NodeStatus.pending
            self.schedule_persist(node.id, NodeStatus.pending)
            reset.append(node.id)
        return reset

    async def flush(self) -> list[bool]:
        """Wait for every in-flight write. Returns their success flags."""
        if not self._pending:
            return []
        return list(await asyncio.gather(*list(self._pending)))

    def set_selected_node(self, node_id: str | None) -> None:
        self.selected_node_id = node_id

    # --- statistics ---

    @property
    def stats(self) -> ProgressStats:
        """Counts over required and optional nodes, computed on every read."""
        tracked = [node for node in self._nodes if node.trackable]
        total = len(tracked)

        counts = {status: 0 for status in NodeStatus}
        for node in tracked:
            counts[node.data.status] += 1

        required = [n for n in tracked if n.data.type == NodeType.required]
        optional = [n for n in tracked if n.data.type == NodeType.optional]
        completed = counts[NodeStatus.completed]

        return ProgressStats(
            completed=completed,
            in_progress=counts[NodeStatus.in_progress],
            pending=counts[NodeStatus.pending],
            skipped=counts[NodeStatus.skipped],
            total=total,
            required_total=len(required),
            optional_total=len(optional),
            required_completed=sum(
                1 for n in required if n.data.status == NodeStatus.completed
            ),
            optional_completed=sum(
                1 for n in optional if n.data.status == NodeStatus.completed
            ),
            progress_percentage=(completed / total) * 100 if total > 0 else 0.0,
        )

    def __repr__(self) -> str:
        return f"ProgressStore(nodes={len(self._nodes)}, backend={self.backend.name!r})"


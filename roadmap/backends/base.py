"""Persistence backend interface for node progress.

A backend stores one ProgressRecord per node id. Subclasses implement the
underscore methods and declare which exceptions mean "storage unavailable";
the public methods turn those into safe defaults and report them to the
diagnostics sink, so callers never see a storage failure as an exception.
"""

from roadmap.diagnostics import DiagnosticEvent, DiagnosticsSink, LoggingDiagnostics
from roadmap.models.progress_record import ProgressRecord
from roadmap.models.status import PersistedStatus


class BackendUnavailableError(Exception):
    """Raised by backends when storage was never opened or has gone away."""
    pass


class ProgressBackend:
    """Four-operation record store keyed by node id."""

    name = "backend"
    # exception types that degrade an operation to its default result
    errors: tuple[type[Exception], ...] = (BackendUnavailableError,)

    def __init__(self, diagnostics: DiagnosticsSink | None = None) -> None:
        self.diagnostics = diagnostics or LoggingDiagnostics()

    # --- implemented by subclasses ---

    async def _initialize(self) -> None:
        """Prepare storage (create tables, check reachability)."""

    async def _get_one(self, node_id: str) -> ProgressRecord | None:
        raise NotImplementedError

    async def _get_all(self) -> list[ProgressRecord]:
        raise NotImplementedError

    async def _upsert(self, node_id: str, status: PersistedStatus) -> None:
        raise NotImplementedError

    async def _delete_all(self) -> None:
        raise NotImplementedError

    # --- public API ---

    def _report(self, operation: str, exc: Exception, node_id: str | None = None) -> None:
        self.diagnostics.report(
            DiagnosticEvent(
                operation=operation,
                message=f"{type(exc).__name__}: {exc}",
                node_id=node_id,
                source=self.name,
            )
        )

    async def initialize(self) -> bool:
        """Prepare storage. Returns False if it is unavailable."""
        try:
            await self._initialize()
        except self.errors as exc:
            self._report("initialize", exc)
            return False
        return True

    async def get_one(self, node_id: str) -> ProgressRecord | None:
        """Get the record for a node, or None if absent or unavailable."""
        try:
            return await self._get_one(node_id)
        except self.errors as exc:
            self._report("get_one", exc, node_id)
            return None

    async def get_all(self) -> list[ProgressRecord]:
        """Get every stored record, or [] if unavailable."""
        try:
            return await self._get_all()
        except self.errors as exc:
            self._report("get_all", exc)
            return []

    async def upsert(self, node_id: str, status: PersistedStatus | str) -> bool:
        """Insert or overwrite a node's record, stamping updated_at.

        Raises:
            ValueError: if status is not a stored status value.
        """
        status = PersistedStatus(status)
        try:
            await self._upsert(node_id, status)
        except self.errors as exc:
            self._report("upsert", exc, node_id)
            return False
        return True

    async def delete_all(self) -> bool:
        """Remove every record."""
        try:
            await self._delete_all()
        except self.errors as exc:
            self._report("delete_all", exc)
            return False
        return True

    async def close(self) -> None:
        """Release resources held by the backend."""

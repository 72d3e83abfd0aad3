"""In-memory progress backend."""

from roadmap.backends.base import BackendUnavailableError, ProgressBackend
from roadmap.diagnostics import DiagnosticsSink
from roadmap.models.progress_record import ProgressRecord
from roadmap.models.status import PersistedStatus
from roadmap.utils.identifiers import utc_timestamp


class MemoryBackend(ProgressBackend):
    """Stores records in a dict. Nothing survives the process.

    Set `available = False` to simulate storage that cannot be reached.
    """

    name = "memory"

    def __init__(
        self,
        records: list[ProgressRecord] | None = None,
        diagnostics: DiagnosticsSink | None = None,
    ) -> None:
        super().__init__(diagnostics)
        self.records: dict[str, ProgressRecord] = {r.id: r for r in records or []}
        self.available = True
        self.upsert_calls: list[tuple[str, PersistedStatus]] = []

    def _check(self) -> None:
        if not self.available:
            raise BackendUnavailableError("memory backend marked unavailable")

    async def _initialize(self) -> None:
        self._check()

    async def _get_one(self, node_id: str) -> ProgressRecord | None:
        self._check()
        return self.records.get(node_id)

    async def _get_all(self) -> list[ProgressRecord]:
        self._check()
        return list(self.records.values())

    async def _upsert(self, node_id: str, status: PersistedStatus) -> None:
        self._check()
        self.upsert_calls.append((node_id, status))
        self.records[node_id] = ProgressRecord(
            id=node_id, status=status, updated_at=utc_timestamp()
        )

    async def _delete_all(self) -> None:
        self._check()
        self.records.clear()

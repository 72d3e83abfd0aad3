"""SQLite storage for node progress."""

import asyncio
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from pydantic import ValidationError

from roadmap.backends.base import BackendUnavailableError, ProgressBackend
from roadmap.diagnostics import DiagnosticsSink
from roadmap.models.progress_record import ProgressRecord
from roadmap.models.status import PersistedStatus
from roadmap.utils.identifiers import utc_timestamp


class SqliteBackend(ProgressBackend):
    """Embedded single-table store, one row per node.

    Each query runs in a worker thread with its own connection, so the event
    loop keeps serving requests while sqlite waits on the disk.
    """

    name = "sqlite"
    errors = (BackendUnavailableError, sqlite3.Error, OSError)

    def __init__(self, path: Path | str, diagnostics: DiagnosticsSink | None = None) -> None:
        super().__init__(diagnostics)
        self.path = Path(path)
        self._ready: bool | None = None  # None until the first open attempt

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    def _create_schema(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self._connect() as conn:
            conn.execute(
                """
                create table if not exists node_progress (
                    id text primary key,
                    status text not null default 'pendiente',
                    updated_at text not null
                )
                """
            )

    def _open(self) -> None:
        try:
            self._create_schema()
        except self.errors:
            self._ready = False
            raise
        self._ready = True

    def _ensure_ready(self) -> None:
        if self._ready is None:
            try:
                self._open()
            except self.errors as exc:
                raise BackendUnavailableError(f"cannot open {self.path}: {exc}") from exc
        if not self._ready:
            raise BackendUnavailableError(f"database not available: {self.path}")

    # --- blocking queries, run through asyncio.to_thread ---

    def _fetch_one(self, node_id: str) -> sqlite3.Row | None:
        self._ensure_ready()
        with self._connect() as conn:
            return conn.execute(
                "select id, status, updated_at from node_progress where id = ?",
                (node_id,),
            ).fetchone()

    def _fetch_all(self) -> list[sqlite3.Row]:
        self._ensure_ready()
        with self._connect() as conn:
            return conn.execute(
                "select id, status, updated_at from node_progress order by id"
            ).fetchall()

    def _write(self, node_id: str, status: PersistedStatus) -> None:
        self._ensure_ready()
        with self._connect() as conn:
            conn.execute(
                """
                insert into node_progress (id, status, updated_at)
                values (?, ?, ?)
                on conflict(id) do update set
                    status = excluded.status,
                    updated_at = excluded.updated_at
                """,
                (node_id, status.value, utc_timestamp()),
            )

    def _clear(self) -> None:
        self._ensure_ready()
        with self._connect() as conn:
            conn.execute("delete from node_progress")

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> ProgressRecord:
        return ProgressRecord(
            id=row["id"],
            status=row["status"],
            updated_at=row["updated_at"],
        )

    async def _initialize(self) -> None:
        await asyncio.to_thread(self._open)

    async def _get_one(self, node_id: str) -> ProgressRecord | None:
        row = await asyncio.to_thread(self._fetch_one, node_id)
        if not row:
            return None
        try:
            return self._row_to_record(row)
        except ValidationError as exc:
            self._report("get_one", exc, node_id)
            return None

    async def _get_all(self) -> list[ProgressRecord]:
        rows = await asyncio.to_thread(self._fetch_all)
        records = []
        for row in rows:
            try:
                records.append(self._row_to_record(row))
            except ValidationError as exc:
                # status text outside the stored vocabulary
                self._report("get_all", exc, row["id"])
        return records

    async def _upsert(self, node_id: str, status: PersistedStatus) -> None:
        await asyncio.to_thread(self._write, node_id, status)

    async def _delete_all(self) -> None:
        await asyncio.to_thread(self._clear)

"""database initialization helpers."""

from roadmap.backends.sqlite import SqliteBackend
from roadmap.config import get_db_path
from roadmap.diagnostics import DiagnosticsSink


async def open_progress_backend(diagnostics: DiagnosticsSink | None = None) -> SqliteBackend:
    """open the sqlite progress store at the configured path.

    The backend is returned even if the file could not be opened; its
    operations then degrade to empty results.
    """
    backend = SqliteBackend(get_db_path(), diagnostics=diagnostics)
    await backend.initialize()
    return backend

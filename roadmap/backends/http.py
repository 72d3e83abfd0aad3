"""HTTP progress backend talking to the roadmap server's /api/progress routes."""

from __future__ import annotations

from urllib.parse import quote

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from roadmap.backends.base import BackendUnavailableError, ProgressBackend
from roadmap.config import get_api_url
from roadmap.diagnostics import DiagnosticsSink
from roadmap.models.progress_record import ProgressRecord
from roadmap.models.status import PersistedStatus

_records = TypeAdapter(list[ProgressRecord])


class _InitializeResponse(BaseModel):
    initialized: bool


class _UpdateResponse(BaseModel):
    updated: bool


class _ResetResponse(BaseModel):
    reset: bool


class HttpBackend(ProgressBackend):
    """Reads and writes progress through a running roadmap server.

    Connection errors, error responses and malformed payloads all degrade
    to the default result of the operation. Bodies are parsed with pydantic,
    so a non-JSON page (a proxy, a wrong ROADMAP_API_URL) surfaces as a
    ValidationError like any other bad payload.
    """

    name = "http"
    errors = (BackendUnavailableError, httpx.HTTPError, ValidationError)

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 10.0,
        diagnostics: DiagnosticsSink | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            base_url: Base URL of the roadmap server (defaults to ROADMAP_API_URL)
            timeout: HTTP request timeout in seconds
            diagnostics: where storage failures are reported
            transport: optional httpx transport, used by tests
        """
        super().__init__(diagnostics)
        self.base_url = (base_url or get_api_url()).rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        )

    @staticmethod
    def _record_path(node_id: str) -> str:
        # ids like "c#" or "a/b" must stay one path segment
        return f"/api/progress/{quote(node_id, safe='')}"

    async def _initialize(self) -> None:
        async with self._client() as client:
            response = await client.post("/api/progress/initialize")
            response.raise_for_status()
            if not _InitializeResponse.model_validate_json(response.content).initialized:
                raise BackendUnavailableError(
                    f"server at {self.base_url} could not open its database"
                )

    async def _get_one(self, node_id: str) -> ProgressRecord | None:
        async with self._client() as client:
            response = await client.get(self._record_path(node_id))
            if response.status_code == 404:
                return None
            response.raise_for_status()
            return ProgressRecord.model_validate_json(response.content)

    async def _get_all(self) -> list[ProgressRecord]:
        async with self._client() as client:
            response = await client.get("/api/progress")
            response.raise_for_status()
            return _records.validate_json(response.content)

    async def _upsert(self, node_id: str, status: PersistedStatus) -> None:
        async with self._client() as client:
            response = await client.put(
                self._record_path(node_id),
                json={"status": status.value},
            )
            response.raise_for_status()
            if not _UpdateResponse.model_validate_json(response.content).updated:
                raise BackendUnavailableError(f"server rejected update for {node_id}")

    async def _delete_all(self) -> None:
        async with self._client() as client:
            response = await client.delete("/api/progress")
            response.raise_for_status()
            if not _ResetResponse.model_validate_json(response.content).reset:
                raise BackendUnavailableError("server could not reset progress")

"""API routes for raw progress records.

These mirror the four record operations of the persistence backend, so a
renderer (or `HttpBackend`) can use the server as its storage.
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from roadmap.backends.base import ProgressBackend
from roadmap.models.progress_record import ProgressRecord
from roadmap.models.status import PersistedStatus
from roadmap_server.deps import get_backend

router = APIRouter()


class UpsertProgressRequest(BaseModel):
    """request body for writing a node's stored status."""

    status: PersistedStatus


@router.post("/progress/initialize")
async def initialize_progress(backend: ProgressBackend = Depends(get_backend)) -> dict:
    """create the progress table if needed and report whether storage is usable."""
    return {"initialized": await backend.initialize()}


@router.get("/progress")
async def list_progress(backend: ProgressBackend = Depends(get_backend)) -> list[ProgressRecord]:
    """list every stored record."""
    return await backend.get_all()


# ":path" so percent-encoded slashes in node ids still reach these routes
@router.get("/progress/{node_id:path}")
async def get_progress(
    node_id: str, backend: ProgressBackend = Depends(get_backend)
) -> ProgressRecord:
    """get the stored record for one node."""
    record = await backend.get_one(node_id)
    if not record:
        raise HTTPException(status_code=404, detail=f"No progress for node: {node_id}")
    return record


@router.put("/progress/{node_id:path}")
async def upsert_progress(
    node_id: str,
    request: UpsertProgressRequest,
    backend: ProgressBackend = Depends(get_backend),
) -> dict:
    """insert or overwrite a node's stored status.

    Uses PUT for idempotent upsert, the same (id, status) twice leaves the
    same record.
    """
    return {"updated": await backend.upsert(node_id, request.status)}


@router.delete("/progress")
async def reset_progress(backend: ProgressBackend = Depends(get_backend)) -> dict:
    """delete every stored record."""
    return {"reset": await backend.delete_all()}

"""API routes for the roadmap graph and its progress."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from roadmap.models.progress_record import ProgressStats
from roadmap.models.roadmap_graph import Roadmap, RoadmapNode
from roadmap.models.status import NodeStatus
from roadmap.models.user_profile import UserProfile
from roadmap.store import ProgressStore
from roadmap_server.deps import get_roadmap, get_store, get_user

router = APIRouter()


class UpdateStatusRequest(BaseModel):
    """request body for changing a topic's status."""

    status: NodeStatus


class SelectionRequest(BaseModel):
    node_id: str | None = None


class UserNameRequest(BaseModel):
    user_name: str


@router.get("/roadmap")
def get_roadmap_graph(roadmap: Roadmap = Depends(get_roadmap)) -> Roadmap:
    """get the graph with current node statuses."""
    return roadmap


@router.get("/roadmap/stats")
def get_stats(store: ProgressStore = Depends(get_store)) -> ProgressStats:
    """progress counts over required and optional topics."""
    return store.stats


@router.get("/roadmap/nodes/{node_id}")
def get_node(node_id: str, store: ProgressStore = Depends(get_store)) -> RoadmapNode:
    node = store.get_node_by_id(node_id)
    if not node:
        raise HTTPException(status_code=404, detail=f"Node not found: {node_id}")
    return node


@router.put("/roadmap/nodes/{node_id}/status")
async def update_node_status(
    node_id: str,
    request: UpdateStatusRequest,
    store: ProgressStore = Depends(get_store),
) -> RoadmapNode:
    """change a topic's status.

    The response reflects the new status right away; the write to storage
    finishes in the background.
    """
    node = store.get_node_by_id(node_id)
    if not node:
        raise HTTPException(status_code=404, detail=f"Node not found: {node_id}")
    if not node.trackable:
        raise HTTPException(status_code=409, detail=f"Phase nodes have no status: {node_id}")
    store.update_node_status(node_id, request.status)
    return node


@router.post("/roadmap/reset")
async def reset_roadmap(store: ProgressStore = Depends(get_store)) -> ProgressStats:
    """set every topic back to pending."""
    store.reset_all_nodes()
    return store.stats


@router.get("/roadmap/selection")
def get_selection(store: ProgressStore = Depends(get_store)) -> dict:
    return {"node_id": store.selected_node_id}


@router.put("/roadmap/selection")
def set_selection(request: SelectionRequest, store: ProgressStore = Depends(get_store)) -> dict:
    """remember which node the user has open in the detail panel."""
    if request.node_id is not None and not store.get_node_by_id(request.node_id):
        raise HTTPException(status_code=404, detail=f"Node not found: {request.node_id}")
    store.set_selected_node(request.node_id)
    return {"node_id": store.selected_node_id}


@router.get("/user")
def get_user_profile(user: UserProfile = Depends(get_user)) -> UserProfile:
    return user


@router.put("/user")
def set_user_name(request: UserNameRequest, user: UserProfile = Depends(get_user)) -> UserProfile:
    user.set_user_name(request.user_name)
    return user

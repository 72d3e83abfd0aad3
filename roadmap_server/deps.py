"""FastAPI dependencies resolving the objects created at startup."""

from fastapi import Request

from roadmap.backends.base import ProgressBackend
from roadmap.models.roadmap_graph import Roadmap
from roadmap.models.user_profile import UserProfile
from roadmap.store import ProgressStore


def get_backend(request: Request) -> ProgressBackend:
    return request.app.state.backend


def get_store(request: Request) -> ProgressStore:
    return request.app.state.store


def get_roadmap(request: Request) -> Roadmap:
    return request.app.state.roadmap


def get_user(request: Request) -> UserProfile:
    return request.app.state.user

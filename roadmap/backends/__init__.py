"""Persistence backends for node progress."""

from roadmap.backends.base import BackendUnavailableError, ProgressBackend
from roadmap.backends.http import HttpBackend
from roadmap.backends.memory import MemoryBackend
from roadmap.backends.sqlite import SqliteBackend

__all__ = [
    "BackendUnavailableError",
    "ProgressBackend",
    "HttpBackend",
    "MemoryBackend",
    "SqliteBackend",
]

"""Data models for persisted progress and computed statistics."""

from pydantic import BaseModel, ConfigDict, Field

from roadmap.models.status import PersistedStatus


class ProgressRecord(BaseModel):
    """a stored status entry, one per node that has ever been updated.

    `updated_at` is informational only: writes are last-write-wins and the
    timestamp is never used for ordering.
    """

    id: str
    status: PersistedStatus
    updated_at: str


class ProgressStats(BaseModel):
    """aggregate counts over required and optional topics."""

    # the renderer reads camelCase keys
    model_config = ConfigDict(populate_by_name=True)

    completed: int = 0
    in_progress: int = Field(default=0, alias="inProgress")
    pending: int = 0
    skipped: int = 0
    total: int = 0
    required_total: int = Field(default=0, alias="requiredTotal")
    optional_total: int = Field(default=0, alias="optionalTotal")
    required_completed: int = Field(default=0, alias="requiredCompleted")
    optional_completed: int = Field(default=0, alias="optionalCompleted")
    progress_percentage: float = Field(default=0.0, alias="progressPercentage")

"""Pydantic schemas for batch import progress events."""

from enum import Enum

from pydantic import BaseModel, Field


class BatchStatus(str, Enum):
    """Lifecycle of a batch import as seen by subscribers."""

    STARTED = "started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


class ItemStatus(str, Enum):
    """Outcome of one URL within a batch."""

    SUCCESS = "success"
    ERROR = "error"


class BatchItemResult(BaseModel):
    """Outcome of the most recently processed URL."""

    pr_url: str
    status: ItemStatus
    message: str | None = None


class BatchProgress(BaseModel):
    """Payload of a batch.progress event."""

    batch_id: str
    total: int = Field(ge=0)
    status: BatchStatus
    processed: int = Field(default=0, ge=0)
    successes: int = Field(default=0, ge=0)
    failures: int = Field(default=0, ge=0)
    last_result: BatchItemResult | None = None
    message: str | None = None

    def to_event(self) -> dict[str, object]:
        """JSON-ready payload, omitting fields that do not apply to this state."""
        return self.model_dump(mode="json", exclude_none=True)


class BatchAccepted(BaseModel):
    """Acknowledgement returned when a batch is queued."""

    batch_id: str
    total: int

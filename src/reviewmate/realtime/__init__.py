"""Live updates pushed to connected clients."""

from .events import (
    BATCH_PROGRESS,
    REVIEW_CREATED,
    REVIEW_DELETED,
    REVIEW_UPDATED,
    UserEventEmitter,
)

__all__ = [
    "BATCH_PROGRESS",
    "REVIEW_CREATED",
    "REVIEW_DELETED",
    "REVIEW_UPDATED",
    "UserEventEmitter",
]

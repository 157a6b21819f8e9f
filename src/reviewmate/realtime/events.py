"""User-scoped live event fan-out.

Each connected client gets its own bounded queue, so one user may have
several tabs open and every tab sees every event for that user.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from typing import Any

from reviewmate.logging import get_logger

logger = get_logger(__name__)

REVIEW_CREATED = "review.created"
REVIEW_UPDATED = "review.updated"
REVIEW_DELETED = "review.deleted"
BATCH_PROGRESS = "batch.progress"


class UserEventEmitter:
    """In-memory event emitter with bounded per-subscriber queues."""

    def __init__(self, maxsize: int = 1000):
        self.maxsize = maxsize
        self._subscribers: dict[int, set[asyncio.Queue[dict[str, Any]]]] = {}

    def subscriber_count(self, user_id: int) -> int:
        return len(self._subscribers.get(user_id, ()))

    async def emit(self, user_id: int, event: str, payload: dict[str, Any]) -> None:
        """Deliver an event to every active subscriber of one user.

        Events for users with no subscribers are dropped.
        """
        queues = self._subscribers.get(user_id)
        if not queues:
            return
        message = {"event": event, "data": payload}
        for queue in list(queues):
            # Drop-oldest under pressure
            if queue.full():
                try:
                    queue.get_nowait()
                except asyncio.QueueEmpty:
                    pass
                logger.debug("Subscriber queue full, dropped oldest event", user_id=user_id)
            queue.put_nowait(message)

    async def subscribe(self, user_id: int) -> AsyncIterator[dict[str, Any]]:
        queue: asyncio.Queue[dict[str, Any]] = asyncio.Queue(maxsize=self.maxsize)
        self._subscribers.setdefault(user_id, set()).add(queue)
        try:
            while True:
                yield await queue.get()
        finally:
            queues = self._subscribers.get(user_id)
            if queues is not None:
                queues.discard(queue)
                if not queues:
                    self._subscribers.pop(user_id, None)

    def cleanup(self, user_id: int) -> None:
        self._subscribers.pop(user_id, None)

"""Registry of running batch import tasks.

Each submitted batch runs as one asyncio task; batches run concurrently
with each other but every batch processes its URLs sequentially.
"""

from __future__ import annotations

import asyncio

from reviewmate.github.sync.batch_import import BatchImportCoordinator, BatchJob
from reviewmate.logging import get_logger

logger = get_logger(__name__)


class BatchTaskQueue:
    """Owns detached batch tasks so they are tracked, logged and cancelled on shutdown."""

    def __init__(self, coordinator: BatchImportCoordinator) -> None:
        self._coordinator = coordinator
        self._tasks: dict[str, asyncio.Task[BatchJob]] = {}

    def submit(self, job: BatchJob) -> asyncio.Task[BatchJob]:
        """Schedule a batch and return immediately.

        Args:
            job: Batch to run

        Returns:
            The task running the batch
        """
        task = asyncio.create_task(self._coordinator.run(job), name=f"batch-{job.batch_id}")
        self._tasks[job.batch_id] = task
        task.add_done_callback(lambda t: self._on_done(job.batch_id, t))
        logger.info("Batch queued", batch_id=job.batch_id, user_id=job.user.id, total=job.total)
        return task

    def _on_done(self, batch_id: str, task: asyncio.Task[BatchJob]) -> None:
        self._tasks.pop(batch_id, None)
        if task.cancelled():
            logger.warning("Batch cancelled", batch_id=batch_id)
            return
        error = task.exception()
        if error is not None:
            logger.opt(exception=error).error("Batch task crashed", batch_id=batch_id)
            return
        logger.debug("Batch task finished", batch_id=batch_id)

    def active_batches(self) -> list[str]:
        """IDs of batches still running."""
        return list(self._tasks)

    async def join(self) -> None:
        """Wait for every running batch to finish."""
        tasks = list(self._tasks.values())
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def shutdown(self) -> None:
        """Cancel running batches and wait for them to unwind."""
        tasks = list(self._tasks.values())
        if not tasks:
            return

        logger.info("Cancelling {} running batch(es)", len(tasks))
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()

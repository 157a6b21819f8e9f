"""Batch Import Coordinator - sequential multi-URL import with live progress.

Drives the single-review ingestion pipeline over every PR URL found in an
uploaded CSV, one URL at a time, publishing a batch.progress event after
each so the user's clients can render a live progress bar.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from reviewmate.db.models import User
from reviewmate.exceptions import NoValidURLsError
from reviewmate.logging import bind_batch, get_logger
from reviewmate.realtime.events import BATCH_PROGRESS, UserEventEmitter
from reviewmate.schemas.batch import BatchItemResult, BatchProgress, BatchStatus, ItemStatus
from reviewmate.schemas.identity import extract_pr_urls

from .ingestion import ReviewIngestionService

logger = get_logger(__name__)


@dataclass
class BatchJob:
    """One batch import request.

    Lives only in memory; a batch in flight is lost on restart.
    """

    user: User
    """Owning user."""

    urls: list[str]
    """PR URLs in file order."""

    batch_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    """Identifier returned to the client and carried on every event."""

    processed: int = 0
    successes: int = 0
    failures: int = 0
    last_result: BatchItemResult | None = None

    @property
    def total(self) -> int:
        """Number of URLs in the batch."""
        return len(self.urls)

    def progress(self, status: BatchStatus, message: str | None = None) -> BatchProgress:
        """Snapshot the counters as a progress payload."""
        return BatchProgress(
            batch_id=self.batch_id,
            total=self.total,
            status=status,
            processed=self.processed,
            successes=self.successes,
            failures=self.failures,
            last_result=self.last_result,
            message=message,
        )


def create_batch_job(user: User, csv_text: str) -> BatchJob:
    """Extract PR URLs from a CSV document and build a job.

    Args:
        user: Owning user
        csv_text: Decoded CSV file contents

    Returns:
        BatchJob ready to submit

    Raises:
        InvalidCSVError: If the text cannot be parsed as CSV
        NoValidURLsError: If no cell contains a PR URL
    """
    urls = extract_pr_urls(csv_text)
    if not urls:
        raise NoValidURLsError()
    return BatchJob(user=user, urls=urls)


class BatchImportCoordinator:
    """Runs batch jobs against the ingestion service.

    URLs are processed strictly in order with no parallelism, so progress
    events for one batch are totally ordered and processed only grows.
    Per-URL failures are counted, never raised.
    """

    def __init__(
        self,
        ingestion: ReviewIngestionService,
        emitter: UserEventEmitter,
    ) -> None:
        """Initialize the coordinator.

        Args:
            ingestion: Single-review ingestion pipeline
            emitter: Publishes batch.progress to the owning user
        """
        self._ingestion = ingestion
        self._emitter = emitter

    async def run(self, job: BatchJob) -> BatchJob:
        """Process every URL of a job, emitting progress as it goes.

        Args:
            job: Batch to run

        Returns:
            The job with final counters
        """
        batch_logger = bind_batch(job.batch_id, job.user.id)
        batch_logger.info("Starting batch import", total=job.total)

        try:
            await self._publish(job, BatchStatus.STARTED)

            for url in job.urls:
                try:
                    await self._ingestion.upsert(job.user, url)
                    job.successes += 1
                    job.last_result = BatchItemResult(pr_url=url, status=ItemStatus.SUCCESS)
                except Exception as e:
                    job.failures += 1
                    job.last_result = BatchItemResult(
                        pr_url=url,
                        status=ItemStatus.ERROR,
                        message=str(e) or "Unknown error",
                    )
                    batch_logger.warning("Batch item failed", pr_url=url, error=str(e))
                job.processed += 1
                await self._publish(job, BatchStatus.IN_PROGRESS)

            await self._publish(job, BatchStatus.COMPLETED)
        except Exception as e:
            batch_logger.exception("Batch import failed")
            failed = BatchProgress(
                batch_id=job.batch_id,
                total=job.total,
                status=BatchStatus.FAILED,
                processed=0,
                successes=0,
                failures=job.total,
                message=str(e) or "Batch import failed",
            )
            await self._emitter.emit(job.user.id, BATCH_PROGRESS, failed.to_event())
            return job

        batch_logger.info(
            "Batch import complete",
            processed=job.processed,
            successes=job.successes,
            failures=job.failures,
        )
        return job

    async def _publish(self, job: BatchJob, status: BatchStatus) -> None:
        await self._emitter.emit(job.user.id, BATCH_PROGRESS, job.progress(status).to_event())

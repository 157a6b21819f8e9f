"""Pending-review digest for every user."""

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from reviewmate.db.engine import session_scope
from reviewmate.db.repositories import ReviewRepository, UserRepository
from reviewmate.logging import get_logger

from .base import BaseNotifier

logger = get_logger(__name__)

DIGEST_LIMIT = 50


@dataclass
class DigestResult:
    """Counts from one digest run."""

    users: int = 0
    sent: int = 0
    skipped: int = 0
    failed: int = 0


async def send_pending_digests(
    session_factory: async_sessionmaker[AsyncSession],
    notifier: BaseNotifier,
    limit: int = DIGEST_LIMIT,
) -> DigestResult:
    """Email every user their open reviews, oldest PR first.

    Users with no open reviews are skipped. A failure for one user is
    logged and counted; the run continues with the next user.

    Args:
        session_factory: Factory for the read-only unit of work
        notifier: Notifier delivering the digest
        limit: Maximum reviews listed per user

    Returns:
        DigestResult with per-user outcome counts
    """
    async with session_scope(session_factory) as session:
        users = await UserRepository(session).list_all()
        review_repo = ReviewRepository(session)
        pending = [(user, await review_repo.list_open_for_user(user.id, limit)) for user in users]

    result = DigestResult(users=len(users))
    for user, reviews in pending:
        if not reviews:
            result.skipped += 1
            continue
        try:
            await notifier.send_digest(user, reviews)
            result.sent += 1
        except Exception as e:
            result.failed += 1
            logger.error("Failed to send digest", user_id=user.id, error=str(e))

    logger.info(
        "Digest run complete",
        users=result.users,
        sent=result.sent,
        skipped=result.skipped,
        failed=result.failed,
    )
    return result

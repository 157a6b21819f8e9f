"""Notifier used when email delivery is not configured."""

from collections.abc import Sequence

from reviewmate.db.models import Review, User
from reviewmate.logging import get_logger

from .base import BaseNotifier

logger = get_logger(__name__)


class NoOpNotifier(BaseNotifier):
    """Discards notifications, logging them at debug level."""

    async def notify_status_change(self, user: User, review: Review) -> None:
        logger.debug(
            "Email not configured, skipping status notification",
            user_id=user.id,
            review=review.identifier,
        )

    async def send_digest(self, user: User, reviews: Sequence[Review]) -> None:
        logger.debug("Email not configured, skipping digest", user_id=user.id)

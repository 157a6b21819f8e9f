"""Notifier interface for review status changes and digests."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from reviewmate.db.models import Review, User


class BaseNotifier(ABC):
    """Delivers out-of-band notifications to a user."""

    @abstractmethod
    async def notify_status_change(self, user: User, review: Review) -> None:
        """Announce that a tracked review changed status."""

    @abstractmethod
    async def send_digest(self, user: User, reviews: Sequence[Review]) -> None:
        """Send the list of a user's pending reviews."""

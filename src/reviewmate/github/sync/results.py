"""Result objects for sync operations.

Structured results provide consistent interfaces for the API, the batch
coordinator and CLI output.
"""

from dataclasses import dataclass

from reviewmate.db.models import Review
from reviewmate.schemas.review import ReviewRead

from .enums import UpsertAction


@dataclass
class UpsertResult:
    """Result of a single review upsert.

    Failures are raised, not captured, so a result always carries a review.
    """

    review: Review
    """The stored review after the upsert."""

    action: UpsertAction
    """What the upsert did."""

    @property
    def created(self) -> bool:
        """Check if a new review was created."""
        return self.action == UpsertAction.CREATED

    @property
    def status_code(self) -> int:
        """HTTP status for the single-fetch endpoint: 201 on create, else 200."""
        return 201 if self.created else 200

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization.

        Returns:
            Dict with the action and the serialized review
        """
        return {
            "action": self.action.value,
            "review": ReviewRead.from_orm(self.review).to_event(),
        }

    @classmethod
    def from_created(cls, review: Review) -> "UpsertResult":
        """Create a result for a newly created review."""
        return cls(review=review, action=UpsertAction.CREATED)

    @classmethod
    def from_updated(cls, review: Review) -> "UpsertResult":
        """Create a result for an overwritten review."""
        return cls(review=review, action=UpsertAction.UPDATED)

    @classmethod
    def from_unchanged(cls, review: Review) -> "UpsertResult":
        """Create a result for a review kept as-is because GitHub was unreachable."""
        return cls(review=review, action=UpsertAction.UNCHANGED)

"""Repository for Review model CRUD operations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from reviewmate.db.models import Review, ReviewStatus
from reviewmate.exceptions import StoreConflictError
from reviewmate.schemas.enums import ReviewSortField, SortDirection

from .base import BaseRepository

if TYPE_CHECKING:
    from sqlalchemy.orm import InstrumentedAttribute

    from reviewmate.schemas.review import ReviewFilters, ReviewPayload


_SORT_COLUMNS: dict[ReviewSortField, InstrumentedAttribute[object]] = {
    ReviewSortField.DATE: Review.opened_at,  # type: ignore[dict-item]
    ReviewSortField.LINES: Review.lines_changed,  # type: ignore[dict-item]
    ReviewSortField.FILES: Review.files_changed,  # type: ignore[dict-item]
}


class ReviewRepository(BaseRepository[Review]):
    """Repository for tracked reviews.

    Reviews are keyed by (identifier, user_id); the database enforces
    uniqueness of that pair and this repository reports a violation as
    StoreConflictError.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: Async SQLAlchemy session
        """
        super().__init__(session, Review)

    # -------------------------------------------------------------------------
    # Query Methods
    # -------------------------------------------------------------------------

    async def get_by_identifier(self, identifier: str, user_id: int) -> Review | None:
        """Get a review by its canonical identifier for one user.

        Args:
            identifier: owner/repo#number
            user_id: Owning user ID

        Returns:
            Review or None if not tracked by this user
        """
        stmt = select(Review).where(
            Review.identifier == identifier,
            Review.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_user(
        self,
        user_id: int,
        filters: ReviewFilters | None = None,
    ) -> list[Review]:
        """List a user's reviews with optional equality filters and ordering.

        Args:
            user_id: Owning user ID
            filters: Status/priority/repository filters and sort order

        Returns:
            Matching reviews, sorted
        """
        stmt = select(Review).where(Review.user_id == user_id)

        if filters is not None:
            if filters.status is not None:
                stmt = stmt.where(Review.status == filters.status)
            if filters.priority is not None:
                stmt = stmt.where(Review.priority == filters.priority)
            if filters.repository is not None:
                stmt = stmt.where(Review.repository == filters.repository)
            column = _SORT_COLUMNS[filters.sort_by]
            direction = filters.sort_dir
        else:
            column = _SORT_COLUMNS[ReviewSortField.DATE]
            direction = SortDirection.DESC

        order = column.asc() if direction == SortDirection.ASC else column.desc()
        stmt = stmt.order_by(order, Review.id)

        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def list_open_for_user(self, user_id: int, limit: int = 50) -> list[Review]:
        """Get a user's open reviews, oldest PR first.

        Args:
            user_id: Owning user ID
            limit: Maximum number of reviews

        Returns:
            Open reviews ordered by opened_at ascending
        """
        stmt = (
            select(Review)
            .where(Review.user_id == user_id, Review.status == ReviewStatus.OPEN)
            .order_by(Review.opened_at.asc(), Review.id)
            .limit(limit)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    # -------------------------------------------------------------------------
    # Write Methods
    # -------------------------------------------------------------------------

    async def create(self, user_id: int, payload: ReviewPayload) -> Review:
        """Create a review with last_status_notified set to its initial status.

        Args:
            user_id: Owning user ID
            payload: Validated review fields

        Returns:
            Created Review (flushed, has ID)

        Raises:
            StoreConflictError: If (identifier, user_id) is already tracked
        """
        review = Review(
            user_id=user_id,
            last_status_notified=payload.status,
            **payload.model_dump(),
        )
        self.add(review)
        try:
            await self.flush()
        except IntegrityError as e:
            raise StoreConflictError(
                f"Review {payload.identifier} already tracked by user {user_id}"
            ) from e
        return review

    async def replace(self, review: Review, payload: ReviewPayload) -> Review:
        """Overwrite every payload field on an existing review.

        This is a full replace, not a merge: each field takes the payload
        value even when it is empty or zero.

        Args:
            review: Existing review (attached to this session)
            payload: Validated review fields

        Returns:
            The updated review
        """
        for key, value in payload.model_dump().items():
            setattr(review, key, value)

        await self.flush()
        return review

    async def mark_notified(self, review: Review, status: ReviewStatus) -> Review:
        """Record the status a transition notification was sent for.

        Args:
            review: Existing review
            status: Status that was announced

        Returns:
            The updated review
        """
        review.last_status_notified = status
        await self.flush()
        return review

    async def delete_by_identifier(self, identifier: str, user_id: int) -> bool:
        """Delete a user's review by identifier.

        Args:
            identifier: owner/repo#number
            user_id: Owning user ID

        Returns:
            True if a review was deleted
        """
        review = await self.get_by_identifier(identifier, user_id)
        if review is None:
            return False

        await self.delete(review)
        await self.flush()
        return True

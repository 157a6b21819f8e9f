"""SQLAlchemy ORM models for ReviewMate."""

from datetime import datetime
from enum import Enum

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    mapped_column,
    relationship,
)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class ReviewStatus(str, Enum):
    """Pull request status as tracked by ReviewMate."""

    OPEN = "open"
    CLOSED = "closed"  # closed without merge
    MERGED = "merged"


class Priority(str, Enum):
    """Review priority tier derived from lines changed."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


# ------------------------------------------------------------------------------
# User model
# ------------------------------------------------------------------------------
class User(Base):
    """A ReviewMate user with an encrypted GitHub credential."""

    __tablename__ = "users"
    __mapper_args__ = {"eager_defaults": True}

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(String(320), unique=True)
    # Opaque TokenVault blob, never plaintext
    github_token_encrypted: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=func.now())

    reviews: Mapped[list["Review"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"


# ------------------------------------------------------------------------------
# Review model
# ------------------------------------------------------------------------------
class Review(Base):
    """A pull request tracked by one user."""

    __tablename__ = "reviews"
    __mapper_args__ = {"eager_defaults": True}

    id: Mapped[int] = mapped_column(primary_key=True)

    # Owning user (immutable after creation)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"))

    # Canonical "owner/repo#number"
    identifier: Mapped[str] = mapped_column(String(300))

    # --------------------------------------------------------------------------
    # Mirrored from GitHub (overwritten on every fetch)
    # --------------------------------------------------------------------------
    author: Mapped[str] = mapped_column(String(100))
    title: Mapped[str] = mapped_column(String(500))
    description: Mapped[str] = mapped_column(Text, default="")
    additions: Mapped[int] = mapped_column(default=0)
    deletions: Mapped[int] = mapped_column(default=0)
    files_changed: Mapped[int] = mapped_column(default=0)
    repository: Mapped[str] = mapped_column(String(200))  # "owner/repo"
    pr_number: Mapped[int] = mapped_column()
    pr_url: Mapped[str] = mapped_column(String(500))
    opened_at: Mapped[datetime] = mapped_column(DateTime)  # GitHub created_at

    # --------------------------------------------------------------------------
    # Derived fields
    # --------------------------------------------------------------------------
    lines_changed: Mapped[int] = mapped_column(default=0)
    priority: Mapped[Priority] = mapped_column(default=Priority.LOW)
    status: Mapped[ReviewStatus] = mapped_column(default=ReviewStatus.OPEN)

    # Status for which a transition notification was last sent
    last_status_notified: Mapped[ReviewStatus | None] = mapped_column(nullable=True)

    # --------------------------------------------------------------------------
    # Metadata
    # --------------------------------------------------------------------------
    created_at: Mapped[datetime] = mapped_column(DateTime, default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=func.now(), onupdate=func.now())

    user: Mapped["User"] = relationship(back_populates="reviews")

    __table_args__ = (
        UniqueConstraint("identifier", "user_id", name="uq_review_identifier_user"),
        Index("ix_reviews_user_repository", "user_id", "repository"),
    )

    def __repr__(self) -> str:
        return f"<Review(id={self.id}, user={self.user_id}, identifier='{self.identifier}')>"

    @property
    def is_open(self) -> bool:
        """Check if the PR is still open."""
        return self.status == ReviewStatus.OPEN

    @property
    def is_merged(self) -> bool:
        """Check if the PR was merged."""
        return self.status == ReviewStatus.MERGED

"""Repository for User model CRUD operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from reviewmate.db.models import User

from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for ReviewMate users.

    Stores the GitHub credential only in its encrypted form; callers
    encrypt before writing and decrypt after reading.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: Async SQLAlchemy session
        """
        super().__init__(session, User)

    async def get_by_email(self, email: str) -> User | None:
        """Get a user by email (case-insensitive).

        Args:
            email: Email address

        Returns:
            User or None if not found
        """
        return await self._get_by_field("email", email.strip().lower())

    async def list_all(self) -> list[User]:
        """Get every user ordered by ID."""
        stmt = select(User).order_by(User.id)
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, email: str, github_token_encrypted: str | None = None) -> User:
        """Create a user.

        Args:
            email: Email address (normalized to lowercase)
            github_token_encrypted: Vault blob for the user's GitHub token

        Returns:
            Created User (flushed, has ID)
        """
        user = User(
            email=email.strip().lower(),
            github_token_encrypted=github_token_encrypted,
        )
        self.add(user)
        await self.flush()
        return user

    async def set_github_token(self, user_id: int, github_token_encrypted: str) -> User | None:
        """Replace a user's stored GitHub credential.

        Args:
            user_id: User ID
            github_token_encrypted: New vault blob

        Returns:
            Updated User or None if not found
        """
        user = await self.get_by_id(user_id)
        if user is None:
            return None

        user.github_token_encrypted = github_token_encrypted
        await self.flush()
        return user

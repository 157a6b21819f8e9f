"""Shared plumbing for the user and review repositories.

Repositories never commit. The caller owns the session (normally through
session_scope) and decides when a unit of work ends.
"""

from typing import Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from reviewmate.db.models import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """Lookup and write helpers bound to one model class.

    Usage:
        class UserRepository(BaseRepository[User]):
            def __init__(self, session: AsyncSession) -> None:
                super().__init__(session, User)

            async def get_by_email(self, email: str) -> User | None:
                return await self._get_by_field("email", email)
    """

    def __init__(self, session: AsyncSession, model_class: type[ModelT]) -> None:
        self._session = session
        self._model_class = model_class

    async def get_by_id(self, id: int) -> ModelT | None:
        """Load a row by primary key, or None."""
        return await self._session.get(self._model_class, id)

    async def _get_by_field(self, field_name: str, value: object) -> ModelT | None:
        stmt = select(self._model_class).where(
            getattr(self._model_class, field_name) == value
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def add(self, entity: ModelT) -> ModelT:
        """Stage a new row; it gets its ID on the next flush."""
        self._session.add(entity)
        return entity

    async def flush(self) -> None:
        await self._session.flush()

    async def delete(self, entity: ModelT) -> None:
        """Stage a row for deletion on the next flush."""
        await self._session.delete(entity)

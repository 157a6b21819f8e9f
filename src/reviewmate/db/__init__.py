"""Database module for ReviewMate."""

from reviewmate.db.engine import (
    build_engine,
    build_session_factory,
    create_tables,
    dispose_engine,
    drop_tables,
    get_engine,
    get_session,
    get_session_factory,
    session_scope,
)
from reviewmate.db.models import (
    Base,
    Priority,
    Review,
    ReviewStatus,
    User,
)
from reviewmate.db.repositories import (
    BaseRepository,
    ReviewRepository,
    UserRepository,
)

__all__ = [
    # Models
    "Base",
    "Priority",
    "Review",
    "ReviewStatus",
    "User",
    # Engine
    "build_engine",
    "build_session_factory",
    "create_tables",
    "dispose_engine",
    "drop_tables",
    "get_engine",
    "get_session",
    "get_session_factory",
    "session_scope",
    # Repositories
    "BaseRepository",
    "ReviewRepository",
    "UserRepository",
]

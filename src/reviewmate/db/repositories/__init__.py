"""Repository pattern implementation for database access.

This module provides repository classes that encapsulate all database
access logic, providing a clean abstraction over SQLAlchemy models.
"""

from .base import BaseRepository
from .review import ReviewRepository
from .user import UserRepository

__all__ = [
    "BaseRepository",
    "ReviewRepository",
    "UserRepository",
]

"""Pytest configuration and shared fixtures.

Usage Guide:
- For ORM model tests: import factories from tests.factories
- For service tests: use session_factory (each session is its own connection)
- For GitHub API tests: build response dicts with tests.factories.make_github_pr
"""

from datetime import UTC, datetime
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from reviewmate.auth.credentials import CredentialResolver
from reviewmate.auth.vault import TokenVault
from reviewmate.config import Settings, get_settings
from reviewmate.db.engine import (
    build_engine,
    build_session_factory,
    create_tables,
    session_scope,
)
from reviewmate.db.repositories import UserRepository
from reviewmate.notifications import BaseNotifier
from reviewmate.realtime.events import UserEventEmitter

# -----------------------------------------------------------------------------
# Test Timeline Constants
#
# Define a consistent "test epoch" for deterministic date matching across tests.
# -----------------------------------------------------------------------------

JAN_10 = datetime(2024, 1, 10, 9, 0, 0, tzinfo=UTC)   # Older PR opened
JAN_15 = datetime(2024, 1, 15, 10, 0, 0, tzinfo=UTC)  # Default PR opened
JAN_16 = datetime(2024, 1, 16, 14, 0, 0, tzinfo=UTC)  # PR updated / merged

JAN_10_ISO = "2024-01-10T09:00:00Z"
JAN_15_ISO = "2024-01-15T10:00:00Z"
JAN_16_ISO = "2024-01-16T14:00:00Z"

TEST_SECRET = "test-token-secret"
TEST_JWT_SECRET = "test-jwt-secret"


# -----------------------------------------------------------------------------
# Settings
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Settings are cached per process; tests that patch env need a fresh read."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings with test secrets and a per-test database file."""
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        github_token_secret=TEST_SECRET,
        jwt_secret=TEST_JWT_SECRET,
    )


# -----------------------------------------------------------------------------
# Database Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
async def test_engine(settings):
    """Create a SQLite engine on a temporary file for tests.

    Each test gets a fresh database with all tables created. Every session
    opens its own connection, like production.
    """
    engine = build_engine(settings.database_url)
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    """Session factory bound to the test engine."""
    return build_session_factory(test_engine)


@pytest.fixture
async def db_session(session_factory):
    """Create an async session with auto-rollback.

    Changes are rolled back after each test to ensure isolation.
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


# -----------------------------------------------------------------------------
# Service Fixtures
# -----------------------------------------------------------------------------
class RecordingEmitter(UserEventEmitter):
    """Emitter that also records every emitted event in order."""

    def __init__(self) -> None:
        super().__init__()
        self.events: list[tuple[int, str, dict[str, Any]]] = []

    async def emit(self, user_id: int, event: str, payload: dict[str, Any]) -> None:
        self.events.append((user_id, event, payload))
        await super().emit(user_id, event, payload)

    def names(self) -> list[str]:
        return [name for _, name, _ in self.events]


@pytest.fixture
def vault() -> TokenVault:
    return TokenVault(TEST_SECRET)


@pytest.fixture
def emitter() -> RecordingEmitter:
    return RecordingEmitter()


@pytest.fixture
def notifier() -> AsyncMock:
    return AsyncMock(spec=BaseNotifier)


@pytest.fixture
def credentials(vault, session_factory) -> CredentialResolver:
    return CredentialResolver(vault, session_factory)


@pytest.fixture
def mock_client():
    """A GitHubClient stand-in usable as an async context manager."""
    client = MagicMock()
    client.get_pull_request = AsyncMock()
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    return client


@pytest.fixture
def client_factory(mock_client):
    """Client factory returning mock_client and recording the tokens it was given."""
    tokens: list[str] = []

    def factory(token: str):
        tokens.append(token)
        return mock_client

    factory.tokens = tokens  # type: ignore[attr-defined]
    return factory


@pytest.fixture
async def user(session_factory, vault):
    """A persisted user holding the stored token ghp_stored."""
    async with session_scope(session_factory) as session:
        return await UserRepository(session).create(
            "dev@example.com", vault.encrypt("ghp_stored")
        )

"""Per-server wiring of ReviewMate services."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from reviewmate.auth.credentials import CredentialResolver
from reviewmate.auth.vault import TokenVault
from reviewmate.config import Settings, get_settings
from reviewmate.db.engine import build_engine, build_session_factory
from reviewmate.github.sync.batch_import import BatchImportCoordinator
from reviewmate.github.sync.ingestion import (
    ClientFactory,
    ReviewIngestionService,
    default_client_factory,
)
from reviewmate.notifications import BaseNotifier, build_notifier
from reviewmate.realtime.events import UserEventEmitter

from .tasks import BatchTaskQueue


@dataclass
class ServiceContainer:
    """Every collaborator one API instance needs, built once and injected."""

    settings: Settings
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    vault: TokenVault
    credentials: CredentialResolver
    emitter: UserEventEmitter
    notifier: BaseNotifier
    ingestion: ReviewIngestionService
    coordinator: BatchImportCoordinator
    tasks: BatchTaskQueue

    @classmethod
    def build(
        cls,
        settings: Settings | None = None,
        *,
        engine: AsyncEngine | None = None,
        notifier: BaseNotifier | None = None,
        client_factory: ClientFactory | None = None,
    ) -> ServiceContainer:
        """Construct the service graph.

        Args:
            settings: Application settings (defaults to get_settings())
            engine: Database engine (defaults to one for settings.database_url)
            notifier: Notifier override (defaults to build_notifier(settings))
            client_factory: GitHub client factory override

        Returns:
            Wired ServiceContainer
        """
        settings = settings or get_settings()
        engine = engine or build_engine(settings.database_url)
        session_factory = build_session_factory(engine)
        vault = TokenVault(settings.github_token_secret)
        credentials = CredentialResolver(vault, session_factory)
        emitter = UserEventEmitter(maxsize=settings.events.queue_size)
        notifier = notifier or build_notifier(settings)
        ingestion = ReviewIngestionService(
            session_factory=session_factory,
            credentials=credentials,
            emitter=emitter,
            notifier=notifier,
            client_factory=client_factory or default_client_factory(settings.github),
            priority_config=settings.priority,
        )
        coordinator = BatchImportCoordinator(ingestion, emitter)

        return cls(
            settings=settings,
            engine=engine,
            session_factory=session_factory,
            vault=vault,
            credentials=credentials,
            emitter=emitter,
            notifier=notifier,
            ingestion=ingestion,
            coordinator=coordinator,
            tasks=BatchTaskQueue(coordinator),
        )

    async def close(self) -> None:
        """Stop running batches and release database connections."""
        await self.tasks.shutdown()
        await self.engine.dispose()

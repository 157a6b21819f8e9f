"""Review Ingestion Service - Resolve → Fetch → Reconcile pipeline.

Turns a submitted PR URL into a stored review for one user, detecting
status transitions and publishing the change to the user's live clients.
"""

from collections.abc import Callable

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from reviewmate.auth.credentials import CredentialResolver
from reviewmate.config import GitHubConfig, PriorityConfig
from reviewmate.db.engine import session_scope
from reviewmate.db.models import Review, User
from reviewmate.db.repositories import ReviewRepository
from reviewmate.exceptions import ReviewValidationError, StoreConflictError, field_errors
from reviewmate.github.client import GitHubClient
from reviewmate.github.exceptions import RemoteUnavailableError
from reviewmate.logging import bind_review, get_logger
from reviewmate.notifications import BaseNotifier
from reviewmate.realtime.events import REVIEW_CREATED, REVIEW_UPDATED, UserEventEmitter
from reviewmate.schemas.github_api import GitHubPullRequest
from reviewmate.schemas.identity import PRIdentity, parse_pr_url
from reviewmate.schemas.review import ReviewPayload, ReviewRead

from .results import UpsertResult

logger = get_logger(__name__)

ClientFactory = Callable[[str], GitHubClient]


def default_client_factory(config: GitHubConfig | None = None) -> ClientFactory:
    """Build GitHub clients that share one configuration."""

    def factory(token: str) -> GitHubClient:
        return GitHubClient(token, config)

    return factory


class ReviewIngestionService:
    """Service for ingesting PRs from GitHub into a user's reviews.

    Each upsert runs in its own unit of work, so a failure while handling
    one URL never affects another.

    Usage:
        service = ReviewIngestionService(
            session_factory=get_session_factory(),
            credentials=CredentialResolver(vault, session_factory),
            emitter=emitter,
            notifier=build_notifier(settings),
        )

        result = await service.upsert(user, "https://github.com/octocat/Hello-World/pull/1347")
        print(f"{result.action.value}: {result.review.identifier}")
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        credentials: CredentialResolver,
        emitter: UserEventEmitter,
        notifier: BaseNotifier,
        client_factory: ClientFactory | None = None,
        priority_config: PriorityConfig | None = None,
    ) -> None:
        """Initialize the ingestion service.

        Args:
            session_factory: Factory for per-upsert sessions
            credentials: Resolves the GitHub token for each call
            emitter: Publishes review events to the owning user
            notifier: Announces status transitions
            client_factory: Builds a GitHubClient for a token
            priority_config: Thresholds for priority derivation
        """
        self._session_factory = session_factory
        self._credentials = credentials
        self._emitter = emitter
        self._notifier = notifier
        self._client_factory = client_factory or default_client_factory()
        self._priority_config = priority_config or PriorityConfig()

    async def upsert(
        self,
        user: User,
        pr_url: str,
        override_token: str | None = None,
    ) -> UpsertResult:
        """Fetch a PR from GitHub and create or overwrite the user's review.

        Flow:
            1. Parse the URL into an identity (no I/O on failure)
            2. Resolve the GitHub token, persisting an override
            3. Fetch the PR; if GitHub is unreachable keep the existing review
            4. Derive lines changed, priority and status; validate
            5. Create, or overwrite and notify on a status transition
            6. Publish review.created / review.updated

        Args:
            user: Owning user
            pr_url: URL as submitted
            override_token: GitHub token supplied with the request

        Returns:
            UpsertResult with the stored review and the action taken

        Raises:
            InvalidURLError: If pr_url is not a PR URL
            MissingCredentialError: If no usable GitHub token exists
            RemoteAPIError: If GitHub rejected the request
            RemoteProtocolError: If GitHub returned something other than a PR
            RemoteUnavailableError: If GitHub is unreachable and nothing is stored
            ReviewValidationError: If the fetched data fails validation
        """
        identity = parse_pr_url(pr_url)
        review_logger = bind_review(user.id, identity.identifier)

        token = await self._credentials.resolve(user, override_token)

        try:
            remote = await self._fetch(token, identity)
        except RemoteUnavailableError:
            existing = await self._get_existing(user, identity)
            if existing is None:
                raise
            review_logger.warning("GitHub unreachable, keeping stored review")
            return UpsertResult.from_unchanged(existing)

        payload = self._build_payload(remote, identity, pr_url)

        result = await self._reconcile(user, payload)
        event = REVIEW_CREATED if result.created else REVIEW_UPDATED
        await self._emitter.emit(user.id, event, ReviewRead.from_orm(result.review).to_event())

        review_logger.info(
            "Review {}",
            result.action.value,
            status=payload.status.value,
            priority=payload.priority.value,
        )
        return result

    async def _fetch(self, token: str, identity: PRIdentity) -> GitHubPullRequest:
        async with self._client_factory(token) as client:
            return await client.get_pull_request(identity.owner, identity.repo, identity.number)

    async def _get_existing(self, user: User, identity: PRIdentity) -> Review | None:
        async with session_scope(self._session_factory) as session:
            return await ReviewRepository(session).get_by_identifier(identity.identifier, user.id)

    def _build_payload(
        self,
        remote: GitHubPullRequest,
        identity: PRIdentity,
        pr_url: str,
    ) -> ReviewPayload:
        try:
            return remote.to_review_payload(identity, pr_url, self._priority_config)
        except ValidationError as e:
            raise ReviewValidationError(
                "Pull request data failed validation",
                details=field_errors(e.errors()),
            ) from e
        except ValueError as e:
            raise ReviewValidationError(str(e)) from e

    async def _reconcile(self, user: User, payload: ReviewPayload) -> UpsertResult:
        """Create the review or overwrite it, within one unit of work."""
        review_logger = bind_review(user.id, payload.identifier)

        async with session_scope(self._session_factory) as session:
            repo = ReviewRepository(session)
            existing = await repo.get_by_identifier(payload.identifier, user.id)

            if existing is None:
                try:
                    review = await repo.create(user.id, payload)
                    return UpsertResult.from_created(review)
                except StoreConflictError:
                    # Another upsert created it first: update instead
                    review_logger.debug("Concurrent create detected, falling back to update")
                    await session.rollback()
                    existing = await repo.get_by_identifier(payload.identifier, user.id)
                    if existing is None:
                        raise

            previous_status = existing.status
            review = await repo.replace(existing, payload)
            await session.commit()

            if previous_status != review.status:
                review_logger.info(
                    "Status changed",
                    previous=previous_status.value,
                    current=review.status.value,
                )
                try:
                    await self._notifier.notify_status_change(user, review)
                except Exception as e:
                    review_logger.error("Status notification failed", error=str(e))
                await repo.mark_notified(review, review.status)

            return UpsertResult.from_updated(review)

"""Resolve the GitHub token used for a user's outbound calls."""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from reviewmate.db.engine import session_scope
from reviewmate.db.models import User
from reviewmate.db.repositories import UserRepository
from reviewmate.exceptions import MissingCredentialError
from reviewmate.logging import get_logger

from .vault import TokenDecryptionError, TokenVault

logger = get_logger(__name__)


class CredentialResolver:
    """Decrypt-on-read, encrypt-on-write access to a user's GitHub token.

    An override supplied with a request replaces the stored credential
    before it is used, so later requests without an override reuse it.
    """

    def __init__(
        self,
        vault: TokenVault,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        """Initialize the resolver.

        Args:
            vault: Vault used to encrypt and decrypt stored tokens
            session_factory: Factory for the unit of work persisting overrides
        """
        self._vault = vault
        self._session_factory = session_factory

    async def resolve(self, user: User, override_token: str | None = None) -> str:
        """Return the plaintext token to use for this user.

        Args:
            user: Requesting user
            override_token: Token supplied with the request, if any

        Returns:
            Plaintext GitHub token

        Raises:
            MissingCredentialError: If no usable token exists
        """
        override = (override_token or "").strip()
        if override:
            logger.debug("Using override GitHub token", user_id=user.id)
            await self.update_token(user, override)
            return override

        try:
            token = self._vault.decrypt(user.github_token_encrypted)
        except TokenDecryptionError as e:
            logger.warning("Stored GitHub token could not be decrypted", user_id=user.id)
            raise MissingCredentialError() from e

        if not token:
            raise MissingCredentialError()
        return token

    async def update_token(self, user: User, token: str) -> None:
        """Encrypt and persist a new token for the user.

        The in-memory user is updated as well so the caller sees the new
        credential without re-reading.

        Raises:
            MissingCredentialError: If the token is empty after stripping
        """
        token = token.strip()
        if not token:
            raise MissingCredentialError("GitHub token is required")

        blob = self._vault.encrypt(token)
        async with session_scope(self._session_factory) as session:
            await UserRepository(session).set_github_token(user.id, blob)

        user.github_token_encrypted = blob
        logger.info("Stored GitHub token", user_id=user.id)

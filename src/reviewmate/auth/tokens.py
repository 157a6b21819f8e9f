"""Signed API access tokens (HS256 JWT)."""

from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from reviewmate.config import Settings, get_settings
from reviewmate.exceptions import AuthenticationError

ALGORITHM = "HS256"


def _secret(settings: Settings) -> str:
    if not settings.jwt_secret:
        raise AuthenticationError("JWT_SECRET is not configured", status_code=500)
    return settings.jwt_secret


def create_access_token(user_id: int, email: str, settings: Settings | None = None) -> str:
    """Issue an access token for a user.

    Args:
        user_id: User ID, stored as the subject claim
        email: User email
        settings: Settings providing the signing secret and lifetime

    Returns:
        Encoded JWT
    """
    settings = settings or get_settings()
    now = datetime.now(UTC)
    payload = {
        "sub": str(user_id),
        "email": email,
        "iat": now,
        "exp": now + timedelta(hours=settings.access_token_ttl_hours),
    }
    return jwt.encode(payload, _secret(settings), algorithm=ALGORITHM)


def decode_access_token(token: str, settings: Settings | None = None) -> int:
    """Verify an access token and return the user ID it was issued for.

    Raises:
        AuthenticationError: If the token is malformed, forged or expired
    """
    settings = settings or get_settings()
    try:
        payload: dict[str, Any] = jwt.decode(token, _secret(settings), algorithms=[ALGORITHM])
        return int(payload["sub"])
    except (jwt.InvalidTokenError, KeyError, ValueError) as e:
        raise AuthenticationError("Invalid or expired token") from e

"""Credentials: GitHub token storage and API access tokens."""

from .credentials import CredentialResolver
from .tokens import create_access_token, decode_access_token
from .vault import TokenDecryptionError, TokenVault

__all__ = [
    "CredentialResolver",
    "TokenDecryptionError",
    "TokenVault",
    "create_access_token",
    "decode_access_token",
]

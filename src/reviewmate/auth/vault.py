"""Authenticated encryption for stored GitHub tokens.

Blobs have the layout ``iv_hex:tag_hex:ciphertext_hex`` using AES-256-GCM
with a key derived from the configured secret by SHA-256.
"""

import hashlib
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

NONCE_SIZE = 12
TAG_SIZE = 16
# Blobs written with a 16-byte IV still decrypt; GCM accepts both
MIN_NONCE_SIZE = 8


class TokenDecryptionError(Exception):
    """Raised when a well-formed blob fails authentication."""

    pass


class TokenVault:
    """Encrypts and decrypts GitHub tokens at rest.

    Usage:
        vault = TokenVault(settings.github_token_secret)
        blob = vault.encrypt("ghp_...")
        token = vault.decrypt(blob)
    """

    def __init__(self, secret: str) -> None:
        """Initialize the vault.

        Args:
            secret: Application secret; the AES key is SHA-256(secret)

        Raises:
            ValueError: If the secret is empty
        """
        if not secret:
            raise ValueError("Token vault secret must not be empty")
        self._aead = AESGCM(hashlib.sha256(secret.encode("utf-8")).digest())

    def encrypt(self, plaintext: str) -> str:
        """Encrypt a token.

        Args:
            plaintext: Token to protect

        Returns:
            Blob in iv_hex:tag_hex:ciphertext_hex form

        Raises:
            ValueError: If plaintext is empty
        """
        if not plaintext:
            raise ValueError("Cannot encrypt an empty token")

        nonce = os.urandom(NONCE_SIZE)
        sealed = self._aead.encrypt(nonce, plaintext.encode("utf-8"), None)
        ciphertext, tag = sealed[:-TAG_SIZE], sealed[-TAG_SIZE:]
        return f"{nonce.hex()}:{tag.hex()}:{ciphertext.hex()}"

    def decrypt(self, blob: str | None) -> str | None:
        """Decrypt a token blob.

        Args:
            blob: Value previously returned by encrypt()

        Returns:
            The plaintext token, or None if the blob is empty or malformed

        Raises:
            TokenDecryptionError: If the blob was tampered with or written
                under a different secret
        """
        if not blob:
            return None

        parts = blob.split(":")
        if len(parts) != 3 or not all(parts):
            return None

        try:
            nonce, tag, ciphertext = (bytes.fromhex(part) for part in parts)
        except ValueError:
            return None
        if len(nonce) < MIN_NONCE_SIZE or len(tag) != TAG_SIZE:
            return None

        try:
            plaintext = self._aead.decrypt(nonce, ciphertext + tag, None)
        except InvalidTag as e:
            raise TokenDecryptionError("Token blob failed authentication") from e
        return plaintext.decode("utf-8")

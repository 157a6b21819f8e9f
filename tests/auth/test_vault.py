"""Tests for TokenVault."""

import hashlib
import os

import pytest
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from reviewmate.auth.vault import TokenDecryptionError, TokenVault


@pytest.fixture
def vault() -> TokenVault:
    return TokenVault("vault-secret")


class TestTokenVault:
    """Tests for encrypt/decrypt."""

    def test_roundtrip(self, vault):
        blob = vault.encrypt("ghp_example")
        assert vault.decrypt(blob) == "ghp_example"

    def test_blob_layout(self, vault):
        nonce, tag, ciphertext = vault.encrypt("ghp_example").split(":")

        assert len(bytes.fromhex(nonce)) == 12
        assert len(bytes.fromhex(tag)) == 16
        assert len(bytes.fromhex(ciphertext)) == len("ghp_example")

    def test_blob_never_contains_plaintext(self, vault):
        assert "ghp_example" not in vault.encrypt("ghp_example")

    def test_fresh_nonce_per_encryption(self, vault):
        assert vault.encrypt("ghp_example") != vault.encrypt("ghp_example")

    def test_empty_secret_rejected(self):
        with pytest.raises(ValueError):
            TokenVault("")

    def test_empty_plaintext_rejected(self, vault):
        with pytest.raises(ValueError):
            vault.encrypt("")

    @pytest.mark.parametrize(
        "blob",
        [None, "", "abc", "a:b", "zz:zz:zz", "00:11:", "::", "0011:" + "00" * 16 + ":00"],
    )
    def test_malformed_blobs_decrypt_to_none(self, vault, blob):
        assert vault.decrypt(blob) is None

    def test_wrong_tag_length_is_malformed(self, vault):
        nonce, _, ciphertext = vault.encrypt("ghp_example").split(":")
        assert vault.decrypt(f"{nonce}:{'00' * 8}:{ciphertext}") is None

    def test_tampered_ciphertext_raises(self, vault):
        nonce, tag, ciphertext = vault.encrypt("ghp_example").split(":")
        flipped = f"{int(ciphertext[0], 16) ^ 1:x}" + ciphertext[1:]

        with pytest.raises(TokenDecryptionError):
            vault.decrypt(f"{nonce}:{tag}:{flipped}")

    def test_different_secret_raises(self, vault):
        blob = vault.encrypt("ghp_example")

        with pytest.raises(TokenDecryptionError):
            TokenVault("other-secret").decrypt(blob)

    def test_decrypts_sixteen_byte_iv_blobs(self, vault):
        key = hashlib.sha256(b"vault-secret").digest()
        iv = os.urandom(16)
        sealed = AESGCM(key).encrypt(iv, b"ghp_legacy", None)
        blob = f"{iv.hex()}:{sealed[-16:].hex()}:{sealed[:-16].hex()}"

        assert vault.decrypt(blob) == "ghp_legacy"

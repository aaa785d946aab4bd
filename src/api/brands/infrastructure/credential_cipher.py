"""Symmetric encryption of brand database credentials at rest.

The registry stores each brand role's password as a Fernet token. The key
comes from ``BRANDHOUSE_BRANDS_CREDENTIAL_KEY`` and never touches the
database.
"""

from __future__ import annotations

from cryptography.fernet import Fernet, InvalidToken

from brands.ports.exceptions import CredentialDecryptionError
from brands.ports.services import ICredentialCipher


class CredentialCipher(ICredentialCipher):
    """Encrypts and decrypts brand role passwords with Fernet."""

    def __init__(self, key: str | bytes) -> None:
        """Initialize the cipher.

        Args:
            key: urlsafe base64-encoded 32-byte Fernet key

        Raises:
            ValueError: If the key is empty or malformed
        """
        if not key:
            raise ValueError(
                "BRANDHOUSE_BRANDS_CREDENTIAL_KEY must be set to a Fernet key"
            )
        self._fernet = Fernet(key)

    @staticmethod
    def generate_key() -> str:
        """Generate a new Fernet key, e.g. for local development."""
        return Fernet.generate_key().decode("ascii")

    def encrypt(self, plaintext: str) -> str:
        return self._fernet.encrypt(plaintext.encode("utf-8")).decode("ascii")

    def decrypt(self, token: str) -> str:
        """Decrypt a stored credential.

        Raises:
            CredentialDecryptionError: If the token was not produced with
                this key or has been tampered with
        """
        try:
            return self._fernet.decrypt(token.encode("ascii")).decode("utf-8")
        except (InvalidToken, UnicodeError) as e:
            raise CredentialDecryptionError(
                "Stored brand credential could not be decrypted"
            ) from e

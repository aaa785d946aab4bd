"""Service protocols (ports) for the brands context."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ICredentialCipher(Protocol):
    """Reversible encryption for credentials stored in the registry."""

    def encrypt(self, plaintext: str) -> str:
        ...

    def decrypt(self, token: str) -> str:
        """Raises CredentialDecryptionError for foreign or tampered tokens."""
        ...

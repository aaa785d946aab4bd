"""Credential issuing for brand users and brand database roles.

API keys and passwords come from ``secrets``; only the bcrypt hash of the
API password is ever stored.
"""

from __future__ import annotations

import secrets
import string
from dataclasses import dataclass, field

import bcrypt

API_KEY_LENGTH = 16
API_PASSWORD_LENGTH = 32
DATABASE_PASSWORD_LENGTH = 32

_ALPHANUMERIC = string.ascii_letters + string.digits

# Verified against when the API key is unknown, to equalize response time
_DUMMY_HASH = bcrypt.hashpw(b"brandhouse-brand-timing", bcrypt.gensalt()).decode()


@dataclass(frozen=True)
class CredentialPair:
    """A freshly issued API key and password.

    The plaintext password is shown to the caller once and never persisted.
    """

    api_key: str
    api_password: str = field(repr=False)
    api_password_hash: str = field(repr=False)


def _random_string(length: int, alphabet: str = _ALPHANUMERIC) -> str:
    return "".join(secrets.choice(alphabet) for _ in range(length))


class CredentialIssuer:
    """Issues and verifies brand credentials."""

    def issue_credential_pair(self) -> CredentialPair:
        api_password = _random_string(API_PASSWORD_LENGTH)
        return CredentialPair(
            api_key=_random_string(API_KEY_LENGTH),
            api_password=api_password,
            api_password_hash=bcrypt.hashpw(
                api_password.encode(), bcrypt.gensalt()
            ).decode(),
        )

    def verify_api_password(self, api_password: str, api_password_hash: str) -> bool:
        """Check an API password in constant time.

        Returns:
            False for a mismatch or a malformed hash
        """
        try:
            return bcrypt.checkpw(api_password.encode(), api_password_hash.encode())
        except ValueError:
            return False

    def burn_verification_time(self, api_password: str) -> None:
        """Spend one bcrypt check when there is no user to verify against."""
        self.verify_api_password(api_password, _DUMMY_HASH)

    def generate_database_password(self) -> str:
        """Random password for a brand's database role.

        Drawn from the alphanumeric alphabet so it survives URL and SQL
        literal quoting unchanged.
        """
        return _random_string(DATABASE_PASSWORD_LENGTH)

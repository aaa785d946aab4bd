"""Unit tests for AuthTokenCodec.

Covers the claim contract of both token types and rejection of tokens
that fail verification.
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import pytest
from jose import jwt

from shared_kernel.auth import (
    AnonymousIdentity,
    AuthTokenCodec,
    BrandIdentity,
    PrincipalIdentity,
)
from shared_kernel.auth.token_codec import InvalidTokenError

SECRET = "unit-test-signing-key-0123456789abcdef"


def _codec(**overrides) -> AuthTokenCodec:
    kwargs = {
        "secret": SECRET,
        "issuer": "brandhouse-test",
        "audience": "brandhouse-test-api",
        "lifetime": timedelta(minutes=30),
    }
    kwargs.update(overrides)
    return AuthTokenCodec(**kwargs)


class TestPrincipalTokens:
    """Tests for Principal token issuing."""

    def test_principal_token_carries_principal_claims(self):
        codec = _codec()

        issued = codec.issue_principal_token("p-1", "a@example.com", ["User"])
        claims = codec.decode(issued.token)

        assert claims["sub"] == "p-1"
        assert claims["email"] == "a@example.com"
        assert claims["roles"] == ["User"]
        assert claims["token_type"] == "Principal"
        assert claims["iss"] == "brandhouse-test"
        assert claims["aud"] == "brandhouse-test-api"
        assert claims["exp"] > claims["iat"]

    def test_principal_token_has_no_brand_claims(self):
        codec = _codec()

        claims = codec.decode(codec.issue_principal_token("p-1", "a@example.com", []).token)

        for claim in ("brand_id", "tenant_id", "brand_schema", "tenant_schema"):
            assert claim not in claims

    def test_expires_in_matches_lifetime(self):
        issued = _codec(lifetime=timedelta(minutes=10)).issue_principal_token(
            "p-1", "a@example.com", []
        )

        assert 590 <= issued.expires_in <= 600

    def test_probe_records_issue_without_token(self):
        probe = MagicMock()
        codec = _codec(probe=probe)

        codec.issue_principal_token("p-1", "a@example.com", [])

        probe.token_issued.assert_called_once_with(token_type="Principal", subject="p-1")


class TestBrandTokens:
    """Tests for Brand token issuing."""

    def test_brand_token_carries_both_claim_spellings(self):
        codec = _codec()

        issued = codec.issue_brand_token(
            brand_id="b-1",
            brand_schema="brand_abc",
            user_id="u-1",
            roles=["Owner"],
            display_name="Acme Owner",
        )
        claims = codec.decode(issued.token)

        assert claims["sub"] == "u-1"
        assert claims["token_type"] == "Brand"
        assert claims["brand_id"] == claims["tenant_id"] == "b-1"
        assert claims["brand_schema"] == claims["tenant_schema"] == "brand_abc"
        assert claims["roles"] == ["Owner"]
        assert claims["display_name"] == "Acme Owner"


class TestDecodeRejections:
    """Tests for tokens that must not verify."""

    def test_rejects_expired_token(self):
        past = datetime.now(UTC) - timedelta(hours=2)
        codec = _codec(clock=lambda: past)
        token = codec.issue_principal_token("p-1", "a@example.com", []).token

        with pytest.raises(InvalidTokenError, match="expired"):
            _codec().decode(token)

    def test_rejects_wrong_signature(self):
        token = _codec(secret="another-signing-key-0123456789abcdef").issue_principal_token(
            "p-1", "a@example.com", []
        ).token

        with pytest.raises(InvalidTokenError):
            _codec().decode(token)

    def test_rejects_wrong_audience(self):
        token = _codec(audience="someone-else").issue_principal_token(
            "p-1", "a@example.com", []
        ).token

        with pytest.raises(InvalidTokenError):
            _codec().decode(token)

    def test_rejects_wrong_issuer(self):
        token = _codec(issuer="someone-else").issue_principal_token(
            "p-1", "a@example.com", []
        ).token

        with pytest.raises(InvalidTokenError):
            _codec().decode(token)

    def test_rejects_garbage(self):
        with pytest.raises(InvalidTokenError):
            _codec().decode("not-a-token")

    def test_empty_secret_is_refused(self):
        with pytest.raises(ValueError):
            _codec(secret="")


class TestToIdentity:
    """Tests for mapping claims to identity variants."""

    def test_missing_token_type_is_principal(self):
        identity = _codec().to_identity({"sub": "p-1", "email": "a@example.com"})

        assert isinstance(identity, PrincipalIdentity)
        assert identity.principal_id == "p-1"

    def test_brand_token_type_is_brand(self):
        identity = _codec().to_identity(
            {
                "sub": "u-1",
                "token_type": "Brand",
                "brand_id": "b-1",
                "brand_schema": "brand_abc",
                "roles": ["Operator"],
            }
        )

        assert isinstance(identity, BrandIdentity)
        assert identity.brand_id == "b-1"
        assert identity.brand_schema == "brand_abc"
        assert identity.user_id == "u-1"
        assert identity.has_role("Operator")

    def test_brand_token_accepts_tenant_spelling(self):
        identity = _codec().to_identity(
            {
                "sub": "u-1",
                "token_type": "Brand",
                "tenant_id": "b-1",
                "tenant_schema": "brand_abc",
            }
        )

        assert isinstance(identity, BrandIdentity)
        assert identity.brand_id == "b-1"

    def test_brand_token_without_scope_is_anonymous(self):
        identity = _codec().to_identity({"sub": "u-1", "token_type": "Brand"})

        assert isinstance(identity, AnonymousIdentity)

    def test_unknown_token_type_is_anonymous(self):
        identity = _codec().to_identity({"sub": "x", "token_type": "Service"})

        assert isinstance(identity, AnonymousIdentity)

    def test_hand_built_legacy_token_without_type_decodes_as_principal(self):
        now = datetime.now(UTC)
        token = jwt.encode(
            {
                "sub": "p-1",
                "email": "a@example.com",
                "iss": "brandhouse-test",
                "aud": "brandhouse-test-api",
                "iat": int(now.timestamp()),
                "exp": int((now + timedelta(minutes=5)).timestamp()),
            },
            SECRET,
            algorithm="HS256",
        )
        codec = _codec()

        identity = codec.to_identity(codec.decode(token))

        assert isinstance(identity, PrincipalIdentity)

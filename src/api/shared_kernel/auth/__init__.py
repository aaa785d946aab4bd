"""Authentication shared kernel module."""

from shared_kernel.auth.identity import (
    AnonymousIdentity,
    BrandIdentity,
    Identity,
    IdentityKind,
    PrincipalIdentity,
    TokenType,
)
from shared_kernel.auth.observability import (
    DefaultTokenCodecProbe,
    TokenCodecProbe,
)
from shared_kernel.auth.token_codec import (
    AuthTokenCodec,
    InvalidTokenError,
    IssuedToken,
)

__all__ = [
    "AnonymousIdentity",
    "AuthTokenCodec",
    "BrandIdentity",
    "DefaultTokenCodecProbe",
    "Identity",
    "IdentityKind",
    "InvalidTokenError",
    "IssuedToken",
    "PrincipalIdentity",
    "TokenCodecProbe",
    "TokenType",
]

"""Core models for platform calls and identity resolution."""

from .identity import (
    AuthenticatedUser,
    InternalRecord,
    MatchFailure,
    MatchResult,
    MatchSuccess,
    UserType,
)
from .platform import (
    AccessTokenGrant,
    CanonicalRequest,
    ExternalUserProfile,
    JsapiAuthConfig,
    ServerCredential,
    SignedRequestHeaders,
    TicketCredential,
)

__all__ = [
    # Identity
    "AuthenticatedUser",
    "InternalRecord",
    "MatchFailure",
    "MatchResult",
    "MatchSuccess",
    "UserType",
    # Platform
    "AccessTokenGrant",
    "CanonicalRequest",
    "ExternalUserProfile",
    "JsapiAuthConfig",
    "ServerCredential",
    "SignedRequestHeaders",
    "TicketCredential",
]

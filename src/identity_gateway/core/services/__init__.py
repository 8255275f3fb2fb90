"""Core services exports."""

# Database Service
from .database.db_session import DbSessionService

# Identity Services
from .identity import IdentityResolver, InternalUserLookup, PlatformLoginService

# Platform Services
from .platform import (
    JsapiAuthorizationBuilder,
    RequestSigner,
    ServerCredentialClient,
    TicketClient,
    TokenExchangeClient,
    UserInfoClient,
)

__all__ = [
    # Platform Services
    "JsapiAuthorizationBuilder",
    "RequestSigner",
    "ServerCredentialClient",
    "TicketClient",
    "TokenExchangeClient",
    "UserInfoClient",
    # Identity Services
    "IdentityResolver",
    "InternalUserLookup",
    "PlatformLoginService",
    # Database Service
    "DbSessionService",
]

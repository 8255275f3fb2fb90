from .identity_resolver import IdentityResolver, InternalUserLookup
from .login_service import PlatformLoginService

__all__ = ["IdentityResolver", "InternalUserLookup", "PlatformLoginService"]

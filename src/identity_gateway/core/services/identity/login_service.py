"""Login callback orchestration: platform code to an authorized internal user."""

from loguru import logger
from starlette.concurrency import run_in_threadpool

from src.identity_gateway.core.errors import AccountDisabledError
from src.identity_gateway.core.models.identity import AuthenticatedUser
from src.identity_gateway.core.services.identity.identity_resolver import IdentityResolver
from src.identity_gateway.core.services.platform.oauth_client import (
    TokenExchangeClient,
    UserInfoClient,
)


class PlatformLoginService:
    """Runs the login callback: code exchange, profile fetch, identity resolution."""

    def __init__(
        self,
        token_client: TokenExchangeClient,
        user_info_client: UserInfoClient,
        resolver: IdentityResolver,
    ) -> None:
        self._token_client = token_client
        self._user_info_client = user_info_client
        self._resolver = resolver

    async def authenticate(self, code: str) -> AuthenticatedUser:
        """Turn an authorization code into an internal user allowed to log in.

        Raises:
            HttpError, PlatformError: A platform call failed.
            MissingJoinKeyError, NoRecordError, InternalLookupError: The
                profile could not be resolved.
            AccountDisabledError: The matched account may not log in.
        """
        grant = await self._token_client.exchange_code(code)
        profile = await self._user_info_client.fetch_user_info(grant.access_token)
        logger.info(
            "Platform login",
            openid=profile.openid,
            nickname=profile.nickname,
            external_union_id=profile.external_union_id,
        )
        # The lookup is a blocking database query
        user = await run_in_threadpool(self._resolver.resolve_or_raise, profile)
        self.validate_user_access(user)
        return user

    @staticmethod
    def validate_user_access(user: AuthenticatedUser) -> None:
        """Raise :class:`AccountDisabledError` unless ``user`` may log in."""
        if not user.is_active:
            logger.warning(f"Access denied for disabled {user.user_type} {user.id}")
            raise AccountDisabledError(f"account {user.id} is disabled")

"""OAuth2-style login against the platform: authorize URL, code exchange, user info."""

from urllib.parse import urlencode

from loguru import logger

from src.identity_gateway.core.models.platform import (
    AccessTokenGrant,
    ExternalUserProfile,
    TokenEnvelope,
    UserEnvelope,
)
from src.identity_gateway.core.services.platform.base import PlatformApiClient
from src.identity_gateway.runtime.config.config_data import PlatformConfig


def build_authorize_url(platform: PlatformConfig, redirect_uri: str, state: str) -> str:
    """Browser URL that starts the platform login and returns to ``redirect_uri``."""
    query = urlencode(
        {
            "client_id": platform.app_id,
            "response_type": "code",
            "redirect_uri": redirect_uri,
            "scope": platform.scope,
            "state": state,
        }
    )
    return platform.url_for(f"{platform.authorize_path}?{query}")


class TokenExchangeClient(PlatformApiClient):
    """Exchanges an authorization code for a platform access token."""

    async def exchange_code(self, code: str) -> AccessTokenGrant:
        """Exchange ``code`` for an access token.

        Args:
            code: Authorization code from the login callback

        Returns:
            The token grant

        Raises:
            HttpError: Non-2xx response or transport failure
            PlatformError: The platform rejected the code
        """
        self._require_credentials()
        payload = await self._get_json(
            self._platform.token_path,
            params={
                "appid": self._platform.app_id,
                "appkey": self._platform.app_secret,
                "code": code,
            },
        )
        token = self._parse(TokenEnvelope, payload).token
        logger.info(f"Exchanged authorization code for openid={token.openid}")
        return AccessTokenGrant(
            access_token=token.access_token,
            refresh_token=token.refresh_token,
            openid=token.openid,
            expires_in_seconds=token.expires_in,
        )


class UserInfoClient(PlatformApiClient):
    """Fetches the platform profile of the user an access token belongs to."""

    async def fetch_user_info(self, access_token: str) -> ExternalUserProfile:
        """Fetch the user profile for ``access_token``.

        ``third_union_id`` is mapped onto ``external_union_id`` unchanged,
        including when it is absent.
        """
        self._require_credentials()
        payload = await self._get_json(
            self._platform.user_info_path,
            params={"access_token": access_token, "appid": self._platform.app_id},
        )
        user = self._parse(UserEnvelope, payload).user
        logger.debug(f"Fetched platform profile for openid={user.openid}")
        return ExternalUserProfile(
            nickname=user.nickname,
            avatar=user.avatar,
            sex=user.sex,
            openid=user.openid,
            unionid=user.unionid,
            company_id=user.company_id,
            company_uid=user.company_uid,
            external_union_id=user.third_union_id,
            extensions=dict(user.model_extra or {}),
        )

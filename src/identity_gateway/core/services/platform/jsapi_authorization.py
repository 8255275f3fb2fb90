"""Builds the per-page authorization config consumed by the platform client SDK."""

from collections.abc import Callable

from loguru import logger

from src.identity_gateway.core.models.platform import JsapiAuthConfig
from src.identity_gateway.core.security import epoch_millis, random_nonce, sha1_hex
from src.identity_gateway.core.services.platform.jsapi_client import (
    ServerCredentialClient,
    TicketClient,
)


def compute_jsapi_signature(ticket: str, nonce: str, timestamp_millis: int, url: str) -> str:
    """Client-facing signature over ticket, nonce, timestamp and page URL.

    The concatenation order is fixed and ``url`` is used exactly as given.
    """
    return sha1_hex(
        f"jsapi_ticket={ticket}&noncestr={nonce}&timestamp={timestamp_millis}&url={url}"
    )


class JsapiAuthorizationBuilder:
    """Acquires a fresh server credential and ticket, then signs a page URL.

    Nothing is cached: each call performs both platform round trips and
    returns a config that is valid only for the given page URL.
    """

    def __init__(
        self,
        server_credential_client: ServerCredentialClient,
        ticket_client: TicketClient,
        clock: Callable[[], int] = epoch_millis,
        nonce_factory: Callable[[], str] = random_nonce,
    ) -> None:
        self._server_credential_client = server_credential_client
        self._ticket_client = ticket_client
        self._clock = clock
        self._nonce_factory = nonce_factory

    async def build_auth_config(self, page_url: str) -> JsapiAuthConfig:
        """Build a one-time authorization config for ``page_url``.

        Raises:
            HttpError, PlatformError: Either platform call failed; no partial
                config is produced.
        """
        credential = await self._server_credential_client.get_server_credential()
        ticket = await self._ticket_client.get_ticket(credential.value)

        timestamp_millis = self._clock()
        nonce = self._nonce_factory()
        signature = compute_jsapi_signature(ticket.value, nonce, timestamp_millis, page_url)

        logger.info("Built JSAPI authorization config")
        return JsapiAuthConfig(
            app_id=self._ticket_client.app_id,
            timestamp_millis=timestamp_millis,
            nonce=nonce,
            signature=signature,
            url=page_url,
        )

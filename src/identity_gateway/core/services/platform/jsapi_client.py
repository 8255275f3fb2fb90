"""Signed server-to-server calls that obtain JSAPI credentials."""

from urllib.parse import urlencode

from loguru import logger

from src.identity_gateway.core.models.platform import (
    CanonicalRequest,
    JsapiTicketEnvelope,
    JsapiTokenEnvelope,
    ServerCredential,
    TicketCredential,
)
from src.identity_gateway.core.services.platform.base import PlatformApiClient
from src.identity_gateway.core.services.platform.request_signer import RequestSigner
from src.identity_gateway.runtime.config.config_data import PlatformConfig


class SignedPlatformClient(PlatformApiClient):
    """Platform client whose requests carry ``X-Auth`` signatures."""

    def __init__(self, platform: PlatformConfig, signer: RequestSigner | None = None) -> None:
        super().__init__(platform)
        self._signer = signer or RequestSigner(platform.signature_scheme)

    async def _signed_get(self, path_and_query: str) -> dict:
        self._require_credentials()
        canonical = CanonicalRequest.for_get(
            path_and_query, content_type=self._platform.content_type
        )
        headers = self._signer.signed_headers(
            self._platform.app_id, self._platform.app_secret, canonical
        )
        # The URL carries the query already; what is signed is what is sent.
        return await self._get_json(canonical.path_and_query, headers=headers.as_headers())


class ServerCredentialClient(SignedPlatformClient):
    """Obtains a short-lived server credential (``jsapi_token``)."""

    async def get_server_credential(self) -> ServerCredential:
        payload = await self._signed_get(self._platform.jsapi_token_path)
        envelope = self._parse(JsapiTokenEnvelope, payload)
        logger.debug(f"Obtained server credential valid for {envelope.expires_in}s")
        return ServerCredential(
            value=envelope.jsapi_token, expires_in_seconds=envelope.expires_in
        )


class TicketClient(SignedPlatformClient):
    """Exchanges a server credential for a JSAPI ticket."""

    def ticket_path(self, server_credential_value: str) -> str:
        """Path and query of the ticket request, exactly as signed and sent."""
        query = urlencode({"jsapi_token": server_credential_value})
        return f"{self._platform.jsapi_ticket_path}?{query}"

    async def get_ticket(self, server_credential_value: str) -> TicketCredential:
        payload = await self._signed_get(self.ticket_path(server_credential_value))
        envelope = self._parse(JsapiTicketEnvelope, payload)
        logger.debug(f"Obtained JSAPI ticket valid for {envelope.expires_in}s")
        return TicketCredential(
            value=envelope.jsapi_ticket, expires_in_seconds=envelope.expires_in
        )

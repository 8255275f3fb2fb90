"""Signature scheme for privileged platform endpoints (``X-Auth`` header)."""

from src.identity_gateway.core.models.platform import (
    CanonicalRequest,
    SignedRequestHeaders,
)
from src.identity_gateway.core.security import sha1_hex


class RequestSigner:
    """Computes the three-part ``<SCHEME>:<appId>:<signature>`` authorization.

    The signature is ``sha1(lower(secret) + md5 + path_and_query + content_type + date)``.
    Field order is part of the scheme.
    """

    def __init__(self, scheme: str = "WPS-3") -> None:
        self._scheme = scheme

    @property
    def scheme(self) -> str:
        return self._scheme

    def sign(self, secret: str, canonical: CanonicalRequest) -> str:
        """Return the hex signature of ``canonical`` under ``secret``."""
        return sha1_hex(
            secret.lower()
            + canonical.content_md5_hex
            + canonical.path_and_query
            + canonical.content_type
            + canonical.date_rfc1123
        )

    def build_auth_header(self, app_id: str, signature_hex: str) -> str:
        return f"{self._scheme}:{app_id}:{signature_hex}"

    def signed_headers(
        self, app_id: str, secret: str, canonical: CanonicalRequest
    ) -> SignedRequestHeaders:
        """Headers to send with the request described by ``canonical``."""
        return SignedRequestHeaders(
            content_type=canonical.content_type,
            date=canonical.date_rfc1123,
            content_md5=canonical.content_md5_hex,
            x_auth=self.build_auth_header(app_id, self.sign(secret, canonical)),
        )

"""Models for the external platform: wire envelopes, credentials and signing values."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.identity_gateway.core.security import md5_hex, rfc1123_now

EMPTY_BODY_MD5 = md5_hex(b"")


# --- Wire envelopes (validated at the network boundary) ---


class PlatformEnvelope(BaseModel):
    """Fields shared by every successful platform response."""

    model_config = ConfigDict(extra="ignore")

    result: int


class TokenPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    appid: str | None = None
    expires_in: int
    access_token: str
    refresh_token: str | None = None
    openid: str


class TokenEnvelope(PlatformEnvelope):
    token: TokenPayload


class PlatformUser(BaseModel):
    """User object as returned by the user-info endpoint."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    nickname: str
    avatar: str | None = None
    sex: str | None = None
    openid: str
    unionid: str | None = None
    company_id: str | None = None
    company_uid: str | None = None
    third_union_id: str | None = None


class UserEnvelope(PlatformEnvelope):
    user: PlatformUser


class JsapiTokenEnvelope(PlatformEnvelope):
    jsapi_token: str
    expires_in: int


class JsapiTicketEnvelope(PlatformEnvelope):
    jsapi_ticket: str
    expires_in: int


# --- Domain values ---


class AccessTokenGrant(BaseModel):
    """Result of exchanging an authorization code."""

    access_token: str
    refresh_token: str | None = None
    openid: str
    expires_in_seconds: int


class ExternalUserProfile(BaseModel):
    """A platform user's profile.

    ``external_union_id`` is the join key to internal identity. It is carried
    as received; its presence is checked by the identity resolver.
    """

    nickname: str
    avatar: str | None = None
    sex: str | None = None
    openid: str
    unionid: str | None = None
    company_id: str | None = None
    company_uid: str | None = None
    external_union_id: str | None = None
    extensions: dict[str, Any] = Field(default_factory=dict)


class ServerCredential(BaseModel):
    """Short-lived server-to-server credential (``jsapi_token``)."""

    model_config = ConfigDict(frozen=True)

    value: str
    expires_in_seconds: int


class TicketCredential(BaseModel):
    """Short-lived ticket derived from a server credential (``jsapi_ticket``)."""

    model_config = ConfigDict(frozen=True)

    value: str
    expires_in_seconds: int


class CanonicalRequest(BaseModel):
    """The exact fields a request signature is computed over.

    Built once per call; the same instance feeds both the signature and the
    headers sent on the wire.
    """

    model_config = ConfigDict(frozen=True)

    path_and_query: str
    content_type: str
    content_md5_hex: str
    date_rfc1123: str

    @classmethod
    def for_get(
        cls,
        path_and_query: str,
        content_type: str = "application/json",
        date_rfc1123: str | None = None,
    ) -> CanonicalRequest:
        """Canonical form of a body-less request issued now."""
        return cls(
            path_and_query=path_and_query,
            content_type=content_type,
            content_md5_hex=EMPTY_BODY_MD5,
            date_rfc1123=date_rfc1123 or rfc1123_now(),
        )


class SignedRequestHeaders(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    content_type: str = Field(alias="Content-Type")
    date: str = Field(alias="Date")
    content_md5: str = Field(alias="Content-Md5")
    x_auth: str = Field(alias="X-Auth")

    def as_headers(self) -> dict[str, str]:
        """Header mapping ready to hand to the HTTP client."""
        return self.model_dump(by_alias=True)


class JsapiAuthConfig(BaseModel):
    """One-time authorization config for the platform's client SDK on one page."""

    model_config = ConfigDict(frozen=True)

    app_id: str
    timestamp_millis: int
    nonce: str
    signature: str
    url: str

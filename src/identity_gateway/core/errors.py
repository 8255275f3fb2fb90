"""Typed failures raised by the platform clients and the identity resolver.

Callers are expected to map :class:`MissingJoinKeyError` and
:class:`NoRecordError` to an authentication-denied response, and
:class:`HttpError`, :class:`PlatformError` and :class:`InternalLookupError`
to a "try again later" response.
"""

from __future__ import annotations

from typing import Literal

MatchFailureReason = Literal["MISSING_JOIN_KEY", "NO_RECORD", "INTERNAL_ERROR"]


class GatewayError(Exception):
    """Base class for every error raised by this package."""


class PlatformGatewayError(GatewayError):
    """A call to the external platform did not produce a usable result."""


class PlatformConfigurationError(PlatformGatewayError):
    """The platform client is missing credentials it needs to make a call."""


class HttpError(PlatformGatewayError):
    """The platform answered with a non-2xx status, or could not be reached.

    Transport failures (timeouts, refused connections) use ``status == 0``.
    """

    def __init__(self, status: int, body: str) -> None:
        self.status = status
        self.body = body
        super().__init__(f"HTTP {status}: {body[:200]}")


class PlatformError(PlatformGatewayError):
    """A 2xx response whose envelope reports a failure."""

    def __init__(self, code: int | str, message: str | None = None) -> None:
        self.code = code
        self.message = message or f"platform returned {code}"
        super().__init__(f"platform error {code}: {self.message}")


class MalformedResponseError(PlatformError):
    """A 2xx response that is not JSON or does not match the expected schema."""

    def __init__(self, message: str) -> None:
        super().__init__("malformed_response", message)


class IdentityResolutionError(GatewayError):
    """Identity resolution ended without a user."""

    reason: MatchFailureReason

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(detail)


class MissingJoinKeyError(IdentityResolutionError):
    """The profile carries no join key. Terminal, never retried."""

    reason = "MISSING_JOIN_KEY"


class NoRecordError(IdentityResolutionError):
    """No internal record matches the join key."""

    reason = "NO_RECORD"


class InternalLookupError(IdentityResolutionError):
    """The lookup collaborator itself failed."""

    reason = "INTERNAL_ERROR"


class AccountDisabledError(GatewayError):
    """The identity resolved, but the matched account may not log in."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(detail)


RESOLUTION_ERRORS: dict[str, type[IdentityResolutionError]] = {
    cls.reason: cls for cls in (MissingJoinKeyError, NoRecordError, InternalLookupError)
}

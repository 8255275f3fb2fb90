"""Resolution of a platform profile into exactly one internal user."""

from typing import Protocol

from loguru import logger

from src.identity_gateway.core.models.identity import (
    AuthenticatedUser,
    InternalRecord,
    MatchFailure,
    MatchResult,
    MatchSuccess,
)
from src.identity_gateway.core.models.platform import ExternalUserProfile
from src.identity_gateway.runtime.config.config_data import IdentityConfig


class InternalUserLookup(Protocol):
    """Storage contract consumed by the resolver: exact match on the join key."""

    def lookup_by_external_union_id(self, external_union_id: str) -> InternalRecord | None:
        ...


class IdentityResolver:
    """Matches a platform profile to an internal record by exact join key equality.

    Resolution is single pass: a missing join key is denied without touching
    storage, a lookup miss is denied, a lookup failure is reported as an
    internal error, and a hit yields a freshly built :class:`AuthenticatedUser`.
    """

    def __init__(self, lookup: InternalUserLookup, identity: IdentityConfig | None = None) -> None:
        self._lookup = lookup
        self._identity = identity or IdentityConfig()

    def resolve(self, profile: ExternalUserProfile) -> MatchResult:
        join_key = self._identity.join_key
        union_id = profile.external_union_id

        if not union_id:
            logger.warning(f"Denied openid={profile.openid}: {join_key} missing")
            return MatchFailure(
                reason="MISSING_JOIN_KEY",
                detail=f"{join_key} missing, cannot resolve identity",
            )

        try:
            record = self._lookup.lookup_by_external_union_id(union_id)
        except Exception as e:
            logger.exception(f"Internal lookup failed for {join_key}={union_id}")
            return MatchFailure(reason="INTERNAL_ERROR", detail=str(e) or type(e).__name__)

        if record is None:
            logger.warning(f"Denied openid={profile.openid}: no internal record for {union_id}")
            return MatchFailure(reason="NO_RECORD", detail=f"no internal record for {union_id}")

        user = self._to_user(record)
        logger.info(f"Resolved {join_key}={union_id} to {user.user_type} {user.id}")
        return MatchSuccess(user=user, matched_fields=[join_key])

    def resolve_or_raise(self, profile: ExternalUserProfile) -> AuthenticatedUser:
        """Like :meth:`resolve`, but raise the typed error for a non-match.

        Raises:
            MissingJoinKeyError, NoRecordError, InternalLookupError
        """
        result = self.resolve(profile)
        if isinstance(result, MatchFailure):
            raise result.to_exception()
        return result.user

    def _to_user(self, record: InternalRecord) -> AuthenticatedUser:
        user_type = "teacher" if record.role == self._identity.teacher_role else "student"
        return AuthenticatedUser(
            id=record.id,
            display_name=record.display_name,
            user_type=user_type,
            external_number=record.external_number,
            org_unit_name=record.org_unit_name,
            major_name=record.major_name,
            class_name=record.class_name,
            is_active=record.is_active,
        )

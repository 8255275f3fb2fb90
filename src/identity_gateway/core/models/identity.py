"""Internal identity models produced by the identity resolver."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from src.identity_gateway.core.errors import (
    RESOLUTION_ERRORS,
    IdentityResolutionError,
    MatchFailureReason,
)

UserType = Literal["student", "teacher"]


class InternalRecord(BaseModel):
    """Internal student or teacher record as returned by the lookup collaborator."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    display_name: str
    role: str
    external_number: str
    org_unit_name: str | None = None
    major_name: str | None = None
    class_name: str | None = None
    is_active: bool = True


class AuthenticatedUser(BaseModel):
    """A platform user resolved to exactly one internal record.

    Created fresh for every successful resolution and never mutated.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str
    user_type: UserType
    external_number: str
    org_unit_name: str | None = None
    major_name: str | None = None
    class_name: str | None = None
    is_active: bool = Field(default=True, exclude=True)


class MatchSuccess(BaseModel):
    model_config = ConfigDict(frozen=True)

    matched: Literal[True] = True
    user: AuthenticatedUser
    matched_fields: list[str] = Field(default_factory=list)


class MatchFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    matched: Literal[False] = False
    reason: MatchFailureReason
    detail: str

    def to_exception(self) -> IdentityResolutionError:
        """The typed error equivalent of this outcome."""
        return RESOLUTION_ERRORS[self.reason](self.detail)


MatchResult = MatchSuccess | MatchFailure

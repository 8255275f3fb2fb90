"""Unit tests for identity resolution."""

import pytest

from src.identity_gateway.core.errors import (
    InternalLookupError,
    MissingJoinKeyError,
    NoRecordError,
)
from src.identity_gateway.core.models import (
    AuthenticatedUser,
    ExternalUserProfile,
    InternalRecord,
    MatchFailure,
    MatchSuccess,
)
from src.identity_gateway.core.services import IdentityResolver
from src.identity_gateway.runtime.config.config_data import IdentityConfig
from tests.fixtures.services import InMemoryLookup


def _profile(external_union_id: str | None) -> ExternalUserProfile:
    return ExternalUserProfile(
        nickname="Someone", openid="OID-x", external_union_id=external_union_id
    )


class TestIdentityResolver:
    """Test matching profiles to internal records."""

    def test_student_match(self, identity_resolver: IdentityResolver, student_profile):
        """A known join key resolves to a student with full details."""
        result = identity_resolver.resolve(student_profile)

        assert isinstance(result, MatchSuccess)
        assert result.matched is True
        assert result.matched_fields == ["external_union_id"]
        assert result.user == AuthenticatedUser(
            id="S12345",
            display_name="Alice Zhang",
            user_type="student",
            external_number="S12345",
            org_unit_name="School of Statistics",
            major_name="Data Science",
            class_name="Data Science 2401",
        )

    def test_teacher_match(self, identity_resolver: IdentityResolver):
        """The teacher role maps to a teacher user."""
        result = identity_resolver.resolve(_profile("T001"))

        assert isinstance(result, MatchSuccess)
        assert result.user.user_type == "teacher"
        assert result.user.display_name == "Bob Li"
        assert result.user.major_name is None

    @pytest.mark.parametrize("role", ["student", "admin", "Teacher", ""])
    def test_non_teacher_roles_are_students(self, identity_config, role):
        """Only the exact teacher role is a teacher; everything else is a student."""
        record = InternalRecord(id="X1", display_name="X", role=role, external_number="X1")
        resolver = IdentityResolver(InMemoryLookup({"X1": record}), identity_config)

        result = resolver.resolve(_profile("X1"))

        assert result.user.user_type == "student"

    @pytest.mark.parametrize("union_id", [None, ""])
    def test_missing_join_key(self, identity_resolver, in_memory_lookup, union_id):
        """A missing join key is denied without consulting storage."""
        result = identity_resolver.resolve(_profile(union_id))

        assert isinstance(result, MatchFailure)
        assert result.matched is False
        assert result.reason == "MISSING_JOIN_KEY"
        assert result.detail == "external_union_id missing, cannot resolve identity"
        assert in_memory_lookup.calls == []

    def test_no_record(self, identity_resolver, in_memory_lookup):
        result = identity_resolver.resolve(_profile("UNKNOWN"))

        assert isinstance(result, MatchFailure)
        assert result.reason == "NO_RECORD"
        assert result.detail == "no internal record for UNKNOWN"
        assert in_memory_lookup.calls == ["UNKNOWN"]

    def test_match_is_case_sensitive(self, identity_resolver):
        result = identity_resolver.resolve(_profile("s12345"))

        assert isinstance(result, MatchFailure)
        assert result.reason == "NO_RECORD"

    def test_lookup_failure(self, mock_lookup, identity_config):
        """A failing lookup is reported as an internal error, not a denial."""
        mock_lookup.lookup_by_external_union_id.side_effect = RuntimeError("database offline")
        resolver = IdentityResolver(mock_lookup, identity_config)

        result = resolver.resolve(_profile("S12345"))

        assert isinstance(result, MatchFailure)
        assert result.reason == "INTERNAL_ERROR"
        assert result.detail == "database offline"
        mock_lookup.lookup_by_external_union_id.assert_called_once_with("S12345")

    def test_lookup_is_called_once(self, mock_lookup, student_record, student_profile):
        mock_lookup.lookup_by_external_union_id.return_value = student_record
        resolver = IdentityResolver(mock_lookup)

        resolver.resolve(student_profile)

        mock_lookup.lookup_by_external_union_id.assert_called_once_with("S12345")

    def test_each_success_builds_a_new_user(self, identity_resolver, student_profile):
        first = identity_resolver.resolve(student_profile)
        second = identity_resolver.resolve(student_profile)

        assert first.user == second.user
        assert first.user is not second.user

    def test_custom_identity_config(self, in_memory_lookup):
        """Reported field name and teacher role come from configuration."""
        resolver = IdentityResolver(
            in_memory_lookup, IdentityConfig(join_key="third_union_id", teacher_role="student")
        )

        result = resolver.resolve(_profile("S12345"))

        assert result.matched_fields == ["third_union_id"]
        assert result.user.user_type == "teacher"


    def test_active_flag_is_carried(self, identity_config, student_record):
        """Resolution reports the account state; it does not deny on it."""
        disabled = student_record.model_copy(update={"is_active": False})
        resolver = IdentityResolver(InMemoryLookup({"S12345": disabled}), identity_config)

        result = resolver.resolve(_profile("S12345"))

        assert isinstance(result, MatchSuccess)
        assert result.user.is_active is False
        assert "is_active" not in result.user.model_dump()


class TestResolveOrRaise:
    """Test the exception-raising form of resolution."""

    def test_success_returns_user(self, identity_resolver, student_profile):
        user = identity_resolver.resolve_or_raise(student_profile)

        assert user.id == "S12345"

    def test_missing_join_key_raises(self, identity_resolver):
        with pytest.raises(MissingJoinKeyError) as exc_info:
            identity_resolver.resolve_or_raise(_profile(None))

        assert exc_info.value.reason == "MISSING_JOIN_KEY"

    def test_no_record_raises(self, identity_resolver):
        with pytest.raises(NoRecordError) as exc_info:
            identity_resolver.resolve_or_raise(_profile("UNKNOWN"))

        assert exc_info.value.detail == "no internal record for UNKNOWN"

    def test_lookup_failure_raises(self, mock_lookup):
        mock_lookup.lookup_by_external_union_id.side_effect = RuntimeError("timeout")
        resolver = IdentityResolver(mock_lookup)

        with pytest.raises(InternalLookupError, match="timeout"):
            resolver.resolve_or_raise(_profile("S12345"))


def test_match_failure_to_exception():
    failure = MatchFailure(reason="NO_RECORD", detail="no internal record for X")

    error = failure.to_exception()

    assert isinstance(error, NoRecordError)
    assert error.detail == "no internal record for X"

"""Unit tests for IAM value objects."""

import pytest

from iam.domain.exceptions import InvalidEmailError
from iam.domain.value_objects import EmailAddress, PrincipalId, PrincipalRole


class TestPrincipalId:
    def test_generate_creates_unique_ids(self):
        assert PrincipalId.generate() != PrincipalId.generate()

    def test_from_string_roundtrips_generated_value(self):
        generated = PrincipalId.generate()

        assert PrincipalId.from_string(generated.value) == generated

    def test_from_string_rejects_non_ulid(self):
        with pytest.raises(ValueError):
            PrincipalId.from_string("not-a-ulid")

    def test_str_returns_value(self):
        pid = PrincipalId.generate()

        assert str(pid) == pid.value


class TestEmailAddress:
    def test_normalizes_case_and_whitespace(self):
        assert EmailAddress.parse("  Alice@Example.COM ").value == "alice@example.com"

    @pytest.mark.parametrize(
        "raw", ["", "   ", "alice", "alice@", "@example.com", "a b@example.com", "a@b"]
    )
    def test_rejects_malformed(self, raw):
        with pytest.raises(InvalidEmailError):
            EmailAddress.parse(raw)

    def test_rejects_overlong(self):
        with pytest.raises(InvalidEmailError):
            EmailAddress.parse("a" * 250 + "@example.com")


class TestPrincipalRole:
    def test_role_values_are_wire_names(self):
        assert PrincipalRole.SUPER_ADMIN.value == "SuperAdmin"
        assert PrincipalRole.USER.value == "User"

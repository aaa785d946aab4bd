"""Unit tests for principal password utilities.

Note: Test strings in this file are synthetic test data, not real secrets.
"""

import pytest

from iam.domain.exceptions import WeakPasswordError


class TestPasswordStrength:
    """Tests for validate_password_strength."""

    def test_accepts_strong_password(self):
        from iam.application.security import validate_password_strength

        validate_password_strength("Sturdy-Pass1")

    @pytest.mark.parametrize(
        "password",
        ["Sh0rt", "alllowercase1", "ALLUPPERCASE1", "NoDigitsHere", "x" * 73 + "A1"],
    )
    def test_rejects_weak_passwords(self, password):
        from iam.application.security import validate_password_strength

        with pytest.raises(WeakPasswordError):
            validate_password_strength(password)


class TestPasswordHashing:
    """Tests for hash_password and verify_password."""

    def test_hash_is_bcrypt(self):
        from iam.application.security import hash_password

        assert hash_password("Sturdy-Pass1").startswith("$2")

    def test_hash_is_salted(self):
        from iam.application.security import hash_password

        assert hash_password("Sturdy-Pass1") != hash_password("Sturdy-Pass1")

    def test_verify_accepts_correct_password(self):
        from iam.application.security import hash_password, verify_password

        assert verify_password("Sturdy-Pass1", hash_password("Sturdy-Pass1"))

    def test_verify_rejects_wrong_password(self):
        from iam.application.security import hash_password, verify_password

        assert not verify_password("Other-Pass1", hash_password("Sturdy-Pass1"))

    def test_verify_rejects_malformed_hash(self):
        from iam.application.security import verify_password

        assert not verify_password("Sturdy-Pass1", "not-a-bcrypt-hash")

    def test_burn_verification_time_does_not_raise(self):
        from iam.application.security import burn_verification_time

        burn_verification_time("whatever")

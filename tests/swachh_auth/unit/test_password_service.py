"""Unit tests for PasswordHashingService."""

import pytest

from swachh_auth import PasswordHashingService, WeakPasswordError

STRONG_PASSWORD = "Abc123!@#"  # noqa: S105


class TestHashAndVerify:
    """Tests for hashing and verification."""

    def setup_method(self):
        self.service = PasswordHashingService(rounds=4)

    def test_hash_verifies(self):
        hashed = self.service.hash(STRONG_PASSWORD)

        assert hashed != STRONG_PASSWORD
        assert hashed.startswith("$2")
        assert self.service.verify(STRONG_PASSWORD, hashed)

    def test_wrong_password_does_not_verify(self):
        hashed = self.service.hash(STRONG_PASSWORD)

        assert not self.service.verify("Abc123!@$", hashed)

    def test_hashes_are_salted(self):
        assert self.service.hash(STRONG_PASSWORD) != self.service.hash(STRONG_PASSWORD)

    def test_hash_uses_configured_rounds(self):
        hashed = self.service.hash(STRONG_PASSWORD)

        assert self.service.rounds == 4
        assert hashed.split("$")[2] == "04"

    def test_malformed_hash_does_not_verify(self):
        assert not self.service.verify(STRONG_PASSWORD, "not-a-bcrypt-hash")

    def test_hash_rejects_weak_password(self):
        with pytest.raises(WeakPasswordError):
            self.service.hash("weak")

    async def test_async_variants(self):
        hashed = await self.service.hash_async(STRONG_PASSWORD)

        assert await self.service.verify_async(STRONG_PASSWORD, hashed)
        assert not await self.service.verify_async("Wrong123!", hashed)

    async def test_hash_async_validates_before_hashing(self):
        with pytest.raises(WeakPasswordError):
            await self.service.hash_async("short")

    def test_dummy_hash_is_stable_and_valid(self):
        dummy = self.service.dummy_hash

        assert dummy is self.service.dummy_hash
        assert not self.service.verify(STRONG_PASSWORD, dummy)


class TestPasswordStrength:
    """Tests for the strength rules."""

    def setup_method(self):
        self.service = PasswordHashingService(rounds=4)

    def test_strong_password_has_no_violations(self):
        assert self.service.check_strength(STRONG_PASSWORD) == []

    def test_exactly_minimum_length_is_accepted(self):
        assert self.service.check_strength("Abcde1!x") == []

    @pytest.mark.parametrize(
        ("password", "violation"),
        [
            ("Ab1!", "Password must be at least 8 characters long"),
            ("ABC123!@#", "Password must contain at least one lowercase letter"),
            ("abc123!@#", "Password must contain at least one uppercase letter"),
            ("Abcdef!@#", "Password must contain at least one number"),
            ("Abc123456", "Password must contain at least one special character"),
        ],
    )
    def test_single_rule_violations(self, password, violation):
        assert self.service.check_strength(password) == [violation]

    def test_lowercase_digits_only_has_two_violations(self):
        violations = self.service.check_strength("abc12345")

        assert violations == [
            "Password must contain at least one uppercase letter",
            "Password must contain at least one special character",
        ]

    def test_all_violations_are_reported(self):
        with pytest.raises(WeakPasswordError) as exc_info:
            self.service.validate_strength("")

        assert len(exc_info.value.violations) == 5
        assert exc_info.value.message.startswith("Password does not meet requirements")

    def test_password_over_72_bytes_is_rejected(self):
        password = "Aa1!" + "x" * 69

        violations = self.service.check_strength(password)

        assert violations == ["Password cannot exceed 72 bytes"]

"""Unit tests for form validators."""
import pytest

from grahmeen_health.infrastructure.auth.validators import (
    passwords_match,
    validate_age,
    validate_email,
    validate_name,
    validate_password,
    validate_role,
)


class TestValidateEmail:
    """Test email validation."""

    @pytest.mark.parametrize("email", [
        "user@example.com",
        "test.user@example.com",
        "test+user@example.co.uk",
        "user123@test-domain.com",
        "a@b.co",
    ])
    def test_valid_emails(self, email):
        assert validate_email(email) == (True, "")

    @pytest.mark.parametrize("email", [
        "notanemail",
        "@example.com",
        "user@",
        "user..name@example.com",
        ".user@example.com",
        "user.@example.com",
        "user@example",
        "user name@example.com",
    ])
    def test_invalid_emails(self, email):
        is_valid, error = validate_email(email)
        assert not is_valid
        assert error != ""

    def test_empty_email(self):
        assert validate_email("   ") == (False, "Email is required")

    def test_local_part_too_long(self):
        is_valid, error = validate_email("a" * 65 + "@example.com")
        assert not is_valid
        assert "local part" in error


class TestValidatePassword:
    """Test password strength rules."""

    def test_valid_password(self):
        assert validate_password("Password123!") == (True, "")

    @pytest.mark.parametrize("password,message", [
        ("", "Password is required"),
        ("Pa1!", "at least 8 characters"),
        ("password123!", "uppercase"),
        ("PASSWORD123!", "lowercase"),
        ("Password!!!", "number"),
        ("Password123", "special character"),
        ("Aa1!" * 40, "too long"),
    ])
    def test_invalid_passwords(self, password, message):
        is_valid, error = validate_password(password)
        assert not is_valid
        assert message in error


class TestValidateName:
    def test_valid_names(self):
        for name in ["Asha", "Mary-Jane", "O'Brien", "Abdul Karim"]:
            assert validate_name(name) == (True, "")

    def test_short_name(self):
        is_valid, error = validate_name("X", "First name")
        assert not is_valid
        assert error == "First name must be at least 2 characters long"

    def test_invalid_characters(self):
        is_valid, error = validate_name("R2D2")
        assert not is_valid
        assert "only contain letters" in error


class TestOtherValidators:
    def test_passwords_match(self):
        assert passwords_match("Password1!", "Password1!") == (True, "")
        assert passwords_match("Password1!", "Password2!") == (False, "Passwords do not match")

    def test_role(self):
        assert validate_role("Doctor") == (True, "")
        assert validate_role("nurse") == (False, "Invalid role")
        assert validate_role("") == (False, "Role is required")

    def test_age(self):
        assert validate_age("34") == (True, "")
        assert validate_age("") == (False, "Age is required")
        assert validate_age("thirty") == (False, "Age must be a whole number")
        assert validate_age("130") == (False, "Age must be between 0 and 120")

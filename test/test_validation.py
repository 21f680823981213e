"""
Tests for phone and email shape checks.
"""

import pytest

from fish_follow.contacts.validation import validate_email, validate_phone_number


class TestValidatePhoneNumber:
    @pytest.mark.parametrize(
        "phone",
        ["5550101234", "+1 (555) 010-1234", "555.010.1234", "  555-010-1234  "],
    )
    def test_valid(self, phone: str) -> None:
        is_valid, cleaned = validate_phone_number(phone)
        assert is_valid is True
        assert cleaned == phone.strip()

    @pytest.mark.parametrize("phone", ["", "555-0101", "call me", "555-010-1234 x12", "++15550101234"])
    def test_invalid(self, phone: str) -> None:
        assert validate_phone_number(phone) == (False, None)


class TestValidateEmail:
    def test_empty_is_valid(self) -> None:
        assert validate_email(None) == (True, None)
        assert validate_email("   ") == (True, None)

    def test_normalized_to_lowercase(self) -> None:
        assert validate_email(" Jane.Doe@Example.COM ") == (True, "jane.doe@example.com")

    @pytest.mark.parametrize("email", ["jane", "jane@", "jane@example", "@example.com"])
    def test_invalid(self, email: str) -> None:
        assert validate_email(email) == (False, None)

"""
Tests for bulk-import row validation.
"""

import pytest

from fish_follow.contacts.importer import validate_import_row
from fish_follow.contacts.models import ContactGender, ContactYear


def _row(**overrides):
    row = {
        "firstName": "Jane",
        "lastName": "Smith",
        "phoneNumber": "555-010-1234",
        "email": "Jane@Example.com",
        "campus": "North",
        "major": "Biology",
        "year": "2",
        "gender": "female",
    }
    row.update(overrides)
    return row


class TestValidateImportRow:
    def test_valid_row(self) -> None:
        data, error = validate_import_row(_row(isInterested=False, notes="met at fair"))

        assert error is None
        assert data is not None
        assert data.first_name == "Jane"
        assert data.email == "jane@example.com"
        assert data.year == ContactYear.SECOND
        assert data.gender == ContactGender.FEMALE
        assert data.is_interested is False
        assert data.follow_up_status_number is None
        assert data.notes == "met at fair"

    def test_interest_defaults_to_true(self) -> None:
        data, _ = validate_import_row(_row())
        assert data is not None
        assert data.is_interested is True

    def test_not_an_object(self) -> None:
        assert validate_import_row(["Jane"]) == (None, "Contact must be an object")

    def test_missing_fields_listed_in_order(self) -> None:
        data, error = validate_import_row(_row(firstName="", phoneNumber=None, gender="  "))
        assert data is None
        assert error == "Missing required fields: First name, Phone number, Gender"

    def test_bad_phone(self) -> None:
        _, error = validate_import_row(_row(phoneNumber="12345"))
        assert error == "Invalid phone number format: 12345"

    def test_bad_email(self) -> None:
        _, error = validate_import_row(_row(email="not-an-email"))
        assert error == "Invalid email format: not-an-email"

    def test_blank_email_is_allowed(self) -> None:
        data, error = validate_import_row(_row(email=""))
        assert error is None
        assert data is not None
        assert data.email is None

    def test_bad_year(self) -> None:
        _, error = validate_import_row(_row(year="Sophomore"))
        assert error == "Invalid year: Sophomore"

    def test_bad_gender(self) -> None:
        _, error = validate_import_row(_row(gender="M"))
        assert error == "Invalid gender: M"

    @pytest.mark.parametrize("status", ["two", "1.5"])
    def test_non_integer_status(self, status: str) -> None:
        _, error = validate_import_row(_row(followUpStatusNumber=status))
        assert error == f"Invalid follow-up status number: {status}"

    def test_integer_status_as_string(self) -> None:
        data, error = validate_import_row(_row(followUpStatusNumber="3"))
        assert error is None
        assert data is not None
        assert data.follow_up_status_number == 3

    @pytest.mark.parametrize("status", ["-4", "2147483648", 3_000_000_000])
    def test_status_outside_column_range_falls_back(self, status) -> None:
        data, error = validate_import_row(_row(followUpStatusNumber=status))
        assert error is None
        assert data is not None
        assert data.follow_up_status_number is None

    def test_first_failure_wins(self) -> None:
        _, error = validate_import_row(_row(phoneNumber="1", email="bad", year="x"))
        assert error.startswith("Invalid phone number format")

    def test_schema_failure_is_reported(self) -> None:
        _, error = validate_import_row(_row(notes="x" * 1001))
        assert error is not None
        assert error.startswith("Invalid value for notes")

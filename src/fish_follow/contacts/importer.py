"""
Per-row validation of bulk-import candidates.
"""

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from fish_follow.contacts.models import ContactGender, ContactYear
from fish_follow.contacts.schemas import ContactCreate
from fish_follow.contacts.validation import validate_email, validate_phone_number
from fish_follow.follow_up.models import MAX_STATUS_NUMBER

REQUIRED_IMPORT_FIELDS = (
    ("firstName", "First name"),
    ("lastName", "Last name"),
    ("phoneNumber", "Phone number"),
    ("campus", "Campus"),
    ("major", "Major"),
    ("year", "Year"),
    ("gender", "Gender"),
)

YEAR_VALUES = {member.value for member in ContactYear}
GENDER_VALUES = {member.value for member in ContactGender}


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def validate_import_row(row: Any) -> tuple[ContactCreate | None, str | None]:
    """Validate one bulk-import candidate.

    Checks run in a fixed order and the first failure wins: required fields,
    phone shape, email shape, year and gender membership, follow-up status
    type, then the full create schema. Uniqueness needs the database and is
    checked by the caller.

    Args:
        row: Raw candidate as received in the request body.

    Returns:
        Tuple of (validated contact or None, error message or None).
    """
    if not isinstance(row, dict):
        return None, "Contact must be an object"

    missing = [label for key, label in REQUIRED_IMPORT_FIELDS if not _text(row.get(key))]
    if missing:
        return None, f"Missing required fields: {', '.join(missing)}"

    phone_valid, phone = validate_phone_number(_text(row["phoneNumber"]))
    if not phone_valid:
        return None, f"Invalid phone number format: {_text(row['phoneNumber'])}"

    email_valid, email = validate_email(_text(row.get("email")))
    if not email_valid:
        return None, f"Invalid email format: {_text(row.get('email'))}"

    year = _text(row["year"])
    if year not in YEAR_VALUES:
        return None, f"Invalid year: {year}"

    gender = _text(row["gender"])
    if gender not in GENDER_VALUES:
        return None, f"Invalid gender: {gender}"

    status_raw = row.get("followUpStatusNumber")
    status_number: int | None = None
    if status_raw not in (None, ""):
        try:
            status_number = int(status_raw)
        except (TypeError, ValueError):
            return None, f"Invalid follow-up status number: {status_raw}"
        # A number no stage can have is treated like an unknown stage
        if not 0 <= status_number <= MAX_STATUS_NUMBER:
            status_number = None

    payload = {
        **row,
        "phoneNumber": phone,
        "email": email,
        "year": year,
        "gender": gender,
        "followUpStatusNumber": status_number,
    }
    if payload.get("isInterested") in (None, ""):
        payload.pop("isInterested", None)

    try:
        return ContactCreate.model_validate(payload), None
    except PydanticValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        return None, f"Invalid value for {location}: {first['msg']}"

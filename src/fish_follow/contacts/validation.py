"""
Phone and email shape checks shared by contact writes and bulk import.
"""

import re

# Optional leading +, then digits and common separators
PHONE_PATTERN = re.compile(r"^\+?[\d\s\-\.\(\)]+$")
MIN_PHONE_DIGITS = 10

# RFC 5322 simplified email pattern
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


def validate_phone_number(phone: str) -> tuple[bool, str | None]:
    """Loosely validate a phone number.

    Accepts an optional leading ``+`` followed by digits, spaces, dashes,
    dots and parentheses, with at least ten digits overall.

    Args:
        phone: Raw phone string.

    Returns:
        Tuple of (is_valid, stripped phone or None).
    """
    cleaned = phone.strip()
    if not PHONE_PATTERN.match(cleaned):
        return False, None
    if sum(ch.isdigit() for ch in cleaned) < MIN_PHONE_DIGITS:
        return False, None
    return True, cleaned


def validate_email(email: str | None) -> tuple[bool, str | None]:
    """Validate email address format.

    Args:
        email: Email string or None.

    Returns:
        Tuple of (is_valid, normalized email or None). Empty is valid.
    """
    if not email or not email.strip():
        return True, None

    cleaned = email.strip().lower()
    if EMAIL_PATTERN.match(cleaned):
        return True, cleaned
    return False, None

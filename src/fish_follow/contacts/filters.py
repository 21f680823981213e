"""
Normalization of raw search parameters into typed criteria.

Filter values come straight from query strings. Anything that does not fit
the contact field's type is treated as "not applied" so that a stale or
hand-edited filter UI never turns a search into an error.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TypeVar

from fish_follow.contacts.fields import ALL_FIELD_KEYS, parse_fields_parameter
from fish_follow.contacts.models import ContactGender, ContactYear
from fish_follow.follow_up.models import MAX_STATUS_NUMBER

DEFAULT_LIMIT = 50
MIN_LIMIT = 1
MAX_LIMIT = 100

# Filter value meaning "do not narrow on this field"
ALL = "all"

BOOL_TRUE = {"true", "1", "yes", "y", "t"}
BOOL_FALSE = {"false", "0", "no", "n", "f"}

E = TypeVar("E", bound=Enum)


@dataclass(frozen=True)
class ContactFilters:
    """Equality predicates; ``None`` means the predicate is not applied."""

    year: ContactYear | None = None
    gender: ContactGender | None = None
    campus: str | None = None
    major: str | None = None
    is_interested: bool | None = None
    follow_up_status_number: int | None = None

    @property
    def applied(self) -> bool:
        return any(
            value is not None
            for value in (
                self.year,
                self.gender,
                self.campus,
                self.major,
                self.is_interested,
                self.follow_up_status_number,
            )
        )


@dataclass(frozen=True)
class ContactSearchCriteria:
    """Fully normalized search request."""

    search: str | None = None
    filters: ContactFilters = field(default_factory=ContactFilters)
    fields: list[str] = field(default_factory=lambda: list(ALL_FIELD_KEYS))
    limit: int = DEFAULT_LIMIT


def _active(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = value.strip()
    if not cleaned or cleaned == ALL:
        return None
    return cleaned


def parse_enum(enum_cls: type[E], value: str | None) -> E | None:
    cleaned = _active(value)
    if cleaned is None:
        return None
    try:
        return enum_cls(cleaned)
    except ValueError:
        return None


def parse_bool(value: str | None) -> bool | None:
    cleaned = _active(value)
    if cleaned is None:
        return None
    lowered = cleaned.lower()
    if lowered in BOOL_TRUE:
        return True
    if lowered in BOOL_FALSE:
        return False
    return None


def parse_int(value: str | None) -> int | None:
    """Parse a stage number; values the status column cannot hold are not applied."""
    cleaned = _active(value)
    if cleaned is None:
        return None
    try:
        number = int(cleaned)
    except ValueError:
        return None
    if not 0 <= number <= MAX_STATUS_NUMBER:
        return None
    return number


def clamp_limit(limit: str | int | None) -> int:
    """Clamp a requested limit into [1, 100]; unparseable values give the default.

    Examples:
        >>> clamp_limit(None), clamp_limit("0"), clamp_limit(500), clamp_limit("abc")
        (50, 1, 100, 50)
    """
    if limit is None:
        return DEFAULT_LIMIT
    try:
        requested = int(str(limit).strip())
    except ValueError:
        return DEFAULT_LIMIT
    return max(MIN_LIMIT, min(MAX_LIMIT, requested))


def normalize_search(search: str | None) -> str | None:
    if search is None:
        return None
    return search.strip() or None


def build_criteria(
    search: str | None = None,
    fields: str | None = None,
    year: str | None = None,
    gender: str | None = None,
    campus: str | None = None,
    major: str | None = None,
    is_interested: str | None = None,
    follow_up_status_number: str | None = None,
    limit: str | int | None = None,
) -> ContactSearchCriteria:
    """Build search criteria from raw query-string values."""
    filters = ContactFilters(
        year=parse_enum(ContactYear, year),
        gender=parse_enum(ContactGender, gender),
        campus=_active(campus),
        major=_active(major),
        is_interested=parse_bool(is_interested),
        follow_up_status_number=parse_int(follow_up_status_number),
    )
    return ContactSearchCriteria(
        search=normalize_search(search),
        filters=filters,
        fields=parse_fields_parameter(fields),
        limit=clamp_limit(limit),
    )

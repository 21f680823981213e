"""
Static registry of projectable contact fields.

The registry is hand-maintained next to the ORM model rather than derived
from database introspection. It backs both the ``fields`` allowlist of the
search endpoint and the field picker served by ``GET /contacts/fields``.
"""

from dataclasses import dataclass
from typing import Literal

FieldType = Literal["string", "boolean", "enum", "integer", "date"]


@dataclass(frozen=True)
class ContactField:
    """One projectable field: wire key, display label and declared type."""

    key: str
    label: str
    type: FieldType

    def to_dict(self) -> dict[str, str]:
        return {"key": self.key, "label": self.label, "type": self.type}


CONTACT_FIELDS: tuple[ContactField, ...] = (
    ContactField("id", "ID", "string"),
    ContactField("firstName", "First Name", "string"),
    ContactField("lastName", "Last Name", "string"),
    ContactField("phoneNumber", "Phone Number", "string"),
    ContactField("email", "Email", "string"),
    ContactField("campus", "Campus", "string"),
    ContactField("major", "Major", "string"),
    ContactField("year", "Year", "enum"),
    ContactField("gender", "Gender", "enum"),
    ContactField("isInterested", "Interested", "boolean"),
    ContactField("followUpStatusNumber", "Follow-up Status", "integer"),
    ContactField("followUpStatusDescription", "Follow-up Status Description", "string"),
    ContactField("notes", "Notes", "string"),
    ContactField("createdAt", "Created At", "date"),
    ContactField("updatedAt", "Updated At", "date"),
    ContactField("orgId", "Organization", "string"),
)

FIELDS_BY_KEY: dict[str, ContactField] = {field.key: field for field in CONTACT_FIELDS}

ALL_FIELD_KEYS: tuple[str, ...] = tuple(field.key for field in CONTACT_FIELDS)


def get_contact_fields() -> list[dict[str, str]]:
    """Return the registry as ``{key, label, type}`` objects, in declaration order."""
    return [field.to_dict() for field in CONTACT_FIELDS]


def parse_fields_parameter(fields: str | None) -> list[str]:
    """Turn a comma-separated projection into an allowlisted list of keys.

    Unknown names are dropped and duplicates collapsed, keeping the caller's
    order. An empty result (or no parameter) selects every registry field.

    Examples:
        >>> parse_fields_parameter("firstName, bogus ,email")
        ['firstName', 'email']
        >>> parse_fields_parameter("bogus") == list(ALL_FIELD_KEYS)
        True
    """
    if not fields:
        return list(ALL_FIELD_KEYS)

    selected: list[str] = []
    for raw in fields.split(","):
        key = raw.strip()
        if key in FIELDS_BY_KEY and key not in selected:
            selected.append(key)

    return selected or list(ALL_FIELD_KEYS)

"""Profile Field Enforcement — format rules for registration and profile updates.

Invariants:
    - All functions are PURE: no IO, no async, no DB
    - Each validator returns the stripped value or raises ValidationError

Design Decisions:
    - Patterns kept identical to the legacy profile store so existing rows stay valid
"""

import re

from townsquare.core.errors import ValidationError

EMAIL_PATTERN = re.compile(r"^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,3})+$")
PHONE_PATTERN = re.compile(r"^\d{10,15}$")
ZIPCODE_PATTERN = re.compile(r"^\d{5}(-\d{4})?$")

DEFAULT_HEADLINE = "This is the default headline."
DEFAULT_AVATAR = (
    "https://upload.wikimedia.org/wikipedia/en/thumb/4/4e/DWLeebron.jpg/"
    "220px-DWLeebron.jpg"
)


def _match(value: str | None, pattern: re.Pattern, field: str, message: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{field} is required", field=field)
    value = value.strip()
    if not pattern.match(value):
        raise ValidationError(message, field=field)
    return value


def validate_email(value: str | None) -> str:
    return _match(value, EMAIL_PATTERN, "email", "Please provide a valid email address")


def validate_phone(value: str | None) -> str:
    return _match(
        value, PHONE_PATTERN, "phone",
        "Please provide a valid phone number with 10-15 digits",
    )


def validate_zipcode(value: str | None) -> str:
    return _match(value, ZIPCODE_PATTERN, "zipcode", "Please provide a valid ZIP code")


def validate_display_name(value: str | None) -> str:
    if value is None or not value.strip():
        raise ValidationError("username is required", field="username")
    return value.strip()

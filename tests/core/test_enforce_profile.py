"""Profile Enforcement — format rules inherited from the legacy profile store."""

import pytest

from townsquare.core.enforce_profile import (
    validate_display_name, validate_email, validate_phone, validate_zipcode,
)
from townsquare.core.errors import ValidationError


def test_validate_email_accepts_and_strips():
    assert validate_email(" bob@example.com ") == "bob@example.com"


@pytest.mark.parametrize("value", ["bob", "bob@", "@example.com", "", None])
def test_validate_email_rejects(value):
    with pytest.raises(ValidationError) as exc:
        validate_email(value)
    assert exc.value.field == "email"


def test_validate_phone_length_bounds():
    assert validate_phone("1234567890") == "1234567890"
    assert validate_phone("123456789012345") == "123456789012345"
    with pytest.raises(ValidationError):
        validate_phone("123456789")
    with pytest.raises(ValidationError):
        validate_phone("555-123-4567")


def test_validate_zipcode_plain_and_plus_four():
    assert validate_zipcode("77005") == "77005"
    assert validate_zipcode("77005-1892") == "77005-1892"
    with pytest.raises(ValidationError):
        validate_zipcode("7700")


def test_validate_display_name_required():
    assert validate_display_name(" bob ") == "bob"
    with pytest.raises(ValidationError):
        validate_display_name("  ")

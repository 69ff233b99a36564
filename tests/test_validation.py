"""Tests for contact validation helpers."""

import pytest

from waitlist.core.validation import MAX_EMAIL_LENGTH, clean_contact, is_valid_email


@pytest.mark.parametrize("email", ["fan@example.com", "first.last+drops@mail.example.co.uk"])
def test_valid_emails(email):
    assert is_valid_email(email)


@pytest.mark.parametrize(
    "email",
    ["", "plainaddress", "missing-at.example.com", "user@", "user@domain", "user @example.com", "@example.com"],
)
def test_invalid_emails(email):
    assert not is_valid_email(email)


def test_email_length_ceiling():
    too_long = "a" * 64 + "@" + ".".join(["b" * 63, "c" * 63, "d" * 63]) + ".com"
    assert len(too_long) > MAX_EMAIL_LENGTH
    assert not is_valid_email(too_long)


def test_clean_contact_trims_and_drops_empty():
    assert clean_contact("  fan@example.com ") == "fan@example.com"
    assert clean_contact("   ") is None
    assert clean_contact("") is None
    assert clean_contact(None) is None

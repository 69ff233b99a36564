"""Phone number utilities for consistent handling across the application."""

import logging
import re

import phonenumbers
from phonenumbers import NumberParseException

logger = logging.getLogger(__name__)

# Digits, a leading plus and the usual separators; letters are never dialled
_ALLOWED_CHARS = re.compile(r"^\+?[\d\s().\-]+$")


def normalize_phone_e164(phone: str | None, default_region: str = "US") -> str | None:
    """Normalize phone number to E.164 format.

    National numbers are interpreted in ``default_region``; numbers written
    with a leading ``+`` carry their own country code.

        (281)788-2316    → +12817882316
        1-281-788-2316   → +12817882316
        +44 20 7946 0958 → +442079460958

    Returns:
        Phone in E.164 format or None if it is not a valid number
    """
    if not phone:
        return None

    raw = phone.strip()
    if not raw or not _ALLOWED_CHARS.match(raw):
        logger.debug("Rejected phone with unexpected characters")
        return None

    try:
        parsed = phonenumbers.parse(raw, default_region.upper())
    except NumberParseException as e:
        logger.debug(f"Unparseable phone number: {e}")
        return None

    if not phonenumbers.is_valid_number(parsed):
        return None
    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)

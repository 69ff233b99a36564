"""Contact validation helpers."""

from email_validator import EmailNotValidError, validate_email as _validate_email

MAX_EMAIL_LENGTH = 254


def is_valid_email(email: str | None) -> bool:
    """Check RFC-shaped email syntax and the 254 character ceiling.

    Deliverability (DNS) is not checked.
    """
    if not email or len(email) > MAX_EMAIL_LENGTH:
        return False
    try:
        _validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def clean_contact(value: str | None) -> str | None:
    """Trim a submitted contact value; empty strings count as absent."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None

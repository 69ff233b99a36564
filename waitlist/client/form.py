"""Subscription form controller.

Validates input locally, submits it to ``POST /api/subscribe`` and reports
the outcome through ``FormMessage``. It is UI agnostic: fields only need a
``value`` and the submit button a ``text`` and ``disabled`` attribute.
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^\d{10}$")

MISSING_CONTACT = "Please enter either your email address or phone number."
INVALID_EMAIL = "Please enter a valid email address."
INVALID_PHONE = "Please enter a valid 10-digit phone number."
GENERIC_ERROR = "Sorry, there was an error. Please try again later."
SUBMITTING_TEXT = "SUBSCRIBING..."


class InputField(Protocol):
    value: str


class SubmitButton(Protocol):
    text: str
    disabled: bool


@dataclass
class FormMessage:
    text: str
    is_error: bool = False


class SubscriptionError(Exception):
    """Submission failed; ``message`` is safe to show."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def sanitize_phone_input(value: str) -> str:
    """Keep digits only."""
    return re.sub(r"\D", "", value or "")


def validate_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email))


def validate_phone(phone: str) -> bool:
    """US phone number (10 digits)."""
    return bool(PHONE_PATTERN.match(phone))


def success_message(contact_method: str) -> str:
    return (
        "Successfully subscribed! You'll receive updates about our upcoming drop "
        f"via {contact_method}."
    )


class SubscriptionForm:
    """Controller for the email/phone waitlist form."""

    def __init__(
        self,
        email_field: InputField,
        phone_field: InputField,
        submit_button: SubmitButton,
        http_client: httpx.AsyncClient,
        endpoint: str = "/api/subscribe",
        on_message: Callable[[FormMessage], Any] | None = None,
    ) -> None:
        self.email_field = email_field
        self.phone_field = phone_field
        self.submit_button = submit_button
        self.http_client = http_client
        self.endpoint = endpoint
        self.on_message = on_message
        self.message: FormMessage | None = None

    def on_phone_input(self) -> None:
        """Input handler: strip non-digits as the user types."""
        self.phone_field.value = sanitize_phone_input(self.phone_field.value)

    def show_message(self, text: str, is_error: bool = False) -> FormMessage:
        """Replace the current message."""
        self.message = FormMessage(text=text, is_error=is_error)
        if self.on_message is not None:
            self.on_message(self.message)
        return self.message

    def reset(self) -> None:
        self.email_field.value = ""
        self.phone_field.value = ""

    def validate(self, email: str, phone: str) -> str | None:
        """Return the local validation error, if any."""
        if not email and not phone:
            return MISSING_CONTACT
        if email and not validate_email(email):
            return INVALID_EMAIL
        if phone and not validate_phone(phone):
            return INVALID_PHONE
        return None

    async def submit(self) -> FormMessage:
        """Validate, submit, and report the outcome.

        Local validation failures never reach the network. The submit
        button is disabled while the request is in flight.
        """
        email = (self.email_field.value or "").strip()
        phone = (self.phone_field.value or "").strip()

        error = self.validate(email, phone)
        if error:
            return self.show_message(error, is_error=True)

        original_text = self.submit_button.text
        self.submit_button.text = SUBMITTING_TEXT
        self.submit_button.disabled = True

        try:
            await self.submit_to_api(email or None, phone or None)
        except SubscriptionError as e:
            logger.warning(f"Subscription error: {e.message}")
            return self.show_message(e.message, is_error=True)
        finally:
            self.submit_button.text = original_text
            self.submit_button.disabled = False

        self.reset()
        return self.show_message(success_message("email" if email else "SMS"))

    async def submit_to_api(self, email: str | None, phone: str | None) -> dict:
        """POST the contact details as JSON.

        Raises:
            SubscriptionError: Non-2xx response or transport failure
        """
        payload = {key: value for key, value in (("email", email), ("phone", phone)) if value}
        try:
            response = await self.http_client.post(
                self.endpoint,
                json=payload,
                headers={"Accept": "application/json"},
            )
        except httpx.HTTPError as e:
            logger.error(f"API Error: {e}")
            raise SubscriptionError(GENERIC_ERROR) from e

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.is_error:
            message = data.get("message") if isinstance(data, dict) else None
            raise SubscriptionError(message or GENERIC_ERROR, response.status_code)

        return data

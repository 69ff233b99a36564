"""Twilio SMS provider implementation."""

import asyncio
import logging
from typing import Any

from twilio.base.exceptions import TwilioException
from twilio.request_validator import RequestValidator
from twilio.rest import Client as TwilioClient

from waitlist.core.errors import MessagingError
from waitlist.infrastructure.telephony.base import SmsProviderProtocol, SmsResult

logger = logging.getLogger(__name__)


class TwilioSmsProvider(SmsProviderProtocol):
    """Twilio SMS provider implementation.

    Sends from a Messaging Service when ``messaging_service_sid`` is set,
    otherwise from the fixed ``from_number``.
    """

    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        from_number: str | None = None,
        messaging_service_sid: str | None = None,
        client: TwilioClient | None = None,
    ) -> None:
        if not account_sid or not auth_token:
            raise ValueError("Twilio account SID and auth token must be provided")
        if not from_number and not messaging_service_sid:
            raise ValueError("Twilio from number or messaging service SID must be provided")

        self.account_sid = account_sid
        self.auth_token = auth_token
        self.from_number = from_number
        self.messaging_service_sid = messaging_service_sid
        self.client = client or TwilioClient(account_sid, auth_token)

    def build_message_params(self, to: str, body: str) -> dict[str, Any]:
        """Build ``messages.create`` kwargs, preferring the Messaging Service."""
        params: dict[str, Any] = {"to": to, "body": body}
        if self.messaging_service_sid:
            params["messaging_service_sid"] = self.messaging_service_sid
        else:
            params["from_"] = self.from_number
        return params

    async def send_sms(self, to: str, body: str) -> SmsResult:
        """Send an SMS message via Twilio.

        The Twilio REST client is blocking, so the call runs in a worker thread.
        """
        params = self.build_message_params(to, body)
        try:
            message = await asyncio.to_thread(self.client.messages.create, **params)
        except TwilioException as e:
            raise MessagingError(f"Twilio SMS send failed: {str(e)}") from e

        return SmsResult(
            message_id=message.sid,
            status=message.status,
            to=message.to,
            sender=message.from_ or self.messaging_service_sid,
            provider="twilio",
            raw_response={
                "sid": message.sid,
                "status": message.status,
                "date_created": message.date_created.isoformat() if message.date_created else None,
            },
        )

    def validate_webhook_signature(
        self,
        url: str,
        params: dict[str, Any],
        signature: str,
    ) -> bool:
        """Validate a Twilio webhook signature (X-Twilio-Signature)."""
        if not signature:
            return False
        validator = RequestValidator(self.auth_token)
        return validator.validate(url, params, signature)

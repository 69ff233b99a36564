"""Tests for the Twilio SMS provider."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from twilio.base.exceptions import TwilioRestException

from waitlist.core.errors import MessagingError
from waitlist.infrastructure.telephony.factory import create_sms_provider
from waitlist.infrastructure.telephony.twilio_provider import TwilioSmsProvider


def _mock_client():
    client = MagicMock()
    message = MagicMock()
    message.sid = "SM123"
    message.status = "queued"
    message.to = "+12817882316"
    message.from_ = "+15005550006"
    message.date_created = datetime(2025, 11, 1, tzinfo=timezone.utc)
    client.messages.create.return_value = message
    return client


async def test_send_sms_from_number():
    client = _mock_client()
    provider = TwilioSmsProvider("AC123", "token", from_number="+15005550006", client=client)

    result = await provider.send_sms("+12817882316", "Hello")

    client.messages.create.assert_called_once_with(
        to="+12817882316",
        body="Hello",
        from_="+15005550006",
    )
    assert result.message_id == "SM123"
    assert result.status == "queued"
    assert result.provider == "twilio"
    assert result.raw_response["date_created"] == "2025-11-01T00:00:00+00:00"


async def test_messaging_service_preferred():
    client = _mock_client()
    provider = TwilioSmsProvider(
        "AC123",
        "token",
        from_number="+15005550006",
        messaging_service_sid="MG123",
        client=client,
    )

    await provider.send_sms("+12817882316", "Hello")

    kwargs = client.messages.create.call_args.kwargs
    assert kwargs["messaging_service_sid"] == "MG123"
    assert "from_" not in kwargs


async def test_twilio_error_becomes_messaging_error():
    client = _mock_client()
    client.messages.create.side_effect = TwilioRestException(400, "/Messages", "Invalid 'To' number")
    provider = TwilioSmsProvider("AC123", "token", from_number="+15005550006", client=client)

    with pytest.raises(MessagingError):
        await provider.send_sms("+12817882316", "Hello")


def test_requires_credentials_and_sender():
    with pytest.raises(ValueError):
        TwilioSmsProvider("", "token", from_number="+15005550006", client=MagicMock())
    with pytest.raises(ValueError):
        TwilioSmsProvider("AC123", "token", client=MagicMock())


def test_missing_signature_is_invalid():
    provider = TwilioSmsProvider("AC123", "token", from_number="+15005550006", client=MagicMock())

    assert not provider.validate_webhook_signature("https://example.com/api/sms/inbound", {}, "")


def test_factory_without_credentials(test_settings):
    assert create_sms_provider(test_settings) is None


def test_factory_with_credentials(test_settings):
    settings = test_settings.model_copy(
        update={
            "twilio_account_sid": "AC123",
            "twilio_auth_token": "token",
            "twilio_messaging_service_sid": "MG123",
        }
    )

    provider = create_sms_provider(settings)

    assert isinstance(provider, TwilioSmsProvider)
    assert provider.messaging_service_sid == "MG123"

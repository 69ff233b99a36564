"""Telephony provider infrastructure."""

from waitlist.infrastructure.telephony.base import SmsProviderProtocol, SmsResult
from waitlist.infrastructure.telephony.factory import create_sms_provider
from waitlist.infrastructure.telephony.twilio_provider import TwilioSmsProvider

__all__ = [
    "SmsProviderProtocol",
    "SmsResult",
    "TwilioSmsProvider",
    "create_sms_provider",
]

"""SMS provider factory."""

import logging

from waitlist.infrastructure.telephony.base import SmsProviderProtocol
from waitlist.infrastructure.telephony.twilio_provider import TwilioSmsProvider
from waitlist.settings import Settings

logger = logging.getLogger(__name__)


def create_sms_provider(settings: Settings) -> SmsProviderProtocol | None:
    """Create the SMS provider from settings.

    Returns:
        Provider instance, or None when SMS is not configured
    """
    if not settings.sms_enabled:
        logger.info("Twilio not configured - SMS confirmations disabled")
        return None

    if settings.twilio_messaging_service_sid and settings.twilio_from_number:
        logger.info("Both Twilio sender options set - using messaging service")

    return TwilioSmsProvider(
        account_sid=settings.twilio_account_sid,
        auth_token=settings.twilio_auth_token,
        from_number=settings.twilio_from_number,
        messaging_service_sid=settings.twilio_messaging_service_sid,
    )

"""Subscription service: subscribe, unsubscribe and count."""

import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from waitlist.core.errors import ConflictError, InvalidInputError, MessagingError, NotFoundError
from waitlist.core.phone import normalize_phone_e164
from waitlist.core.validation import clean_contact, is_valid_email
from waitlist.infrastructure.telephony.base import SmsProviderProtocol
from waitlist.persistence.models.subscriber import Subscriber
from waitlist.persistence.repositories.subscriber_repository import SubscriberRepository

logger = logging.getLogger(__name__)

MISSING_CONTACT_MESSAGE = "Either email address or phone number is required"
INVALID_EMAIL_MESSAGE = "Please provide a valid email address"
INVALID_PHONE_MESSAGE = "Invalid phone number format"
EMAIL_CONFLICT_MESSAGE = "This email is already subscribed"
PHONE_CONFLICT_MESSAGE = "This phone number is already subscribed"
UNSUBSCRIBE_EMAIL_MESSAGE = "Valid email address is required"
EMAIL_NOT_FOUND_MESSAGE = "Email not found in our records"


@dataclass
class SubscribeResult:
    """Result of a successful subscription."""

    subscriber: Subscriber
    contact_method: str
    sms_sent: bool = False

    @property
    def message(self) -> str:
        return (
            "Successfully subscribed! You'll receive updates about our upcoming drop "
            f"via {self.contact_method}."
        )


class SubscriptionService:
    """Service for managing waitlist subscriptions."""

    def __init__(
        self,
        session: AsyncSession,
        sms_provider: SmsProviderProtocol | None = None,
        default_region: str = "US",
        brand_name: str = "House of Reign",
    ) -> None:
        self.session = session
        self.subscriber_repo = SubscriberRepository(session)
        self.sms_provider = sms_provider
        self.default_region = default_region
        self.brand_name = brand_name

    async def subscribe(self, email: str | None, phone: str | None) -> SubscribeResult:
        """Validate, deduplicate and persist a subscriber.

        A confirmation SMS is attempted when a phone is given; its failure
        never fails the subscription.

        Raises:
            InvalidInputError: No contact method, bad email or bad phone
            ConflictError: Contact method already has an active subscription
        """
        email = clean_contact(email)
        phone = clean_contact(phone)

        if not email and not phone:
            raise InvalidInputError(MISSING_CONTACT_MESSAGE)

        if email:
            if not is_valid_email(email):
                raise InvalidInputError(INVALID_EMAIL_MESSAGE)
            email = email.lower()

        phone_e164 = None
        if phone:
            phone_e164 = normalize_phone_e164(phone, self.default_region)
            if not phone_e164:
                raise InvalidInputError(INVALID_PHONE_MESSAGE)

        if email and await self.subscriber_repo.get_active_by_email(email):
            raise ConflictError(EMAIL_CONFLICT_MESSAGE)
        if phone_e164 and await self.subscriber_repo.get_active_by_phone(phone_e164):
            raise ConflictError(PHONE_CONFLICT_MESSAGE)

        # The partial unique indexes are authoritative if a concurrent
        # request inserted between the checks above and this insert.
        try:
            subscriber = await self.subscriber_repo.create(
                email=email,
                phone=phone,
                phone_e164=phone_e164,
            )
        except IntegrityError as e:
            logger.info("Duplicate subscription rejected by unique index")
            if "phone" in str(e.orig).lower():
                raise ConflictError(PHONE_CONFLICT_MESSAGE) from e
            raise ConflictError(EMAIL_CONFLICT_MESSAGE) from e

        result = SubscribeResult(subscriber=subscriber, contact_method=subscriber.contact_method)

        if phone_e164:
            result.sms_sent = await self.send_confirmation(phone_e164)

        logger.info(
            f"New subscriber added via {result.contact_method}",
            extra={"subscriber_id": subscriber.id, "contact_method": result.contact_method},
        )
        return result

    async def send_confirmation(self, phone_e164: str) -> bool:
        """Send the confirmation SMS, best effort.

        Returns:
            True if the provider accepted the message
        """
        if self.sms_provider is None:
            return False

        if await self.subscriber_repo.is_opted_out(phone_e164):
            logger.info("Skipping confirmation SMS for opted-out number")
            return False

        body = (
            f"{self.brand_name}: You're in for updates & drops. "
            "Reply STOP to opt out, HELP for help. Msg&data rates may apply."
        )
        try:
            sms_result = await self.sms_provider.send_sms(to=phone_e164, body=body)
        except MessagingError as e:
            logger.error(f"SMS sending error: {e}")
            return False
        except Exception as e:
            logger.error(f"Unexpected SMS sending error: {e}", exc_info=True)
            return False

        logger.info(f"SMS sent to {phone_e164}", extra={"message_sid": sms_result.message_id})
        return True

    async def unsubscribe(self, email: str | None) -> None:
        """Deactivate the subscription for an email.

        Raises:
            InvalidInputError: Missing or invalid email
            NotFoundError: No active subscription for this email
        """
        email = clean_contact(email)
        if not email or not is_valid_email(email):
            raise InvalidInputError(UNSUBSCRIBE_EMAIL_MESSAGE)

        changed = await self.subscriber_repo.deactivate_by_email(email.lower())
        if changed == 0:
            raise NotFoundError(EMAIL_NOT_FOUND_MESSAGE)

        logger.info("Subscriber unsubscribed", extra={"rows_changed": changed})

    async def count_active(self) -> int:
        return await self.subscriber_repo.count_active()

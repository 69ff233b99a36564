"""Inbound SMS handling (opt-out / opt-in keywords)."""

import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from waitlist.core.phone import normalize_phone_e164
from waitlist.domain.services.compliance_handler import ComplianceHandler
from waitlist.persistence.repositories.subscriber_repository import SubscriberRepository

logger = logging.getLogger(__name__)


@dataclass
class InboundSmsResult:
    """Outcome of an inbound SMS."""

    action: str
    response_message: str | None
    opt_in_status_changed: bool = False


class SmsService:
    """Service applying SMS reply keywords to subscribers."""

    def __init__(
        self,
        session: AsyncSession,
        default_region: str = "US",
        brand_name: str = "House of Reign",
    ) -> None:
        self.session = session
        self.subscriber_repo = SubscriberRepository(session)
        self.compliance_handler = ComplianceHandler(brand_name=brand_name)
        self.default_region = default_region

    async def process_inbound_sms(self, phone_number: str, message_body: str | None) -> InboundSmsResult:
        """Process an inbound SMS reply.

        STOP-family keywords set ``opted_out`` for the sender, START clears
        it, HELP only replies. Anything else is acknowledged without a reply.
        A storage failure is logged and the reply is still returned.
        """
        compliance = self.compliance_handler.check_compliance(message_body)
        result = InboundSmsResult(action=compliance.action, response_message=compliance.response_message)

        if compliance.action in ("stop", "opt_in"):
            opted_out = compliance.action == "stop"
            phone_e164 = normalize_phone_e164(phone_number, self.default_region) or phone_number
            try:
                changed = await self.subscriber_repo.set_opted_out(phone_e164, opted_out)
            except SQLAlchemyError as e:
                logger.error(f"Database error updating opt-out: {e}", exc_info=True)
            else:
                result.opt_in_status_changed = changed > 0
                logger.info(
                    f"SMS keyword {compliance.action} applied",
                    extra={"rows_changed": changed, "opted_out": opted_out},
                )

        return result

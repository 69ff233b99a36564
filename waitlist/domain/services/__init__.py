"""Domain services."""

from waitlist.domain.services.compliance_handler import ComplianceHandler, ComplianceResult
from waitlist.domain.services.sms_service import InboundSmsResult, SmsService
from waitlist.domain.services.subscription_service import SubscribeResult, SubscriptionService

__all__ = [
    "ComplianceHandler",
    "ComplianceResult",
    "InboundSmsResult",
    "SmsService",
    "SubscribeResult",
    "SubscriptionService",
]

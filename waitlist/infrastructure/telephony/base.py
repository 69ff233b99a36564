"""Outbound SMS provider interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass
class SmsResult:
    """What the provider reported for an accepted message."""

    message_id: str
    status: str
    to: str
    sender: str | None
    provider: str
    raw_response: dict | None = None


class SmsProviderProtocol(ABC):
    """Interface the subscription service sends confirmations through."""

    @abstractmethod
    async def send_sms(self, to: str, body: str) -> SmsResult:
        """Send ``body`` to an E.164 number.

        Raises:
            MessagingError: The provider refused or could not be reached
        """

    @abstractmethod
    def validate_webhook_signature(
        self,
        url: str,
        params: dict[str, Any],
        signature: str,
    ) -> bool:
        """Check a webhook signature against the full request URL and form params."""

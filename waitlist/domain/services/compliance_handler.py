"""Compliance handler for SMS keywords (STOP, HELP, START)."""

from dataclasses import dataclass
from typing import Literal


@dataclass
class ComplianceResult:
    """Result of compliance check."""

    is_compliant: bool
    action: Literal["allow", "stop", "help", "opt_in"]
    response_message: str | None = None


class ComplianceHandler:
    """Handler for SMS compliance keywords.

    Keywords match on the whole trimmed, upper-cased message body only;
    "please stop texting" is an ordinary message.
    """

    STOP_KEYWORDS = frozenset({"STOP", "STOP ALL", "UNSUBSCRIBE", "CANCEL", "END", "QUIT"})
    HELP_KEYWORDS = frozenset({"HELP"})
    OPT_IN_KEYWORDS = frozenset({"START"})

    def __init__(self, brand_name: str = "House of Reign") -> None:
        self.brand_name = brand_name

    @staticmethod
    def normalize(message: str | None) -> str:
        return (message or "").strip().upper()

    def check_compliance(self, message: str | None) -> ComplianceResult:
        """Check message for compliance keywords.

        Args:
            message: Inbound message body

        Returns:
            ComplianceResult with action and reply text
        """
        keyword = self.normalize(message)

        if keyword in self.STOP_KEYWORDS:
            return ComplianceResult(
                is_compliant=False,
                action="stop",
                response_message=(
                    "You've been unsubscribed. No more messages will be sent. "
                    "Reply START to resubscribe."
                ),
            )

        if keyword in self.HELP_KEYWORDS:
            return ComplianceResult(
                is_compliant=True,
                action="help",
                response_message=(
                    f"{self.brand_name}: For help, reply HELP. To stop, reply STOP. "
                    "Msg&data rates may apply."
                ),
            )

        if keyword in self.OPT_IN_KEYWORDS:
            return ComplianceResult(
                is_compliant=True,
                action="opt_in",
                response_message=f"You're resubscribed. You'll receive updates from {self.brand_name}.",
            )

        return ComplianceResult(is_compliant=True, action="allow", response_message=None)

    def is_stop_keyword(self, message: str | None) -> bool:
        return self.normalize(message) in self.STOP_KEYWORDS

"""Landing page widgets: countdown timer and subscription form."""

from waitlist.client.countdown import LAUNCH_AT, CountdownTimer
from waitlist.client.form import FormMessage, SubscriptionError, SubscriptionForm

__all__ = [
    "LAUNCH_AT",
    "CountdownTimer",
    "FormMessage",
    "SubscriptionError",
    "SubscriptionForm",
]

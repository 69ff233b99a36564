"""Database models."""

from waitlist.persistence.models.subscriber import Subscriber

__all__ = [
    "Subscriber",
]

"""Repositories."""

from waitlist.persistence.repositories.subscriber_repository import SubscriberRepository

__all__ = ["SubscriberRepository"]

"""Subscriber repository."""

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from waitlist.persistence.models.subscriber import Subscriber
from waitlist.persistence.repositories.base import BaseRepository


class SubscriberRepository(BaseRepository[Subscriber]):
    """Repository for Subscriber entities."""

    def __init__(self, session: AsyncSession):
        """Initialize subscriber repository."""
        super().__init__(Subscriber, session)

    async def get_active_by_email(self, email: str) -> Subscriber | None:
        """Get the active subscriber with this email, if any."""
        stmt = select(Subscriber).where(
            Subscriber.email == email,
            Subscriber.is_active.is_(True),
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_active_by_phone(self, phone_e164: str) -> Subscriber | None:
        """Get the active subscriber with this E.164 phone, if any."""
        stmt = select(Subscriber).where(
            Subscriber.phone_e164 == phone_e164,
            Subscriber.is_active.is_(True),
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def is_opted_out(self, phone_e164: str) -> bool:
        """Check if any record for this phone has replied STOP."""
        stmt = select(Subscriber.id).where(
            Subscriber.phone_e164 == phone_e164,
            Subscriber.opted_out.is_(True),
        ).limit(1)
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def count_active(self) -> int:
        return await self.count(is_active=True)

    async def deactivate_by_email(self, email: str) -> int:
        """Mark active subscriptions for this email inactive.

        Returns:
            Number of rows changed
        """
        stmt = (
            update(Subscriber)
            .where(Subscriber.email == email, Subscriber.is_active.is_(True))
            .values(is_active=False, updated_at=datetime.utcnow())
            .execution_options(synchronize_session=False)
        )
        return await self._execute(stmt)

    async def set_opted_out(self, phone_e164: str, opted_out: bool) -> int:
        """Set the SMS opt-out flag on every record for this phone.

        Returns:
            Number of rows matched
        """
        stmt = (
            update(Subscriber)
            .where(Subscriber.phone_e164 == phone_e164)
            .values(opted_out=opted_out, updated_at=datetime.utcnow())
            .execution_options(synchronize_session=False)
        )
        return await self._execute(stmt)

    async def _execute(self, stmt) -> int:
        try:
            result = await self.session.execute(stmt)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        return result.rowcount or 0

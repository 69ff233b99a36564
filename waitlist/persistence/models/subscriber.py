"""Subscriber model."""

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String, text

from waitlist.persistence.database import Base


class Subscriber(Base):
    """A waitlist subscriber reachable by email, SMS, or both."""

    __tablename__ = "subscribers"

    id = Column(Integer, primary_key=True, index=True)

    # Contact methods (at least one is set)
    email = Column(String(254), nullable=True)
    phone = Column(String(50), nullable=True)  # as submitted
    phone_e164 = Column(String(20), nullable=True, index=True)

    # Lifecycle flags
    opted_out = Column(Boolean, default=False, nullable=False)  # SMS STOP/START
    is_active = Column(Boolean, default=True, nullable=False)  # explicit unsubscribe

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # One active subscription per contact method
    __table_args__ = (
        Index(
            "uq_subscribers_active_email",
            "email",
            unique=True,
            sqlite_where=text("is_active = 1 AND email IS NOT NULL"),
            postgresql_where=text("is_active AND email IS NOT NULL"),
        ),
        Index(
            "uq_subscribers_active_phone",
            "phone_e164",
            unique=True,
            sqlite_where=text("is_active = 1 AND phone_e164 IS NOT NULL"),
            postgresql_where=text("is_active AND phone_e164 IS NOT NULL"),
        ),
    )

    @property
    def contact_method(self) -> str:
        return "email" if self.email else "SMS"

    def __repr__(self) -> str:
        return (
            f"<Subscriber(id={self.id}, email={self.email}, phone={self.phone_e164}, "
            f"active={self.is_active}, opted_out={self.opted_out})>"
        )

"""FastAPI dependencies resolving the service context."""

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from waitlist.core.context import ServiceContext
from waitlist.domain.services.sms_service import SmsService
from waitlist.domain.services.subscription_service import SubscriptionService


def get_context(request: Request) -> ServiceContext:
    """Return the context built by ``create_app``."""
    return request.app.state.context


async def get_db(
    context: Annotated[ServiceContext, Depends(get_context)],
) -> AsyncIterator[AsyncSession]:
    """Dependency for getting a database session."""
    async with context.database.session() as session:
        yield session


def get_subscription_service(
    context: Annotated[ServiceContext, Depends(get_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SubscriptionService:
    return SubscriptionService(
        db,
        sms_provider=context.sms_provider,
        default_region=context.settings.sms_default_region,
        brand_name=context.settings.brand_name,
    )


def get_sms_service(
    context: Annotated[ServiceContext, Depends(get_context)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SmsService:
    return SmsService(
        db,
        default_region=context.settings.sms_default_region,
        brand_name=context.settings.brand_name,
    )

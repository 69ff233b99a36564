"""Subscription endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from waitlist.api.deps import get_subscription_service
from waitlist.api.schemas import (
    CountResponse,
    MessageResponse,
    SubscribeRequest,
    SubscribeResponse,
    UnsubscribeRequest,
)
from waitlist.domain.services.subscription_service import SubscriptionService

router = APIRouter()


@router.post("/subscribe", response_model=SubscribeResponse)
async def subscribe(
    payload: SubscribeRequest,
    service: Annotated[SubscriptionService, Depends(get_subscription_service)],
) -> SubscribeResponse:
    """Subscribe by email, phone, or both.

    Returns 400 for missing or malformed contact details and 409 when the
    contact method already has an active subscription.
    """
    result = await service.subscribe(email=payload.email, phone=payload.phone)
    return SubscribeResponse(
        success=True,
        message=result.message,
        subscriber_id=result.subscriber.id,
        contact_method=result.contact_method,
    )


@router.get("/subscribers/count", response_model=CountResponse)
async def subscribers_count(
    service: Annotated[SubscriptionService, Depends(get_subscription_service)],
) -> CountResponse:
    """Count active subscribers."""
    return CountResponse(count=await service.count_active())


@router.post("/unsubscribe", response_model=MessageResponse)
async def unsubscribe(
    payload: UnsubscribeRequest,
    service: Annotated[SubscriptionService, Depends(get_subscription_service)],
) -> MessageResponse:
    await service.unsubscribe(payload.email)
    return MessageResponse(success=True, message="Successfully unsubscribed")

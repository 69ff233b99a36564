"""API routes."""

from fastapi import APIRouter, Depends

from waitlist.api.routes import health, sms_webhooks, subscribers
from waitlist.infrastructure.rate_limiter import rate_limit

# Every /api route shares the per-IP rate limit
api_router = APIRouter(dependencies=[Depends(rate_limit)])

api_router.include_router(health.router, tags=["health"])
api_router.include_router(subscribers.router, tags=["subscribers"])
api_router.include_router(sms_webhooks.router, prefix="/sms", tags=["sms-webhooks"])

"""Health check endpoint."""

from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Depends

from waitlist.api.deps import get_context
from waitlist.api.schemas import HealthResponse
from waitlist.core.context import ServiceContext

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(
    context: Annotated[ServiceContext, Depends(get_context)],
) -> HealthResponse:
    """Report liveness, current time and process uptime in seconds."""
    return HealthResponse(
        status="OK",
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        uptime=context.uptime(),
    )

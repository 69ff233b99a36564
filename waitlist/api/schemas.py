"""Request and response schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SubscribeRequest(BaseModel):
    """Subscribe request. Contact fields are validated by the service so
    that bad input maps to 400 with a readable reason."""

    model_config = ConfigDict(extra="ignore")

    email: str | None = None
    phone: str | None = None

    @field_validator("phone", mode="before")
    @classmethod
    def phone_number_as_text(cls, value: Any) -> Any:
        # Forms sometimes post the phone as a JSON number
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class UnsubscribeRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    email: str | None = None


class MessageResponse(BaseModel):
    """Generic success/failure envelope."""

    success: bool
    message: str


class SubscribeResponse(MessageResponse):
    subscriber_id: int = Field(serialization_alias="subscriberId")
    contact_method: str = Field(serialization_alias="contactMethod")


class CountResponse(BaseModel):
    success: bool = True
    count: int


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    uptime: float

"""Per-request context used to correlate log lines."""

from contextvars import ContextVar
from typing import Optional

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def set_request_id(request_id: str | None) -> None:
    """Set the current request ID."""
    request_id_var.set(request_id)


def get_request_id() -> str | None:
    """Get the current request ID, if any."""
    return request_id_var.get()


def clear_request_id() -> None:
    request_id_var.set(None)

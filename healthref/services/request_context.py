"""Per-request correlation ID carried through a contextvar."""

from __future__ import annotations

import uuid
from contextvars import ContextVar

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def generate_request_id() -> str:
    return uuid.uuid4().hex


def get_request_id() -> str:
    """Return the ID bound to the current request, or ``""`` outside one."""
    return request_id_var.get()


def short_request_id(length: int = 12) -> str:
    """Truncated request ID used in access log lines and text log prefixes."""
    return get_request_id()[:length]

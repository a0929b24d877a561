"""Access logging and request correlation (pure ASGI)."""

from __future__ import annotations

import logging
import time

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from healthref.services.metrics import metrics
from healthref.services.request_context import (
    generate_request_id,
    request_id_var,
    short_request_id,
)

logger = logging.getLogger("healthref.access")

_REQUEST_ID_HEADER = b"x-request-id"


def _incoming_request_id(scope: Scope) -> str:
    for name, value in scope.get("headers", []):
        if name == _REQUEST_ID_HEADER:
            return value.decode("latin-1")
    return ""


class RequestLoggingMiddleware:
    """Log ``method path status latency`` once per HTTP request.

    Honours an incoming ``X-Request-ID`` or generates one, binds it to the
    request context for log formatters, and echoes it back together with
    ``X-Response-Time-Ms``.  Request bodies and query strings are not
    logged.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        rid = _incoming_request_id(scope) or generate_request_id()
        token = request_id_var.set(rid)
        start = time.perf_counter()
        status_code = 500

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
                headers = list(message.get("headers", []))
                headers.append((b"x-response-time-ms", str(elapsed_ms).encode()))
                headers.append((_REQUEST_ID_HEADER, rid.encode()))
                message = {**message, "headers": headers}
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
            logger.info(
                "%s %s %s %.2fms [%s]",
                scope.get("method", ""),
                scope.get("path", ""),
                status_code,
                elapsed_ms,
                short_request_id(),
            )
            metrics.inc_request(status_code)
            metrics.record_latency(elapsed_ms)
            request_id_var.reset(token)

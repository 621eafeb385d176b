"""Request tracing middleware.

Tags every HTTP response with an X-Request-Id header and logs one line per
request using the pure ASGI pattern.
"""

import logging
import time
from uuid import uuid4

logger = logging.getLogger(__name__)


class RequestIdMiddleware:
    """
    Add a request identifier to all responses and log request outcomes.

    Uses pure ASGI middleware pattern instead of BaseHTTPMiddleware
    to avoid Content-Length mismatch issues with streaming responses.

    An incoming X-Request-Id header is reused; otherwise a UUID is generated.
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        incoming = dict(scope.get("headers", [])).get(b"x-request-id")
        request_id = incoming.decode() if incoming else str(uuid4())
        start = time.perf_counter()
        status = 500

        async def send_with_request_id(message):
            nonlocal status
            if message["type"] == "http.response.start":
                status = message["status"]
                headers = list(message.get("headers", []))
                headers.append((b"x-request-id", request_id.encode()))
                message = {**message, "headers": headers}
            await send(message)

        try:
            await self.app(scope, receive, send_with_request_id)
        finally:
            latency_ms = int((time.perf_counter() - start) * 1000)
            logger.info(
                f"{scope['method']} {scope['path']} -> {status} ({latency_ms}ms) [{request_id}]"
            )

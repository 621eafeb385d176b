"""Bridge from a local MCP transport to a deployed HTTP server.

Lets an MCP client that only speaks stdio use a remotely hosted server
without holding Notion credentials locally: every request body is forwarded
unchanged to the server's ``/mcp`` endpoint.
"""

import json
import logging
from typing import Any

import httpx

from .jsonrpc import INTERNAL_ERROR, jsonrpc_error

logger = logging.getLogger(__name__)


def _request_id(payload: Any) -> Any:
    return payload.get("id") if isinstance(payload, dict) else None


class RemoteBridge:
    """Forwards JSON-RPC payloads to a remote ``/mcp`` endpoint.

    Args:
        url: Full URL of the remote endpoint, e.g. https://host/mcp
        timeout: Request timeout in seconds
        transport: Optional httpx transport, used by tests
    """

    def __init__(
        self, url: str, timeout: float = 30.0, transport: httpx.AsyncBaseTransport | None = None
    ):
        self.url = url
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def handle_payload(self, payload: Any) -> dict | list | None:
        """Forward one request body and return the remote response body."""
        id = _request_id(payload)
        try:
            response = await self._client.post(self.url, json=payload)
        except httpx.HTTPError as e:
            logger.warning(f"Remote MCP request failed: {type(e).__name__}: {e}")
            return jsonrpc_error(id, INTERNAL_ERROR, f"Remote server unreachable: {e}")

        if response.status_code == 204:
            return None

        try:
            body = response.json()
        except json.JSONDecodeError:
            body = None

        if not response.is_success:
            detail = body.get("error") if isinstance(body, dict) else None
            message = f"Remote server returned {response.status_code}"
            if isinstance(detail, str):
                message = f"{message}: {detail}"
            # JSON-RPC errors (e.g. parse errors) come back as-is.
            if isinstance(detail, dict):
                return body
            return jsonrpc_error(id, INTERNAL_ERROR, message)

        if body is None:
            return jsonrpc_error(id, INTERNAL_ERROR, "Remote server returned invalid JSON")
        return body

    async def aclose(self) -> None:
        await self._client.aclose()

"""JSON-RPC dispatcher for the MCP knowledge tools.

Shared by the HTTP and stdio transports. A request is handled to completion
in a single call to ``MCPDispatcher.handle``; the dispatcher keeps no state
between requests.

Protocol problems (unknown method, malformed envelope, bad tool arguments)
produce JSON-RPC error envelopes. Failures inside a tool produce a normal
result flagged with ``isError: true``.
"""

import logging
from typing import Any

from .. import SERVER_DESCRIPTION, SERVER_NAME, __version__
from ..engine.handlers import (
    HandlerContext,
    HandlerFunc,
    handle_add_knowledge,
    handle_get_knowledge_stats,
    handle_get_recent_knowledge,
    handle_search_knowledge,
)
from ..exceptions import ProtocolError
from ..models import ToolName, ToolResult
from ..notion import NotionClient
from .jsonrpc import (
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    jsonrpc_error,
    jsonrpc_response,
)
from .tool_defs import TOOL_DEFINITIONS
from .validation import ToolArgumentError, validate_tool_arguments

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2024-11-05"

TOOL_HANDLERS: dict[ToolName, HandlerFunc] = {
    ToolName.ADD_KNOWLEDGE: handle_add_knowledge,
    ToolName.SEARCH_KNOWLEDGE: handle_search_knowledge,
    ToolName.GET_RECENT_KNOWLEDGE: handle_get_recent_knowledge,
    ToolName.GET_KNOWLEDGE_STATS: handle_get_knowledge_stats,
}


def server_info() -> dict[str, str]:
    return {"name": SERVER_NAME, "version": __version__, "description": SERVER_DESCRIPTION}


class MCPDispatcher:
    """Routes JSON-RPC envelopes to the knowledge tool handlers."""

    def __init__(self, client: NotionClient):
        self.context = HandlerContext(client=client, names=client.property_names)

    async def handle_payload(self, payload: Any) -> dict | list | None:
        """Handle a decoded request body: a single envelope or a batch.

        Batch members are handled one after another; notifications are left
        out of the reply, and a batch of only notifications yields None.
        """
        if not isinstance(payload, list):
            return await self.handle(payload)
        if not payload:
            return jsonrpc_error(None, INVALID_REQUEST, "Invalid Request: empty batch")

        responses = []
        for envelope in payload:
            response = await self.handle(envelope)
            if response is not None:
                responses.append(response)
        return responses or None

    async def handle(self, envelope: Any) -> dict | None:
        """Handle one JSON-RPC request envelope.

        Returns:
            The response envelope, or None for a notification that needs no
            reply. The request ``id`` is echoed as given (None when absent).
        """
        if not isinstance(envelope, dict):
            return jsonrpc_error(None, INVALID_REQUEST, "Invalid Request: expected a JSON object")

        id = envelope.get("id")
        method = envelope.get("method")

        if not isinstance(method, str) or not method:
            return jsonrpc_error(id, INVALID_REQUEST, "Invalid Request: missing method")

        if method.startswith("notifications/") and "id" not in envelope:
            logger.debug(f"Notification received: {method}")
            return None

        try:
            if method == "initialize":
                result = self.initialize()
            elif method == "tools/list":
                result = {"tools": TOOL_DEFINITIONS}
            elif method == "tools/call":
                result = await self.call_tool_request(envelope.get("params"))
            elif method == "ping":
                result = {}
            else:
                raise ProtocolError(METHOD_NOT_FOUND, f"Method not found: {method}")
        except ProtocolError as e:
            logger.info(f"JSON-RPC error {e.code} for {method}: {e.message}")
            return jsonrpc_error(id, e.code, e.message)

        return jsonrpc_response(id, result)

    def initialize(self) -> dict[str, Any]:
        return {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {"tools": {}},
            "serverInfo": server_info(),
        }

    async def call_tool_request(self, params: Any) -> dict[str, Any]:
        """Handle the params of a ``tools/call`` request."""
        if not isinstance(params, dict):
            raise ProtocolError(INVALID_REQUEST, "Invalid Request: tools/call requires params")

        name = params.get("name")
        if not isinstance(name, str) or not name:
            raise ProtocolError(INVALID_REQUEST, "Invalid Request: missing tool name")

        result = await self.call_tool(name, params.get("arguments"))
        return result.to_mcp()

    async def call_tool(self, name: str, arguments: Any) -> ToolResult:
        """Validate arguments and run a tool.

        Raises:
            ProtocolError: Unknown tool (-32601) or invalid arguments (-32602).
                Nothing has been sent to Notion in either case.
        """
        try:
            tool = ToolName(name)
        except ValueError:
            raise ProtocolError(METHOD_NOT_FOUND, f"Unknown tool: {name}") from None

        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            raise ProtocolError(INVALID_PARAMS, f"{tool}: arguments must be an object")

        try:
            params = validate_tool_arguments(tool, arguments)
        except ToolArgumentError as e:
            raise ProtocolError(INVALID_PARAMS, str(e)) from e

        logger.info(f"Calling tool {tool}")
        try:
            return await TOOL_HANDLERS[tool](params, self.context)
        except Exception as e:
            # Handlers report Notion failures themselves; this catches bugs.
            logger.error(f"Tool {tool} raised unexpectedly: {e}", exc_info=True)
            return ToolResult(text=f"Tool execution error: {e}", is_error=True)

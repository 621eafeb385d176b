"""MCP (Model Context Protocol) transport module.

This module contains the transport-independent MCP components:
- Tool definitions for tools/list
- JSON-RPC 2.0 helpers
- Tool argument validation
- The dispatcher shared by the HTTP and stdio transports
"""

from .dispatcher import PROTOCOL_VERSION, MCPDispatcher, server_info
from .jsonrpc import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    decode_message,
    jsonrpc_error,
    jsonrpc_response,
    parse_error,
)
from .tool_defs import TOOL_DEFINITIONS
from .validation import ToolArgumentError, validate_tool_arguments

__all__ = [
    # Dispatcher
    "MCPDispatcher",
    "PROTOCOL_VERSION",
    "server_info",
    # Tool definitions
    "TOOL_DEFINITIONS",
    # Validation
    "validate_tool_arguments",
    "ToolArgumentError",
    # JSON-RPC helpers
    "jsonrpc_response",
    "jsonrpc_error",
    "decode_message",
    "parse_error",
    "PARSE_ERROR",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "INVALID_PARAMS",
    "INTERNAL_ERROR",
]

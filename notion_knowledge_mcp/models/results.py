"""Tool result and HTTP response models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class ToolResult(BaseModel):
    """Text produced by a tool handler.

    ``is_error`` marks downstream or execution failures; they are still
    returned to the client as a successful JSON-RPC result.
    """

    text: str
    is_error: bool = False

    def to_mcp(self) -> dict[str, Any]:
        """Render as an MCP ``tools/call`` result payload."""
        payload: dict[str, Any] = {"content": [{"type": "text", "text": self.text}]}
        if self.is_error:
            payload["isError"] = True
        return payload


class HealthResponse(BaseModel):
    """Body of GET /health."""

    status: str
    protocol_version: str = Field(serialization_alias="protocolVersion")
    server_info: dict[str, str] = Field(serialization_alias="serverInfo")


class LegacyCallRequest(BaseModel):
    """Body of POST /call: ``method`` is the tool name, ``params`` its arguments."""

    method: str
    params: dict[str, Any] | None = None


class LegacyCallResponse(BaseModel):
    """Body returned by POST /call."""

    result: str
    is_error: bool = Field(default=False, serialization_alias="isError")
    timestamp: datetime

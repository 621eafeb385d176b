"""JSON-RPC 2.0 envelopes shared by the HTTP, stdio and bridge transports.

Requests arrive either as raw bytes (stdio) or already decoded (HTTP);
``decode_message`` covers the raw case so both transports answer undecodable
input with the same ``-32700`` envelope.

See: https://www.jsonrpc.org/specification
"""

import json
from typing import Any

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


def jsonrpc_response(id: Any, result: Any) -> dict:
    """Success envelope. ``id`` echoes the request's id (None if it had none)."""
    return {"jsonrpc": "2.0", "id": id, "result": result}


def jsonrpc_error(id: Any, code: int, message: str) -> dict:
    """Error envelope with one of the codes above."""
    return {"jsonrpc": "2.0", "id": id, "error": {"code": code, "message": message}}


def decode_message(raw: str | bytes) -> Any:
    """Decode one raw request body.

    Raises:
        ValueError: The body is not UTF-8 (``UnicodeDecodeError``) or not
            JSON (``json.JSONDecodeError``)
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    return json.loads(raw)


def parse_error(error: ValueError | None = None) -> dict:
    """Envelope for an undecodable request; its id is unknowable, so null."""
    if isinstance(error, json.JSONDecodeError):
        return jsonrpc_error(None, PARSE_ERROR, f"Parse error: {error.msg}")
    if isinstance(error, UnicodeDecodeError):
        return jsonrpc_error(None, PARSE_ERROR, "Parse error: invalid UTF-8")
    return jsonrpc_error(None, PARSE_ERROR, "Parse error")

"""Line-delimited JSON-RPC transport over stdin/stdout.

One JSON request per input line, one JSON response per output line. Lines
are processed strictly in order, each to completion before the next is
read. Logs go to stderr; stdout carries protocol messages only.

Usage:
    notion-knowledge-mcp-stdio                  # call Notion directly
    notion-knowledge-mcp-stdio --remote-url URL # forward to a deployed server
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import IO, Any, Protocol, TextIO

from .config import configure_logging, load_settings
from .exceptions import ConfigurationError
from .mcp import MCPDispatcher, decode_message, parse_error
from .mcp.bridge import RemoteBridge
from .notion import NotionClient

logger = logging.getLogger(__name__)


class PayloadHandler(Protocol):
    async def handle_payload(self, payload: Any) -> dict | list | None: ...


async def handle_line(handler: PayloadHandler, line: str | bytes) -> str | None:
    """Process one input line, returning the serialized response (or None).

    Raw byte lines are decoded here, so input that is not UTF-8 gets a parse
    error like any other malformed line.
    """
    line = line.strip()
    if not line:
        return None

    try:
        payload = decode_message(line)
    except ValueError as e:
        logger.warning(f"Discarding malformed input line: {e}")
        response = parse_error(e)
    else:
        response = await handler.handle_payload(payload)

    if response is None:
        return None
    return json.dumps(response, ensure_ascii=False)


async def serve(handler: PayloadHandler, instream: IO, outstream: TextIO) -> None:
    """Serve requests from ``instream`` until EOF.

    ``instream`` may be binary (the process runs on ``sys.stdin.buffer``) or
    text.
    """
    loop = asyncio.get_running_loop()
    while True:
        # readline keeps partial input buffered until a newline (or EOF) arrives
        line = await loop.run_in_executor(None, instream.readline)
        if not line:
            break
        output = await handle_line(handler, line)
        if output is not None:
            outstream.write(output + "\n")
            outstream.flush()
    logger.info("Input closed, shutting down")


async def _run(remote_url: str | None) -> int:
    if remote_url:
        handler = RemoteBridge(remote_url)
        closer = handler.aclose
    else:
        try:
            settings = load_settings()
        except ConfigurationError as e:
            logger.error(f"Cannot start: {e}")
            return 1
        client = NotionClient(settings)
        handler = MCPDispatcher(client)
        closer = client.aclose

    try:
        await serve(handler, sys.stdin.buffer, sys.stdout)
    finally:
        await closer()
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Notion knowledge MCP server (stdio transport)")
    parser.add_argument(
        "--remote-url",
        help="Forward requests to a deployed server's /mcp endpoint instead of calling Notion",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO)")
    args = parser.parse_args(argv)

    configure_logging(args.log_level, stream=sys.stderr)
    return asyncio.run(_run(args.remote_url))


if __name__ == "__main__":
    sys.exit(main())

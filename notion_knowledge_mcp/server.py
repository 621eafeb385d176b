"""FastAPI MCP Server for the Notion knowledge base."""

import json
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Annotated

import httpx
from fastapi import Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, StreamingResponse

from . import __version__
from .config import Settings, configure_logging, load_settings
from .exceptions import ConfigurationError, ProtocolError
from .mcp import (
    PROTOCOL_VERSION,
    TOOL_DEFINITIONS,
    MCPDispatcher,
    parse_error,
    server_info,
)
from .middleware import RequestIdMiddleware
from .models import HealthResponse, LegacyCallRequest, LegacyCallResponse
from .notion import NotionClient

logger = logging.getLogger(__name__)

CONFIG_HELP = "Check the NOTION_TOKEN and NOTION_DATABASE_ID environment variables"

# ============ SENTRY INITIALIZATION ============


def _filter_sentry_event(event: dict) -> dict:
    """Remove sensitive data from Sentry events."""
    if "request" in event and "headers" in event["request"]:
        headers = event["request"]["headers"]
        for key in ["authorization"]:
            if key in headers:
                headers[key] = "[REDACTED]"
    return event


def _init_sentry(settings: Settings) -> None:
    if not settings.sentry_dsn:
        logger.debug("Sentry DSN not configured - error tracking disabled")
        return
    try:
        import sentry_sdk
        from sentry_sdk.integrations.fastapi import FastApiIntegration
        from sentry_sdk.integrations.starlette import StarletteIntegration

        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            traces_sample_rate=1.0 if settings.debug else 0.1,
            integrations=[
                FastApiIntegration(),
                StarletteIntegration(),
            ],
            before_send=lambda event, hint: _filter_sentry_event(event),
        )
        logger.info("Sentry error tracking initialized")
    except ImportError:
        logger.warning("Sentry DSN configured but sentry-sdk not installed")


# ============ DEPENDENCIES ============


def get_dispatcher(request: Request) -> MCPDispatcher:
    """Return the app's dispatcher, or fail if configuration is missing."""
    error = request.app.state.config_error
    if error is not None:
        raise ConfigurationError(str(error), missing=error.missing)
    return request.app.state.dispatcher


Dispatcher = Annotated[MCPDispatcher, Depends(get_dispatcher)]


# ============ APPLICATION FACTORY ============


def create_app(
    settings: Settings | None = None,
    notion_transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Settings are loaded once here when not given. If required configuration
    is missing, the app still starts but every endpoint answers 500.

    Args:
        settings: Preloaded settings (tests pass these explicitly)
        notion_transport: Optional httpx transport for the Notion client
    """
    config_error: ConfigurationError | None = None
    if settings is None:
        try:
            settings = load_settings()
        except ConfigurationError as e:
            logger.error(f"Configuration error: {e}")
            config_error = e

    client = NotionClient(settings, transport=notion_transport) if settings else None

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler for startup/shutdown."""
        logger.info(f"Starting Notion Knowledge MCP Server v{__version__}")
        if config_error is not None:
            logger.error(f"Requests will fail until configuration is fixed: {config_error}")
        yield
        if client is not None:
            await client.aclose()

    app = FastAPI(
        title="Notion Knowledge MCP Server",
        description="MCP endpoint for a Notion-backed programming knowledge base",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config_error = config_error
    app.state.dispatcher = MCPDispatcher(client) if client else None
    app.state.database_id = settings.notion_database_id if settings else ""

    if settings is not None:
        _init_sentry(settings)

    app.add_middleware(RequestIdMiddleware)

    origins = settings.cors_origins_list if settings else ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    _register_exception_handlers(app)
    _register_routes(app)
    return app


# ============ EXCEPTION HANDLERS ============


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(request: Request, exc: ConfigurationError):
        return JSONResponse(status_code=500, content={"error": str(exc), "help": CONFIG_HELP})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        """Malformed request bodies are protocol errors: 400 with an ``error`` message."""
        details = []
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"] if part != "body") or "body"
            details.append(f"{field}: {error['msg']}")
        return JSONResponse(
            status_code=400, content={"error": f"Invalid request: {'; '.join(details)}"}
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions with sanitized error messages."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"error": "An internal server error occurred. Please try again."},
        )


# ============ ROUTES ============


async def _sse_initialized() -> AsyncGenerator[str, None]:
    notification = {"jsonrpc": "2.0", "method": "notifications/initialized", "params": {}}
    yield f"data: {json.dumps(notification)}\n\n"


def _register_routes(app: FastAPI) -> None:
    @app.post("/mcp", tags=["MCP"])
    async def mcp_endpoint(request: Request, dispatcher: Dispatcher):
        """
        MCP JSON-RPC 2.0 endpoint.

        Accepts a single request or a batch. Tool failures are reported inside
        a successful result with ``isError: true``.
        """
        try:
            body = await request.json()
        except ValueError as e:
            return JSONResponse(parse_error(e))

        response = await dispatcher.handle_payload(body)
        if response is None:
            return Response(status_code=204)
        return JSONResponse(response)

    @app.get("/sse", tags=["MCP"], dependencies=[Depends(get_dispatcher)])
    async def sse_endpoint():
        """Server-Sent Events stream announcing the initialized notification."""
        return StreamingResponse(
            _sse_initialized(),
            media_type="text/event-stream",
            headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
        )

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["Health"],
        dependencies=[Depends(get_dispatcher)],
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint (lightweight liveness check)."""
        return HealthResponse(
            status="ok",
            protocol_version=PROTOCOL_VERSION,
            server_info={k: v for k, v in server_info().items() if k != "description"},
        )

    @app.get("/tools", tags=["Legacy"], dependencies=[Depends(get_dispatcher)])
    async def list_tools():
        """Tool listing outside JSON-RPC."""
        return {"tools": TOOL_DEFINITIONS}

    @app.post("/call", response_model=LegacyCallResponse, tags=["Legacy"])
    async def call_tool(body: LegacyCallRequest, dispatcher: Dispatcher):
        """Call a tool outside JSON-RPC: ``{"method": <tool>, "params": {...}}``."""
        try:
            result = await dispatcher.call_tool(body.method, body.params)
        except ProtocolError as e:
            return JSONResponse(status_code=400, content={"error": e.message})

        return LegacyCallResponse(
            result=result.text,
            is_error=result.is_error,
            timestamp=datetime.now(UTC),
        )

    @app.get(
        "/",
        response_class=PlainTextResponse,
        tags=["Health"],
        dependencies=[Depends(get_dispatcher)],
    )
    async def root(request: Request) -> str:
        """Plain-text landing page listing the endpoints."""
        base = str(request.base_url).rstrip("/")
        return "\n".join(
            [
                f"Notion Knowledge MCP Server v{__version__} (MCP {PROTOCOL_VERSION})",
                "=" * 50,
                "",
                f"MCP endpoint: {base}/mcp",
                f"SSE transport: {base}/sse",
                f"Database ID: {request.app.state.database_id}",
                "",
                "MCP endpoints:",
                "  POST /mcp    - JSON-RPC 2.0",
                "  GET  /sse    - Server-Sent Events",
                "  GET  /health - Health check",
                "",
                "Legacy endpoints:",
                "  GET  /tools  - Tool list",
                "  POST /call   - Tool call",
            ]
        )


app = create_app()


# ============ MAIN ============


def main():
    """Run the server with uvicorn."""
    import uvicorn

    try:
        settings = load_settings()
    except ConfigurationError as e:
        configure_logging()
        logger.error(f"Cannot start: {e}")
        raise SystemExit(1) from e

    configure_logging(settings.log_level)
    uvicorn.run(
        "notion_knowledge_mcp.server:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()

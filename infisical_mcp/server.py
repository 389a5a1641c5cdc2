"""FastAPI MCP Server for Infisical (HTTP + WebSocket transports)."""

import asyncio
import json
import logging
import sys
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Annotated

from fastapi import Depends, FastAPI, Request, Response, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from . import __version__
from .api.deps import build_dispatcher, get_client_ip, get_dispatcher, get_settings_dep
from .config import Settings, get_settings
from .logging_setup import configure_logging, init_sentry
from .mcp import INTERNAL_ERROR, INVALID_REQUEST, PARSE_ERROR, TOOL_NAMES, jsonrpc_error
from .mcp.dispatcher import SERVER_CAPABILITIES, SERVER_NAME, McpDispatcher
from .mcp.jsonrpc import http_status_for
from .middleware import SecurityHeadersMiddleware
from .models import DiscoveryResponse, HealthResponse, ReadyResponse

logger = logging.getLogger(__name__)

SERVICE_NAME = "Infisical MCP HTTP Server"


def _attach(app: FastAPI, settings: Settings, dispatcher: McpDispatcher | None) -> None:
    app.state.settings = settings
    app.state.dispatcher = dispatcher
    app.state.owns_dispatcher = dispatcher is None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Startup
    logger.info(f"Starting {SERVICE_NAME} v{__version__}")
    settings: Settings = app.state.settings

    if not settings.debug and settings.cors_allowed_origins == "*":
        logger.warning(
            "SECURITY WARNING: CORS is configured to allow all origins ('*'). "
            "Set CORS_ALLOWED_ORIGINS to specific domains in production."
        )

    if app.state.dispatcher is None:
        app.state.dispatcher = build_dispatcher(settings)

    yield
    # Shutdown
    if app.state.owns_dispatcher and app.state.dispatcher is not None:
        await app.state.dispatcher.client.aclose()
        app.state.dispatcher = None


async def _dispatch_raw(raw: bytes | str, dispatcher: McpDispatcher) -> Response:
    """Parse a JSON-RPC body and dispatch it; shared by every POST route."""
    try:
        body = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return JSONResponse(jsonrpc_error(None, PARSE_ERROR, "Parse error"), status_code=400)

    response = await dispatcher.handle_message(body)
    if response is None:
        return Response(status_code=204)
    return JSONResponse(response, status_code=http_status_for(response))


def create_app(
    settings: Settings | None = None, dispatcher: McpDispatcher | None = None
) -> FastAPI:
    """Build the HTTP application.

    Args:
        settings: Defaults to settings loaded from the environment
        dispatcher: Injected dispatcher (tests); built from settings at startup otherwise
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Infisical MCP Server",
        description="MCP JSON-RPC over HTTP for Infisical secrets management",
        version=__version__,
        lifespan=lifespan,
    )
    _attach(app, settings, dispatcher)

    app.add_middleware(SecurityHeadersMiddleware, hsts=not settings.debug)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.cors_origins_list != ["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # ============ EXCEPTION HANDLERS ============

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions with a sanitized JSON-RPC error."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content=jsonrpc_error(None, INTERNAL_ERROR, "Internal error"),
        )

    # ============ HEALTH ENDPOINTS ============

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check(
        settings: Annotated[Settings, Depends(get_settings_dep)],
    ) -> HealthResponse:
        """Health check endpoint (lightweight liveness check)."""
        return HealthResponse(
            status="healthy",
            service=SERVICE_NAME,
            version=__version__,
            port=settings.port,
            ws_port=settings.ws_port,
            timestamp=datetime.now(UTC),
        )

    @app.get("/ready", response_model=ReadyResponse, tags=["Health"])
    async def readiness_check(
        dispatcher: Annotated[McpDispatcher, Depends(get_dispatcher)],
    ) -> ReadyResponse:
        """Readiness check - reports whether a valid access token is cached."""
        return ReadyResponse(
            status="ready",
            tools=len(TOOL_NAMES),
            authentication=dispatcher.provider.is_authenticated,
        )

    # ============ MCP ENDPOINTS ============

    @app.get("/mcp", response_model=DiscoveryResponse, tags=["MCP"])
    async def mcp_discovery() -> DiscoveryResponse:
        """Discovery document for clients probing the MCP endpoint."""
        return DiscoveryResponse(
            name=SERVER_NAME,
            version=__version__,
            description="Infisical MCP Server for secrets management",
            endpoints={"mcp": "/mcp", "health": "/health", "ready": "/ready"},
            capabilities=SERVER_CAPABILITIES,
            tools=TOOL_NAMES,
        )

    async def handle_jsonrpc(
        request: Request,
        dispatcher: Annotated[McpDispatcher, Depends(get_dispatcher)],
    ) -> Response:
        """
        MCP JSON-RPC endpoint.

        Accepts a single envelope or a batch. Notifications get 204,
        unknown methods 404, internal failures 500.
        """
        raw = await request.body()
        if len(raw) > settings.max_json_payload_size:
            return JSONResponse(
                jsonrpc_error(
                    None,
                    INVALID_REQUEST,
                    f"JSON payload too large. Maximum size: {settings.max_json_payload_size} bytes",
                ),
                status_code=413,
            )
        logger.debug(f"JSON-RPC request from {get_client_ip(request)} ({len(raw)} bytes)")
        return await _dispatch_raw(raw, dispatcher)

    for path in ("/", "/rpc", "/mcp"):
        app.add_api_route(path, handle_jsonrpc, methods=["POST"], tags=["MCP"])

    return app


# ============ WEBSOCKET TRANSPORT ============


def _frame_text(message: dict) -> str:
    """Text of a WebSocket frame; binary frames are decoded as UTF-8."""
    text = message.get("text")
    if text is not None:
        return text
    return (message.get("bytes") or b"").decode("utf-8")


def create_ws_app(dispatcher: McpDispatcher) -> FastAPI:
    """Build the WebSocket application served on the second port.

    Each text or binary frame carries one JSON-RPC envelope (or batch) and is
    dispatched exactly as an HTTP POST body would be.
    """
    ws_app = FastAPI(title="Infisical MCP WebSocket Server", version=__version__)

    @ws_app.websocket("/")
    async def websocket_endpoint(websocket: WebSocket):
        await websocket.accept()
        peer = websocket.client.host if websocket.client else "unknown"
        logger.info(f"WebSocket client connected from {peer}")

        try:
            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    raise WebSocketDisconnect(message.get("code", 1000))

                try:
                    data = json.loads(_frame_text(message))
                except (json.JSONDecodeError, UnicodeDecodeError):
                    logger.warning(f"WebSocket message from {peer} is not valid JSON")
                    await websocket.send_json(jsonrpc_error(None, PARSE_ERROR, "Parse error"))
                    continue

                if isinstance(data, dict) and "jsonrpc" not in data:
                    logger.debug(f"Ignoring non JSON-RPC WebSocket message from {peer}")
                    continue

                response = await dispatcher.handle_message(data)
                if response is not None:
                    await websocket.send_json(response)
        except WebSocketDisconnect:
            logger.info(f"WebSocket client {peer} disconnected")

    return ws_app


# ============ MAIN ============


async def serve(settings: Settings) -> None:
    """Run the HTTP and WebSocket servers until interrupted."""
    import uvicorn

    dispatcher = build_dispatcher(settings)
    app = create_app(settings, dispatcher)
    ws_app = create_ws_app(dispatcher)

    log_level = settings.log_level.lower()
    http_server = uvicorn.Server(
        uvicorn.Config(app, host=settings.host, port=settings.port, log_level=log_level)
    )
    ws_server = uvicorn.Server(
        uvicorn.Config(ws_app, host=settings.host, port=settings.ws_port, log_level=log_level)
    )

    logger.info(f"MCP endpoint available at http://{settings.host}:{settings.port}")
    logger.info(f"WebSocket endpoint available at ws://{settings.host}:{settings.ws_port}")
    logger.info(f"Available tools: {', '.join(TOOL_NAMES)}")

    try:
        await asyncio.gather(http_server.serve(), ws_server.serve())
    finally:
        await dispatcher.client.aclose()
        logger.info("HTTP and WebSocket servers stopped")


def main():
    """Run the HTTP + WebSocket server."""
    try:
        settings = get_settings()
    except ValidationError as e:
        configure_logging()
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    configure_logging(settings.log_level)
    init_sentry(settings.sentry_dsn, settings.environment)
    asyncio.run(serve(settings))


if __name__ == "__main__":
    main()

"""JSON-RPC method dispatch shared by the stdio, HTTP and WebSocket transports.

The dispatcher holds no per-request state. The only mutable state it
reaches is the CredentialProvider's token cache.
"""

import asyncio
import logging
from typing import Any

from .. import __version__
from ..auth import CredentialProvider
from ..client import InfisicalClient
from ..errors import (
    AuthenticationError,
    RemoteOperationError,
    ToolValidationError,
    UnknownMethodError,
    UnknownToolError,
)
from ..handlers import TOOL_HANDLERS, HandlerContext, HandlerFunc
from ..models import ToolName
from .jsonrpc import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    InvalidEnvelope,
    JsonRpcRequest,
    jsonrpc_error,
    jsonrpc_response,
    parse_request,
)
from .results import error_result
from .tool_defs import list_tools
from .validation import resolve_tool, validate_arguments

logger = logging.getLogger(__name__)

SERVER_NAME = "Infisical MCP Server"

# Newest first; unknown client versions get the newest
SUPPORTED_PROTOCOL_VERSIONS = ("2025-06-18", "2025-03-26", "2024-11-05")

SERVER_CAPABILITIES = {"tools": {}, "logging": {}}

INTERNAL_ERROR_MESSAGE = "Internal error: An unexpected error occurred. Please try again."


class McpDispatcher:
    """Route JSON-RPC envelopes to MCP behaviours.

    Args:
        provider: Issues a valid credential before each remote call
        client: Infisical API client
        call_timeout: Deadline in seconds for each remote operation
        handlers: Tool handlers; must cover every ToolName
    """

    def __init__(
        self,
        provider: CredentialProvider,
        client: InfisicalClient,
        *,
        call_timeout: float = 30.0,
        handlers: dict[ToolName, HandlerFunc] | None = None,
        server_name: str = SERVER_NAME,
    ):
        handlers = TOOL_HANDLERS if handlers is None else handlers
        missing = [t.value for t in ToolName if t not in handlers]
        if missing:
            raise ValueError(f"No handler registered for tools: {', '.join(missing)}")

        self.provider = provider
        self.client = client
        self.server_name = server_name
        self._handlers = handlers
        self._call_timeout = call_timeout

    async def handle_message(self, body: Any) -> dict | list | None:
        """Handle a single envelope or a batch.

        Returns the response body, or None when nothing must be sent
        (notifications, or a batch made only of notifications).
        """
        if isinstance(body, list):
            if not body:
                return jsonrpc_error(None, INVALID_REQUEST, "Invalid Request: empty batch")
            responses = []
            for item in body:
                response = await self.handle_request(item)
                if response is not None:
                    responses.append(response)
            return responses or None
        return await self.handle_request(body)

    async def handle_request(self, body: Any) -> dict | None:
        """Handle one envelope. Failures become JSON-RPC errors, never exceptions."""
        try:
            request = parse_request(body)
        except InvalidEnvelope as e:
            return jsonrpc_error(e.id, INVALID_REQUEST, str(e))

        log_data: dict[str, Any] = {"method": request.method}
        if not request.is_notification:
            log_data["id"] = request.id
        if request.method == "tools/call":
            log_data["tool"] = request.params.get("name")
        logger.info(f"MCP request: {log_data}")

        try:
            result = await self._dispatch(request)
        except UnknownMethodError as e:
            code, message = METHOD_NOT_FOUND, str(e)
        except (UnknownToolError, ToolValidationError) as e:
            code, message = INVALID_PARAMS, str(e)
        except Exception as e:
            logger.error(f"Unhandled error in {request.method}: {e}", exc_info=True)
            code, message = INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE
        else:
            if request.is_notification:
                return None
            return jsonrpc_response(request.id, result)

        if request.is_notification:
            logger.warning(f"Notification {request.method} failed: {message}")
            return None
        return jsonrpc_error(request.id, code, message)

    async def _dispatch(self, request: JsonRpcRequest) -> Any:
        method = request.method

        if method == "initialize":
            return self.initialize_result(request.params)
        elif method.startswith("notifications/"):
            # notifications/initialized, notifications/cancelled, ...
            return {}
        elif method == "ping":
            return {}
        elif method == "tools/list":
            return {"tools": list_tools()}
        elif method == "tools/call":
            params = request.params
            return await self.call_tool(params.get("name"), params.get("arguments"))
        else:
            raise UnknownMethodError(method)

    def initialize_result(self, params: dict) -> dict:
        requested = params.get("protocolVersion")
        if requested in SUPPORTED_PROTOCOL_VERSIONS:
            version = requested
        else:
            version = SUPPORTED_PROTOCOL_VERSIONS[0]
        return {
            "protocolVersion": version,
            "capabilities": SERVER_CAPABILITIES,
            "serverInfo": {"name": self.server_name, "version": __version__},
        }

    async def call_tool(self, name: Any, arguments: Any) -> dict:
        """Validate, authenticate, call Infisical and translate the result.

        Raises:
            UnknownToolError: name is not registered
            ToolValidationError: arguments do not match the tool's schema

        Authentication and remote failures are returned as tool results
        with ``isError`` set.
        """
        tool = resolve_tool(name)
        params = validate_arguments(tool, arguments)
        handler = self._handlers[tool]

        try:
            credential = await self.provider.get_credential()
            ctx = HandlerContext(client=self.client, credential=credential)
            try:
                return await asyncio.wait_for(handler(params, ctx), timeout=self._call_timeout)
            except TimeoutError as e:
                raise RemoteOperationError(
                    f"{tool.value} did not complete within {self._call_timeout}s",
                    retryable=True,
                ) from e
        except AuthenticationError as e:
            logger.warning(f"{tool.value}: {e}")
            return error_result(str(e))
        except RemoteOperationError as e:
            logger.warning(f"{tool.value} failed: {e}")
            message = f"Infisical API error: {e}"
            if e.retryable:
                message += " (retryable)"
            return error_result(message)

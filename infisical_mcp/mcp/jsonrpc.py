"""JSON-RPC 2.0 helpers for MCP transport.

This module provides utility functions for parsing JSON-RPC 2.0
requests and creating responses and errors according to the specification.

See: https://www.jsonrpc.org/specification
"""

from dataclasses import dataclass, field
from typing import Any

# Standard JSON-RPC error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

# HTTP status used when a single error envelope is the whole response
_HTTP_STATUS = {
    PARSE_ERROR: 400,
    INVALID_REQUEST: 400,
    METHOD_NOT_FOUND: 404,
    INTERNAL_ERROR: 500,
}


class InvalidEnvelope(Exception):
    """Body is JSON but not a JSON-RPC request object."""

    def __init__(self, message: str, id: Any = None) -> None:
        self.id = id
        super().__init__(message)


@dataclass(frozen=True)
class JsonRpcRequest:
    """A parsed request or notification.

    Notifications carry no ``id`` key and never receive a response.
    """

    method: str
    id: Any = None
    params: dict[str, Any] = field(default_factory=dict)
    is_notification: bool = False


def parse_request(body: Any) -> JsonRpcRequest:
    """Parse one JSON-RPC envelope.

    Raises:
        InvalidEnvelope: body is not an object, or method is missing
    """
    if not isinstance(body, dict):
        raise InvalidEnvelope("Invalid Request: expected a JSON object")

    id = body.get("id")
    method = body.get("method")
    if not isinstance(method, str) or not method:
        raise InvalidEnvelope("Invalid Request: missing method", id=id)

    params = body.get("params")
    if params is None:
        params = {}
    elif not isinstance(params, dict):
        raise InvalidEnvelope("Invalid Request: params must be an object", id=id)

    return JsonRpcRequest(
        method=method,
        id=id,
        params=params,
        is_notification="id" not in body,
    )


def jsonrpc_response(id: Any, result: Any) -> dict:
    """Create a JSON-RPC 2.0 success response.

    Args:
        id: Request ID (must match the request)
        result: The result payload

    Returns:
        JSON-RPC 2.0 response dict
    """
    return {"jsonrpc": "2.0", "id": id, "result": result}


def jsonrpc_error(id: Any, code: int, message: str) -> dict:
    """Create a JSON-RPC 2.0 error response.

    Standard error codes:
        -32700: Parse error
        -32600: Invalid request
        -32601: Method not found
        -32602: Invalid params
        -32603: Internal error
        -32000 to -32099: Server errors (application-specific)

    Args:
        id: Request ID (can be None for parse errors)
        code: Error code (negative integer)
        message: Human-readable error message

    Returns:
        JSON-RPC 2.0 error response dict
    """
    return {"jsonrpc": "2.0", "id": id, "error": {"code": code, "message": message}}


def http_status_for(response: dict | list | None) -> int:
    """HTTP status for a response body produced by the dispatcher."""
    if response is None:
        return 204
    if isinstance(response, dict) and "error" in response:
        return _HTTP_STATUS.get(response["error"].get("code"), 200)
    return 200

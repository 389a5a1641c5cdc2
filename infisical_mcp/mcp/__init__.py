"""MCP (Model Context Protocol) module.

This module contains the transport-independent MCP components:
- Tool definitions for tools/list
- JSON-RPC 2.0 helpers
- Argument validation (import from .validation directly)
- Result translation
- Method dispatch (import from .dispatcher directly; it pulls in the handlers)
"""

from .jsonrpc import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    jsonrpc_error,
    jsonrpc_response,
)
from .tool_defs import TOOL_DEFINITIONS, TOOL_NAMES, list_tools

__all__ = [
    # Tool definitions
    "TOOL_DEFINITIONS",
    "TOOL_NAMES",
    "list_tools",
    # JSON-RPC helpers
    "jsonrpc_response",
    "jsonrpc_error",
    "PARSE_ERROR",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "INVALID_PARAMS",
    "INTERNAL_ERROR",
]

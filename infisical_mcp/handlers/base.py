"""Base infrastructure for tool handlers.

Each handler receives its validated params model and a HandlerContext,
performs one Infisical API operation and returns an MCP tool result.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Coroutine

if TYPE_CHECKING:
    from ..auth import Credential
    from ..client import InfisicalClient
    from ..models import ToolParams


@dataclass
class HandlerContext:
    """Context object passed to all handlers.

    The credential was obtained for this call only and must not be kept.
    """

    client: "InfisicalClient"
    credential: "Credential"


# Type alias for handler functions
HandlerFunc = Callable[
    [Any, HandlerContext],
    Coroutine[Any, Any, dict],
]

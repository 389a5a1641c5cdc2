"""Error types raised between the transports and the Infisical API."""

from dataclasses import dataclass


class InfisicalMCPError(Exception):
    """Base error for all server failures."""


@dataclass(frozen=True)
class FieldIssue:
    """One violated field in a tool call's arguments."""

    field_path: str
    reason: str

    def __str__(self) -> str:
        return f"{self.field_path}: {self.reason}"


class ToolValidationError(InfisicalMCPError):
    """Tool arguments are missing or have the wrong type."""

    def __init__(self, tool_name: str, issues: list[FieldIssue]) -> None:
        self.tool_name = tool_name
        self.issues = list(issues)
        super().__init__("Invalid arguments: " + ", ".join(str(i) for i in self.issues))

    @property
    def fields(self) -> list[str]:
        return [issue.field_path for issue in self.issues]


class UnknownToolError(InfisicalMCPError):
    """Requested tool is not in the registry."""

    def __init__(self, tool_name: str | None) -> None:
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")


class UnknownMethodError(InfisicalMCPError):
    """JSON-RPC method is not supported."""

    def __init__(self, method: str | None) -> None:
        self.method = method
        super().__init__(f"Method not found: {method}")


class AuthenticationError(InfisicalMCPError):
    """Universal auth credential exchange failed."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("Authentication failed" + (f": {detail}" if detail else ""))


class RemoteOperationError(InfisicalMCPError):
    """The Infisical API reported a failure or did not answer in time."""

    def __init__(
        self, detail: str, status_code: int | None = None, retryable: bool = False
    ) -> None:
        self.detail = detail
        self.status_code = status_code
        self.retryable = retryable
        super().__init__(detail)

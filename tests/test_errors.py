"""Tests for error messages."""

from infisical_mcp.errors import (
    AuthenticationError,
    FieldIssue,
    InfisicalMCPError,
    RemoteOperationError,
    ToolValidationError,
    UnknownMethodError,
    UnknownToolError,
)


class TestErrors:
    def test_validation_error_lists_every_field(self) -> None:
        error = ToolValidationError(
            "create-secret",
            [
                FieldIssue("projectId", "Field required"),
                FieldIssue("secretName", "Field required"),
            ],
        )
        assert str(error) == "Invalid arguments: projectId: Field required, secretName: Field required"
        assert error.fields == ["projectId", "secretName"]
        assert error.tool_name == "create-secret"

    def test_lookup_errors(self) -> None:
        assert str(UnknownToolError("nope")) == "Unknown tool: nope"
        assert str(UnknownMethodError("bogus")) == "Method not found: bogus"

    def test_authentication_error(self) -> None:
        assert str(AuthenticationError()) == "Authentication failed"
        assert str(AuthenticationError("401 bad secret")) == "Authentication failed: 401 bad secret"

    def test_remote_error_defaults(self) -> None:
        error = RemoteOperationError("boom")
        assert error.status_code is None
        assert error.retryable is False

    def test_common_base(self) -> None:
        for error in (
            UnknownToolError("x"),
            AuthenticationError(),
            RemoteOperationError("x"),
        ):
            assert isinstance(error, InfisicalMCPError)

"""Argument validation for tools/call.

Each tool's arguments are checked against its pydantic ``*Params`` model.
Validation is pure: it never touches the network or shared state.
"""

from typing import Any

from pydantic import ValidationError

from ..errors import FieldIssue, ToolValidationError, UnknownToolError
from ..models import (
    CreateEnvironmentParams,
    CreateFolderParams,
    CreateProjectParams,
    CreateSecretParams,
    DeleteSecretParams,
    GetSecretParams,
    InviteMembersParams,
    ListProjectsParams,
    ListSecretsParams,
    ToolName,
    ToolParams,
    UpdateSecretParams,
)

ROOT_FIELD = "arguments"

PARAMS_MODELS: dict[ToolName, type[ToolParams]] = {
    ToolName.CREATE_SECRET: CreateSecretParams,
    ToolName.DELETE_SECRET: DeleteSecretParams,
    ToolName.UPDATE_SECRET: UpdateSecretParams,
    ToolName.LIST_SECRETS: ListSecretsParams,
    ToolName.GET_SECRET: GetSecretParams,
    ToolName.CREATE_PROJECT: CreateProjectParams,
    ToolName.LIST_PROJECTS: ListProjectsParams,
    ToolName.CREATE_ENVIRONMENT: CreateEnvironmentParams,
    ToolName.CREATE_FOLDER: CreateFolderParams,
    ToolName.INVITE_MEMBERS_TO_PROJECT: InviteMembersParams,
}


def resolve_tool(tool_name: Any) -> ToolName:
    """Map a raw tool name to ``ToolName``.

    Raises:
        UnknownToolError: name is not a registered tool
    """
    try:
        return ToolName(tool_name)
    except ValueError:
        raise UnknownToolError(tool_name) from None


def _issues_from(error: ValidationError) -> list[FieldIssue]:
    issues = []
    for item in error.errors():
        path = ".".join(str(part) for part in item["loc"]) or ROOT_FIELD
        reason = item["msg"]
        if reason.startswith("Value error, "):
            reason = reason[len("Value error, ") :]
        issues.append(FieldIssue(field_path=path, reason=reason))
    return issues


def validate_arguments(tool_name: Any, raw_args: Any) -> ToolParams:
    """Validate a tool call's arguments and apply declared defaults.

    Args:
        tool_name: Name from ``params.name``
        raw_args: ``params.arguments`` (None is treated as an empty object)

    Returns:
        The tool's params model with defaults filled in

    Raises:
        UnknownToolError: tool is not registered
        ToolValidationError: one entry per missing or mistyped field
    """
    tool = resolve_tool(tool_name)
    model = PARAMS_MODELS[tool]

    if raw_args is None:
        raw_args = {}
    if not isinstance(raw_args, dict):
        raise ToolValidationError(
            tool.value, [FieldIssue(field_path=ROOT_FIELD, reason="must be an object")]
        )

    try:
        return model.model_validate(raw_args)
    except ValidationError as e:
        raise ToolValidationError(tool.value, _issues_from(e)) from e

"""Request models (Pydantic *Params classes) for the MCP tools.

Field names are snake_case in Python and camelCase on the wire, matching
the ``inputSchema`` published by tools/list.
"""

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    model_validator,
)
from pydantic.alias_generators import to_camel

from .enums import ProjectType

# ============ CORE REQUEST MODELS ============


class ToolParams(BaseModel):
    """Base for tool arguments: camelCase aliases, unknown keys ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


# ============ SECRET PARAMS ============


class CreateSecretParams(ToolParams):
    """Parameters for create-secret tool."""

    project_id: StrictStr = Field(..., description="Project to create the secret in")
    environment_slug: StrictStr = Field(..., description="Environment slug")
    secret_name: StrictStr = Field(..., description="Name of the secret")
    secret_value: StrictStr = Field(default="", description="Value of the secret")
    secret_path: StrictStr = Field(default="/", description="Folder path of the secret")
    secret_comment: StrictStr | None = Field(default=None, description="Optional comment")


class DeleteSecretParams(ToolParams):
    """Parameters for delete-secret tool."""

    project_id: StrictStr = Field(..., description="Project to delete the secret from")
    environment_slug: StrictStr = Field(..., description="Environment slug")
    secret_name: StrictStr = Field(..., description="Name of the secret")
    secret_path: StrictStr = Field(default="/", description="Folder path of the secret")


class UpdateSecretParams(ToolParams):
    """Parameters for update-secret tool."""

    project_id: StrictStr = Field(..., description="Project containing the secret")
    environment_slug: StrictStr = Field(..., description="Environment slug")
    secret_name: StrictStr = Field(..., description="Current name of the secret")
    new_secret_name: StrictStr | None = Field(default=None, description="New name")
    secret_value: StrictStr | None = Field(default=None, description="New value")
    secret_path: StrictStr = Field(default="/", description="Folder path of the secret")


class ListSecretsParams(ToolParams):
    """Parameters for list-secrets tool."""

    project_id: StrictStr = Field(..., description="Project to list secrets from")
    environment_slug: StrictStr = Field(..., description="Environment slug")
    secret_path: StrictStr = Field(default="/", description="Folder path to list")
    expand_secret_references: StrictBool = Field(
        default=True, description="Expand ${...} references"
    )
    include_imports: StrictBool = Field(default=True, description="Include secret imports")


class GetSecretParams(ToolParams):
    """Parameters for get-secret tool."""

    project_id: StrictStr = Field(..., description="Project to read the secret from")
    environment_slug: StrictStr = Field(..., description="Environment slug")
    secret_name: StrictStr = Field(..., description="Name of the secret")
    secret_path: StrictStr = Field(default="/", description="Folder path of the secret")
    expand_secret_references: StrictBool = Field(
        default=True, description="Expand ${...} references"
    )
    include_imports: StrictBool = Field(
        default=True, description="Fall back to secret imports when not found"
    )


# ============ PROJECT PARAMS ============


class CreateProjectParams(ToolParams):
    """Parameters for create-project tool."""

    project_name: StrictStr = Field(..., description="Name of the project")
    type: ProjectType = Field(default=ProjectType.SECRET_MANAGER, description="Project type")
    description: StrictStr | None = Field(default=None, description="Project description")
    slug: StrictStr | None = Field(default=None, description="Project slug")
    project_template: StrictStr | None = Field(default=None, description="Project template")
    kms_key_id: StrictStr | None = Field(default=None, description="KMS key ID")


class ListProjectsParams(ToolParams):
    """Parameters for list-projects tool (none)."""


class InviteMembersParams(ToolParams):
    """Parameters for invite-members-to-project tool."""

    project_id: StrictStr = Field(..., description="Project to invite members to")
    emails: list[StrictStr] | None = Field(default=None, description="Emails to invite")
    usernames: list[StrictStr] | None = Field(default=None, description="Usernames to invite")
    role_slugs: list[StrictStr] | None = Field(default=None, description="Roles to assign")

    @model_validator(mode="after")
    def _require_invitees(self) -> "InviteMembersParams":
        if not self.emails and not self.usernames:
            raise ValueError("either emails or usernames must be provided")
        return self


# ============ ENVIRONMENT & FOLDER PARAMS ============


class CreateEnvironmentParams(ToolParams):
    """Parameters for create-environment tool."""

    project_id: StrictStr = Field(..., description="Project to create the environment in")
    name: StrictStr = Field(..., description="Environment name")
    slug: StrictStr = Field(..., description="Environment slug")
    position: StrictInt | None = Field(default=None, description="Position in the list")


class CreateFolderParams(ToolParams):
    """Parameters for create-folder tool."""

    project_id: StrictStr = Field(..., description="Project to create the folder in")
    environment: StrictStr = Field(..., description="Environment slug")
    name: StrictStr = Field(..., description="Folder name")
    path: StrictStr = Field(default="/", description="Parent path")
    description: StrictStr | None = Field(default=None, description="Folder description")

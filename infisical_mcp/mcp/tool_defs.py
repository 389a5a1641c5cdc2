"""MCP Tool Definitions for Infisical.

This module contains all tool definitions returned by the tools/list method.
Each tool definition includes the JSON schema for its input parameters; the
matching pydantic models in ``models.requests`` enforce the same contract.

Tool Categories:
    - Secrets: create-secret, delete-secret, update-secret, list-secrets, get-secret
    - Projects: create-project, list-projects, invite-members-to-project
    - Environments & Folders: create-environment, create-folder
"""

import copy

from ..models.enums import ProjectType, ToolName

_SECRET_PATH_DEFAULT = "/"

TOOL_DEFINITIONS: list[dict] = [
    # ============ Secret Tools ============
    {
        "name": ToolName.CREATE_SECRET.value,
        "description": "Create a new secret in Infisical",
        "inputSchema": {
            "type": "object",
            "properties": {
                "projectId": {
                    "type": "string",
                    "description": "The ID of the project to create the secret in (required)",
                },
                "environmentSlug": {
                    "type": "string",
                    "description": "The slug of the environment to create the secret in (required)",
                },
                "secretName": {
                    "type": "string",
                    "description": "The name of the secret to create (required)",
                },
                "secretValue": {
                    "type": "string",
                    "description": "The value of the secret to create",
                    "default": "",
                },
                "secretPath": {
                    "type": "string",
                    "description": "The path of the secret to create (Defaults to /)",
                    "default": _SECRET_PATH_DEFAULT,
                },
                "secretComment": {
                    "type": "string",
                    "description": "An optional comment to attach to the secret",
                },
            },
            "required": ["projectId", "environmentSlug", "secretName"],
        },
    },
    {
        "name": ToolName.DELETE_SECRET.value,
        "description": "Delete a secret in Infisical",
        "inputSchema": {
            "type": "object",
            "properties": {
                "projectId": {
                    "type": "string",
                    "description": "The ID of the project to delete the secret from (required)",
                },
                "environmentSlug": {
                    "type": "string",
                    "description": "The slug of the environment to delete the secret from (required)",
                },
                "secretName": {
                    "type": "string",
                    "description": "The name of the secret to delete (required)",
                },
                "secretPath": {
                    "type": "string",
                    "description": "The path of the secret to delete (Defaults to /)",
                    "default": _SECRET_PATH_DEFAULT,
                },
            },
            "required": ["projectId", "environmentSlug", "secretName"],
        },
    },
    {
        "name": ToolName.UPDATE_SECRET.value,
        "description": "Update a secret in Infisical",
        "inputSchema": {
            "type": "object",
            "properties": {
                "projectId": {
                    "type": "string",
                    "description": "The ID of the project to update the secret in (required)",
                },
                "environmentSlug": {
                    "type": "string",
                    "description": "The slug of the environment to update the secret in (required)",
                },
                "secretName": {
                    "type": "string",
                    "description": "The current name of the secret to update (required)",
                },
                "newSecretName": {
                    "type": "string",
                    "description": "The new name of the secret to update (Optional)",
                },
                "secretValue": {
                    "type": "string",
                    "description": "The new value of the secret to update (Optional)",
                },
                "secretPath": {
                    "type": "string",
                    "description": "The path of the secret to update (Defaults to /)",
                    "default": _SECRET_PATH_DEFAULT,
                },
            },
            "required": ["projectId", "environmentSlug", "secretName"],
        },
    },
    {
        "name": ToolName.LIST_SECRETS.value,
        "description": "List all secrets in a given Infisical project and environment",
        "inputSchema": {
            "type": "object",
            "properties": {
                "projectId": {
                    "type": "string",
                    "description": "The ID of the project to list the secrets from (required)",
                },
                "environmentSlug": {
                    "type": "string",
                    "description": "The slug of the environment to list the secrets from (required)",
                },
                "secretPath": {
                    "type": "string",
                    "description": "The path of the secrets to list (Defaults to /)",
                    "default": _SECRET_PATH_DEFAULT,
                },
                "expandSecretReferences": {
                    "type": "boolean",
                    "description": "Whether to expand secret references (Defaults to true)",
                    "default": True,
                },
                "includeImports": {
                    "type": "boolean",
                    "description": "Whether to include secret imports (Defaults to true)",
                    "default": True,
                },
            },
            "required": ["projectId", "environmentSlug"],
        },
    },
    {
        "name": ToolName.GET_SECRET.value,
        "description": "Get a secret in Infisical",
        "inputSchema": {
            "type": "object",
            "properties": {
                "secretName": {
                    "type": "string",
                    "description": "The name of the secret to get (required)",
                },
                "projectId": {
                    "type": "string",
                    "description": "The ID of the project to get the secret from (required)",
                },
                "environmentSlug": {
                    "type": "string",
                    "description": "The slug of the environment to get the secret from (required)",
                },
                "secretPath": {
                    "type": "string",
                    "description": "The path of the secret to get (Defaults to /)",
                    "default": _SECRET_PATH_DEFAULT,
                },
                "expandSecretReferences": {
                    "type": "boolean",
                    "description": "Whether to expand secret references (Defaults to true)",
                    "default": True,
                },
                "includeImports": {
                    "type": "boolean",
                    "description": (
                        "Whether to include secret imports. If the secret isn't found, it will "
                        "try to find a secret in a secret import that matches the requested "
                        "secret name (Defaults to true)"
                    ),
                    "default": True,
                },
            },
            "required": ["projectId", "environmentSlug", "secretName"],
        },
    },
    # ============ Project Tools ============
    {
        "name": ToolName.CREATE_PROJECT.value,
        "description": "Create a new project in Infisical",
        "inputSchema": {
            "type": "object",
            "properties": {
                "projectName": {
                    "type": "string",
                    "description": "The name of the project to create (required)",
                },
                "type": {
                    "type": "string",
                    "enum": [t.value for t in ProjectType],
                    "description": (
                        "The type of project to create. If not specified by the user, "
                        "ask them to confirm the type they want to use (Defaults to secret-manager)"
                    ),
                    "default": ProjectType.SECRET_MANAGER.value,
                },
                "description": {
                    "type": "string",
                    "description": "The description of the project to create",
                },
                "slug": {
                    "type": "string",
                    "description": "The slug of the project to create",
                },
                "projectTemplate": {
                    "type": "string",
                    "description": "The template of the project to create",
                },
                "kmsKeyId": {
                    "type": "string",
                    "description": (
                        "The ID of the KMS key to use for the project. "
                        "Defaults to Infisical's default KMS"
                    ),
                },
            },
            "required": ["projectName"],
        },
    },
    {
        "name": ToolName.LIST_PROJECTS.value,
        "description": "List all projects accessible to the authenticated identity",
        "inputSchema": {
            "type": "object",
            "properties": {},
            "required": [],
        },
    },
    # ============ Environment & Folder Tools ============
    {
        "name": ToolName.CREATE_ENVIRONMENT.value,
        "description": "Create a new environment in Infisical",
        "inputSchema": {
            "type": "object",
            "properties": {
                "projectId": {
                    "type": "string",
                    "description": "The ID of the project to create the environment in (required)",
                },
                "name": {
                    "type": "string",
                    "description": "The name of the environment to create (required)",
                },
                "slug": {
                    "type": "string",
                    "description": "The slug of the environment to create (required)",
                },
                "position": {
                    "type": "integer",
                    "description": "The position of the environment to create",
                },
            },
            "required": ["projectId", "name", "slug"],
        },
    },
    {
        "name": ToolName.CREATE_FOLDER.value,
        "description": "Create a new folder in Infisical",
        "inputSchema": {
            "type": "object",
            "properties": {
                "projectId": {
                    "type": "string",
                    "description": "The project to create the folder in (required)",
                },
                "environment": {
                    "type": "string",
                    "description": "The environment to create the folder in (required)",
                },
                "name": {
                    "type": "string",
                    "description": "The name of the folder to create (required)",
                },
                "path": {
                    "type": "string",
                    "description": "The path to create the folder in (Defaults to /)",
                    "default": _SECRET_PATH_DEFAULT,
                },
                "description": {
                    "type": "string",
                    "description": "The description of the folder to create",
                },
            },
            "required": ["projectId", "environment", "name"],
        },
    },
    {
        "name": ToolName.INVITE_MEMBERS_TO_PROJECT.value,
        "description": "Invite members to a project in Infisical",
        "inputSchema": {
            "type": "object",
            "properties": {
                "projectId": {
                    "type": "string",
                    "description": "The ID of the project to invite members to (required)",
                },
                "emails": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": (
                        "The emails of the members to invite. "
                        "Either usernames or emails must be provided."
                    ),
                },
                "usernames": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": (
                        "The usernames of the members to invite. "
                        "Either usernames or emails must be provided."
                    ),
                },
                "roleSlugs": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": (
                        "The role slugs of the members to invite. If not provided, the default "
                        "role 'member' will be used. Ask the user to confirm the role they want "
                        "to use if not explicitly specified."
                    ),
                },
            },
            "required": ["projectId"],
        },
    },
]

TOOL_NAMES: list[str] = [tool["name"] for tool in TOOL_DEFINITIONS]


def list_tools() -> list[dict]:
    """Return a fresh copy of the tool catalog in declaration order."""
    return copy.deepcopy(TOOL_DEFINITIONS)

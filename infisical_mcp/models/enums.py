"""Enumeration types for the Infisical MCP server."""

from enum import StrEnum


class ToolName(StrEnum):
    """Available MCP tools, in tools/list order."""

    CREATE_SECRET = "create-secret"
    DELETE_SECRET = "delete-secret"
    UPDATE_SECRET = "update-secret"
    LIST_SECRETS = "list-secrets"
    GET_SECRET = "get-secret"
    CREATE_PROJECT = "create-project"
    LIST_PROJECTS = "list-projects"
    CREATE_ENVIRONMENT = "create-environment"
    CREATE_FOLDER = "create-folder"
    INVITE_MEMBERS_TO_PROJECT = "invite-members-to-project"


class ProjectType(StrEnum):
    """Infisical product a project belongs to."""

    SECRET_MANAGER = "secret-manager"
    CERT_MANAGER = "cert-manager"
    KMS = "kms"
    SSH = "ssh"

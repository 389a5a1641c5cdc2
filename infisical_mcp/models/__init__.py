"""Pydantic models for the Infisical MCP server.

    from infisical_mcp.models import ToolName, CreateSecretParams
"""

# ============ ENUMS ============
from .enums import ProjectType, ToolName

# ============ REQUEST MODELS ============
from .requests import (
    CreateEnvironmentParams,
    CreateFolderParams,
    CreateProjectParams,
    CreateSecretParams,
    DeleteSecretParams,
    GetSecretParams,
    InviteMembersParams,
    ListProjectsParams,
    ListSecretsParams,
    ToolParams,
    UpdateSecretParams,
)

# ============ RESPONSE MODELS ============
from .responses import DiscoveryResponse, HealthResponse, ReadyResponse

__all__ = [
    # Enums
    "ToolName",
    "ProjectType",
    # Requests
    "ToolParams",
    "CreateSecretParams",
    "DeleteSecretParams",
    "UpdateSecretParams",
    "ListSecretsParams",
    "GetSecretParams",
    "CreateProjectParams",
    "ListProjectsParams",
    "InviteMembersParams",
    "CreateEnvironmentParams",
    "CreateFolderParams",
    # Responses
    "HealthResponse",
    "ReadyResponse",
    "DiscoveryResponse",
]

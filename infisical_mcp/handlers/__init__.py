"""Tool handlers for the Infisical MCP server.

This package contains tool handlers organized by domain:
- secrets: create, delete, update, list and get secrets
- projects: create and list projects, invite members
- folders: create environments and folders

Each handler is a standalone async function that takes:
- params: the tool's validated pydantic params model
- ctx: HandlerContext - the API client and the credential for this call

And returns an MCP tool result dict.
"""

from ..models import ToolName
from .base import HandlerContext, HandlerFunc
from .folders import handle_create_environment, handle_create_folder
from .projects import handle_create_project, handle_invite_members, handle_list_projects
from .secrets import (
    handle_create_secret,
    handle_delete_secret,
    handle_get_secret,
    handle_list_secrets,
    handle_update_secret,
)

# One entry per ToolName; the dispatcher refuses to start without full coverage
TOOL_HANDLERS: dict[ToolName, HandlerFunc] = {
    ToolName.CREATE_SECRET: handle_create_secret,
    ToolName.DELETE_SECRET: handle_delete_secret,
    ToolName.UPDATE_SECRET: handle_update_secret,
    ToolName.LIST_SECRETS: handle_list_secrets,
    ToolName.GET_SECRET: handle_get_secret,
    ToolName.CREATE_PROJECT: handle_create_project,
    ToolName.LIST_PROJECTS: handle_list_projects,
    ToolName.CREATE_ENVIRONMENT: handle_create_environment,
    ToolName.CREATE_FOLDER: handle_create_folder,
    ToolName.INVITE_MEMBERS_TO_PROJECT: handle_invite_members,
}

__all__ = [
    # Base
    "HandlerContext",
    "HandlerFunc",
    "TOOL_HANDLERS",
    # Secret handlers
    "handle_create_secret",
    "handle_delete_secret",
    "handle_update_secret",
    "handle_list_secrets",
    "handle_get_secret",
    # Project handlers
    "handle_create_project",
    "handle_list_projects",
    "handle_invite_members",
    # Environment & folder handlers
    "handle_create_environment",
    "handle_create_folder",
]

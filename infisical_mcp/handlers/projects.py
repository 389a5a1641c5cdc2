"""Project handlers: create and list projects, invite members."""

import logging

from ..mcp.results import to_tool_result
from ..models import CreateProjectParams, InviteMembersParams, ListProjectsParams
from .base import HandlerContext

logger = logging.getLogger(__name__)


async def handle_create_project(params: CreateProjectParams, ctx: HandlerContext) -> dict:
    project = await ctx.client.create_project(
        ctx.credential,
        project_name=params.project_name,
        type=params.type.value,
        description=params.description,
        slug=params.slug,
        template=params.project_template,
        kms_key_id=params.kms_key_id,
    )
    logger.info(f"Created {params.type.value} project '{params.project_name}'")
    return to_tool_result("Project created successfully: ", project)


async def handle_list_projects(params: ListProjectsParams, ctx: HandlerContext) -> dict:
    projects = await ctx.client.list_projects(ctx.credential)
    return to_tool_result("Projects: ", projects)


async def handle_invite_members(params: InviteMembersParams, ctx: HandlerContext) -> dict:
    """Invite by email and/or username; roles default to 'member' server-side."""
    memberships = await ctx.client.invite_members(
        ctx.credential,
        project_id=params.project_id,
        emails=params.emails,
        usernames=params.usernames,
        role_slugs=params.role_slugs,
    )
    invited = len(params.emails or []) + len(params.usernames or [])
    logger.info(f"Invited {invited} member(s) to project {params.project_id}")
    return to_tool_result("Members successfully invited to project: ", memberships)

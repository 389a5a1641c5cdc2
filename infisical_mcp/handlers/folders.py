"""Environment and folder handlers."""

from ..mcp.results import to_tool_result
from ..models import CreateEnvironmentParams, CreateFolderParams
from .base import HandlerContext


async def handle_create_environment(
    params: CreateEnvironmentParams, ctx: HandlerContext
) -> dict:
    environment = await ctx.client.create_environment(
        ctx.credential,
        project_id=params.project_id,
        name=params.name,
        slug=params.slug,
        position=params.position,
    )
    return to_tool_result("Environment created successfully: ", environment)


async def handle_create_folder(params: CreateFolderParams, ctx: HandlerContext) -> dict:
    folder = await ctx.client.create_folder(
        ctx.credential,
        project_id=params.project_id,
        environment=params.environment,
        name=params.name,
        path=params.path,
        description=params.description,
    )
    return to_tool_result("Folder created successfully: ", folder)

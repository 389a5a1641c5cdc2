"""Secret handlers: create, read, update, delete and list secrets."""

import json
import logging

from ..mcp.results import project_secrets, text_result, to_tool_result
from ..models import (
    CreateSecretParams,
    DeleteSecretParams,
    GetSecretParams,
    ListSecretsParams,
    UpdateSecretParams,
)
from .base import HandlerContext

logger = logging.getLogger(__name__)


async def handle_create_secret(params: CreateSecretParams, ctx: HandlerContext) -> dict:
    """Create a secret; value defaults to an empty string."""
    secret = await ctx.client.create_secret(
        ctx.credential,
        secret_name=params.secret_name,
        project_id=params.project_id,
        environment=params.environment_slug,
        secret_path=params.secret_path,
        secret_value=params.secret_value,
        secret_comment=params.secret_comment,
    )
    logger.info(
        f"Created secret in {params.project_id}/{params.environment_slug} at {params.secret_path}"
    )
    return to_tool_result("Secret created successfully: ", secret)


async def handle_delete_secret(params: DeleteSecretParams, ctx: HandlerContext) -> dict:
    secret = await ctx.client.delete_secret(
        ctx.credential,
        secret_name=params.secret_name,
        project_id=params.project_id,
        environment=params.environment_slug,
        secret_path=params.secret_path,
    )
    key = params.secret_name
    if isinstance(secret, dict):
        key = secret.get("secretKey", key)
    return text_result(f"Secret deleted successfully: {key}")


async def handle_update_secret(params: UpdateSecretParams, ctx: HandlerContext) -> dict:
    secret = await ctx.client.update_secret(
        ctx.credential,
        secret_name=params.secret_name,
        project_id=params.project_id,
        environment=params.environment_slug,
        secret_path=params.secret_path,
        secret_value=params.secret_value,
        new_secret_name=params.new_secret_name,
    )
    return to_tool_result("Secret updated successfully. Updated secret: ", secret)


async def handle_list_secrets(params: ListSecretsParams, ctx: HandlerContext) -> dict:
    """List secrets as key/value pairs only.

    An environment with no secrets yields ``{"secrets": []}``, not an error.
    """
    response = await ctx.client.list_secrets(
        ctx.credential,
        project_id=params.project_id,
        environment=params.environment_slug,
        secret_path=params.secret_path,
        expand_secret_references=params.expand_secret_references,
        include_imports=params.include_imports,
    )
    return text_result(json.dumps(project_secrets(response)))


async def handle_get_secret(params: GetSecretParams, ctx: HandlerContext) -> dict:
    secret = await ctx.client.get_secret(
        ctx.credential,
        secret_name=params.secret_name,
        project_id=params.project_id,
        environment=params.environment_slug,
        secret_path=params.secret_path,
        expand_secret_references=params.expand_secret_references,
        include_imports=params.include_imports,
    )
    return to_tool_result("Secret retrieved successfully: ", secret)

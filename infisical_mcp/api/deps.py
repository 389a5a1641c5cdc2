"""Shared wiring and FastAPI dependencies.

This module contains:
- Construction of the credential provider, API client and dispatcher from settings
- Dependency functions that read them back from application state
- Client IP extraction for request logging
"""

import logging

from fastapi import Request as FastAPIRequest

from ..auth import CredentialProvider
from ..client import InfisicalClient
from ..config import Settings
from ..mcp.dispatcher import McpDispatcher

logger = logging.getLogger(__name__)


# ============ WIRING ============


def build_dispatcher(settings: Settings) -> McpDispatcher:
    """Create the dispatcher and its collaborators from settings."""
    provider = CredentialProvider(
        settings.client_id,
        settings.client_secret,
        settings.host_url,
        refresh_margin_seconds=settings.token_refresh_margin_seconds,
        timeout=settings.request_timeout_seconds,
        policy=settings.token_policy,
    )
    client = InfisicalClient(
        settings.host_url,
        timeout=settings.request_timeout_seconds,
        on_unauthorized=provider.invalidate,
    )
    logger.debug(
        f"Dispatcher configured for {settings.host_url} (token policy: {settings.token_policy})"
    )
    return McpDispatcher(provider, client, call_timeout=settings.request_timeout_seconds)


# ============ DEPENDENCIES ============


def get_dispatcher(request: FastAPIRequest) -> McpDispatcher:
    """Dispatcher stored on application state at startup."""
    return request.app.state.dispatcher


def get_settings_dep(request: FastAPIRequest) -> Settings:
    return request.app.state.settings


def get_client_ip(request: FastAPIRequest) -> str | None:
    """Extract client IP from X-Forwarded-For header or direct connection."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client:
        return request.client.host
    return None

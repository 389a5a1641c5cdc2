"""Response models for the HTTP health and discovery endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Liveness check payload."""

    model_config = ConfigDict(populate_by_name=True)

    status: str = Field(..., description="Service status")
    service: str = Field(..., description="Service name")
    version: str = Field(..., description="Server version")
    port: int = Field(..., description="HTTP port")
    ws_port: int = Field(..., alias="wsPort", description="WebSocket port")
    timestamp: datetime = Field(..., description="Server time (UTC)")


class ReadyResponse(BaseModel):
    """Readiness check payload."""

    status: str = Field(..., description="ready")
    tools: int = Field(..., ge=0, description="Number of registered tools")
    authentication: bool = Field(..., description="A valid access token is cached")


class DiscoveryResponse(BaseModel):
    """GET /mcp discovery document."""

    name: str
    version: str
    description: str
    protocol: str = "MCP JSON-RPC over HTTP"
    endpoints: dict[str, str] = Field(default_factory=dict)
    capabilities: dict[str, dict] = Field(default_factory=dict)
    tools: list[str] = Field(default_factory=list)

"""Translate Infisical API responses into MCP tool results."""

import json
from typing import Any


def text_result(text: str) -> dict:
    """Wrap text as a single-block MCP tool result."""
    return {"content": [{"type": "text", "text": text}]}


def error_result(text: str) -> dict:
    """Tool-level failure: the call was understood but could not complete."""
    return {"content": [{"type": "text", "text": text}], "isError": True}


def serialize(payload: Any) -> str:
    return json.dumps(payload, indent=3, default=str)


def to_tool_result(prefix: str, payload: Any) -> dict:
    """Serialize ``payload`` after a human-readable prefix."""
    return text_result(f"{prefix}{serialize(payload)}")


def _key_value(secret: dict) -> dict:
    return {"secretKey": secret.get("secretKey"), "secretValue": secret.get("secretValue")}


def project_secrets(response: dict) -> dict:
    """Reduce a list-secrets response to key/value pairs.

    Secret metadata (ids, versions, tags, comments) is dropped; secrets
    reached through imports are reduced the same way.
    """
    projected: dict[str, Any] = {
        "secrets": [_key_value(s) for s in response.get("secrets") or []],
    }
    imports = response.get("imports")
    if imports:
        projected["imports"] = [
            {**imp, "secrets": [_key_value(s) for s in imp.get("secrets") or []]}
            for imp in imports
        ]
    return projected

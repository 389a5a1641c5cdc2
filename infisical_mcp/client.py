"""Async client for the Infisical REST API.

Only the operations exposed as MCP tools are implemented. Every call
takes the ``Credential`` to use explicitly and runs under a deadline.
"""

import logging
from collections.abc import Callable
from typing import Any
from urllib.parse import quote

import httpx

from .auth import Credential, api_error_message
from .errors import RemoteOperationError

logger = logging.getLogger(__name__)

SECRET_TYPE_SHARED = "shared"


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _compact(payload: dict[str, Any]) -> dict[str, Any]:
    """Drop unset optional fields before sending."""
    return {k: v for k, v in payload.items() if v is not None}


class InfisicalClient:
    """Thin wrapper over the Infisical secrets, projects, environments and folders APIs."""

    def __init__(
        self,
        host_url: str,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
        on_unauthorized: Callable[[], None] | None = None,
    ):
        self._host_url = host_url.rstrip("/")
        self._timeout = timeout
        self._on_unauthorized = on_unauthorized
        self._http = httpx.AsyncClient(
            base_url=self._host_url, timeout=timeout, transport=transport
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        credential: Credential,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        headers = {"Authorization": f"Bearer {credential.access_token}"}
        try:
            response = await self._http.request(
                method, path, params=params, json=json, headers=headers
            )
        except httpx.TimeoutException as e:
            logger.warning(f"{method} {path} timed out after {self._timeout}s")
            raise RemoteOperationError(
                f"Request to Infisical timed out after {self._timeout}s", retryable=True
            ) from e
        except httpx.RequestError as e:
            logger.warning(f"{method} {path} request error: {e}")
            raise RemoteOperationError(f"Could not reach Infisical: {e}", retryable=True) from e

        if response.status_code == 401 and self._on_unauthorized is not None:
            self._on_unauthorized()

        if response.status_code < 200 or response.status_code >= 300:
            message = api_error_message(response)
            logger.info(f"{method} {path} failed with {response.status_code}: {message}")
            raise RemoteOperationError(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise RemoteOperationError(
                f"Infisical returned a non-JSON response for {method} {path}",
                status_code=response.status_code,
            ) from e

    # ============ SECRETS ============

    async def list_secrets(
        self,
        credential: Credential,
        *,
        project_id: str,
        environment: str,
        secret_path: str = "/",
        expand_secret_references: bool = True,
        include_imports: bool = True,
    ) -> dict[str, Any]:
        """List secrets in an environment. Returns ``{"secrets": [...], "imports": [...]}``."""
        return await self._request(
            "GET",
            "/api/v3/secrets/raw",
            credential,
            params={
                "workspaceId": project_id,
                "environment": environment,
                "secretPath": secret_path,
                "expandSecretReferences": _flag(expand_secret_references),
                "include_imports": _flag(include_imports),
            },
        )

    async def get_secret(
        self,
        credential: Credential,
        *,
        secret_name: str,
        project_id: str,
        environment: str,
        secret_path: str = "/",
        expand_secret_references: bool = True,
        include_imports: bool = True,
    ) -> dict[str, Any]:
        body = await self._request(
            "GET",
            f"/api/v3/secrets/raw/{quote(secret_name, safe='')}",
            credential,
            params={
                "workspaceId": project_id,
                "environment": environment,
                "secretPath": secret_path,
                "expandSecretReferences": _flag(expand_secret_references),
                "include_imports": _flag(include_imports),
                "type": SECRET_TYPE_SHARED,
            },
        )
        return body.get("secret", body)

    async def create_secret(
        self,
        credential: Credential,
        *,
        secret_name: str,
        project_id: str,
        environment: str,
        secret_path: str = "/",
        secret_value: str = "",
        secret_comment: str | None = None,
    ) -> dict[str, Any]:
        body = await self._request(
            "POST",
            f"/api/v3/secrets/raw/{quote(secret_name, safe='')}",
            credential,
            json=_compact(
                {
                    "workspaceId": project_id,
                    "environment": environment,
                    "secretPath": secret_path,
                    "secretValue": secret_value,
                    "secretComment": secret_comment,
                    "type": SECRET_TYPE_SHARED,
                }
            ),
        )
        return body.get("secret", body)

    async def update_secret(
        self,
        credential: Credential,
        *,
        secret_name: str,
        project_id: str,
        environment: str,
        secret_path: str = "/",
        secret_value: str | None = None,
        new_secret_name: str | None = None,
    ) -> dict[str, Any]:
        body = await self._request(
            "PATCH",
            f"/api/v3/secrets/raw/{quote(secret_name, safe='')}",
            credential,
            json=_compact(
                {
                    "workspaceId": project_id,
                    "environment": environment,
                    "secretPath": secret_path,
                    "secretValue": secret_value,
                    "newSecretName": new_secret_name,
                    "type": SECRET_TYPE_SHARED,
                }
            ),
        )
        return body.get("secret", body)

    async def delete_secret(
        self,
        credential: Credential,
        *,
        secret_name: str,
        project_id: str,
        environment: str,
        secret_path: str = "/",
    ) -> dict[str, Any]:
        body = await self._request(
            "DELETE",
            f"/api/v3/secrets/raw/{quote(secret_name, safe='')}",
            credential,
            json={
                "workspaceId": project_id,
                "environment": environment,
                "secretPath": secret_path,
                "type": SECRET_TYPE_SHARED,
            },
        )
        return body.get("secret", body)

    # ============ PROJECTS ============

    async def create_project(
        self,
        credential: Credential,
        *,
        project_name: str,
        type: str,
        description: str | None = None,
        slug: str | None = None,
        template: str | None = None,
        kms_key_id: str | None = None,
    ) -> dict[str, Any]:
        body = await self._request(
            "POST",
            "/api/v2/workspace",
            credential,
            json=_compact(
                {
                    "projectName": project_name,
                    "projectDescription": description,
                    "slug": slug,
                    "template": template,
                    "kmsKeyId": kms_key_id,
                    "type": type,
                }
            ),
        )
        return body.get("project", body)

    async def list_projects(self, credential: Credential) -> list[dict[str, Any]]:
        body = await self._request("GET", "/api/v1/workspace", credential)
        return body.get("workspaces", [])

    async def invite_members(
        self,
        credential: Credential,
        *,
        project_id: str,
        emails: list[str] | None = None,
        usernames: list[str] | None = None,
        role_slugs: list[str] | None = None,
    ) -> list[dict[str, Any]]:
        body = await self._request(
            "POST",
            f"/api/v2/workspace/{quote(project_id, safe='')}/memberships",
            credential,
            json=_compact({"emails": emails, "usernames": usernames, "roleSlugs": role_slugs}),
        )
        return body.get("memberships", body)

    # ============ ENVIRONMENTS & FOLDERS ============

    async def create_environment(
        self,
        credential: Credential,
        *,
        project_id: str,
        name: str,
        slug: str,
        position: int | None = None,
    ) -> dict[str, Any]:
        body = await self._request(
            "POST",
            f"/api/v1/workspace/{quote(project_id, safe='')}/environments",
            credential,
            json=_compact({"name": name, "slug": slug, "position": position}),
        )
        return body.get("environment", body)

    async def create_folder(
        self,
        credential: Credential,
        *,
        project_id: str,
        environment: str,
        name: str,
        path: str = "/",
        description: str | None = None,
    ) -> dict[str, Any]:
        body = await self._request(
            "POST",
            "/api/v1/folders",
            credential,
            json=_compact(
                {
                    "workspaceId": project_id,
                    "environment": environment,
                    "name": name,
                    "path": path,
                    "description": description,
                }
            ),
        )
        return body.get("folder", body)

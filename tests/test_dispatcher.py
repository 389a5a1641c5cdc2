"""Tests for JSON-RPC dispatch and tool calls end to end against a fake API."""

import asyncio
import json

import pytest

from infisical_mcp.auth import LOGIN_PATH
from infisical_mcp.handlers import TOOL_HANDLERS
from infisical_mcp.mcp import INTERNAL_ERROR, INVALID_PARAMS, INVALID_REQUEST, METHOD_NOT_FOUND
from infisical_mcp.mcp.dispatcher import INTERNAL_ERROR_MESSAGE, SERVER_NAME, McpDispatcher
from infisical_mcp.models import ToolName

SECRETS_PATH = "/api/v3/secrets/raw"


def call(tool: str, arguments: dict | None = None, id: int = 1) -> dict:
    params = {"name": tool}
    if arguments is not None:
        params["arguments"] = arguments
    return {"jsonrpc": "2.0", "id": id, "method": "tools/call", "params": params}


def text_of(response: dict) -> str:
    return response["result"]["content"][0]["text"]


class TestProtocol:
    async def test_initialize_echoes_supported_version(self, dispatcher) -> None:
        response = await dispatcher.handle_message(
            {
                "jsonrpc": "2.0",
                "id": 1,
                "method": "initialize",
                "params": {"protocolVersion": "2024-11-05", "capabilities": {}},
            }
        )

        assert response["id"] == 1
        result = response["result"]
        assert result["protocolVersion"] == "2024-11-05"
        assert result["serverInfo"]["name"] == SERVER_NAME
        assert "tools" in result["capabilities"]

    async def test_initialize_unknown_version_gets_newest(self, dispatcher) -> None:
        response = await dispatcher.handle_message(
            {"jsonrpc": "2.0", "id": 2, "method": "initialize", "params": {"protocolVersion": "1"}}
        )
        assert response["result"]["protocolVersion"] == "2025-06-18"

    async def test_notification_has_no_response(self, dispatcher) -> None:
        response = await dispatcher.handle_message(
            {"jsonrpc": "2.0", "method": "notifications/initialized"}
        )
        assert response is None

    async def test_failing_notification_has_no_response(self, dispatcher) -> None:
        assert await dispatcher.handle_message({"jsonrpc": "2.0", "method": "bogus"}) is None

    async def test_unknown_method(self, dispatcher) -> None:
        response = await dispatcher.handle_message({"jsonrpc": "2.0", "id": 5, "method": "bogus"})

        assert response["id"] == 5
        assert response["error"]["code"] == METHOD_NOT_FOUND
        assert response["error"]["message"] == "Method not found: bogus"

    async def test_ping(self, dispatcher) -> None:
        response = await dispatcher.handle_message({"jsonrpc": "2.0", "id": "a", "method": "ping"})
        assert response == {"jsonrpc": "2.0", "id": "a", "result": {}}

    async def test_missing_method(self, dispatcher) -> None:
        response = await dispatcher.handle_message({"jsonrpc": "2.0", "id": 3})

        assert response["id"] == 3
        assert response["error"]["code"] == INVALID_REQUEST

    async def test_tools_list(self, dispatcher, fake_api) -> None:
        response = await dispatcher.handle_message(
            {"jsonrpc": "2.0", "id": 1, "method": "tools/list"}
        )

        tools = response["result"]["tools"]
        assert len(tools) == 10
        assert tools[0]["name"] == "create-secret"
        assert fake_api.requests == []


class TestBatches:
    async def test_batch(self, dispatcher) -> None:
        responses = await dispatcher.handle_message(
            [
                {"jsonrpc": "2.0", "id": 1, "method": "ping"},
                {"jsonrpc": "2.0", "method": "notifications/initialized"},
                {"jsonrpc": "2.0", "id": 2, "method": "bogus"},
            ]
        )

        assert [r["id"] for r in responses] == [1, 2]
        assert responses[1]["error"]["code"] == METHOD_NOT_FOUND

    async def test_empty_batch(self, dispatcher) -> None:
        response = await dispatcher.handle_message([])
        assert response["error"]["code"] == INVALID_REQUEST

    async def test_notification_only_batch(self, dispatcher) -> None:
        response = await dispatcher.handle_message(
            [{"jsonrpc": "2.0", "method": "notifications/initialized"}]
        )
        assert response is None


class TestToolCalls:
    async def test_list_secrets(self, dispatcher, fake_api) -> None:
        fake_api.route(
            "GET",
            SECRETS_PATH,
            (200, {"secrets": [{"id": "1", "secretKey": "A", "secretValue": "x"}], "imports": []}),
        )

        response = await dispatcher.handle_message(
            call("list-secrets", {"projectId": "p1", "environmentSlug": "dev"})
        )

        assert "isError" not in response["result"]
        assert json.loads(text_of(response)) == {"secrets": [{"secretKey": "A", "secretValue": "x"}]}
        request = fake_api.calls_to(SECRETS_PATH)[0]
        assert request.headers["Authorization"] == "Bearer tok-1"

    async def test_list_secrets_empty_environment(self, dispatcher, fake_api) -> None:
        fake_api.route("GET", SECRETS_PATH, (200, {"secrets": [], "imports": []}))

        response = await dispatcher.handle_message(
            call("list-secrets", {"projectId": "p1", "environmentSlug": "dev"})
        )

        assert json.loads(text_of(response)) == {"secrets": []}

    async def test_create_secret_applies_defaults(self, dispatcher, fake_api) -> None:
        fake_api.route(
            "POST", f"{SECRETS_PATH}/API_KEY", (200, {"secret": {"secretKey": "API_KEY"}})
        )

        response = await dispatcher.handle_message(
            call(
                "create-secret",
                {"projectId": "p1", "environmentSlug": "dev", "secretName": "API_KEY"},
            )
        )

        assert text_of(response).startswith("Secret created successfully: ")
        body = fake_api.last_json(f"{SECRETS_PATH}/API_KEY")
        assert body["secretPath"] == "/"
        assert body["secretValue"] == ""

    async def test_delete_secret(self, dispatcher, fake_api) -> None:
        fake_api.route("DELETE", f"{SECRETS_PATH}/OLD", (200, {"secret": {"secretKey": "OLD"}}))

        response = await dispatcher.handle_message(
            call("delete-secret", {"projectId": "p1", "environmentSlug": "dev", "secretName": "OLD"})
        )

        assert text_of(response) == "Secret deleted successfully: OLD"

    async def test_create_project(self, dispatcher, fake_api) -> None:
        fake_api.route("POST", "/api/v2/workspace", (200, {"project": {"id": "p9"}}))

        response = await dispatcher.handle_message(
            call("create-project", {"projectName": "Certs", "type": "cert-manager"})
        )

        assert text_of(response).startswith("Project created successfully: ")
        assert fake_api.last_json("/api/v2/workspace")["type"] == "cert-manager"

    async def test_invite_members(self, dispatcher, fake_api) -> None:
        path = "/api/v2/workspace/p1/memberships"
        fake_api.route("POST", path, (200, {"memberships": [{"id": "m1"}]}))

        response = await dispatcher.handle_message(
            call("invite-members-to-project", {"projectId": "p1", "usernames": ["ada"]})
        )

        assert text_of(response).startswith("Members successfully invited to project: ")
        assert fake_api.last_json(path) == {"usernames": ["ada"]}

    async def test_create_folder(self, dispatcher, fake_api) -> None:
        fake_api.route("POST", "/api/v1/folders", (200, {"folder": {"id": "f1"}}))

        response = await dispatcher.handle_message(
            call("create-folder", {"projectId": "p1", "environment": "dev", "name": "app"})
        )

        assert text_of(response).startswith("Folder created successfully: ")

    async def test_validation_error(self, dispatcher, fake_api) -> None:
        response = await dispatcher.handle_message(call("create-secret", {"projectId": "p1"}))

        assert response["error"]["code"] == INVALID_PARAMS
        assert "secretName" in response["error"]["message"]
        assert fake_api.requests == []

    async def test_unknown_tool(self, dispatcher) -> None:
        response = await dispatcher.handle_message(call("nope", {}))

        assert response["error"]["code"] == INVALID_PARAMS
        assert response["error"]["message"] == "Unknown tool: nope"

    async def test_authentication_failure_is_tool_error(self, dispatcher, fake_api) -> None:
        fake_api.route("POST", LOGIN_PATH, (401, {"message": "Invalid credentials"}))

        response = await dispatcher.handle_message(call("list-projects"))

        assert response["result"]["isError"] is True
        assert text_of(response).startswith("Authentication failed")
        assert fake_api.calls_to("/api/v1/workspace") == []

    async def test_remote_failure_is_tool_error(self, dispatcher, fake_api) -> None:
        fake_api.route("GET", "/api/v1/workspace", (500, {"message": "database unavailable"}))

        response = await dispatcher.handle_message(call("list-projects"))

        assert response["result"]["isError"] is True
        assert text_of(response) == "Infisical API error: database unavailable"

    async def test_unauthorized_call_reauthenticates_next_time(self, dispatcher, fake_api) -> None:
        fake_api.route("GET", "/api/v1/workspace", (401, {"message": "Token revoked"}))
        await dispatcher.handle_message(call("list-projects"))

        fake_api.route("GET", "/api/v1/workspace", (200, {"workspaces": []}))
        response = await dispatcher.handle_message(call("list-projects", id=2))

        assert text_of(response) == "Projects: []"
        assert fake_api.logins == 2

    async def test_token_reused_across_calls(self, dispatcher, fake_api) -> None:
        fake_api.route("GET", "/api/v1/workspace", (200, {"workspaces": []}))

        await asyncio.gather(
            *(dispatcher.handle_message(call("list-projects", id=i)) for i in range(5))
        )

        assert fake_api.logins == 1
        assert len(fake_api.calls_to("/api/v1/workspace")) == 5


    async def test_concurrent_calls_to_different_tools(self, dispatcher, fake_api) -> None:
        fake_api.route(
            "GET",
            SECRETS_PATH,
            (200, {"secrets": [{"secretKey": "A", "secretValue": "x"}], "imports": []}),
        )
        fake_api.route("POST", "/api/v1/folders", (200, {"folder": {"name": "app"}}))

        secrets, folder = await asyncio.gather(
            dispatcher.handle_message(
                call("list-secrets", {"projectId": "p1", "environmentSlug": "dev"}, id=11)
            ),
            dispatcher.handle_message(
                call(
                    "create-folder",
                    {"projectId": "p2", "environment": "prod", "name": "app"},
                    id=12,
                )
            ),
        )

        assert secrets["id"] == 11
        assert json.loads(text_of(secrets)) == {"secrets": [{"secretKey": "A", "secretValue": "x"}]}
        assert folder["id"] == 12
        assert text_of(folder).startswith("Folder created successfully: ")

        list_request = fake_api.calls_to(SECRETS_PATH)[0]
        assert list_request.method == "GET"
        assert list_request.url.params["workspaceId"] == "p1"
        assert fake_api.last_json("/api/v1/folders") == {
            "workspaceId": "p2",
            "environment": "prod",
            "name": "app",
            "path": "/",
        }
        assert fake_api.logins == 1

class TestHandlerFailures:
    async def test_deadline_exceeded(self, provider, client) -> None:
        async def stall(params, ctx):
            await asyncio.sleep(1)

        handlers = {**TOOL_HANDLERS, ToolName.LIST_PROJECTS: stall}
        dispatcher = McpDispatcher(provider, client, call_timeout=0.01, handlers=handlers)

        response = await dispatcher.handle_message(call("list-projects"))

        assert response["result"]["isError"] is True
        assert text_of(response).endswith("(retryable)")

    async def test_unexpected_error_is_sanitized(self, provider, client) -> None:
        async def explode(params, ctx):
            raise RuntimeError("secret-token-in-message")

        handlers = {**TOOL_HANDLERS, ToolName.LIST_PROJECTS: explode}
        dispatcher = McpDispatcher(provider, client, handlers=handlers)

        response = await dispatcher.handle_message(call("list-projects", id=7))

        assert response["id"] == 7
        assert response["error"] == {"code": INTERNAL_ERROR, "message": INTERNAL_ERROR_MESSAGE}

    def test_missing_handler_rejected(self, provider, client) -> None:
        handlers = dict(TOOL_HANDLERS)
        del handlers[ToolName.CREATE_FOLDER]

        with pytest.raises(ValueError, match="create-folder"):
            McpDispatcher(provider, client, handlers=handlers)

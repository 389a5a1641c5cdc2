"""Security headers middleware.

Tool results can contain secret values, so every HTTP response is marked
non-cacheable in addition to the usual hardening headers.
"""

from uuid import uuid4

REQUEST_ID_HEADER = b"x-request-id"


def _incoming_request_id(scope) -> str | None:
    for name, value in scope.get("headers", []):
        if name == REQUEST_ID_HEADER and value:
            return value.decode("latin-1")[:128]
    return None


class SecurityHeadersMiddleware:
    """
    Add security headers to all HTTP responses (pure ASGI).

    WebSocket and lifespan scopes pass through untouched.

    Headers added:
        - X-Request-Id: echoed from the request, or generated
        - Cache-Control: no-store
        - X-Content-Type-Options: nosniff
        - X-Frame-Options: DENY
        - Strict-Transport-Security: when ``hsts`` is enabled
    """

    def __init__(self, app, hsts: bool = False):
        self.app = app
        self.hsts = hsts

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = _incoming_request_id(scope) or str(uuid4())
        scope.setdefault("state", {})["request_id"] = request_id

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                headers += [
                    (REQUEST_ID_HEADER, request_id.encode("latin-1")),
                    (b"cache-control", b"no-store"),
                    (b"x-content-type-options", b"nosniff"),
                    (b"x-frame-options", b"DENY"),
                ]
                if self.hsts:
                    headers.append(
                        (b"strict-transport-security", b"max-age=31536000; includeSubDomains")
                    )
                message = {**message, "headers": headers}
            await send(message)

        await self.app(scope, receive, send_with_headers)

"""Universal auth credential exchange.

The Infisical API issues short-lived access tokens in exchange for a
client ID / client secret pair. ``CredentialProvider`` owns the current
token and hands out ``Credential`` values to callers; nothing else keeps
a copy beyond the call it was issued for.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Literal

import httpx

from .errors import AuthenticationError

logger = logging.getLogger(__name__)

LOGIN_PATH = "/api/v1/auth/universal-auth/login"

# Observed TTL of universal auth tokens when the API omits expiresIn
DEFAULT_TOKEN_TTL_SECONDS = 3600


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class Credential:
    """A bearer token and the instant it stops being accepted."""

    access_token: str
    expires_at: datetime

    def is_valid(self, now: datetime, margin: timedelta = timedelta(0)) -> bool:
        return now < self.expires_at - margin

    def __repr__(self) -> str:
        return f"Credential(access_token='***', expires_at={self.expires_at.isoformat()})"


class CredentialProvider:
    """Exchange universal auth credentials for access tokens.

    Two policies:
        - ``expiry`` (default): cache the token and refresh lazily once
          ``now >= expires_at - refresh_margin``.
        - ``per-call``: authenticate before every remote operation.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        host_url: str,
        *,
        refresh_margin_seconds: float = 60.0,
        timeout: float = 30.0,
        policy: Literal["expiry", "per-call"] = "expiry",
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._client_id = client_id
        self._client_secret = client_secret
        self._host_url = host_url.rstrip("/")
        self._margin = timedelta(seconds=refresh_margin_seconds)
        self._timeout = timeout
        self._policy = policy
        self._transport = transport
        self._clock = clock
        self._credential: Credential | None = None
        self._lock = asyncio.Lock()

    @property
    def policy(self) -> str:
        return self._policy

    @property
    def is_authenticated(self) -> bool:
        """True while a cached credential is still inside its validity window."""
        credential = self._credential
        return credential is not None and credential.is_valid(self._clock(), self._margin)

    async def authenticate(self) -> Credential:
        """Perform one credential exchange against the API. Never retried."""
        url = f"{self._host_url}{LOGIN_PATH}"
        payload = {"clientId": self._client_id, "clientSecret": self._client_secret}

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(url, json=payload)
        except httpx.TimeoutException as e:
            logger.warning(f"Universal auth login timed out after {self._timeout}s")
            raise AuthenticationError(f"timed out contacting {self._host_url}") from e
        except httpx.RequestError as e:
            logger.warning(f"Universal auth login request error: {e}")
            raise AuthenticationError(f"could not reach {self._host_url}: {e}") from e

        if response.status_code < 200 or response.status_code >= 300:
            detail = api_error_message(response)
            logger.warning(f"Universal auth login rejected ({response.status_code}): {detail}")
            raise AuthenticationError(f"{response.status_code} {detail}")

        try:
            body = response.json()
        except ValueError as e:
            raise AuthenticationError("login response was not JSON") from e

        access_token = body.get("accessToken") if isinstance(body, dict) else None
        if not access_token:
            raise AuthenticationError("login response did not contain an access token")

        expires_in = body.get("expiresIn")
        if expires_in is None:
            expires_in = DEFAULT_TOKEN_TTL_SECONDS
        credential = Credential(
            access_token=access_token,
            expires_at=self._clock() + timedelta(seconds=float(expires_in)),
        )
        logger.info(f"Authenticated with {self._host_url}, token valid for {expires_in}s")
        return credential

    async def get_credential(self) -> Credential:
        """Return a credential that is valid right now, refreshing if needed."""
        if self._policy == "per-call":
            return await self.authenticate()

        credential = self._credential
        if credential is not None and credential.is_valid(self._clock(), self._margin):
            return credential

        async with self._lock:
            # Another task may have refreshed while we waited
            credential = self._credential
            if credential is not None and credential.is_valid(self._clock(), self._margin):
                return credential
            if credential is not None:
                logger.debug("Access token near expiry, re-authenticating")
            self._credential = await self.authenticate()
            return self._credential

    def invalidate(self) -> None:
        """Forget the cached credential so the next call re-authenticates."""
        self._credential = None


def api_error_message(response: httpx.Response) -> str:
    """Best-effort extraction of the API's error message."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or response.reason_phrase
    if isinstance(body, dict):
        return str(body.get("message") or body.get("error") or body)
    return str(body)

"""
firehose_registrar.auth.token

Admin token acquisition against UAA.

Responsibilities:
- Define the `TokenRefresher` capability consumed by the registrar.
- Mint an admin bearer token using the OAuth2 client-credentials grant.

Note:
- The returned string is used verbatim as the `Authorization` header value,
  so it already carries the token type prefix (e.g. "bearer eyJ...").
"""

from __future__ import annotations

from typing import Protocol

import httpx

from firehose_registrar.observability.logging import get_logger

log = get_logger(__name__)


class TokenRefresher(Protocol):
    async def refresh_auth_token(self) -> str: ...


class TokenRefreshError(Exception):
    def __init__(self, message: str, *, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class UaaTokenRefresher:
    """
    Production `TokenRefresher`: POST /oauth/token with grant_type=client_credentials,
    authenticating the admin client with HTTP basic auth.
    """

    def __init__(
        self,
        *,
        uaa_url: str,
        client_id: str,
        client_secret: str,
        skip_tls_verify: bool = False,
        timeout: float | None = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._uaa_url = uaa_url.rstrip("/")
        self._client_id = client_id
        self._client_secret = client_secret
        self._verify = not skip_tls_verify
        self._timeout = timeout
        self._transport = transport

    async def refresh_auth_token(self) -> str:
        async with httpx.AsyncClient(
            base_url=self._uaa_url,
            verify=self._verify,
            timeout=self._timeout,
            transport=self._transport,
        ) as http:
            try:
                r = await http.post(
                    "/oauth/token",
                    data={"grant_type": "client_credentials"},
                    auth=(self._client_id, self._client_secret),
                    headers={"Accept": "application/json"},
                )
            except httpx.HTTPError as e:
                log.error("token_request_failed", client_id=self._client_id, error=str(e))
                raise TokenRefreshError(f"token request failed: {e}") from e

        if r.status_code != 200:
            log.error("token_rejected", client_id=self._client_id, status_code=r.status_code)
            raise TokenRefreshError(
                f"token request returned HTTP {r.status_code}",
                status_code=r.status_code,
                body=r.text,
            )

        try:
            payload = r.json()
            access_token = payload["access_token"]
        except (ValueError, KeyError, TypeError) as e:
            raise TokenRefreshError(
                "token response has no access_token",
                status_code=r.status_code,
                body=r.text,
            ) from e

        token_type = payload.get("token_type") or "bearer"
        log.info("token_refreshed", client_id=self._client_id, token_type=token_type)
        return f"{token_type} {access_token}"


# --- Module Notes -----------------------------------------------------------
# A new client is opened per refresh: the registrar asks for exactly one token per
# process run, so there is no pool worth keeping.

"""
firehose_registrar.uaa.registrar

Reconciles the firehose OAuth client registration in UAA.

Responsibilities:
- Fetch the admin token once at construction and fail fast if that fails.
- Check whether the client exists, then create it or update its metadata and secret.
- Map every unexpected response onto a typed `RegistrarError`.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx
import structlog
from pydantic import BaseModel

from firehose_registrar.auth.token import TokenRefresher
from firehose_registrar.observability.logging import get_logger
from firehose_registrar.uaa.errors import (
    ClientIdError,
    CreateClientError,
    ExistenceCheckError,
    RegistrarError,
    UpdateClientError,
    UpdateSecretError,
)
from firehose_registrar.uaa.models import ClientRegistration, ClientUpdate, SecretUpdate


class Registrar:
    """
    Build with `await Registrar.create(...)`; the constructor only stores what
    `create` has already validated, so a registrar always holds a token and a client.

    Calls to `register_firehose` share the token and the connection pool but no other
    state, so they may run concurrently.
    """

    def __init__(
        self,
        *,
        base_url: str,
        token: str,
        http: httpx.AsyncClient,
        logger: structlog.stdlib.BoundLogger,
    ) -> None:
        self._base_url = base_url
        self._token = token
        self._http = http
        self._log = logger

    @classmethod
    async def create(
        cls,
        *,
        base_url: str,
        token_refresher: TokenRefresher,
        skip_tls_verify: bool = False,
        logger: structlog.stdlib.BoundLogger | None = None,
        timeout: float | None = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> Registrar:
        # Errors from the refresher propagate unchanged; nothing has been built yet.
        token = await token_refresher.refresh_auth_token()

        http = httpx.AsyncClient(
            base_url=base_url,
            headers={"Authorization": token},
            verify=not skip_tls_verify,
            timeout=timeout,
            transport=transport,
            follow_redirects=False,
        )
        return cls(
            base_url=base_url,
            token=token,
            http=http,
            logger=logger or get_logger(__name__),
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> Registrar:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def register_firehose(self, client_id: str, client_secret: str) -> None:
        log = self._log.bind(client_id=client_id)
        if not client_id:
            log.error("client_id_missing")
            raise ClientIdError(client_id=client_id, detail="client id must not be empty")

        if await self._client_exists(client_id, log=log):
            await self._update_client(client_id, log=log)
            # Always rotate: the stored secret cannot be read back for comparison.
            await self._update_secret(client_id, client_secret, log=log)
        else:
            await self._create_client(client_id, client_secret, log=log)

    async def _client_exists(self, client_id: str, *, log: structlog.stdlib.BoundLogger) -> bool:
        r = await self._send(
            "GET", _client_path(client_id), error=ExistenceCheckError, client_id=client_id, log=log
        )
        if r.status_code == 200:
            log.info("client_found")
            return True
        if r.status_code == 404:
            log.info("client_not_found")
            return False
        raise self._unexpected(ExistenceCheckError, client_id=client_id, response=r, log=log)

    async def _create_client(
        self, client_id: str, client_secret: str, *, log: structlog.stdlib.BoundLogger
    ) -> None:
        body = ClientRegistration(client_id=client_id, client_secret=client_secret)
        r = await self._send(
            "POST",
            "/oauth/clients",
            body=body,
            error=CreateClientError,
            client_id=client_id,
            log=log,
        )
        if r.status_code != 201:
            raise self._unexpected(CreateClientError, client_id=client_id, response=r, log=log)
        log.info("client_created", scope=body.scope, grant_types=body.authorized_grant_types)

    async def _update_client(self, client_id: str, *, log: structlog.stdlib.BoundLogger) -> None:
        body = ClientUpdate(client_id=client_id)
        r = await self._send(
            "PUT",
            _client_path(client_id),
            body=body,
            error=UpdateClientError,
            client_id=client_id,
            log=log,
        )
        if r.status_code != 200:
            raise self._unexpected(UpdateClientError, client_id=client_id, response=r, log=log)
        log.info("client_updated", scope=body.scope, grant_types=body.authorized_grant_types)

    async def _update_secret(
        self, client_id: str, client_secret: str, *, log: structlog.stdlib.BoundLogger
    ) -> None:
        r = await self._send(
            "PUT",
            _client_path(client_id, "secret"),
            body=SecretUpdate(secret=client_secret),
            error=UpdateSecretError,
            client_id=client_id,
            log=log,
        )
        if r.status_code != 200:
            raise self._unexpected(UpdateSecretError, client_id=client_id, response=r, log=log)
        log.info("client_secret_updated")

    async def _send(
        self,
        method: str,
        path: str,
        *,
        error: type[RegistrarError],
        client_id: str,
        log: structlog.stdlib.BoundLogger,
        body: BaseModel | None = None,
    ) -> httpx.Response:
        try:
            if body is None:
                return await self._http.request(method, path)
            return await self._http.request(method, path, json=body.model_dump())
        except httpx.HTTPError as e:
            log.error("uaa_request_failed", method=method, path=path, error=str(e))
            raise error(client_id=client_id, detail=str(e)) from e

    @staticmethod
    def _unexpected(
        error: type[RegistrarError],
        *,
        client_id: str,
        response: httpx.Response,
        log: structlog.stdlib.BoundLogger,
    ) -> RegistrarError:
        log.error(
            "uaa_unexpected_status",
            step=error.step,
            status_code=response.status_code,
            body=response.text,
        )
        return error(client_id=client_id, status_code=response.status_code, body=response.text)


def _client_path(client_id: str, *suffix: str) -> str:
    # One path segment: "/", "?" and "#" in an id must not change the endpoint.
    return "/".join(("/oauth/clients", quote(client_id, safe=""), *suffix))


# --- Module Notes -----------------------------------------------------------
# Order of calls on one invocation:
#   GET  /oauth/clients/{id}         200 -> update path, 404 -> create path
#   POST /oauth/clients              create path, expects 201, ends the run
#   PUT  /oauth/clients/{id}         update path, expects 200
#   PUT  /oauth/clients/{id}/secret  update path only, expects 200

"""
firehose_registrar.uaa.errors

Failure kinds raised by the registrar.

Responsibilities:
- Name the reconciliation step that failed.
- Carry the HTTP status and response body (or the chained transport error).
"""

from __future__ import annotations


class RegistrarError(Exception):
    step = "register"

    def __init__(
        self,
        *,
        client_id: str,
        status_code: int | None = None,
        body: str | None = None,
        detail: str | None = None,
    ) -> None:
        self.client_id = client_id
        self.status_code = status_code
        self.body = body
        if detail is None:
            detail = f"unexpected HTTP {status_code}" if status_code is not None else "no response"
        super().__init__(f"{self.step} failed for client {client_id!r}: {detail}")


class ClientIdError(RegistrarError):
    step = "validate client id"


class ExistenceCheckError(RegistrarError):
    step = "existence check"


class CreateClientError(RegistrarError):
    step = "create client"


class UpdateClientError(RegistrarError):
    step = "update client"


class UpdateSecretError(RegistrarError):
    step = "update client secret"


# --- Module Notes -----------------------------------------------------------
# Transport failures are raised with `from exc`, so `__cause__` holds the httpx error
# and `status_code` stays None.

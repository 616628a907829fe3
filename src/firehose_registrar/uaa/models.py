"""
firehose_registrar.uaa.models

Request bodies for the UAA client management API.

Responsibilities:
- Pin the firehose scopes and grant types as constants.
- Keep the secret out of the update body by construction.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

FIREHOSE_SCOPES: tuple[str, ...] = ("openid", "oauth.approvals", "doppler.firehose")
FIREHOSE_GRANT_TYPES: tuple[str, ...] = ("client_credentials",)


def _scopes() -> list[str]:
    return list(FIREHOSE_SCOPES)


def _grant_types() -> list[str]:
    return list(FIREHOSE_GRANT_TYPES)


class ClientUpdate(BaseModel):
    """Body of PUT /oauth/clients/{client_id}."""

    client_id: str = Field(min_length=1)
    scope: list[str] = Field(default_factory=_scopes)
    authorized_grant_types: list[str] = Field(default_factory=_grant_types)


class ClientRegistration(ClientUpdate):
    """Body of POST /oauth/clients."""

    client_secret: str = Field(repr=False)


class SecretUpdate(BaseModel):
    """Body of PUT /oauth/clients/{client_id}/secret."""

    secret: str = Field(repr=False)


# --- Module Notes -----------------------------------------------------------
# UAA accepts additional client fields (autoapprove, authorities, ...); the firehose
# client only ever needs the ones above.

"""
firehose_registrar.uaa

UAA client-management boundary.

Responsibilities:
- Expose the registrar and its request models / error types.
"""

from firehose_registrar.uaa.errors import (
    ClientIdError,
    CreateClientError,
    ExistenceCheckError,
    RegistrarError,
    UpdateClientError,
    UpdateSecretError,
)
from firehose_registrar.uaa.models import (
    FIREHOSE_GRANT_TYPES,
    FIREHOSE_SCOPES,
    ClientRegistration,
    ClientUpdate,
    SecretUpdate,
)
from firehose_registrar.uaa.registrar import Registrar

__all__ = [
    "ClientIdError",
    "FIREHOSE_GRANT_TYPES",
    "FIREHOSE_SCOPES",
    "ClientRegistration",
    "ClientUpdate",
    "CreateClientError",
    "ExistenceCheckError",
    "Registrar",
    "RegistrarError",
    "SecretUpdate",
    "UpdateClientError",
    "UpdateSecretError",
]

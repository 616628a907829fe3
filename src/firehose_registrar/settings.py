"""
firehose_registrar.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the registrar process.
- Hide UAA secrets from repr/logging.
- Offer a cached settings instance for the entrypoint.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Everything the entrypoint needs to reconcile one firehose client.
    Secrets have no defaults: a deployment that forgets them fails at load time.
    """

    model_config = SettingsConfigDict(env_prefix="FIREHOSE_REGISTRAR_", case_sensitive=False)

    service_name: str = "firehose-registrar"
    log_level: str = "INFO"

    # UAA admin identity (used only to mint the management token)
    uaa_url: str
    uaa_admin_client_id: str = "admin"
    uaa_admin_client_secret: str = Field(repr=False)

    # Registration to reconcile
    firehose_client_id: str = "firehose-nozzle"
    firehose_client_secret: str = Field(repr=False)

    # Transport
    skip_tls_verify: bool = False
    request_timeout_seconds: float | None = 30.0


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars when several components ask for settings.
    return Settings()  # type: ignore[call-arg]


# --- Module Notes -----------------------------------------------------------
# `request_timeout_seconds=None` disables timeouts on both the token and registrar
# clients; it is never the default.

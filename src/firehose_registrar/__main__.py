"""
firehose_registrar.__main__

Entrypoint for running one reconciliation via `python -m firehose_registrar`.

Responsibilities:
- Load settings and configure logging.
- Mint the admin token, build the registrar and reconcile the firehose client.
- Map failures onto a non-zero exit status.
"""

from __future__ import annotations

import asyncio

import httpx
import structlog

from firehose_registrar.auth.token import TokenRefreshError, UaaTokenRefresher
from firehose_registrar.observability.logging import configure_logging, get_logger
from firehose_registrar.settings import Settings, get_settings
from firehose_registrar.uaa.errors import RegistrarError
from firehose_registrar.uaa.registrar import Registrar

log = get_logger(__name__)


async def run(settings: Settings, *, transport: httpx.AsyncBaseTransport | None = None) -> int:
    structlog.contextvars.bind_contextvars(
        uaa_url=settings.uaa_url,
        firehose_client_id=settings.firehose_client_id,
    )
    refresher = UaaTokenRefresher(
        uaa_url=settings.uaa_url,
        client_id=settings.uaa_admin_client_id,
        client_secret=settings.uaa_admin_client_secret,
        skip_tls_verify=settings.skip_tls_verify,
        timeout=settings.request_timeout_seconds,
        transport=transport,
    )
    try:
        registrar = await Registrar.create(
            base_url=settings.uaa_url,
            token_refresher=refresher,
            skip_tls_verify=settings.skip_tls_verify,
            timeout=settings.request_timeout_seconds,
            transport=transport,
        )
        async with registrar:
            await registrar.register_firehose(
                settings.firehose_client_id, settings.firehose_client_secret
            )
        log.info("registration_complete")
    except (TokenRefreshError, RegistrarError) as e:
        log.error("registration_failed", error=str(e), error_type=type(e).__name__)
        return 1
    finally:
        structlog.contextvars.clear_contextvars()
    return 0


def main() -> None:
    settings = get_settings()
    configure_logging(service_name=settings.service_name, level=settings.log_level)
    raise SystemExit(asyncio.run(run(settings)))


if __name__ == "__main__":
    main()


# --- Module Notes -----------------------------------------------------------
# Typically run as a deploy-time job (BOSH errand, k8s Job, container init step)
# before the nozzle starts consuming the firehose.

"""
firehose_registrar.observability.logging

Structured logging configuration for the registrar process.

Responsibilities:
- Configure `structlog` for JSON logs suitable for ELK/Splunk/Datadog.
- Keep client secrets and bearer tokens out of log output.
- Provide a small wrapper for obtaining bound loggers.
"""

from __future__ import annotations

import logging
import re
import sys
from typing import Any

import structlog

REDACTED = "[REDACTED]"
SENSITIVE_KEYS = frozenset({"authorization", "client_secret", "secret", "token", "access_token"})
# JSON string values of sensitive keys inside free-text fields such as response bodies.
_SECRET_IN_TEXT = re.compile(
    r'("(?:' + "|".join(sorted(SENSITIVE_KEYS)) + r')"\s*:\s*")(?:[^"\\]|\\.)*(")',
    re.IGNORECASE,
)
TEXT_KEYS = frozenset({"body", "error"})


def configure_logging(*, service_name: str, level: str) -> None:
    """
    Structured JSON logs; the registrar usually runs as a deploy-time job whose
    stdout is shipped to the same pipeline as the nozzle itself.
    """

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _add_service_name(service_name),
            redact_secrets,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _add_service_name(service_name: str):
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def redact_secrets(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for key in SENSITIVE_KEYS.intersection(event_dict):
        event_dict[key] = REDACTED
    for key in TEXT_KEYS.intersection(event_dict):
        value = event_dict[key]
        if isinstance(value, str):
            event_dict[key] = _SECRET_IN_TEXT.sub(rf"\g<1>{REDACTED}\g<2>", value)
    return event_dict


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# --- Module Notes -----------------------------------------------------------
# Per-run metadata (uaa url, target client id) is bound via contextvars in `__main__`.
# Free-text fields (`body`, `error`) keep their shape; only secret-bearing JSON values
# inside them are masked.

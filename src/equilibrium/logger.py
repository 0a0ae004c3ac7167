"""Structured logging configuration using *structlog*.

Signed-in requests carry the account ``uid`` through structlog's contextvars
(see :func:`bind_user`); raw e-mail addresses never reach the output.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def redact_email(_logger: Any, _method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Mask the local part of an ``email`` field: ``ada@x.io`` -> ``a***@x.io``."""
    email = event_dict.get("email")
    if isinstance(email, str) and "@" in email:
        local, _, domain = email.partition("@")
        event_dict["email"] = f"{local[:1]}***@{domain}"
    return event_dict


def bind_user(uid: str) -> None:
    """Attach *uid* to every log line emitted from the current context."""
    structlog.contextvars.bind_contextvars(uid=uid)


def unbind_user() -> None:
    structlog.contextvars.unbind_contextvars("uid")


def setup_logging(level: str = "INFO") -> None:
    """Configure *structlog* processors and the level filter.

    Call once at application startup.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            redact_email,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.dev.ConsoleRenderer() if sys.stderr.isatty() else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level.upper(), logging.INFO)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

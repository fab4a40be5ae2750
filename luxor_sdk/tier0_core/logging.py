"""
luxor_sdk.tier0_core.logging
─────────────────────────────
Structured logs with levels and per-request context (method, url) bound
through structlog contextvars.

Configure via: LUXOR_LOG_LEVEL, LUXOR_LOG_FORMAT=console|json
"""
from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog

from luxor_sdk.tier0_core.config import get_config


# ── Configuration ─────────────────────────────────────────────────────────────

def _configure_structlog(level: str | None = None) -> None:
    config = get_config()
    log_level = (level or config.log_level).upper()

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        _truncate_body_processor,
    ]

    if config.log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level, logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    # Diagnostics go to stderr; stdout belongs to CLI output.
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    logger = logging.getLogger("luxor_sdk")
    logger.handlers[:] = [handler]
    logger.setLevel(getattr(logging, log_level, logging.INFO))
    logger.propagate = False


# ── Body truncation ───────────────────────────────────────────────────────────

_MAX_BODY = 512


def _truncate_body_processor(
    logger: Any, method: str, event_dict: dict
) -> dict:
    """Cap raw response bodies so a misbehaving device cannot flood the log."""
    body = event_dict.get("body")
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    if isinstance(body, str) and len(body) > _MAX_BODY:
        body = body[:_MAX_BODY] + f"... ({len(body)} chars)"
    if body is not None:
        event_dict["body"] = body
    return event_dict


# ── Public API ────────────────────────────────────────────────────────────────

_configured = False


def configure_logging(level: str | None = None) -> None:
    """(Re)configure logging, optionally overriding LUXOR_LOG_LEVEL."""
    global _configured
    _configure_structlog(level)
    _configured = True


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Return a structured logger bound to the given name.

    Usage:
        log = get_logger(__name__)
        log.info("luxor.request.sent", method="ThemeGet")
    """
    if not _configured:
        configure_logging()
    return structlog.get_logger(name or __name__)


@contextmanager
def request_scope(**fields: Any) -> Iterator[None]:
    """
    Bind key-value pairs for the duration of one call. Log calls made
    inside the block (including from the exchange task) include them.
    """
    with structlog.contextvars.bound_contextvars(**fields):
        yield


__all__ = ["configure_logging", "get_logger", "request_scope"]

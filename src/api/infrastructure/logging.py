"""Structlog configuration for the social API.

Console rendering with colors is used in development, JSON lines
everywhere else. Every event carries the service name and version, and
fields that may hold credentials or private workout notes are masked
before rendering.
"""

import logging
import os
import sys
from typing import Any

import structlog

from infrastructure.version import __version__

SERVICE_NAME = "workout-social-api"

REDACTED = "[redacted]"
PRIVATE_FIELDS = frozenset({"password", "token", "authorization", "notes"})


def add_service_info(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    event_dict.setdefault("service", SERVICE_NAME)
    event_dict.setdefault("version", __version__)
    return event_dict


def redact_private_fields(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Mask values of private fields, leaving empty values visible."""
    for key in PRIVATE_FIELDS.intersection(event_dict):
        if event_dict[key]:
            event_dict[key] = REDACTED
    return event_dict


def configure_logging(debug: bool = False) -> None:
    """Configure structlog for the process.

    FORCE_COLOR=1 forces colored console output outside a TTY (Docker).
    Probe events below INFO, such as identity resolution and feed loads,
    are dropped unless debug is set.

    Args:
        debug: Emit DEBUG level events
    """
    force_color = os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes")
    use_colors = force_color or sys.stdout.isatty()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_service_info,
        redact_private_fields,
        structlog.processors.StackInfoRenderer(),
    ]

    if use_colors:
        renderer: list[structlog.types.Processor] = [
            structlog.dev.ConsoleRenderer(colors=True)
        ]
    else:
        renderer = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=[*shared_processors, *renderer],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if debug else logging.INFO
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

"""
Logging Configuration

structlog setup for the sync job. Every entry carries the deployment
environment and the portal project being synced; a running pipeline binds
``sync_mode`` and ``last_created_at`` through ``structlog.contextvars``.
"""
import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from config.settings import settings


def add_sync_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Stamp the portal project and webhook source tag on each entry."""
    event_dict.setdefault("environment", settings.environment)
    event_dict.setdefault("project_id", settings.portal_project_id)
    event_dict.setdefault("source", settings.source_tag)
    return event_dict


def setup_logging() -> structlog.BoundLogger:
    """
    Configure structured logging for the sync job.

    Output goes to stdout as JSON lines (``LOG_FORMAT=json``) or through the
    console renderer for local runs.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level.upper()),
    )

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_sync_context,
    ]

    if settings.log_format == "json":
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    return structlog.get_logger()


def get_logger(name: str = None) -> structlog.BoundLogger:
    """Module logger, e.g. ``get_logger(__name__)``."""
    if name:
        return structlog.get_logger(name)
    return structlog.get_logger()

"""Structured logging configuration using structlog.

Request, retry and tracker events are emitted as key/value pairs
(request_id, url, attempt, delay_ms, ...). Production renders one JSON
object per line; other environments get the colored console renderer.

Level and environment default to Settings.LOG_LEVEL / Settings.ENVIRONMENT.
"""

import logging
import sys
from typing import Optional

import structlog
from structlog.types import EventDict, WrappedLogger

from resilient_fetch.config import Settings, settings as default_settings

APP_NAME = "resilient-fetch"

# Libraries whose own loggers would repeat every attempt
NOISY_LOGGERS = ("httpx", "httpcore", "asyncio", "redis")


def add_app_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Add application context to all log events."""
    event_dict["app"] = APP_NAME
    return event_dict


def build_renderer(environment: str) -> tuple[list[structlog.types.Processor], structlog.types.Processor]:
    """Return the exception processor(s) and final renderer for an environment."""
    if environment.lower() == "production":
        return [structlog.processors.format_exc_info], structlog.processors.JSONRenderer()
    return [structlog.processors.ExceptionPrettyPrinter()], structlog.dev.ConsoleRenderer(colors=True)


def configure_logging(
    log_level: Optional[str] = None,
    environment: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> None:
    """Configure structlog on top of stdlib logging.

    Args:
        log_level: Logging level name; unknown names fall back to INFO
            (default: settings.LOG_LEVEL)
        environment: Environment name; "production" selects JSON output
            (default: settings.ENVIRONMENT)
        settings: Settings to read defaults from (default: module-level instance)
    """
    settings = settings or default_settings
    log_level = log_level or settings.LOG_LEVEL
    environment = environment or settings.ENVIRONMENT
    log_level_int = getattr(logging, log_level.upper(), logging.INFO)

    exception_processors, renderer = build_renderer(environment)
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        add_app_context,
        *exception_processors,
    ]

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=shared_processors)
    )
    handler.setLevel(log_level_int)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level_int)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.WARNING, log_level_int))

    structlog.get_logger(__name__).debug(
        "Logging configured",
        log_level=logging.getLevelName(log_level_int),
        environment=environment,
    )

"""Structlog-based logging configuration.

Library modules log through the standard ``logging`` module; this routes those
records and any structlog loggers through one set of processors, rendered either
as JSON or as human-readable console output.
"""

import logging
import sys
from collections.abc import Callable
from typing import Any

import structlog

from optionstore.settings import LoggingConfig, StoreSettings


def _add_static_context(extra_fields: dict[str, str]) -> Callable:
    """Processor to add static context fields to all log entries."""

    def processor(
        logger: structlog.BoundLogger, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        event_dict.update(extra_fields)
        return event_dict

    return processor


def _configure_processors(config: LoggingConfig) -> list:
    """Build the shared structlog processor chain, without the renderer."""
    processors = [
        structlog.contextvars.merge_contextvars,
        _add_static_context(dict(config.extra_fields)),
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="ISO"),
    ]

    if config.include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder())

    return processors


def _renderer(config: LoggingConfig) -> Any:
    if config.json_logs:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def _configure_handlers(config: LoggingConfig, processors: list) -> None:
    """Route stdlib logging records through structlog's formatter on stderr."""
    root_logger = logging.getLogger()
    log_level = getattr(logging, config.level, logging.INFO)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(log_level)

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(config),
        ],
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


def configure_structlog(settings: StoreSettings) -> None:
    """Configure structlog-based logging.

    Args:
        settings: The StoreSettings instance containing logging settings.
    """
    config = settings.logging
    processors = _configure_processors(config)

    structlog.configure(
        processors=[
            *processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, config.level, logging.INFO)
        ),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    _configure_handlers(config, processors)

    logger = structlog.get_logger(__name__)
    logger.debug(
        "Structured logging configured",
        log_level=config.level,
        json_output=config.json_logs,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured structlog BoundLogger instance
    """
    return structlog.get_logger(name)

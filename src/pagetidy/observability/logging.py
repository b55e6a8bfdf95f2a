"""
Configures structured logging for the application using structlog.
"""
from __future__ import annotations

import logging
import sys
import uuid
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Dict, Iterator, List

import structlog

if TYPE_CHECKING:
    from pagetidy.config.config import MonitoringConfig

# --- Custom Processors ---


def add_extraction_id(logger: logging.Logger, method_name: str, event_dict: Dict[Any, Any]) -> Dict[Any, Any]:
    """
    Adds the extraction_id of the surrounding extraction_context, if any,
    so every record emitted during one extraction can be correlated.
    """
    from structlog.contextvars import get_contextvars

    ctx = get_contextvars()
    if "extraction_id" in ctx:
        event_dict["extraction_id"] = ctx["extraction_id"]
    return event_dict


@contextmanager
def extraction_context(**values: Any) -> Iterator[str]:
    """Bind a fresh extraction_id plus ``values`` to the logging context."""
    extraction_id = uuid.uuid4().hex[:12]
    with structlog.contextvars.bound_contextvars(extraction_id=extraction_id, **values):
        yield extraction_id


# --- Configuration ---


def configure_logging(config: MonitoringConfig) -> None:
    """
    Sets up structlog to handle all logging for the application.
    """
    shared_processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        add_extraction_id,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    log_renderer: Any
    if config.log_file:
        # Structured JSON logging for file output
        log_renderer = structlog.processors.JSONRenderer()
        handler: logging.Handler = logging.FileHandler(config.log_file)
    else:
        log_renderer = structlog.dev.ConsoleRenderer(colors=False)
        handler = logging.StreamHandler(sys.stderr)

    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=log_renderer,
            foreign_pre_chain=shared_processors,
        )
    )

    # Route the standard logging library through the structlog formatter
    logging.basicConfig(
        level=config.log_level.upper(),
        handlers=[handler],
        force=True,
    )

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("pagetidy.logging")
    logger.info("Logging configured", level=config.log_level, output=config.log_file or "console")

"""Logging configuration for tooltip-taxonomy."""

import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Iterator, Optional

import structlog
from structlog.stdlib import LoggerFactory

from tooltip_taxonomy.config import Config, LoggingConfig

if TYPE_CHECKING:
    from tooltip_taxonomy.entities import RenderingContext

# File handler installed by the last configure_logging() call.
_file_handler: Optional[logging.FileHandler] = None


def _renderer(json_logging: bool):
    if json_logging:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def _file_formatter(json_logging: bool) -> logging.Formatter:
    if json_logging:
        return logging.Formatter(
            '{"time": "%(asctime)s", "logger": "%(name)s", '
            '"level": "%(levelname)s", "message": "%(message)s"}'
        )
    return logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def _install_file_handler(settings: LoggingConfig, level: int) -> None:
    global _file_handler

    root = logging.getLogger()
    if _file_handler is not None:
        root.removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None

    if not settings.log_file:
        return

    log_file_path = Path(settings.log_file)
    log_file_path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(log_file_path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(_file_formatter(settings.json_logging))
    root.addHandler(handler)
    _file_handler = handler


def configure_logging(config: Config) -> None:
    """Configure structured logging for the tooltip engines.

    Calling it again replaces the log file handler installed before, so
    reconfiguring never duplicates file output.
    """
    settings = config.logging
    log_level = getattr(logging, settings.level.upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)
    logging.getLogger().setLevel(log_level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(settings.json_logging),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _install_file_handler(settings, log_level)


@contextmanager
def bind_rendering_context(context: "RenderingContext") -> Iterator[None]:
    """Tag every log line emitted inside the block with the field being rendered."""
    with structlog.contextvars.bound_contextvars(
        path=context.path,
        field=context.field_key,
        view_mode=context.view_mode,
        text_format=context.value.format,
    ):
        yield


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)

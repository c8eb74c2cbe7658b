"""Structured logging for the dictionary service.

structlog renders both its own events and stdlib records (uvicorn, httpx)
through one stdout handler. :func:`setup_logging` may run once per app
lifespan; repeated calls replace the handler instead of stacking another.
"""

import logging
import sys
from typing import cast

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from ensembl_dictionary import __version__
from ensembl_dictionary.platform.config import Settings, get_settings
from ensembl_dictionary.platform.context import request_id_ctx

SERVICE_NAME = "ensembl-dictionary"
HANDLER_NAME = "ensembl_dictionary.stdout"

# Chatty at INFO; EBI Search URLs are logged by the dictionary itself.
_QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def add_request_id(
    logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Attach the current request ID, when handling a request."""
    request_id = request_id_ctx.get()
    if request_id:
        event_dict["request_id"] = request_id
    return event_dict


def add_service_info(
    logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    event_dict.setdefault("version", __version__)
    return event_dict


def _renderer(settings: Settings) -> Processor:
    if settings.log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def _build_handler(
    shared_processors: list[Processor], renderer: Processor
) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )
    return handler


def setup_logging(settings: Settings | None = None) -> None:
    """Configure structlog and the root logger from *settings*.

    :param settings: Level and format source; the cached settings by default.
    """
    settings = settings or get_settings()

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        add_service_info,
        add_request_id,
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        if existing.get_name() == HANDLER_NAME:
            root_logger.removeHandler(existing)
            existing.close()
    root_logger.addHandler(_build_handler(shared_processors, _renderer(settings)))
    root_logger.setLevel(settings.log_level.upper())

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger.

    :param name: Logger name (typically __name__).
    """
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))

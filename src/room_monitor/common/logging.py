"""structlog setup for the service.

Application code logs through ``get_logger(__name__)``. Records from stdlib
loggers (Flask, werkzeug) go through the same processors, so both end up in one
stream in the same format: console lines in development, JSON in production.
"""

import logging
import sys

import structlog

_HANDLER_NAME = "room_monitor"


def _shared_processors():
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]


def setup_logging(json_output: bool = False, log_level: str = "INFO") -> None:
    """Route structlog through stdlib logging and render every record with structlog.

    Calling it again replaces the handler it installed before; other root
    handlers (test capture, for one) are left alone.
    """
    numeric_level = getattr(logging, str(log_level).upper(), logging.INFO)
    shared = _shared_processors()

    structlog.configure(
        processors=shared + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    if json_output:
        renderers = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        renderers = [structlog.dev.ConsoleRenderer()]

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *renderers],
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(numeric_level)


def get_logger(name: str):
    """Logger bound with the module name (pass ``__name__``)."""
    return structlog.get_logger(name)

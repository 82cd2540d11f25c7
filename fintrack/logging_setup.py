"""
Structured Logging

Every calculator logs through structlog, bound to the stdlib logging
machinery so that host applications control levels and handlers.

Importing the package only installs the structlog processor chain. It
never reads the environment and never touches the root logger; the host
(or ``configure_logging``) decides where records go.

Degraded results (missing exchange rates, deductions exceeding gross)
are logged at warning level. Logging never changes a computed result.
"""

import logging
import sys

import structlog
from pydantic import ValidationError

from fintrack.config import LoggingSettings


PACKAGE_LOGGER = "fintrack"


def _processors(renderer) -> list:
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ]


# Configure structlog for local logging
structlog.configure(
    processors=_processors(structlog.processors.JSONRenderer()),
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

_configured = False


def configure_logging(force: bool = False) -> None:
    """
    Apply ``LoggingSettings`` to the package logger.

    Attaches a stdout handler to the ``fintrack`` logger (never the root
    logger) and picks the JSON or console renderer. Invalid settings fall
    back to the defaults instead of failing.

    Safe to call repeatedly; only the first call (or a forced call)
    changes logging state.
    """
    global _configured
    if _configured and not force:
        return

    try:
        log_settings = LoggingSettings()
        invalid = None
    except ValidationError as e:
        log_settings = LoggingSettings.model_construct(level="INFO", json_output=True)
        invalid = str(e)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(getattr(logging, log_settings.level))
    if not package_logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(message)s"))
        package_logger.addHandler(handler)

    renderer = (
        structlog.processors.JSONRenderer()
        if log_settings.json_output
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(processors=_processors(renderer))
    _configured = True

    if invalid:
        get_logger(__name__).warning("logging_settings_invalid", error=invalid)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger bound to ``name``; never configures anything."""
    return structlog.get_logger(name)

"""Render preferable's log records through structlog.

Library modules log with plain ``logging.getLogger(__name__)`` and pass the
preference they are acting on through ``extra`` (see :data:`EVENT_FIELDS`).
:func:`configure_from` installs a single stderr handler that lifts those
fields into the structlog event dict, so JSON output carries them as keys:

    {"event": "Set preference Account.currency", "host_type": "Account",
     "preference": "currency", "logger": "preferable.services.accessor", ...}
"""

from __future__ import annotations

import logging
import sys

import structlog

from preferable.config.models import LoggingConfig, PreferencesConfig

# ``extra`` keys library modules attach to their records.
EVENT_FIELDS = ("host_type", "preference", "preference_type", "scope", "count")

PACKAGE_LOGGER = "preferable"
SQL_LOGGER = "sqlalchemy.engine"


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(config: LoggingConfig | None = None, *, sql_echo: bool = False) -> None:
    """Install the stderr handler and set package log levels.

    Repeated calls replace the previous handler.

    Args:
        config: The ``[logging]`` section; defaults apply when omitted.
        sql_echo: Let SQLAlchemy's statement log through at INFO.
    """
    config = config or LoggingConfig()
    shared = _shared_processors()

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[*shared, structlog.stdlib.ExtraAdder(allow=EVENT_FIELDS)],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(config.log_json),
        ],
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(
        logging.DEBUG if config.verbose else logging.WARNING
    )
    logging.getLogger(SQL_LOGGER).setLevel(logging.INFO if sql_echo else logging.WARNING)


def configure_from(config: PreferencesConfig | LoggingConfig) -> None:
    """Configure logging from loaded settings.

    Given the full config, ``store.echo`` also decides whether SQLAlchemy's
    statement log is shown.
    """
    if isinstance(config, PreferencesConfig):
        configure_logging(config.logging, sql_echo=config.store.echo)
    else:
        configure_logging(config)

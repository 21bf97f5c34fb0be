"""Logging setup for applications that embed the externals calculator.

The library itself only emits structlog events on the
``bundle_externals.engine`` logger; nothing is configured on import.
"""

from __future__ import annotations

import logging
import logging.config
import os
from pathlib import PurePath

import structlog

_DEFAULT_LEVEL = "INFO"
_DEFAULT_FORMAT = "console"


def _stringify_paths(
    logger: object, method_name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    """Render ``path``/``dirname``/``source`` values as plain strings."""
    for key, value in event_dict.items():
        if isinstance(value, PurePath):
            event_dict[key] = str(value)
    return event_dict


def _renderer(fmt: str) -> structlog.types.Processor:
    if fmt == "json":
        return structlog.processors.JSONRenderer(sort_keys=True)
    if fmt == "console":
        return structlog.dev.ConsoleRenderer()
    raise ValueError(f"unknown log format {fmt!r}, expected 'console' or 'json'")


def setup_logging(level: str | None = None, fmt: str | None = None) -> None:
    """Route structlog events through stdlib logging to stderr.

    Arguments win over environment variables:
        BUNDLE_EXTERNALS_LOG_LEVEL  - level name (default: INFO)
        BUNDLE_EXTERNALS_LOG_FORMAT - console | json (default: console)

    Only the ``bundle_externals`` logger tree gets a handler, so a host
    application's own root logging is left alone.
    """
    level = (level or os.environ.get("BUNDLE_EXTERNALS_LOG_LEVEL", _DEFAULT_LEVEL)).upper()
    fmt = (fmt or os.environ.get("BUNDLE_EXTERNALS_LOG_FORMAT", _DEFAULT_FORMAT)).lower()
    renderer = _renderer(fmt)

    pre_chain: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _stringify_paths,
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *pre_chain,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "bundle_externals": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": pre_chain,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        renderer,
                    ],
                },
            },
            "handlers": {
                "bundle_externals": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "formatter": "bundle_externals",
                },
            },
            "loggers": {
                "bundle_externals": {
                    "handlers": ["bundle_externals"],
                    "level": level,
                    "propagate": False,
                },
            },
        }
    )

"""Logging configuration for the gateway process.

One console handler on stderr, with either a human-readable ``simple`` format or
a ``json`` format (one JSON object per record, handy behind a log shipper).
Call :func:`setup_logging` once at startup.
"""

from __future__ import annotations

import logging
import logging.config

LOG_FORMATS = ("text", "json")


def setup_logging(level: str = "INFO", fmt: str = "text") -> None:
    """Install the logging configuration.

    Raises:
        ValueError: If *fmt* is not one of :data:`LOG_FORMATS`.
    """
    if fmt not in LOG_FORMATS:
        raise ValueError(f"unknown log format {fmt!r}, expected one of {LOG_FORMATS}")

    formatter = "json" if fmt == "json" else "simple"
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "pythonjsonlogger.json.JsonFormatter",
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
            },
            "simple": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": formatter,
                "stream": "ext://sys.stderr",
            },
        },
        "root": {
            "level": level.upper(),
            "handlers": ["console"],
        },
    })
    logging.getLogger("httpx").setLevel(logging.WARNING)

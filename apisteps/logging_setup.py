"""Central logging configuration for the step runner.

Applies a stdout handler on the root logger so module loggers (HTTP debug
lines, printed response bodies) show up in the runner output. Keeps existing
handlers intact when called twice.
"""
from __future__ import annotations
import logging
from logging.config import dictConfig


def _dict_config(level: str) -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s %(levelname)s:%(name)s:%(message)s",
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "default",
                "stream": "ext://sys.stdout",
            }
        },
        "root": {"level": "WARNING", "handlers": ["console"]},
        "loggers": {
            "apisteps": {"level": level, "handlers": ["console"], "propagate": False},
        },
    }


def configure_logging(debug: bool = False) -> None:
    """Configure logging once; DEBUG level for apisteps loggers in debug mode.

    If the apisteps logger already has handlers, return to prevent duplicate
    output.
    """
    if logging.getLogger("apisteps").handlers:
        return
    dictConfig(_dict_config("DEBUG" if debug else "INFO"))

"""Logging configuration for the kubie CLI."""

import logging
import logging.config
from typing import Any


def _build_logging_config(verbose: bool = False) -> dict[str, Any]:
    """
    Build the dictConfig configuration dictionary.

    Args:
        verbose: If True, set console to DEBUG level

    Returns:
        Dictionary suitable for logging.config.dictConfig()
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {"format": "%(levelname)s: %(name)s: %(message)s"},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": "DEBUG" if verbose else "WARNING",
                "formatter": "console",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            "kubie": {
                "level": "DEBUG" if verbose else "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def setup_logging(*, verbose: bool = False) -> None:
    """
    Configure logging for the kubie CLI.

    Log records go to stderr so that command output on stdout stays
    machine-readable.

    Args:
        verbose: If True, log at DEBUG level
    """
    logging.config.dictConfig(_build_logging_config(verbose=verbose))

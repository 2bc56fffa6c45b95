from __future__ import annotations

import logging
import logging.config


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure console logging for the application and return the package logger."""

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                },
            },
            "loggers": {
                "": {
                    "handlers": ["console"],
                    "level": str(level).upper(),
                },
            },
        }
    )
    return logging.getLogger("school_evaluation")

"""
Logging Setup

Console logging via logging.config.dictConfig. Called once when the
application module is imported.
"""

import logging.config

from hermes_proxy.config import get_settings

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _console_logger(level: str) -> dict:
    return {"handlers": ["console"], "level": level, "propagate": False}


def setup_logging():
    """
    Route the proxy, audit worker, uvicorn and httpx loggers to stdout

    DEBUG=true lowers the proxy loggers to DEBUG, which also logs forwarded
    request bodies, and lets httpx log every request line.
    """
    settings = get_settings()
    level = "DEBUG" if settings.DEBUG else "INFO"

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {"format": LOG_FORMAT, "datefmt": DATE_FORMAT},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "standard",
                    "stream": "ext://sys.stdout",
                },
            },
            "root": {"handlers": ["console"], "level": level},
            "loggers": {
                "hermes_proxy": _console_logger(level),
                "uvicorn": _console_logger("INFO"),
                "uvicorn.error": _console_logger("INFO"),
                "uvicorn.access": _console_logger("INFO"),
                "httpx": _console_logger("DEBUG" if settings.DEBUG else "WARNING"),
            },
        }
    )

"""Logging configuration for the application."""

import logging
import logging.config
from pythonjsonlogger import jsonlogger

from .settings import settings


def setup_logging(stream: str = "ext://sys.stdout", level: str = None, formatter: str = "json"):
    """Setup logging configuration.

    The proxy logs JSON to stdout. The dashboard passes ``ext://sys.stderr``
    and the plain ``standard`` formatter so log records stay readable next to
    the rendered screen.
    """
    level = (level or settings.log_level).upper()

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": jsonlogger.JsonFormatter,
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s"
            },
            "standard": {
                "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
            }
        },
        "handlers": {
            "default": {
                "level": level,
                "formatter": formatter,
                "class": "logging.StreamHandler",
                "stream": stream
            }
        },
        "loggers": {
            "": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            },
            "uvicorn": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            },
            "httpx": {
                "handlers": ["default"],
                "level": "WARNING",
                "propagate": False
            }
        }
    }

    logging.config.dictConfig(logging_config)
    return logging.getLogger(__name__)

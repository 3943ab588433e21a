import logging
import logging.config

from app.core.config import settings

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "[%(asctime)s] %(levelname)s in %(name)s: %(message)s",
        },
    },
    "handlers": {
        "default": {
            "formatter": "default",
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stdout",
        },
    },
    "root": {
        "level": settings.LOG_LEVEL.upper(),
        "handlers": ["default"],
    },
}


def get_logger(name: str) -> logging.Logger:
    """Get a configured logger instance.

    Args:
        name (str): Logger name, normally the calling module's __name__.

    Returns:
        logging.Logger: Configured logger instance with application-wide settings.
    """
    logging.config.dictConfig(LOGGING_CONFIG)

    return logging.getLogger(name)

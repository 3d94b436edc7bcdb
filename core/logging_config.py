import logging.config

from core.config_loader import settings

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {name} {process:d} {thread:d} {message}",
            "style": "{",
        },
        "simple": {
            "format": "{levelname} {name}: {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "INFO",
    },
    "loggers": {
        "uvicorn": {
            "handlers": ["console"],
            "level": "INFO",
            "propagate": False,
        },
    },
}

# application packages log at the configured level
for _name in ("gate", "staff", "shift", "gate_coverage"):
    LOGGING["loggers"][_name] = {
        "handlers": ["console"],
        "level": settings.LOG_LEVEL,
        "propagate": False,
    }


def setup_logging() -> None:
    logging.config.dictConfig(LOGGING)

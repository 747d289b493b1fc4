import json
import logging
import logging.config
import sys
from typing import Dict

from tripalbum.core.config import configs

PACKAGE_LOGGER = "tripalbum"

# Attributes every LogRecord carries; anything else came in through `extra=`
_RESERVED_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """
    One JSON object per record.

    `component` is the logger name relative to the package (e.g.
    "domain.clusterers.moment_clusterer"). Values passed through `extra=`, such as
    the photo and cluster counts the clusterers report, are kept under `context`.
    """
    def format(self, record):
        name = record.name
        if name.startswith(PACKAGE_LOGGER + "."):
            name = name[len(PACKAGE_LOGGER) + 1:]

        payload = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "component": name,
            "message": record.getMessage(),
        }
        context = {k: v for k, v in vars(record).items() if k not in _RESERVED_ATTRS}
        if context:
            payload["context"] = context
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def build_logging_config(environment: str, level: str, component_levels: Dict[str, str]) -> dict:
    """
    dictConfig for the package logger plus one logger per tuned component.

    `component_levels` maps names relative to the package ("domain.ranking") to
    levels, so a noisy stage can be quietened without touching the rest.
    """
    handler = "json" if environment == "production" else "default"
    loggers = {
        PACKAGE_LOGGER: {"level": level.upper(), "handlers": [handler], "propagate": False},
    }
    for component, component_level in component_levels.items():
        # Records still reach the handler through the package logger
        loggers[f"{PACKAGE_LOGGER}.{component}"] = {"level": component_level.upper()}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "json": {"()": JsonFormatter, "datefmt": "%Y-%m-%dT%H:%M:%S%z"},
        },
        "handlers": {
            handler: {"class": "logging.StreamHandler", "stream": sys.stdout, "formatter": handler},
        },
        "loggers": loggers,
        "root": {"level": "WARNING", "handlers": [handler]},
    }


def setup_logging():
    """Configures logging from `LOG_LEVEL`, `ENVIRONMENT` and `LOG_COMPONENT_LEVELS`."""
    logging.config.dictConfig(
        build_logging_config(configs.ENVIRONMENT, configs.LOG_LEVEL, configs.LOG_COMPONENT_LEVELS)
    )
    logging.getLogger(__name__).debug(
        "Logging configured",
        extra={"environment": configs.ENVIRONMENT, "component_levels": dict(configs.LOG_COMPONENT_LEVELS)},
    )

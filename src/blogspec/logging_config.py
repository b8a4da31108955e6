"""Logging setup: stdlib ``logging`` with correlation IDs on every record."""

from __future__ import annotations

import logging
import logging.config
from typing import TYPE_CHECKING, Any

from .correlation import get_correlation_id

if TYPE_CHECKING:
    from .config import AppConfig

LOG_FORMAT = "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s"


class CorrelationIdFilter(logging.Filter):
    """Stamps ``record.correlation_id`` from the current context (``-`` if unset)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        return True


def build_logging_config(level: str, *, echo_sql: bool = False) -> dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "correlation": {"()": CorrelationIdFilter},
        },
        "formatters": {
            "default": {"format": LOG_FORMAT},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "filters": ["correlation"],
            },
        },
        "loggers": {
            "blogspec": {"level": level, "handlers": ["console"], "propagate": False},
            "sqlalchemy.engine": {
                "level": "INFO" if echo_sql else "WARNING",
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def configure_logging(config: AppConfig) -> None:
    """Install the console handler for the ``blogspec`` and SQL logger trees."""
    logging.config.dictConfig(
        build_logging_config(config.log_level, echo_sql=config.echo_sql)
    )

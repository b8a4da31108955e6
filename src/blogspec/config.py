"""Application configuration."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from .primitives.exceptions import ConfigurationError

ENV_PREFIX = "BLOGSPEC_"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


@dataclass(frozen=True)
class AppConfig:
    """Configuration for the blog API.

    Attributes:
        database_url: SQLAlchemy async URL of the store.
        echo_sql: Log every SQL statement emitted by the engine.
        create_schema: Create missing tables when the application starts.
        log_level: Root log level name (``DEBUG``, ``INFO``, ...).
        seed_demo: Insert the demo blog and post at startup.
    """

    database_url: str = "sqlite+aiosqlite:///./blogging.db"
    echo_sql: bool = False
    create_schema: bool = True
    log_level: str = "INFO"
    seed_demo: bool = False

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AppConfig:
        """Build a config from ``BLOGSPEC_*`` environment variables.

        Unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        defaults = cls()

        log_level = env.get(f"{ENV_PREFIX}LOG_LEVEL", defaults.log_level).upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigurationError(f"Unknown log level: {log_level!r}")

        return cls(
            database_url=env.get(f"{ENV_PREFIX}DATABASE_URL", defaults.database_url),
            echo_sql=_parse_bool(env, "ECHO_SQL", defaults.echo_sql),
            create_schema=_parse_bool(env, "CREATE_SCHEMA", defaults.create_schema),
            log_level=log_level,
            seed_demo=_parse_bool(env, "SEED_DEMO", defaults.seed_demo),
        )


def _parse_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(f"{ENV_PREFIX}{name}")
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{ENV_PREFIX}{name} must be a boolean, got {raw!r}")

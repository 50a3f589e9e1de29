"""
Construction entrypoints for sqlguard.

The rest of the package only needs a live DBConnection; these helpers
build one from SQLGuardConfig for services and scripts that do not
manage connections themselves.
"""

from __future__ import annotations

import logging
from typing import Optional

from .config import SQLGuardConfig, load_config
from .db import DBConnection, DBConnector, PostgresBackend, SQLiteBackend
from .db.backend_base import DBBackend

logger = logging.getLogger(__name__)


def create_backend(config: SQLGuardConfig) -> DBBackend:
    """
    Instantiate the appropriate DB backend for a given configuration.
    """
    name = (config.db_backend or "").lower()

    if name == "sqlite":
        return SQLiteBackend(config.db_uri)

    if name in ("postgres", "postgresql", "psql"):
        return PostgresBackend(config.db_uri)

    raise ValueError(f"Unsupported sqlguard backend: {config.db_backend!r}")


def create_connector(config: Optional[SQLGuardConfig] = None) -> DBConnector:
    cfg = config or load_config()

    if cfg.enable_logging:
        logging.basicConfig(level=logging.INFO)
        logger.info("Initializing sqlguard with config: %s", cfg)

    return DBConnector(create_backend(cfg), cfg)


def connect(config: Optional[SQLGuardConfig] = None) -> DBConnection:
    """
    Convenience constructor used by services / scripts.

    Falls back to load_config() when no config is given.
    """
    return create_connector(config).get()


__all__ = [
    "create_backend",
    "create_connector",
    "connect",
]

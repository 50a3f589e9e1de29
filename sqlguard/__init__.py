"""
sqlguard

Top-level package initializer.

A convenience layer over DB-API drivers: one call prepares, binds,
executes and times a statement, and reports the outcome on a
StatementResult instead of raising.

Submodules include:
    - db/      connection wrapper, execution wrapper, helpers, backends
    - config   environment-driven configuration
    - errors   exception types
    - core     connection construction from config
"""

from .config import SQLGuardConfig, load_config
from .core import connect, create_backend, create_connector
from .errors import (
    SQLGuardError,
    QueryError,
    StatementFailed,
    ReservedFieldError,
    ConfigurationError,
)

__all__ = [
    "SQLGuardConfig",
    "load_config",
    "connect",
    "create_backend",
    "create_connector",
    "SQLGuardError",
    "QueryError",
    "StatementFailed",
    "ReservedFieldError",
    "ConfigurationError",
]

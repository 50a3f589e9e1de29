"""
Failure policies for the fail-fast helpers.

A malformed statement is treated as a programming bug. What happens
next is a policy decision made once per connection:

    AbortPolicy   terminate the process with the error message (default)
    RaisePolicy   raise StatementFailed to a caller-chosen boundary

Both run the optional diagnostics hook first when developer mode is on.
"""

from __future__ import annotations

import importlib
import logging
import sys
from abc import ABC, abstractmethod
from typing import Any, Callable, NoReturn, Optional

from ..errors import ConfigurationError, StatementFailed

logger = logging.getLogger(__name__)

DiagnosticsHook = Callable[[Any], None]


class FailurePolicy(ABC):
    """
    Strategy invoked with a failed StatementResult.

    Parameters
    ----------
    diagnostics:
        Optional callable taking the failed result. Advisory only: its
        return value is ignored and its exceptions are logged.
    developer:
        The diagnostics hook only runs when this is True.
    """

    def __init__(self, diagnostics: Optional[DiagnosticsHook] = None, developer: bool = False):
        self.diagnostics = diagnostics
        self.developer = developer

    def run_diagnostics(self, result: Any) -> None:
        if not (self.developer and self.diagnostics):
            return
        try:
            self.diagnostics(result)
        except Exception:
            logger.exception("Diagnostics hook failed for %r", result.sql)

    @abstractmethod
    def handle(self, result: Any) -> NoReturn:
        raise NotImplementedError


class AbortPolicy(FailurePolicy):
    """Terminate the process, printing the joined error message."""

    def handle(self, result: Any) -> NoReturn:
        self.run_diagnostics(result)
        sys.exit(result.error_message)


class RaisePolicy(FailurePolicy):
    """Raise StatementFailed carrying the failed result."""

    def handle(self, result: Any) -> NoReturn:
        self.run_diagnostics(result)
        raise StatementFailed(result)


POLICIES = {
    "abort": AbortPolicy,
    "raise": RaisePolicy,
}


def load_hook(reference: str) -> DiagnosticsHook:
    """
    Resolve a ``"package.module:function"`` reference to a callable.
    """
    module_name, _, attr = reference.partition(":")
    if not module_name or not attr:
        raise ConfigurationError(
            f"Diagnostics hook must look like 'module:function', got {reference!r}"
        )
    try:
        module = importlib.import_module(module_name)
        hook = getattr(module, attr)
    except (ImportError, AttributeError) as e:
        raise ConfigurationError(f"Cannot load diagnostics hook {reference!r}: {e}") from e
    if not callable(hook):
        raise ConfigurationError(f"Diagnostics hook {reference!r} is not callable")
    return hook


def policy_from_config(config: Any = None) -> FailurePolicy:
    """
    Build the failure policy named by ``config.on_failure``.

    A missing config yields a plain AbortPolicy.
    """
    if config is None:
        return AbortPolicy()

    name = (getattr(config, "on_failure", "abort") or "abort").strip().lower()
    policy_cls = POLICIES.get(name)
    if policy_cls is None:
        raise ConfigurationError(
            f"Unknown failure policy {config.on_failure!r}; expected one of {sorted(POLICIES)}"
        )

    reference = getattr(config, "diagnostics_hook", None)
    hook = load_hook(reference) if reference else None
    return policy_cls(diagnostics=hook, developer=bool(getattr(config, "developer", False)))


__all__ = [
    "FailurePolicy",
    "AbortPolicy",
    "RaisePolicy",
    "load_hook",
    "policy_from_config",
]

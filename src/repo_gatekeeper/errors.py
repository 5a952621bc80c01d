"""Exception hierarchy for repo-gatekeeper.

The matchers themselves never raise: malformed rules collapse silently and
unknown queries are rejected.  Errors come only from the layers around
them, reading rule files and loading configuration.
"""
from __future__ import annotations

from pathlib import Path


class GatekeeperError(Exception):
    """Base class for all repo-gatekeeper errors."""


class RuleSourceError(GatekeeperError):
    """Raised when an existing rule file cannot be read.

    Attributes
    ----------
    source:
        The rule file that failed.
    """

    def __init__(self, message: str, source: str | Path | None = None) -> None:
        self.source = source
        super().__init__(message)


class GatekeeperConfigError(GatekeeperError, ValueError):
    """Raised when a gatekeeper YAML config is malformed or invalid.

    Attributes
    ----------
    config_path:
        The path to the config file that caused the error, if known.
    """

    def __init__(self, message: str, config_path: str | None = None) -> None:
        self.config_path = config_path
        prefix = f"[{config_path}] " if config_path else ""
        super().__init__(f"{prefix}{message}")

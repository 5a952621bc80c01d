"""Gatekeeper configuration loader with Pydantic v2 validation.

Loads a ``gatekeeper.yaml`` file into a typed :class:`GatekeeperConfig`.
Flat dotted properties (as passed on the command line or read from the
environment) can then be layered on top with :func:`apply_properties`;
properties win over the file.

Schema
------
::

    enabled: true
    basedir: .gatekeeper
    filters:
      group_id:
        enabled: true
        basedir: null      # defaults to <basedir>/group_id
      prefixes:
        enabled: true
        basedir: null      # defaults to <basedir>/prefixes

Example
-------
>>> loader = ConfigLoader()
>>> config = loader.load_string("filters: {prefixes: {enabled: false}}")
>>> config.filters.prefixes.enabled
False
>>> apply_properties(config, {"gatekeeper.prefixes.enabled": "true"}).filters.prefixes.enabled
True
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

import yaml
from pydantic import BaseModel, Field, ValidationError

from repo_gatekeeper.errors import GatekeeperConfigError

logger = logging.getLogger(__name__)

PROPERTY_PREFIX = "gatekeeper."

_FILTER_NAMES: frozenset[str] = frozenset({"group_id", "prefixes"})


class FilterConfig(BaseModel):
    """Per-filter switches."""

    model_config = {"extra": "allow"}

    enabled: bool = Field(default=True)
    basedir: Path | None = Field(default=None)


class FiltersConfig(BaseModel):
    """Configuration for each repository filter source."""

    model_config = {"extra": "allow"}

    group_id: FilterConfig = Field(default_factory=FilterConfig)
    prefixes: FilterConfig = Field(default_factory=FilterConfig)


class GatekeeperConfig(BaseModel):
    """Top-level gatekeeper configuration schema.

    All sections are optional and fall back to defaults.
    """

    model_config = {"extra": "allow"}

    enabled: bool = Field(default=True)
    basedir: Path = Field(default=Path(".gatekeeper"))
    filters: FiltersConfig = Field(default_factory=FiltersConfig)

    def filter_config(self, name: str) -> FilterConfig:
        """Return the :class:`FilterConfig` for the filter called *name*."""
        if name not in _FILTER_NAMES:
            raise KeyError(f"Unknown filter '{name}'. Valid: {sorted(_FILTER_NAMES)}")
        return getattr(self.filters, name)

    def filter_basedir(self, name: str) -> Path:
        """Directory holding the rule files of filter *name*."""
        configured = self.filter_config(name).basedir
        if configured is not None:
            return configured
        return self.basedir / name


class ConfigLoader:
    """Loads and validates gatekeeper YAML configuration.

    Example
    -------
    >>> loader = ConfigLoader()
    >>> config = loader.load(Path("gatekeeper.yaml"))
    """

    def load(self, config_path: str | Path) -> GatekeeperConfig:
        """Load and validate a gatekeeper YAML file.

        Raises
        ------
        FileNotFoundError:
            When the config file does not exist.
        GatekeeperConfigError:
            When the YAML cannot be parsed or fails validation.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Gatekeeper config not found: {config_path}")

        with config_path.open("r", encoding="utf-8") as fh:
            text = fh.read()
        config = self._validate(text, str(config_path))
        logger.debug("Loaded gatekeeper config from %s", config_path)
        return config

    def load_string(self, yaml_content: str) -> GatekeeperConfig:
        """Load and validate a YAML string directly."""
        return self._validate(yaml_content, None)

    def defaults(self) -> GatekeeperConfig:
        """Return a default configuration with all defaults applied."""
        return GatekeeperConfig()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _validate(self, yaml_content: str, config_path: str | None) -> GatekeeperConfig:
        try:
            raw = yaml.safe_load(yaml_content) or {}
        except yaml.YAMLError as exc:
            raise GatekeeperConfigError(f"Invalid YAML: {exc}", config_path) from exc
        if not isinstance(raw, dict):
            raise GatekeeperConfigError(
                f"Top level must be a mapping, got {type(raw).__name__}.", config_path
            )
        try:
            return GatekeeperConfig.model_validate(raw)
        except ValidationError as exc:
            raise GatekeeperConfigError(str(exc), config_path) from exc


def apply_properties(
    config: GatekeeperConfig,
    properties: Mapping[str, str],
) -> GatekeeperConfig:
    """Return a copy of *config* with dotted *properties* applied on top.

    Recognised keys are ``gatekeeper.enabled``, ``gatekeeper.basedir``,
    ``gatekeeper.<filter>.enabled`` and ``gatekeeper.<filter>.basedir``.
    Other keys are ignored.  Values are strings and are coerced by the
    pydantic models, so ``"false"`` and ``"0"`` both disable.

    Raises
    ------
    GatekeeperConfigError:
        When an override value fails validation.
    """
    data = config.model_dump()
    for key, value in properties.items():
        if not key.startswith(PROPERTY_PREFIX):
            continue
        parts = key[len(PROPERTY_PREFIX):].split(".")
        if len(parts) == 1 and parts[0] in ("enabled", "basedir"):
            data[parts[0]] = value
        elif len(parts) == 2 and parts[0] in _FILTER_NAMES and parts[1] in ("enabled", "basedir"):
            data["filters"][parts[0]][parts[1]] = value
        else:
            logger.debug("Ignoring unknown gatekeeper property %s", key)
    try:
        return GatekeeperConfig.model_validate(data)
    except ValidationError as exc:
        raise GatekeeperConfigError(str(exc)) from exc

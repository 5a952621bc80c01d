"""Shared plumbing for repository filter sources.

Provides the :class:`FilterResult` value returned by every filter, the
:class:`MatcherCache` holding one rule tree per remote repository, and the
:class:`FilterSourceSupport` base class that resolves rule file locations
and the enabled switches from :class:`~repo_gatekeeper.config.GatekeeperConfig`.

Rule trees are built at most once per repository and never invalidated, so
edits to a rule file are not noticed by a running filter.  Call
:meth:`MatcherCache.clear` to start over.
"""
from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Generic, Hashable, TypeVar

from repo_gatekeeper.config import GatekeeperConfig
from repo_gatekeeper.errors import RuleSourceError

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M")

_MISSING = object()


@dataclass(frozen=True)
class FilterResult:
    """Immutable outcome of a filter check.

    Attributes
    ----------
    accepted:
        Whether the fetch may proceed.
    reasoning:
        Human-readable justification for the decision.
    """

    accepted: bool
    reasoning: str

    def __bool__(self) -> bool:
        return self.accepted


class MatcherCache(Generic[T]):
    """Keyed store that builds each value at most once.

    Concurrent callers asking for the same key block until the first one
    has finished loading it, then share the result.  A thread asking again
    for a key it is itself still loading gets *reentrant_default* back
    instead of deadlocking.
    """

    def __init__(self) -> None:
        self._values: dict[Hashable, T] = {}
        self._locks: dict[Hashable, threading.Lock] = {}
        self._guard = threading.Lock()
        self._local = threading.local()

    def get_or_load(
        self,
        key: Hashable,
        loader: Callable[[Hashable], T],
        reentrant_default: T | None = None,
    ) -> T | None:
        """Return the value for *key*, calling ``loader(key)`` if it is not cached yet."""
        cached = self._values.get(key, _MISSING)
        if cached is not _MISSING:
            return cached  # type: ignore[return-value]

        loading: set[Hashable] = self._loading()
        if key in loading:
            return reentrant_default

        with self._guard:
            lock = self._locks.setdefault(key, threading.Lock())
        with lock:
            if key in self._values:
                return self._values[key]
            loading.add(key)
            try:
                value = loader(key)
            finally:
                loading.discard(key)
            self._values[key] = value
            return value

    def clear(self) -> None:
        """Forget every loaded value.  Loads still in flight keep their lock."""
        with self._guard:
            self._values.clear()

    def __contains__(self, key: Hashable) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def _loading(self) -> set[Hashable]:
        loading = getattr(self._local, "keys", None)
        if loading is None:
            loading = set()
            self._local.keys = loading
        return loading


class FilterSourceSupport:
    """Base class for filter sources backed by per-repository rule files.

    Subclasses set :attr:`NAME` (the config section under ``filters``) and
    :attr:`FILE_PREFIX`.  The rule file of a repository lives at
    ``<basedir>/<FILE_PREFIX><repository id>.txt``.

    Parameters
    ----------
    config:
        Gatekeeper configuration.  Defaults are used when omitted.
    """

    NAME: str = ""
    FILE_PREFIX: str = ""
    FILE_SUFFIX: str = ".txt"

    def __init__(self, config: GatekeeperConfig | None = None) -> None:
        self._config = config if config is not None else GatekeeperConfig()

    @property
    def name(self) -> str:
        return self.NAME

    @property
    def enabled(self) -> bool:
        """``True`` when both the master switch and this filter's switch are on."""
        return self._config.enabled and self._config.filter_config(self.NAME).enabled

    @property
    def basedir(self) -> Path:
        return self._config.filter_basedir(self.NAME)

    def rule_file(self, repository_id: str) -> Path:
        """Return the rule file path for *repository_id*; it may not exist."""
        return self.basedir / f"{self.FILE_PREFIX}{repository_id}{self.FILE_SUFFIX}"

    def read_rule_file(self, path: Path, matcher: M) -> M | None:
        """Load *matcher* from the rule file at *path*.

        Returns
        -------
        The loaded matcher, or ``None`` when *path* is not a readable file.

        Raises
        ------
        RuleSourceError
            If the file exists but reading it fails.
        """
        if not path.is_file() or not os.access(path, os.R_OK):
            logger.debug("Rule file %s not found or not readable", path)
            return None
        try:
            with path.open("r", encoding="utf-8") as fh:
                matcher.load(fh)  # type: ignore[attr-defined]
        except (OSError, UnicodeDecodeError) as exc:
            raise RuleSourceError(f"Cannot read rule file {path}: {exc}", path) from exc
        return matcher

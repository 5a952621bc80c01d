"""Remote repository filter on repository path prefixes.

Backed by one file per remote repository listing every path prefix the
repository can serve, one ``/``-separated prefix per line.  Artifacts and
metadata whose layout path has no recorded prefix are filtered out.  Some
repositories publish such a file themselves (``.meta/prefixes.txt``); a
caller that downloads it can hand the local copy over through
*prefix_resolver*.

Lookup order for the prefix file of a repository:

1. ``prefix_resolver(repository)``, when given and it returns a path;
2. ``<basedir>/prefixes-<repository id>.txt``.

Blocked repositories are never loaded.  Once loaded, prefixes are cached
for the lifetime of the source.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from repo_gatekeeper.config import GatekeeperConfig
from repo_gatekeeper.filters.layout import layout_for
from repo_gatekeeper.filters.model import Artifact, Metadata, RemoteRepository
from repo_gatekeeper.filters.support import FilterResult, FilterSourceSupport, MatcherCache
from repo_gatekeeper.ruletree import prefix
from repo_gatekeeper.ruletree.prefix import PrefixMatcher

logger = logging.getLogger(__name__)

PrefixResolver = Callable[[RemoteRepository], "Path | None"]

NOT_PRESENT_RESULT = FilterResult(True, "Prefix rules not present")
DISABLED_RESULT = FilterResult(True, "Prefix filter disabled")


class PrefixesFilterSource(FilterSourceSupport):
    """Filters artifacts and metadata by their path within the repository.

    Parameters
    ----------
    config:
        Gatekeeper configuration.
    prefix_resolver:
        Optional callable returning a local copy of the prefix file the
        repository publishes, or ``None`` when it has none.
    """

    NAME = "prefixes"
    FILE_PREFIX = "prefixes-"

    def __init__(
        self,
        config: GatekeeperConfig | None = None,
        prefix_resolver: PrefixResolver | None = None,
    ) -> None:
        super().__init__(config)
        self._prefix_resolver = prefix_resolver
        self._prefixes: MatcherCache[PrefixMatcher] = MatcherCache()

    # ------------------------------------------------------------------
    # Filter API
    # ------------------------------------------------------------------

    def accept_artifact(self, repository: RemoteRepository, artifact: Artifact) -> FilterResult:
        if not self.enabled:
            return DISABLED_RESULT
        layout = layout_for(repository)
        if layout is None:
            return self._unsupported(repository)
        return self.accept_path(repository, layout.artifact_path(artifact))

    def accept_metadata(self, repository: RemoteRepository, metadata: Metadata) -> FilterResult:
        if not self.enabled:
            return DISABLED_RESULT
        layout = layout_for(repository)
        if layout is None:
            return self._unsupported(repository)
        return self.accept_path(repository, layout.metadata_path(metadata))

    def accept_path(self, repository: RemoteRepository, path: str) -> FilterResult:
        """Decide whether the repository-relative *path* may be fetched."""
        if not self.enabled:
            return DISABLED_RESULT
        root = self.prefixes_for(repository)
        if root is prefix.SENTINEL:
            return NOT_PRESENT_RESULT
        if root.accepts(path):
            return FilterResult(True, f"Prefix {path} allowed from {repository}")
        return FilterResult(False, f"Prefix {path} NOT allowed from {repository}")

    # ------------------------------------------------------------------
    # Prefixes
    # ------------------------------------------------------------------

    def prefixes_for(self, repository: RemoteRepository) -> PrefixMatcher:
        """Return the cached prefix tree of *repository*, loading it on first use."""
        if repository.blocked:
            return prefix.SENTINEL
        return self._prefixes.get_or_load(
            repository.id,
            lambda _key: self._load_prefixes(repository),
            reentrant_default=prefix.SENTINEL,
        )

    def clear(self) -> None:
        self._prefixes.clear()

    def _load_prefixes(self, repository: RemoteRepository) -> PrefixMatcher:
        path: Path | None = None
        if self._prefix_resolver is not None:
            path = self._prefix_resolver(repository)
        if path is None:
            path = self.rule_file(repository.id)

        logger.debug("Loading prefixes for remote repository %s from file '%s'", repository.id, path)
        matcher = self.read_rule_file(path, PrefixMatcher(repository.id))
        if matcher is None:
            logger.debug("Prefix file for remote repository %s not found at '%s'", repository, path)
            return prefix.SENTINEL
        logger.info(
            "Loaded %d prefixes for remote repository %s",
            matcher.rule_count,
            repository.id,
        )
        return matcher

    @staticmethod
    def _unsupported(repository: RemoteRepository) -> FilterResult:
        return FilterResult(True, f"Unsupported layout: {repository}")
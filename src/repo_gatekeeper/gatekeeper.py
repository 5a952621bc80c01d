"""Combined repository gatekeeper.

Runs every enabled filter source against a fetch request and accepts it only
when all of them accept.  Each source's :class:`FilterResult` is kept so
callers can report why a fetch was refused.

Example
-------
::

    from repo_gatekeeper import RepositoryGatekeeper
    from repo_gatekeeper.filters import Artifact, RemoteRepository

    gatekeeper = RepositoryGatekeeper.from_config(config)
    decision = gatekeeper.accept_artifact(
        RemoteRepository("central", "https://repo.maven.apache.org/maven2"),
        Artifact.parse("org.apache.maven:maven-core:3.9.6"),
    )
    if not decision:
        print(decision.reasoning)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

from repo_gatekeeper.config import GatekeeperConfig
from repo_gatekeeper.filters.group_id import GroupIdFilterSource
from repo_gatekeeper.filters.model import Artifact, Metadata, RemoteRepository
from repo_gatekeeper.filters.prefixes import PrefixesFilterSource, PrefixResolver
from repo_gatekeeper.filters.support import FilterResult

logger = logging.getLogger(__name__)


class FilterSource(Protocol):
    """What the gatekeeper needs from a filter source."""

    @property
    def name(self) -> str: ...

    @property
    def enabled(self) -> bool: ...

    def accept_artifact(self, repository: RemoteRepository, artifact: Artifact) -> FilterResult: ...

    def accept_metadata(self, repository: RemoteRepository, metadata: Metadata) -> FilterResult: ...


@dataclass(frozen=True)
class GatekeeperDecision:
    """Aggregate result of running every enabled filter source.

    Attributes
    ----------
    accepted:
        ``True`` when no source rejected the request.
    results:
        Per-source results keyed by source name, in evaluation order.
    """

    accepted: bool
    results: dict[str, FilterResult] = field(default_factory=dict)

    @property
    def reasoning(self) -> str:
        """The reasoning of every source joined into one line."""
        if not self.results:
            return "Gatekeeper disabled"
        return "; ".join(f"{name}: {result.reasoning}" for name, result in self.results.items())

    def __bool__(self) -> bool:
        return self.accepted


class RepositoryGatekeeper:
    """Evaluates fetch requests against all enabled filter sources.

    Parameters
    ----------
    sources:
        Filter sources in evaluation order.
    enabled:
        Master switch.  When ``False`` every request is accepted and no
        source is consulted.
    """

    def __init__(self, sources: list[FilterSource], enabled: bool = True) -> None:
        self._sources = list(sources)
        self._enabled = enabled

    @classmethod
    def from_config(
        cls,
        config: GatekeeperConfig,
        prefix_resolver: PrefixResolver | None = None,
    ) -> RepositoryGatekeeper:
        """Build a gatekeeper with the group id and prefix sources."""
        sources: list[FilterSource] = [
            GroupIdFilterSource(config),
            PrefixesFilterSource(config, prefix_resolver=prefix_resolver),
        ]
        return cls(sources, enabled=config.enabled)

    @property
    def sources(self) -> list[FilterSource]:
        return list(self._sources)

    def accept_artifact(self, repository: RemoteRepository, artifact: Artifact) -> GatekeeperDecision:
        return self._decide(
            repository,
            str(artifact),
            {s.name: s.accept_artifact(repository, artifact) for s in self._active()},
        )

    def accept_metadata(self, repository: RemoteRepository, metadata: Metadata) -> GatekeeperDecision:
        return self._decide(
            repository,
            f"{metadata.group_id}:{metadata.artifact_id}:{metadata.version}:{metadata.type}",
            {s.name: s.accept_metadata(repository, metadata) for s in self._active()},
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _active(self) -> list[FilterSource]:
        if not self._enabled:
            return []
        return [s for s in self._sources if s.enabled]

    def _decide(
        self,
        repository: RemoteRepository,
        subject: str,
        results: dict[str, FilterResult],
    ) -> GatekeeperDecision:
        accepted = all(r.accepted for r in results.values())
        if not accepted:
            logger.debug("Rejected %s from %s: %s", subject, repository.id, results)
        return GatekeeperDecision(accepted=accepted, results=results)

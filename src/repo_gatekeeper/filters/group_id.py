"""Remote repository filter on the group coordinate.

Backed by one rule file per remote repository listing the groups that may
be fetched from it, in the namespace rule syntax (see
:mod:`repo_gatekeeper.ruletree.parser`).  Groups not allowed by the file are
filtered out.  A repository with no rule file is not filtered at all.

The rule file is expected at ``<basedir>/groupId-<repository id>.txt``.
Once loaded the rules are cached for the lifetime of the source, so edits
made to the file afterwards are not noticed.

Example
-------
::

    source = GroupIdFilterSource(config)
    result = source.accept_artifact(central, Artifact.parse("org.apache:foo:1.0"))
    result.reasoning  # "G:org.apache allowed from central (...)"
"""
from __future__ import annotations

import logging

from repo_gatekeeper.config import GatekeeperConfig
from repo_gatekeeper.filters.model import Artifact, Metadata, RemoteRepository
from repo_gatekeeper.filters.support import FilterResult, FilterSourceSupport, MatcherCache
from repo_gatekeeper.ruletree import namespace
from repo_gatekeeper.ruletree.namespace import NamespaceMatcher

logger = logging.getLogger(__name__)

NOT_PRESENT_RESULT = FilterResult(True, "GroupId rules not present")
DISABLED_RESULT = FilterResult(True, "GroupId filter disabled")


class GroupIdFilterSource(FilterSourceSupport):
    """Filters artifacts and metadata by group against per-repository rules."""

    NAME = "group_id"
    FILE_PREFIX = "groupId-"

    def __init__(self, config: GatekeeperConfig | None = None) -> None:
        super().__init__(config)
        self._rules: MatcherCache[NamespaceMatcher] = MatcherCache()

    # ------------------------------------------------------------------
    # Filter API
    # ------------------------------------------------------------------

    def accept_artifact(self, repository: RemoteRepository, artifact: Artifact) -> FilterResult:
        return self.accept_group_id(repository, artifact.group_id)

    def accept_metadata(self, repository: RemoteRepository, metadata: Metadata) -> FilterResult:
        return self.accept_group_id(repository, metadata.group_id)

    def accept_group_id(self, repository: RemoteRepository, group_id: str) -> FilterResult:
        """Decide whether *group_id* may be fetched from *repository*."""
        if not self.enabled:
            return DISABLED_RESULT
        rules = self.rules_for(repository)
        if rules is namespace.SENTINEL:
            return NOT_PRESENT_RESULT
        if rules.accepts(group_id):
            return FilterResult(True, f"G:{group_id} allowed from {repository}")
        return FilterResult(False, f"G:{group_id} NOT allowed from {repository}")

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------

    def rules_for(self, repository: RemoteRepository) -> NamespaceMatcher:
        """Return the cached rule tree of *repository*, loading it on first use."""
        return self._rules.get_or_load(
            repository.id,
            lambda _key: self._load_rules(repository),
            reentrant_default=namespace.SENTINEL,
        )

    def clear(self) -> None:
        self._rules.clear()

    def _load_rules(self, repository: RemoteRepository) -> NamespaceMatcher:
        path = self.rule_file(repository.id)
        matcher = self.read_rule_file(path, NamespaceMatcher(repository.id))
        if matcher is None:
            return namespace.SENTINEL
        logger.info(
            "Loaded %d group rules for remote repository %s",
            matcher.rule_count,
            repository.id,
        )
        return matcher

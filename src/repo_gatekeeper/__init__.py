"""repo-gatekeeper: decide which artifacts may be fetched from which repository.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import repo_gatekeeper as gate
>>> matcher = gate.NamespaceMatcher()
>>> matcher.load(["org.apache", "!org.apache.internal"])
2
>>> matcher.accepts("org.apache.maven")
True
>>> matcher.accepts("org.apache.internal.tools")
False
"""
from __future__ import annotations

__version__: str = "0.1.0"

# ---------------------------------------------------------------------------
# Rule trees
# ---------------------------------------------------------------------------
from repo_gatekeeper.ruletree import (
    NAMESPACE_SENTINEL,
    PREFIX_SENTINEL,
    NamespaceMatcher,
    PrefixMatcher,
    RuleNode,
)

# ---------------------------------------------------------------------------
# Configuration and errors
# ---------------------------------------------------------------------------
from repo_gatekeeper.config import ConfigLoader, GatekeeperConfig, apply_properties
from repo_gatekeeper.errors import GatekeeperConfigError, GatekeeperError, RuleSourceError

# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------
from repo_gatekeeper.filters import (
    Artifact,
    FilterResult,
    GroupIdFilterSource,
    Metadata,
    PrefixesFilterSource,
    RemoteRepository,
)
from repo_gatekeeper.gatekeeper import GatekeeperDecision, RepositoryGatekeeper

__all__ = [
    "__version__",
    # Rule trees
    "NAMESPACE_SENTINEL",
    "NamespaceMatcher",
    "PREFIX_SENTINEL",
    "PrefixMatcher",
    "RuleNode",
    # Configuration and errors
    "ConfigLoader",
    "GatekeeperConfig",
    "GatekeeperConfigError",
    "GatekeeperError",
    "RuleSourceError",
    "apply_properties",
    # Filters
    "Artifact",
    "FilterResult",
    "GatekeeperDecision",
    "GroupIdFilterSource",
    "Metadata",
    "PrefixesFilterSource",
    "RemoteRepository",
    "RepositoryGatekeeper",
]

"""Remote repository filter sources backed by rule files.

Example
-------
::

    from repo_gatekeeper.filters import GroupIdFilterSource, RemoteRepository

    source = GroupIdFilterSource(config)
    result = source.accept_group_id(RemoteRepository("central"), "org.apache.maven")
    assert result.accepted
"""
from __future__ import annotations

from repo_gatekeeper.filters.group_id import GroupIdFilterSource
from repo_gatekeeper.filters.layout import Maven2Layout, RepositoryLayout, layout_for
from repo_gatekeeper.filters.model import Artifact, Metadata, RemoteRepository
from repo_gatekeeper.filters.prefixes import PrefixesFilterSource
from repo_gatekeeper.filters.support import FilterResult, FilterSourceSupport, MatcherCache

__all__ = [
    # Model
    "Artifact",
    "Metadata",
    "RemoteRepository",
    # Layout
    "Maven2Layout",
    "RepositoryLayout",
    "layout_for",
    # Sources
    "FilterResult",
    "FilterSourceSupport",
    "GroupIdFilterSource",
    "MatcherCache",
    "PrefixesFilterSource",
]

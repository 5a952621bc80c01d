"""Prefix matcher for slash-separated repository paths.

Each rule line records a path prefix such as ``/org/apache``.  A query path
is accepted when walking it down the tree reaches the terminus of a
recorded prefix: a node with no children.  Walking stops early as soon as a
leaf is reached, so anything below a recorded prefix is accepted too.

Example
-------
>>> matcher = PrefixMatcher()
>>> matcher.load(["# central", "/org/apache", "/com/foo/bar"])
2
>>> matcher.accepts("/org/apache/maven/maven-core/3.9.6/maven-core-3.9.6.pom")
True
>>> matcher.accepts("/com/foo/maven")
False
"""
from __future__ import annotations

from typing import Iterable

from repo_gatekeeper.ruletree.node import RuleNode
from repo_gatekeeper.ruletree.parser import PATH_SEPARATOR, iter_rule_lines, split_segments


class PrefixMatcher:
    """Rule tree over recorded path prefixes.

    The tree holds structure only: leaves mark recorded prefixes and every
    other node is scaffolding.  Build once with :meth:`load`; :meth:`accepts`
    is a read-only walk safe for concurrent callers.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._root = RuleNode()
        self._rule_count = 0

    @property
    def root(self) -> RuleNode:
        return self._root

    @property
    def rule_count(self) -> int:
        return self._rule_count

    def load(self, lines: Iterable[str]) -> int:
        """Record every prefix in *lines* and return how many were accepted."""
        count = 0
        for line in iter_rule_lines(lines):
            count += 1
            node = self._root
            for segment in split_segments(line, PATH_SEPARATOR):
                node = node.add_or_get_child(segment)
        self._rule_count += count
        return count

    def accepts(self, path: str) -> bool:
        """Return ``True`` when *path* reaches the terminus of a recorded prefix.

        A path that runs out while the tree is still branching, or that
        diverges from the tree before any leaf, is rejected.  The root never
        counts as a recorded prefix, so an empty tree rejects everything,
        including the empty path.
        """
        node: RuleNode | None = self._root
        for segment in split_segments(path, PATH_SEPARATOR):
            node = node.get_child(segment)
            if node is None or node.is_leaf():
                break
        return node is not None and node is not self._root and node.is_leaf()

    def dump(self) -> list[str]:
        return self._root.dump()

    def __repr__(self) -> str:
        return f"PrefixMatcher(name={self.name!r}, rules={self._rule_count})"


class _SentinelMatcher(PrefixMatcher):
    """Empty matcher shared by every source without prefixes; never loaded."""

    def load(self, lines: Iterable[str]) -> int:
        raise TypeError("the 'no rules' sentinel matcher is read-only")


SENTINEL = _SentinelMatcher("sentinel")
"""Marks a rule source for which no prefixes are configured."""

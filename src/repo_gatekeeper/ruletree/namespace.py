"""Namespace matcher for dot-separated group coordinates.

Rules are organised as a prefix tree keyed by namespace segment.  Each rule
terminates on a node carrying a decision (allow or deny) and a scope:

- *cascading* rules apply to their node and to every descendant reached
  below it, until the walk meets another node on the path;
- *exact-only* rules apply only to a query that ends exactly on their node.
  Deeper and shallower queries do not see them, so an ancestor's cascading
  rule stays in effect for those.

Every node the walk passes through replaces the running decision, including
intermediate nodes that only exist because a deeper rule was recorded: those
carry no decision and reset it to "no rule".  The last applicable node on the
query's path wins.  Declaration order in the rule file does not matter,
except that re-declaring the same namespace overwrites the earlier
declaration.  A query that no rule covers is rejected.

Example
-------
>>> matcher = NamespaceMatcher()
>>> matcher.load(["org.apache", "!=org.apache.bad"])
2
>>> matcher.accepts("org.apache.maven")
True
>>> matcher.accepts("org.apache.bad")
False
>>> matcher.accepts("org.apache.bad.child")
True
>>> matcher.accepts("org")
False
"""
from __future__ import annotations

from typing import Iterable

from repo_gatekeeper.ruletree.node import RuleNode
from repo_gatekeeper.ruletree.parser import (
    NAMESPACE_SEPARATOR,
    iter_rule_lines,
    parse_namespace_rule,
    split_segments,
)


class NamespaceMatcher:
    """Allow/deny rule tree over dotted namespaces.

    Build the tree once with :meth:`load`, then call :meth:`accepts` from
    any number of threads.  Queries never mutate the tree.

    Parameters
    ----------
    name:
        Label for the rule source this tree was built from.  Used only for
        display.
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
        """Total number of rule lines accepted across all :meth:`load` calls."""
        return self._rule_count

    # ------------------------------------------------------------------
    # Build
    # ------------------------------------------------------------------

    def load(self, lines: Iterable[str]) -> int:
        """Add the rules found in *lines* to the tree.

        Parameters
        ----------
        lines:
            Raw rule file lines, in file order.  Blank lines and ``#``
            comments are skipped.

        Returns
        -------
        int
            The number of rule lines accepted by this call.
        """
        count = 0
        for line in iter_rule_lines(lines):
            count += 1
            rule = parse_namespace_rule(line)
            if not rule.segments:
                continue
            node = self._root
            for segment in rule.segments:
                node = node.add_or_get_child(segment)
            node.exact_only = rule.exact_only
            node.decision = rule.allow
        self._rule_count += count
        return count

    # ------------------------------------------------------------------
    # Query
    # ------------------------------------------------------------------

    def accepts(self, coordinate: str) -> bool:
        """Return ``True`` when the last applicable node on the path allows *coordinate*."""
        segments = split_segments(coordinate, NAMESPACE_SEPARATOR)
        total = len(segments)
        best: bool | None = None
        node: RuleNode | None = self._root
        for consumed, segment in enumerate(segments, start=1):
            node = node.get_child(segment)
            if node is None:
                break
            if not node.exact_only or consumed == total:
                best = node.decision
        return best is True

    def dump(self) -> list[str]:
        return self._root.dump()

    def __repr__(self) -> str:
        return f"NamespaceMatcher(name={self.name!r}, rules={self._rule_count})"


class _SentinelMatcher(NamespaceMatcher):
    """Empty matcher shared by every source without group rules; never loaded."""

    def load(self, lines: Iterable[str]) -> int:
        raise TypeError("the 'no rules' sentinel matcher is read-only")


SENTINEL = _SentinelMatcher("sentinel")
"""Marks a rule source for which no group rules are configured."""

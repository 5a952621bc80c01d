"""Rule-tree matching engine.

Two matchers share the :class:`RuleNode` substrate:

- :class:`NamespaceMatcher` evaluates dotted group coordinates against
  allow/deny rules with cascading and exact-only scopes;
- :class:`PrefixMatcher` checks slash-separated paths against recorded
  path prefixes.
"""
from __future__ import annotations

from repo_gatekeeper.ruletree import namespace, prefix
from repo_gatekeeper.ruletree.namespace import NamespaceMatcher
from repo_gatekeeper.ruletree.node import RuleNode
from repo_gatekeeper.ruletree.parser import NamespaceRule, iter_rule_lines, parse_namespace_rule
from repo_gatekeeper.ruletree.prefix import PrefixMatcher

NAMESPACE_SENTINEL = namespace.SENTINEL
PREFIX_SENTINEL = prefix.SENTINEL

__all__ = [
    "NAMESPACE_SENTINEL",
    "NamespaceMatcher",
    "NamespaceRule",
    "PREFIX_SENTINEL",
    "PrefixMatcher",
    "RuleNode",
    "iter_rule_lines",
    "parse_namespace_rule",
]

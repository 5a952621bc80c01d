"""Tree substrate shared by the namespace and prefix matchers.

A :class:`RuleNode` represents one segment of a dotted namespace or a
slash-delimited path.  Children are keyed by segment name and looked up by
exact string.  The tree owns all of its descendants and there are no
back-references, so traversal is strictly root-to-leaf.

Nodes are mutated only while a matcher is loading its rules.  Once built,
every read method is safe for any number of concurrent callers.

Example
-------
>>> root = RuleNode()
>>> apache = root.add_or_get_child("org").add_or_get_child("apache")
>>> root.get_child("org").get_child("apache") is apache
True
>>> apache.is_leaf()
True
"""
from __future__ import annotations


class RuleNode:
    """A single named node in a rule tree.

    Parameters
    ----------
    segment:
        The namespace or path element this node represents.  Empty for a
        root node.
    exact_only:
        When ``True`` the node's decision applies only to queries that end
        exactly on this node.  Only meaningful for namespace trees.
    decision:
        ``True`` (allow), ``False`` (deny) or ``None`` for scaffolding nodes
        that exist only to hold a longer rule below them.
    """

    __slots__ = ("segment", "exact_only", "decision", "children")

    def __init__(
        self,
        segment: str = "",
        exact_only: bool = False,
        decision: bool | None = None,
    ) -> None:
        self.segment = segment
        self.exact_only = exact_only
        self.decision = decision
        self.children: dict[str, RuleNode] = {}

    # ------------------------------------------------------------------
    # Build API
    # ------------------------------------------------------------------

    def add_or_get_child(self, segment: str) -> RuleNode:
        """Return the child named *segment*, creating a scaffolding node if absent."""
        child = self.children.get(segment)
        if child is None:
            child = RuleNode(segment)
            self.children[segment] = child
        return child

    # ------------------------------------------------------------------
    # Read API
    # ------------------------------------------------------------------

    def get_child(self, segment: str) -> RuleNode | None:
        return self.children.get(segment)

    def is_leaf(self) -> bool:
        return not self.children

    def dump(self, prefix: str = "") -> list[str]:
        """Render this node and its subtree as indented lines.

        Children are emitted in sorted segment order so the output is
        stable regardless of the order rules were loaded in.
        """
        lines = [f"{prefix}{self}"]
        for segment in sorted(self.children):
            lines.extend(self.children[segment].dump(prefix + "  "))
        return lines

    def __str__(self) -> str:
        marker = "=" if self.exact_only else ""
        flag = "1" if self.decision else "0"
        return f"{marker}{self.segment}={flag}"

    def __repr__(self) -> str:
        return (
            f"RuleNode(segment={self.segment!r}, exact_only={self.exact_only}, "
            f"decision={self.decision}, children={len(self.children)})"
        )

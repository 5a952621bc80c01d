"""Line-oriented rule syntax shared by both matchers.

Rule files are plain text, one rule per line::

    # comment lines start with a hash
    org.apache                  # allow org.apache and everything below
    =eu.maveniverse             # allow exactly eu.maveniverse
    !eu.maveniverse.maven.foo   # deny the subtree
    !=com.foo.bar               # deny exactly com.foo.bar

Prefix files use the same comment and blank-line handling but carry no
modifiers: each line is a ``/``-separated path prefix.

Malformed input is never rejected.  Consecutive or leading separators
simply collapse because empty segments are dropped.

Example
-------
>>> list(iter_rule_lines(["# hi", "", "  org.apache\\n"]))
['org.apache']
>>> parse_namespace_rule("!=com.foo.bar")
NamespaceRule(segments=('com', 'foo', 'bar'), allow=False, exact_only=True)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

COMMENT_MARKER = "#"
MOD_EXCLUSION = "!"
MOD_EXACT = "="

NAMESPACE_SEPARATOR = "."
PATH_SEPARATOR = "/"


@dataclass(frozen=True)
class NamespaceRule:
    """A parsed namespace rule line.

    Attributes
    ----------
    segments:
        The non-empty dot-separated namespace elements.
    allow:
        ``False`` when the line carried the ``!`` exclusion modifier.
    exact_only:
        ``True`` when the line carried the ``=`` exact-only modifier.
    """

    segments: tuple[str, ...]
    allow: bool = True
    exact_only: bool = False


def iter_rule_lines(lines: Iterable[str]) -> Iterator[str]:
    """Yield the stripped rule lines, skipping blanks and comments."""
    for raw in lines:
        line = raw.strip()
        if not line or line.startswith(COMMENT_MARKER):
            continue
        yield line


def split_segments(text: str, separator: str) -> list[str]:
    """Split *text* on *separator* and drop empty segments."""
    return [segment for segment in text.split(separator) if segment]


def parse_namespace_rule(line: str) -> NamespaceRule:
    """Parse the optional ``!`` then ``=`` modifiers and the namespace body."""
    allow = True
    if line.startswith(MOD_EXCLUSION):
        allow = False
        line = line[len(MOD_EXCLUSION):]

    exact_only = False
    if line.startswith(MOD_EXACT):
        exact_only = True
        line = line[len(MOD_EXACT):]

    return NamespaceRule(
        segments=tuple(split_segments(line, NAMESPACE_SEPARATOR)),
        allow=allow,
        exact_only=exact_only,
    )

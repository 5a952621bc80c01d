"""Unit tests for ruletree/prefix.py: PrefixMatcher."""
from __future__ import annotations

import pytest

from repo_gatekeeper.ruletree import prefix
from repo_gatekeeper.ruletree.prefix import PrefixMatcher


@pytest.fixture()
def matcher() -> PrefixMatcher:
    m = PrefixMatcher("test")
    m.load(["# some comment", "/org/apache", "", "/eu/maveniverse", "/com/foo/bar"])
    return m


# ---------------------------------------------------------------------------
# load
# ---------------------------------------------------------------------------


class TestPrefixMatcherLoad:
    def test_counts_rules(self) -> None:
        m = PrefixMatcher()
        assert m.load(["# some comment", "/org/apache", "", "/eu/maveniverse", "/com/foo/bar"]) == 3

    def test_slashes_optional(self) -> None:
        m = PrefixMatcher()
        m.load(["org/apache/", "//com//foo"])
        assert m.accepts("/org/apache/maven") is True
        assert m.accepts("com/foo/bar") is True

    def test_longer_prefix_turns_shorter_into_scaffolding(self) -> None:
        m = PrefixMatcher()
        m.load(["/org/apache", "/org/apache/maven"])
        assert m.accepts("/org/apache/maven/core") is True
        assert m.accepts("/org/apache/commons") is False


# ---------------------------------------------------------------------------
# accepts
# ---------------------------------------------------------------------------


class TestPrefixMatcherAccepts:
    @pytest.mark.parametrize(
        "path, expected",
        [
            ("/org/apache/maven", True),
            ("/eu/maveniverse/maven", True),
            ("/com/foo/bar/maven", True),
            ("/com/apache/maven", False),
            ("/com/maveniverse/maven", False),
            ("/com/foo/maven", False),
        ],
    )
    def test_scenario(self, matcher: PrefixMatcher, path: str, expected: bool) -> None:
        assert matcher.accepts(path) is expected

    def test_exact_prefix_accepted(self, matcher: PrefixMatcher) -> None:
        assert matcher.accepts("/org/apache") is True
        assert matcher.accepts("org/apache/") is True

    def test_path_ending_before_leaf_rejected(self, matcher: PrefixMatcher) -> None:
        assert matcher.accepts("/com/foo") is False
        assert matcher.accepts("/org") is False

    def test_divergence_before_leaf_rejected(self, matcher: PrefixMatcher) -> None:
        assert matcher.accepts("/net/example/thing") is False

    def test_empty_path_rejected(self, matcher: PrefixMatcher) -> None:
        assert matcher.accepts("") is False
        assert matcher.accepts("/") is False

    def test_empty_tree_rejects_everything(self) -> None:
        m = PrefixMatcher()
        for path in ("", "/", "/org", "/org/apache/maven"):
            assert m.accepts(path) is False

    def test_repository_layout_path(self, matcher: PrefixMatcher) -> None:
        assert matcher.accepts("org/apache/maven/maven-core/3.9.6/maven-core-3.9.6.jar") is True

    def test_idempotent_reload(self) -> None:
        rules = ["/org/apache", "/com/foo/bar"]
        once = PrefixMatcher()
        once.load(rules)
        twice = PrefixMatcher()
        twice.load(rules)
        twice.load(rules)
        for path in ("/org/apache/x", "/com/foo", "/com/foo/bar/baz", "/x"):
            assert once.accepts(path) is twice.accepts(path)


class TestPrefixMatcherSentinel:
    def test_sentinel_rejects(self) -> None:
        assert prefix.SENTINEL.accepts("/org/apache") is False
        assert prefix.SENTINEL.rule_count == 0

    def test_sentinel_cannot_be_loaded(self) -> None:
        with pytest.raises(TypeError):
            prefix.SENTINEL.load(["/org"])
        assert prefix.SENTINEL.accepts("/org") is False
        assert prefix.SENTINEL.root.is_leaf()

    def test_dump(self, matcher: PrefixMatcher) -> None:
        lines = matcher.dump()
        assert "  org=0" in lines
        assert "    apache=0" in lines

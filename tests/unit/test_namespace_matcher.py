"""Unit tests for ruletree/namespace.py: NamespaceMatcher."""
from __future__ import annotations

import threading

import pytest

from repo_gatekeeper.ruletree import namespace
from repo_gatekeeper.ruletree.namespace import NamespaceMatcher


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

SCENARIO_RULES: list[str] = [
    "# some comment",
    "org.apache",
    "",
    "=eu.maveniverse",
    "eu.maveniverse.maven",
    "!eu.maveniverse.maven.foo",
    "com.foo",
    "!=com.foo.bar",
]


@pytest.fixture()
def matcher() -> NamespaceMatcher:
    m = NamespaceMatcher("test")
    m.load(SCENARIO_RULES)
    return m


# ---------------------------------------------------------------------------
# load
# ---------------------------------------------------------------------------


class TestNamespaceMatcherLoad:
    def test_counts_rules_skipping_comments_and_blanks(self) -> None:
        assert NamespaceMatcher().load(SCENARIO_RULES) == 6

    def test_rule_count_accumulates(self) -> None:
        m = NamespaceMatcher()
        m.load(["org.apache"])
        m.load(["com.foo", "# x", "net.bar"])
        assert m.rule_count == 3

    def test_whitespace_only_line_ignored(self) -> None:
        assert NamespaceMatcher().load(["   ", "\t", "\n"]) == 0

    def test_lines_with_trailing_newlines(self) -> None:
        m = NamespaceMatcher()
        assert m.load(["org.apache\n", "!org.apache.bad\n"]) == 2
        assert m.accepts("org.apache.good") is True
        assert m.accepts("org.apache.bad") is False

    def test_modifier_only_line_counted_but_adds_nothing(self) -> None:
        m = NamespaceMatcher()
        assert m.load(["!", "=", "!=", "..."]) == 4
        assert m.root.is_leaf()

    def test_consecutive_dots_collapse(self) -> None:
        m = NamespaceMatcher()
        m.load(["org..apache."])
        assert m.accepts("org.apache") is True
        assert m.accepts("org.apache.maven") is True

    def test_scaffolding_nodes_have_no_decision(self) -> None:
        m = NamespaceMatcher()
        m.load(["org.apache.maven"])
        org = m.root.get_child("org")
        assert org is not None
        assert org.decision is None
        assert org.get_child("apache").decision is None
        assert org.get_child("apache").get_child("maven").decision is True

    def test_later_rule_upgrades_scaffolding(self) -> None:
        m = NamespaceMatcher()
        m.load(["org.apache.maven", "!org"])
        assert m.accepts("org") is False
        assert m.accepts("org.codehaus") is False
        assert m.accepts("org.apache.maven.plugins") is True

    def test_redeclared_rule_last_write_wins(self) -> None:
        m = NamespaceMatcher()
        m.load(["com.foo", "!com.foo"])
        assert m.accepts("com.foo") is False
        assert m.accepts("com.foo.bar") is False


# ---------------------------------------------------------------------------
# accepts, reference scenario
# ---------------------------------------------------------------------------


class TestNamespaceMatcherScenario:
    @pytest.mark.parametrize(
        "coordinate, expected",
        [
            ("org", False),
            ("org.apache", True),
            ("org.apache.maven", True),
            ("org.apache.maven.foo", True),
            ("eu", False),
            ("eu.maveniverse", True),
            ("eu.maveniverse.foo", False),
            ("eu.maveniverse.maven", True),
            ("eu.maveniverse.maven.bar", True),
            ("eu.maveniverse.maven.bar.baz", True),
            ("eu.maveniverse.maven.foo", False),
            ("eu.maveniverse.maven.foo.bar", False),
            ("eu.maveniverse.maven.foo.bar.baz", False),
            ("com", False),
            ("com.foo", True),
            ("com.foo.maven", True),
            ("com.foo.bar", False),
            ("com.foo.bar.maven", True),
        ],
    )
    def test_scenario(self, matcher: NamespaceMatcher, coordinate: str, expected: bool) -> None:
        assert matcher.accepts(coordinate) is expected


# ---------------------------------------------------------------------------
# accepts, properties
# ---------------------------------------------------------------------------


class TestNamespaceMatcherSemantics:
    def test_empty_tree_rejects_everything(self) -> None:
        m = NamespaceMatcher()
        for coordinate in ("", "org", "org.apache", "...", "a.b.c.d"):
            assert m.accepts(coordinate) is False

    def test_unknown_namespace_rejected(self, matcher: NamespaceMatcher) -> None:
        assert matcher.accepts("net.example") is False

    def test_empty_query_rejected(self, matcher: NamespaceMatcher) -> None:
        assert matcher.accepts("") is False

    def test_cascading_allow_reaches_deep_descendants(self) -> None:
        m = NamespaceMatcher()
        m.load(["org"])
        assert m.accepts("org.a.b.c.d.e.f") is True

    def test_cascading_deny_reaches_deep_descendants(self) -> None:
        m = NamespaceMatcher()
        m.load(["org", "!org.internal"])
        assert m.accepts("org.internal.a.b.c") is False
        assert m.accepts("org.public.a.b.c") is True

    def test_intermediate_node_resets_cascade(self) -> None:
        m = NamespaceMatcher()
        m.load(["org", "!org.apache.maven.secret"])
        assert m.accepts("org") is True
        assert m.accepts("org.codehaus") is True
        assert m.accepts("org.apache") is False
        assert m.accepts("org.apache.maven") is False
        assert m.accepts("org.apache.maven.other") is False
        assert m.accepts("org.apache.maven.secret") is False

    def test_deeper_allow_shadows_sibling_under_cascade(self) -> None:
        m = NamespaceMatcher()
        m.load(["org.apache", "org.apache.maven.plugins"])
        assert m.accepts("org.apache.codehaus") is True
        assert m.accepts("org.apache.maven") is False
        assert m.accepts("org.apache.maven.foo") is False
        assert m.accepts("org.apache.maven.plugins") is True
        assert m.accepts("org.apache.maven.plugins.x") is True

    def test_exact_only_does_not_affect_children(self) -> None:
        m = NamespaceMatcher()
        m.load(["=com.foo"])
        assert m.accepts("com.foo") is True
        assert m.accepts("com.foo.bar") is False
        assert m.accepts("com") is False

    def test_exact_only_deny_leaves_ancestor_cascade_for_children(self) -> None:
        m = NamespaceMatcher()
        m.load(["com", "!=com.foo"])
        assert m.accepts("com.foo") is False
        assert m.accepts("com.foo.bar") is True
        assert m.accepts("com") is True

    def test_nearest_rule_wins_regardless_of_declaration_order(self) -> None:
        forward = NamespaceMatcher()
        forward.load(["org", "!org.apache", "org.apache.maven"])
        backward = NamespaceMatcher()
        backward.load(["org.apache.maven", "!org.apache", "org"])
        for coordinate in ("org", "org.x", "org.apache", "org.apache.x", "org.apache.maven.x"):
            assert forward.accepts(coordinate) is backward.accepts(coordinate)
        assert forward.accepts("org.apache.x") is False
        assert forward.accepts("org.apache.maven.x") is True

    def test_loading_same_rules_twice_is_idempotent(self) -> None:
        once = NamespaceMatcher()
        once.load(SCENARIO_RULES)
        twice = NamespaceMatcher()
        twice.load(SCENARIO_RULES)
        twice.load(SCENARIO_RULES)
        for coordinate in ("org.apache", "eu.maveniverse", "eu.maveniverse.foo", "com.foo.bar"):
            assert once.accepts(coordinate) is twice.accepts(coordinate)

    def test_accepts_does_not_mutate_tree(self, matcher: NamespaceMatcher) -> None:
        before = matcher.dump()
        matcher.accepts("brand.new.namespace")
        matcher.accepts("org.apache.whatever")
        assert matcher.dump() == before

    def test_concurrent_queries(self, matcher: NamespaceMatcher) -> None:
        failures: list[str] = []

        def worker() -> None:
            for _ in range(200):
                if not matcher.accepts("org.apache.maven"):
                    failures.append("org.apache.maven")
                if matcher.accepts("com.foo.bar"):
                    failures.append("com.foo.bar")

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert failures == []


# ---------------------------------------------------------------------------
# dump / sentinel
# ---------------------------------------------------------------------------


class TestNamespaceMatcherDump:
    def test_dump_marks_exact_and_allow(self) -> None:
        m = NamespaceMatcher()
        m.load(["=eu.maveniverse", "!com.foo"])
        assert m.dump() == [
            "=0",
            "  com=0",
            "    foo=0",
            "  eu=0",
            "    =maveniverse=1",
        ]

    def test_sentinel_is_empty(self) -> None:
        assert namespace.SENTINEL.rule_count == 0
        assert namespace.SENTINEL.accepts("org.apache") is False

    def test_sentinel_cannot_be_loaded(self) -> None:
        with pytest.raises(TypeError):
            namespace.SENTINEL.load(["org"])
        assert namespace.SENTINEL.accepts("org") is False
        assert namespace.SENTINEL.rule_count == 0

    def test_repr(self, matcher: NamespaceMatcher) -> None:
        assert repr(matcher) == "NamespaceMatcher(name='test', rules=6)"

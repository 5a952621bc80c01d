"""Quickstart: build a namespace rule tree and query it."""
from __future__ import annotations

from repo_gatekeeper import NamespaceMatcher, PrefixMatcher

groups = NamespaceMatcher("central")
count = groups.load(
    [
        "# groups fetched from Central",
        "org.apache",
        "=eu.maveniverse",
        "eu.maveniverse.maven",
        "!eu.maveniverse.maven.foo",
    ]
)
print(f"Loaded {count} group rules")

for group_id in ("org.apache.maven", "eu.maveniverse", "eu.maveniverse.foo", "eu.maveniverse.maven.foo"):
    print(f"  {group_id:<28} {'allowed' if groups.accepts(group_id) else 'denied'}")

prefixes = PrefixMatcher("central")
prefixes.load(["/org/apache", "/eu/maveniverse"])
print("\n".join(prefixes.dump()))
print(prefixes.accepts("org/apache/maven/maven-core/3.9.6/maven-core-3.9.6.jar"))

"""Run the full gatekeeper against rule files in a temporary directory."""
from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from repo_gatekeeper import (
    Artifact,
    ConfigLoader,
    RemoteRepository,
    RepositoryGatekeeper,
    apply_properties,
)

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

with tempfile.TemporaryDirectory() as tmp:
    basedir = Path(tmp)
    (basedir / "group_id").mkdir()
    (basedir / "group_id" / "groupId-central.txt").write_text("org.apache\ncom.example\n", encoding="utf-8")
    (basedir / "prefixes").mkdir()
    (basedir / "prefixes" / "prefixes-central.txt").write_text("/org/apache\n", encoding="utf-8")

    config = ConfigLoader().load_string(f"basedir: {basedir}\n")
    central = RemoteRepository("central", "https://repo.maven.apache.org/maven2")

    gatekeeper = RepositoryGatekeeper.from_config(config)
    for coords in ("org.apache.maven:maven-core:3.9.6", "com.example:thing:1.0", "net.other:lib:2.0"):
        decision = gatekeeper.accept_artifact(central, Artifact.parse(coords))
        print(f"{coords}: {'ACCEPTED' if decision else 'REJECTED'}")
        print(f"    {decision.reasoning}")

    relaxed = RepositoryGatekeeper.from_config(
        apply_properties(config, {"gatekeeper.prefixes.enabled": "false"})
    )
    print(relaxed.accept_artifact(central, Artifact.parse("com.example:thing:1.0")).reasoning)

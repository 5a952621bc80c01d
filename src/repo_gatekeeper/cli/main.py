"""CLI entry point for repo-gatekeeper.

Invoked as::

    repo-gate [OPTIONS] COMMAND [ARGS]...

or during development::

    python -m repo_gatekeeper.cli.main

Commands
--------
- check-group     Evaluate group ids against a group rule file
- check-path      Evaluate repository paths against a prefix file
- check-artifact  Run every enabled filter for one artifact
- dump            Show the rule tree built from a rule file
- version         Show version information
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from repo_gatekeeper.ruletree.namespace import NamespaceMatcher
from repo_gatekeeper.ruletree.node import RuleNode
from repo_gatekeeper.ruletree.prefix import PrefixMatcher

console = Console()
err_console = Console(stderr=True)

_DEFAULT_CONFIG = Path("gatekeeper.yaml")


def _load_matcher(rules_file: str, matcher: NamespaceMatcher | PrefixMatcher) -> int:
    try:
        with Path(rules_file).open("r", encoding="utf-8") as fh:
            return matcher.load(fh)
    except (OSError, UnicodeDecodeError) as exc:
        err_console.print(f"[red]Cannot read rule file:[/red] {exc}")
        sys.exit(2)


def _verdict_table(title: str, column: str, verdicts: list[tuple[str, bool]]) -> Table:
    table = Table(title=title, box=box.SIMPLE)
    table.add_column(column, style="cyan")
    table.add_column("Verdict")
    for subject, accepted in verdicts:
        table.add_row(subject, "[green]ALLOWED[/green]" if accepted else "[red]DENIED[/red]")
    return table


# ---------------------------------------------------------------------------
# Root command group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="repo-gatekeeper")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Repo Gatekeeper CLI: check artifacts against repository filter rules."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# version
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from repo_gatekeeper import __version__

    console.print(
        Panel(
            f"[bold]repo-gatekeeper[/bold]  v[cyan]{__version__}[/cyan]\n"
            "Allow/deny rule trees for remote repository fetches.",
            title="Version",
            border_style="blue",
        )
    )


# ---------------------------------------------------------------------------
# check-group / check-path
# ---------------------------------------------------------------------------


@cli.command(name="check-group")
@click.argument("rules_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("group_ids", nargs=-1, required=True)
def check_group_command(rules_file: str, group_ids: tuple[str, ...]) -> None:
    """Evaluate GROUP_IDS against the group rules in RULES_FILE."""
    matcher = NamespaceMatcher(Path(rules_file).name)
    count = _load_matcher(rules_file, matcher)
    verdicts = [(group_id, matcher.accepts(group_id)) for group_id in group_ids]

    console.print(_verdict_table("Group Rules", "Group", verdicts))
    console.print(f"  Rules loaded: [cyan]{count}[/cyan]")
    sys.exit(0 if all(accepted for _, accepted in verdicts) else 1)


@cli.command(name="check-path")
@click.argument("rules_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("paths", nargs=-1, required=True)
def check_path_command(rules_file: str, paths: tuple[str, ...]) -> None:
    """Evaluate repository PATHS against the prefixes in RULES_FILE."""
    matcher = PrefixMatcher(Path(rules_file).name)
    count = _load_matcher(rules_file, matcher)
    verdicts = [(path, matcher.accepts(path)) for path in paths]

    console.print(_verdict_table("Prefix Rules", "Path", verdicts))
    console.print(f"  Rules loaded: [cyan]{count}[/cyan]")
    sys.exit(0 if all(accepted for _, accepted in verdicts) else 1)


# ---------------------------------------------------------------------------
# dump
# ---------------------------------------------------------------------------


def _add_branches(tree: Tree, node: RuleNode, show_decisions: bool) -> None:
    for segment in sorted(node.children):
        child = node.children[segment]
        label = f"[bold]{segment}[/bold]"
        if show_decisions and child.decision is not None:
            colour = "green" if child.decision else "red"
            scope = "exact" if child.exact_only else "cascade"
            label += f"  [{colour}]{'allow' if child.decision else 'deny'}[/{colour}] [dim]({scope})[/dim]"
        _add_branches(tree.add(label), child, show_decisions)


@cli.command(name="dump")
@click.argument("rules_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--kind",
    "-k",
    type=click.Choice(["group", "prefix"]),
    default="group",
    show_default=True,
    help="Rule syntax of RULES_FILE.",
)
def dump_command(rules_file: str, kind: str) -> None:
    """Show the rule tree built from RULES_FILE."""
    matcher: NamespaceMatcher | PrefixMatcher
    matcher = NamespaceMatcher(rules_file) if kind == "group" else PrefixMatcher(rules_file)
    count = _load_matcher(rules_file, matcher)

    tree = Tree(f"[bold blue]{rules_file}[/bold blue]")
    _add_branches(tree, matcher.root, show_decisions=kind == "group")
    console.print(tree)
    console.print(f"  Rules loaded: [cyan]{count}[/cyan]")


# ---------------------------------------------------------------------------
# check-artifact
# ---------------------------------------------------------------------------


def _parse_properties(pairs: tuple[str, ...]) -> dict[str, str]:
    properties: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"Expected key=value, got '{pair}'.", param_hint="--set")
        properties[key.strip()] = value.strip()
    return properties


@cli.command(name="check-artifact")
@click.argument("coords")
@click.option("--repo", "repo_id", required=True, help="Remote repository id.")
@click.option("--url", default="", help="Remote repository URL.")
@click.option("--layout", default="default", show_default=True, help="Remote repository layout.")
@click.option(
    "--config",
    "-c",
    "config_path",
    default=str(_DEFAULT_CONFIG),
    show_default=True,
    type=click.Path(),
    help="Path to gatekeeper.yaml; defaults are used when it does not exist.",
)
@click.option(
    "--set",
    "-D",
    "overrides",
    multiple=True,
    help="Override a property, e.g. -D gatekeeper.prefixes.enabled=false.",
)
def check_artifact_command(
    coords: str,
    repo_id: str,
    url: str,
    layout: str,
    config_path: str,
    overrides: tuple[str, ...],
) -> None:
    """Run every enabled filter for the artifact at COORDS."""
    from repo_gatekeeper.config import ConfigLoader, apply_properties
    from repo_gatekeeper.errors import GatekeeperError
    from repo_gatekeeper.filters.model import Artifact, RemoteRepository
    from repo_gatekeeper.gatekeeper import RepositoryGatekeeper

    try:
        artifact = Artifact.parse(coords)
    except ValueError as exc:
        err_console.print(f"[red]Invalid coordinates:[/red] {exc}")
        sys.exit(2)

    loader = ConfigLoader()
    cfg_path = Path(config_path)
    try:
        config = loader.load(cfg_path) if cfg_path.exists() else loader.defaults()
        config = apply_properties(config, _parse_properties(overrides))
        gatekeeper = RepositoryGatekeeper.from_config(config)
        decision = gatekeeper.accept_artifact(RemoteRepository(repo_id, url, layout), artifact)
    except GatekeeperError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        sys.exit(2)

    status = "[green]ALLOWED[/green]" if decision.accepted else "[red]DENIED[/red]"
    console.print(Panel(status, title=f"{artifact} from {repo_id}", border_style="blue"))

    if decision.results:
        table = Table(title="Filter Results", box=box.SIMPLE)
        table.add_column("Filter", style="cyan")
        table.add_column("Accepted")
        table.add_column("Reasoning")
        for name, result in decision.results.items():
            table.add_row(name, "yes" if result.accepted else "[red]no[/red]", result.reasoning)
        console.print(table)
    else:
        console.print("  [yellow]Gatekeeper disabled; no filters consulted.[/yellow]")

    sys.exit(0 if decision.accepted else 1)


if __name__ == "__main__":
    cli()

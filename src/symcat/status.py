"""status.py - Define-symbol drift across target groups.

Compares each target group's stored define string with what the catalog
would export and prints a Rich-formatted overview: which groups are in
sync, which have drifted (and by which names), and which are skipped.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from symcat.catalog import FlagPolicy, SymbolCatalog
from symcat.cli import JsonOption, json_print, open_project
from symcat.store import SettingsStore, TargetGroup
from symcat.sync import build_define_symbols, parse_define_symbols

# ---------------------------------------------------------------------------
# Data collection
# ---------------------------------------------------------------------------


@dataclass
class GroupStatus:
    """Comparison of one group's stored symbols against the catalog."""

    group: TargetGroup
    stored: str = ""
    missing: list[str] = field(default_factory=list)  # enabled in catalog, absent in settings
    extra: list[str] = field(default_factory=list)  # in settings, not enabled in catalog

    @property
    def state(self) -> str:
        if not self.group.is_concrete:
            return "skipped"
        return "drift" if self.missing or self.extra else "in sync"

    def to_dict(self) -> dict[str, object]:
        """Serialize to a plain dict for JSON output."""
        return {
            "target": self.group.name,
            "ordinal": self.group.ordinal,
            "obsolete": self.group.obsolete,
            "state": self.state,
            "define_symbols": self.stored,
            "missing": list(self.missing),
            "extra": list(self.extra),
        }


def collect_status(
    catalog: SymbolCatalog,
    store: SettingsStore,
    policy: FlagPolicy | None = None,
) -> list[GroupStatus]:
    """Compare every group in *store* against the catalog's enabled symbols."""
    wanted = catalog.active_names(policy)
    wanted_set = set(wanted)
    statuses = []
    for group in store.groups():
        stored = store.get(group)
        names = parse_define_symbols(stored)
        names_set = set(names)
        statuses.append(
            GroupStatus(
                group=group,
                stored=stored,
                missing=[n for n in wanted if n not in names_set],
                extra=[n for n in names if n not in wanted_set],
            )
        )
    return statuses


# ---------------------------------------------------------------------------
# Rich output
# ---------------------------------------------------------------------------

_STATE_COLORS = {
    "in sync": "green",
    "drift": "yellow",
    "skipped": "dim",
}


def _render(console: Console, define: str, statuses: list[GroupStatus], selected: str) -> None:
    tbl = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    tbl.add_column("Target")
    tbl.add_column("State")
    tbl.add_column("Missing", style="red")
    tbl.add_column("Extra", style="cyan")

    for s in statuses:
        color = _STATE_COLORS.get(s.state, "white")
        marker = "→ " if s.group.name == selected else "  "
        tbl.add_row(
            f"{marker}{escape(s.group.name)}",
            f"[{color}]{s.state}[/]",
            escape(", ".join(s.missing)),
            escape(", ".join(s.extra)),
        )

    drifted = sum(1 for s in statuses if s.state == "drift")
    subtitle = f"[bold]{drifted}[/] drifted  ·  catalog exports [bold]{escape(define) or '(empty)'}[/]"
    console.print(Panel(tbl, title="[bold]Define Symbols[/]", subtitle=subtitle, border_style="blue"))


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="Show define-symbol drift across target groups.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]

symcat status                 Rich overview of every target group

symcat status --json          Machine-readable JSON output

[bold]States:[/bold]

in sync    stored symbols equal the catalog's enabled symbols

drift      symbols differ; run 'symcat apply' or 'symcat revert'

skipped    obsolete or sentinel group, never written by apply""",
)


@app.callback(invoke_without_command=True)
def main(json_output: bool = JsonOption) -> None:
    """Print how each target group compares with the catalog."""
    project = open_project(json_mode=json_output)
    policy = project.cfg.policy
    define = build_define_symbols(project.catalog, policy)
    statuses = collect_status(project.catalog, project.store, policy)

    if json_output:
        json_print(
            {
                "project": project.cfg.project_name,
                "define_symbols": define,
                "targets": [s.to_dict() for s in statuses],
            }
        )
        return

    selected = project.cfg.selected_target or (statuses[0].group.name if statuses else "")
    console = Console()
    console.print()
    _render(console, define, statuses, selected)
    console.print()


def main_entry() -> None:
    """Run the status CLI app."""
    app()


if __name__ == "__main__":
    main_entry()

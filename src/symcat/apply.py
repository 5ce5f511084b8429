"""apply.py - Push the catalog's enabled symbols to the build settings.

Writes the ``;``-joined enabled symbol names to the selected target group,
to named groups (``-t`` may be repeated), or to every group (``--all``).
Obsolete and sentinel groups are skipped.  A group that fails to write is
reported but does not stop the others; the exit code is 1 if any failed.
"""

from __future__ import annotations

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from symcat.cli import JsonOption, error_exit, json_print, open_project
from symcat.store import TargetGroup, find_group
from symcat.sync import ApplyResult, apply

app = typer.Typer(
    help="Push enabled catalog symbols to the build settings.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]

symcat apply                      Apply to the selected target group

symcat apply --all                Apply to every target group

symcat apply -t iOS -t Android    Apply to specific groups

[dim]Each group is cleared and then rewritten so stale symbols never
survive a merge.[/dim]""",
)


def _render(result: ApplyResult) -> None:
    console = Console()
    define = escape(result.define_symbols) if result.define_symbols else "[dim](empty)[/]"
    console.print(f"Define symbols: [bold]{define}[/]")

    tbl = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    tbl.add_column("Target")
    tbl.add_column("Result")
    for r in result.results:
        status = "[green]ok[/]" if r.ok else f"[red]failed:[/] {escape(str(r.error))}"
        tbl.add_row(escape(r.group.name), status)
    for group in result.skipped:
        tbl.add_row(f"[dim]{escape(group.name)}[/]", "[dim]skipped[/]")
    console.print(tbl)


@app.callback(invoke_without_command=True)
def main(
    all_targets: bool = typer.Option(False, "--all", help="Apply to every target group"),
    targets: list[str] | None = typer.Option(
        None, "--target", "-t", help="Target group name (repeatable)."
    ),
    json_output: bool = JsonOption,
) -> None:
    """Write the catalog's enabled symbols to one or more target groups."""
    project = open_project(json_mode=json_output)

    if all_targets and targets:
        error_exit("Use either --all or --target, not both.", json_mode=json_output)

    groups: list[TargetGroup] = []
    try:
        if targets:
            groups = [find_group(project.store, name) for name in targets]
        elif not all_targets:
            groups = [project.resolve_group()]
    except KeyError as exc:
        error_exit(str(exc.args[0]) if exc.args else str(exc), json_mode=json_output)

    result = apply(project.catalog, project.store, groups, project.cfg.policy)

    if json_output:
        json_print(result.to_dict())
    else:
        _render(result)

    if not result.ok:
        raise typer.Exit(code=1)


def main_entry() -> None:
    """Run the apply CLI app."""
    app()


if __name__ == "__main__":
    main_entry()

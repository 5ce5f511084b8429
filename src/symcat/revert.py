"""revert.py - Pull a target group's define symbols into the catalog.

Every catalog symbol is enabled iff it appears in the group's define
string; names the catalog has never seen are appended as new enabled
symbols.  The catalog file is rewritten only when something changed.
"""

from __future__ import annotations

import typer

from symcat.cli import (
    JsonOption,
    TargetOption,
    json_print,
    open_project,
    resolve_group_or_exit,
)
from symcat.sync import revert_from_store

app = typer.Typer(
    help="Pull define symbols from the settings into the catalog.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]

symcat revert                     Revert from the selected target group

symcat revert -t Android          Revert from a specific group

symcat revert --dry-run --json    Show what would change without saving

[dim]Revert never removes catalog entries; unknown names are appended.[/dim]""",
)


@app.callback(invoke_without_command=True)
def main(
    target: str | None = TargetOption,
    dry_run: bool = typer.Option(False, "--dry-run", help="Report changes without saving"),
    json_output: bool = JsonOption,
) -> None:
    """Make the catalog mirror a target group's define symbols."""
    project = open_project(json_mode=json_output)
    group = resolve_group_or_exit(project, target, json_mode=json_output)

    result = revert_from_store(project.catalog, project.store, group, project.cfg.policy)
    saved = False if dry_run else project.save()

    if json_output:
        json_print({"target": group.name, "saved": saved, **result.to_dict()})
        return

    if not result.changed:
        typer.secho(f"Catalog already matches {group.name}.", dim=True)
        return
    for name in result.added:
        typer.secho(f"  + {name}", fg=typer.colors.GREEN)
    for name in result.enabled:
        typer.echo(f"  on  {name}")
    for name in result.disabled:
        typer.echo(f"  off {name}")
    if dry_run:
        typer.secho("(dry run, catalog not saved)", dim=True)
    else:
        typer.secho(f"Reverted catalog from {group.name}.", fg=typer.colors.GREEN)


def main_entry() -> None:
    """Run the revert CLI app."""
    app()


if __name__ == "__main__":
    main_entry()

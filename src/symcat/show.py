"""show.py - Print the symbol catalog.

Renders the catalog as a Rich table in display order: headers as section
rows, separators as rules, symbols with their enabled state and
description.
"""

from __future__ import annotations

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from symcat.catalog import FlagPolicy, SymbolCatalog, SymbolStyle
from symcat.cli import JsonOption, json_print, open_project


def build_table(catalog: SymbolCatalog, policy: FlagPolicy) -> Table:
    """Build a Rich table for *catalog*."""
    tbl = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    tbl.add_column("#", justify="right", style="dim")
    tbl.add_column("On", justify="center")
    tbl.add_column("Name")
    tbl.add_column("Description", style="dim")

    for i, symbol in enumerate(catalog):
        if symbol.style is SymbolStyle.SEPARATOR:
            tbl.add_row(str(i), "", "[dim]────────[/]", "")
            continue
        if policy.is_flag(symbol):
            mark = "[green]✔[/]" if symbol.enabled else "[dim]·[/]"
        else:
            mark = ""
        if symbol.style is SymbolStyle.HEADER:
            name = f"[bold reverse] {escape(symbol.name)} [/]"
        else:
            name = escape(symbol.name)
            if symbol.enabled:
                name = f"[bold]{name}[/]"
        tbl.add_row(str(i), mark, name, escape(symbol.description))
    return tbl


app = typer.Typer(
    help="Print the symbol catalog.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]

symcat show                 Rich table of the catalog

symcat show --json          Catalog records as JSON

[dim]Reads the catalog file named in symcat.toml; nothing is written.[/dim]""",
)


@app.callback(invoke_without_command=True)
def main(json_output: bool = JsonOption) -> None:
    """Print every catalog entry in display order."""
    project = open_project(json_mode=json_output)
    catalog = project.catalog
    policy = project.cfg.policy

    if json_output:
        json_print(
            {
                "catalog": str(project.cfg.catalog_path),
                "active": catalog.active_names(policy),
                "symbols": catalog.to_dict(),
            }
        )
        return

    console = Console()
    if not len(catalog):
        console.print("[dim]Catalog is empty.[/]")
        return
    console.print(build_table(catalog, policy))
    active = catalog.active_names(policy)
    console.print(f"\n[bold]{len(active)}[/] enabled of {len(catalog.flags(policy))} symbols")


def main_entry() -> None:
    """Run the show CLI app."""
    app()


if __name__ == "__main__":
    main_entry()

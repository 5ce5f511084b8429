"""symcat edit: Add, remove, toggle, and annotate catalog entries.

Entries are addressed by name, or by position with a ``#`` prefix
(``#0`` is the first entry).  The catalog file is rewritten only when an
edit actually changed something.

Usage::

    symcat edit add USE_STEAM --description "Link against Steamworks" --enable
    symcat edit add --style header "Platform"
    symcat edit add --style separator
    symcat edit enable USE_STEAM
    symcat edit disable USE_STEAM
    symcat edit describe USE_STEAM "Steamworks integration"
    symcat edit rename USE_STEAM USE_STEAMWORKS
    symcat edit move USE_STEAMWORKS 0
    symcat edit remove '#3'
"""

from __future__ import annotations

import typer

from symcat.catalog import Symbol, SymbolStyle
from symcat.cli import Project, error_exit, open_project
from symcat.session import CatalogSession

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _session(project: Project) -> CatalogSession:
    try:
        group = project.resolve_group()
    except KeyError:
        group = None
    return CatalogSession(project.catalog, project.store, group, project.cfg.policy)


def _resolve_entry(project: Project, ref: str) -> Symbol:
    """Resolve ``#N`` to the N-th entry, anything else to the first entry with that name."""
    catalog = project.catalog
    if ref.startswith("#"):
        try:
            index = int(ref[1:])
        except ValueError:
            error_exit(f"Invalid entry index: {ref!r}")
        if not 0 <= index < len(catalog):
            error_exit(f"Entry index {index} out of range (catalog has {len(catalog)} entries)")
        return catalog[index]
    found = catalog.find_by_name(ref, project.cfg.policy)
    if found is not None:
        return found
    for symbol in catalog:
        if symbol.name == ref:
            return symbol
    error_exit(f"No catalog entry named '{ref}'.")


def _parse_style(raw: str) -> SymbolStyle:
    try:
        return SymbolStyle.parse(raw)
    except ValueError as exc:
        error_exit(str(exc))


def _finish(project: Project, message: str) -> None:
    if project.save():
        typer.secho(message, fg=typer.colors.GREEN)
    else:
        typer.secho("No changes.", fg=typer.colors.YELLOW)


# ---------------------------------------------------------------------------
# Typer app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="Add, remove, toggle, and annotate catalog entries.",
    rich_markup_mode="rich",
    epilog="""\
[bold]Examples:[/bold]
  symcat edit add USE_STEAM --enable            Add an enabled symbol
  symcat edit add --style header Platform       Add a section header
  symcat edit add --style separator             Add a divider
  symcat edit enable USE_STEAM                  Enable a symbol
  symcat edit move USE_STEAM 0                  Move to the top
  symcat edit remove '#3'                       Remove the 4th entry

[dim]Edits change the catalog only; run 'symcat apply' to push them
to the build settings.[/dim]""",
)


@app.command("add")
def add(
    name: str | None = typer.Argument(None, help="Symbol or header name (placeholder if omitted)."),
    style: str = typer.Option("symbol", "--style", "-s", help="symbol, header, or separator."),
    description: str | None = typer.Option(None, "--description", "-d", help="Description text."),
    enable: bool = typer.Option(False, "--enable", help="Enable the new symbol."),
    at: int | None = typer.Option(None, "--at", help="Insert position (default: end)."),
) -> None:
    """Add an entry to the catalog (idempotent for existing symbol names)."""
    project = open_project()
    session = _session(project)
    parsed = _parse_style(style)

    is_flag_style = parsed in project.cfg.policy.flag_styles
    if name and is_flag_style and project.catalog.find_by_name(name, project.cfg.policy) is not None:
        typer.secho(f"'{name}' already exists (no changes made).", fg=typer.colors.YELLOW)
        return

    if enable and not is_flag_style:
        error_exit(f"Entries of style '{parsed.label}' cannot be enabled.")

    symbol = session.add_symbol(parsed)
    if name:
        session.rename(symbol, name)
    if description is None and name:
        description = ""
    if description is not None:
        session.describe(symbol, description)
    if enable:
        session.set_enabled(symbol, True)
    if at is not None:
        project.catalog.move(symbol, at)

    label = symbol.name or parsed.label
    _finish(project, f"Added {parsed.label} '{label}' at #{project.catalog.index_of(symbol)}")


@app.command("remove")
def remove(ref: str = typer.Argument(..., help="Entry name or #index.")) -> None:
    """Remove an entry from the catalog."""
    project = open_project()
    symbol = _resolve_entry(project, ref)
    _session(project).remove_symbol(symbol)
    _finish(project, f"Removed '{symbol.name or symbol.style.label}'")


def _set_enabled(ref: str, enabled: bool) -> None:
    project = open_project()
    symbol = _resolve_entry(project, ref)
    if not project.cfg.policy.is_flag(symbol):
        error_exit(f"'{ref}' is a {symbol.style.label} and cannot be toggled.")
    _session(project).set_enabled(symbol, enabled)
    _finish(project, f"{'Enabled' if enabled else 'Disabled'} '{symbol.name}'")


@app.command("enable")
def enable_cmd(ref: str = typer.Argument(..., help="Entry name or #index.")) -> None:
    """Enable a symbol (disables radio-group siblings when exclusive)."""
    _set_enabled(ref, True)


@app.command("disable")
def disable_cmd(ref: str = typer.Argument(..., help="Entry name or #index.")) -> None:
    """Disable a symbol."""
    _set_enabled(ref, False)


@app.command("describe")
def describe(
    ref: str = typer.Argument(..., help="Entry name or #index."),
    text: str = typer.Argument(..., help="New description."),
) -> None:
    """Set an entry's description."""
    project = open_project()
    symbol = _resolve_entry(project, ref)
    _session(project).describe(symbol, text)
    _finish(project, f"Updated description of '{symbol.name}'")


@app.command("rename")
def rename(
    ref: str = typer.Argument(..., help="Entry name or #index."),
    new_name: str = typer.Argument(..., help="New name."),
) -> None:
    """Rename an entry (symbol names must stay unique)."""
    project = open_project()
    symbol = _resolve_entry(project, ref)
    if symbol.style is SymbolStyle.SEPARATOR:
        error_exit("Separators have no name.")
    existing = project.catalog.find_by_name(new_name, project.cfg.policy)
    if existing is not None and existing is not symbol and project.cfg.policy.is_flag(symbol):
        error_exit(f"A symbol named '{new_name}' already exists.")
    old = symbol.name
    _session(project).rename(symbol, new_name)
    _finish(project, f"Renamed '{old}' → '{new_name}'")


@app.command("move")
def move(
    ref: str = typer.Argument(..., help="Entry name or #index."),
    index: int = typer.Argument(..., help="New position (0 = top)."),
) -> None:
    """Move an entry to a new position."""
    project = open_project()
    symbol = _resolve_entry(project, ref)
    project.catalog.move(symbol, index)
    _finish(project, f"Moved '{symbol.name or symbol.style.label}' to #{project.catalog.index_of(symbol)}")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main_entry() -> None:
    app()


if __name__ == "__main__":
    main_entry()

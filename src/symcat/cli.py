"""Shared CLI utilities for symcat commands.

Provides common Typer options, project-loading helpers, and standardised
output / error helpers so that every command gets consistent ``--target``
support, error reporting, and JSON output without boilerplate.

Usage in a command::

    import typer
    from symcat.cli import TargetOption, error_exit, json_print, open_project

    app = typer.Typer()

    @app.callback(invoke_without_command=True)
    def main(target: str | None = TargetOption) -> None:
        project = open_project()
        group = project.resolve_group(target)
        ...
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, NoReturn

import typer
from rich.console import Console

from symcat.catalog import SymbolCatalog
from symcat.config import ProjectConfig, load_config
from symcat.document import load_catalog, save_catalog
from symcat.store import TargetGroup, TomlSettingsStore, find_group

# Re-usable Typer option for --target
TargetOption: str | None = typer.Option(
    None,
    "--target",
    "-t",
    help="Target group from the settings file (default: selected_target, else first group).",
)

JsonOption: bool = typer.Option(False, "--json", help="Output results as JSON")

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Route library logging to stderr (DEBUG with --verbose, else WARNING)."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=_LOG_FORMAT,
        force=True,
    )


# ---------------------------------------------------------------------------
# Standardised output helpers
# ---------------------------------------------------------------------------

_err_console = Console(stderr=True)


def error_exit(msg: str, *, json_mode: bool = False, code: int = 1) -> NoReturn:
    """Print *msg* as an error and ``raise typer.Exit(code)``."""
    if json_mode:
        print(json.dumps({"error": msg}, indent=2))
    else:
        _err_console.print(f"[red bold]error:[/red bold] {msg}")
    raise typer.Exit(code=code)


def json_print(data: dict[str, Any] | list[Any]) -> None:
    """Print *data* as pretty-printed JSON to stdout."""
    print(json.dumps(data, indent=2))


# ---------------------------------------------------------------------------
# Project loading
# ---------------------------------------------------------------------------


@dataclass
class Project:
    """Config, catalog, and settings store for one symcat project."""

    cfg: ProjectConfig
    catalog: SymbolCatalog
    store: TomlSettingsStore

    def resolve_group(self, name: str | None = None) -> TargetGroup:
        """Resolve *name* (or the configured selection, or the first group)."""
        name = name or self.cfg.selected_target
        if name is None:
            groups = self.store.groups()
            if not groups:
                raise KeyError(f"No target groups in {self.store.path.name}")
            return groups[0]
        return find_group(self.store, name)

    def save(self) -> bool:
        """Persist the catalog if it is dirty.  Returns True if written."""
        if not self.catalog.dirty:
            return False
        save_catalog(self.catalog, self.cfg.catalog_path)
        return True


def get_config() -> ProjectConfig:
    """Load the project config from the current directory tree."""
    return load_config()


def open_project(*, json_mode: bool = False) -> Project:
    """Load config, catalog, and settings store, exiting with an error on failure."""
    try:
        cfg = get_config()
        catalog = load_catalog(cfg.catalog_path)
        store = TomlSettingsStore(cfg.settings_path)
    except (FileNotFoundError, KeyError, ValueError) as exc:
        error_exit(str(exc), json_mode=json_mode)
    return Project(cfg=cfg, catalog=catalog, store=store)


def resolve_group_or_exit(
    project: Project, name: str | None, *, json_mode: bool = False
) -> TargetGroup:
    try:
        return project.resolve_group(name)
    except KeyError as exc:
        error_exit(str(exc.args[0]) if exc.args else str(exc), json_mode=json_mode)

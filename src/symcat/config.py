"""Centralised project configuration loader for symcat.

Reads ``symcat.toml`` from the project root and exposes every setting as
simple attributes so that commands do not hardcode catalog or settings
paths.

Example ``symcat.toml``::

    [project]
    name = "MyGame"
    catalog = "Assets/Editor/SymbolCatalog.toml"
    settings = "ProjectSettings/DefineSymbols.toml"
    selected_target = "Standalone"

    [sync]
    flag_styles = ["symbol"]     # add "header" to let headers carry state
    exclusive = false            # radio-group semantics for non-symbol flags

Usage::

    from symcat.config import load_config
    cfg = load_config()
    cfg.catalog_path      # Path
    cfg.policy            # FlagPolicy
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path

from symcat.catalog import FlagPolicy, SymbolStyle

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

CONFIG_FILENAME = "symcat.toml"

_DEFAULT_CATALOG = "Assets/Editor/SymbolCatalog.toml"
_DEFAULT_SETTINGS = "ProjectSettings/DefineSymbols.toml"


@dataclass
class ProjectConfig:
    """Parsed project configuration with resolved paths."""

    # Root directory (where symcat.toml lives)
    root: Path

    project_name: str = ""
    catalog_path: Path = field(default_factory=lambda: Path())
    settings_path: Path = field(default_factory=lambda: Path())

    # Group used by revert and "apply current"; None means first group
    selected_target: str | None = None

    # --- [sync] ---
    flag_styles: list[SymbolStyle] = field(default_factory=lambda: [SymbolStyle.SYMBOL])
    exclusive: bool = False

    @property
    def policy(self) -> FlagPolicy:
        return FlagPolicy(flag_styles=frozenset(self.flag_styles), exclusive=self.exclusive)


def _resolve(root: Path, rel: str | None) -> Path | None:
    """Resolve a path relative to project root."""
    if rel is None:
        return None
    p = Path(rel)
    if p.is_absolute():
        return p
    return root / p


def _find_root(start: Path | None = None) -> Path:
    """Walk up from *start* (or cwd) to find symcat.toml."""
    if start is not None:
        return start
    candidate = Path.cwd().resolve()
    while candidate != candidate.parent:
        if (candidate / CONFIG_FILENAME).exists():
            return candidate
        candidate = candidate.parent
    raise FileNotFoundError(
        f"Could not find {CONFIG_FILENAME} in any parent of the current directory. "
        f"Run symcat from within a project that contains {CONFIG_FILENAME}."
    )


def _parse_flag_styles(raw: object) -> list[SymbolStyle]:
    if raw is None:
        return [SymbolStyle.SYMBOL]
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list):
        raise ValueError(f"[sync] flag_styles must be a list, got {raw!r}")
    styles = [SymbolStyle.parse(item) for item in raw]
    if SymbolStyle.SEPARATOR in styles:
        raise ValueError("[sync] flag_styles cannot include 'separator'")
    if SymbolStyle.SYMBOL not in styles:
        raise ValueError(f"[sync] flag_styles must include 'symbol', got {raw!r}")
    return styles


def load_config(root: Path | None = None) -> ProjectConfig:
    """Load symcat.toml.

    Args:
        root: Project root directory.  Auto-detected from the cwd if ``None``.
    """
    root = _find_root(root)
    toml_path = root / CONFIG_FILENAME
    if not toml_path.exists():
        raise FileNotFoundError(f"Config not found: {toml_path}")

    with open(toml_path, "rb") as f:
        raw = tomllib.load(f)

    project = raw.get("project", {})
    sync = raw.get("sync", {})

    return ProjectConfig(
        root=root,
        project_name=project.get("name", root.name),
        catalog_path=_resolve(root, project.get("catalog", _DEFAULT_CATALOG)),
        settings_path=_resolve(root, project.get("settings", _DEFAULT_SETTINGS)),
        selected_target=project.get("selected_target"),
        flag_styles=_parse_flag_styles(sync.get("flag_styles")),
        exclusive=bool(sync.get("exclusive", False)),
    )

"""store.py - Settings stores holding one define-symbols string per target group.

The synchronizer only needs the :class:`SettingsStore` protocol.  Two
implementations are provided:

* :class:`InMemorySettingsStore` -- dict-backed, for tests and embedding.
* :class:`TomlSettingsStore` -- backed by a settings TOML file, edited with
  tomlkit so comments, ordering, and whitespace survive every write.

Settings file layout::

    [groups.Standalone]
    ordinal = 1
    define_symbols = "DEBUG_MENU;USE_STEAM"

    [groups.WebPlayer]
    ordinal = 6
    obsolete = true          # skipped by apply
    define_symbols = ""

    [groups.Unknown]
    ordinal = 0              # sentinel, skipped by apply
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

import tomlkit

from symcat.document import atomic_write_text


class SettingsStoreError(Exception):
    """Base class for settings store failures."""


class SettingsWriteError(SettingsStoreError):
    """A store rejected a write for one target group."""


@dataclass(frozen=True)
class TargetGroup:
    """An opaque build-target group key plus the metadata apply needs."""

    name: str
    ordinal: int = 1
    obsolete: bool = False

    @property
    def is_concrete(self) -> bool:
        """False for obsolete groups and for sentinel ordinals (``<= 0``)."""
        return self.ordinal > 0 and not self.obsolete

    def __str__(self) -> str:
        return self.name


@runtime_checkable
class SettingsStore(Protocol):
    """Read/write access to per-group define-symbols strings."""

    def groups(self) -> list[TargetGroup]: ...

    def get(self, group: TargetGroup) -> str: ...

    def set(self, group: TargetGroup, value: str) -> None: ...


def find_group(store: SettingsStore, name: str) -> TargetGroup:
    """Look up a group by name, raising KeyError with the available names."""
    groups = store.groups()
    for group in groups:
        if group.name == name:
            return group
    raise KeyError(f"Target group '{name}' not found. Available: {[g.name for g in groups]}")


# ---------------------------------------------------------------------------
# In-memory store
# ---------------------------------------------------------------------------


class InMemorySettingsStore:
    """Dict-backed store keyed by group name, like the TOML store.

    Groups listed in *readonly* reject every write.  Writing a group the
    store has not seen registers it.
    """

    def __init__(
        self,
        values: dict[TargetGroup, str] | None = None,
        readonly: set[str] | None = None,
    ) -> None:
        values = values or {}
        self._groups: dict[str, TargetGroup] = {g.name: g for g in values}
        self._values: dict[str, str] = {g.name: v for g, v in values.items()}
        self.readonly: set[str] = set(readonly or ())
        self.writes: list[tuple[str, str]] = []

    def groups(self) -> list[TargetGroup]:
        return list(self._groups.values())

    def get(self, group: TargetGroup) -> str:
        return self._values.get(group.name, "")

    def set(self, group: TargetGroup, value: str) -> None:
        if group.name in self.readonly:
            raise SettingsWriteError(f"Target group '{group.name}' is read-only")
        self.writes.append((group.name, value))
        self._groups.setdefault(group.name, group)
        self._values[group.name] = value


# ---------------------------------------------------------------------------
# TOML-file store
# ---------------------------------------------------------------------------


class TomlSettingsStore:
    """Store backed by a settings TOML file; each ``set`` is written through."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        if not self.path.exists():
            raise FileNotFoundError(f"Settings file not found: {self.path}")
        self._doc = tomlkit.parse(self.path.read_text(encoding="utf-8"))

    def reload(self) -> None:
        """Re-read the file, picking up edits made outside this process."""
        self._doc = tomlkit.parse(self.path.read_text(encoding="utf-8"))

    def _tables(self) -> dict:
        return self._doc.get("groups", {})

    def groups(self) -> list[TargetGroup]:
        result = []
        for name, tbl in self._tables().items():
            data = tbl.unwrap()
            result.append(
                TargetGroup(
                    name=str(name),
                    ordinal=int(data.get("ordinal", 1)),
                    obsolete=bool(data.get("obsolete", False)),
                )
            )
        return result

    def get(self, group: TargetGroup) -> str:
        tbl = self._tables().get(group.name)
        if tbl is None:
            return ""
        return str(tbl.get("define_symbols", ""))

    def set(self, group: TargetGroup, value: str) -> None:
        tbl = self._tables().get(group.name)
        if tbl is None:
            raise SettingsWriteError(f"Target group '{group.name}' not in {self.path.name}")
        if tbl.unwrap().get("readonly", False):
            raise SettingsWriteError(f"Target group '{group.name}' is read-only")
        tbl["define_symbols"] = value
        try:
            atomic_write_text(self.path, tomlkit.dumps(self._doc))
        except OSError as exc:
            raise SettingsWriteError(f"Failed to write {self.path}: {exc}") from exc

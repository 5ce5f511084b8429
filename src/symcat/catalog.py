"""catalog.py - In-memory symbol catalog.

A catalog is an ordered list of :class:`Symbol` entries: real define
symbols, section headers, and separators.  Order is for display only;
synchronization with the build settings works on the set of enabled names
(see :mod:`symcat.sync`).

Nothing here touches the filesystem.  Serialization lives in
:mod:`symcat.document`, settings access in :mod:`symcat.store`.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Styles
# ---------------------------------------------------------------------------


class SymbolStyle(Enum):
    """Display style of a catalog entry.

    Values are the ordinals used by older catalog documents.
    """

    SYMBOL = 1
    SEPARATOR = 10
    HEADER = 11

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def parse(cls, raw: str | int | SymbolStyle) -> SymbolStyle:
        """Resolve a style from its name (``"symbol"``) or legacy ordinal (``1``)."""
        if isinstance(raw, SymbolStyle):
            return raw
        if isinstance(raw, bool):
            raise ValueError(f"Invalid symbol style: {raw!r}")
        if isinstance(raw, int):
            return cls(raw)
        key = str(raw).strip().upper()
        try:
            return cls[key]
        except KeyError:
            raise ValueError(
                f"Unknown symbol style: {raw!r}. "
                f"Expected one of: {', '.join(s.label for s in cls)}"
            ) from None


# ---------------------------------------------------------------------------
# Flag policy
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FlagPolicy:
    """Which styles carry enabled state, and how they interact.

    ``flag_styles`` lists the styles whose entries are real flags.  With
    ``exclusive`` set, every flag style other than SYMBOL behaves as a
    radio group: at most one enabled entry per style.
    """

    flag_styles: frozenset[SymbolStyle] = frozenset({SymbolStyle.SYMBOL})
    exclusive: bool = False

    def __post_init__(self) -> None:
        if SymbolStyle.SEPARATOR in self.flag_styles:
            raise ValueError("Separators cannot carry enabled state")
        # revert appends SYMBOL entries and must find them again
        if SymbolStyle.SYMBOL not in self.flag_styles:
            raise ValueError("flag_styles must include 'symbol'")

    def is_flag(self, symbol: Symbol) -> bool:
        return symbol.style in self.flag_styles

    def is_exclusive(self, style: SymbolStyle) -> bool:
        """Return True if enabling one entry of *style* disables its siblings."""
        return self.exclusive and style is not SymbolStyle.SYMBOL and style in self.flag_styles


DEFAULT_POLICY = FlagPolicy()


# ---------------------------------------------------------------------------
# Entries
# ---------------------------------------------------------------------------


@dataclass(eq=True)
class Symbol:
    """A single catalog entry."""

    style: SymbolStyle = SymbolStyle.SYMBOL
    enabled: bool = False
    name: str = ""
    description: str = ""

    def __post_init__(self) -> None:
        self.style = SymbolStyle.parse(self.style)
        # Separators are pure dividers
        if self.style is SymbolStyle.SEPARATOR:
            self.enabled = False
            self.name = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dict (style by name)."""
        return {
            "style": self.style.label,
            "enabled": self.enabled,
            "name": self.name,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Symbol:
        """Build a Symbol from a serialized record; missing keys take defaults."""
        return cls(
            style=SymbolStyle.parse(data.get("style", SymbolStyle.SYMBOL)),
            enabled=bool(data.get("enabled", False)),
            name=str(data.get("name", "") or ""),
            description=str(data.get("description", "") or ""),
        )


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


@dataclass
class SymbolCatalog:
    """Ordered collection of :class:`Symbol` entries with dirty tracking."""

    symbols: list[Symbol] = field(default_factory=list)
    dirty: bool = field(default=False, compare=False)

    # --- container protocol ---

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self.symbols)

    def __len__(self) -> int:
        return len(self.symbols)

    def __getitem__(self, index: int) -> Symbol:
        return self.symbols[index]

    # --- dirty flag ---

    def mark_dirty(self) -> None:
        """Flag the catalog as modified (e.g. after a direct field edit)."""
        self.dirty = True

    def mark_clean(self) -> None:
        """Reset the dirty flag once the caller has persisted the catalog."""
        self.dirty = False

    # --- mutation ---

    def add(self, symbol: Symbol) -> Symbol:
        """Append *symbol*.  No uniqueness check is made."""
        self.symbols.append(symbol)
        self.dirty = True
        return symbol

    def insert(self, index: int, symbol: Symbol) -> Symbol:
        self.symbols.insert(index, symbol)
        self.dirty = True
        return symbol

    def remove(self, symbol: Symbol) -> bool:
        """Remove *symbol* if present.  Returns True if an entry was removed.

        The exact object is preferred; otherwise the first structurally
        equal entry is removed.
        """
        index = self.index_of(symbol)
        if index < 0:
            return False
        del self.symbols[index]
        self.dirty = True
        return True

    def move(self, symbol: Symbol, index: int) -> bool:
        """Move *symbol* to position *index* (clamped to the list bounds)."""
        current = self.index_of(symbol)
        if current < 0:
            return False
        entry = self.symbols.pop(current)
        index = max(0, min(index, len(self.symbols)))
        self.symbols.insert(index, entry)
        if index != current:
            self.dirty = True
        return True

    def set_enabled(
        self,
        symbol: Symbol,
        enabled: bool,
        policy: FlagPolicy | None = None,
    ) -> bool:
        """Toggle *symbol*, honouring radio-group styles.  Returns True on change."""
        policy = policy or DEFAULT_POLICY
        if not policy.is_flag(symbol):
            return False
        changed = symbol.enabled != enabled
        symbol.enabled = enabled
        if enabled and policy.is_exclusive(symbol.style):
            for other in self.symbols:
                if other is not symbol and other.style is symbol.style and other.enabled:
                    other.enabled = False
                    changed = True
        if changed:
            self.dirty = True
        return changed

    # --- queries ---

    def index_of(self, symbol: Symbol) -> int:
        """Return the index of *symbol* (identity first, then equality), or -1."""
        for i, entry in enumerate(self.symbols):
            if entry is symbol:
                return i
        for i, entry in enumerate(self.symbols):
            if entry == symbol:
                return i
        return -1

    def flags(self, policy: FlagPolicy | None = None) -> list[Symbol]:
        """Return entries whose style carries enabled state."""
        policy = policy or DEFAULT_POLICY
        return [s for s in self.symbols if policy.is_flag(s)]

    def find_by_name(self, name: str, policy: FlagPolicy | None = None) -> Symbol | None:
        """Return the first flag entry named exactly *name*."""
        if not name:
            return None
        for symbol in self.flags(policy):
            if symbol.name == name:
                return symbol
        return None

    def active_names(self, policy: FlagPolicy | None = None) -> list[str]:
        """Distinct non-empty names of enabled flags, in catalog order."""
        seen: dict[str, None] = {}
        for symbol in self.flags(policy):
            if symbol.enabled and symbol.name:
                seen.setdefault(symbol.name, None)
        return list(seen)

    def to_dict(self) -> list[dict[str, Any]]:
        """Serialize to an ordered list of plain dicts."""
        return [s.to_dict() for s in self.symbols]

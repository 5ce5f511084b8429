"""session.py - Editing session over a catalog and a settings store.

Everything an interactive editor does besides drawing: watch the selected
group's define string for outside changes, pull them in, apply edits to
entries, and push the catalog back out to one or all target groups.

Typical loop::

    session = CatalogSession(catalog, store, selected_group, cfg.policy)
    while running:
        session.poll()            # reverts if the settings changed underneath us
        ...                       # user edits via add_symbol / toggle / rename
        if committed:
            session.apply_all()
        if catalog.dirty:
            save_catalog(catalog, path)
"""

from __future__ import annotations

from symcat.catalog import DEFAULT_POLICY, FlagPolicy, Symbol, SymbolCatalog, SymbolStyle
from symcat.store import SettingsStore, TargetGroup
from symcat.sync import ApplyResult, RevertResult, apply, revert

DEFAULT_SYMBOL_NAME = "SYMBOL_NAME"
DEFAULT_SYMBOL_DESCRIPTION = "symbol description"
DEFAULT_HEADER_NAME = "Header"


class CatalogSession:
    """Keeps a catalog in step with one selected target group."""

    def __init__(
        self,
        catalog: SymbolCatalog,
        store: SettingsStore,
        selected_group: TargetGroup | None,
        policy: FlagPolicy | None = None,
    ) -> None:
        self.catalog = catalog
        self.store = store
        self.selected_group = selected_group
        self.policy = policy or DEFAULT_POLICY
        self._cached_define: str | None = None

    @property
    def cached_define(self) -> str | None:
        """Last define string seen for the selected group (None before the first poll)."""
        return self._cached_define

    def select(self, group: TargetGroup | None) -> None:
        """Switch the selected group; the next poll re-reads it."""
        if group != self.selected_group:
            self.selected_group = group
            self._cached_define = None

    # --- sync ---

    def poll(self) -> RevertResult | None:
        """Revert from the store if its value changed since the last poll."""
        if self.selected_group is None:
            return None
        current = self.store.get(self.selected_group)
        if current == self._cached_define:
            return None
        self._cached_define = current
        return revert(self.catalog, current, self.policy)

    def apply_all(self) -> ApplyResult:
        return apply(self.catalog, self.store, (), self.policy)

    def apply_current(self) -> ApplyResult:
        if self.selected_group is None:
            raise ValueError("No target group selected")
        return apply(self.catalog, self.store, (self.selected_group,), self.policy)

    # --- edits ---

    def add_symbol(self, style: SymbolStyle = SymbolStyle.SYMBOL) -> Symbol:
        """Append a new entry pre-filled with placeholder text for *style*."""
        if style is SymbolStyle.SYMBOL:
            symbol = Symbol(style, name=DEFAULT_SYMBOL_NAME, description=DEFAULT_SYMBOL_DESCRIPTION)
        elif style is SymbolStyle.HEADER:
            symbol = Symbol(style, name=DEFAULT_HEADER_NAME)
        else:
            symbol = Symbol(style)
        return self.catalog.add(symbol)

    def remove_symbol(self, symbol: Symbol) -> bool:
        return self.catalog.remove(symbol)

    def set_enabled(self, symbol: Symbol, enabled: bool) -> bool:
        return self.catalog.set_enabled(symbol, enabled, self.policy)

    def toggle(self, symbol: Symbol) -> bool:
        return self.set_enabled(symbol, not symbol.enabled)

    def rename(self, symbol: Symbol, name: str) -> None:
        if symbol.style is SymbolStyle.SEPARATOR or symbol.name == name:
            return
        symbol.name = name
        self.catalog.mark_dirty()

    def describe(self, symbol: Symbol, description: str) -> None:
        if symbol.description == description:
            return
        symbol.description = description
        self.catalog.mark_dirty()

"""sync.py - Two-way sync between a symbol catalog and the build settings.

* :func:`revert` pulls a group's define-symbols string into the catalog.
* :func:`apply` pushes the catalog's enabled symbols to one or more groups.

Both are plain functions over a :class:`~symcat.catalog.SymbolCatalog`; the
settings backend is injected as a :class:`~symcat.store.SettingsStore`.

Define strings are ``;``-joined symbol names.  Whitespace and empty
segments are dropped and duplicates collapse, so ``" A;;B ; A"`` parses to
``["A", "B"]``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from symcat.catalog import DEFAULT_POLICY, FlagPolicy, Symbol, SymbolCatalog, SymbolStyle
from symcat.store import SettingsStore, TargetGroup

logger = logging.getLogger(__name__)

DELIMITER = ";"

_WHITESPACE_RE = re.compile(r"\s+")


# ---------------------------------------------------------------------------
# Define-string codec
# ---------------------------------------------------------------------------


def parse_define_symbols(value: str | None) -> list[str]:
    """Split a define string into distinct names, keeping first-seen order."""
    if not value:
        return []
    cleaned = _WHITESPACE_RE.sub("", value)
    names: dict[str, None] = {}
    for token in cleaned.split(DELIMITER):
        if token:
            names.setdefault(token, None)
    return list(names)


def join_define_symbols(names: Iterable[str]) -> str:
    """Join names with ``;``, dropping empties and repeats (first wins)."""
    unique: dict[str, None] = {}
    for name in names:
        if name:
            unique.setdefault(name, None)
    return DELIMITER.join(unique)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass
class RevertResult:
    """What a revert changed in the catalog."""

    active: list[str] = field(default_factory=list)
    added: list[str] = field(default_factory=list)
    enabled: list[str] = field(default_factory=list)
    disabled: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.added or self.enabled or self.disabled)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dict for JSON output."""
        return {
            "active": list(self.active),
            "added": list(self.added),
            "enabled": list(self.enabled),
            "disabled": list(self.disabled),
            "changed": self.changed,
        }


@dataclass
class GroupResult:
    """Outcome of writing the define string to one target group."""

    group: TargetGroup
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"group": self.group.name, "ok": self.ok}
        if self.error is not None:
            d["error"] = str(self.error)
        return d


@dataclass
class ApplyResult:
    """Aggregated result of an apply across target groups."""

    define_symbols: str = ""
    results: list[GroupResult] = field(default_factory=list)
    skipped: list[TargetGroup] = field(default_factory=list)

    @property
    def succeeded(self) -> list[TargetGroup]:
        return [r.group for r in self.results if r.ok]

    @property
    def failed(self) -> list[GroupResult]:
        return [r for r in self.results if not r.ok]

    @property
    def ok(self) -> bool:
        return not self.failed

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dict for JSON output."""
        return {
            "define_symbols": self.define_symbols,
            "groups": [r.to_dict() for r in self.results],
            "skipped": [g.name for g in self.skipped],
            "succeeded": len(self.succeeded),
            "failed": len(self.failed),
        }


# ---------------------------------------------------------------------------
# Revert: settings -> catalog
# ---------------------------------------------------------------------------


def _enforce_exclusive(
    catalog: SymbolCatalog, policy: FlagPolicy, result: RevertResult
) -> None:
    """Keep only the first enabled entry of each radio-group style."""
    winners: dict[SymbolStyle, Symbol] = {}
    for symbol in catalog:
        if not symbol.enabled or not policy.is_exclusive(symbol.style):
            continue
        if symbol.style not in winners:
            winners[symbol.style] = symbol
            continue
        symbol.enabled = False
        if symbol.name in result.enabled:
            result.enabled.remove(symbol.name)
        else:
            result.disabled.append(symbol.name)


def revert(
    catalog: SymbolCatalog,
    value: str | None,
    policy: FlagPolicy | None = None,
) -> RevertResult:
    """Make *catalog* mirror the define string *value*, in place.

    Flag entries are enabled iff their name is in *value*; names with no
    flag entry yet are appended as new enabled SYMBOL entries.  Nothing is
    ever removed, and running it again with the same value changes nothing.

    Only flag entries count as a match, not every entry with that name: a
    HEADER or other non-flag entry named ``X`` does not absorb an active
    ``X``, so a SYMBOL ``X`` is appended next to it.
    The policy always includes SYMBOL, so appended entries are found again
    on the next call.
    """
    policy = policy or DEFAULT_POLICY
    active = parse_define_symbols(value)
    active_set = set(active)
    result = RevertResult(active=active)

    for symbol in catalog.flags(policy):
        want = bool(symbol.name) and symbol.name in active_set
        if symbol.enabled == want:
            continue
        symbol.enabled = want
        (result.enabled if want else result.disabled).append(symbol.name)

    if policy.exclusive:
        _enforce_exclusive(catalog, policy, result)

    known = {s.name for s in catalog.flags(policy) if s.name}
    for name in active:
        if name in known:
            continue
        catalog.add(Symbol(style=SymbolStyle.SYMBOL, enabled=True, name=name))
        known.add(name)
        result.added.append(name)

    if result.changed:
        catalog.mark_dirty()
        logger.debug(
            "revert: +%d added, %d enabled, %d disabled",
            len(result.added),
            len(result.enabled),
            len(result.disabled),
        )
    return result


def revert_from_store(
    catalog: SymbolCatalog,
    store: SettingsStore,
    group: TargetGroup,
    policy: FlagPolicy | None = None,
) -> RevertResult:
    """Revert *catalog* from the define string currently stored for *group*."""
    return revert(catalog, store.get(group), policy)


# ---------------------------------------------------------------------------
# Apply: catalog -> settings
# ---------------------------------------------------------------------------


def build_define_symbols(catalog: SymbolCatalog, policy: FlagPolicy | None = None) -> str:
    """Return the define string the catalog would export."""
    return join_define_symbols(catalog.active_names(policy))


def apply(
    catalog: SymbolCatalog,
    store: SettingsStore,
    target_groups: Sequence[TargetGroup] = (),
    policy: FlagPolicy | None = None,
) -> ApplyResult:
    """Write the catalog's enabled symbols to each target group.

    An empty *target_groups* means every group the store knows about.
    Obsolete and sentinel groups are skipped.  Each group is cleared and
    then written, so the store overwrites instead of merging.  A failing
    group is logged and recorded; the remaining groups are still written.
    """
    define = build_define_symbols(catalog, policy)
    groups = list(target_groups) or store.groups()
    result = ApplyResult(define_symbols=define)

    for group in groups:
        if not group.is_concrete:
            logger.debug("apply: skipping non-concrete group %s", group.name)
            result.skipped.append(group)
            continue
        try:
            store.set(group, "")
            store.set(group, define)
        except Exception as exc:
            logger.warning("apply: failed to write %s", group.name, exc_info=True)
            result.results.append(GroupResult(group, exc))
        else:
            logger.debug("apply: %s <- %r", group.name, define)
            result.results.append(GroupResult(group))

    return result

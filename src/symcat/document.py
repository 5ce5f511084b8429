"""document.py - Catalog serialization.

A catalog is stored as an ordered list of records, one per entry::

    {"style": "symbol", "enabled": true, "name": "USE_STEAM", "description": "..."}

On disk that list is a TOML array of tables::

    [[symbols]]
    style = "header"
    enabled = false
    name = "Platform"
    description = ""

    [[symbols]]
    style = "symbol"
    enabled = true
    name = "USE_STEAM"
    description = "Link against Steamworks"

Loading and saving take an explicit path; locating or creating the
catalog file is up to the caller.
"""

from __future__ import annotations

import contextlib
import os
from pathlib import Path
from typing import Any

import tomlkit

from symcat.catalog import Symbol, SymbolCatalog

_HEADER_COMMENT = "symcat catalog -- edit with 'symcat edit' or by hand"


def atomic_write_text(filepath: Path, text: str, encoding: str = "utf-8") -> None:
    """Replace *filepath* with *text* via a temp file so readers never see a partial write."""
    tmp_path = filepath.with_suffix(filepath.suffix + ".tmp")
    try:
        tmp_path.write_text(text, encoding=encoding)
        os.replace(tmp_path, filepath)
    except BaseException:
        with contextlib.suppress(OSError):
            tmp_path.unlink()
        raise


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


def catalog_to_records(catalog: SymbolCatalog) -> list[dict[str, Any]]:
    return catalog.to_dict()


def catalog_from_records(records: list[dict[str, Any]]) -> SymbolCatalog:
    """Rebuild a catalog from records; the result starts clean."""
    return SymbolCatalog(symbols=[Symbol.from_dict(r) for r in records])


# ---------------------------------------------------------------------------
# TOML text
# ---------------------------------------------------------------------------


def dumps_catalog(catalog: SymbolCatalog) -> str:
    doc = tomlkit.document()
    doc.add(tomlkit.comment(_HEADER_COMMENT))
    symbols = tomlkit.aot()
    for record in catalog_to_records(catalog):
        tbl = tomlkit.table()
        for key, value in record.items():
            tbl.add(key, value)
        symbols.append(tbl)
    doc.add("symbols", symbols)
    return tomlkit.dumps(doc)


def loads_catalog(text: str) -> SymbolCatalog:
    data = tomlkit.parse(text).unwrap()
    return catalog_from_records(list(data.get("symbols", [])))


# ---------------------------------------------------------------------------
# Files
# ---------------------------------------------------------------------------


def load_catalog(path: Path) -> SymbolCatalog:
    """Load the catalog at *path*.  Raises FileNotFoundError if it is missing."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Catalog not found: {path}")
    return loads_catalog(path.read_text(encoding="utf-8"))


def save_catalog(catalog: SymbolCatalog, path: Path) -> None:
    """Write *catalog* to *path* atomically and mark it clean."""
    atomic_write_text(Path(path), dumps_catalog(catalog))
    catalog.mark_clean()

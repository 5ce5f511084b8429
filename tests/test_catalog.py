"""Tests for symcat.catalog -- entries, flag policy, and catalog operations."""

import pytest

from symcat.catalog import FlagPolicy, Symbol, SymbolCatalog, SymbolStyle

HEADER_FLAGS = FlagPolicy(flag_styles=frozenset({SymbolStyle.SYMBOL, SymbolStyle.HEADER}))
EXCLUSIVE_HEADERS = FlagPolicy(
    flag_styles=frozenset({SymbolStyle.SYMBOL, SymbolStyle.HEADER}), exclusive=True
)


def _sym(name: str, enabled: bool = False, description: str = "") -> Symbol:
    return Symbol(SymbolStyle.SYMBOL, enabled=enabled, name=name, description=description)


def _header(name: str, enabled: bool = False) -> Symbol:
    return Symbol(SymbolStyle.HEADER, enabled=enabled, name=name)


# ---------------------------------------------------------------------------
# SymbolStyle
# ---------------------------------------------------------------------------


class TestSymbolStyle:
    def test_parse_by_name(self) -> None:
        assert SymbolStyle.parse("symbol") is SymbolStyle.SYMBOL
        assert SymbolStyle.parse("Header") is SymbolStyle.HEADER
        assert SymbolStyle.parse(" SEPARATOR ") is SymbolStyle.SEPARATOR

    def test_parse_legacy_ordinals(self) -> None:
        assert SymbolStyle.parse(1) is SymbolStyle.SYMBOL
        assert SymbolStyle.parse(10) is SymbolStyle.SEPARATOR
        assert SymbolStyle.parse(11) is SymbolStyle.HEADER

    def test_parse_passthrough(self) -> None:
        assert SymbolStyle.parse(SymbolStyle.HEADER) is SymbolStyle.HEADER

    def test_parse_unknown_name(self) -> None:
        with pytest.raises(ValueError, match="Unknown symbol style"):
            SymbolStyle.parse("banner")

    def test_parse_unknown_ordinal(self) -> None:
        with pytest.raises(ValueError):
            SymbolStyle.parse(5)

    def test_parse_rejects_bool(self) -> None:
        with pytest.raises(ValueError):
            SymbolStyle.parse(True)

    def test_label(self) -> None:
        assert SymbolStyle.SEPARATOR.label == "separator"


# ---------------------------------------------------------------------------
# FlagPolicy
# ---------------------------------------------------------------------------


class TestFlagPolicy:
    def test_default_only_symbols_are_flags(self) -> None:
        policy = FlagPolicy()
        assert policy.is_flag(_sym("A"))
        assert not policy.is_flag(_header("H"))
        assert not policy.is_flag(Symbol(SymbolStyle.SEPARATOR))

    def test_separator_cannot_be_flag(self) -> None:
        with pytest.raises(ValueError):
            FlagPolicy(flag_styles=frozenset({SymbolStyle.SEPARATOR}))

    def test_symbol_style_required(self) -> None:
        with pytest.raises(ValueError, match="symbol"):
            FlagPolicy(flag_styles=frozenset({SymbolStyle.HEADER}))
        with pytest.raises(ValueError):
            FlagPolicy(flag_styles=frozenset())

    def test_symbol_style_is_never_exclusive(self) -> None:
        assert not EXCLUSIVE_HEADERS.is_exclusive(SymbolStyle.SYMBOL)
        assert EXCLUSIVE_HEADERS.is_exclusive(SymbolStyle.HEADER)

    def test_exclusive_requires_flag_style(self) -> None:
        policy = FlagPolicy(exclusive=True)
        assert not policy.is_exclusive(SymbolStyle.HEADER)


# ---------------------------------------------------------------------------
# Symbol
# ---------------------------------------------------------------------------


class TestSymbol:
    def test_defaults(self) -> None:
        s = Symbol()
        assert s.style is SymbolStyle.SYMBOL
        assert s.enabled is False
        assert s.name == ""
        assert s.description == ""

    def test_separator_drops_name_and_state(self) -> None:
        s = Symbol(SymbolStyle.SEPARATOR, enabled=True, name="oops")
        assert s.name == ""
        assert s.enabled is False

    def test_style_coerced_from_string(self) -> None:
        s = Symbol(style="header", name="Platform")  # type: ignore[arg-type]
        assert s.style is SymbolStyle.HEADER

    def test_to_dict(self) -> None:
        s = _sym("USE_STEAM", enabled=True, description="Steamworks")
        assert s.to_dict() == {
            "style": "symbol",
            "enabled": True,
            "name": "USE_STEAM",
            "description": "Steamworks",
        }

    def test_from_dict_fills_missing_fields(self) -> None:
        s = Symbol.from_dict({"name": "FOO"})
        assert s == _sym("FOO")

    def test_from_dict_legacy_ordinal(self) -> None:
        s = Symbol.from_dict({"style": 11, "name": "Platform"})
        assert s.style is SymbolStyle.HEADER

    def test_structural_equality(self) -> None:
        assert _sym("A", True) == _sym("A", True)
        assert _sym("A", True) != _sym("A", False)


# ---------------------------------------------------------------------------
# SymbolCatalog: mutation
# ---------------------------------------------------------------------------


class TestCatalogAdd:
    def test_add_appends_and_marks_dirty(self) -> None:
        catalog = SymbolCatalog()
        a = catalog.add(_sym("A"))
        catalog.add(_sym("B"))
        assert [s.name for s in catalog] == ["A", "B"]
        assert catalog[0] is a
        assert catalog.dirty

    def test_add_allows_duplicates(self) -> None:
        catalog = SymbolCatalog()
        catalog.add(_sym("A"))
        catalog.add(_sym("A"))
        assert len(catalog) == 2

    def test_insert(self) -> None:
        catalog = SymbolCatalog([_sym("A"), _sym("C")])
        catalog.insert(1, _sym("B"))
        assert [s.name for s in catalog] == ["A", "B", "C"]


class TestCatalogRemove:
    def test_remove_by_identity(self) -> None:
        first = _sym("A", True)
        second = _sym("A", True)
        catalog = SymbolCatalog([first, _sym("B"), second])
        assert catalog.remove(second)
        assert len(catalog) == 2
        assert catalog[0] is first

    def test_remove_by_equality(self) -> None:
        catalog = SymbolCatalog([_sym("A"), _sym("B"), _sym("A")])
        assert catalog.remove(_sym("A"))
        assert [s.name for s in catalog] == ["B", "A"]

    def test_remove_missing_is_noop(self) -> None:
        catalog = SymbolCatalog([_sym("A")])
        assert not catalog.remove(_sym("Z"))
        assert len(catalog) == 1
        assert not catalog.dirty

    def test_remove_marks_dirty(self) -> None:
        catalog = SymbolCatalog([_sym("A")])
        catalog.remove(catalog[0])
        assert catalog.dirty


class TestCatalogMove:
    def test_move_to_front(self) -> None:
        catalog = SymbolCatalog([_sym("A"), _sym("B"), _sym("C")])
        assert catalog.move(catalog[2], 0)
        assert [s.name for s in catalog] == ["C", "A", "B"]
        assert catalog.dirty

    def test_move_clamps_index(self) -> None:
        catalog = SymbolCatalog([_sym("A"), _sym("B")])
        catalog.move(catalog[0], 99)
        assert [s.name for s in catalog] == ["B", "A"]

    def test_move_same_position_not_dirty(self) -> None:
        catalog = SymbolCatalog([_sym("A"), _sym("B")])
        catalog.move(catalog[1], 1)
        assert not catalog.dirty

    def test_move_missing(self) -> None:
        catalog = SymbolCatalog([_sym("A")])
        assert not catalog.move(_sym("Z"), 0)


class TestCatalogSetEnabled:
    def test_toggle_symbol(self) -> None:
        catalog = SymbolCatalog([_sym("A")])
        assert catalog.set_enabled(catalog[0], True)
        assert catalog[0].enabled
        assert catalog.dirty

    def test_no_change_returns_false(self) -> None:
        catalog = SymbolCatalog([_sym("A", True)])
        assert not catalog.set_enabled(catalog[0], True)
        assert not catalog.dirty

    def test_separator_refused(self) -> None:
        catalog = SymbolCatalog([Symbol(SymbolStyle.SEPARATOR)])
        assert not catalog.set_enabled(catalog[0], True)
        assert not catalog[0].enabled

    def test_header_refused_by_default(self) -> None:
        catalog = SymbolCatalog([_header("H")])
        assert not catalog.set_enabled(catalog[0], True)

    def test_symbols_are_independent(self) -> None:
        catalog = SymbolCatalog([_sym("A", True), _sym("B")])
        catalog.set_enabled(catalog[1], True, EXCLUSIVE_HEADERS)
        assert catalog[0].enabled and catalog[1].enabled

    def test_exclusive_headers_radio(self) -> None:
        catalog = SymbolCatalog([_header("H1", True), _sym("A", True), _header("H2")])
        catalog.set_enabled(catalog[2], True, EXCLUSIVE_HEADERS)
        assert not catalog[0].enabled
        assert catalog[1].enabled
        assert catalog[2].enabled

    def test_non_exclusive_headers_independent(self) -> None:
        catalog = SymbolCatalog([_header("H1", True), _header("H2")])
        catalog.set_enabled(catalog[1], True, HEADER_FLAGS)
        assert catalog[0].enabled and catalog[1].enabled


class TestDirtyFlag:
    def test_new_catalog_clean(self) -> None:
        assert not SymbolCatalog([_sym("A")]).dirty

    def test_mark_dirty_and_clean(self) -> None:
        catalog = SymbolCatalog()
        catalog.mark_dirty()
        assert catalog.dirty
        catalog.mark_clean()
        assert not catalog.dirty

    def test_dirty_ignored_by_equality(self) -> None:
        a = SymbolCatalog([_sym("A")])
        b = SymbolCatalog([_sym("A")])
        b.mark_dirty()
        assert a == b


# ---------------------------------------------------------------------------
# SymbolCatalog: queries
# ---------------------------------------------------------------------------


class TestActiveNames:
    def test_enabled_in_catalog_order(self) -> None:
        catalog = SymbolCatalog([_sym("B", True), _sym("A", True), _sym("C")])
        assert catalog.active_names() == ["B", "A"]

    def test_duplicates_and_separators_dropped(self) -> None:
        catalog = SymbolCatalog(
            [_sym("A", True), _sym("B", True), Symbol(SymbolStyle.SEPARATOR), _sym("A", True)]
        )
        assert catalog.active_names() == ["A", "B"]

    def test_empty_names_dropped(self) -> None:
        catalog = SymbolCatalog([_sym("", True), _sym("A", True)])
        assert catalog.active_names() == ["A"]

    def test_headers_excluded_by_default(self) -> None:
        catalog = SymbolCatalog([_header("H", True), _sym("A", True)])
        assert catalog.active_names() == ["A"]

    def test_headers_included_when_flag_style(self) -> None:
        catalog = SymbolCatalog([_header("H", True), _sym("A", True)])
        assert catalog.active_names(HEADER_FLAGS) == ["H", "A"]

    def test_empty_catalog(self) -> None:
        assert SymbolCatalog().active_names() == []


class TestFindByName:
    def test_found(self) -> None:
        catalog = SymbolCatalog([_sym("A"), _sym("B")])
        assert catalog.find_by_name("B") is catalog[1]

    def test_first_match_wins(self) -> None:
        catalog = SymbolCatalog([_sym("A", True), _sym("A")])
        assert catalog.find_by_name("A") is catalog[0]

    def test_absent(self) -> None:
        assert SymbolCatalog([_sym("A")]).find_by_name("Z") is None

    def test_empty_name(self) -> None:
        assert SymbolCatalog([_sym("")]).find_by_name("") is None

    def test_exact_match_only(self) -> None:
        assert SymbolCatalog([_sym("FOO")]).find_by_name("foo") is None

    def test_headers_skipped_by_default(self) -> None:
        catalog = SymbolCatalog([_header("A")])
        assert catalog.find_by_name("A") is None
        assert catalog.find_by_name("A", HEADER_FLAGS) is catalog[0]


class TestIndexOf:
    def test_identity_before_equality(self) -> None:
        first = _sym("A")
        second = _sym("A")
        catalog = SymbolCatalog([first, second])
        assert catalog.index_of(second) == 1
        assert catalog.index_of(_sym("A")) == 0

    def test_missing(self) -> None:
        assert SymbolCatalog().index_of(_sym("A")) == -1

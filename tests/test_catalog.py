"""
Catalog model tests — value contracts, relation reconciliation, adjacency index,
authoring checks, and the default seed catalog.
"""

import pytest
from pydantic import ValidationError

from cart_configurator.catalog import (
    KNOWN_CATEGORIES,
    ConfigOption,
    Material,
    MaterialZone,
    OptionCatalog,
    OptionCategory,
    OptionRelation,
    Platform,
    RelationType,
    find_catalog_issues,
    reconcile_relations,
    relations_from_options,
)
from cart_configurator.seed_data import DEFAULT_MATERIALS, DEFAULT_OPTIONS, DEFAULT_PLATFORM


def _opt(option_id, requires=(), excludes=(), name=None):
    return ConfigOption(
        id=option_id,
        category=OptionCategory.STORAGE,
        name=name or option_id.upper(),
        requires=requires,
        excludes=excludes,
    )


def _rel(option_id, related_id, rel_type, reason=None):
    return OptionRelation(option_id=option_id, related_id=related_id, type=rel_type, reason=reason)


# --- Value contracts ---

def test_negative_base_price_rejected():
    with pytest.raises(ValidationError):
        Platform(id="p", name="P", base_price=-1)


def test_negative_part_price_and_labor_rejected():
    with pytest.raises(ValidationError):
        ConfigOption(id="x", category="ROOF", name="X", part_price=-5)
    with pytest.raises(ValidationError):
        ConfigOption(id="x", category="ROOF", name="X", labor_hours=-0.5)


def test_material_multiplier_must_be_positive():
    with pytest.raises(ValidationError):
        Material(id="m", zone="BODY", type="PAINT", name="M", price_multiplier=0)


def test_material_zone_outside_enum_rejected():
    with pytest.raises(ValidationError):
        Material(id="m", zone="DASHBOARD", type="PAINT", name="M", price_multiplier=1.0)


def test_option_category_is_open_set():
    """Known categories come from the enum; new ones are accepted as plain strings."""
    known = ConfigOption(id="x", category=OptionCategory.WHEELS, name="X")
    novel = ConfigOption(id="y", category="WINCHES", name="Y")
    assert known.category == "WHEELS"
    assert novel.category == "WINCHES"
    assert "WINCHES" not in KNOWN_CATEGORIES


def test_option_requires_excludes_deduplicated_in_order():
    opt = _opt("x", requires=["b", "a", "b"], excludes=["c", "c"])
    assert opt.requires == ("b", "a")
    assert opt.excludes == ("c",)


def test_catalog_values_are_frozen():
    opt = _opt("x")
    with pytest.raises(ValidationError):
        opt.part_price = 10


# --- reconcile_relations ---

def test_reconcile_appends_relation_rows_after_inline_entries():
    options = [_opt("a", requires=["b"]), _opt("b"), _opt("c")]
    relations = [
        _rel("a", "c", RelationType.REQUIRES),
        _rel("a", "b", RelationType.REQUIRES),  # duplicate of inline
        _rel("b", "c", RelationType.EXCLUDES, reason="same mount point"),
    ]
    merged = {o.id: o for o in reconcile_relations(options, relations)}
    assert merged["a"].requires == ("b", "c")
    assert merged["b"].excludes == ("c",)
    assert merged["c"].requires == ()


def test_reconcile_skips_orphan_relations_and_leaves_inputs_alone():
    options = [_opt("a")]
    merged = reconcile_relations(options, [_rel("retired", "a", RelationType.EXCLUDES)])
    assert merged == options
    assert options[0].excludes == ()


def test_relations_from_options_round_trip():
    rows = relations_from_options(DEFAULT_OPTIONS)
    bare = [o.model_copy(update={"requires": (), "excludes": ()}) for o in DEFAULT_OPTIONS]
    assert reconcile_relations(bare, rows) == DEFAULT_OPTIONS


# --- OptionCatalog ---

def test_option_catalog_lookup_and_name_fallback():
    catalog = OptionCatalog([_opt("a", requires=["b"], name="Alpha"), _opt("b", name="Bravo")])
    assert len(catalog) == 2
    assert "a" in catalog and "zzz" not in catalog
    assert catalog.get("zzz") is None
    assert catalog.name_of("a") == "Alpha"
    assert catalog.name_of("zzz") == "zzz"
    assert catalog.requires_of("a") == ("b",)
    assert catalog.excludes_of("zzz") == ()


def test_option_catalog_dependents_index():
    catalog = OptionCatalog([_opt("a", requires=["c"]), _opt("b", requires=["c"]), _opt("c")])
    assert catalog.dependents_of("c") == ["a", "b"]
    assert catalog.dependents_of("a") == []


def test_option_catalog_first_definition_wins():
    catalog = OptionCatalog([_opt("a", name="First"), _opt("a", name="Second")])
    assert len(catalog) == 1
    assert catalog.name_of("a") == "First"


def test_duplicates_visible_only_on_raw_option_list():
    options = [_opt("a", name="First"), _opt("a", name="Second")]
    assert find_catalog_issues(options) == ["Duplicate option ID: a"]
    assert find_catalog_issues(OptionCatalog(options)) == []


def test_option_catalog_coerce_reuses_index():
    catalog = OptionCatalog([_opt("a")])
    assert OptionCatalog.coerce(catalog) is catalog
    assert [o.id for o in OptionCatalog.coerce([_opt("b")])] == ["b"]


# --- find_catalog_issues ---

def test_default_catalog_has_no_issues():
    assert find_catalog_issues(DEFAULT_OPTIONS) == []


def test_catalog_issues_reported():
    options = [
        _opt("a", requires=["a"], name="Alpha"),
        _opt("b", requires=["c"], excludes=["c", "b"], name="Bravo"),
        _opt("c", requires=["ghost"], name="Charlie"),
        _opt("c", name="Charlie Again"),
    ]
    issues = find_catalog_issues(options)
    assert "Duplicate option ID: c" in issues
    assert 'Option "Alpha" requires itself' in issues
    assert 'Option "Bravo" excludes itself' in issues
    assert 'Option "Bravo" both requires and excludes "c"' in issues
    assert 'Option "Charlie" references unknown option ID: ghost' in issues


# --- Seed catalog ---

def test_seed_catalog_shape():
    assert DEFAULT_PLATFORM.base_price == 8500.00
    assert len({o.id for o in DEFAULT_OPTIONS}) == len(DEFAULT_OPTIONS)
    assert {m.zone for m in DEFAULT_MATERIALS} == set(MaterialZone)
    lift = next(o for o in DEFAULT_OPTIONS if o.id == "suspension-lift-6")
    assert lift.requires == ("wheels-offroad",)
    assert lift.part_price == 2400

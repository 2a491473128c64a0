"""
Catalog model — platforms, options, materials and option relations.

The catalog is a read-only snapshot supplied by the caller on every call.
Constraints between options can arrive two ways: inline `requires`/`excludes`
lists on each option, or as separate OptionRelation rows (how the database
stores them). Both are folded into one OptionCatalog adjacency index, and the
rules engine only ever reads that index.
"""

import enum
import logging
from typing import Iterable, Iterator, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)


# --- Enums ---

class OptionCategory(str, enum.Enum):
    SEATING = "SEATING"
    ROOF = "ROOF"
    WHEELS = "WHEELS"
    LIGHTING = "LIGHTING"
    STORAGE = "STORAGE"
    ELECTRONICS = "ELECTRONICS"
    SUSPENSION = "SUSPENSION"
    FABRICATION = "FABRICATION"


# DECISION: option category is stored as a plain string so new categories don't
# require a code change. OptionCategory lists the known values for reference.
KNOWN_CATEGORIES = [c.value for c in OptionCategory]


class MaterialZone(str, enum.Enum):
    BODY = "BODY"
    SEATS = "SEATS"
    ROOF = "ROOF"
    METAL = "METAL"
    GLASS = "GLASS"


class MaterialType(str, enum.Enum):
    PAINT = "PAINT"
    VINYL = "VINYL"
    FABRIC = "FABRIC"
    POWDERCOAT = "POWDERCOAT"
    TINT = "TINT"


class MaterialFinish(str, enum.Enum):
    GLOSS = "GLOSS"
    MATTE = "MATTE"
    METALLIC = "METALLIC"
    SATIN = "SATIN"


class RelationType(str, enum.Enum):
    REQUIRES = "REQUIRES"
    EXCLUDES = "EXCLUDES"


# --- Catalog values ---

class Platform(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    name: str
    description: str = ""
    base_price: float = Field(ge=0)
    default_asset_path: str = ""


class ConfigOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    category: str
    name: str
    description: str = ""
    part_price: float = Field(default=0.0, ge=0)
    labor_hours: float = Field(default=0.0, ge=0)
    requires: tuple[str, ...] = ()
    excludes: tuple[str, ...] = ()
    asset_path: str = ""
    platform_id: Optional[str] = None

    @field_validator("category", mode="before")
    @classmethod
    def _category_value(cls, value):
        if isinstance(value, OptionCategory):
            return value.value
        return value

    @field_validator("requires", "excludes")
    @classmethod
    def _dedupe(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        """Drop repeated IDs, keeping first-seen order."""
        return tuple(dict.fromkeys(value))


class Material(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    zone: MaterialZone
    type: MaterialType
    name: str
    description: str = ""
    color: str = ""
    finish: MaterialFinish = MaterialFinish.GLOSS
    price_multiplier: float = Field(gt=0)


class OptionRelation(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    option_id: str
    related_id: str
    type: RelationType
    reason: Optional[str] = None


# --- Relation reconciliation ---

def reconcile_relations(options: Iterable[ConfigOption],
                        relations: Iterable[OptionRelation]) -> list[ConfigOption]:
    """
    Fold OptionRelation rows into each option's requires/excludes.

    Inline entries come first, relation rows are appended in row order,
    duplicates are dropped. Relations that point from an option not in
    `options` are skipped. Returns new option values.
    """
    options = list(options)
    known = {opt.id for opt in options}
    extra_requires: dict[str, list[str]] = {}
    extra_excludes: dict[str, list[str]] = {}

    for rel in relations:
        if rel.option_id not in known:
            logger.warning("Skipping relation from unknown option %s -> %s", rel.option_id, rel.related_id)
            continue
        target = extra_requires if rel.type == RelationType.REQUIRES else extra_excludes
        target.setdefault(rel.option_id, []).append(rel.related_id)

    merged = []
    for opt in options:
        if opt.id not in extra_requires and opt.id not in extra_excludes:
            merged.append(opt)
            continue
        merged.append(opt.model_copy(update={
            "requires": tuple(dict.fromkeys(opt.requires + tuple(extra_requires.get(opt.id, [])))),
            "excludes": tuple(dict.fromkeys(opt.excludes + tuple(extra_excludes.get(opt.id, [])))),
        }))
    return merged


def relations_from_options(options: Iterable[ConfigOption]) -> list[OptionRelation]:
    """Inverse of reconcile_relations — one row per inline requires/excludes entry."""
    rows = []
    for opt in options:
        for related_id in opt.requires:
            rows.append(OptionRelation(option_id=opt.id, related_id=related_id, type=RelationType.REQUIRES))
        for related_id in opt.excludes:
            rows.append(OptionRelation(option_id=opt.id, related_id=related_id, type=RelationType.EXCLUDES))
    return rows


# --- Adjacency index ---

class OptionCatalog:
    """
    Authoritative requires/excludes adjacency for one catalog load.

    Built once from the option list (plus optional relation rows), then queried
    by the rules engine. Iterates in catalog order. If an ID appears twice the
    first definition wins and the later ones are dropped, so run
    find_catalog_issues on the raw option list to see duplicates.
    """

    def __init__(self, options: Iterable[ConfigOption],
                 relations: Iterable[OptionRelation] = ()):
        relations = list(relations)
        merged = reconcile_relations(options, relations) if relations else list(options)

        self._options: list[ConfigOption] = []
        self._by_id: dict[str, ConfigOption] = {}
        for opt in merged:
            if opt.id in self._by_id:
                continue
            self._by_id[opt.id] = opt
            self._options.append(opt)

        self._dependents: dict[str, list[str]] = {}
        for opt in self._options:
            for required_id in opt.requires:
                self._dependents.setdefault(required_id, []).append(opt.id)

    @classmethod
    def coerce(cls, all_options: Union["OptionCatalog", Sequence[ConfigOption]]) -> "OptionCatalog":
        """Accept either a prebuilt index or a plain option list."""
        if isinstance(all_options, OptionCatalog):
            return all_options
        return cls(all_options)

    def __iter__(self) -> Iterator[ConfigOption]:
        return iter(self._options)

    def __len__(self) -> int:
        return len(self._options)

    def __contains__(self, option_id: object) -> bool:
        return option_id in self._by_id

    def get(self, option_id: str) -> Optional[ConfigOption]:
        return self._by_id.get(option_id)

    def name_of(self, option_id: str) -> str:
        """Display name for an ID, or the raw ID when the catalog doesn't know it."""
        opt = self._by_id.get(option_id)
        return opt.name if opt else option_id

    def requires_of(self, option_id: str) -> tuple[str, ...]:
        opt = self._by_id.get(option_id)
        return opt.requires if opt else ()

    def excludes_of(self, option_id: str) -> tuple[str, ...]:
        opt = self._by_id.get(option_id)
        return opt.excludes if opt else ()

    def dependents_of(self, option_id: str) -> list[str]:
        """IDs of catalog options that directly require `option_id`."""
        return list(self._dependents.get(option_id, []))

    def options(self) -> list[ConfigOption]:
        return list(self._options)


def find_catalog_issues(all_options: Union[OptionCatalog, Sequence[ConfigOption]]) -> list[str]:
    """
    Report catalog-authoring errors. Never raises.

    Checks: duplicate IDs, options requiring or excluding themselves, options
    that both require and exclude the same ID, and references to IDs that
    aren't in the catalog.
    """
    issues = []
    if isinstance(all_options, OptionCatalog):
        options = all_options.options()
    else:
        options = list(all_options)
        seen = set()
        for opt in options:
            if opt.id in seen:
                issues.append(f"Duplicate option ID: {opt.id}")
            seen.add(opt.id)

    known = {opt.id for opt in options}
    for opt in options:
        if opt.id in opt.requires:
            issues.append(f'Option "{opt.name}" requires itself')
        if opt.id in opt.excludes:
            issues.append(f'Option "{opt.name}" excludes itself')
        for related_id in opt.requires:
            if related_id in opt.excludes and related_id != opt.id:
                issues.append(f'Option "{opt.name}" both requires and excludes "{related_id}"')
        for related_id in opt.requires + opt.excludes:
            if related_id not in known:
                issues.append(f'Option "{opt.name}" references unknown option ID: {related_id}')
    return issues

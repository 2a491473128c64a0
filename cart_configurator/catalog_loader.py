"""
Catalog loader — turns stored rows into catalog snapshots for the core.

The database keeps option constraints only as option_relations rows. Here they
are reconciled into each ConfigOption's requires/excludes before anything is
handed to the rules engine or pricing engine. Also converts saved
configuration rows to and from CartConfiguration values.
"""

import logging
from datetime import timezone
from typing import Optional

from pydantic import ValidationError
from sqlalchemy.orm import Session, selectinload

from . import models
from .catalog import (
    ConfigOption,
    Material,
    MaterialZone,
    OptionCatalog,
    OptionRelation,
    Platform,
    reconcile_relations,
    relations_from_options,
)
from .configuration import CartConfiguration

logger = logging.getLogger(__name__)


def _platform_from_row(row: models.Platform) -> Platform:
    return Platform(
        id=row.id,
        name=row.name,
        description=row.description or "",
        base_price=row.base_price,
        default_asset_path=row.default_asset_path or "",
    )


def _material_from_row(row: models.Material) -> Material:
    return Material(
        id=row.id,
        zone=row.zone,
        type=row.type,
        name=row.name,
        description=row.description or "",
        color=row.color or "",
        finish=row.finish,
        price_multiplier=row.price_multiplier,
    )


def load_platforms(db: Session) -> list[Platform]:
    rows = db.query(models.Platform).filter(
        models.Platform.is_active.is_(True)
    ).order_by(models.Platform.created_at, models.Platform.id).all()
    return [_platform_from_row(r) for r in rows]


def load_platform(db: Session, platform_id: Optional[str] = None) -> Optional[Platform]:
    """One active platform by ID, or the oldest active platform when no ID is given."""
    query = db.query(models.Platform).filter(models.Platform.is_active.is_(True))
    if platform_id is not None:
        row = query.filter(models.Platform.id == platform_id).first()
    else:
        row = query.order_by(models.Platform.created_at, models.Platform.id).first()
    return _platform_from_row(row) if row else None


def load_options(db: Session, platform_id: Optional[str] = None) -> list[ConfigOption]:
    """
    Active options (platform-specific plus platform-less), ordered by category
    then name, with relation rows folded into requires/excludes.
    """
    query = db.query(models.Option).options(selectinload(models.Option.relations)).filter(
        models.Option.is_active.is_(True)
    )
    if platform_id is not None:
        query = query.filter(
            (models.Option.platform_id == platform_id) | (models.Option.platform_id.is_(None))
        )
    rows = query.order_by(models.Option.category, models.Option.name).all()

    options = []
    relations = []
    for row in rows:
        options.append(ConfigOption(
            id=row.id,
            category=row.category,
            name=row.name,
            description=row.description or "",
            part_price=row.part_price or 0.0,
            labor_hours=row.labor_hours or 0.0,
            asset_path=row.asset_path or "",
            platform_id=row.platform_id,
        ))
        for rel in row.relations:
            relations.append(OptionRelation(
                option_id=rel.option_id,
                related_id=rel.related_id,
                type=rel.type,
                reason=rel.reason,
            ))
    return reconcile_relations(options, relations)


def load_option_catalog(db: Session, platform_id: Optional[str] = None) -> OptionCatalog:
    return OptionCatalog(load_options(db, platform_id))


def load_materials(db: Session, zone: Optional[MaterialZone] = None) -> list[Material]:
    query = db.query(models.Material).filter(models.Material.is_active.is_(True))
    if zone is not None:
        query = query.filter(models.Material.zone == MaterialZone(zone).value)
    rows = query.order_by(models.Material.zone, models.Material.name).all()

    materials = []
    for row in rows:
        try:
            materials.append(_material_from_row(row))
        except ValidationError as e:
            # zone/type/finish outside the catalog enums, or a non-positive multiplier
            logger.warning("Skipping material %s: %s", row.id, e.errors()[0]["msg"])
    return materials


# --- Saved configurations ---

def _naive_utc(value):
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def configuration_from_row(row: models.Configuration) -> CartConfiguration:
    return CartConfiguration(
        id=row.id,
        platform_id=row.platform_id,
        selected_options=tuple(row.selected_options or ()),
        material_selections=tuple(row.material_selections or ()),
        build_notes=row.build_notes or "",
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def save_configuration(db: Session, config: CartConfiguration, pricing=None) -> models.Configuration:
    """
    Upsert a configuration by ID. `pricing` (a PricingBreakdown) is stored
    alongside as a snapshot when given. Caller commits.
    """
    row = db.query(models.Configuration).filter(models.Configuration.id == config.id).first()
    if row is None:
        row = models.Configuration(id=config.id, created_at=_naive_utc(config.created_at))
        db.add(row)

    row.platform_id = config.platform_id
    row.selected_options = list(config.selected_options)
    row.material_selections = [s.model_dump(mode="json") for s in config.material_selections]
    row.build_notes = config.build_notes
    row.updated_at = _naive_utc(config.updated_at)
    if pricing is not None:
        row.grand_total = pricing.grand_total
        row.pricing_json = pricing.model_dump(mode="json")
    return row


# --- Seeding ---

def seed_catalog(db: Session, platform: Platform, options: list[ConfigOption],
                 materials: list[Material]) -> int:
    """
    Insert a catalog if its platform isn't stored yet. Inline requires/excludes
    become option_relations rows. Returns the number of rows added. Caller commits.
    """
    if db.query(models.Platform).filter(models.Platform.id == platform.id).first():
        return 0

    added = 0
    db.add(models.Platform(**platform.model_dump()))
    added += 1

    for opt in options:
        data = opt.model_dump(exclude={"requires", "excludes"})
        db.add(models.Option(**data))
        added += 1
    db.flush()

    for rel in relations_from_options(options):
        db.add(models.OptionRelation(**rel.model_dump(mode="json")))
        added += 1

    for material in materials:
        if db.query(models.Material).filter(models.Material.id == material.id).first():
            continue
        db.add(models.Material(**material.model_dump(mode="json")))
        added += 1

    logger.info("Seeded catalog for platform %s (%d rows)", platform.id, added)
    return added

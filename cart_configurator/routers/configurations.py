"""
Configuration endpoints — the select → validate → mutate → price → persist loop.

Every mutation runs the rules engine first. A rejected action returns 409 with
the rule errors and leaves the stored configuration untouched; an accepted one
is applied, repriced against the current catalog and saved in one commit.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .. import models, schemas
from ..catalog import ConfigOption
from ..catalog_loader import (
    configuration_from_row,
    load_materials,
    load_option_catalog,
    load_platform,
    save_configuration,
)
from ..configuration import (
    CartConfiguration,
    MaterialSelection,
    add_option,
    create_configuration,
    remove_option,
    set_material_selection,
    update_build_notes,
)
from ..database import get_db
from ..pricing_engine import PricingEngine
from ..rules import (
    ValidationResult,
    get_available_options,
    validate_configuration,
    validate_material_selection,
    validate_option_addition,
    validate_option_removal,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/configurations", tags=["configurations"])


def _get_configuration(db: Session, configuration_id: str) -> CartConfiguration:
    row = db.query(models.Configuration).filter(models.Configuration.id == configuration_id).first()
    if not row:
        raise HTTPException(status_code=404, detail="Configuration not found")
    return configuration_from_row(row)


def _get_platform(db: Session, platform_id: str):
    platform = load_platform(db, platform_id)
    if not platform:
        raise HTTPException(status_code=404, detail=f"Platform not found: {platform_id}")
    return platform


def _reject(result: ValidationResult, status_code: int = 409):
    raise HTTPException(status_code=status_code, detail={"errors": result.errors})


def _price_and_save(db: Session, config: CartConfiguration) -> dict:
    """Reprice against the current catalog, persist, and build the response body."""
    platform = _get_platform(db, config.platform_id)
    catalog = load_option_catalog(db, config.platform_id)
    materials = load_materials(db)

    engine = PricingEngine()
    pricing = engine.calculate_pricing(config, platform, catalog, materials)

    save_configuration(db, config, pricing)
    db.commit()

    return {
        "configuration": config,
        "pricing": pricing,
        "delivery_weeks": engine.estimate_delivery_weeks(config, catalog),
    }


@router.post("/", response_model=schemas.ConfigurationSaved)
def save_configuration_body(config: CartConfiguration, db: Session = Depends(get_db)):
    """Save a full configuration value (insert or update by ID). Rejected with 409 if it breaks the rules."""
    _get_platform(db, config.platform_id)

    result = validate_configuration(
        config,
        load_option_catalog(db, config.platform_id),
        load_materials(db),
    )
    if not result.valid:
        _reject(result)

    save_configuration(db, config)
    db.commit()
    return {"success": True, "configuration_id": config.id}


@router.post("/new", response_model=schemas.ConfigurationResult)
def create_new_configuration(request: schemas.ConfigurationCreate, db: Session = Depends(get_db)):
    _get_platform(db, request.platform_id)
    config = create_configuration(request.platform_id)
    logger.info("Created configuration %s on platform %s", config.id, request.platform_id)
    return _price_and_save(db, config)


@router.get("/{configuration_id}", response_model=CartConfiguration)
def get_configuration(configuration_id: str, db: Session = Depends(get_db)):
    return _get_configuration(db, configuration_id)


@router.post("/{configuration_id}/options/{option_id}", response_model=schemas.ConfigurationResult)
def select_option(configuration_id: str, option_id: str, db: Session = Depends(get_db)):
    config = _get_configuration(db, configuration_id)
    catalog = load_option_catalog(db, config.platform_id)

    option = catalog.get(option_id)
    if option is None:
        raise HTTPException(status_code=404, detail=f"Option not found: {option_id}")

    result = validate_option_addition(config, option, catalog)
    if not result.valid:
        _reject(result)

    return _price_and_save(db, add_option(config, option_id))


@router.delete("/{configuration_id}/options/{option_id}", response_model=schemas.ConfigurationResult)
def deselect_option(configuration_id: str, option_id: str, db: Session = Depends(get_db)):
    config = _get_configuration(db, configuration_id)
    if option_id not in config.selected_options:
        raise HTTPException(status_code=404, detail=f"Option not selected: {option_id}")

    result = validate_option_removal(config, option_id, load_option_catalog(db, config.platform_id))
    if not result.valid:
        _reject(result)

    return _price_and_save(db, remove_option(config, option_id))


@router.put("/{configuration_id}/materials", response_model=schemas.ConfigurationResult)
def select_material(configuration_id: str, selection: MaterialSelection, db: Session = Depends(get_db)):
    config = _get_configuration(db, configuration_id)

    result = validate_material_selection(selection, load_materials(db))
    if not result.valid:
        _reject(result, status_code=400)

    return _price_and_save(db, set_material_selection(config, selection))


@router.put("/{configuration_id}/notes", response_model=schemas.ConfigurationResult)
def edit_notes(configuration_id: str, update: schemas.BuildNotesUpdate, db: Session = Depends(get_db)):
    config = _get_configuration(db, configuration_id)
    return _price_and_save(db, update_build_notes(config, update.build_notes))


@router.get("/{configuration_id}/pricing", response_model=schemas.ConfigurationResult)
def get_pricing(configuration_id: str, db: Session = Depends(get_db)):
    """Current price against the current catalog — read-only, nothing is saved."""
    config = _get_configuration(db, configuration_id)
    platform = _get_platform(db, config.platform_id)
    catalog = load_option_catalog(db, config.platform_id)

    engine = PricingEngine()
    return {
        "configuration": config,
        "pricing": engine.calculate_pricing(config, platform, catalog, load_materials(db)),
        "delivery_weeks": engine.estimate_delivery_weeks(config, catalog),
    }


@router.get("/{configuration_id}/validation", response_model=ValidationResult)
def get_validation(configuration_id: str, db: Session = Depends(get_db)):
    config = _get_configuration(db, configuration_id)
    return validate_configuration(
        config,
        load_option_catalog(db, config.platform_id),
        load_materials(db),
    )


@router.get("/{configuration_id}/available-options", response_model=List[ConfigOption])
def list_available_options(configuration_id: str, db: Session = Depends(get_db)):
    config = _get_configuration(db, configuration_id)
    return get_available_options(config, load_option_catalog(db, config.platform_id))

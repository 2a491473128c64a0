from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List, Optional

from .. import schemas
from ..catalog import ConfigOption, Material, MaterialZone, Platform, find_catalog_issues
from ..catalog_loader import load_materials, load_options, load_platform, load_platforms
from ..database import get_db

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("/platforms", response_model=List[Platform])
def list_platforms(db: Session = Depends(get_db)):
    return load_platforms(db)


@router.get("/platform", response_model=Platform)
def get_default_platform(db: Session = Depends(get_db)):
    """First active platform — the one the configurator opens on."""
    platform = load_platform(db)
    if not platform:
        raise HTTPException(status_code=404, detail="No platform found")
    return platform


@router.get("/options", response_model=List[ConfigOption])
def list_options(platform_id: Optional[str] = None, db: Session = Depends(get_db)):
    return load_options(db, platform_id)


@router.get("/materials", response_model=List[Material])
def list_materials(db: Session = Depends(get_db)):
    return load_materials(db)


@router.get("/materials/{zone}", response_model=List[Material])
def list_materials_for_zone(zone: str, db: Session = Depends(get_db)):
    try:
        material_zone = MaterialZone(zone.upper())
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown material zone: {zone}")
    return load_materials(db, material_zone)


@router.get("/issues", response_model=schemas.CatalogIssues)
def catalog_issues(db: Session = Depends(get_db)):
    """Authoring errors in the active option catalog (self-references, contradictions, dangling IDs)."""
    issues = find_catalog_issues(load_options(db))
    return {"valid": not issues, "issues": issues}

from sqlalchemy import Column, Integer, String, Float, DateTime, Text, ForeignKey, Boolean, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
import enum
import uuid

from .database import Base


class QuoteStatus(str, enum.Enum):
    PENDING = "PENDING"
    REVIEWED = "REVIEWED"
    QUOTED = "QUOTED"
    ACCEPTED = "ACCEPTED"
    DECLINED = "DECLINED"


def _uuid() -> str:
    return str(uuid.uuid4())


# --- Catalog ---
# DECISION: category, zone, type, finish and relation type are VARCHAR, not enum
# columns. Category is an open set; a new one needs no migration. Material zone,
# type and finish must match the enums in catalog.py, and rows that don't are
# skipped by catalog_loader.load_materials with a warning.

class Platform(Base):
    __tablename__ = "platforms"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    description = Column(Text, default="")
    base_price = Column(Float, nullable=False, default=0.0)
    default_asset_path = Column(String, default="")
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    options = relationship("Option", back_populates="platform")


class Option(Base):
    __tablename__ = "options"

    id = Column(String, primary_key=True)
    platform_id = Column(String, ForeignKey("platforms.id"), nullable=True)
    category = Column(String, nullable=False)
    name = Column(String, nullable=False)
    description = Column(Text, default="")
    part_price = Column(Float, default=0.0)
    labor_hours = Column(Float, default=0.0)
    asset_path = Column(String, default="")
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    platform = relationship("Platform", back_populates="options")
    relations = relationship(
        "OptionRelation",
        back_populates="option",
        foreign_keys="OptionRelation.option_id",
        cascade="all, delete-orphan",
        order_by="OptionRelation.id",
    )


class OptionRelation(Base):
    """requires/excludes edge between two options."""
    __tablename__ = "option_relations"

    id = Column(Integer, primary_key=True, index=True)
    option_id = Column(String, ForeignKey("options.id"), nullable=False)
    related_id = Column(String, nullable=False)  # not a FK, may point at a retired option
    type = Column(String, nullable=False)  # 'REQUIRES' | 'EXCLUDES'
    reason = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    option = relationship("Option", back_populates="relations", foreign_keys=[option_id])


class Material(Base):
    __tablename__ = "materials"

    id = Column(String, primary_key=True)
    zone = Column(String, nullable=False)
    type = Column(String, nullable=False)
    name = Column(String, nullable=False)
    description = Column(Text, default="")
    color = Column(String, default="")
    finish = Column(String, default="GLOSS")
    price_multiplier = Column(Float, nullable=False, default=1.0)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


# --- Saved configurations and quote requests ---

class Configuration(Base):
    __tablename__ = "configurations"

    id = Column(String, primary_key=True)
    platform_id = Column(String, nullable=False)
    selected_options = Column(JSON, default=list)  # [option_id, ...] in selection order
    material_selections = Column(JSON, default=list)  # [{zone, material_id}, ...]
    build_notes = Column(Text, default="")
    # Last computed price, not recomputed when the catalog changes
    grand_total = Column(Float, nullable=True)
    pricing_json = Column(JSON, nullable=True)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    quotes = relationship("Quote", back_populates="configuration")


class Quote(Base):
    __tablename__ = "quotes"

    id = Column(String, primary_key=True, default=_uuid)
    configuration_id = Column(String, ForeignKey("configurations.id"), nullable=False)
    customer_name = Column(String, nullable=False)
    customer_email = Column(String, nullable=False)
    customer_phone = Column(String, default="")
    message = Column(Text, default="")
    status = Column(String, default=QuoteStatus.PENDING.value)
    submitted_at = Column(DateTime, default=datetime.utcnow)

    configuration = relationship("Configuration", back_populates="quotes")

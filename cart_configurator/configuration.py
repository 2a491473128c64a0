"""
Cart configuration value object and its immutable update helpers.

A CartConfiguration is frozen. Every helper here returns a new value with
updated_at advanced; nothing is changed in place. These helpers do no
validation — callers run the rules engine first (see rules.py) so they can
decide how to surface a rejection.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .catalog import MaterialZone


class MaterialSelection(BaseModel):
    model_config = ConfigDict(frozen=True)

    zone: MaterialZone
    material_id: str = Field(validation_alias=AliasChoices("material_id", "materialId"))


class CartConfiguration(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    platform_id: str = Field(validation_alias=AliasChoices("platform_id", "platformId"))
    selected_options: tuple[str, ...] = Field(
        default=(), validation_alias=AliasChoices("selected_options", "selectedOptions"),
    )
    material_selections: tuple[MaterialSelection, ...] = Field(
        default=(), validation_alias=AliasChoices("material_selections", "materialSelections"),
    )
    build_notes: str = Field(default="", validation_alias=AliasChoices("build_notes", "buildNotes"))
    created_at: datetime = Field(validation_alias=AliasChoices("created_at", "createdAt"))
    updated_at: datetime = Field(validation_alias=AliasChoices("updated_at", "updatedAt"))

    @field_validator("selected_options")
    @classmethod
    def _no_duplicate_options(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(dict.fromkeys(value))

    @field_validator("material_selections")
    @classmethod
    def _one_material_per_zone(cls, value: tuple[MaterialSelection, ...]) -> tuple[MaterialSelection, ...]:
        zones = [s.zone for s in value]
        if len(zones) != len(set(zones)):
            raise ValueError("material_selections has more than one entry for a zone")
        return value

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # SQLite hands back naive datetimes, written as UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _touch(config: CartConfiguration) -> datetime:
    """Next updated_at for `config` — strictly later than the current one."""
    now = _now()
    if now <= config.updated_at:
        now = config.updated_at + timedelta(microseconds=1)
    return now


def generate_configuration_id() -> str:
    """config-<epoch ms>-<random suffix>"""
    millis = int(_now().timestamp() * 1000)
    return f"config-{millis}-{uuid.uuid4().hex[:7]}"


def create_configuration(platform_id: str) -> CartConfiguration:
    """New, empty configuration for a platform."""
    now = _now()
    return CartConfiguration(
        id=generate_configuration_id(),
        platform_id=platform_id,
        selected_options=(),
        material_selections=(),
        build_notes="",
        created_at=now,
        updated_at=now,
    )


def add_option(config: CartConfiguration, option_id: str) -> CartConfiguration:
    """
    Append an option ID. Adding one that's already selected is a no-op and
    returns `config` itself (updated_at unchanged).
    """
    if option_id in config.selected_options:
        return config
    return config.model_copy(update={
        "selected_options": config.selected_options + (option_id,),
        "updated_at": _touch(config),
    })


def remove_option(config: CartConfiguration, option_id: str) -> CartConfiguration:
    """Filter an option ID out. Dependents are not checked here."""
    return config.model_copy(update={
        "selected_options": tuple(oid for oid in config.selected_options if oid != option_id),
        "updated_at": _touch(config),
    })


def set_material_selection(config: CartConfiguration, selection: MaterialSelection) -> CartConfiguration:
    """Replace whatever material is set for selection.zone."""
    remaining = tuple(s for s in config.material_selections if s.zone != selection.zone)
    return config.model_copy(update={
        "material_selections": remaining + (selection,),
        "updated_at": _touch(config),
    })


def get_material_selection(config: CartConfiguration, zone: MaterialZone) -> Optional[MaterialSelection]:
    zone = MaterialZone(zone)
    for selection in config.material_selections:
        if selection.zone == zone:
            return selection
    return None


def update_build_notes(config: CartConfiguration, notes: str) -> CartConfiguration:
    return config.model_copy(update={
        "build_notes": notes,
        "updated_at": _touch(config),
    })


def serialize_configuration(config: CartConfiguration) -> str:
    """JSON text; timestamps as ISO 8601 with offset."""
    return config.model_dump_json()


def deserialize_configuration(text: str) -> CartConfiguration:
    """
    Parse JSON produced by serialize_configuration (or the camelCase form the
    web client sends). Timestamps come back as datetimes for the same instant.
    """
    return CartConfiguration.model_validate_json(text)

"""
Rules engine — enforces the requires/excludes graph over the option catalog.

Pure and read-only. Given the same configuration and catalog it always gives
the same answer. Constraint problems (missing requirement, conflict, unknown
ID, already selected) come back as ValidationResult errors, never exceptions.

`all_options` may be a plain list of ConfigOption or a prebuilt OptionCatalog;
passing an OptionCatalog avoids re-indexing on every call.
"""

import logging
from typing import Optional, Sequence, Union

from pydantic import BaseModel

from .catalog import ConfigOption, Material, OptionCatalog
from .configuration import CartConfiguration, MaterialSelection

logger = logging.getLogger(__name__)

OptionSource = Union[OptionCatalog, Sequence[ConfigOption]]


class ValidationResult(BaseModel):
    valid: bool
    errors: list[str] = []

    @classmethod
    def from_errors(cls, errors: list[str]) -> "ValidationResult":
        return cls(valid=not errors, errors=errors)


def validate_option_addition(config: CartConfiguration, option: ConfigOption,
                             all_options: OptionSource) -> ValidationResult:
    """
    Can `option` be added to `config`?

    Already-selected short-circuits with a single error. Otherwise every unmet
    requirement and every active exclusion is reported, requires first.
    """
    catalog = OptionCatalog.coerce(all_options)
    selected = set(config.selected_options)

    if option.id in selected:
        return ValidationResult.from_errors([f'Option "{option.name}" is already selected'])

    errors = []
    for required_id in option.requires:
        if required_id not in selected:
            errors.append(
                f'Option "{option.name}" requires "{catalog.name_of(required_id)}" to be selected first'
            )
    for excluded_id in option.excludes:
        if excluded_id in selected:
            errors.append(
                f'Option "{option.name}" cannot be combined with "{catalog.name_of(excluded_id)}"'
            )
    return ValidationResult.from_errors(errors)


def validate_option_removal(config: CartConfiguration, option_id: str,
                            all_options: OptionSource) -> ValidationResult:
    """
    Can `option_id` be removed without stranding a selected dependent?

    One hop only: requirements were already enforced when each dependent was
    added, so there's nothing further to chase.
    """
    catalog = OptionCatalog.coerce(all_options)
    removed_name = catalog.name_of(option_id)

    errors = []
    for selected_id in config.selected_options:
        dependent = catalog.get(selected_id)
        if dependent is None or selected_id == option_id:
            continue
        if option_id in catalog.requires_of(selected_id):
            errors.append(f'Cannot remove "{removed_name}" because "{dependent.name}" depends on it')
    return ValidationResult.from_errors(errors)


def validate_material_selection(selection: MaterialSelection,
                                all_materials: Sequence[Material]) -> ValidationResult:
    """Material must exist and belong to the zone it's being set on."""
    material = next((m for m in all_materials if m.id == selection.material_id), None)
    if material is None:
        return ValidationResult.from_errors([f"Unknown material ID: {selection.material_id}"])
    if material.zone != selection.zone:
        return ValidationResult.from_errors([
            f'Material "{material.name}" belongs to zone {material.zone.value}, not {selection.zone.value}'
        ])
    return ValidationResult.from_errors([])


def validate_configuration(config: CartConfiguration, all_options: OptionSource,
                           all_materials: Optional[Sequence[Material]] = None) -> ValidationResult:
    """
    Authoritative consistency check for a whole configuration — use after
    catalog edits or when loading a stored/imported configuration.

    Each selected option is re-checked as if it were being added. Unknown IDs
    are reported and skipped. Material selections are checked too when a
    material catalog is supplied.
    """
    catalog = OptionCatalog.coerce(all_options)
    selected = set(config.selected_options)

    errors = []
    for selected_id in config.selected_options:
        option = catalog.get(selected_id)
        if option is None:
            errors.append(f"Unknown option ID: {selected_id}")
            continue

        for required_id in catalog.requires_of(selected_id):
            if required_id not in selected:
                errors.append(
                    f'Option "{option.name}" requires "{catalog.name_of(required_id)}" but it is not selected'
                )
        for excluded_id in catalog.excludes_of(selected_id):
            if excluded_id in selected:
                errors.append(f'Option "{option.name}" conflicts with "{catalog.name_of(excluded_id)}"')

    if all_materials is not None:
        for selection in config.material_selections:
            errors.extend(validate_material_selection(selection, all_materials).errors)

    if errors:
        logger.debug("Configuration %s has %d rule violation(s)", config.id, len(errors))
    return ValidationResult.from_errors(errors)


def get_available_options(config: CartConfiguration, all_options: OptionSource) -> list[ConfigOption]:
    """
    The legal-move frontier: every option addition validation would accept,
    in catalog order. Derived on each call — recompute after every change.
    """
    catalog = OptionCatalog.coerce(all_options)
    return [
        option for option in catalog
        if validate_option_addition(config, option, catalog).valid
    ]

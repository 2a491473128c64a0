"""
Pricing Engine — itemized price for a cart configuration.

Pure math. Base platform price + option parts + option labor (hours × rate)
+ material adjustments (zone base cost × material multiplier).

Input: CartConfiguration + Platform + option catalog + material catalog
Output: PricingBreakdown (every line item, not just a total)
"""

import logging
import math
from typing import Optional, Sequence, Union

from pydantic import BaseModel

from .catalog import ConfigOption, Material, MaterialZone, OptionCatalog, Platform
from .config import settings
from .configuration import CartConfiguration

logger = logging.getLogger(__name__)


class OptionLineItem(BaseModel):
    option_id: str
    option_name: str
    category: str
    parts_cost: float
    labor_hours: float
    labor_cost: float
    total_cost: float


class MaterialLineItem(BaseModel):
    zone: MaterialZone
    material_id: str
    material_name: str
    price_multiplier: float
    base_cost: float
    cost: float


class PricingBreakdown(BaseModel):
    configuration_id: str
    base_platform_price: float
    option_line_items: list[OptionLineItem] = []
    material_line_items: list[MaterialLineItem] = []
    options_total: float = 0.0
    labor_total: float = 0.0
    materials_total: float = 0.0
    subtotal: float = 0.0
    grand_total: float = 0.0
    labor_rate: float = 0.0
    warnings: list[str] = []


class PricingEngine:
    """
    Prices a configuration against a catalog snapshot.

    The labor rate and the per-zone attributable base costs are business
    configuration, injected here (defaults from settings).
    """

    def __init__(self, labor_rate: Optional[float] = None,
                 zone_base_costs: Optional[dict] = None):
        self.labor_rate = settings.LABOR_RATE_DEFAULT if labor_rate is None else labor_rate
        costs = settings.ZONE_BASE_COSTS if zone_base_costs is None else zone_base_costs
        self.zone_base_costs = {MaterialZone(zone): float(cost) for zone, cost in costs.items()}

    def calculate_pricing(self, config: CartConfiguration, platform: Platform,
                          all_options: Union[OptionCatalog, Sequence[ConfigOption]],
                          all_materials: Sequence[Material]) -> PricingBreakdown:
        """
        Full itemized breakdown.

        subtotal    = base + options_total + materials_total
        grand_total = subtotal + labor_total

        Unknown option/material IDs are skipped and listed in `warnings` —
        run rules.validate_configuration first if that matters.
        """
        catalog = OptionCatalog.coerce(all_options)
        materials_by_id = {m.id: m for m in all_materials}
        warnings = []

        option_lines = []
        for option_id in config.selected_options:
            option = catalog.get(option_id)
            if option is None:
                logger.warning("Pricing %s: unknown option %s skipped", config.id, option_id)
                warnings.append(f"Unknown option ID: {option_id} (not priced)")
                continue
            option_lines.append(self.calculate_option_line_item(option))

        material_lines = []
        for selection in config.material_selections:
            material = materials_by_id.get(selection.material_id)
            if material is None:
                logger.warning("Pricing %s: unknown material %s skipped", config.id, selection.material_id)
                warnings.append(f"Unknown material ID: {selection.material_id} (not priced)")
                continue
            if material.zone not in self.zone_base_costs:
                warnings.append(f"No base cost configured for zone {material.zone.value} — priced at $0.00")
            material_lines.append(self.calculate_material_line_item(material))

        options_total = self._calculate_options_total(option_lines)
        labor_total = self._calculate_labor_total(option_lines)
        materials_total = self._calculate_materials_total(material_lines)

        subtotal = round(platform.base_price + options_total + materials_total, 2)
        grand_total = round(subtotal + labor_total, 2)

        return PricingBreakdown(
            configuration_id=config.id,
            base_platform_price=round(platform.base_price, 2),
            option_line_items=option_lines,
            material_line_items=material_lines,
            options_total=options_total,
            labor_total=labor_total,
            materials_total=materials_total,
            subtotal=subtotal,
            grand_total=grand_total,
            labor_rate=self.labor_rate,
            warnings=warnings,
        )

    def calculate_option_line_item(self, option: ConfigOption) -> OptionLineItem:
        """Parts + hours × labor rate for one option."""
        labor_cost = round(option.labor_hours * self.labor_rate, 2)
        return OptionLineItem(
            option_id=option.id,
            option_name=option.name,
            category=option.category,
            parts_cost=round(option.part_price, 2),
            labor_hours=option.labor_hours,
            labor_cost=labor_cost,
            total_cost=round(option.part_price + labor_cost, 2),
        )

    def calculate_material_line_item(self, material: Material) -> MaterialLineItem:
        """Zone base cost × material multiplier."""
        base_cost = self.zone_base_costs.get(material.zone, 0.0)
        return MaterialLineItem(
            zone=material.zone,
            material_id=material.id,
            material_name=material.name,
            price_multiplier=material.price_multiplier,
            base_cost=base_cost,
            cost=round(base_cost * material.price_multiplier, 2),
        )

    def _calculate_options_total(self, lines: list) -> float:
        return round(math.fsum(line.parts_cost for line in lines), 2)

    def _calculate_labor_total(self, lines: list) -> float:
        return round(math.fsum(line.labor_cost for line in lines), 2)

    def _calculate_materials_total(self, lines: list) -> float:
        return round(math.fsum(line.cost for line in lines), 2)

    def estimate_delivery_weeks(self, config: CartConfiguration,
                                all_options: Union[OptionCatalog, Sequence[ConfigOption]]) -> int:
        """
        Build time: base weeks + one week per started block of labor hours.
        Labor hours are a proxy for build complexity.
        """
        catalog = OptionCatalog.coerce(all_options)
        total_hours = math.fsum(
            catalog.get(option_id).labor_hours
            for option_id in config.selected_options
            if option_id in catalog
        )
        return settings.DELIVERY_BASE_WEEKS + math.ceil(total_hours / settings.DELIVERY_HOURS_PER_WEEK)


def format_price(amount: float) -> str:
    """USD display string, e.g. 1234.5 -> "$1,234.50"."""
    if amount < 0:
        return f"-${abs(amount):,.2f}"
    return f"${amount:,.2f}"


def calculate_pricing(config: CartConfiguration, platform: Platform,
                      all_options: Union[OptionCatalog, Sequence[ConfigOption]],
                      all_materials: Sequence[Material]) -> PricingBreakdown:
    """Price with the default labor rate and zone base costs from settings."""
    return PricingEngine().calculate_pricing(config, platform, all_options, all_materials)


def estimate_delivery_weeks(config: CartConfiguration,
                            all_options: Union[OptionCatalog, Sequence[ConfigOption]]) -> int:
    return PricingEngine().estimate_delivery_weeks(config, all_options)

"""
Default catalog — one platform, its options and materials.

Seeded into an empty database on startup (see main.auto_seed). Edit through
the database afterwards; these values are only the starting point.
"""

from .catalog import (
    ConfigOption,
    Material,
    MaterialFinish,
    MaterialType,
    MaterialZone,
    OptionCategory,
    Platform,
)

DEFAULT_PLATFORM = Platform(
    id="standard-cart-v1",
    name="Standard Golf Cart",
    description="Our classic 4-passenger golf cart platform with electric drive",
    base_price=8500.00,
    default_asset_path="/models/platform-standard.glb",
)


def _option(option_id, category, name, description, part_price, labor_hours,
            requires=(), excludes=(), asset=None):
    return ConfigOption(
        id=option_id,
        category=category,
        name=name,
        description=description,
        part_price=part_price,
        labor_hours=labor_hours,
        requires=tuple(requires),
        excludes=tuple(excludes),
        asset_path=asset or f"/models/{option_id}.glb",
        platform_id=DEFAULT_PLATFORM.id,
    )


DEFAULT_OPTIONS = [
    # Seating: one seat style per cart
    _option("seat-standard", OptionCategory.SEATING, "Standard Bench Seats",
            "4-passenger bench seating with basic padding", 0, 0,
            excludes=["seat-captain", "seat-premium"]),
    _option("seat-captain", OptionCategory.SEATING, "Captain Seats",
            "Individual bucket seats with armrests", 1200, 4,
            excludes=["seat-standard", "seat-premium"]),
    _option("seat-premium", OptionCategory.SEATING, "Premium Suspension Seats",
            "High-back seats with lumbar support and suspension", 2400, 6,
            excludes=["seat-standard", "seat-captain"]),

    # Roof
    _option("roof-standard", OptionCategory.ROOF, "Standard Roof",
            "Basic hard top roof", 0, 0,
            excludes=["roof-extended", "roof-solar"]),
    _option("roof-extended", OptionCategory.ROOF, "Extended Roof",
            "Extended roof with rear overhang", 800, 3,
            excludes=["roof-standard", "roof-solar"]),
    _option("roof-solar", OptionCategory.ROOF, "Solar Panel Roof",
            "Integrated solar panels for battery charging", 3500, 8,
            excludes=["roof-standard", "roof-extended"]),

    # Wheels
    _option("wheels-standard", OptionCategory.WHEELS, "Standard Wheels",
            '12" steel wheels with all-terrain tires', 0, 0,
            excludes=["wheels-chrome", "wheels-offroad"]),
    _option("wheels-chrome", OptionCategory.WHEELS, "Chrome Wheels",
            '14" chrome wheels with low-profile tires', 1600, 2,
            excludes=["wheels-standard", "wheels-offroad"]),
    _option("wheels-offroad", OptionCategory.WHEELS, "Off-Road Wheels",
            '14" matte black wheels with aggressive tread', 2000, 2,
            excludes=["wheels-standard", "wheels-chrome"]),

    # Lighting
    _option("light-basic", OptionCategory.LIGHTING, "Basic Lighting",
            "Headlights and taillights", 0, 0,
            excludes=["light-premium"]),
    _option("light-premium", OptionCategory.LIGHTING, "Premium LED Package",
            "LED headlights, taillights, underbody lighting", 1800, 6,
            excludes=["light-basic"]),
    _option("light-bar", OptionCategory.LIGHTING, "Roof Light Bar",
            '40" LED light bar mounted to roof', 600, 3),

    # Storage
    _option("storage-rear-basket", OptionCategory.STORAGE, "Rear Basket",
            "Folding rear cargo basket", 400, 2),
    _option("storage-under-seat", OptionCategory.STORAGE, "Under-Seat Storage",
            "Lockable storage compartments under seats", 300, 4),

    # Electronics
    _option("audio-basic", OptionCategory.ELECTRONICS, "Basic Audio",
            "Bluetooth speaker system", 500, 3,
            excludes=["audio-premium"]),
    _option("audio-premium", OptionCategory.ELECTRONICS, "Premium Audio",
            "1000W system with subwoofer and amplifier", 2500, 8,
            excludes=["audio-basic"]),
    _option("electronics-usb", OptionCategory.ELECTRONICS, "USB Charging Ports",
            "4x USB-C charging ports", 200, 2),

    # Suspension: the 6" lift only fits the off-road wheel package
    _option("suspension-lift-3", OptionCategory.SUSPENSION, '3" Lift Kit',
            "3-inch suspension lift", 1200, 6,
            excludes=["suspension-lift-6"]),
    _option("suspension-lift-6", OptionCategory.SUSPENSION, '6" Lift Kit',
            "6-inch suspension lift for extreme off-road", 2400, 10,
            requires=["wheels-offroad"], excludes=["suspension-lift-3"]),

    # Custom fabrication
    _option("fab-custom-bumper", OptionCategory.FABRICATION, "Custom Front Bumper",
            "Heavy-duty steel front bumper with winch mount", 800, 12),
    _option("fab-bed-liner", OptionCategory.FABRICATION, "Spray-In Bed Liner",
            "Professional spray-in protective bed liner", 600, 8),
]


def _material(material_id, zone, material_type, name, description, color, finish, multiplier):
    return Material(
        id=material_id,
        zone=zone,
        type=material_type,
        name=name,
        description=description,
        color=color,
        finish=finish,
        price_multiplier=multiplier,
    )


DEFAULT_MATERIALS = [
    # Body paint
    _material("paint-white-gloss", MaterialZone.BODY, MaterialType.PAINT, "Gloss White",
              "Classic gloss white automotive paint", "#FFFFFF", MaterialFinish.GLOSS, 1.0),
    _material("paint-black-matte", MaterialZone.BODY, MaterialType.PAINT, "Matte Black",
              "Stealthy matte black finish", "#1a1a1a", MaterialFinish.MATTE, 1.3),
    _material("paint-red-metallic", MaterialZone.BODY, MaterialType.PAINT, "Metallic Red",
              "Deep metallic red with pearl effect", "#c41e3a", MaterialFinish.METALLIC, 1.5),
    _material("paint-blue-gloss", MaterialZone.BODY, MaterialType.PAINT, "Ocean Blue",
              "Vibrant gloss blue", "#0077be", MaterialFinish.GLOSS, 1.2),

    # Seats
    _material("vinyl-black", MaterialZone.SEATS, MaterialType.VINYL, "Black Vinyl",
              "Durable black vinyl upholstery", "#2b2b2b", MaterialFinish.MATTE, 1.0),
    _material("vinyl-tan", MaterialZone.SEATS, MaterialType.VINYL, "Tan Vinyl",
              "Classic tan vinyl upholstery", "#d2b48c", MaterialFinish.MATTE, 1.0),
    _material("fabric-gray", MaterialZone.SEATS, MaterialType.FABRIC, "Gray Performance Fabric",
              "Weather-resistant performance fabric", "#808080", MaterialFinish.MATTE, 1.4),

    # Roof
    _material("roof-black", MaterialZone.ROOF, MaterialType.PAINT, "Black Roof",
              "Black painted roof", "#1a1a1a", MaterialFinish.GLOSS, 1.0),
    _material("roof-body-match", MaterialZone.ROOF, MaterialType.PAINT, "Body-Matched Roof",
              "Roof painted to match body color", "#FFFFFF", MaterialFinish.GLOSS, 1.3),

    # Metal accents
    _material("metal-chrome", MaterialZone.METAL, MaterialType.POWDERCOAT, "Chrome",
              "Polished chrome finish", "#e5e5e5", MaterialFinish.GLOSS, 1.5),
    _material("metal-black", MaterialZone.METAL, MaterialType.POWDERCOAT, "Black Powdercoat",
              "Durable black powdercoat", "#1a1a1a", MaterialFinish.MATTE, 1.0),

    # Glass tint
    _material("glass-clear", MaterialZone.GLASS, MaterialType.TINT, "Clear Glass",
              "No tint", "#f0f0f0", MaterialFinish.GLOSS, 1.0),
    _material("glass-tint-light", MaterialZone.GLASS, MaterialType.TINT, "Light Tint",
              "35% light transmission", "#808080", MaterialFinish.GLOSS, 1.2),
    _material("glass-tint-dark", MaterialZone.GLASS, MaterialType.TINT, "Dark Tint",
              "20% light transmission", "#404040", MaterialFinish.GLOSS, 1.4),
]

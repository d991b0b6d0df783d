"""Built-in Swix grip wax catalog."""

from models.snow import SnowType, TemperatureRange
from models.wax import WaxKind, WaxProduct

R = TemperatureRange.of
NEW = SnowType.NEW_FALLEN
MOIST_NEW = SnowType.MOIST_NEW_FALLEN
FINE = SnowType.FINE_GRAINED
MOIST_FINE = SnowType.MOIST_FINE_GRAINED
OLD = SnowType.OLD_GRAINED
TRANSFORMED = SnowType.TRANSFORMED_MOIST_FINE
FROZEN = SnowType.FROZEN_CORN
WET = SnowType.WET_CORN
VERY_WET = SnowType.VERY_WET_CORN


SWIX_WAXES: list[WaxProduct] = [
    # V series (classic hardwaxes; recreational/training)
    WaxProduct(
        code="V05",
        name="Polar",
        series="V",
        kind=WaxKind.HARDWAX,
        ranges={NEW: [R(-25, -12)], FINE: [R(-25, -15)], OLD: [R(-30, -15)]},
        notes="Very cold, dry snow",
        primary_color="#FFFFFF",
        secondary_color="#000000",
    ),
    WaxProduct(
        code="V20",
        name="Green",
        series="V",
        kind=WaxKind.HARDWAX,
        ranges={NEW: [R(-15, -8)], FINE: [R(-18, -10)], OLD: [R(-18, -10)]},
        primary_color="#70A14D",
        secondary_color="#BED1B0",
    ),
    WaxProduct(
        code="V30",
        name="Blue",
        series="V",
        kind=WaxKind.HARDWAX,
        ranges={NEW: [R(-10, -2)], FINE: [R(-15, -5)], OLD: [R(-15, -5)]},
        primary_color="#3D78E5",
        secondary_color="#ABD5E1",
    ),
    WaxProduct(
        code="V40",
        name="Blue Extra",
        series="V",
        kind=WaxKind.HARDWAX,
        ranges={NEW: [R(-7, -1)], FINE: [R(-10, -3)], OLD: [R(-10, -3)]},
        primary_color="#3D78E5",
        secondary_color="#964472",
    ),
    WaxProduct(
        code="V45",
        name="Violet Special",
        series="V",
        kind=WaxKind.HARDWAX,
        ranges={MOIST_NEW: [R(-3, 0)], MOIST_FINE: [R(-6, -2)], OLD: [R(-6, -2)]},
        primary_color="#A9276B",
        secondary_color="#4E7FD0",
    ),
    WaxProduct(
        code="V50",
        name="Violet",
        series="V",
        kind=WaxKind.HARDWAX,
        ranges={MOIST_NEW: [R(0, 0)], FINE: [R(-3, -1)], MOIST_FINE: [R(-3, -1)]},
        notes="Around freezing",
        primary_color="#704D7B",
        secondary_color="#B1A2B4",
    ),
    WaxProduct(
        code="V55",
        name="Red Special",
        series="V",
        kind=WaxKind.HARDWAX,
        ranges={MOIST_NEW: [R(0, 1)], MOIST_FINE: [R(-2, 0)], OLD: [R(-2, 0)]},
        primary_color="#B53149",
        secondary_color="#9F4486",
    ),
    WaxProduct(
        code="V60",
        name="Red/Silver",
        series="V",
        kind=WaxKind.HARDWAX,
        ranges={
            MOIST_NEW: [R(0, 3)],
            MOIST_FINE: [R(-1, 1)],
            TRANSFORMED: [R(-1, 1)],
        },
        notes="Wet new snow to mild, shiny tracks",
        primary_color="#B5332B",
        secondary_color="#909093",
    ),
    # VP series (racing hardwaxes)
    WaxProduct(
        code="VP30",
        name="Pro Light Blue",
        series="VP",
        kind=WaxKind.HARDWAX,
        ranges={NEW: [R(-16, -8)], FINE: [R(-16, -8)], OLD: [R(-20, -12)]},
        notes="Dry to extra-cold; old snow range from -12 to -20°C",
        primary_color="#000000",
        secondary_color="#ADD8E6",
    ),
    WaxProduct(
        code="VP40",
        name="Pro Blue",
        series="VP",
        kind=WaxKind.HARDWAX,
        ranges={NEW: [R(-10, -4)], FINE: [R(-10, -4)], OLD: [R(-14, -5)]},
        primary_color="#000000",
        secondary_color="#0000FF",
    ),
    WaxProduct(
        code="VP45",
        name="Pro Blue/Violet",
        series="VP",
        kind=WaxKind.HARDWAX,
        ranges={NEW: [R(-5, -1)], FINE: [R(-5, -1)], OLD: [R(-8, -3)]},
        primary_color="#000000",
        secondary_color="#6A5ACD",
    ),
    WaxProduct(
        code="VP50",
        name="Pro Light Violet",
        series="VP",
        kind=WaxKind.HARDWAX,
        ranges={NEW: [R(-3, 0)], FINE: [R(-3, 0)], OLD: [R(-6, -1)]},
        primary_color="#000000",
        secondary_color="#800080",
    ),
    WaxProduct(
        code="VP55",
        name="Pro Violet",
        series="VP",
        kind=WaxKind.HARDWAX,
        ranges={MOIST_NEW: [R(-2, 1)], MOIST_FINE: [R(0, 1)], OLD: [R(-5, 0)]},
        primary_color="#000000",
        secondary_color="#4B0082",
    ),
    WaxProduct(
        code="VP60",
        name="Pro Violet/Red",
        series="VP",
        kind=WaxKind.HARDWAX,
        ranges={MOIST_NEW: [R(-1, 2)], MOIST_FINE: [R(-1, 2)], OLD: [R(-4, -1)]},
        primary_color="#000000",
        secondary_color="#B22222",
    ),
    WaxProduct(
        code="VP65",
        name="Pro Black/Red",
        series="VP",
        kind=WaxKind.HARDWAX,
        ranges={MOIST_NEW: [R(0, 2)], OLD: [R(-4, 0)], TRANSFORMED: [R(0, 0)]},
        notes="Anti-icing black additive; excellent as cover on klister",
        primary_color="#000000",
        secondary_color="#8B0000",
    ),
    WaxProduct(
        code="VP70",
        name="Pro Yellow (klister-wax)",
        series="VP",
        kind=WaxKind.HARDWAX,
        ranges={MOIST_NEW: [R(0, 3)], TRANSFORMED: [R(-1, 2)]},
        notes="If very wet new snow or coarse transformed, switch to klister",
        primary_color="#000000",
        secondary_color="#FFFF00",
    ),
    # Klister: Universal K, KX, Nero KN
    WaxProduct(
        code="K21S",
        name="Universal Silver Klister",
        series="K",
        kind=WaxKind.KLISTER,
        ranges={TRANSFORMED: [R(-5, 3)], WET: [R(-5, 3)]},
        notes="Changeable, damp to wet transformed; above/below freezing",
        primary_color="#BDBDBD",
        secondary_color="#5071B0",
    ),
    WaxProduct(
        code="K22",
        name="Universal VM Klister",
        series="K",
        kind=WaxKind.KLISTER,
        ranges={FROZEN: [R(-3, 10)], WET: [R(-3, 10)]},
        notes="Coarse/old snow from ice/crust to wet",
        primary_color="#CCCECB",
        secondary_color="#C14D40",
    ),
    WaxProduct(
        code="KX20",
        name="Green Base Klister",
        series="KX",
        kind=WaxKind.BASE,
        notes="Base/binder klister (iron in) for durability on ice & aggressive tracks",
        primary_color="#6AAC45",
        secondary_color="#82B45B",
    ),
    WaxProduct(
        code="KX30",
        name="Blue Ice Klister",
        series="KX",
        kind=WaxKind.KLISTER,
        ranges={FROZEN: [R(-12, 0)]},
        notes="Icy/frozen coarse tracks; also as underlayer",
        primary_color="#509CD6",
        secondary_color="#59A9DF",
    ),
    WaxProduct(
        code="KX35N",
        name="Blue Extra Klister",
        series="KX",
        kind=WaxKind.KLISTER,
        ranges={TRANSFORMED: [R(-8, 0)]},
        notes="Fine/coarse old snow near and below 0°C",
        primary_color="#2C68BD",
        secondary_color="#614AA7",
    ),
    WaxProduct(
        code="KX40S",
        name="Silver Klister",
        series="KX",
        kind=WaxKind.KLISTER,
        ranges={TRANSFORMED: [R(-4, 2)], WET: [R(-4, 2)]},
        notes="Transformed & fine-grained; slightly wet above 0°C",
        primary_color="#95989E",
        secondary_color="#612A6A",
    ),
    WaxProduct(
        code="KX45N",
        name="Violet Special Klister",
        series="KX",
        kind=WaxKind.KLISTER,
        ranges={FROZEN: [R(-2, 4)], WET: [R(-2, 4)]},
        notes="All-around for wet/coarse & frozen corn",
        primary_color="#773C89",
        secondary_color="#4294D2",
    ),
    WaxProduct(
        code="KX55",
        name="Violet Extra Klister",
        series="KX",
        kind=WaxKind.KLISTER,
        ranges={TRANSFORMED: [R(-6, 4)], WET: [R(-6, 4)]},
        notes="Moist transformed to wet/coarse",
        primary_color="#C63B66",
        secondary_color="#D79D4B",
    ),
    WaxProduct(
        code="KX65",
        name="Red Klister",
        series="KX",
        kind=WaxKind.KLISTER,
        ranges={WET: [R(1, 5)]},
        notes="Damp to wet, granular/coarse warm snow",
        primary_color="#D23A2B",
        secondary_color="#D66B60",
    ),
    WaxProduct(
        code="KX75",
        name="Red Extra Wet Klister",
        series="KX",
        kind=WaxKind.KLISTER,
        ranges={VERY_WET: [R(2, 15)]},
        notes="Very wet/slushy; highest water content",
        primary_color="#D5452F",
        secondary_color="#DFB53E",
    ),
    WaxProduct(
        code="KN33",
        name="Nero Klister",
        series="KN",
        kind=WaxKind.KLISTER,
        ranges={TRANSFORMED: [R(-7, 1)], WET: [R(-7, 1)]},
        notes="Racing klister w/ anti-icing; variable conditions",
        primary_color="#000000",
        secondary_color="#BD74BF",
    ),
    WaxProduct(
        code="KN44",
        name="Nero Klister",
        series="KN",
        kind=WaxKind.KLISTER,
        ranges={TRANSFORMED: [R(-3, 5)], WET: [R(-3, 5)]},
        notes="Warmer Nero; humid transformed/wet",
        primary_color="#000000",
        secondary_color="#972921",
    ),
]


def waxes_for_snow_type(
    snow_type: SnowType, waxes: list[WaxProduct] | None = None
) -> list[WaxProduct]:
    """Get the waxes that define at least one range for a snow type."""
    catalog = SWIX_WAXES if waxes is None else waxes
    return [wax for wax in catalog if wax.ranges_for(snow_type)]


def get_wax(code: str) -> WaxProduct | None:
    """Look up a catalog wax by code (case-insensitive)."""
    code = code.upper()
    for wax in SWIX_WAXES:
        if wax.code == code:
            return wax
    return None

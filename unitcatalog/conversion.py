"""
Numeric conversion between catalog units.

Both functions go through the quantity's base unit. They do not check that
the two units share a quantity; callers pair units (e.g. by resolving both
from the same quantity) before converting.
"""

from unitcatalog.catalog.models import Unit

# Catalog coefficients carry about 13 significant digits
SIGNIFICANT_DIGITS = 12


def round_to_significant_digits(value: float, digits: int = SIGNIFICANT_DIGITS) -> float:
    """Round to a number of significant digits, e.g. 32.00000000000004 -> 32.0."""
    return float(f"{value:.{digits}g}")


def convert_between_units(from_unit: Unit, to_unit: Unit, value: float) -> float:
    """
    Convert a value with the affine transforms of both units.

    result = (from.multiplier * value + from.offset - to.offset) / to.multiplier

    The result is rounded to SIGNIFICANT_DIGITS, so converting a unit to
    itself returns the value to 12 significant digits.
    """
    base_value = from_unit.conversion.to_base(value)
    return round_to_significant_digits(to_unit.conversion.from_base(base_value))


def convert_between_units_square_multiplier(from_unit: Unit, to_unit: Unit, value: float) -> float:
    """
    Convert a variance (a value in squared units).

    Only the multipliers take part: offsets cancel out of a spread.

    result = value * (from.multiplier / to.multiplier) ** 2
    """
    ratio = from_unit.conversion.multiplier / to_unit.conversion.multiplier
    return value * ratio ** 2

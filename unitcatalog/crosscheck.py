"""
Cross-check catalog conversions against pint.

Diagnostic only, conversions never go through pint. For every quantity the
check picks a base unit (multiplier 1, offset 0) whose symbol pint knows and
converts one of every other recognised unit to it, once with the catalog
coefficients and once with pint's own definitions.

Symbols pint cannot parse are skipped.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, Optional

import pint

from unitcatalog.catalog.models import Conversion, Unit
from unitcatalog.conversion import convert_between_units

logger = logging.getLogger(__name__)

# Shared registry for the cross-check
ureg = pint.UnitRegistry()
Q_ = ureg.Quantity

BASE_CONVERSION = Conversion(multiplier=1.0, offset=0.0)
DEFAULT_REL_TOL = 1e-6


@dataclass
class CrossCheckResult:
    """Catalog vs pint value of 1.0 <unit> expressed in the base unit."""
    external_id: str
    base_external_id: str
    catalog_value: float
    pint_value: float
    note: Optional[str] = None

    @property
    def relative_error(self) -> float:
        if math.isnan(self.pint_value):
            return math.inf
        scale = max(abs(self.catalog_value), abs(self.pint_value))
        if scale == 0:
            return 0.0
        return abs(self.catalog_value - self.pint_value) / scale


@dataclass
class CrossCheckReport:
    checked: list[CrossCheckResult] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    rel_tol: float = DEFAULT_REL_TOL

    @property
    def mismatches(self) -> list[CrossCheckResult]:
        return [r for r in self.checked if r.relative_error > self.rel_tol]

    @property
    def ok(self) -> bool:
        return not self.mismatches


def pint_unit(symbol: Optional[str], registry: pint.UnitRegistry = ureg) -> Optional[pint.Unit]:
    """Parse a catalog symbol with pint, None if pint does not know it."""
    if not symbol:
        return None
    try:
        return registry.Unit(symbol)
    except Exception as e:
        # pint raises a mix of UndefinedUnitError, DefinitionSyntaxError and
        # tokenizer errors for unusual symbols
        logger.debug("pint cannot parse symbol %r: %s", symbol, e)
        return None


def cross_check(
    units: Iterable[Unit],
    registry: pint.UnitRegistry = ureg,
    rel_tol: float = DEFAULT_REL_TOL,
) -> CrossCheckReport:
    """
    Compare catalog conversions with pint for every recognised unit.

    Args:
        units: Units to check, usually the full catalog
        registry: pint registry providing the reference definitions
        rel_tol: Relative tolerance before a unit is reported as mismatch

    Returns:
        CrossCheckReport with one result per checked unit
    """
    report = CrossCheckReport(rel_tol=rel_tol)

    by_quantity: dict[str, list[tuple[Unit, Optional[pint.Unit]]]] = {}
    for unit in units:
        by_quantity.setdefault(unit.quantity, []).append((unit, pint_unit(unit.symbol, registry)))

    for quantity, members in by_quantity.items():
        base = next(
            (
                (unit, parsed)
                for unit, parsed in members
                if parsed is not None and unit.conversion == BASE_CONVERSION
            ),
            None,
        )
        if base is None:
            logger.debug("No pint-compatible base unit for %s", quantity)
            report.skipped.extend(unit.external_id for unit, _ in members)
            continue

        base_unit, base_parsed = base
        for unit, parsed in members:
            if unit is base_unit:
                continue
            if parsed is None:
                report.skipped.append(unit.external_id)
                continue

            catalog_value = convert_between_units(unit, base_unit, 1.0)
            try:
                pint_value = registry.Quantity(1.0, parsed).to(base_parsed).magnitude
                note = None
            except pint.OffsetUnitCalculusError as e:
                logger.debug("pint cannot convert %s: %s", unit.external_id, e)
                report.skipped.append(unit.external_id)
                continue
            except pint.DimensionalityError as e:
                pint_value = math.nan
                note = str(e)

            report.checked.append(
                CrossCheckResult(
                    external_id=unit.external_id,
                    base_external_id=base_unit.external_id,
                    catalog_value=catalog_value,
                    pint_value=float(pint_value),
                    note=note,
                )
            )

    logger.info(
        "Cross-checked %d units against pint (%d skipped, %d mismatches)",
        len(report.checked), len(report.skipped), len(report.mismatches),
    )
    return report

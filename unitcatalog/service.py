"""
Unit service.

Public entry point: lookups, conversions and unit-system resolution over
one validated catalog. A process-wide default instance built from the
bundled catalog is available through get_unit_service().
"""

import logging
import threading
from typing import Iterable, Optional

from unitcatalog.catalog.duplicates import get_duplicate_conversions
from unitcatalog.catalog.index import UnitIndex
from unitcatalog.catalog.loader import CatalogSource, load_catalog
from unitcatalog.catalog.models import Conversion, Unit, UnitSystem
from unitcatalog.conversion import (
    convert_between_units,
    convert_between_units_square_multiplier,
)
from unitcatalog.errors import UnitNotFoundError

logger = logging.getLogger(__name__)

# System used when the requested one has no unit for a quantity
DEFAULT_SYSTEM = "Default"


class UnitService:
    """
    Lookup and conversion service over a unit catalog.

    Args:
        units_source: Units document (JSON text, path, file:// URL or
            packaged resource). If None, uses the bundled catalog.
        systems_source: Unit-systems document. If None, uses the bundled
            catalog.

    Raises:
        CatalogLoadError: If the documents are malformed or inconsistent
        FileNotFoundError: If a source points at a missing file
    """

    def __init__(
        self,
        units_source: Optional[CatalogSource] = None,
        systems_source: Optional[CatalogSource] = None,
    ):
        units, systems = load_catalog(units_source, systems_source)
        self._index = UnitIndex(units, systems)

    @classmethod
    def from_records(cls, units: Iterable[Unit], unit_systems: Iterable[UnitSystem]) -> "UnitService":
        """Build a service from already parsed records."""
        service = cls.__new__(cls)
        service._index = UnitIndex(units, unit_systems)
        return service

    @property
    def index(self) -> UnitIndex:
        return self._index

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def get_unit_by_external_id(self, external_id: str) -> Unit:
        return self._index.get_unit_by_external_id(external_id)

    def get_units_by_quantity(self, quantity: str) -> list[Unit]:
        return self._index.get_units_by_quantity(quantity)

    def get_unit_by_quantity_and_alias(self, quantity: str, alias: str) -> Unit:
        return self._index.get_unit_by_quantity_and_alias(quantity, alias)

    def get_units_by_alias(self, alias: str) -> list[Unit]:
        return self._index.get_units_by_alias(alias)

    def get_units(self) -> list[Unit]:
        return self._index.get_units()

    def get_quantities(self) -> list[str]:
        return self._index.get_quantities()

    def get_unit_systems(self) -> set[str]:
        return self._index.get_unit_systems()

    # -------------------------------------------------------------------------
    # Unit systems
    # -------------------------------------------------------------------------

    def get_unit_by_quantity_and_system(self, quantity: str, system: str) -> Unit:
        """
        Unit designated for a quantity in a unit system.

        Falls back to the Default system when the requested system has no
        entry for the quantity.

        Raises:
            UnitSystemNotFoundError: If the system is unknown
            UnitNotFoundError: If neither system covers the quantity
        """
        unit = self._index.designated_unit(system, quantity)
        if unit is not None:
            return unit

        if system != DEFAULT_SYSTEM and DEFAULT_SYSTEM in self._index.get_unit_systems():
            unit = self._index.designated_unit(DEFAULT_SYSTEM, quantity)
            if unit is not None:
                logger.debug(
                    "No %s unit for %s in %s, using %s",
                    system, quantity, system, DEFAULT_SYSTEM,
                )
                return unit

        tried = system if system == DEFAULT_SYSTEM else f"{system} or {DEFAULT_SYSTEM}"
        raise UnitNotFoundError(f"No unit for quantity {quantity} in unit system {tried}")

    def get_unit_by_system(self, unit: Unit, system: str) -> Unit:
        """Counterpart of a unit in the given unit system."""
        return self.get_unit_by_quantity_and_system(unit.quantity, system)

    # -------------------------------------------------------------------------
    # Conversions
    # -------------------------------------------------------------------------

    def convert_between_units(self, from_unit: Unit, to_unit: Unit, value: float) -> float:
        return convert_between_units(from_unit, to_unit, value)

    def convert_between_units_square_multiplier(self, from_unit: Unit, to_unit: Unit, value: float) -> float:
        return convert_between_units_square_multiplier(from_unit, to_unit, value)

    def get_duplicate_conversions(self, units: Iterable[Unit]) -> dict[str, dict[Conversion, list[Unit]]]:
        return get_duplicate_conversions(units)


# =============================================================================
# Default instance
# =============================================================================

_default_service: Optional[UnitService] = None
_default_lock = threading.Lock()


def get_unit_service() -> UnitService:
    """Return the shared UnitService built from the bundled catalog (created on first use)."""
    global _default_service
    if _default_service is None:
        with _default_lock:
            if _default_service is None:
                _default_service = UnitService()
                logger.info("Loaded default unit catalog (%d units)", len(_default_service.index))
    return _default_service

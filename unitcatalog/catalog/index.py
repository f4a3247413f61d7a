"""
Unit index.

Builds the lookup tables over a loaded catalog and checks its consistency
while doing so. An index is either fully built and valid, or construction
raises a CatalogLoadError.

Lookups:
- by externalId
- by quantity (source order)
- by (quantity, alias)
- by alias alone (across quantities)
- by unit system and quantity
"""

import logging
import re
from typing import Iterable, Optional

from unitcatalog.catalog.models import Unit, UnitSystem
from unitcatalog.errors import (
    DuplicateAliasError,
    DuplicateExternalIdError,
    DuplicateUnitSystemError,
    InvalidExternalIdError,
    QuantityNotFoundError,
    UnitNotFoundError,
    UnitSystemNotFoundError,
    UnknownUnitReferenceError,
)

logger = logging.getLogger(__name__)


def quantity_slug(quantity: str) -> str:
    """
    Identifier prefix for a quantity name.

    'Temperature Gradient' -> 'temperature_gradient'
    """
    return re.sub(r"\s+", "_", quantity.strip()).lower()


def is_valid_external_id(unit: Unit) -> bool:
    """Check that the externalId is '<quantity_slug>:<unit_slug>'."""
    prefix, sep, unit_part = unit.external_id.partition(":")
    return (
        sep == ":"
        and bool(unit_part)
        and ":" not in unit_part
        and prefix == quantity_slug(unit.quantity)
    )


class UnitIndex:
    """
    Read-only lookup structure over the units and unit systems of a catalog.

    Args:
        units: Unit records in source order
        unit_systems: Unit-system records

    Raises:
        CatalogLoadError: On the first consistency violation found
    """

    def __init__(self, units: Iterable[Unit], unit_systems: Iterable[UnitSystem]):
        self._units: list[Unit] = []
        self._by_external_id: dict[str, Unit] = {}
        self._by_quantity: dict[str, list[Unit]] = {}
        self._by_quantity_and_alias: dict[tuple[str, str], Unit] = {}
        self._by_alias: dict[str, list[Unit]] = {}
        self._systems: dict[str, UnitSystem] = {}
        self._system_tables: dict[str, dict[str, str]] = {}

        unit_systems = list(unit_systems)
        membership = _designations(unit_systems)

        for unit in units:
            extra = membership.get(unit.external_id)
            if extra:
                unit = unit.model_copy(
                    update={"system_membership": unit.system_membership | extra}
                )
            self._insert(unit)

        for system in unit_systems:
            self._insert_system(system)

        logger.debug(
            "Indexed %d units across %d quantities and %d unit systems",
            len(self._units), len(self._by_quantity), len(self._systems),
        )

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def _insert(self, unit: Unit) -> None:
        if unit.external_id in self._by_external_id:
            raise DuplicateExternalIdError(unit.external_id)

        if not is_valid_external_id(unit):
            raise InvalidExternalIdError(unit.external_id, unit.name, unit.quantity)

        seen: set[str] = set()
        for alias in unit.alias_names:
            if alias in seen:
                raise DuplicateAliasError(alias, unit.quantity, unit.external_id)
            seen.add(alias)

        self._units.append(unit)
        self._by_external_id[unit.external_id] = unit
        self._by_quantity.setdefault(unit.quantity, []).append(unit)

        for alias in unit.alias_names:
            key = (unit.quantity, alias)
            if key in self._by_quantity_and_alias:
                raise DuplicateAliasError(alias, unit.quantity)
            self._by_quantity_and_alias[key] = unit
            self._by_alias.setdefault(alias, []).append(unit)

    def _insert_system(self, system: UnitSystem) -> None:
        if system.name in self._systems:
            raise DuplicateUnitSystemError(system.name)

        table: dict[str, str] = {}
        for entry in system.quantities:
            if entry.name in table:
                raise DuplicateUnitSystemError(system.name, entry.name)

            unit = self._by_external_id.get(entry.unit_external_id)
            if unit is None:
                raise UnknownUnitReferenceError(system.name, entry.name, entry.unit_external_id)
            if unit.quantity != entry.name:
                raise UnknownUnitReferenceError(
                    system.name,
                    entry.name,
                    entry.unit_external_id,
                    reason=f"unit belongs to quantity {unit.quantity}",
                )
            table[entry.name] = entry.unit_external_id

        self._systems[system.name] = system
        self._system_tables[system.name] = table

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_unit_by_external_id(self, external_id: str) -> Unit:
        unit = self._by_external_id.get(external_id)
        if unit is None:
            raise UnitNotFoundError(f"Unknown unit {external_id}")
        return unit

    def get_units_by_quantity(self, quantity: str) -> list[Unit]:
        units = self._by_quantity.get(quantity)
        if units is None:
            raise QuantityNotFoundError(quantity)
        return list(units)

    def get_unit_by_quantity_and_alias(self, quantity: str, alias: str) -> Unit:
        unit = self._by_quantity_and_alias.get((quantity, alias))
        if unit is None:
            raise UnitNotFoundError(f"Unknown alias {alias} for quantity {quantity}")
        return unit

    def get_units_by_alias(self, alias: str) -> list[Unit]:
        units = self._by_alias.get(alias)
        if units is None:
            raise UnitNotFoundError(f"Unknown alias {alias}")
        return list(units)

    def get_units(self) -> list[Unit]:
        return list(self._units)

    def get_quantities(self) -> list[str]:
        """Quantity names in the order they first appear in the catalog."""
        return list(self._by_quantity)

    def get_unit_systems(self) -> set[str]:
        return set(self._systems)

    def get_unit_system(self, name: str) -> UnitSystem:
        system = self._systems.get(name)
        if system is None:
            raise UnitSystemNotFoundError(name)
        return system

    def designated_unit(self, system: str, quantity: str) -> Optional[Unit]:
        """
        Unit that a system designates for a quantity, or None if the system
        has no entry for it.

        Raises:
            UnitSystemNotFoundError: If the system is unknown
        """
        table = self._system_tables.get(system)
        if table is None:
            raise UnitSystemNotFoundError(system)
        external_id = table.get(quantity)
        if external_id is None:
            return None
        return self._by_external_id[external_id]

    def __len__(self) -> int:
        return len(self._units)

    def __contains__(self, external_id: object) -> bool:
        return external_id in self._by_external_id


def _designations(unit_systems: list[UnitSystem]) -> dict[str, frozenset[str]]:
    """externalId -> names of the systems that designate it."""
    membership: dict[str, set[str]] = {}
    for system in unit_systems:
        for entry in system.quantities:
            membership.setdefault(entry.unit_external_id, set()).add(system.name)
    return {external_id: frozenset(names) for external_id, names in membership.items()}

"""
Unit Catalog (unitcatalog)

Lookup and conversion of physical units backed by a curated catalog of unit
definitions: external identifiers, aliases, conversion coefficients to a
per-quantity base unit and unit systems (SI, Imperial, Default).

Usage:
    from unitcatalog import get_unit_service

    service = get_unit_service()
    celsius = service.get_unit_by_external_id("temperature:deg_c")
    fahrenheit = service.get_unit_by_quantity_and_alias("Temperature", "degF")
    service.convert_between_units(celsius, fahrenheit, 10.0)  # 50.0

    python -m unitcatalog convert 10 temperature:deg_c temperature:deg_f
    python -m unitcatalog serve --port 8000
"""

__version__ = "0.1.0"
__author__ = "Unit Catalog Project"

from unitcatalog.catalog.models import Conversion, Unit, UnitSystem
from unitcatalog.errors import (
    CatalogLoadError,
    UnitCatalogError,
    UnitNotFoundError,
)
from unitcatalog.service import UnitService, get_unit_service

__all__ = [
    "Conversion",
    "Unit",
    "UnitSystem",
    "CatalogLoadError",
    "UnitCatalogError",
    "UnitNotFoundError",
    "UnitService",
    "get_unit_service",
]

"""
Unit catalog data: models, JSON loading, indexing and diagnostics.

Units and unit systems are loaded from JSON documents, validated against
the pydantic models and indexed by UnitIndex, which also enforces the
catalog's consistency rules.
"""

from unitcatalog.catalog.models import Conversion, Unit, UnitSystem, QuantityUnit
from unitcatalog.catalog.loader import load_units, load_unit_systems, load_catalog
from unitcatalog.catalog.index import UnitIndex, quantity_slug
from unitcatalog.catalog.duplicates import get_duplicate_conversions

__all__ = [
    "Conversion",
    "Unit",
    "UnitSystem",
    "QuantityUnit",
    "load_units",
    "load_unit_systems",
    "load_catalog",
    "UnitIndex",
    "quantity_slug",
    "get_duplicate_conversions",
]

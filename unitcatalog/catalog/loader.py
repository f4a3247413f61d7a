"""
Unit catalog loader.

Reads the unit and unit-system JSON documents and validates them against
the pydantic models before anything is indexed.
"""

import importlib.resources as resources
from importlib.resources.abc import Traversable
import logging
import os
from pathlib import Path
from typing import Optional, Union
from urllib.parse import urlparse
from urllib.request import url2pathname

from pydantic import TypeAdapter, ValidationError

from unitcatalog.catalog.models import Unit, UnitSystem
from unitcatalog.errors import CatalogSchemaError

logger = logging.getLogger(__name__)


# Default catalog filenames (bundled in unitcatalog.data)
DEFAULT_UNITS_NAME = "units.json"
DEFAULT_SYSTEMS_NAME = "unitSystems.json"

# Environment overrides for the default catalog
UNITS_ENV_VAR = "UNITCATALOG_UNITS"
SYSTEMS_ENV_VAR = "UNITCATALOG_UNIT_SYSTEMS"

# A source is JSON text, a path (string or Path), a file:// URL or a
# traversable returned by importlib.resources.
CatalogSource = Union[str, Path, Traversable]

_UNITS_ADAPTER = TypeAdapter(list[Unit])
_SYSTEMS_ADAPTER = TypeAdapter(list[UnitSystem])


def bundled_resource(filename: str) -> Traversable:
    """Return the packaged data file inside unitcatalog.data."""
    return resources.files("unitcatalog.data").joinpath(filename)


def default_units_source() -> CatalogSource:
    """Units document used by the default service."""
    override = os.environ.get(UNITS_ENV_VAR)
    if override:
        return override if override.startswith("file://") else Path(override)
    return bundled_resource(DEFAULT_UNITS_NAME)


def default_systems_source() -> CatalogSource:
    """Unit-systems document used by the default service."""
    override = os.environ.get(SYSTEMS_ENV_VAR)
    if override:
        return override if override.startswith("file://") else Path(override)
    return bundled_resource(DEFAULT_SYSTEMS_NAME)


def _names_file(text: str) -> bool:
    """A string names a file if it ends in .json or is an existing file."""
    if not text.strip() or text.lstrip()[:1] in ("[", "{") or "\n" in text:
        return False
    if text.endswith(".json"):
        return True
    try:
        return Path(text).is_file()
    except OSError:
        # e.g. a long JSON scalar exceeding the maximum file name length
        return False


def read_source(source: CatalogSource) -> str:
    """
    Return the JSON text behind a catalog source.

    A string is a file:// URL, a path naming a file, or else the JSON text
    itself, which the parser validates.

    Raises:
        FileNotFoundError: If the source points at a missing file
    """
    if isinstance(source, str):
        if source.startswith("file://"):
            source = Path(url2pathname(urlparse(source).path))
        elif _names_file(source):
            source = Path(source)
        else:
            return source

    if isinstance(source, Path):
        if not source.exists():
            raise FileNotFoundError(f"Catalog document not found at {source}")
        return source.read_text(encoding="utf-8")

    # importlib.resources traversable
    if not source.is_file():
        raise FileNotFoundError(f"Catalog resource not found: {source}")
    return source.read_text(encoding="utf-8")


def parse_units(text: str) -> list[Unit]:
    """
    Validate a units document.

    Raises:
        CatalogSchemaError: If the text is not a list of valid unit records
    """
    try:
        return _UNITS_ADAPTER.validate_json(text)
    except ValidationError as e:
        raise CatalogSchemaError("units", str(e)) from e


def parse_unit_systems(text: str) -> list[UnitSystem]:
    """
    Validate a unit-systems document.

    Raises:
        CatalogSchemaError: If the text is not a list of valid unit systems
    """
    try:
        return _SYSTEMS_ADAPTER.validate_json(text)
    except ValidationError as e:
        raise CatalogSchemaError("unit systems", str(e)) from e


def load_units(source: Optional[CatalogSource] = None) -> list[Unit]:
    """
    Load unit records.

    Args:
        source: Units document. If None, uses the default catalog.

    Returns:
        List of Unit objects in document order
    """
    if source is None:
        source = default_units_source()
    units = parse_units(read_source(source))
    logger.debug("Loaded %d unit records", len(units))
    return units


def load_unit_systems(source: Optional[CatalogSource] = None) -> list[UnitSystem]:
    """
    Load unit-system records.

    Args:
        source: Unit-systems document. If None, uses the default catalog.

    Returns:
        List of UnitSystem objects in document order
    """
    if source is None:
        source = default_systems_source()
    systems = parse_unit_systems(read_source(source))
    logger.debug("Loaded %d unit systems", len(systems))
    return systems


def load_catalog(
    units_source: Optional[CatalogSource] = None,
    systems_source: Optional[CatalogSource] = None,
) -> tuple[list[Unit], list[UnitSystem]]:
    """
    Load both catalog documents.

    Returns:
        Tuple of (units, unit_systems)
    """
    return load_units(units_source), load_unit_systems(systems_source)

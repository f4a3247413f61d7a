"""
Exception types for the unit catalog.

Two families:
- CatalogLoadError: the catalog data is broken. Raised once while building
  a UnitService/UnitIndex, construction is aborted.
- UnitNotFoundError: a lookup key is unknown. Raised per call and safe to
  recover from.
"""

from typing import Optional


class UnitCatalogError(Exception):
    """Base class for all unit catalog errors."""


# =============================================================================
# Load-time errors
# =============================================================================

class CatalogLoadError(UnitCatalogError):
    """The catalog data violates a consistency rule."""


class CatalogSchemaError(CatalogLoadError):
    """A catalog document is not valid JSON or does not match the schema."""

    def __init__(self, document: str, detail: str):
        self.document = document
        self.detail = detail
        super().__init__(f"Invalid {document} document: {detail}")


class DuplicateExternalIdError(CatalogLoadError):
    def __init__(self, external_id: str):
        self.external_id = external_id
        super().__init__(f"Duplicate externalId {external_id}")


class InvalidExternalIdError(CatalogLoadError):
    def __init__(self, external_id: str, name: str, quantity: str):
        self.external_id = external_id
        self.name = name
        self.quantity = quantity
        super().__init__(f"Invalid externalId {external_id} for unit {name} ({quantity})")


class DuplicateAliasError(CatalogLoadError):
    """
    An alias occurs twice, either inside one unit's aliasNames or across
    two units of the same quantity (external_id is None in the latter case).
    """

    def __init__(self, alias: str, quantity: str, external_id: Optional[str] = None):
        self.alias = alias
        self.quantity = quantity
        self.external_id = external_id
        if external_id is not None:
            message = (
                f"Duplicate alias '{alias}' found in aliasNames for unit "
                f"{external_id} ({quantity})"
            )
        else:
            message = f"Duplicate alias {alias} for quantity {quantity}"
        super().__init__(message)


class UnknownUnitReferenceError(CatalogLoadError):
    """A unit system points at a unit that is missing or of another quantity."""

    def __init__(self, system: str, quantity: str, external_id: str, reason: Optional[str] = None):
        self.system = system
        self.quantity = quantity
        self.external_id = external_id
        message = (
            f"Unit system {system} references unknown externalId {external_id} "
            f"for quantity {quantity}"
        )
        if reason:
            message = (
                f"Unit system {system} references {external_id} for quantity "
                f"{quantity}: {reason}"
            )
        super().__init__(message)


class DuplicateUnitSystemError(CatalogLoadError):
    def __init__(self, system: str, quantity: Optional[str] = None):
        self.system = system
        self.quantity = quantity
        if quantity is None:
            message = f"Duplicate unit system {system}"
        else:
            message = f"Duplicate quantity {quantity} in unit system {system}"
        super().__init__(message)


# =============================================================================
# Query-time errors
# =============================================================================

class UnitNotFoundError(UnitCatalogError, LookupError):
    """No unit matches the requested key."""


class QuantityNotFoundError(UnitNotFoundError):
    def __init__(self, quantity: str):
        self.quantity = quantity
        super().__init__(f"Unknown quantity {quantity}")


class UnitSystemNotFoundError(UnitNotFoundError):
    def __init__(self, system: str):
        self.system = system
        super().__init__(f"Unknown unit system {system}")

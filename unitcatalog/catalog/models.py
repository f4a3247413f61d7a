"""
Pydantic models for unit catalog data.

Models mirror the JSON documents of the catalog (camelCase aliases) and
are frozen: nothing in the service mutates a unit after loading.
"""

import math
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class Conversion(BaseModel):
    """
    Affine transform from a unit to its quantity's base unit.

    to_base(x) = multiplier * x + offset

    Value-equal and hashable, so it can be used as a grouping key.
    """
    multiplier: float = Field(..., description="Scale factor to the base unit")
    offset: float = Field(default=0.0, description="Offset added after scaling")

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator("multiplier")
    @classmethod
    def validate_multiplier(cls, v: float) -> float:
        """A zero multiplier cannot be inverted."""
        if not math.isfinite(v) or v == 0:
            raise ValueError(f"multiplier must be finite and non-zero, got {v}")
        return v

    @field_validator("offset")
    @classmethod
    def validate_offset(cls, v: float) -> float:
        if not math.isfinite(v):
            raise ValueError(f"offset must be finite, got {v}")
        return v

    def to_base(self, value: float) -> float:
        return self.multiplier * value + self.offset

    def from_base(self, value: float) -> float:
        return (value - self.offset) / self.multiplier


class Unit(BaseModel):
    """
    A physical unit from the catalog.

    The externalId has the form '<quantity_slug>:<unit_slug>', e.g.
    'temperature:deg_c' for quantity 'Temperature'.
    """
    external_id: str = Field(..., alias="externalId", description="Globally unique identifier")
    name: str = Field(..., description="Short unit name, e.g. 'DEG_C'")
    long_name: Optional[str] = Field(default=None, alias="longName", description="Human readable name")
    symbol: Optional[str] = Field(default=None, description="Display symbol, e.g. '°C'")
    quantity: str = Field(..., description="Quantity this unit measures, e.g. 'Temperature'")
    conversion: Conversion = Field(..., description="Conversion to the quantity's base unit")
    alias_names: tuple[str, ...] = Field(
        default=(),
        alias="aliasNames",
        description="Alternative names, unique within the quantity",
    )
    system_membership: frozenset[str] = Field(
        default_factory=frozenset,
        alias="systemMembership",
        description="Unit systems that designate this unit for its quantity",
    )
    source: Optional[str] = Field(default=None, description="Origin of the definition")
    source_reference: Optional[str] = Field(
        default=None,
        alias="sourceReference",
        description="Link to the upstream definition",
    )

    model_config = {
        "frozen": True,
        "extra": "forbid",
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "externalId": "temperature:deg_c",
                "name": "DEG_C",
                "longName": "degree Celsius",
                "symbol": "°C",
                "quantity": "Temperature",
                "conversion": {"multiplier": 1.0, "offset": 273.15},
                "aliasNames": ["degC", "°C", "Celsius"],
            }
        },
    }

    def __str__(self) -> str:
        return self.external_id


class QuantityUnit(BaseModel):
    """One row of a unit system: the unit designated for a quantity."""
    name: str = Field(..., description="Quantity name")
    unit_external_id: str = Field(..., alias="unitExternalId", description="Designated unit")

    model_config = {"frozen": True, "extra": "forbid", "populate_by_name": True}


class UnitSystem(BaseModel):
    """
    A named unit profile such as 'SI' or 'Imperial'.

    Designates at most one unit per quantity. Quantities that are not
    listed fall back to the 'Default' system.
    """
    name: str = Field(..., description="Unit system name")
    quantities: tuple[QuantityUnit, ...] = Field(
        default=(),
        description="Designated unit per quantity",
    )

    model_config = {"frozen": True, "extra": "forbid"}

    def mapping(self) -> dict[str, str]:
        """Quantity name -> designated unit externalId."""
        return {entry.name: entry.unit_external_id for entry in self.quantities}

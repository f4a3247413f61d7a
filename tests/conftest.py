"""
Pytest configuration and shared fixtures.
"""

import json

import pytest

from unitcatalog.service import UnitService, get_unit_service


def unit_record(
    external_id: str,
    name: str,
    quantity: str,
    multiplier: float = 1.0,
    offset: float = 0.0,
    aliases: tuple = (),
    symbol: str = None,
) -> dict:
    """Build a unit record as it appears in units.json."""
    return {
        "externalId": external_id,
        "name": name,
        "symbol": symbol,
        "quantity": quantity,
        "conversion": {"multiplier": multiplier, "offset": offset},
        "aliasNames": list(aliases),
    }


@pytest.fixture
def make_unit():
    """Factory for raw unit records."""
    return unit_record


@pytest.fixture
def small_unit_records() -> list[dict]:
    """A small but complete catalog: temperature, power, length and angle."""
    return [
        unit_record("temperature:deg_c", "DEG_C", "Temperature", 1.0, 273.15,
                    ("degC", "Celsius", "deg"), symbol="degC"),
        unit_record("temperature:deg_f", "DEG_F", "Temperature", 0.5555555555555556, 255.3722222222222,
                    ("degF", "Fahrenheit"), symbol="degF"),
        unit_record("temperature:k", "K", "Temperature", 1.0, 0.0, ("K", "kelvin"), symbol="K"),
        unit_record("power:w", "W", "Power", 1.0, 0.0, ("W", "watt"), symbol="W"),
        unit_record("power:j-per-sec", "J-PER-SEC", "Power", 1.0, 0.0, ("J/s",), symbol="J/s"),
        unit_record("power:kilo-w", "KiloW", "Power", 1000.0, 0.0, ("kW",), symbol="kW"),
        unit_record("length:m", "M", "Length", 1.0, 0.0, ("m", "metre"), symbol="m"),
        unit_record("length:ft", "FT", "Length", 0.3048, 0.0, ("ft", "foot"), symbol="ft"),
        unit_record("angle:rad", "RAD", "Angle", 1.0, 0.0, ("rad",), symbol="rad"),
        unit_record("angle:deg", "DEG", "Angle", 0.017453292519943295, 0.0, ("deg", "degrees"), symbol="deg"),
    ]


@pytest.fixture
def small_system_records() -> list[dict]:
    """Default/SI/Imperial systems for the small catalog. Angle is in none."""
    return [
        {
            "name": "Default",
            "quantities": [
                {"name": "Temperature", "unitExternalId": "temperature:deg_c"},
                {"name": "Power", "unitExternalId": "power:w"},
                {"name": "Length", "unitExternalId": "length:m"},
            ],
        },
        {
            "name": "SI",
            "quantities": [
                {"name": "Temperature", "unitExternalId": "temperature:k"},
                {"name": "Power", "unitExternalId": "power:w"},
                {"name": "Length", "unitExternalId": "length:m"},
            ],
        },
        {
            "name": "Imperial",
            "quantities": [
                {"name": "Temperature", "unitExternalId": "temperature:deg_f"},
                {"name": "Length", "unitExternalId": "length:ft"},
            ],
        },
    ]


@pytest.fixture
def small_service(small_unit_records, small_system_records) -> UnitService:
    """UnitService built from in-memory JSON text."""
    return UnitService(json.dumps(small_unit_records), json.dumps(small_system_records))


@pytest.fixture
def service() -> UnitService:
    """The shared service built from the bundled catalog."""
    return get_unit_service()

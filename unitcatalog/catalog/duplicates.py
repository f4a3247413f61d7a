"""
Duplicate conversion report.

Finds units of the same quantity whose conversions are identical. Such
units are interchangeable for conversion purposes (e.g. W and J/s), which
is often intentional but worth reviewing when curating the catalog.
"""

from typing import Iterable

from unitcatalog.catalog.models import Conversion, Unit


def get_duplicate_conversions(units: Iterable[Unit]) -> dict[str, dict[Conversion, list[Unit]]]:
    """
    Group units sharing a conversion within each quantity.

    Args:
        units: Units to analyse, usually the full catalog

    Returns:
        quantity -> (conversion -> units sharing it). Only groups with more
        than one unit are reported; quantities without any are left out.
    """
    grouped: dict[str, dict[Conversion, list[Unit]]] = {}
    for unit in units:
        grouped.setdefault(unit.quantity, {}).setdefault(unit.conversion, []).append(unit)

    duplicates: dict[str, dict[Conversion, list[Unit]]] = {}
    for quantity, by_conversion in grouped.items():
        shared = {
            conversion: members
            for conversion, members in by_conversion.items()
            if len(members) > 1
        }
        if shared:
            duplicates[quantity] = shared
    return duplicates

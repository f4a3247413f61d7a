"""
Command-line interface for the unit catalog.

Usage:
    python -m unitcatalog convert 10 temperature:deg_c temperature:deg_f
    python -m unitcatalog lookup --quantity Temperature --alias degC
    python -m unitcatalog systems [--quantity Temperature]
    python -m unitcatalog duplicates
    python -m unitcatalog validate --units units.json --systems unitSystems.json
    python -m unitcatalog crosscheck
    python -m unitcatalog serve [--port 8000]
"""

import argparse
import json
import logging
import sys

from unitcatalog import __version__
from unitcatalog.catalog.models import Unit
from unitcatalog.errors import CatalogLoadError, UnitNotFoundError
from unitcatalog.logging_utils import setup_logger
from unitcatalog.service import UnitService, get_unit_service

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="unitcatalog",
        description="Unit Catalog - look up physical units and convert values between them.",
    )
    parser.add_argument("--version", action="version", version=f"unitcatalog {__version__}")
    parser.add_argument(
        "--units",
        default=None,
        help="Units JSON document (default: bundled catalog)",
    )
    parser.add_argument(
        "--systems",
        default=None,
        help="Unit systems JSON document (default: bundled catalog)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # convert command
    convert_parser = subparsers.add_parser(
        "convert",
        help="Convert a value between two units",
    )
    convert_parser.add_argument("value", type=float, help="Value to convert")
    convert_parser.add_argument("from_unit", help="externalId of the source unit")
    convert_parser.add_argument("to_unit", help="externalId of the target unit")
    convert_parser.add_argument(
        "--square",
        action="store_true",
        help="Treat the value as a variance (multipliers only, no offsets)",
    )

    # lookup command
    lookup_parser = subparsers.add_parser(
        "lookup",
        help="Find units by externalId, quantity or alias",
    )
    lookup_parser.add_argument("--id", dest="external_id", default=None, help="Unit externalId")
    lookup_parser.add_argument("--quantity", "-q", default=None, help="Quantity name")
    lookup_parser.add_argument("--alias", "-a", default=None, help="Unit alias")
    lookup_parser.add_argument(
        "--system",
        "-s",
        default=None,
        help="Resolve the found unit(s) into this unit system",
    )
    lookup_parser.add_argument("--json", action="store_true", help="Print full unit records as JSON")

    # quantities command
    subparsers.add_parser("quantities", help="List the quantities in the catalog")

    # systems command
    systems_parser = subparsers.add_parser(
        "systems",
        help="List unit systems",
    )
    systems_parser.add_argument(
        "--quantity",
        "-q",
        default=None,
        help="Show the unit each system uses for this quantity",
    )

    # duplicates command
    subparsers.add_parser(
        "duplicates",
        help="Report units of the same quantity with identical conversions",
    )

    # validate command
    subparsers.add_parser(
        "validate",
        help="Load the catalog and report consistency errors",
    )

    # crosscheck command
    crosscheck_parser = subparsers.add_parser(
        "crosscheck",
        help="Compare catalog conversions with pint's unit definitions",
    )
    crosscheck_parser.add_argument(
        "--rel-tol",
        type=float,
        default=1e-6,
        help="Relative tolerance (default: 1e-6)",
    )

    # serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Start the FastAPI web server",
    )
    serve_parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)",
    )
    serve_parser.add_argument(
        "--port", "-p",
        type=int,
        default=8000,
        help="Port to listen on (default: 8000)",
    )
    serve_parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )

    return parser


def load_service(args: argparse.Namespace) -> UnitService:
    """Default service, or one built from --units/--systems."""
    if args.units is None and args.systems is None:
        return get_unit_service()
    return UnitService(args.units, args.systems)


def format_unit(unit: Unit) -> str:
    label = unit.long_name or unit.name
    symbol = f" [{unit.symbol}]" if unit.symbol else ""
    return f"{unit.external_id:<40} {label}{symbol}"


def cmd_convert(args: argparse.Namespace) -> int:
    """Convert a value between two units."""
    service = load_service(args)
    from_unit = service.get_unit_by_external_id(args.from_unit)
    to_unit = service.get_unit_by_external_id(args.to_unit)

    if from_unit.quantity != to_unit.quantity:
        print(
            f"Error: cannot convert {from_unit.quantity} ({from_unit.external_id}) "
            f"to {to_unit.quantity} ({to_unit.external_id})",
            file=sys.stderr,
        )
        return 1

    if args.square:
        result = service.convert_between_units_square_multiplier(from_unit, to_unit, args.value)
    else:
        result = service.convert_between_units(from_unit, to_unit, args.value)

    print(result)
    return 0


def cmd_lookup(args: argparse.Namespace) -> int:
    """Find units by externalId, quantity and/or alias."""
    service = load_service(args)

    if args.external_id:
        units = [service.get_unit_by_external_id(args.external_id)]
    elif args.quantity and args.alias:
        units = [service.get_unit_by_quantity_and_alias(args.quantity, args.alias)]
    elif args.quantity:
        units = service.get_units_by_quantity(args.quantity)
    elif args.alias:
        units = service.get_units_by_alias(args.alias)
    else:
        print("Error: give --id, --quantity and/or --alias", file=sys.stderr)
        return 2

    if args.system:
        units = [service.get_unit_by_system(unit, args.system) for unit in units]

    if args.json:
        print(json.dumps([unit.model_dump(mode="json", by_alias=True) for unit in units], indent=2))
    else:
        for unit in units:
            print(format_unit(unit))
    return 0


def cmd_quantities(args: argparse.Namespace) -> int:
    """List quantities with their unit counts."""
    service = load_service(args)
    for quantity in service.get_quantities():
        print(f"{quantity:<30} {len(service.get_units_by_quantity(quantity))} units")
    return 0


def cmd_systems(args: argparse.Namespace) -> int:
    """List unit systems, optionally with the unit chosen for a quantity."""
    service = load_service(args)
    for system in sorted(service.get_unit_systems()):
        if args.quantity:
            unit = service.get_unit_by_quantity_and_system(args.quantity, system)
            print(f"{system:<12} {format_unit(unit)}")
        else:
            print(system)
    return 0


def cmd_duplicates(args: argparse.Namespace) -> int:
    """Print groups of units sharing a conversion."""
    service = load_service(args)
    duplicates = service.get_duplicate_conversions(service.get_units())

    if not duplicates:
        print("No duplicate conversions found.")
        return 0

    for quantity, groups in duplicates.items():
        print(f"{quantity}:")
        for conversion, units in groups.items():
            ids = ", ".join(unit.external_id for unit in units)
            print(f"  multiplier={conversion.multiplier} offset={conversion.offset}: {ids}")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Load the catalog; any consistency error is reported by cli()."""
    service = load_service(args)
    print(
        f"Catalog OK: {len(service.get_units())} units, "
        f"{len(service.get_quantities())} quantities, "
        f"{len(service.get_unit_systems())} unit systems"
    )
    return 0


def cmd_crosscheck(args: argparse.Namespace) -> int:
    """Compare catalog conversions with pint."""
    from unitcatalog.crosscheck import cross_check

    service = load_service(args)
    report = cross_check(service.get_units(), rel_tol=args.rel_tol)

    print(f"Checked {len(report.checked)} units, skipped {len(report.skipped)} without pint equivalent")
    for mismatch in report.mismatches:
        print(
            f"  MISMATCH {mismatch.external_id}: catalog {mismatch.catalog_value!r} "
            f"vs pint {mismatch.pint_value!r} {mismatch.base_external_id}"
            + (f" ({mismatch.note})" if mismatch.note else "")
        )
    return 0 if report.ok else 1


def cmd_serve(args: argparse.Namespace) -> int:
    """Start the FastAPI server."""
    try:
        import uvicorn

        print(f"\nStarting Unit Catalog API", file=sys.stderr)
        print(f"API: http://{args.host}:{args.port}/", file=sys.stderr)
        print(f"Docs: http://{args.host}:{args.port}/docs", file=sys.stderr)
        print("\nPress Ctrl+C to stop\n", file=sys.stderr)

        uvicorn.run(
            "unitcatalog.api.server:app",
            host=args.host,
            port=args.port,
            reload=args.reload,
        )
        return 0

    except ImportError as e:
        print(f"Error: Could not start server: {e}", file=sys.stderr)
        print("Install with: pip install uvicorn fastapi", file=sys.stderr)
        return 1


def cli(argv=None):
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logger(args.log_level)
    logger.debug("Running command %s", args.command)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "convert": cmd_convert,
        "lookup": cmd_lookup,
        "quantities": cmd_quantities,
        "systems": cmd_systems,
        "duplicates": cmd_duplicates,
        "validate": cmd_validate,
        "crosscheck": cmd_crosscheck,
        "serve": cmd_serve,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except CatalogLoadError as e:
        print(f"Error: catalog is invalid: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except UnitNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def main():
    """Console script entrypoint wrapper."""
    return cli()


if __name__ == "__main__":
    sys.exit(cli())

"""
Tests for the command-line interface.
"""

import json

import pytest

from unitcatalog.cli.main import cli, create_parser


@pytest.fixture
def catalog_files(tmp_path, small_unit_records, small_system_records):
    """Write the small catalog to disk and return the global CLI options for it."""
    units_path = tmp_path / "units.json"
    systems_path = tmp_path / "unitSystems.json"
    units_path.write_text(json.dumps(small_unit_records), encoding="utf-8")
    systems_path.write_text(json.dumps(small_system_records), encoding="utf-8")
    return ["--units", str(units_path), "--systems", str(systems_path)]


class TestParser:
    """Test argument parsing."""

    def test_convert_arguments(self):
        args = create_parser().parse_args(["convert", "10", "temperature:deg_c", "temperature:deg_f", "--square"])

        assert args.value == 10.0
        assert args.from_unit == "temperature:deg_c"
        assert args.square is True

    def test_no_command_prints_help(self, capsys):
        assert cli([]) == 0
        assert "usage" in capsys.readouterr().out


class TestConvertCommand:
    """Test the convert command."""

    def test_convert(self, capsys):
        """Test converting on the bundled catalog."""
        assert cli(["convert", "10", "temperature:deg_c", "temperature:deg_f"]) == 0
        assert capsys.readouterr().out.strip() == "50.0"

    def test_convert_square(self, capsys):
        assert cli(["convert", "--square", "2.5", "length:m", "length:m"]) == 0
        assert capsys.readouterr().out.strip() == "2.5"

    def test_convert_different_quantities(self, capsys):
        """Test that mixing quantities fails with a message."""
        assert cli(["convert", "1", "temperature:deg_c", "length:m"]) == 1
        assert "cannot convert Temperature" in capsys.readouterr().err

    def test_convert_unknown_unit(self, capsys):
        assert cli(["convert", "1", "temperature:deg_x", "temperature:deg_f"]) == 1
        assert "temperature:deg_x" in capsys.readouterr().err


class TestLookupCommand:
    """Test the lookup command."""

    def test_lookup_by_alias(self, capsys, catalog_files):
        assert cli(catalog_files + ["lookup", "--alias", "deg"]) == 0

        out = capsys.readouterr().out
        assert "temperature:deg_c" in out
        assert "angle:deg" in out

    def test_lookup_in_system(self, capsys, catalog_files):
        assert cli(catalog_files + ["lookup", "-q", "Temperature", "-a", "degC", "-s", "Imperial"]) == 0
        assert capsys.readouterr().out.startswith("temperature:deg_f")

    def test_lookup_json(self, capsys, catalog_files):
        assert cli(catalog_files + ["lookup", "--id", "power:w", "--json"]) == 0

        records = json.loads(capsys.readouterr().out)
        assert records[0]["externalId"] == "power:w"
        assert sorted(records[0]["systemMembership"]) == ["Default", "SI"]

    def test_lookup_without_key(self, capsys, catalog_files):
        assert cli(catalog_files + ["lookup"]) == 2


class TestCatalogCommands:
    """Test the listing and validation commands."""

    def test_quantities(self, capsys, catalog_files):
        assert cli(catalog_files + ["quantities"]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert [line.split()[0] for line in lines] == ["Temperature", "Power", "Length", "Angle"]

    def test_systems_for_quantity(self, capsys, catalog_files):
        assert cli(catalog_files + ["systems", "-q", "Power"]) == 0

        out = capsys.readouterr().out
        assert "Imperial" in out
        assert out.count("power:w") == 3

    def test_duplicates(self, capsys, catalog_files):
        assert cli(catalog_files + ["duplicates"]) == 0
        assert "power:w, power:j-per-sec" in capsys.readouterr().out

    def test_no_duplicates(self, capsys, tmp_path, make_unit):
        units_path = tmp_path / "units.json"
        units_path.write_text(json.dumps([make_unit("length:m", "M", "Length")]), encoding="utf-8")

        assert cli(["--units", str(units_path), "--systems", "[]", "duplicates"]) == 0
        assert "No duplicate conversions found." in capsys.readouterr().out

    def test_validate(self, capsys, catalog_files):
        assert cli(catalog_files + ["validate"]) == 0
        assert capsys.readouterr().out.startswith("Catalog OK: 10 units, 4 quantities, 3 unit systems")

    def test_validate_reports_duplicate_id(self, capsys, tmp_path, make_unit):
        """Test that a broken catalog exits non-zero with the offending id."""
        units_path = tmp_path / "units.json"
        units_path.write_text(json.dumps([
            make_unit("length:m", "M", "Length"),
            make_unit("length:m", "METRE", "Length"),
        ]), encoding="utf-8")

        assert cli(["--units", str(units_path), "--systems", "[]", "validate"]) == 1
        assert "Duplicate externalId length:m" in capsys.readouterr().err

    def test_validate_missing_file(self, capsys, tmp_path):
        missing = tmp_path / "missing.json"

        assert cli(["--units", str(missing), "--systems", "[]", "validate"]) == 1
        assert "Error" in capsys.readouterr().err

    def test_crosscheck(self, capsys, catalog_files):
        assert cli(catalog_files + ["crosscheck"]) == 0
        assert capsys.readouterr().out.startswith("Checked")

    def test_validate_empty_units_document(self, capsys):
        """Test that an empty document is reported as an invalid catalog."""
        assert cli(["--units", "", "--systems", "[]", "validate"]) == 1
        assert "catalog is invalid" in capsys.readouterr().err

    def test_validate_scalar_units_document(self, capsys):
        assert cli(["--units", "null", "--systems", "[]", "validate"]) == 1
        assert "catalog is invalid" in capsys.readouterr().err

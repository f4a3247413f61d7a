"""
Tests for the pint cross-check.
"""

import json
import math

import pytest

from unitcatalog.catalog.loader import parse_units
from unitcatalog.crosscheck import CrossCheckResult, cross_check, pint_unit


class TestPintUnit:
    """Test symbol parsing."""

    def test_known_symbol(self):
        """Test that common symbols parse."""
        assert pint_unit("ft") is not None
        assert pint_unit("degC") is not None

    @pytest.mark.parametrize("symbol", [None, "", "not_a_unit_symbol"])
    def test_unknown_symbol(self, symbol):
        """Test that unknown or missing symbols give None."""
        assert pint_unit(symbol) is None


class TestCrossCheck:
    """Test comparison of catalog conversions against pint."""

    def test_consistent_catalog(self, small_service):
        """Test that the small catalog agrees with pint."""
        report = cross_check(small_service.get_units())

        assert report.ok
        checked = {r.external_id for r in report.checked}
        assert {"temperature:deg_c", "temperature:deg_f", "length:ft", "power:kilo-w"} <= checked

    def test_offset_units(self, small_service):
        """Test that offsets are compared too."""
        report = cross_check(small_service.get_units())
        result = next(r for r in report.checked if r.external_id == "temperature:deg_c")

        assert result.base_external_id == "temperature:k"
        assert result.catalog_value == pytest.approx(274.15)
        assert result.pint_value == pytest.approx(274.15)

    def test_wrong_multiplier_reported(self, small_unit_records):
        """Test that a wrong coefficient is reported as mismatch."""
        for record in small_unit_records:
            if record["externalId"] == "length:ft":
                record["conversion"]["multiplier"] = 0.3

        report = cross_check(parse_units(json.dumps(small_unit_records)))

        assert not report.ok
        assert [m.external_id for m in report.mismatches] == ["length:ft"]

    def test_wrong_dimension_reported(self, make_unit):
        """Test that a symbol of another dimension is a mismatch."""
        units = parse_units(json.dumps([
            make_unit("length:m", "M", "Length", symbol="m"),
            make_unit("length:sec", "SEC", "Length", symbol="s"),
        ]))

        report = cross_check(units)

        assert len(report.mismatches) == 1
        assert report.mismatches[0].note
        assert math.isinf(report.mismatches[0].relative_error)

    def test_unparsable_symbols_skipped(self, make_unit):
        """Test that units pint does not know are skipped."""
        units = parse_units(json.dumps([
            make_unit("length:m", "M", "Length", symbol="m"),
            make_unit("length:league", "LEAGUE", "Length", 4828.032, symbol="not_a_unit_symbol"),
        ]))

        report = cross_check(units)

        assert report.skipped == ["length:league"]
        assert report.checked == []

    def test_quantity_without_base_skipped(self, make_unit):
        """Test that a quantity without a recognised base unit is skipped."""
        units = parse_units(json.dumps([
            make_unit("length:ft", "FT", "Length", 0.3048, symbol="ft"),
        ]))

        report = cross_check(units)

        assert report.skipped == ["length:ft"]


class TestCrossCheckResult:
    """Test relative error computation."""

    def test_relative_error(self):
        result = CrossCheckResult("a:b", "a:c", catalog_value=1.0, pint_value=1.1)
        assert result.relative_error == pytest.approx(0.1 / 1.1)

    def test_both_zero(self):
        result = CrossCheckResult("a:b", "a:c", catalog_value=0.0, pint_value=0.0)
        assert result.relative_error == 0.0

"""Tests for unit normalization, conversion and display formatting."""

import pytest

from stockvoice.voice.parser.units import (
    ScaledValue,
    canonical_unit,
    convert_unit,
    format_value_with_unit,
    get_appropriate_unit,
    get_unit_display_name,
    normalize_singular_unit,
)


class TestNormalizeSingularUnit:
    @pytest.mark.parametrize("unit,expected", [
        ("kgs", "kg"),
        ("KGS ", "kg"),
        ("g", "g"),
        ("bottles", "bottle"),
        # naive plural stripping is accepted behaviour
        ("grass", "gras"),
    ])
    def test_normalize(self, unit: str, expected: str):
        assert normalize_singular_unit(unit) == expected


class TestCanonicalUnit:
    @pytest.mark.parametrize("unit,expected", [
        ("Kilos", "kg"),
        ("litre", "l"),
        ("pcs", "piece"),
        ("sachet", "packet"),
        ("packets", "packet"),
        ("btl", "bottle"),
        ("crates", "crate"),
    ])
    def test_aliases(self, unit: str, expected: str):
        assert canonical_unit(unit) == expected


class TestConvertUnit:
    @pytest.mark.parametrize("value,from_unit,to_unit,expected", [
        (1, "kg", "g", 1000),
        (500, "g", "kg", 0.5),
        (2, "l", "ml", 2000),
        (250, "ml", "l", 0.25),
        (2, "kgs", "g", 2000),
    ])
    def test_convertible_pairs(self, value, from_unit, to_unit, expected):
        assert convert_unit(value, from_unit, to_unit) == pytest.approx(expected)

    def test_g_to_kg_is_division_by_1000(self):
        assert convert_unit(1234, "g", "kg") == 1234 / 1000

    def test_identical_units_return_value(self):
        assert convert_unit(3, "packet", "packet") == 3

    @pytest.mark.parametrize("from_unit,to_unit", [
        ("kg", "l"),
        ("box", "g"),
        ("dozen", "piece"),
    ])
    def test_no_conversion_path(self, from_unit: str, to_unit: str):
        assert convert_unit(5, from_unit, to_unit) is None


class TestGetAppropriateUnit:
    @pytest.mark.parametrize("value,unit,expected", [
        (0.5, "kg", ScaledValue(500, "g")),
        (1500, "g", ScaledValue(1.5, "kg")),
        (0.25, "l", ScaledValue(250, "ml")),
        (2000, "ml", ScaledValue(2, "l")),
        (2, "kg", ScaledValue(2, "kg")),
        (2, "packets", ScaledValue(2, "packet")),
    ])
    def test_rescale(self, value, unit, expected):
        scaled = get_appropriate_unit(value, unit)
        assert scaled.unit == expected.unit
        assert scaled.value == pytest.approx(expected.value)

    @pytest.mark.parametrize("value,unit", [(0.5, "kg"), (1500, "g"), (0.3, "l"), (5000, "ml")])
    def test_rescaling_is_a_fixed_point(self, value, unit):
        once = get_appropriate_unit(value, unit)
        twice = get_appropriate_unit(once.value, once.unit)
        assert twice.unit == once.unit
        assert twice.value == pytest.approx(once.value)


class TestFormatValueWithUnit:
    @pytest.mark.parametrize("value,unit,expected", [
        (1500, "g", "1.50 kg"),
        (500, "g", "500 g"),
        (0.5, "kg", "500 g"),
        (2, "kg", "2 kg"),
        (1.25, "l", "1.25 l"),
        (3, "bottles", "3 bottle"),
    ])
    def test_format(self, value, unit, expected):
        assert format_value_with_unit(value, unit) == expected


class TestDisplayName:
    def test_known_unit(self):
        assert get_unit_display_name("l") == "liters"
        assert get_unit_display_name("packet") == "packets"

    def test_unknown_unit_passes_through(self):
        assert get_unit_display_name("jar") == "jar"

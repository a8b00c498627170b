"""Unit normalization and conversion for spoken quantities.

Only weight (kg/g) and volume (l/ml) have conversions; everything else
(packets, bottles, dozens, ...) is counted as-is.
"""

from __future__ import annotations

from typing import NamedTuple

# (from, to) -> (numerator, denominator); value * num / den keeps g→kg an
# exact division by 1000
CONVERSION_FACTORS: dict[tuple[str, str], tuple[int, int]] = {
    ("kg", "g"): (1000, 1),
    ("g", "kg"): (1, 1000),
    ("l", "ml"): (1000, 1),
    ("ml", "l"): (1, 1000),
}

# Spoken forms → canonical unit
UNIT_ALIASES: dict[str, str] = {
    "kg": "kg", "kgs": "kg", "kilo": "kg", "kilos": "kg",
    "kilogram": "kg", "kilograms": "kg",
    "g": "g", "gm": "g", "gms": "g", "gram": "g", "grams": "g",
    "l": "l", "ltr": "l", "ltrs": "l", "lt": "l", "litre": "l",
    "litres": "l", "liter": "l", "liters": "l",
    "ml": "ml", "millilitre": "ml", "millilitres": "ml",
    "milliliter": "ml", "milliliters": "ml",
    "piece": "piece", "pieces": "piece", "pc": "piece", "pcs": "piece",
    "unit": "piece", "units": "piece",
    "packet": "packet", "packets": "packet", "pack": "packet",
    "packs": "packet", "sachet": "packet", "sachets": "packet",
    "bottle": "bottle", "bottles": "bottle", "btl": "bottle", "btls": "bottle",
    "box": "box", "boxes": "box",
    "dozen": "dozen", "dozens": "dozen", "doz": "dozen",
    "can": "can", "cans": "can", "tin": "can", "tins": "can",
    "bag": "bag", "bags": "bag",
    "carton": "carton", "cartons": "carton",
    "jar": "jar", "jars": "jar",
}

UNIT_DISPLAY_NAMES: dict[str, str] = {
    "kg": "kg",
    "g": "g",
    "l": "liters",
    "ml": "ml",
    "packet": "packets",
    "bottle": "bottles",
    "can": "cans",
    "piece": "pieces",
    "box": "boxes",
    "dozen": "dozen",
}


class ScaledValue(NamedTuple):
    value: float
    unit: str


def normalize_singular_unit(unit: str) -> str:
    """Lowercase, trim and drop one trailing "s".

    Naive: "kgs" → "kg" but also "grass" → "gras".
    """
    normalized = unit.lower().strip()
    if normalized.endswith("s"):
        return normalized[:-1]
    return normalized


def canonical_unit(unit: str) -> str:
    """Map a spoken unit ("kilos", "pcs", "sachet") to its canonical form."""
    key = unit.lower().strip()
    return UNIT_ALIASES.get(key, normalize_singular_unit(key))


def convert_unit(value: float, from_unit: str, to_unit: str) -> float | None:
    """Convert between two units with a direct factor.

    Returns None when the units are not convertible (different families or
    unknown units). No multi-hop conversions.
    """
    if from_unit == to_unit:
        return value

    factor = CONVERSION_FACTORS.get(
        (normalize_singular_unit(from_unit), normalize_singular_unit(to_unit))
    )
    if factor is None:
        return None

    numerator, denominator = factor
    return value * numerator / denominator


def get_appropriate_unit(value: float, unit: str) -> ScaledValue:
    """Rescale to the friendlier unit of the same family.

    kg < 1 → g, g >= 1000 → kg, l < 1 → ml, ml >= 1000 → l.
    """
    normalized = normalize_singular_unit(unit)

    if normalized == "kg" and value < 1:
        return ScaledValue(value * 1000, "g")
    if normalized == "g" and value >= 1000:
        return ScaledValue(value / 1000, "kg")
    if normalized == "l" and value < 1:
        return ScaledValue(value * 1000, "ml")
    if normalized == "ml" and value >= 1000:
        return ScaledValue(value / 1000, "l")

    return ScaledValue(value, normalized)


def format_value_with_unit(value: float, unit: str) -> str:
    """Format for display, e.g. (1500, "g") → "1.50 kg", (500, "g") → "500 g"."""
    scaled = get_appropriate_unit(value, unit)

    if float(scaled.value).is_integer():
        formatted = str(int(scaled.value))
    else:
        formatted = f"{scaled.value:.2f}"

    return f"{formatted} {scaled.unit}"


def get_unit_display_name(unit: str) -> str:
    return UNIT_DISPLAY_NAMES.get(unit, unit)

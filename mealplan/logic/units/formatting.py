"""Display helpers for grocery quantities: practical rounding and cooking fractions."""
import math
from typing import List, Tuple

__all__ = ["round_quantity", "format_quantity"]

WHOLE_NUMBER_UNITS = ("piece", "whole", "clove", "slice", "can", "package")
SPOON_UNITS = ("cup", "tablespoon", "teaspoon")

# (decimal, fraction) pairs matched within FRACTION_TOLERANCE
COMMON_FRACTIONS: List[Tuple[float, str]] = [
    (0.125, "1/8"),
    (0.25, "1/4"),
    (0.333, "1/3"),
    (0.375, "3/8"),
    (0.5, "1/2"),
    (0.625, "5/8"),
    (0.666, "2/3"),
    (0.75, "3/4"),
    (0.875, "7/8"),
]
FRACTION_TOLERANCE = 0.01


def _round_half_up(value: float) -> float:
    return math.floor(value + 0.5)


def round_quantity(quantity: float, unit: str) -> float:
    """Round a quantity to something you can actually buy or measure."""
    if quantity <= 0:
        return 0
    if unit in WHOLE_NUMBER_UNITS:
        return math.ceil(quantity)
    if unit in SPOON_UNITS:
        rounded = _round_half_up(quantity * 4) / 4
        return 0.25 if rounded < 0.25 else rounded
    if unit == "gram":
        rounded = _round_half_up(quantity / 50) * 50
        return 50 if rounded == 0 else rounded
    if unit == "milliliter":
        return _round_half_up(quantity / 50) * 50
    if unit in ("kilogram", "liter"):
        return _round_half_up(quantity * 20) / 20
    return _round_half_up(quantity * 10) / 10


def _trim_decimals(value: float, places: int) -> str:
    text = f"{value:.{places}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_quantity(quantity: float) -> str:
    """Format a quantity using common cooking fractions, e.g. 1.5 -> '1 1/2'."""
    if quantity == 0:
        return "0"
    whole = math.floor(quantity)
    remainder = quantity - whole
    if remainder < 0.001:
        return str(int(whole))
    for decimal, fraction in COMMON_FRACTIONS:
        if abs(remainder - decimal) < FRACTION_TOLERANCE:
            return fraction if whole == 0 else f"{int(whole)} {fraction}"
    if quantity < 10:
        return _trim_decimals(quantity, 2)
    if quantity < 100:
        return _trim_decimals(quantity, 1)
    return str(int(_round_half_up(quantity)))

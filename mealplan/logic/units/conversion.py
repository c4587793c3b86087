"""Unit conversion and consolidation for grocery quantities.

Only two families are convertible: gram/kilogram and milliliter/liter.
Everything else (cup, piece, clove, ...) has no finer or coarser counterpart.
"""
from typing import Callable, Dict, Optional, Tuple

from mealplan.utilities.config import UNIT_CONVERSION_POLICY
from mealplan.utilities.constants import CONSOLIDATION_RULES
from mealplan.utilities.errors import UnitConversionError

__all__ = [
    "normalize_unit_for_consolidation", "convert_quantity", "consolidate_unit",
    "are_units_compatible", "passthrough_incompatible", "strict_incompatible",
    "get_incompatible_policy",
]

# larger unit -> (canonical smaller unit, factor)
_CANONICAL: Dict[str, Tuple[str, int]] = {
    larger: (smaller, factor) for smaller, (larger, factor) in CONSOLIDATION_RULES.items()
}

IncompatiblePolicy = Callable[[float, str, str], float]


def passthrough_incompatible(quantity: float, from_unit: str, to_unit: str) -> float:
    """Return the quantity unchanged when the units are from different families."""
    return quantity


def strict_incompatible(quantity: float, from_unit: str, to_unit: str) -> float:
    raise UnitConversionError(from_unit, to_unit)


_POLICIES: Dict[str, IncompatiblePolicy] = {
    "passthrough": passthrough_incompatible,
    "strict": strict_incompatible,
}


def get_incompatible_policy(name: Optional[str] = None) -> IncompatiblePolicy:
    key = (name or UNIT_CONVERSION_POLICY).lower()
    try:
        return _POLICIES[key]
    except KeyError:
        raise ValueError(f"Unknown unit conversion policy: {key!r}") from None


def normalize_unit_for_consolidation(unit: str) -> str:
    """Map a unit to the finest unit of its family (kilogram -> gram, liter -> milliliter)."""
    if unit in _CANONICAL:
        return _CANONICAL[unit][0]
    return unit


def are_units_compatible(a: str, b: str) -> bool:
    return normalize_unit_for_consolidation(a) == normalize_unit_for_consolidation(b)


def convert_quantity(quantity: float, from_unit: str, to_unit: str,
                     on_incompatible: Optional[IncompatiblePolicy] = None) -> float:
    """Convert a quantity between units of the same family.

    Args:
        quantity: amount expressed in from_unit.
        from_unit: source unit.
        to_unit: target unit.
        on_incompatible: policy applied when the units are not convertible;
            defaults to the configured policy (passthrough unless overridden).

    Returns:
        The quantity expressed in to_unit.
    """
    if from_unit == to_unit:
        return quantity
    if from_unit in CONSOLIDATION_RULES and CONSOLIDATION_RULES[from_unit][0] == to_unit:
        return quantity / CONSOLIDATION_RULES[from_unit][1]
    if to_unit in CONSOLIDATION_RULES and CONSOLIDATION_RULES[to_unit][0] == from_unit:
        return quantity * CONSOLIDATION_RULES[to_unit][1]
    policy = on_incompatible or get_incompatible_policy()
    return policy(quantity, from_unit, to_unit)


def consolidate_unit(quantity: float, unit: str) -> Tuple[float, str]:
    """Pick a display unit: 1000 g or more becomes kilograms, 1000 ml or more becomes liters."""
    rule = CONSOLIDATION_RULES.get(unit)
    if rule is None:
        return quantity, unit
    larger, factor = rule
    if quantity >= factor:
        return quantity / factor, larger
    return quantity, unit

"""
Gear Ratio Calculator - Constraint model for a pair of meshed gears.

This module provides the state model, its recompute rules, validation and
output formatting. It has no GUI dependencies.

Example:
    >>> from gearratio.calculator import GearState, Slot
    >>>
    >>> state = GearState()               # 10:15, ratio 1.5 locked
    >>> state.edit(Slot.LEFT, 20)          # right gear follows
    <Slot.RIGHT: 'right'>
    >>> state.right_teeth
    30
"""

from .core import (
    # State model
    GearState,

    # Slot arithmetic
    missing,

    # Rounding
    round_half_away,
    round_teeth,

    # Pure calculation functions
    calculate_actual_ratio,
    calculate_left_teeth,
    calculate_right_teeth,
)

from .validation import (
    validate_state,
    calculate_minimum_teeth,
    ratio_divergence_percent,
    Severity,
    ValidationMessage,
    ValidationResult,
)

from ..enums import Slot

from .output import (
    # Output formatters
    to_dict,
    to_json,
    to_markdown,
    to_summary,
)


__all__ = [
    # Enums
    "Slot",

    # State model
    "GearState",

    # Slot arithmetic
    "missing",

    # Rounding
    "round_half_away",
    "round_teeth",

    # Pure calculation functions
    "calculate_actual_ratio",
    "calculate_left_teeth",
    "calculate_right_teeth",

    # Validation
    "validate_state",
    "calculate_minimum_teeth",
    "ratio_divergence_percent",
    "Severity",
    "ValidationMessage",
    "ValidationResult",

    # Output formatters
    "to_dict",
    "to_json",
    "to_markdown",
    "to_summary",
]

"""
Gearratio - Gear ratio calculator for a pair of meshed gears.

Edit either gear's tooth count or the ratio; the quantity that is neither
edited nor locked is recomputed, rounding tooth counts to whole teeth.

Example:
    >>> from gearratio import GearState, Slot
    >>>
    >>> state = GearState(locked=Slot.LEFT)
    >>> state.edit(Slot.RATIO, 2.0)
    <Slot.RIGHT: 'right'>
    >>> state.right_teeth, state.actual_ratio
    (20, 2.0)

Note: All imports are lazy-loaded. The calculator can be imported without
triggering GUI (Dear PyGui) or bridge (Pydantic) imports.
"""

__version__ = "0.1.0"

# Define which names come from which submodule
# All imports are lazy to minimize startup time

_ENUMS = {"Slot"}

_CALCULATOR = {
    "GearState",
    "missing",
    "round_half_away",
    "round_teeth",
    "calculate_actual_ratio",
    "calculate_left_teeth",
    "calculate_right_teeth",
    "validate_state",
    "Severity",
    "ValidationResult",
    "to_json",
    "to_markdown",
    "to_summary",
}

_BRIDGE = {"calculate", "CalculatorInputs", "CalculatorOutput"}

_GUI = {"NumberSpinner", "SpinnerConfig", "GearCalculatorController"}

# Cache for lazy-loaded modules
_modules = {}


def __getattr__(name):
    """Lazy load submodules when their attributes are accessed."""
    global _modules

    if name in _ENUMS:
        if "enums" not in _modules:
            from . import enums
            _modules["enums"] = enums
        return getattr(_modules["enums"], name)

    if name in _CALCULATOR:
        if "calculator" not in _modules:
            from . import calculator
            _modules["calculator"] = calculator
        return getattr(_modules["calculator"], name)

    if name in _BRIDGE:
        if "bridge" not in _modules:
            from .calculator import bridge
            _modules["bridge"] = bridge
        return getattr(_modules["bridge"], name)

    if name in _GUI:
        if "gui" not in _modules:
            from . import gui
            _modules["gui"] = gui
        return getattr(_modules["gui"], name)

    raise AttributeError(f"module 'gearratio' has no attribute {name!r}")


__all__ = [
    # Version
    "__version__",

    # Enums (lazy loaded from enums)
    "Slot",

    # Calculator (lazy loaded from calculator)
    "GearState",
    "missing",
    "round_half_away",
    "round_teeth",
    "calculate_actual_ratio",
    "calculate_left_teeth",
    "calculate_right_teeth",
    "validate_state",
    "Severity",
    "ValidationResult",
    "to_json",
    "to_markdown",
    "to_summary",

    # Bridge (lazy loaded from calculator.bridge)
    "calculate",
    "CalculatorInputs",
    "CalculatorOutput",

    # GUI model (lazy loaded from gui, no Dear PyGui import)
    "NumberSpinner",
    "SpinnerConfig",
    "GearCalculatorController",
]

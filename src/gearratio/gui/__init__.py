"""
Gearratio GUI - spinner inputs, controller and the Dear PyGui window.

The spinner and controller are toolkit independent. The window in
`gearratio.gui.app` is imported on demand so the rest of the package works
without Dear PyGui installed.
"""

from .spinner import (
    NumericKind,
    IntegerKind,
    RealKind,
    INTEGER,
    REAL,
    SpinnerConfig,
    SpinnerViewState,
    NumberSpinner,
    TEETH_FIELD,
    RATIO_FIELD,
    FIELD_CONFIGS,
)
from .controller import GearCalculatorController

__all__ = [
    "NumericKind",
    "IntegerKind",
    "RealKind",
    "INTEGER",
    "REAL",
    "SpinnerConfig",
    "SpinnerViewState",
    "NumberSpinner",
    "TEETH_FIELD",
    "RATIO_FIELD",
    "FIELD_CONFIGS",
    "GearCalculatorController",
]

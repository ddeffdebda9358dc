"""
Constants for gear ratio calculations and the spinner inputs.

This module centralizes all numerical constants used in the calculator,
validation and GUI modules. Each constant is documented with its source
(engineering practice or UI convention).

MODIFICATION GUIDELINES:
- Add new constants here rather than hardcoding in functions
- Keep field bounds and steps in sync with FIELD_CONFIGS consumers
- Always include units in constant names where a unit applies (_DEG, _PERCENT, _PX)

Constants are grouped by category:
- Session defaults: State created at startup
- Field configuration: Step, bounds and precision per editable field
- Gestures: Scroll and drag translation
- Engineering practice: Validation thresholds
"""

from typing import Optional, Tuple

# =============================================================================
# Session Defaults
# =============================================================================

DEFAULT_LEFT_TEETH: int = 10
DEFAULT_RIGHT_TEETH: int = 15
DEFAULT_GIVEN_RATIO: float = 1.5  # right / left

# A gear needs at least one tooth
MIN_TEETH: int = 1

# =============================================================================
# Field Configuration
# =============================================================================

TEETH_STEP: int = 1
TEETH_MIN: int = MIN_TEETH
TEETH_MAX: Optional[int] = None  # Unbounded
TEETH_PRECISION: int = 0

RATIO_STEP: float = 0.1
RATIO_MIN: float = 0.1
RATIO_MAX: float = 100.0
RATIO_PRECISION: int = 2  # Decimal places shown in the given-ratio field

# Decimal places shown for the derived actual ratio
ACTUAL_RATIO_PRECISION: int = 3

# Peek offsets shown around each field, top to bottom (steps above/below)
PEEK_OFFSETS_ABOVE: Tuple[int, ...] = (2, 1)
PEEK_OFFSETS_BELOW: Tuple[int, ...] = (-1, -2)

# =============================================================================
# Gestures
# =============================================================================

# Vertical drag distance per step. Dragging up increases the value.
DRAG_PIXELS_PER_STEP: float = 12.0

# Steps applied per mouse-wheel notch
SCROLL_STEPS_PER_NOTCH: int = 1

# =============================================================================
# Engineering Practice (Validation)
# =============================================================================

# Relative divergence of actual vs given ratio worth reporting
RATIO_DIVERGENCE_REPORT_PERCENT: float = 0.01

# Standard pressure angle used for the undercut check (ISO 53 basic rack)
DEFAULT_PRESSURE_ANGLE_DEG: float = 20.0

# Absolute tolerance for the actual_ratio == right / left invariant
ACTUAL_RATIO_TOLERANCE: float = 1e-12

# =============================================================================
# Output
# =============================================================================

SCHEMA_VERSION = "1.0"

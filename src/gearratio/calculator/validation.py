"""
Gear Ratio Calculator - Validation Rules

Engineering checks for a gear pair:
- Internal consistency (actual ratio matches the tooth counts)
- Input bounds (tooth counts, given ratio)
- Rounding divergence between given and actual ratio
- Undercut risk for small tooth counts
- Hunting tooth (common factor between tooth counts)

Findings are informational unless the state is inconsistent; the GUI
displays them, the headless bridge returns them.
"""

from dataclasses import dataclass, field
from enum import Enum
from math import gcd, sin, radians
from typing import List, Optional

from ..enums import Slot
from .constants import (
    ACTUAL_RATIO_TOLERANCE,
    DEFAULT_PRESSURE_ANGLE_DEG,
    MIN_TEETH,
    RATIO_DIVERGENCE_REPORT_PERCENT,
    RATIO_MAX,
    RATIO_MIN,
)
from .core import GearState


def calculate_minimum_teeth(pressure_angle_deg: float) -> int:
    """
    Calculate minimum teeth without undercut for given pressure angle.

    Formula: z_min = 2 / sin²(α)

    Args:
        pressure_angle_deg: Pressure angle in degrees

    Returns:
        Minimum number of teeth (rounded up)
    """
    sin_alpha = sin(radians(pressure_angle_deg))
    z_min = 2.0 / (sin_alpha ** 2)
    return int(z_min) + 1  # Round up for safety


def ratio_divergence_percent(state: GearState) -> float:
    """Relative difference between actual and given ratio, in percent."""
    return abs(state.actual_ratio - state.given_ratio) / state.given_ratio * 100.0


class Severity(Enum):
    """Validation message severity"""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class ValidationMessage:
    """A single validation finding"""
    severity: Severity
    code: str
    message: str
    suggestion: Optional[str] = None


@dataclass
class ValidationResult:
    """Complete validation result"""
    valid: bool  # True if no errors
    messages: List[ValidationMessage] = field(default_factory=list)

    @property
    def errors(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.WARNING]

    @property
    def infos(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.INFO]


def validate_state(
    state: GearState,
    pressure_angle_deg: float = DEFAULT_PRESSURE_ANGLE_DEG
) -> ValidationResult:
    """
    Validate a gear pair against consistency and engineering rules.

    Args:
        state: Current gear state
        pressure_angle_deg: Pressure angle used for the undercut check

    Returns:
        ValidationResult with all findings
    """
    messages: List[ValidationMessage] = []

    # Tooth bounds first; the remaining checks divide by the tooth counts
    messages.extend(_validate_teeth_bounds(state))
    if not messages:
        messages.extend(_validate_ratio_bounds(state))
        messages.extend(_validate_actual_ratio(state))
        messages.extend(_validate_divergence(state))
        messages.extend(_validate_undercut(state, pressure_angle_deg))
        messages.extend(_validate_common_factor(state))

    has_errors = any(m.severity == Severity.ERROR for m in messages)

    return ValidationResult(
        valid=not has_errors,
        messages=messages
    )


def _validate_teeth_bounds(state: GearState) -> List[ValidationMessage]:
    """Each gear needs at least one tooth"""
    messages = []
    for slot, teeth in ((Slot.LEFT, state.left_teeth), (Slot.RIGHT, state.right_teeth)):
        if teeth < MIN_TEETH:
            messages.append(ValidationMessage(
                severity=Severity.ERROR,
                code="TEETH_BELOW_MINIMUM",
                message=f"{slot.value.capitalize()} gear has {teeth} teeth",
                suggestion=f"A gear needs at least {MIN_TEETH} tooth"
            ))
    return messages


def _validate_ratio_bounds(state: GearState) -> List[ValidationMessage]:
    """Given ratio must lie within the field bounds"""
    if RATIO_MIN <= state.given_ratio <= RATIO_MAX:
        return []
    return [ValidationMessage(
        severity=Severity.ERROR,
        code="RATIO_OUT_OF_RANGE",
        message=f"Given ratio {state.given_ratio:g} is outside {RATIO_MIN:g}..{RATIO_MAX:g}",
        suggestion=f"Use a ratio between {RATIO_MIN:g} and {RATIO_MAX:g}"
    )]


def _validate_actual_ratio(state: GearState) -> List[ValidationMessage]:
    """Actual ratio must match the tooth counts"""
    expected = state.right_teeth / state.left_teeth
    if abs(state.actual_ratio - expected) <= ACTUAL_RATIO_TOLERANCE:
        return []
    return [ValidationMessage(
        severity=Severity.ERROR,
        code="ACTUAL_RATIO_STALE",
        message=f"Actual ratio {state.actual_ratio!r} does not match "
                f"{state.right_teeth}/{state.left_teeth} = {expected:.6g}",
        suggestion="Recompute the state after changing tooth counts"
    )]


def _validate_divergence(state: GearState) -> List[ValidationMessage]:
    """Report when whole tooth counts cannot realize the given ratio"""
    divergence = ratio_divergence_percent(state)
    if divergence <= RATIO_DIVERGENCE_REPORT_PERCENT:
        return []
    return [ValidationMessage(
        severity=Severity.INFO,
        code="RATIO_DIVERGENCE",
        message=f"Actual ratio {state.actual_ratio:.3f} differs from given "
                f"ratio {state.given_ratio:g} by {divergence:.2f}%",
        suggestion="Lock the ratio and change a gear to find a closer tooth pair"
    )]


def _validate_undercut(state: GearState, pressure_angle_deg: float) -> List[ValidationMessage]:
    """Small gears are undercut when cut with a standard rack"""
    messages = []
    z_min = calculate_minimum_teeth(pressure_angle_deg)
    for slot, teeth in ((Slot.LEFT, state.left_teeth), (Slot.RIGHT, state.right_teeth)):
        if teeth < z_min:
            messages.append(ValidationMessage(
                severity=Severity.INFO,
                code=f"{slot.name}_TEETH_UNDERCUT",
                message=f"{slot.value.capitalize()} gear ({teeth} teeth) is below "
                        f"{z_min} teeth, undercut expected at {pressure_angle_deg:g}°",
                suggestion="Use more teeth or a profile-shifted gear"
            ))
    return messages


def _validate_common_factor(state: GearState) -> List[ValidationMessage]:
    """Tooth counts with a common factor repeat the same tooth contacts"""
    factor = gcd(state.left_teeth, state.right_teeth)
    if factor <= 1:
        return []
    left = state.left_teeth // factor
    right = state.right_teeth // factor
    return [ValidationMessage(
        severity=Severity.INFO,
        code="COMMON_FACTOR",
        message=f"Tooth counts share a factor of {factor} (reduced ratio {left}:{right})",
        suggestion="Change one gear by a tooth for a hunting-tooth pair with more even wear"
    )]

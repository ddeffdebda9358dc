"""
Gear Ratio Calculator - Core Calculations

Constraint model for a pair of meshed gears. Three quantities are linked:
left teeth, right teeth and the ratio (right / left). One of them is locked
by the user; editing one of the other two recomputes the third.

There are three modes of operation:
- change one gear, keeping the ratio fixed
    -> the other gear is adapted; the actual ratio can diverge from the
       given ratio because tooth counts are whole numbers
- change one gear, keeping the other gear fixed
    -> the ratio is adapted
- change the ratio, keeping one gear fixed
    -> the other gear is adapted; the actual ratio moves in steps

Rounding policy: tooth counts are rounded half away from zero
(10.5 -> 11), never with Python's round() which rounds half to even.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from math import isfinite
from typing import Dict, FrozenSet, Tuple, Union

from ..enums import Slot
from .constants import (
    DEFAULT_LEFT_TEETH,
    DEFAULT_RIGHT_TEETH,
    DEFAULT_GIVEN_RATIO,
    MIN_TEETH,
)

logger = logging.getLogger(__name__)

Number = Union[int, float]

# Third slot for each unordered pair of distinct slots
_MISSING: Dict[FrozenSet[Slot], Slot] = {
    frozenset((Slot.LEFT, Slot.RATIO)): Slot.RIGHT,
    frozenset((Slot.LEFT, Slot.RIGHT)): Slot.RATIO,
    frozenset((Slot.RATIO, Slot.RIGHT)): Slot.LEFT,
}


def missing(a: Slot, b: Slot) -> Slot:
    """
    Get the slot that is neither a nor b.

    Args:
        a: First slot (usually the edited one)
        b: Second slot (usually the locked one), must differ from a

    Returns:
        The remaining slot

    Raises:
        AssertionError: if a == b. Editing the locked slot is a programming
            error; the GUI makes locked fields read-only.
    """
    assert a != b, f"missing() needs two distinct slots, got {a.name} twice"
    return _MISSING[frozenset((a, b))]


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if not isfinite(value):
        raise ValueError(f"Cannot round non-finite value {value!r}")
    # Decimal(float) is the exact binary value, so 10.5 stays 10.5
    return int(Decimal(value).to_integral_value(rounding=ROUND_HALF_UP))


def round_teeth(value: Number) -> int:
    """Round a tooth count to a whole number of at least one tooth."""
    return max(MIN_TEETH, round_half_away(float(value)))


def calculate_actual_ratio(left_teeth: int, right_teeth: int) -> float:
    """Ratio realized by the tooth counts (right / left), no rounding."""
    return right_teeth / left_teeth


def calculate_left_teeth(right_teeth: int, given_ratio: float) -> int:
    """Left teeth closest to the given ratio for a fixed right gear."""
    return round_teeth(right_teeth / given_ratio)


def calculate_right_teeth(left_teeth: int, given_ratio: float) -> int:
    """Right teeth closest to the given ratio for a fixed left gear."""
    return round_teeth(left_teeth * given_ratio)


def _check_ratio(value: Number) -> float:
    ratio = float(value)
    if not (isfinite(ratio) and ratio > 0):
        raise ValueError(f"Given ratio must be a positive number, got {value!r}")
    return ratio


def _check_teeth(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    if value < MIN_TEETH:
        raise ValueError(f"{name} must be at least {MIN_TEETH}, got {value}")
    return value


def _resolve(
    free: Slot,
    left_teeth: int,
    right_teeth: int,
    given_ratio: float
) -> Tuple[int, int, float]:
    """
    Values of a gear pair after recomputing the free slot.

    Nothing is written back, so a failure leaves the caller's state intact.

    Returns:
        (left_teeth, right_teeth, actual_ratio)

    Raises:
        ValueError: if a recomputed value is not finite
    """
    if free is Slot.LEFT:
        left_teeth = calculate_left_teeth(right_teeth, given_ratio)
    elif free is Slot.RIGHT:
        right_teeth = calculate_right_teeth(left_teeth, given_ratio)
    # The actual ratio may differ from the given one due to rounding
    actual_ratio = calculate_actual_ratio(left_teeth, right_teeth)
    if not (isfinite(actual_ratio) and actual_ratio > 0):
        raise ValueError(f"{right_teeth}/{left_teeth} does not give a usable ratio")
    return left_teeth, right_teeth, actual_ratio


@dataclass
class GearState:
    """
    Current values of a two-gear system.

    Attributes:
        left_teeth: Teeth on the driving gear (>= 1)
        right_teeth: Teeth on the driven gear (>= 1)
        given_ratio: User-specified target ratio (> 0)
        locked: Slot pinned by the user; never edited, never recomputed
        actual_ratio: right_teeth / left_teeth. Always derived from the teeth,
            refreshed by every recompute.
    """
    left_teeth: int = DEFAULT_LEFT_TEETH
    right_teeth: int = DEFAULT_RIGHT_TEETH
    given_ratio: float = DEFAULT_GIVEN_RATIO
    locked: Slot = Slot.RATIO
    actual_ratio: float = field(init=False)

    def __post_init__(self):
        _check_teeth("left_teeth", self.left_teeth)
        _check_teeth("right_teeth", self.right_teeth)
        self.given_ratio = _check_ratio(self.given_ratio)
        self.locked = Slot.parse(self.locked)
        self.compute_ratio()

    def value(self, slot: Slot) -> Number:
        """Current value of an editable slot (the ratio slot is the given ratio)."""
        if slot is Slot.LEFT:
            return self.left_teeth
        if slot is Slot.RIGHT:
            return self.right_teeth
        return self.given_ratio

    # --- recompute rules ---

    def compute_ratio(self) -> None:
        self.actual_ratio = calculate_actual_ratio(self.left_teeth, self.right_teeth)

    def recompute_from(self, edited: Slot) -> Slot:
        """
        Recompute the slot that is neither edited nor locked.

        Args:
            edited: Slot the user just changed

        Returns:
            The slot that was recomputed
        """
        free = missing(edited, self.locked)
        self.left_teeth, self.right_teeth, self.actual_ratio = _resolve(
            free, self.left_teeth, self.right_teeth, self.given_ratio
        )
        logger.debug(
            f"Recomputed {free.value} after {edited.value} edit: "
            f"{self.left_teeth}:{self.right_teeth} actual={self.actual_ratio:.6g}"
        )
        return free

    # --- transitions ---

    def edit(self, slot: Slot, value: Number) -> Slot:
        """
        Apply a confirmed edit and recompute the free slot.

        Tooth counts are rounded half away from zero and clamped to at
        least one tooth. The given ratio must be positive. The state is only
        changed when every recomputed value is valid.

        Args:
            slot: Edited slot, must not be the locked one
            value: New value

        Returns:
            The slot that was recomputed

        Raises:
            AssertionError: if slot is the locked slot
            ValueError: if the value or a value derived from it is not a
                finite number, or the ratio is <= 0
        """
        assert slot != self.locked, f"Cannot edit locked slot {slot.name}"
        left_teeth, right_teeth, given_ratio = self.left_teeth, self.right_teeth, self.given_ratio
        if slot is Slot.LEFT:
            left_teeth = round_teeth(value)
        elif slot is Slot.RIGHT:
            right_teeth = round_teeth(value)
        else:
            given_ratio = _check_ratio(value)

        free = missing(slot, self.locked)
        left_teeth, right_teeth, actual_ratio = _resolve(free, left_teeth, right_teeth, given_ratio)

        self.left_teeth = left_teeth
        self.right_teeth = right_teeth
        self.given_ratio = given_ratio
        self.actual_ratio = actual_ratio
        logger.debug(
            f"Edit {slot.value} = {value!r}, recomputed {free.value}: "
            f"{self.left_teeth}:{self.right_teeth} actual={self.actual_ratio:.6g}"
        )
        return free

    def set_locked(self, slot: Slot) -> None:
        """Pin another slot. Values are left untouched; nothing is recomputed."""
        self.locked = Slot.parse(slot)
        logger.debug(f"Locked {self.locked.value}")

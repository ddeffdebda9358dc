"""Type-safe enums for the gear ratio calculator."""

from enum import Enum
from typing import Union


class Slot(Enum):
    """One of the three linked quantities of a gear pair.

    The left gear is the driver (motor), the right gear is the driven wheel,
    and the ratio is right teeth / left teeth.
    """
    LEFT = "left"    # Teeth on the driving gear
    RATIO = "ratio"  # Given (target) ratio
    RIGHT = "right"  # Teeth on the driven gear

    @classmethod
    def parse(cls, value: Union[str, "Slot"]) -> "Slot":
        """Coerce a slot name (case-insensitive) or Slot to a Slot."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            names = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown slot {value!r} (expected one of: {names})") from None

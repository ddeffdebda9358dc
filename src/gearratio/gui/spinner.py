"""
Numeric spinner input, independent of any GUI toolkit.

A spinner presents one number as editable text and turns user gestures
(confirmed text entry, mouse wheel, vertical drag) into value changes.
Confirmed changes are reported through a callback; the toolkit layer only
forwards raw events and renders `text` and `peek()`.

One spinner class serves both integer and real values. The value type is
described by a NumericKind (parse, format, coerce, quantize).
"""

import logging
from dataclasses import dataclass, field
from math import isfinite
from typing import Callable, Dict, Optional, Tuple, Union

from ..calculator.constants import (
    DRAG_PIXELS_PER_STEP,
    RATIO_MAX,
    RATIO_MIN,
    RATIO_PRECISION,
    RATIO_STEP,
    SCROLL_STEPS_PER_NOTCH,
    TEETH_MAX,
    TEETH_MIN,
    TEETH_PRECISION,
    TEETH_STEP,
)
from ..calculator.core import round_half_away
from ..enums import Slot

logger = logging.getLogger(__name__)

Number = Union[int, float]
ChangeCallback = Callable[[Number], None]


class NumericKind:
    """Capabilities a spinner needs from its value type."""

    name = "number"

    def parse(self, text: str) -> Number:
        """Parse user text. Raises ValueError for anything but a finite number."""
        value = float(text.strip())
        if not isfinite(value):
            raise ValueError(f"Not a finite number: {text!r}")
        return self.coerce(value)

    def coerce(self, value: Number) -> Number:
        raise NotImplementedError

    def quantize(self, value: Number, precision: int) -> Number:
        raise NotImplementedError

    def format(self, value: Number, precision: int) -> str:
        raise NotImplementedError


class IntegerKind(NumericKind):
    """Whole numbers. Text like "12.6" is accepted and rounded half away from zero."""

    name = "integer"

    def coerce(self, value: Number) -> int:
        return round_half_away(float(value))

    def quantize(self, value: Number, precision: int) -> int:
        return self.coerce(value)

    def format(self, value: Number, precision: int) -> str:
        return str(int(value))


class RealKind(NumericKind):
    """Floating point numbers shown with a fixed number of decimals."""

    name = "real"

    def coerce(self, value: Number) -> float:
        return float(value)

    def quantize(self, value: Number, precision: int) -> float:
        # Keeps repeated 0.1 steps from drifting (1.5 + 0.1 != 1.6 in binary)
        return round(float(value), precision)

    def format(self, value: Number, precision: int) -> str:
        return f"{value:.{precision}f}"


INTEGER = IntegerKind()
REAL = RealKind()


@dataclass(frozen=True)
class SpinnerConfig:
    """Per-field spinner configuration."""
    kind: NumericKind
    step: Number
    min_value: Optional[Number] = None  # None = unbounded
    max_value: Optional[Number] = None
    precision: int = 0
    drag_pixels_per_step: float = DRAG_PIXELS_PER_STEP

    def clamp(self, value: Number) -> Number:
        if self.min_value is not None and value < self.min_value:
            value = self.min_value
        if self.max_value is not None and value > self.max_value:
            value = self.max_value
        return value


TEETH_FIELD = SpinnerConfig(
    kind=INTEGER,
    step=TEETH_STEP,
    min_value=TEETH_MIN,
    max_value=TEETH_MAX,
    precision=TEETH_PRECISION,
)

RATIO_FIELD = SpinnerConfig(
    kind=REAL,
    step=RATIO_STEP,
    min_value=RATIO_MIN,
    max_value=RATIO_MAX,
    precision=RATIO_PRECISION,
)

FIELD_CONFIGS: Dict[Slot, SpinnerConfig] = {
    Slot.LEFT: TEETH_FIELD,
    Slot.RATIO: RATIO_FIELD,
    Slot.RIGHT: TEETH_FIELD,
}


@dataclass
class SpinnerViewState:
    """Transient per-widget state. Never part of the gear model."""
    drag_offset: float = 0.0
    # Last known screen rect (x, y, width, height), set by the toolkit layer
    bounds: Optional[Tuple[float, float, float, float]] = None


@dataclass
class NumberSpinner:
    """
    Editable number with text sync, parse/revert and gesture stepping.

    Attributes:
        config: Step, bounds, precision and value kind
        value: Last valid value
        text: Text shown in the input (kept in sync with value)
        interactive: False for a locked field; all input is ignored
        on_change: Called with the new value after every accepted change
        view: Drag accumulation and layout bounds
    """
    config: SpinnerConfig
    value: Number
    interactive: bool = True
    on_change: Optional[ChangeCallback] = None
    text: str = ""
    view: SpinnerViewState = field(default_factory=SpinnerViewState)

    def __post_init__(self):
        self.value = self.config.kind.coerce(self.config.clamp(self.value))
        self.text = self.format(self.value)

    def format(self, value: Number) -> str:
        return self.config.kind.format(value, self.config.precision)

    def sync(self, value: Number) -> None:
        """Take a value from the model without firing on_change."""
        self.value = self.config.kind.coerce(value)
        self.text = self.format(self.value)

    def commit_text(self, text: str) -> bool:
        """
        Accept confirmed text (enter pressed or focus lost).

        Unparsable text reverts to the last valid value, as does a value that
        on_change rejects with ValueError. Values outside the bounds are
        clamped.

        Returns:
            True if the value was accepted
        """
        if not self.interactive:
            self.text = self.format(self.value)
            return False
        try:
            parsed = self.config.kind.parse(text)
        except ValueError:
            self.text = self.format(self.value)
            return False
        return self._accept(self.config.clamp(parsed))

    def step_by(self, steps: int) -> bool:
        """Move the value by whole steps. Returns True if the value changed."""
        if not self.interactive or steps == 0:
            return False
        target = self._stepped(steps)
        if target == self.value:
            return False
        return self._accept(target)

    def scroll(self, delta: float) -> bool:
        """One step per wheel notch: up increases, down decreases."""
        if delta > 0:
            return self.step_by(SCROLL_STEPS_PER_NOTCH)
        if delta < 0:
            return self.step_by(-SCROLL_STEPS_PER_NOTCH)
        return False

    def drag(self, dy: float) -> bool:
        """
        Accumulate vertical drag distance and step once it crosses the threshold.

        Args:
            dy: Pointer movement since the last call, in pixels (down is positive)

        Returns:
            True if the value changed
        """
        if not self.interactive:
            return False
        self.view.drag_offset += dy
        steps = int(self.view.drag_offset / self.config.drag_pixels_per_step)
        if steps == 0:
            return False
        self.view.drag_offset = 0.0
        # Dragging up (negative dy) increases the value
        return self.step_by(-steps)

    def end_drag(self) -> None:
        self.view.drag_offset = 0.0

    def peek(self, steps: int) -> str:
        """Formatted preview of the value `steps` steps away, clamped."""
        return self.format(self._stepped(steps))

    def _stepped(self, steps: int) -> Number:
        cfg = self.config
        return cfg.kind.quantize(cfg.clamp(self.value + steps * cfg.step), cfg.precision)

    def _accept(self, value: Number) -> bool:
        previous = self.value
        self.value = self.config.kind.coerce(value)
        self.text = self.format(self.value)
        if self.on_change is None:
            return True
        try:
            self.on_change(self.value)
        except ValueError as e:
            # The model refused the value; show the last accepted one again
            logger.warning(f"Rejected {self.config.kind.name} value {self.value!r}: {e}")
            self.sync(previous)
            return False
        return True

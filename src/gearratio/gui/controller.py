"""
Controller tying the spinners to the gear model.

Owns the single GearState of a session and one NumberSpinner per editable
slot. Confirmed spinner changes become model edits; after every edit all
spinners are re-synced from the model, since the free slot has changed.
The toolkit layer renders from here and subscribes for refreshes.
"""

import logging
from typing import Callable, Dict, List, Optional

from ..calculator.constants import ACTUAL_RATIO_PRECISION
from ..calculator.core import GearState, Number
from ..enums import Slot
from .spinner import FIELD_CONFIGS, NumberSpinner

logger = logging.getLogger(__name__)

Listener = Callable[[GearState], None]


def _bound(limit: Optional[Number]) -> str:
    return "unbounded" if limit is None else f"{limit:g}"


class GearCalculatorController:
    """Routes spinner edits and lock changes into a GearState."""

    def __init__(self, state: Optional[GearState] = None) -> None:
        """
        Args:
            state: Session state; defaults to a fresh GearState

        Raises:
            ValueError: if a value of the state lies outside its field's
                bounds, since the spinner would show a different number
        """
        self.state = state if state is not None else GearState()
        self._listeners: List[Listener] = []
        self._spinners: Dict[Slot, NumberSpinner] = {}
        for slot in Slot:
            cfg = FIELD_CONFIGS[slot]
            value = self.state.value(slot)
            if cfg.clamp(value) != value:
                raise ValueError(
                    f"{slot.value} value {value:g} is outside the field range "
                    f"{_bound(cfg.min_value)}..{_bound(cfg.max_value)}"
                )
        for slot in Slot:
            self._spinners[slot] = NumberSpinner(
                config=FIELD_CONFIGS[slot],
                value=self.state.value(slot),
                interactive=slot is not self.state.locked,
                on_change=self._edit_callback(slot),
            )

    def _edit_callback(self, slot: Slot) -> Callable[[Number], None]:
        def on_change(value: Number) -> None:
            self.on_edit(slot, value)
        return on_change

    def spinner(self, slot: Slot) -> NumberSpinner:
        return self._spinners[slot]

    @property
    def locked(self) -> Slot:
        return self.state.locked

    @property
    def actual_ratio_text(self) -> str:
        return f"{self.state.actual_ratio:.{ACTUAL_RATIO_PRECISION}f}"

    def on_edit(self, slot: Slot, value: Number) -> Slot:
        """Apply a confirmed edit from a spinner. Returns the recomputed slot."""
        free = self.state.edit(slot, value)
        logger.info(
            f"{slot.value} -> {value}: {self.state.left_teeth}:{self.state.right_teeth} "
            f"(given {self.state.given_ratio:g}, actual {self.actual_ratio_text})"
        )
        self._sync_spinners()
        self._notify()
        return free

    def set_locked(self, slot: Slot) -> None:
        """Lock another slot. Only interactivity changes, no values."""
        self.state.set_locked(slot)
        for other, spinner in self._spinners.items():
            spinner.interactive = other is not self.state.locked
            spinner.end_drag()
        self._notify()

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def _sync_spinners(self) -> None:
        for slot, spinner in self._spinners.items():
            spinner.sync(self.state.value(slot))

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.state)

"""
Dear PyGui window for the gear ratio calculator.

Builds three columns (left teeth, ratio, right teeth) from a
GearCalculatorController and forwards widget events to its spinners:
- text entry commits on enter or when the input loses focus after an edit
- mouse wheel over a field steps it
- left-button drag over a field adjusts it through the drag accumulator

Callbacks are queued by Dear PyGui and run on the main thread between
frames (manual callback management), so the model is only ever touched
from one thread.
"""

import logging
from functools import wraps
from typing import Dict, Optional

import dearpygui.dearpygui as dpg  # type: ignore

from ..calculator.constants import PEEK_OFFSETS_ABOVE, PEEK_OFFSETS_BELOW
from ..calculator.core import GearState
from ..enums import Slot
from .controller import GearCalculatorController

logger = logging.getLogger(__name__)

ROOT_TAG = "__gearratio_root__"
ACTUAL_RATIO_TAG = "__gearratio_actual_ratio__"

WEAK_TEXT_COLOR = (140, 140, 140, 255)
INPUT_WIDTH = 80

COLUMN_LABELS: Dict[Slot, str] = {
    Slot.LEFT: "Left Teeth",
    Slot.RATIO: "Given Ratio: ",
    Slot.RIGHT: "Right Teeth",
}


def _tag(slot: Slot, part: str) -> str:
    return f"__gearratio_{slot.value}_{part}__"


def _guarded(method):
    """Log and swallow failures inside widget callbacks so the window survives."""
    @wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except Exception:
            logger.exception(f"{method.__name__} failed")
    return wrapper


class GearRatioWindow:
    """Dear PyGui rendering of a GearCalculatorController."""

    def __init__(
        self,
        controller: GearCalculatorController,
        *,
        width: int = 520,
        height: int = 300,
        title: str = "Gear Ratio Calculator",
    ) -> None:
        self._controller = controller
        self._width = width
        self._height = height
        self._title = title
        self._drag_slot: Optional[Slot] = None
        self._drag_last_dy = 0.0

        dpg.create_context()
        dpg.configure_app(manual_callback_management=True)
        dpg.create_viewport(title=self._title, width=self._width, height=self._height)
        dpg.setup_dearpygui()

        self._build()
        self._controller.subscribe(self.refresh)
        self.refresh()

    # ---- layout ----

    def _build(self) -> None:
        with dpg.window(tag=ROOT_TAG, label=self._title, no_collapse=True):
            dpg.add_text(self._title)
            with dpg.group(horizontal=True, horizontal_spacing=24):
                self._build_gear_column(Slot.LEFT)
                self._build_ratio_column()
                self._build_gear_column(Slot.RIGHT)
        dpg.set_primary_window(ROOT_TAG, True)

        with dpg.handler_registry():
            dpg.add_mouse_wheel_handler(callback=self._on_wheel)
            dpg.add_mouse_click_handler(button=dpg.mvMouseButton_Left, callback=self._on_press)
            dpg.add_mouse_drag_handler(button=dpg.mvMouseButton_Left, callback=self._on_drag)
            dpg.add_mouse_release_handler(button=dpg.mvMouseButton_Left, callback=self._on_release)

    def _build_gear_column(self, slot: Slot) -> None:
        with dpg.group():
            dpg.add_text(COLUMN_LABELS[slot])
            self._build_spinner(slot)
            self._build_lock(slot)

    def _build_ratio_column(self) -> None:
        with dpg.group():
            with dpg.group(horizontal=True):
                dpg.add_text(COLUMN_LABELS[Slot.RATIO])
                self._build_spinner(Slot.RATIO)
            with dpg.group(horizontal=True):
                dpg.add_text("Actual Ratio: ")
                dpg.add_text("", tag=ACTUAL_RATIO_TAG)
            self._build_lock(Slot.RATIO)

    def _build_spinner(self, slot: Slot) -> None:
        spinner = self._controller.spinner(slot)
        with dpg.group(tag=_tag(slot, "group")):
            for n in PEEK_OFFSETS_ABOVE:
                dpg.add_text("", tag=_tag(slot, f"peek{n}"), color=WEAK_TEXT_COLOR)
            dpg.add_input_text(
                tag=_tag(slot, "input"),
                default_value=spinner.text,
                width=INPUT_WIDTH,
                on_enter=True,
                callback=self._on_text_commit,
                user_data=slot,
            )
            for n in PEEK_OFFSETS_BELOW:
                dpg.add_text("", tag=_tag(slot, f"peek{n}"), color=WEAK_TEXT_COLOR)

        # Focus lost after typing counts as a confirmed edit too
        with dpg.item_handler_registry(tag=_tag(slot, "handlers")):
            dpg.add_item_deactivated_after_edit_handler(
                callback=self._on_text_commit_deactivated, user_data=slot
            )
        dpg.bind_item_handler_registry(_tag(slot, "input"), _tag(slot, "handlers"))

    def _build_lock(self, slot: Slot) -> None:
        dpg.add_selectable(
            label="locked",
            tag=_tag(slot, "lock"),
            default_value=slot is self._controller.locked,
            width=INPUT_WIDTH,
            callback=self._on_lock,
            user_data=slot,
        )

    # ---- sync ----

    def refresh(self, _state: Optional[GearState] = None) -> None:
        """Push controller values into every widget."""
        for slot in Slot:
            spinner = self._controller.spinner(slot)
            dpg.set_value(_tag(slot, "input"), spinner.text)
            dpg.configure_item(_tag(slot, "input"), readonly=not spinner.interactive)
            dpg.set_value(_tag(slot, "lock"), slot is self._controller.locked)
            for n in PEEK_OFFSETS_ABOVE + PEEK_OFFSETS_BELOW:
                dpg.set_value(_tag(slot, f"peek{n}"), spinner.peek(n))
        dpg.set_value(ACTUAL_RATIO_TAG, self._controller.actual_ratio_text)

    def _update_bounds(self) -> None:
        for slot in Slot:
            group = _tag(slot, "group")
            x, y = dpg.get_item_rect_min(group)
            w, h = dpg.get_item_rect_size(group)
            self._controller.spinner(slot).view.bounds = (x, y, w, h)

    def _slot_under_pointer(self) -> Optional[Slot]:
        px, py = dpg.get_mouse_pos(local=False)
        for slot in Slot:
            bounds = self._controller.spinner(slot).view.bounds
            if bounds is None:
                continue
            x, y, w, h = bounds
            if x <= px <= x + w and y <= py <= y + h:
                return slot
        return None

    # ---- callbacks ----

    @_guarded
    def _on_text_commit(self, sender, app_data, user_data) -> None:
        self._controller.spinner(user_data).commit_text(str(app_data))
        # Re-render even when the text was rejected, to show the reverted value
        self.refresh()

    @_guarded
    def _on_text_commit_deactivated(self, sender, app_data, user_data) -> None:
        text = dpg.get_value(_tag(user_data, "input"))
        self._on_text_commit(sender, text, user_data)

    @_guarded
    def _on_lock(self, sender, app_data, user_data) -> None:
        if app_data:
            self._controller.set_locked(user_data)
        # Clicking the active lock again keeps it selected: one slot is always locked
        self.refresh()

    @_guarded
    def _on_wheel(self, sender, app_data, user_data) -> None:
        slot = self._slot_under_pointer()
        if slot is not None and self._controller.spinner(slot).scroll(float(app_data)):
            logger.debug(f"Scrolled {slot.value}")

    @_guarded
    def _on_press(self, sender, app_data, user_data) -> None:
        slot = self._slot_under_pointer()
        self._drag_slot = slot if slot is not None and self._controller.spinner(slot).interactive else None
        self._drag_last_dy = 0.0

    @_guarded
    def _on_drag(self, sender, app_data, user_data) -> None:
        if self._drag_slot is None:
            return
        # app_data is [button, dx, dy], measured from where the drag started
        total_dy = float(app_data[2])
        dy = total_dy - self._drag_last_dy
        self._drag_last_dy = total_dy
        self._controller.spinner(self._drag_slot).drag(dy)

    @_guarded
    def _on_release(self, sender, app_data, user_data) -> None:
        if self._drag_slot is not None:
            self._controller.spinner(self._drag_slot).end_drag()
        self._drag_slot = None
        self._drag_last_dy = 0.0

    # ---- lifecycle ----

    def run(self) -> None:
        """Show the viewport and drive frames until the window is closed."""
        dpg.show_viewport()
        try:
            while dpg.is_dearpygui_running():
                dpg.run_callbacks(dpg.get_callback_queue())
                self._update_bounds()
                dpg.render_dearpygui_frame()
        finally:
            self.close()

    def close(self) -> None:
        self._controller.unsubscribe(self.refresh)
        dpg.destroy_context()


def run_app(state: Optional[GearState] = None) -> None:
    """Open the calculator window and block until it is closed."""
    controller = GearCalculatorController(state)
    window = GearRatioWindow(controller)
    logger.info("Gear ratio window started")
    window.run()

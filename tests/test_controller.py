"""
Tests for GearCalculatorController: spinner edits flowing into the model.
"""

import pytest

from gearratio.calculator.core import GearState
from gearratio.enums import Slot
from gearratio.gui.controller import GearCalculatorController


class TestStartup:
    """Tests for the initial controller state."""

    def test_spinners_show_defaults(self, controller):
        assert controller.spinner(Slot.LEFT).text == "10"
        assert controller.spinner(Slot.RATIO).text == "1.50"
        assert controller.spinner(Slot.RIGHT).text == "15"
        assert controller.actual_ratio_text == "1.500"

    def test_only_locked_spinner_is_read_only(self, controller):
        assert controller.locked is Slot.RATIO
        assert controller.spinner(Slot.LEFT).interactive
        assert controller.spinner(Slot.RIGHT).interactive
        assert not controller.spinner(Slot.RATIO).interactive

    def test_wraps_given_state(self):
        state = GearState(left_teeth=12, right_teeth=30, given_ratio=2.5, locked=Slot.LEFT)
        controller = GearCalculatorController(state)

        assert controller.state is state
        assert not controller.spinner(Slot.LEFT).interactive
        assert controller.spinner(Slot.RIGHT).text == "30"

    @pytest.mark.parametrize("ratio", [200.0, 0.05])
    def test_ratio_outside_field_range_rejected(self, ratio):
        state = GearState(given_ratio=ratio, locked=Slot.LEFT)
        with pytest.raises(ValueError, match="outside the field range"):
            GearCalculatorController(state)

    @pytest.mark.parametrize("ratio", [0.1, 100.0])
    def test_ratio_at_field_bounds_accepted(self, ratio):
        controller = GearCalculatorController(GearState(given_ratio=ratio))
        assert controller.spinner(Slot.RATIO).value == controller.state.given_ratio


class TestEdits:
    """Tests for edits made through the spinners."""

    def test_typed_left_updates_right(self, controller):
        controller.spinner(Slot.LEFT).commit_text("20")

        assert controller.state.right_teeth == 30
        assert controller.spinner(Slot.RIGHT).text == "30"
        assert controller.actual_ratio_text == "1.500"

    def test_rounding_divergence_shown(self, controller):
        controller.spinner(Slot.LEFT).commit_text("7")

        assert controller.spinner(Slot.RIGHT).text == "11"
        assert controller.spinner(Slot.RATIO).text == "1.50"
        assert controller.actual_ratio_text == "1.571"

    def test_ratio_edit_with_left_locked(self, controller):
        controller.set_locked(Slot.LEFT)
        controller.spinner(Slot.RATIO).commit_text("2")

        assert controller.state.given_ratio == 2.0
        assert controller.spinner(Slot.RIGHT).text == "20"
        assert controller.actual_ratio_text == "2.000"

    def test_invalid_text_changes_nothing(self, controller, recorder):
        controller.subscribe(recorder)
        controller.spinner(Slot.LEFT).commit_text("ten")

        assert controller.spinner(Slot.LEFT).text == "10"
        assert controller.state.right_teeth == 15
        assert recorder.calls == []

    def test_overflowing_text_reverts(self, controller, recorder):
        controller.subscribe(recorder)
        spinner = controller.spinner(Slot.LEFT)

        assert spinner.commit_text("1.7e308") is False
        assert spinner.text == "10"
        assert spinner.value == controller.state.left_teeth == 10
        assert controller.state.actual_ratio == controller.state.right_teeth / controller.state.left_teeth
        assert recorder.calls == []

    def test_drag_right_up_recomputes_left(self, controller):
        spinner = controller.spinner(Slot.RIGHT)
        spinner.drag(-spinner.config.drag_pixels_per_step)

        assert controller.state.right_teeth == 16
        # 16 / 1.5 = 10.67
        assert controller.spinner(Slot.LEFT).text == "11"

    def test_scroll_ratio_with_right_locked(self, controller):
        controller.set_locked(Slot.RIGHT)
        controller.spinner(Slot.RATIO).scroll(1.0)

        assert controller.state.given_ratio == 1.6
        # 15 / 1.6 = 9.375
        assert controller.spinner(Slot.LEFT).text == "9"

    def test_locked_spinner_ignores_input(self, controller):
        controller.spinner(Slot.RATIO).commit_text("3")
        controller.spinner(Slot.RATIO).step_by(5)

        assert controller.state.given_ratio == 1.5
        assert controller.state.right_teeth == 15

    def test_on_edit_returns_free_slot(self, controller):
        assert controller.on_edit(Slot.RIGHT, 30) is Slot.LEFT
        assert controller.spinner(Slot.LEFT).text == "20"


class TestLocking:
    """Tests for moving the lock between slots."""

    def test_lock_changes_interactivity_only(self, controller):
        controller.set_locked(Slot.RIGHT)

        assert controller.locked is Slot.RIGHT
        assert controller.spinner(Slot.RATIO).interactive
        assert not controller.spinner(Slot.RIGHT).interactive
        assert [controller.spinner(s).text for s in Slot] == ["10", "1.50", "15"]

    def test_lock_change_resets_drag(self, controller):
        spinner = controller.spinner(Slot.LEFT)
        spinner.drag(5.0)
        controller.set_locked(Slot.LEFT)

        assert spinner.view.drag_offset == 0.0


class TestListeners:
    """Tests for refresh notifications."""

    def test_notified_on_edit_and_lock(self, controller, recorder):
        controller.subscribe(recorder)
        controller.spinner(Slot.LEFT).commit_text("20")
        controller.set_locked(Slot.LEFT)

        assert recorder.calls == [controller.state, controller.state]

    def test_unsubscribe(self, controller, recorder):
        controller.subscribe(recorder)
        controller.unsubscribe(recorder)
        controller.unsubscribe(recorder)  # unknown listener is ignored
        controller.on_edit(Slot.LEFT, 20)

        assert recorder.calls == []

    @pytest.mark.parametrize("slot", [Slot.LEFT, Slot.RIGHT])
    def test_actual_ratio_text_three_decimals(self, controller, slot):
        controller.on_edit(slot, 13)
        text = controller.actual_ratio_text
        assert len(text.split(".")[1]) == 3

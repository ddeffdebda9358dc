"""
Tests for gear pair validation rules.
"""

import pytest

from gearratio.calculator.core import GearState
from gearratio.calculator.validation import (
    Severity,
    calculate_minimum_teeth,
    ratio_divergence_percent,
    validate_state,
)
from gearratio.enums import Slot


def codes(result):
    return [m.code for m in result.messages]


class TestHelpers:
    """Tests for the standalone helper formulas."""

    @pytest.mark.parametrize("pressure_angle,expected", [
        (20.0, 18),
        (25.0, 12),
        (14.5, 32),
    ])
    def test_minimum_teeth(self, pressure_angle, expected):
        assert calculate_minimum_teeth(pressure_angle) == expected

    def test_no_divergence_for_exact_pair(self, default_state):
        assert ratio_divergence_percent(default_state) == 0.0

    def test_divergence_after_rounding(self, default_state):
        default_state.edit(Slot.LEFT, 7)
        # 11/7 vs 1.5
        assert ratio_divergence_percent(default_state) == pytest.approx(4.7619, rel=1e-4)


class TestValidateState:
    """Tests for validate_state."""

    def test_default_state_is_valid(self, default_state):
        result = validate_state(default_state)

        assert result.valid
        assert result.errors == []
        assert set(codes(result)) == {"LEFT_TEETH_UNDERCUT", "RIGHT_TEETH_UNDERCUT", "COMMON_FACTOR"}
        assert all(m.severity == Severity.INFO for m in result.messages)

    def test_clean_pair_has_no_messages(self):
        state = GearState(left_teeth=20, right_teeth=31, given_ratio=1.55)
        result = validate_state(state)

        assert result.valid
        assert result.messages == []

    def test_rounding_divergence_reported(self, default_state):
        default_state.edit(Slot.LEFT, 7)
        result = validate_state(default_state)

        assert result.valid
        divergence = [m for m in result.infos if m.code == "RATIO_DIVERGENCE"]
        assert len(divergence) == 1
        assert "4.76%" in divergence[0].message

    def test_common_factor_message(self):
        state = GearState(left_teeth=20, right_teeth=30, given_ratio=1.5)
        result = validate_state(state)

        assert codes(result) == ["COMMON_FACTOR"]
        assert "2:3" in result.messages[0].message

    def test_undercut_depends_on_pressure_angle(self):
        state = GearState(left_teeth=13, right_teeth=27, given_ratio=27 / 13)

        assert "LEFT_TEETH_UNDERCUT" in codes(validate_state(state, pressure_angle_deg=20.0))
        assert "LEFT_TEETH_UNDERCUT" not in codes(validate_state(state, pressure_angle_deg=25.0))

    def test_stale_actual_ratio_is_an_error(self, default_state):
        default_state.actual_ratio = 2.0
        result = validate_state(default_state)

        assert not result.valid
        assert "ACTUAL_RATIO_STALE" in [m.code for m in result.errors]

    def test_ratio_out_of_range(self):
        state = GearState(given_ratio=150.0)
        result = validate_state(state)

        assert not result.valid
        assert "RATIO_OUT_OF_RANGE" in [m.code for m in result.errors]

    def test_zero_teeth_short_circuits(self, default_state):
        default_state.left_teeth = 0
        result = validate_state(default_state)

        assert not result.valid
        assert codes(result) == ["TEETH_BELOW_MINIMUM"]

    def test_every_message_has_a_suggestion(self, default_state):
        default_state.edit(Slot.LEFT, 7)
        for message in validate_state(default_state).messages:
            assert message.suggestion

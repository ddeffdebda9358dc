"""
JSON bridge for headless use of the calculator.

Provides a single, clean entry point: a JSON document describing a starting
state and a sequence of edits and lock changes goes in, the resulting state
with validation findings comes out. All inputs are validated via Pydantic
models before processing.

Usage:
    from gearratio.calculator.bridge import calculate
    result = json.loads(calculate(json.dumps({
        "left_teeth": 10,
        "right_teeth": 15,
        "given_ratio": 1.5,
        "locked": "ratio",
        "steps": [{"edit": "left", "value": 20}],
    })))
"""

import json
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..enums import Slot
from .constants import DEFAULT_GIVEN_RATIO, DEFAULT_LEFT_TEETH, DEFAULT_RIGHT_TEETH, MIN_TEETH
from .core import GearState
from .output import to_dict, to_markdown, to_summary
from .validation import validate_state


# ============================================================================
# Input Models
# ============================================================================

class Step(BaseModel):
    """
    One user action.

    Either an edit ({"edit": "left", "value": 20}) or a lock change
    ({"lock": "right"}), never both.
    """
    model_config = ConfigDict(extra='ignore')

    edit: Optional[Slot] = None
    value: Optional[float] = None
    lock: Optional[Slot] = None

    @field_validator('edit', 'lock', mode='before')
    @classmethod
    def normalize_slot(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @model_validator(mode='after')
    def check_kind(self):
        if (self.edit is None) == (self.lock is None):
            raise ValueError("a step needs exactly one of 'edit' or 'lock'")
        if self.edit is not None and self.value is None:
            raise ValueError(f"edit of {self.edit.value} needs a 'value'")
        return self


class CalculatorInputs(BaseModel):
    """
    Starting state and the actions to replay on it.

    The actual ratio of the starting state is derived from the tooth counts.
    """
    model_config = ConfigDict(extra='ignore')

    left_teeth: int = Field(DEFAULT_LEFT_TEETH, ge=MIN_TEETH)
    right_teeth: int = Field(DEFAULT_RIGHT_TEETH, ge=MIN_TEETH)
    given_ratio: float = Field(DEFAULT_GIVEN_RATIO, gt=0)
    locked: Slot = Slot.RATIO
    steps: List[Step] = Field(default_factory=list)

    @field_validator('locked', mode='before')
    @classmethod
    def normalize_locked(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


# ============================================================================
# Output Models
# ============================================================================

class CalculatorOutput(BaseModel):
    """Output from calculate()."""
    model_config = ConfigDict(extra='ignore')

    success: bool
    error: Optional[str] = None

    state: Optional[Dict[str, Any]] = None

    # Display formats
    summary: Optional[str] = None
    markdown: Optional[str] = None

    # Validation
    valid: bool = True
    messages: List[Dict[str, Optional[str]]] = Field(default_factory=list)

    # Slot recomputed by each edit, in order
    recomputed: List[str] = Field(default_factory=list)


# ============================================================================
# Main Entry Point
# ============================================================================

def replay(inputs: CalculatorInputs) -> Tuple[GearState, List[Slot]]:
    """
    Build the starting state and apply every step in order.

    Returns:
        Final state and the slot recomputed by each edit

    Raises:
        AssertionError: if a step edits the slot locked at that point
    """
    state = GearState(
        left_teeth=inputs.left_teeth,
        right_teeth=inputs.right_teeth,
        given_ratio=inputs.given_ratio,
        locked=inputs.locked,
    )
    recomputed: List[Slot] = []
    for step in inputs.steps:
        if step.lock is not None:
            state.set_locked(step.lock)
        else:
            recomputed.append(state.edit(step.edit, step.value))
    return state, recomputed


def calculate(input_json: str) -> str:
    """
    Single entry point for headless calculator runs.

    Args:
        input_json: JSON string with CalculatorInputs structure

    Returns:
        JSON string with CalculatorOutput structure
    """
    try:
        data = json.loads(input_json)
        inputs = CalculatorInputs.model_validate(data)

        state, recomputed = replay(inputs)
        validation = validate_state(state)

        output = CalculatorOutput(
            success=True,
            state=to_dict(state),
            summary=to_summary(state),
            markdown=to_markdown(state, validation),
            valid=validation.valid,
            messages=[
                {
                    'severity': m.severity.value,
                    'message': m.message,
                    'code': m.code,
                    'suggestion': m.suggestion
                }
                for m in validation.messages
            ],
            recomputed=[slot.value for slot in recomputed],
        )

        return output.model_dump_json()

    except json.JSONDecodeError as e:
        return CalculatorOutput(
            success=False,
            error=f"Invalid JSON: {e}"
        ).model_dump_json()

    except Exception as e:
        return CalculatorOutput(
            success=False,
            error=str(e) or type(e).__name__
        ).model_dump_json()

"""Output formatters for gear ratio states.

Converts a GearState to JSON, Markdown and a plain-text summary.
Enums are written as their string values.
"""

import json
from typing import Any, Dict, Optional, TYPE_CHECKING

from .constants import ACTUAL_RATIO_PRECISION, RATIO_PRECISION, SCHEMA_VERSION
from .core import GearState

if TYPE_CHECKING:
    from .validation import ValidationResult


def to_dict(state: GearState) -> Dict[str, Any]:
    """Convert GearState to a dict with JSON-compatible types."""
    return {
        "schema_version": SCHEMA_VERSION,
        "left_teeth": state.left_teeth,
        "right_teeth": state.right_teeth,
        "given_ratio": state.given_ratio,
        "actual_ratio": state.actual_ratio,
        "locked": state.locked.value,
    }


def validation_to_dict(validation: "ValidationResult") -> Dict[str, Any]:
    """Convert ValidationResult to a dict with JSON-compatible types."""
    return {
        "valid": validation.valid,
        "messages": [
            {
                "severity": m.severity.value,
                "code": m.code,
                "message": m.message,
                "suggestion": m.suggestion,
            }
            for m in validation.messages
        ],
    }


def to_json(
    state: GearState,
    validation: Optional["ValidationResult"] = None,
    indent: int = 2
) -> str:
    """Convert GearState to JSON string.

    Args:
        state: Gear state to serialize
        validation: Optional validation results to include in output
        indent: JSON indentation level (default: 2)

    Returns:
        JSON string with schema version, values and optional validation
    """
    data = to_dict(state)
    if validation is not None:
        data["validation"] = validation_to_dict(validation)
    return json.dumps(data, indent=indent)


def to_summary(state: GearState) -> str:
    """Convert GearState to formatted text summary."""
    def lock_mark(slot_name: str) -> str:
        return "  [locked]" if state.locked.value == slot_name else ""

    lines = [
        "═══ Gear Pair ═══",
        f"Left teeth:    {state.left_teeth}{lock_mark('left')}",
        f"Right teeth:   {state.right_teeth}{lock_mark('right')}",
        f"Given ratio:   {state.given_ratio:.{RATIO_PRECISION}f}{lock_mark('ratio')}",
        f"Actual ratio:  {state.actual_ratio:.{ACTUAL_RATIO_PRECISION}f}",
    ]
    return "\n".join(lines)


def to_markdown(
    state: GearState,
    validation: Optional["ValidationResult"] = None
) -> str:
    """Convert GearState to a markdown report.

    Args:
        state: Gear state to report
        validation: Optional validation results to include

    Returns:
        Markdown string
    """
    md = "# Gear Pair\n\n"

    md += "| Parameter | Value | Locked |\n"
    md += "|-----------|-------|--------|\n"
    md += f"| Left Teeth (Driving) | {state.left_teeth} | {_yes(state.locked.value == 'left')} |\n"
    md += f"| Right Teeth (Driven) | {state.right_teeth} | {_yes(state.locked.value == 'right')} |\n"
    md += f"| Given Ratio | {state.given_ratio:.{RATIO_PRECISION}f} | {_yes(state.locked.value == 'ratio')} |\n"
    md += f"| Actual Ratio | {state.actual_ratio:.{ACTUAL_RATIO_PRECISION}f} | - |\n\n"

    if validation:
        md += "## Validation\n\n"

        if validation.valid:
            md += "**Status:** ✅ Gear pair is valid\n\n"
        else:
            md += "**Status:** ❌ Gear pair has errors\n\n"

        if validation.errors:
            md += "### Errors\n\n"
            for msg in validation.errors:
                md += f"- **{msg.code}**: {msg.message}\n"
                if msg.suggestion:
                    md += f"  - *Suggestion*: {msg.suggestion}\n"
            md += "\n"

        if validation.warnings:
            md += "### Warnings\n\n"
            for msg in validation.warnings:
                md += f"- **{msg.code}**: {msg.message}\n"
                if msg.suggestion:
                    md += f"  - *Suggestion*: {msg.suggestion}\n"
            md += "\n"

        if validation.infos:
            md += "### Information\n\n"
            for msg in validation.infos:
                md += f"- {msg.message}\n"
            md += "\n"

    md += "---\n"
    md += "*Generated by Gear Ratio Calculator*\n"

    return md


def _yes(flag: bool) -> str:
    return "Yes" if flag else "No"

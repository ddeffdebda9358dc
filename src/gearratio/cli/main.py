"""
Command-line interface for the gear ratio calculator.
"""

import argparse
import json
import logging
import sys
from typing import Dict, List, Optional, Union

from ..calculator.bridge import calculate
from ..calculator.constants import DEFAULT_GIVEN_RATIO, DEFAULT_LEFT_TEETH, DEFAULT_RIGHT_TEETH
from ..calculator.core import GearState
from ..calculator.validation import validate_state
from ..enums import Slot

logger = logging.getLogger(__name__)

SLOT_CHOICES = [s.value for s in Slot]


def _slot(text: str) -> str:
    try:
        return Slot.parse(text).value
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _edit_step(text: str) -> Dict[str, Union[str, float]]:
    """Parse SLOT=VALUE into an edit step."""
    name, sep, value = text.partition('=')
    if not sep:
        raise argparse.ArgumentTypeError(f"expected SLOT=VALUE, got {text!r}")
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}")
    return {'edit': _slot(name), 'value': number}


def _lock_step(text: str) -> Dict[str, str]:
    return {'lock': _slot(text)}


def _add_state_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--left',
        type=int,
        default=DEFAULT_LEFT_TEETH,
        help=f'Teeth on the driving (left) gear (default: {DEFAULT_LEFT_TEETH})'
    )
    parser.add_argument(
        '--right',
        type=int,
        default=DEFAULT_RIGHT_TEETH,
        help=f'Teeth on the driven (right) gear (default: {DEFAULT_RIGHT_TEETH})'
    )
    parser.add_argument(
        '--ratio',
        type=float,
        default=DEFAULT_GIVEN_RATIO,
        help=f'Given ratio, right/left (default: {DEFAULT_GIVEN_RATIO})'
    )
    parser.add_argument(
        '--locked',
        type=_slot,
        default=Slot.RATIO.value,
        metavar='{' + ','.join(SLOT_CHOICES) + '}',
        help='Quantity that stays fixed while the others are edited (default: ratio)'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Log recomputes and edits'
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='gearratio',
        description="Relate two meshed gears' tooth counts to their transmission ratio",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Open the calculator window with the defaults (10:15, ratio 1.5 locked)
  gearratio gui

  # Start the window with the left gear locked
  gearratio gui --left 12 --right 30 --locked left

  # Keep the ratio, change the driving gear: right gear follows
  gearratio solve --edit left=20

  # Lock the left gear, then ask for a 2:1 ratio
  gearratio solve --lock left --edit ratio=2

  # Machine-readable output
  gearratio solve --left 7 --edit ratio=1.5 --locked left --format json
"""
    )
    subparsers = parser.add_subparsers(dest='command')

    gui = subparsers.add_parser('gui', help='Open the calculator window (default)')
    _add_state_arguments(gui)

    solve = subparsers.add_parser('solve', help='Apply edits without a window and print the result')
    _add_state_arguments(solve)
    solve.add_argument(
        '--edit',
        dest='steps',
        action='append',
        type=_edit_step,
        metavar='SLOT=VALUE',
        help='Edit a quantity (repeatable, applied in order with --lock)'
    )
    solve.add_argument(
        '--lock',
        dest='steps',
        action='append',
        type=_lock_step,
        metavar='SLOT',
        help='Lock another quantity before the following edits (repeatable)'
    )
    solve.add_argument(
        '--format',
        choices=['summary', 'json', 'markdown'],
        default='summary',
        help='Output format (default: summary)'
    )
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )


def run_solve(args: argparse.Namespace) -> int:
    request = {
        'left_teeth': args.left,
        'right_teeth': args.right,
        'given_ratio': args.ratio,
        'locked': args.locked,
        'steps': args.steps or [],
    }
    logger.debug(f"Solve request: {request}")
    result = json.loads(calculate(json.dumps(request)))

    if not result['success']:
        print(f"Error: {result['error']}", file=sys.stderr)
        return 1

    if args.format == 'json':
        print(json.dumps({
            'state': result['state'],
            'recomputed': result['recomputed'],
            'valid': result['valid'],
            'messages': result['messages'],
        }, indent=2))
    elif args.format == 'markdown':
        print(result['markdown'])
    else:
        print(result['summary'])
        for slot in result['recomputed']:
            print(f"  recomputed: {slot}")
        for msg in result['messages']:
            print(f"  [{msg['severity']}] {msg['message']}")

    return 0 if result['valid'] else 1


def run_gui(args: argparse.Namespace) -> int:
    try:
        state = GearState(
            left_teeth=args.left,
            right_teeth=args.right,
            given_ratio=args.ratio,
            locked=Slot.parse(args.locked),
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # The window can only show values within the field bounds
    errors = validate_state(state).errors
    if errors:
        for msg in errors:
            print(f"Error: {msg.message}", file=sys.stderr)
        return 1

    # Imported here so `solve` works without Dear PyGui installed
    from ..gui.app import run_app

    run_app(state)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        # Bare `gearratio` opens the window with the defaults
        args = parser.parse_args(['gui'] + list(argv if argv is not None else sys.argv[1:]))

    _configure_logging(args.verbose)

    if args.command == 'solve':
        return run_solve(args)
    return run_gui(args)


if __name__ == '__main__':
    sys.exit(main())

"""
Entry point for the Jordan exchange tableau stepper.

This script loads a linear program, applies the requested Jordan
exchanges one by one and prints the resulting tableau and history.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .data_models import ERROR
from .exceptions import MalformedInputError
from .parser import parse_lp_file, parse_pivot_command
from .state_manager import SimplexSession
from .storage import load_state, save_state
from .utils import (history_to_text, original_form_lines, original_form_matrices, suggest_pivot,
                    tableau_to_text)


def setup_logging(verbose: bool = False) -> None:
    """
    Configure logging for the application.

    Args:
        verbose: If True, set logging level to DEBUG
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description='Step through the Simplex method with Jordan exchanges',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    parser.add_argument(
        'lp_file',
        type=str,
        nargs='?',
        default=None,
        help='LP file (first line "max: c1 c2 ...", then one constraint per line, e.g. "1 1 <= 4")'
    )

    parser.add_argument(
        '-p', '--pivot',
        action='append',
        default=[],
        metavar='ROW,COL',
        help='1-based pivot cell; repeat to apply several exchanges in order'
    )

    parser.add_argument(
        '-s', '--state-file',
        type=str,
        default=None,
        help='JSON file the session is saved to after every step'
    )

    parser.add_argument(
        '--resume',
        action='store_true',
        help='Continue the session saved in --state-file instead of loading LP_FILE'
    )

    parser.add_argument(
        '--history-index',
        type=int,
        default=None,
        help='0-based history entry to select after the pivots'
    )

    parser.add_argument(
        '--suggest',
        action='store_true',
        help='Print a suggested next pivot (advisory only)'
    )

    parser.add_argument(
        '--report',
        type=str,
        default=None,
        help='Write a PDF report of the history to this path'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose (DEBUG) logging'
    )

    return parser.parse_args(argv)


def print_session(session: SimplexSession, suggest: bool = False) -> None:
    state = session.state
    print("\n" + "=" * 60)
    if state.lp is not None:
        print("PROBLEM")
        print("=" * 60)
        for line in original_form_lines(state.lp):
            print(line)
        print()
        for line in original_form_matrices(state.lp):
            print(line)
        print()
        print(f"TABLEAU (step {state.current_step})")
        print("-" * 60)
        print(tableau_to_text(state.lp))
        print()
    print("HISTORY")
    print("-" * 60)
    print(history_to_text(state) or "(empty)")
    print()
    print(f"Status: {state.status}")
    if state.error:
        print(f"Error:  {state.error}")
    if suggest and state.lp is not None:
        suggestion = suggest_pivot(state.lp)
        if suggestion is None:
            print("Suggested pivot: none")
        else:
            print(f"Suggested pivot: ljx({suggestion[0]}, {suggestion[1]})")
    print("=" * 60)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the tableau stepper.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    args = parse_arguments(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    on_change = None
    if args.state_file:
        state_file = Path(args.state_file)
        on_change = lambda state: save_state(state, state_file)

    try:
        if args.resume:
            if not args.state_file:
                logger.error("--state-file is required when using --resume")
                return 1
            session = SimplexSession(load_state(args.state_file), on_change=on_change)
            logger.info(f"Resumed session from {args.state_file}: {session.state!r}")
        else:
            if not args.lp_file:
                logger.error("An LP file is required unless --resume is given")
                return 1
            lp_path = Path(args.lp_file)
            if not lp_path.exists():
                logger.error(f"LP file not found: {lp_path}")
                return 1

            session = SimplexSession(on_change=on_change)
            try:
                lp = parse_lp_file(lp_path)
            except MalformedInputError as e:
                session.report_error(str(e))
                print_session(session)
                return 1
            session.set_linear_program(lp)

        for command in args.pivot:
            try:
                row, col = parse_pivot_command(command)
            except MalformedInputError as e:
                session.report_error(str(e))
                break
            session.jordan_exchange(row, col)
            if session.state.status == ERROR:
                break

        if args.history_index is not None and session.state.status != ERROR:
            session.load_history(args.history_index)

        print_session(session, suggest=args.suggest)

        if args.report:
            from .report import export_history_pdf
            export_history_pdf(session.state, args.report)

        return 1 if session.state.status == ERROR else 0

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 1

    except Exception as e:
        logger.exception(f"Error occurred: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())

"""
Jordan exchange tableau stepper.

Step through the Simplex method by hand: set up a linear program, pivot
on cells of its tableau and move back and forth through the history of
pivots.
"""

from .data_models import LinearProgram, TableauHistoryEntry, SimplexState, INITIAL_STATE
from .exceptions import (SimplexError, NoProgramError, PivotOutOfBoundsError,
                         DegeneratePivotError, MalformedInputError)
from .jordan_exchange import jordan_exchange, PIVOT_TOLERANCE
from .tableau import build_tableau, decompose_tableau
from .state_manager import (set_linear_program, apply_jordan_exchange, load_history,
                            step_forward, step_back, report_error, reset,
                            simplex_reducer, SimplexSession)
from .parser import (ConstraintInput, parse_number, canonicalize_constraint,
                     build_linear_program, parse_lp_text, parse_lp_file, parse_pivot_command)
from .storage import save_state, load_state
from .utils import suggest_pivot, tableau_to_text, original_form_lines, original_form_matrices

__version__ = "1.0.0"

__all__ = [
    "LinearProgram",
    "TableauHistoryEntry",
    "SimplexState",
    "INITIAL_STATE",
    "SimplexError",
    "NoProgramError",
    "PivotOutOfBoundsError",
    "DegeneratePivotError",
    "MalformedInputError",
    "jordan_exchange",
    "PIVOT_TOLERANCE",
    "build_tableau",
    "decompose_tableau",
    "set_linear_program",
    "apply_jordan_exchange",
    "load_history",
    "step_forward",
    "step_back",
    "report_error",
    "reset",
    "simplex_reducer",
    "SimplexSession",
    "ConstraintInput",
    "parse_number",
    "canonicalize_constraint",
    "build_linear_program",
    "parse_lp_text",
    "parse_lp_file",
    "parse_pivot_command",
    "save_state",
    "load_state",
    "suggest_pivot",
    "tableau_to_text",
    "original_form_lines",
    "original_form_matrices",
]

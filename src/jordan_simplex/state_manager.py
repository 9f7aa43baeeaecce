"""
Tableau state manager.

Owns the stepping session: the current linear program, the history of
pivots, the history cursor, and the status. Every transition is a pure
function from one SimplexState snapshot to the next; failures are recorded
as an ``error`` status and never leave a half-updated state behind.
"""

import logging
import time
from dataclasses import dataclass, replace
from typing import Callable, Optional, Union

from .data_models import (
    ERROR, INITIAL_STATE, READY, LinearProgram, SimplexState, TableauHistoryEntry
)
from .exceptions import NoProgramError, PivotOutOfBoundsError, SimplexError
from .jordan_exchange import jordan_exchange
from .tableau import build_tableau, decompose_tableau

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


def _fail(state: SimplexState, error: Union[str, Exception]) -> SimplexState:
    message = str(error)
    logger.warning(f"Transition failed: {message}")
    return replace(state, status=ERROR, error=message)


def set_linear_program(state: SimplexState, lp: LinearProgram) -> SimplexState:
    """
    Start a new session on ``lp``.

    History is reset to a single initial entry and the status becomes ready.
    """
    logger.info(f"Setting up {lp!r}")
    entry = TableauHistoryEntry(lp=lp, step_number=0, timestamp=_now_ms())
    return replace(
        state,
        lp=lp,
        history=(entry,),
        current_step=0,
        status=READY,
        error=None,
    )


def apply_jordan_exchange(state: SimplexState, row: int, col: int) -> SimplexState:
    """
    Pivot the current tableau on the 1-based cell (row, col).

    Rows run over the constraints then the objective row, columns over the
    variables then the constant column. On success the new linear program
    is appended to the history and the cursor moves onto it.

    Args:
        state: Current snapshot
        row: 1-based pivot row, 1..m+1
        col: 1-based pivot column, 1..n+1

    Returns:
        New snapshot; status is ``error`` if the pivot could not be made
    """
    lp = state.lp
    if lp is None:
        return _fail(state, NoProgramError())

    tableau = build_tableau(lp)
    rows, cols = tableau.shape
    pivot_row, pivot_col = row - 1, col - 1

    if not (0 <= pivot_row < rows and 0 <= pivot_col < cols):
        return _fail(state, PivotOutOfBoundsError())

    try:
        result = jordan_exchange(tableau, pivot_row, pivot_col)
        updated = decompose_tableau(result, lp.sense, lp.original_operators)
    except SimplexError as e:
        return _fail(state, e)

    entry = TableauHistoryEntry(
        lp=updated,
        step_number=len(state.history),
        timestamp=_now_ms(),
        pivot_row=row,
        pivot_col=col,
    )
    logger.info(f"Jordan exchange at ({row}, {col}) recorded as step {entry.step_number}")

    return replace(
        state,
        lp=updated,
        history=state.history + (entry,),
        current_step=len(state.history),
        status=READY,
        error=None,
    )


def load_history(state: SimplexState, index: int) -> SimplexState:
    """
    Make history entry ``index`` the current one.

    Later entries are kept. An index outside the history leaves the
    state unchanged.
    """
    if not 0 <= index < len(state.history):
        logger.debug(f"Ignoring history index {index} (history has {len(state.history)} entries)")
        return state

    return replace(
        state,
        lp=state.history[index].lp,
        current_step=index,
        status=READY,
        error=None,
    )


def step_forward(state: SimplexState) -> SimplexState:
    """Move the history cursor one entry later, stopping at the last one."""
    if not state.history:
        return state
    return load_history(state, min(state.current_step + 1, len(state.history) - 1))


def step_back(state: SimplexState) -> SimplexState:
    """Move the history cursor one entry earlier, stopping at the first one."""
    if not state.history:
        return state
    return load_history(state, max(state.current_step - 1, 0))


def report_error(state: SimplexState, message: str) -> SimplexState:
    """Record an error raised outside the core, e.g. by the input parser."""
    return _fail(state, message)


def reset(state: Optional[SimplexState] = None) -> SimplexState:
    """Return the canonical empty state."""
    return INITIAL_STATE


# Actions understood by simplex_reducer

@dataclass(frozen=True)
class SetLinearProgram:
    lp: LinearProgram


@dataclass(frozen=True)
class JordanExchange:
    row: int
    col: int


@dataclass(frozen=True)
class LoadHistory:
    index: int


@dataclass(frozen=True)
class NextStep:
    pass


@dataclass(frozen=True)
class PrevStep:
    pass


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class ReportError:
    message: str


Action = Union[SetLinearProgram, JordanExchange, LoadHistory, NextStep, PrevStep, Reset, ReportError]


def simplex_reducer(state: SimplexState, action: Action) -> SimplexState:
    """Map (state, action) to the next state."""
    if isinstance(action, SetLinearProgram):
        return set_linear_program(state, action.lp)
    if isinstance(action, JordanExchange):
        return apply_jordan_exchange(state, action.row, action.col)
    if isinstance(action, LoadHistory):
        return load_history(state, action.index)
    if isinstance(action, NextStep):
        return step_forward(state)
    if isinstance(action, PrevStep):
        return step_back(state)
    if isinstance(action, Reset):
        return reset(state)
    if isinstance(action, ReportError):
        return report_error(state, action.message)

    logger.warning(f"Unknown action ignored: {action!r}")
    return state


class SimplexSession:
    """
    Explicit holder of the current SimplexState.

    ``on_change`` is called with every new state after a transition. It is
    meant for best-effort side effects such as persistence: any exception
    it raises is logged and swallowed.
    """

    def __init__(
        self,
        state: SimplexState = INITIAL_STATE,
        on_change: Optional[Callable[[SimplexState], None]] = None,
    ):
        self.state = state
        self.on_change = on_change

    def dispatch(self, action: Action) -> SimplexState:
        new_state = simplex_reducer(self.state, action)
        if new_state is not self.state:
            self.state = new_state
            self._notify()
        return self.state

    def _notify(self) -> None:
        if self.on_change is None:
            return
        try:
            self.on_change(self.state)
        except Exception as e:
            logger.error(f"State change listener failed: {e}")

    def set_linear_program(self, lp: LinearProgram) -> SimplexState:
        return self.dispatch(SetLinearProgram(lp))

    def jordan_exchange(self, row: int, col: int) -> SimplexState:
        return self.dispatch(JordanExchange(row, col))

    def load_history(self, index: int) -> SimplexState:
        return self.dispatch(LoadHistory(index))

    def next_step(self) -> SimplexState:
        return self.dispatch(NextStep())

    def prev_step(self) -> SimplexState:
        return self.dispatch(PrevStep())

    def report_error(self, message: str) -> SimplexState:
        return self.dispatch(ReportError(message))

    def reset(self) -> SimplexState:
        return self.dispatch(Reset())

    def __repr__(self) -> str:
        return f"SimplexSession({self.state!r})"

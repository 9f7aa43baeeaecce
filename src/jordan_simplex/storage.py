"""
Best-effort persistence of a session to a JSON document.

Layout:

    {"lp": ..., "history": [...], "currentStep": 0, "status": "ready", "error": null}

Loading falls back to the initial state field by field; neither saving nor
loading ever raises.
"""

import json
import logging
import time
from pathlib import Path
from typing import Any, Dict, Union

from .data_models import INITIAL_STATE, STATUSES, LinearProgram, SimplexState, TableauHistoryEntry
from .exceptions import MalformedInputError

logger = logging.getLogger(__name__)


def state_to_dict(state: SimplexState) -> Dict[str, Any]:
    return {
        "lp": state.lp.to_dict() if state.lp is not None else None,
        "history": [entry.to_dict() for entry in state.history],
        "currentStep": state.current_step,
        "status": state.status,
        "error": state.error,
    }


def state_from_dict(data: Any) -> SimplexState:
    """
    Rebuild a state from a document, one field at a time.

    A missing or malformed field takes its value from the initial state;
    the other fields are still restored. A restored program always comes
    with at least its initial history entry, and the cursor always points
    into the restored history.
    """
    if not isinstance(data, dict):
        logger.warning("Saved state is not a mapping, using initial state")
        return INITIAL_STATE

    lp = INITIAL_STATE.lp
    if data.get("lp") is not None:
        try:
            lp = LinearProgram.from_dict(data["lp"])
        except MalformedInputError as e:
            logger.warning(f"Discarding saved linear program: {e}")

    history = INITIAL_STATE.history
    if isinstance(data.get("history"), list):
        try:
            history = tuple(TableauHistoryEntry.from_dict(item) for item in data["history"])
        except MalformedInputError as e:
            logger.warning(f"Discarding saved history: {e}")

    if lp is not None and not history:
        logger.warning("Saved history is empty, starting it from the saved linear program")
        history = (TableauHistoryEntry(lp=lp, step_number=0, timestamp=int(time.time() * 1000)),)

    current_step = INITIAL_STATE.current_step
    saved_step = data.get("currentStep")
    if isinstance(saved_step, int) and not isinstance(saved_step, bool):
        if 0 <= saved_step < len(history):
            current_step = saved_step
        else:
            logger.warning(f"Discarding saved step {saved_step}, history has {len(history)} entries")

    status = INITIAL_STATE.status
    if data.get("status") in STATUSES:
        status = data["status"]

    error = INITIAL_STATE.error
    if isinstance(data.get("error"), str):
        error = data["error"]

    return SimplexState(
        lp=lp,
        history=history,
        current_step=current_step,
        status=status,
        error=error,
    )


def save_state(state: SimplexState, filepath: Union[str, Path]) -> bool:
    """
    Write the state to ``filepath``.

    Returns:
        True if the state was written
    """
    filepath = Path(filepath)
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(filepath, 'w') as f:
            json.dump(state_to_dict(state), f, indent=2)
    except (OSError, TypeError, ValueError) as e:
        logger.error(f"Failed to save state to {filepath}: {e}")
        return False

    logger.debug(f"Saved state to {filepath}")
    return True


def load_state(filepath: Union[str, Path]) -> SimplexState:
    """
    Read a state saved by :func:`save_state`.

    Returns:
        The saved state, or the initial state if nothing usable was found
    """
    filepath = Path(filepath)
    if not filepath.exists():
        logger.info(f"No saved state at {filepath}")
        return INITIAL_STATE

    try:
        with open(filepath, 'r') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load state from {filepath}: {e}")
        return INITIAL_STATE

    return state_from_dict(data)

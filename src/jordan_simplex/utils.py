"""
Display helpers and the advisory pivot suggestion.

Nothing here is used by the pivot engine or the state transitions.
"""

from typing import List, Optional, Sequence, Tuple

import numpy as np

from .data_models import LinearProgram, SimplexState, TableauHistoryEntry
from .tableau import build_tableau


def format_number(num: float) -> str:
    """Integers without decimals, everything else with at most two."""
    if num == 0:
        return "0"
    if float(num).is_integer():
        return str(int(num))
    text = f"{num:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def variable_names(num_variables: int) -> List[str]:
    """Column labels x1..xn."""
    return [f"x{i + 1}" for i in range(num_variables)]


def basic_variable_labels(num_variables: int, num_constraints: int) -> List[str]:
    """Row labels: one slack per constraint row, then z for the objective row."""
    labels = [f"x{num_variables + i + 1}" for i in range(num_constraints)]
    labels.append("z")
    return labels


def tableau_to_text(lp: LinearProgram) -> str:
    """
    Render the combined tableau as an aligned text table.

    Args:
        lp: Linear program to show

    Returns:
        Multi-line string, header row first
    """
    T = build_tableau(lp)
    header = [""] + variable_names(lp.num_variables) + ["1"]
    rows = [header]
    for label, values in zip(basic_variable_labels(lp.num_variables, lp.num_constraints), T):
        rows.append([f"{label} ="] + [format_number(v) for v in values])

    widths = [max(len(row[c]) for row in rows) for c in range(len(header))]

    out = [" | ".join(rows[0][c].rjust(widths[c]) for c in range(len(widths)))]
    out.append("-+-".join("-" * w for w in widths))
    for row in rows[1:]:
        out.append(" | ".join(row[c].rjust(widths[c]) for c in range(len(widths))))
    return "\n".join(out)


def _linear_expression(coefficients: Sequence[float]) -> str:
    terms = []
    for i, coeff in enumerate(coefficients):
        if coeff == 0:
            continue
        if coeff == 1:
            terms.append(f"x{i + 1}")
        elif coeff == -1:
            terms.append(f"-x{i + 1}")
        else:
            terms.append(f"{format_number(coeff)}x{i + 1}")
    if not terms:
        return "0"
    return " + ".join(terms).replace("+ -", "- ")


def _non_negativity_variable(row: np.ndarray, rhs: float) -> Optional[int]:
    """Index i if the row reads x_i >= 0, else None."""
    if rhs != 0:
        return None
    nonzero = np.flatnonzero(row)
    if len(nonzero) == 1 and row[nonzero[0]] == 1:
        return int(nonzero[0])
    return None


def original_form_lines(lp: LinearProgram) -> List[str]:
    """
    Show the problem the way the user entered it.

    ``<=`` rows are negated back; ``=`` rows are shown as stored, so an
    equality appears once per canonical row. After pivoting, the operators
    describe the rows they were entered with, not the transformed rows.
    """
    sense = "maximize" if lp.sense == "max" else "minimize"
    lines = [f"{sense} {_linear_expression(lp.p)}", "subject to"]

    for i, (row, rhs) in enumerate(zip(lp.A, lp.b)):
        op = lp.original_operators[i]
        nonneg = _non_negativity_variable(row, rhs)
        if nonneg is not None:
            lines.append(f"  x{nonneg + 1} >= 0")
            continue
        if op == "<=":
            lines.append(f"  {_linear_expression(-row)} <= {format_number(-rhs)}")
        else:
            lines.append(f"  {_linear_expression(row)} {op} {format_number(rhs)}")
    return lines


def _matrix_lines(name: str, rows: List[List[str]]) -> List[str]:
    prefix = f"{name} = "
    if not rows or not rows[0]:
        return [prefix + "[ ]"]
    widths = [max(len(row[c]) for row in rows) for c in range(len(rows[0]))]
    lines = []
    for i, row in enumerate(rows):
        cells = " ".join(cell.rjust(w) for cell, w in zip(row, widths))
        lines.append((prefix if i == 0 else " " * len(prefix)) + f"[ {cells} ]")
    return lines


def original_form_matrices(lp: LinearProgram) -> List[str]:
    """
    The p, A and b blocks of the problem as it was entered.

    Rows entered as ``<=`` are negated back, together with their right-hand
    side. Non-negativity rows and all other rows are shown as stored.
    """
    A_rows = []
    b_rows = []
    for i, (row, rhs) in enumerate(zip(lp.A, lp.b)):
        op = lp.original_operators[i]
        if op == "<=" and _non_negativity_variable(row, rhs) is None:
            row, rhs = -row, -rhs
        A_rows.append([format_number(v) for v in row])
        b_rows.append([format_number(rhs)])

    lines = _matrix_lines("p", [[format_number(v)] for v in lp.p])
    lines += _matrix_lines("A", A_rows)
    lines += _matrix_lines("b", b_rows)
    return lines


def history_to_text(state: SimplexState) -> str:
    """One line per history entry, the cursor marked with '>'."""
    lines = []
    for index, entry in enumerate(state.history):
        marker = ">" if index == state.current_step else " "
        lines.append(f"{marker} {_entry_label(entry)}")
    return "\n".join(lines)


def _entry_label(entry: TableauHistoryEntry) -> str:
    label = f"Step {entry.step_number}"
    if entry.pivot_row is not None and entry.pivot_col is not None:
        label += f"  pivot ({entry.pivot_row}, {entry.pivot_col})"
    return label


def suggest_pivot(lp: LinearProgram) -> Optional[Tuple[int, int]]:
    """
    Suggest a pivot cell. Advisory only; the caller decides.

    Column: most negative objective coefficient for max, most positive for
    min. Row: minimum ratio -b_i / A_ij over rows with A_ij > 0, keeping
    only non-negative ratios.

    Returns:
        1-based (row, col), or None when no column or no row qualifies
    """
    p = lp.p
    if lp.sense == "max":
        candidates = np.flatnonzero(p < 0)
        if len(candidates) == 0:
            return None
        pivot_col = int(candidates[np.argmin(p[candidates])])
    else:
        candidates = np.flatnonzero(p > 0)
        if len(candidates) == 0:
            return None
        pivot_col = int(candidates[np.argmax(p[candidates])])

    pivot_row = None
    min_ratio = np.inf
    for i in range(lp.num_constraints):
        coeff = lp.A[i, pivot_col]
        if coeff > 0:
            ratio = -lp.b[i] / coeff
            if 0 <= ratio < min_ratio:
                min_ratio = ratio
                pivot_row = i

    if pivot_row is None:
        return None
    return pivot_row + 1, pivot_col + 1

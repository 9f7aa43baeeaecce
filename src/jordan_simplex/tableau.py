"""
Translation between a LinearProgram and its combined tableau.

Layout of the (m+1) x (n+1) tableau:

    [ A_0 | -b_0 ]
    [ ... |  ... ]
    [ A_m-1 | -b_m-1 ]
    [  p  |   0  ]

The last column is the constant column. b is stored negated so the
constant column reads the way the tableau is displayed.
"""

from typing import Sequence

import numpy as np

from .data_models import LinearProgram, as_matrix


def build_tableau(lp: LinearProgram) -> np.ndarray:
    """
    Stack the constraint rows over the objective row.

    Args:
        lp: Linear program in canonical form

    Returns:
        Tableau of shape (m+1, n+1)
    """
    constraint_rows = np.hstack([lp.A, -lp.b.reshape(-1, 1) + 0.0])
    objective_row = np.append(lp.p, 0.0)
    return np.vstack([constraint_rows, objective_row])


def decompose_tableau(
    tableau: np.ndarray,
    sense: str,
    original_operators: Sequence[str]
) -> LinearProgram:
    """
    Split a tableau back into (A, b, p).

    The objective-row constant is discarded. ``sense`` and
    ``original_operators`` are passed through as given.

    Args:
        tableau: Matrix of shape (m+1, n+1)
        sense: "max" or "min"
        original_operators: Display metadata, one entry per constraint row

    Returns:
        LinearProgram read from the tableau
    """
    T = as_matrix(tableau)
    return LinearProgram(
        sense=sense,
        p=T[-1, :-1],
        A=T[:-1, :-1],
        b=-T[:-1, -1] + 0.0,  # no negative zeros
        original_operators=tuple(original_operators),
    )

"""
Jordan exchange (pivot) on a rectangular tableau.

The exchange knows nothing about linear programs. The pivot row is divided
by the pivot; every other row i then loses (a_i / pivot) times the
normalized pivot row, a_i being its entry in the pivot column before the
exchange. The pivot cell always ends up as 1, and once the pivot is 1 the
step is an ordinary Gauss-Jordan step that clears the pivot column.
"""

import logging
from typing import Sequence, Union

import numpy as np

from .data_models import as_matrix
from .exceptions import DegeneratePivotError, PivotOutOfBoundsError

logger = logging.getLogger(__name__)

# Pivots smaller than this in magnitude are rejected
PIVOT_TOLERANCE = 1e-10

MatrixLike = Union[np.ndarray, Sequence[Sequence[float]]]


def jordan_exchange(tableau: MatrixLike, pivot_row: int, pivot_col: int) -> np.ndarray:
    """
    Perform a Jordan exchange on a tableau.

    Args:
        tableau: Matrix (rows x cols); left untouched
        pivot_row: 0-based row index of the pivot element
        pivot_col: 0-based column index of the pivot element

    Returns:
        New tableau after the exchange

    Raises:
        PivotOutOfBoundsError: if the pivot cell is outside the tableau
        DegeneratePivotError: if |pivot| < PIVOT_TOLERANCE
    """
    T = as_matrix(tableau)
    rows, cols = T.shape

    if not (0 <= pivot_row < rows and 0 <= pivot_col < cols):
        raise PivotOutOfBoundsError()

    pivot = T[pivot_row, pivot_col]
    if abs(pivot) < PIVOT_TOLERANCE:
        raise DegeneratePivotError()

    logger.debug(f"Pivoting on ({pivot_row}, {pivot_col}), value {pivot:.6g}")

    normalized = T[pivot_row, :] / pivot

    # Factors come from the original column, before any row is touched
    factors = T[:, pivot_col] / pivot
    result = T - np.outer(factors, normalized)
    result[pivot_row, :] = normalized

    return result

import pytest

from jordan_simplex import LinearProgram


@pytest.fixture
def small_lp():
    """max 3x1 + 2x2 s.t. x1 + x2 <= 4, in canonical form."""
    return LinearProgram(sense="max", p=[3, 2], A=[[-1, -1]], b=[-4], original_operators=("<=",))


@pytest.fixture
def two_row_lp():
    """max 3x1 + 2x2 s.t. x1 + x2 <= 4, x1 + 3x2 <= 6."""
    return LinearProgram(
        sense="max",
        p=[3, 2],
        A=[[-1, -1], [-1, -3]],
        b=[-4, -6],
        original_operators=("<=", "<="),
    )

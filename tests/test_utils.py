import pytest

from jordan_simplex import INITIAL_STATE, LinearProgram, apply_jordan_exchange, set_linear_program
from jordan_simplex.parser import ConstraintInput, build_linear_program
from jordan_simplex.utils import (basic_variable_labels, format_number, history_to_text,
                                  original_form_lines, original_form_matrices, suggest_pivot, tableau_to_text,
                                  variable_names)


@pytest.mark.parametrize("value, expected", [
    (0, "0"),
    (-0.0, "0"),
    (3.0, "3"),
    (-12.0, "-12"),
    (2.5, "2.5"),
    (1 / 3, "0.33"),
    (-0.001, "0"),
])
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_labels():
    assert variable_names(2) == ["x1", "x2"]
    assert basic_variable_labels(2, 2) == ["x3", "x4", "z"]


def test_tableau_to_text(small_lp):
    lines = tableau_to_text(small_lp).splitlines()

    assert lines[0].split("|")[1:] == [" x1 ", " x2 ", " 1"]
    assert [cell.strip() for cell in lines[2].split("|")] == ["x3 =", "-1", "-1", "4"]
    assert [cell.strip() for cell in lines[3].split("|")] == ["z =", "3", "2", "0"]


def test_original_form_restores_entered_operators():
    lp = build_linear_program("max", ["3", "2"], [
        ConstraintInput(["1", "1"], "<=", "4"),
        ConstraintInput(["1", "-1"], "=", "1"),
        ConstraintInput(["1", "0"], ">=", "0"),
    ])

    assert original_form_lines(lp) == [
        "maximize 3x1 + 2x2",
        "subject to",
        "  x1 + x2 <= 4",
        "  x1 - x2 = 1",
        "  -x1 + x2 = -1",
        "  x1 >= 0",
    ]


def test_original_form_empty_row():
    lp = LinearProgram(sense="min", p=[0, 0], A=[[0, 0]], b=[1], original_operators=(">=",))

    assert original_form_lines(lp) == ["minimize 0", "subject to", "  0 >= 1"]


def test_original_form_matrices_negate_less_equal_rows():
    lp = build_linear_program("max", ["3", "2"], [
        ConstraintInput(["1", "1"], "<=", "4"),
        ConstraintInput(["1", "-1"], "=", "1"),
        ConstraintInput(["1", "0"], ">=", "0"),
    ])

    assert original_form_matrices(lp) == [
        "p = [ 3 ]",
        "    [ 2 ]",
        "A = [  1  1 ]",
        "    [  1 -1 ]",
        "    [ -1  1 ]",
        "    [  1  0 ]",
        "b = [  4 ]",
        "    [  1 ]",
        "    [ -1 ]",
        "    [  0 ]",
    ]


def test_original_form_matrices_keep_stored_non_negativity_row():
    lp = LinearProgram(sense="min", p=[1, 1], A=[[1, 0]], b=[0], original_operators=("<=",))

    assert original_form_matrices(lp)[2:] == ["A = [ 1 0 ]", "b = [ 0 ]"]


def test_original_form_matrices_without_constraints():
    lp = LinearProgram(sense="max", p=[1, 2], A=[], b=[])

    assert original_form_matrices(lp) == ["p = [ 1 ]", "    [ 2 ]", "A = [ ]", "b = [ ]"]


def test_history_to_text(small_lp):
    state = set_linear_program(INITIAL_STATE, small_lp)
    state = apply_jordan_exchange(state, 1, 1)

    assert history_to_text(state) == "  Step 0\n> Step 1  pivot (1, 1)"


def test_suggest_pivot_max():
    # x1 + x2 <= 4, x1 + 3x2 <= 6 written with positive column entries
    lp = LinearProgram(
        sense="max",
        p=[-3, -2],
        A=[[1, 1], [1, 3]],
        b=[-4, -6],
        original_operators=(">=", ">="),
    )

    assert suggest_pivot(lp) == (1, 1)


def test_suggest_pivot_min_picks_most_positive():
    lp = LinearProgram(
        sense="min",
        p=[1, 5],
        A=[[2, 1], [1, 4]],
        b=[-8, -4],
        original_operators=(">=", ">="),
    )

    assert suggest_pivot(lp) == (2, 2)


def test_suggest_pivot_none_when_no_column(small_lp):
    assert suggest_pivot(small_lp) is None


def test_suggest_pivot_none_when_no_row():
    lp = LinearProgram(sense="max", p=[-1], A=[[-1]], b=[-1], original_operators=(">=",))

    assert suggest_pivot(lp) is None

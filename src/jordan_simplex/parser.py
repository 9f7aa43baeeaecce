"""
Parsers for user-entered linear programs.

Supports:
- Free-text coefficient fields (empty or invalid fields read as 0)
- A line-based LP text format:

    max: 3 2
    1 1 <= 4
    # comments and blank lines are ignored

Every constraint is normalised to canonical ``>=`` form on the way in.
"""

import logging
import re
from dataclasses import dataclass
from fractions import Fraction
from pathlib import Path
from typing import List, Sequence, Tuple, Union

from .data_models import SENSES, LinearProgram
from .exceptions import MalformedInputError

logger = logging.getLogger(__name__)

Number = Union[str, int, float]

_LEADING_FLOAT = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')
_FRACTION = re.compile(r'^\s*([+-]?\d+)\s*/\s*([+-]?\d+)\s*$')
_CONSTRAINT_LINE = re.compile(r'^(?P<lhs>.*?)\s*(?P<op><=|>=|=)\s*(?P<rhs>\S+)\s*$')
_HEADER_LINE = re.compile(r'^(?P<sense>max|min)\s*:\s*(?P<coeffs>.*)$', re.IGNORECASE)
_PIVOT_COMMAND = re.compile(r'^\s*(?:ljx\s*\(\s*)?(\d+)\s*[, ]\s*(\d+)\s*\)?\s*$', re.IGNORECASE)


@dataclass
class ConstraintInput:
    """One constraint as typed by the user."""
    coefficients: Sequence[Number]
    operator: str
    value: Number


def parse_number(value: Number) -> float:
    """
    Read a coefficient field.

    Empty text and a lone minus sign read as 0. Otherwise the longest
    leading number is used ("2.5x" reads as 2.5); text with no leading
    number reads as 0. Simple fractions such as "3/4" are accepted.
    """
    if isinstance(value, (int, float)):
        return 0.0 if value != value else float(value)

    trimmed = str(value).strip()
    if trimmed in ('', '-'):
        return 0.0

    fraction = _FRACTION.match(trimmed)
    if fraction:
        numerator, denominator = fraction.groups()
        if int(denominator) == 0:
            logger.warning(f"Zero denominator in {trimmed!r}, reading as 0")
            return 0.0
        return float(Fraction(int(numerator), int(denominator)))

    match = _LEADING_FLOAT.match(trimmed)
    if not match:
        return 0.0
    return float(match.group(0))


def canonicalize_constraint(
    row: Sequence[float],
    operator: str,
    rhs: float
) -> List[Tuple[List[float], float, str]]:
    """
    Rewrite one constraint as canonical ``>=`` rows.

    ``<=`` rows are negated, ``=`` rows become two rows (as given, then
    negated), ``>=`` rows pass through.

    Returns:
        List of (row, rhs, original operator) tuples
    """
    row = [float(x) for x in row]
    negated = [-x for x in row]

    if operator == '<=':
        return [(negated, -rhs, '<=')]
    if operator == '=':
        return [(row, rhs, '='), (negated, -rhs, '=')]
    if operator == '>=':
        return [(row, rhs, '>=')]
    raise MalformedInputError(f"Unknown constraint operator: {operator!r}")


def build_linear_program(
    sense: str,
    objective: Sequence[Number],
    constraints: Sequence[ConstraintInput]
) -> LinearProgram:
    """
    Build a canonical LinearProgram from form fields.

    Coefficient rows are padded with zeros or cut to the number of
    objective coefficients.

    Args:
        sense: "max" or "min"
        objective: Objective coefficient fields
        constraints: Constraint fields

    Returns:
        LinearProgram in canonical form
    """
    if sense not in SENSES:
        raise MalformedInputError(f"Unknown optimization sense: {sense!r}")

    p = [parse_number(c) for c in objective]
    num_vars = len(p)

    A: List[List[float]] = []
    b: List[float] = []
    original_operators: List[str] = []

    for constraint in constraints:
        row = [parse_number(c) for c in constraint.coefficients][:num_vars]
        row += [0.0] * (num_vars - len(row))
        rhs = parse_number(constraint.value)

        for canonical_row, canonical_rhs, op in canonicalize_constraint(row, constraint.operator, rhs):
            A.append(canonical_row)
            b.append(canonical_rhs)
            original_operators.append(op)

    logger.debug(f"Built LP with {len(A)} canonical rows from {len(constraints)} constraints")

    return LinearProgram(
        sense=sense,
        p=p,
        A=A,
        b=b,
        original_operators=tuple(original_operators),
    )


def parse_lp_text(text: str) -> LinearProgram:
    """
    Parse the line-based LP format.

    Args:
        text: LP source

    Returns:
        LinearProgram in canonical form
    """
    sense = None
    objective: List[str] = []
    constraints: List[ConstraintInput] = []

    for line_num, raw_line in enumerate(text.splitlines(), 1):
        line = raw_line.split('#', 1)[0].strip()
        if not line:
            continue

        if sense is None:
            header = _HEADER_LINE.match(line)
            if not header:
                raise MalformedInputError(
                    f"Line {line_num}: expected 'max:' or 'min:' followed by objective coefficients"
                )
            sense = header.group('sense').lower()
            objective = header.group('coeffs').split()
            if not objective:
                raise MalformedInputError(f"Line {line_num}: objective has no coefficients")
            continue

        match = _CONSTRAINT_LINE.match(line)
        if not match:
            raise MalformedInputError(f"Line {line_num}: expected coefficients, an operator and a right-hand side")

        coefficients = match.group('lhs').split()
        if len(coefficients) != len(objective):
            raise MalformedInputError(
                f"Line {line_num}: expected {len(objective)} coefficients, got {len(coefficients)}"
            )
        constraints.append(ConstraintInput(coefficients, match.group('op'), match.group('rhs')))

    if sense is None:
        raise MalformedInputError("No objective line found")

    return build_linear_program(sense, objective, constraints)


def parse_lp_file(filepath: Path) -> LinearProgram:
    """
    Parse an LP file in the line-based format.

    Args:
        filepath: Path to LP file

    Returns:
        LinearProgram in canonical form
    """
    logger.info(f"Parsing LP file: {filepath}")
    with open(filepath, 'r') as f:
        content = f.read()
    return parse_lp_text(content)


def parse_pivot_command(text: str) -> Tuple[int, int]:
    """
    Parse a 1-based pivot command such as "2,3", "2 3" or "ljx(2,3)".

    Returns:
        (row, col)
    """
    match = _PIVOT_COMMAND.match(text)
    if not match:
        raise MalformedInputError(f"Please enter valid row and column numbers: {text!r}")
    return int(match.group(1)), int(match.group(2))

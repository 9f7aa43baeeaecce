"""
Data models for the Jordan exchange tableau stepper.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence, Tuple
import numpy as np

from .exceptions import MalformedInputError

SENSES = ("max", "min")
OPERATORS = ("<=", ">=", "=")

# Status vocabulary. Only IDLE, READY and ERROR are produced by the core;
# the others are reserved for callers that judge optimality themselves.
IDLE = "idle"
READY = "ready"
RUNNING = "running"
OPTIMAL = "optimal"
UNBOUNDED = "unbounded"
INFEASIBLE = "infeasible"
ERROR = "error"
STATUSES = (IDLE, READY, RUNNING, OPTIMAL, UNBOUNDED, INFEASIBLE, ERROR)


def _frozen_array(values: Any, ndim: int) -> np.ndarray:
    try:
        arr = np.array(values, dtype=float)
    except (TypeError, ValueError) as e:
        raise MalformedInputError(f"Invalid numeric data: {e}") from e
    if arr.ndim != ndim:
        raise MalformedInputError(f"Expected a {ndim}-dimensional array, got shape {arr.shape}")
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class LinearProgram:
    """
    Linear program with every constraint in canonical ``>=`` form.

    max/min pᵀx
    s.t.    Ax ≥ b

    ``original_operators`` records the operator each canonical row was
    derived from. It only serves to show the problem in the form the user
    typed it and is never read by the pivot logic.
    """
    sense: str
    p: np.ndarray  # Objective coefficients (n)
    A: np.ndarray  # Constraint matrix (m x n)
    b: np.ndarray  # Right-hand side (m)
    original_operators: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        """Copy inputs into read-only arrays and validate dimensions."""
        if self.sense not in SENSES:
            raise MalformedInputError(f"Unknown optimization sense: {self.sense!r}")

        p = _frozen_array(self.p, 1)
        b = _frozen_array(self.b, 1)
        if len(b) == 0 and len(self.A) == 0:
            A = _frozen_array(np.zeros((0, len(p))), 2)
        else:
            A = _frozen_array(self.A, 2)
        operators = tuple(self.original_operators)

        m, n = A.shape
        if n != len(p):
            raise MalformedInputError("p must have same dimension as columns of A")
        if m != len(b):
            raise MalformedInputError("b must have same dimension as rows of A")
        if len(operators) != m:
            raise MalformedInputError("original_operators must have one entry per row of A")
        for op in operators:
            if op not in OPERATORS:
                raise MalformedInputError(f"Unknown constraint operator: {op!r}")

        object.__setattr__(self, 'p', p)
        object.__setattr__(self, 'A', A)
        object.__setattr__(self, 'b', b)
        object.__setattr__(self, 'original_operators', operators)

    @property
    def num_variables(self) -> int:
        return len(self.p)

    @property
    def num_constraints(self) -> int:
        return len(self.b)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LinearProgram):
            return NotImplemented
        return (self.sense == other.sense
                and self.original_operators == other.original_operators
                and np.array_equal(self.p, other.p)
                and np.array_equal(self.A, other.A)
                and np.array_equal(self.b, other.b))

    def __hash__(self) -> int:
        # tolist keeps 0.0 and -0.0 hashing alike, as array_equal treats them
        return hash((self.sense, self.original_operators, tuple(self.p.tolist()),
                     tuple(map(tuple, self.A.tolist())), tuple(self.b.tolist())))

    def to_dict(self) -> Dict[str, Any]:
        """Plain structured document form, as persisted."""
        return {
            "sense": self.sense,
            "p": self.p.tolist(),
            "A": self.A.tolist(),
            "b": self.b.tolist(),
            "originalOperators": list(self.original_operators),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LinearProgram":
        """Inverse of :meth:`to_dict`; raises MalformedInputError on bad input."""
        if not isinstance(data, dict):
            raise MalformedInputError("Linear program must be a mapping")
        try:
            return cls(
                sense=data["sense"],
                p=data["p"],
                A=data["A"],
                b=data["b"],
                original_operators=tuple(data.get("originalOperators", ())),
            )
        except (KeyError, TypeError, ValueError) as e:
            if isinstance(e, MalformedInputError):
                raise
            raise MalformedInputError(f"Invalid linear program: {e}") from e

    def __repr__(self) -> str:
        return (f"LinearProgram(sense={self.sense}, "
                f"constraints={self.num_constraints}, variables={self.num_variables})")


@dataclass(frozen=True)
class TableauHistoryEntry:
    """
    One recorded state of the tableau.

    Entry 0 is the initial setup and carries no pivot. Later entries keep
    the 1-based pivot coordinates that produced them.
    """
    lp: LinearProgram
    step_number: int
    timestamp: int
    pivot_row: Optional[int] = None
    pivot_col: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "lp": self.lp.to_dict(),
            "stepNumber": self.step_number,
            "timestamp": self.timestamp,
        }
        if self.pivot_row is not None:
            data["pivotRow"] = self.pivot_row
        if self.pivot_col is not None:
            data["pivotCol"] = self.pivot_col
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TableauHistoryEntry":
        if not isinstance(data, dict):
            raise MalformedInputError("History entry must be a mapping")
        try:
            pivot_row = data.get("pivotRow")
            pivot_col = data.get("pivotCol")
            return cls(
                lp=LinearProgram.from_dict(data["lp"]),
                step_number=int(data["stepNumber"]),
                timestamp=int(data["timestamp"]),
                pivot_row=int(pivot_row) if pivot_row is not None else None,
                pivot_col=int(pivot_col) if pivot_col is not None else None,
            )
        except (KeyError, TypeError, ValueError) as e:
            if isinstance(e, MalformedInputError):
                raise
            raise MalformedInputError(f"Invalid history entry: {e}") from e

    def __repr__(self) -> str:
        pivot = f", pivot=({self.pivot_row}, {self.pivot_col})" if self.pivot_row is not None else ""
        return f"TableauHistoryEntry(step={self.step_number}{pivot})"


@dataclass(frozen=True)
class SimplexState:
    """
    Snapshot of a stepping session. Transitions never mutate a snapshot.
    """
    lp: Optional[LinearProgram] = None
    history: Tuple[TableauHistoryEntry, ...] = ()
    current_step: int = 0
    status: str = IDLE
    error: Optional[str] = None

    def __repr__(self) -> str:
        return (f"SimplexState(status={self.status}, step={self.current_step}, "
                f"history={len(self.history)}, error={self.error!r})")


INITIAL_STATE = SimplexState()


def as_matrix(rows: Sequence[Sequence[float]]) -> np.ndarray:
    """Convert nested sequences to a float matrix, rejecting ragged input."""
    try:
        matrix = np.array(rows, dtype=float)
    except ValueError as e:
        raise MalformedInputError(f"Matrix rows must have equal length: {e}") from e
    if matrix.ndim != 2 or matrix.shape[0] == 0 or matrix.shape[1] == 0:
        raise MalformedInputError(f"Expected a non-empty 2-dimensional matrix, got shape {matrix.shape}")
    return matrix

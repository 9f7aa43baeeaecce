"""
Exception hierarchy for the tableau pivot engine.

The pivot engine and the input parser raise these; the state transitions
in ``state_manager`` catch them and record them as an ``error`` status.
"""


class SimplexError(Exception):
    """Base class for every error raised by the package."""


class NoProgramError(SimplexError):
    """A pivot was requested while no linear program is set up."""

    def __init__(self, message: str = "No linear program set up"):
        super().__init__(message)


class PivotOutOfBoundsError(SimplexError):
    """Pivot row or column lies outside the tableau."""

    def __init__(self, message: str = "Invalid pivot row or column"):
        super().__init__(message)


class DegeneratePivotError(SimplexError):
    """Pivot element is zero or numerically indistinguishable from zero."""

    def __init__(self, message: str = "Pivot element is too close to zero"):
        super().__init__(message)


class MalformedInputError(SimplexError, ValueError):
    """User input could not be turned into a linear program."""

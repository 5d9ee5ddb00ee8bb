"""Error taxonomy for field, polynomial and commitment operations.

Every error derives from StarkCoreError and from the closest built-in
exception, so callers may catch either.
"""


class StarkCoreError(Exception):
    """Base class for all starkcore errors."""


class InverseUndefinedError(StarkCoreError, ZeroDivisionError):
    """Raised when inverting (or dividing by) the zero field element."""


class DivisionByZeroError(StarkCoreError, ZeroDivisionError):
    """Raised when dividing a polynomial by the zero polynomial."""


class NotExactlyDivisibleError(StarkCoreError, ArithmeticError):
    """Raised by exact division when the remainder is not zero."""

    def __init__(self, remainder) -> None:
        super().__init__(f"Polynomial is not exactly divisible, remainder: {remainder}")
        self.remainder = remainder


class LengthMismatchError(StarkCoreError, ValueError):
    """Raised when interpolation points and values differ in length."""

    def __init__(self, n_points: int, n_values: int) -> None:
        super().__init__(
            f"Interpolation needs one value per point, got {n_points} points and {n_values} values"
        )
        self.n_points = n_points
        self.n_values = n_values


class DuplicatePointsError(StarkCoreError, ValueError):
    """Raised when interpolation points are not pairwise distinct."""

    def __init__(self, point) -> None:
        super().__init__(f"Interpolation points must be distinct, {point} appears more than once")
        self.point = point


class InvariantViolationError(StarkCoreError, RuntimeError):
    """Raised when an internal consistency check fails."""

"""Domain-specific exceptions for sarima.

Every error raised by the estimation core derives from :class:`ArimaError`, so
callers can catch the whole family at once. Each kind also derives from the
builtin exception a plain NumPy user would expect (``ValueError`` for bad
sizes, ``IndexError`` for lag lookups before enough history exists, and so
on), which keeps ``except ValueError`` call sites working.
"""


class ArimaError(Exception):
    """Base exception for all sarima errors."""

    pass


class DimensionMismatchError(ArimaError, ValueError):
    """Raised when vector or matrix sizes are incompatible.

    This exception is raised when:
    - Two vectors of different length are combined in a dot product
    - A matrix is multiplied by a vector whose length differs from its
      column count
    - A right-hand side does not match the system being solved
    """

    pass


class InvalidParameterError(ArimaError, ValueError):
    """Raised when an argument is malformed or out of range.

    This exception is raised when:
    - A size, order or degree is negative or zero where it must be positive
    - A coefficient is requested for a lag that the polynomial does not carry
    - Differencing buffers do not have the sizes implied by the order
    """

    pass


class IndexOutOfRangeError(ArimaError, IndexError):
    """Raised when a lag polynomial is evaluated without enough history."""

    pass


class InsufficientDataError(ArimaError, ValueError):
    """Raised when a series is too short for the requested orders or horizon."""

    pass


class SingularSystemError(ArimaError, ArithmeticError):
    """Raised when an unbounded SPD solve meets an exactly zero pivot."""

    pass


class ForecastFailedError(ArimaError, RuntimeError):
    """Raised by the convenience entry point when any stage of a forecast fails.

    The message carries the text of the original error, which is also chained
    as ``__cause__``.
    """

    pass


__all__ = [
    "ArimaError",
    "DimensionMismatchError",
    "InvalidParameterError",
    "IndexOutOfRangeError",
    "InsufficientDataError",
    "SingularSystemError",
    "ForecastFailedError",
]

"""
LDL^T factorization and solve for symmetric positive (semi-)definite systems.

The factorization marches over the columns once, keeping track of the largest
pivot magnitude seen so far. Each reduced pivot is classified as zero,
positive or negative:

- With an unbounded condition number (``max_condition_number < 0``) a zero
  pivot means the matrix is exactly singular and the decomposition is marked
  as such. Solving against it yields no solution.
- With a bound ``c >= 0`` a zero pivot is replaced by ``1.0`` (first column)
  or ``|running_max / c|``, and a tiny pivot with ``|pivot * c| < running_max``
  is clamped to ``sign * |running_max / c|``. Ill-conditioned normal
  equations are therefore regularized instead of rejected.

Only the symmetric part ``(A_ij + A_ji) / 2`` of the off-diagonal entries is
used.

References:
    - Golub & Van Loan, *Matrix Computations* (2013), section 4.1
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..exceptions import DimensionMismatchError, InvalidParameterError, SingularSystemError
from ..logging import get_logger
from .core import Matrix, Vector

logger = get_logger(__name__)


@dataclass(frozen=True)
class Decomposition:
    """
    Result of :func:`factorize`.

    Attributes:
        d: Diagonal scale vector, shape (n,), or None when singular.
        l: Unit lower-triangular factor stored symmetrically, shape (n, n),
            or None when singular.
        positive: A positive (or substituted zero) pivot was seen.
        negative: A negative pivot was seen.
        singular: An exact zero pivot was met under the unbounded policy.
        max_condition_number: Bound the factorization was computed with.
    """

    d: Optional[np.ndarray]
    l: Optional[np.ndarray]
    positive: bool
    negative: bool
    singular: bool
    max_condition_number: float

    @property
    def size(self) -> int:
        return 0 if self.d is None else self.d.shape[0]


def _regularized_pivot(
    pivot: float, sign: int, running_max: float, max_condition_number: float
) -> float:
    if running_max <= 0.0:
        return 1.0 if sign == 0 else pivot
    floor = abs(running_max / max_condition_number) if max_condition_number != 0 else np.inf
    if sign == 0:
        return floor
    if abs(pivot * max_condition_number) < running_max:
        return sign * floor
    return pivot


def factorize(matrix: Matrix, max_condition_number: float) -> Decomposition:
    """Factorize a square matrix as ``L D L^T``.

    Args:
        matrix: Square, symmetric positive (semi-)definite matrix.
        max_condition_number: Regularization bound, or a negative value for
            the unbounded policy.

    Returns:
        Decomposition value. Its ``singular`` flag is set (and the factors
        are None) when an exact zero pivot is met under the unbounded policy.

    Raises:
        DimensionMismatchError: If the matrix is not square.
    """
    rows, cols = matrix.shape
    if rows != cols:
        raise DimensionMismatchError(f"factorize: matrix must be square, got {rows}x{cols}")
    a = matrix.data
    n = rows
    bounded = max_condition_number >= 0

    d = np.zeros(n)
    l = np.zeros((n, n))
    positive = False
    negative = False
    running_max = -1.0

    for j in range(n):
        reduced = a[j, j] - float(np.sum(d[:j] * l[j, :j] * l[j, :j]))
        sign = int(np.sign(reduced))
        if sign == 0:
            if not bounded:
                logger.debug("zero pivot at column %d under unbounded policy", j)
                return Decomposition(
                    d=None,
                    l=None,
                    positive=positive,
                    negative=negative,
                    singular=True,
                    max_condition_number=max_condition_number,
                )
            positive = True
        elif sign > 0:
            positive = True
        else:
            negative = True

        if bounded:
            clamped = _regularized_pivot(reduced, sign, running_max, max_condition_number)
            if clamped != reduced:
                logger.debug("pivot %d regularized from %g to %g", j, reduced, clamped)
            reduced = clamped

        d[j] = reduced
        if abs(reduced) > running_max:
            running_max = abs(reduced)

        l[j, j] = 1.0
        for i in range(j + 1, n):
            acc = float(np.sum(d[:j] * l[j, :j] * l[i, :j]))
            value = ((a[i, j] + a[j, i]) / 2.0 - acc) / d[j]
            l[j, i] = value
            l[i, j] = value

    return Decomposition(
        d=d,
        l=l,
        positive=positive,
        negative=negative,
        singular=False,
        max_condition_number=max_condition_number,
    )


def solve(decomposition: Decomposition, b: Vector) -> Optional[Vector]:
    """Solve ``L D L^T x = b`` by forward and back substitution.

    Returns:
        The solution, or None if the decomposition is singular.

    Raises:
        DimensionMismatchError: If ``b`` does not match the system size.
    """
    if decomposition.singular:
        return None
    n = decomposition.size
    if len(b) != n:
        raise DimensionMismatchError(
            f"solve: system has size {n}, right-hand side has {len(b)} entries"
        )
    d = decomposition.d
    l = decomposition.l

    x = b.to_array()
    y = np.zeros(n)
    for i in range(n):
        y[i] = x[i] - float(np.dot(l[i, :i], y[:i]))
    for i in range(n - 1, -1, -1):
        x[i] = y[i] / d[i] - float(np.dot(l[i, i + 1 :], x[i + 1 :]))
    return Vector(x, copy=False)


def solve_spd(matrix: Matrix, b: Vector, max_condition_number: float) -> Optional[Vector]:
    """Factorize ``matrix`` with the given bound and solve against ``b``.

    Returns None when the system is exactly singular under the unbounded
    policy; use :func:`require_solution` to turn that into an error.

    Raises:
        DimensionMismatchError: If ``matrix`` column count differs from ``len(b)``.

    Example:
        >>> A = Matrix([[1.0, 1.0], [1.0, 2.0]])
        >>> solve_spd(A, Vector([2.0, 16.0]), -1).to_array()
        array([-12.,  14.])
    """
    if matrix.num_columns != len(b):
        raise DimensionMismatchError(
            f"solve_spd: matrix has {matrix.num_columns} columns, "
            f"right-hand side has {len(b)} entries"
        )
    return solve(factorize(matrix, max_condition_number), b)


def require_solution(solution: Optional[Vector], context: str) -> Vector:
    """Return ``solution`` or raise :class:`SingularSystemError`."""
    if solution is None:
        raise SingularSystemError(f"{context}: linear system is singular")
    return solution


def toeplitz(values: np.ndarray) -> Matrix:
    """Symmetric Toeplitz matrix whose first row is ``values``."""
    values = np.asarray(values, dtype=float)
    if values.ndim != 1 or values.size == 0:
        raise InvalidParameterError(f"toeplitz needs a non-empty 1D array, got shape {values.shape}")
    n = values.size
    idx = np.abs(np.subtract.outer(np.arange(n), np.arange(n)))
    return Matrix(values[idx], copy=False)


__all__ = ["Decomposition", "factorize", "solve", "solve_spd", "require_solution", "toeplitz"]

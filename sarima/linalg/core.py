"""
Dense vector and matrix containers used by the estimators.

Both types wrap a float64 NumPy array and keep their size fixed for their
whole lifetime. They expose only the handful of operations the ARIMA
estimators need: element access, dot products, matrix-vector products, the
Gram matrix ``A A^T`` and a symmetric positive (semi-)definite solve.
"""

from __future__ import annotations

from typing import Optional, Sequence, Union

import numpy as np

from ..exceptions import DimensionMismatchError, IndexOutOfRangeError, InvalidParameterError

ArrayLike = Union[Sequence[float], np.ndarray]


class Vector:
    """
    Fixed-length vector of floats.

    Args:
        data: Values of the vector. Must be one-dimensional and non-empty.
        copy: If True (default) the values are copied. If False and ``data``
            is already a float64 array, the vector aliases it and writes
            through to the caller's buffer.
    """

    def __init__(self, data: ArrayLike, copy: bool = True) -> None:
        if data is None:
            raise InvalidParameterError("Vector data must not be None")
        arr = np.array(data, dtype=float, copy=True) if copy else np.asarray(data, dtype=float)
        if arr.ndim != 1:
            raise InvalidParameterError(f"Vector data must be 1D, got shape {arr.shape}")
        if arr.size == 0:
            raise InvalidParameterError("Vector must have at least one element")
        self._data = arr

    @classmethod
    def full(cls, size: int, value: float = 0.0) -> "Vector":
        """Create a vector of ``size`` entries all equal to ``value``."""
        if size <= 0:
            raise InvalidParameterError(f"Vector size must be > 0, got {size}")
        return cls(np.full(size, float(value)), copy=False)

    def __len__(self) -> int:
        return self._data.shape[0]

    def __repr__(self) -> str:
        return f"Vector({self._data.tolist()!r})"

    def _check_index(self, i: int) -> None:
        if not 0 <= i < len(self):
            raise IndexOutOfRangeError(f"Index: {i}, Size: {len(self)}")

    def get(self, i: int) -> float:
        self._check_index(i)
        return float(self._data[i])

    def set(self, i: int, value: float) -> None:
        self._check_index(i)
        self._data[i] = value

    def dot(self, other: "Vector") -> float:
        """Return the sum of element-wise products with ``other``."""
        if len(self) != len(other):
            raise DimensionMismatchError(
                f"dot: vector sizes differ ({len(self)} vs {len(other)})"
            )
        return float(np.dot(self._data, other._data))

    def to_array(self) -> np.ndarray:
        """Return a copy of the values as a NumPy array."""
        return self._data.copy()

    @property
    def data(self) -> np.ndarray:
        """Underlying array (not copied)."""
        return self._data


class Matrix:
    """
    Rectangular matrix of floats.

    Args:
        data: Row-major values. Must be two-dimensional, rectangular and
            non-empty.
        copy: Whether to copy ``data`` (default) or alias it.

    Note:
        A matrix holds no decomposition state. Factorizations are explicit
        values produced by :func:`sarima.linalg.cholesky.factorize`.
    """

    def __init__(self, data: Union[Sequence[Sequence[float]], np.ndarray], copy: bool = True) -> None:
        if data is None:
            raise InvalidParameterError("Matrix data must not be None")
        if not isinstance(data, np.ndarray):
            rows = list(data)
            if not rows or rows[0] is None or len(rows[0]) == 0:
                raise InvalidParameterError("Matrix data must be non-empty")
            width = len(rows[0])
            if any(row is None or len(row) != width for row in rows):
                raise InvalidParameterError("Matrix rows must all have the same length")
            data = rows
        arr = np.array(data, dtype=float, copy=True) if copy else np.asarray(data, dtype=float)
        if arr.ndim != 2:
            raise InvalidParameterError(f"Matrix data must be 2D, got shape {arr.shape}")
        if arr.shape[0] == 0 or arr.shape[1] == 0:
            raise InvalidParameterError(f"Matrix must be non-empty, got shape {arr.shape}")
        self._data = arr

    @property
    def shape(self) -> tuple[int, int]:
        return self._data.shape  # type: ignore[return-value]

    @property
    def num_rows(self) -> int:
        return self._data.shape[0]

    @property
    def num_columns(self) -> int:
        return self._data.shape[1]

    @property
    def data(self) -> np.ndarray:
        """Underlying array (not copied)."""
        return self._data

    def __repr__(self) -> str:
        return f"Matrix({self._data.tolist()!r})"

    def _check_index(self, i: int, j: int) -> None:
        rows, cols = self.shape
        if not (0 <= i < rows and 0 <= j < cols):
            raise IndexOutOfRangeError(f"Index: ({i}, {j}), Size: {rows}x{cols}")

    def get(self, i: int, j: int) -> float:
        self._check_index(i, j)
        return float(self._data[i, j])

    def set(self, i: int, j: int, value: float) -> None:
        self._check_index(i, j)
        self._data[i, j] = value

    def times_vector(self, v: Vector) -> Vector:
        """Return ``A v`` as a vector of length ``num_rows``."""
        if self.num_columns != len(v):
            raise DimensionMismatchError(
                f"times_vector: matrix has {self.num_columns} columns, "
                f"vector has {len(v)} entries"
            )
        out = np.empty(self.num_rows)
        for i in range(self.num_rows):
            out[i] = Vector(self._data[i], copy=False).dot(v)
        return Vector(out, copy=False)

    def compute_aat(self) -> "Matrix":
        """Return the ``num_rows x num_rows`` Gram matrix ``A A^T``."""
        return Matrix(self._data @ self._data.T, copy=False)

    def solve_spd(self, b: Vector, max_condition_number: float) -> Optional[Vector]:
        """Solve ``A x = b`` for symmetric positive (semi-)definite ``A``.

        Returns None when the matrix is exactly singular and
        ``max_condition_number`` is negative. See
        :func:`sarima.linalg.cholesky.solve_spd`.
        """
        from .cholesky import solve_spd

        return solve_spd(self, b, max_condition_number)


def dot(u: Vector, v: Vector) -> float:
    """Dot product of two equal-length vectors."""
    return u.dot(v)


def matrix_times_vector(a: Matrix, v: Vector) -> Vector:
    """Matrix-vector product ``a v``."""
    return a.times_vector(v)


def compute_aat(a: Matrix) -> Matrix:
    """Gram matrix ``a a^T``."""
    return a.compute_aat()


__all__ = ["Vector", "Matrix", "dot", "matrix_times_vector", "compute_aat"]

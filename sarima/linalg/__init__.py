"""
Small dense linear-algebra kernel for the ARIMA estimators.

The kernel offers fixed-size vectors and matrices, matrix-vector and Gram
products, and a regularized LDL^T solver for the normal equations that arise
in Yule-Walker and Hannan-Rissanen estimation. Factorizations are explicit
values, so a matrix never carries hidden solver state.
"""

from . import cholesky, core
from .cholesky import Decomposition, factorize, require_solution, solve, solve_spd, toeplitz
from .core import Matrix, Vector, compute_aat, dot, matrix_times_vector

__all__ = [
    "cholesky",
    "core",
    # Containers
    "Vector",
    "Matrix",
    # Products
    "dot",
    "matrix_times_vector",
    "compute_aat",
    "toeplitz",
    # Solvers
    "Decomposition",
    "factorize",
    "solve",
    "solve_spd",
    "require_solution",
]

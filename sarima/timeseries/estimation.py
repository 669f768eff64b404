"""Parameter estimation routines for seasonal ARMA models.

This module provides the two estimators used by the ARIMA pipeline:

- Yule-Walker estimation of a long AR model, used as initializer
- Hannan-Rissanen iterative two-stage least squares for the full set of
  seasonal and non-seasonal AR/MA coefficients

Both expect a stationary, zero-mean series; differencing and centering are
done by :mod:`sarima.timeseries.solver`.

References:
    - Hannan & Rissanen (1982): "Recursive estimation of mixed
      autoregressive-moving average order", Biometrika 69(1)
    - Brockwell & Davis (2016): Introduction to Time Series and Forecasting,
      section 5.1
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from ..config import DEFAULT_CONFIG
from ..exceptions import InsufficientDataError, InvalidParameterError
from ..linalg import Matrix, Vector, require_solution, solve_spd, toeplitz
from ..logging import get_logger
from .arma import forecast_arma
from .backshift import LagSet
from .params import ModelParameters
from .utils import autocovariance, rmse

logger = get_logger(__name__)


@dataclass
class EstimationResult:
    """Outcome of :func:`hannan_rissanen`.

    Attributes:
        params: Installed parameter vector (AR coefficients then MA).
        rmse: Held-out RMSE of the installed parameters.
        iterations: Number of refinement rounds run.
        rmse_history: Held-out RMSE of every round, in order.
        yule_walker: Coefficients of the long AR initializer.
    """

    params: np.ndarray
    rmse: float
    iterations: int
    rmse_history: List[float] = field(default_factory=list)
    yule_walker: Optional[np.ndarray] = None


def yule_walker(
    data: np.ndarray,
    order: int,
    max_condition_number: float = DEFAULT_CONFIG.max_condition_number,
) -> np.ndarray:
    """Estimate AR(order) coefficients from the Yule-Walker equations.

    Solves ``R φ = [r(1), ..., r(order)]`` where ``R`` is the Toeplitz matrix
    built from ``r(0), ..., r(order-1)`` and the autocovariances are
    normalized by the full series length.

    Args:
        data: Zero-mean 1D series, shape (n,).
        order: AR order. Must be >= 1.
        max_condition_number: Regularization bound handed to the SPD solver.

    Returns:
        Coefficients [φ_1, ..., φ_order]; entry ``i`` belongs to lag ``i + 1``.

    Raises:
        InvalidParameterError: If the series is empty or ``order < 1``.
        SingularSystemError: If the Toeplitz system is singular under the
            unbounded policy.

    Example:
        >>> x = np.array([1.0, -1.0, 1.0, -1.0, 1.0, -1.0])
        >>> phi = yule_walker(x, 1)
        >>> round(float(phi[0]), 4)
        -0.8333
    """
    x = np.asarray(data, dtype=float)
    if x.ndim != 1 or x.size == 0 or order < 1:
        raise InvalidParameterError(
            f"yule_walker: invalid parameters length={x.size}, order={order}"
        )

    r = autocovariance(x, order)
    system = toeplitz(r[:order])
    rhs = Vector(r[1 : order + 1])
    solution = require_solution(solve_spd(system, rhs, max_condition_number), "yule_walker")
    return solution.to_array()


def _initial_errors(data: np.ndarray, r: int, length: int, phi: np.ndarray) -> np.ndarray:
    long_ar = LagSet(r, initial=True).freeze(include_zero=False)
    for lag, value in enumerate(phi, start=1):
        long_ar.set(lag, value)
    errors = np.zeros(length)
    for t in range(r, length):
        errors[t] = data[t] - long_ar.evaluate(data, t)
    return errors


def _design_matrix(
    params: ModelParameters, data: np.ndarray, errors: np.ndarray, r: int, size: int
) -> Matrix:
    rows = [data[r - lag : r - lag + size] for lag in params.offsets_ar]
    rows += [errors[r - lag : r - lag + size] for lag in params.offsets_ma]
    return Matrix(np.vstack(rows), copy=True)


def hannan_rissanen(
    data: np.ndarray,
    params: ModelParameters,
    holdout: int,
    max_iterations: int = DEFAULT_CONFIG.max_iterations,
    max_condition_number: float = DEFAULT_CONFIG.max_condition_number,
) -> EstimationResult:
    """Estimate ARMA coefficients by iterated two-stage least squares.

    The last ``holdout`` points are used only to score each round. Steps:

    1. Fit a long AR(r) model by Yule-Walker, with
       ``r = 1 + max(deg AR, deg MA)``, and take its residuals as initial
       innovation estimates (zero for ``t < r``).
    2. Regress ``x_t`` on the lagged values at the AR offsets and the lagged
       residuals at the MA offsets, solving the normal equations with the
       regularized SPD solver.
    3. Install the candidate, score its forecast of the held-out tail, and
       rebuild the residuals from the new coefficients.

    After ``max_iterations`` rounds the candidate with the smallest held-out
    RMSE is installed (ties keep the earliest). The iteration is a heuristic
    and need not converge.

    Args:
        data: Stationary, zero-mean series, shape (n,).
        params: Model whose AR/MA polynomials receive the estimates. Modified.
        holdout: Number of trailing points reserved for validation.
        max_iterations: Number of refinement rounds. Must be >= 1.
        max_condition_number: Regularization bound for the SPD solver.

    Returns:
        EstimationResult describing the installed coefficients.

    Raises:
        InsufficientDataError: If the model has no coefficients to estimate or
            ``len(data) - holdout < 2r``.
        SingularSystemError: If any least-squares system is exactly singular.
    """
    data = np.array(data, dtype=float, copy=True)
    if max_iterations < 1:
        raise InvalidParameterError(f"max_iterations must be >= 1, got {max_iterations}")
    if holdout < 0:
        raise InvalidParameterError(f"holdout must be >= 0, got {holdout}")
    if params.num_params == 0:
        raise InsufficientDataError(
            "model has no AR or MA coefficients to estimate "
            f"({params.order.summary()})"
        )

    total = len(data)
    r = 1 + max(params.degree_ar, params.degree_ma)
    length = total - holdout
    size = length - r
    if length < 2 * r:
        raise InsufficientDataError(f"not enough data points: length={length}, r={r}")

    phi = yule_walker(data, r, max_condition_number)
    errors = _initial_errors(data, r, length, phi)
    target = Vector(data[r : r + size])

    best_params: Optional[Vector] = None
    best_rmse = -1.0
    history: List[float] = []

    for iteration in range(max_iterations):
        z = _design_matrix(params, data, errors, r, size)
        estimate = require_solution(
            solve_spd(z.compute_aat(), z.times_vector(target), max_condition_number),
            f"hannan_rissanen iteration {iteration}",
        )
        params.set_params_from_vector(estimate)

        if holdout > 0:
            forecasts = forecast_arma(params, data, length, total)
            score = rmse(data, forecasts, length, 0, holdout)
        else:
            score = 0.0
        history.append(score)

        in_sample = forecast_arma(params, data, r, total)
        errors[r : r + size] = data[r : r + size] - in_sample[:size]

        logger.debug("hannan_rissanen iteration %d: held-out rmse=%g", iteration, score)
        if best_rmse < 0 or score < best_rmse:
            best_params = estimate
            best_rmse = score

    params.set_params_from_vector(best_params)
    return EstimationResult(
        params=best_params.to_array(),
        rmse=best_rmse,
        iterations=max_iterations,
        rmse_history=history,
        yule_walker=phi,
    )


__all__ = ["EstimationResult", "yule_walker", "hannan_rissanen"]

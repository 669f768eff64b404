"""Estimation and forecasting pipeline for seasonal ARIMA models.

Both entry points run the same strictly sequential pipeline on the training
prefix ``data[:forecast_start]``:

    raw -> differenced -> centered -> (estimated | forecast)
        -> un-centered -> integrated -> result

Seasonal differencing (when ``D > 0`` and ``m > 0``) is applied before
non-seasonal differencing; integration runs in the opposite order and
replays the initial conditions captured at each level. The mean of the
differenced series is removed before the ARMA stage and added back after it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import numpy as np

from ..config import DEFAULT_CONFIG, ForecastConfig
from ..exceptions import InsufficientDataError
from ..logging import get_logger
from .arma import forecast_arma
from .estimation import hannan_rissanen
from .params import ModelParameters
from .result import ForecastResult
from .utils import mean, rmse, shift, variance

if TYPE_CHECKING:
    from .models import ArimaModel

logger = get_logger(__name__)


def _check_data_length(
    params: ModelParameters, data: np.ndarray, start: int, end: int
) -> None:
    needed = params.order.initial_condition_size
    if len(data) < needed or start < needed or end <= start or start > len(data):
        raise InsufficientDataError(
            f"not enough data for ARIMA. needed at least {needed}, have {len(data)}, "
            f"start_index={start}, end_index={end}"
        )


def _difference(params: ModelParameters, training: np.ndarray) -> np.ndarray:
    stationary = np.array(training, dtype=float, copy=True)
    if params.order.has_seasonal_differencing:
        stationary = params.difference_seasonal(stationary)
    if params.order.has_non_seasonal_differencing:
        stationary = params.difference_non_seasonal(stationary)
    # Later stages shift in place; never alias the captured level buffers.
    return stationary.copy()


def _integrate(params: ModelParameters, stationary: np.ndarray) -> np.ndarray:
    merged = np.array(stationary, dtype=float, copy=True)
    if params.order.has_non_seasonal_differencing:
        merged = params.integrate_non_seasonal(merged)
    if params.order.has_seasonal_differencing:
        merged = params.integrate_seasonal(merged)
    return merged


def _stationary_training(
    params: ModelParameters, data: np.ndarray, forecast_start: int
) -> tuple[np.ndarray, float]:
    stationary = _difference(params, np.asarray(data, dtype=float)[:forecast_start])
    center = mean(stationary)
    shift(stationary, -center)
    logger.debug(
        "differenced %d training points to %d, mean=%g",
        forecast_start,
        len(stationary),
        center,
    )
    return stationary, center


def estimate_arima(
    params: ModelParameters,
    data: np.ndarray,
    forecast_start: int,
    forecast_end: int,
    config: Optional[ForecastConfig] = None,
) -> "ArimaModel":
    """Fit ``params`` on ``data[:forecast_start]``.

    The last ``forecast_end - forecast_start`` points of the stationary
    training series are held out by the Hannan-Rissanen estimator to pick
    its best iterate.

    Args:
        params: Model to estimate. Modified.
        data: Raw series (before differencing/centering). Not modified.
        forecast_start: Number of leading points used for training.
        forecast_end: ``forecast_start`` plus the holdout length.
        config: Solver constants. Defaults to :data:`DEFAULT_CONFIG`.

    Returns:
        Fitted model over ``data`` with training size ``forecast_start``.

    Raises:
        InsufficientDataError: If the series is too short for the orders.
        SingularSystemError: If a least-squares system is exactly singular.
    """
    from .models import ArimaModel

    config = config or DEFAULT_CONFIG
    data = np.asarray(data, dtype=float)
    _check_data_length(params, data, forecast_start, forecast_end)

    stationary, _ = _stationary_training(params, data, forecast_start)
    estimation = hannan_rissanen(
        stationary,
        params,
        forecast_end - forecast_start,
        max_iterations=config.max_iterations,
        max_condition_number=config.max_condition_number,
    )
    logger.debug(
        "estimated %s in %d iterations, held-out rmse=%g",
        params.order.summary(),
        estimation.iterations,
        estimation.rmse,
    )
    return ArimaModel(params, data, forecast_start, config=config, estimation=estimation)


def forecast_arima(
    params: ModelParameters,
    data: np.ndarray,
    forecast_start: int,
    forecast_end: int,
) -> ForecastResult:
    """Forecast indices ``[forecast_start, forecast_end)`` of the raw series.

    Uses the coefficients already installed in ``params``; only
    ``data[:forecast_start]`` is read.

    Raises:
        InsufficientDataError: If the window or series length is invalid.
    """
    data = np.asarray(data, dtype=float)
    _check_data_length(params, data, forecast_start, forecast_end)
    horizon = forecast_end - forecast_start

    stationary, center = _stationary_training(params, data, forecast_start)
    data_variance = variance(stationary)

    n = len(stationary)
    extended = np.empty(n + horizon)
    extended[:n] = stationary
    extended[n:] = forecast_arma(params, stationary, n, n + horizon)
    shift(extended, center)

    merged = _integrate(params, extended)
    return ForecastResult(merged[forecast_start:forecast_end], data_variance)


def rmse_validation(
    data: np.ndarray,
    test_fraction: float,
    params: ModelParameters,
    config: Optional[ForecastConfig] = None,
) -> float:
    """RMSE of a forecast of the trailing ``test_fraction`` of ``data``.

    The model is estimated on the leading part only.

    Args:
        data: Raw series.
        test_fraction: Share of points held out, ``int(len(data) * fraction)``.
        params: Fresh model instance to estimate. Modified.
        config: Solver constants.
    """
    data = np.asarray(data, dtype=float)
    test_length = int(len(data) * test_fraction)
    train_end = len(data) - test_length

    model = estimate_arima(params, data, train_end, len(data), config=config)
    forecast = model.forecast(test_length).forecast
    return rmse(data, forecast, train_end, 0, len(forecast))


def set_sigma2_and_prediction_interval(
    params: ModelParameters,
    result: ForecastResult,
    z_score: float = DEFAULT_CONFIG.z_score,
) -> float:
    """Populate ``result`` bounds from the psi weights of ``params``."""
    return result.set_sigma2_and_prediction_interval(params, z_score)


__all__ = [
    "estimate_arima",
    "forecast_arima",
    "rmse_validation",
    "set_sigma2_and_prediction_interval",
]

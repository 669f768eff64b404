"""One-call seasonal ARIMA forecasting.

:func:`forecast_arima` wires the estimator, the validation RMSE and the
confidence interval together for the common case of forecasting past the end
of a series:

1. Estimate the model on the whole series, scoring Hannan-Rissanen rounds on
   a one-step holdout.
2. Re-estimate an independent copy on the leading part of the series and
   measure its RMSE on the trailing ``test_set_fraction``.
3. Forecast ``horizon`` steps with the first model and set confidence bounds
   from its psi weights scaled by the validation RMSE.

Example:
    >>> import numpy as np
    >>> from sarima import forecast_arima
    >>> data = np.array([2.0, 1.0, 2.0, 5.0] * 4)
    >>> result = forecast_arima(data, 1, (3, 0, 3, 1, 1, 0, 0))
    >>> round(float(result.forecast[0]), 6)
    2.0
"""

from __future__ import annotations

from typing import Optional, Sequence, Union

import numpy as np

from .config import DEFAULT_CONFIG, ForecastConfig
from .exceptions import ArimaError, ForecastFailedError, InvalidParameterError
from .logging import get_logger
from .timeseries.params import ModelOrder, ModelParameters
from .timeseries.result import ForecastResult
from .timeseries.solver import estimate_arima, rmse_validation

logger = get_logger(__name__)

OrderLike = Union[ModelOrder, Sequence[int]]


def check_1d_array(x) -> np.ndarray:
    """Validate and cast input to a non-empty 1D float64 array.

    Raises:
        InvalidParameterError: If input is not 1D, is empty, or contains
            NaN or Inf.
    """
    arr = np.asarray(x, dtype=float)
    if arr.ndim != 1:
        raise InvalidParameterError(f"Expected 1D array, got {arr.ndim}D array")
    if arr.size == 0:
        raise InvalidParameterError("Input is empty")
    if np.any(np.isnan(arr)):
        raise InvalidParameterError("Input contains NaN values")
    if np.any(np.isinf(arr)):
        raise InvalidParameterError("Input contains Inf values")
    return arr


def as_model_order(order: OrderLike) -> ModelOrder:
    """Accept a :class:`ModelOrder` or a (p, d, q, P, D, Q, m) sequence."""
    if isinstance(order, ModelOrder):
        return order
    values = tuple(order)
    if len(values) != 7:
        raise InvalidParameterError(
            f"order must have 7 entries (p, d, q, P, D, Q, m), got {len(values)}"
        )
    return ModelOrder(*values)


def forecast_arima(
    data,
    horizon: int,
    order: OrderLike,
    config: Optional[ForecastConfig] = None,
) -> ForecastResult:
    """Fit a seasonal ARIMA model and forecast past the end of ``data``.

    Args:
        data: Evenly spaced univariate series, shape (n,).
        horizon: Number of steps to forecast. Must be >= 1.
        order: Model orders as :class:`ModelOrder` or a 7-tuple
            (p, d, q, P, D, Q, m).
        config: Solver constants. Defaults to :data:`DEFAULT_CONFIG`.

    Returns:
        ForecastResult with point forecasts, confidence bounds, validation
        RMSE and a one-line log of the model summary.

    Raises:
        ForecastFailedError: If validation, estimation or forecasting fails.
            The original error is chained as ``__cause__``.
    """
    config = config or DEFAULT_CONFIG
    try:
        series = check_1d_array(data)
        if horizon < 1:
            raise InvalidParameterError(f"horizon must be >= 1, got {horizon}")
        model_order = as_model_order(order)

        params_forecast = ModelParameters(model_order)
        params_validation = ModelParameters(model_order)
        n = len(series)

        model = estimate_arima(params_forecast, series, n, n + 1, config=config)
        model.rmse = rmse_validation(
            series, config.test_set_fraction, params_validation, config=config
        )
        result = model.forecast(horizon)
        result.set_sigma2_and_prediction_interval(params_forecast, config.z_score)

        entry = {
            "Best ModelInterface Param": params_forecast.summary(),
            "Forecast Size": horizon,
            "Input Size": n,
        }
        result.log(str(entry))
        logger.info("forecast %d steps from %d points with %s", horizon, n, model_order.summary())
        return result
    except ArimaError as exc:
        raise ForecastFailedError(f"Failed to build ARIMA forecast: {exc}") from exc


__all__ = ["forecast_arima", "check_1d_array", "as_model_order", "OrderLike"]

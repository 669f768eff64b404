"""Seasonal ARIMA estimation and forecasting.

This package provides the pieces of the Hannan-Rissanen SARIMA pipeline:
lag polynomials, differencing, Yule-Walker and Hannan-Rissanen estimation,
and the forecasting orchestration with confidence intervals.

Example:
    >>> import numpy as np
    >>> from sarima.timeseries import ModelParameters, estimate_arima
    >>>
    >>> data = np.full(20, 2.0)
    >>> params = ModelParameters.from_orders(0, 0, 1)
    >>> model = estimate_arima(params, data, len(data), len(data) + 1)
    >>> model.forecast(1).forecast
    array([2.])

References:
    - Box & Jenkins (1976): Time Series Analysis: Forecasting and Control
    - Hannan & Rissanen (1982): Recursive estimation of mixed
      autoregressive-moving average order
"""

from __future__ import annotations

from .arma import forecast_arma
from .backshift import FrozenPolynomial, LagSet
from .estimation import EstimationResult, hannan_rissanen, yule_walker
from .models import ArimaModel
from .params import ModelOrder, ModelParameters
from .result import ForecastResult
from .solver import (
    estimate_arima,
    forecast_arima,
    rmse_validation,
    set_sigma2_and_prediction_interval,
)
from .utils import (
    arma_to_ma,
    autocovariance,
    cumulative_root_sum_of_squares,
    difference,
    integrate,
    mean,
    rmse,
    shift,
    variance,
)

__all__ = [
    # Models
    "ArimaModel",
    "ModelOrder",
    "ModelParameters",
    "ForecastResult",
    # Lag polynomials
    "LagSet",
    "FrozenPolynomial",
    # Estimation
    "EstimationResult",
    "yule_walker",
    "hannan_rissanen",
    # Pipeline
    "forecast_arma",
    "estimate_arima",
    "forecast_arima",
    "rmse_validation",
    "set_sigma2_and_prediction_interval",
    # Utilities
    "difference",
    "integrate",
    "shift",
    "mean",
    "variance",
    "autocovariance",
    "rmse",
    "arma_to_ma",
    "cumulative_root_sum_of_squares",
]

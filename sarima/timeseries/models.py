"""Fitted seasonal ARIMA model.

:func:`sarima.timeseries.solver.estimate_arima` returns an :class:`ArimaModel`
holding the estimated parameters together with the series they were fitted
on. Forecasting from it re-runs the differencing/centering pipeline on the
training prefix and integrates the ARMA forecast back to the original scale.

Example:
    >>> import numpy as np
    >>> from sarima.timeseries import ModelParameters, estimate_arima
    >>> data = np.array([2.0, 1.0, 2.0, 5.0] * 4)
    >>> params = ModelParameters.from_orders(3, 0, 3, 1, 1, 0, 0)
    >>> model = estimate_arima(params, data, len(data), len(data) + 1)
    >>> result = model.forecast(1)
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..config import DEFAULT_CONFIG, ForecastConfig
from ..exceptions import InvalidParameterError
from .estimation import EstimationResult
from .params import ModelParameters
from .result import ForecastResult
from .solver import forecast_arima


class ArimaModel:
    """Seasonal ARIMA model with installed coefficients.

    Args:
        params: Estimated model parameters. Shared, not copied.
        data: Raw series the model was fitted on.
        train_size: Number of leading points used for training; forecasts
            start at this index.
        config: Solver constants used for the fit.
        estimation: Diagnostics from the estimator, if available.

    Attributes:
        rmse: RMSE attached to every forecast, -1 until set by the caller
            (typically the validation RMSE).
    """

    def __init__(
        self,
        params: ModelParameters,
        data: np.ndarray,
        train_size: int,
        config: Optional[ForecastConfig] = None,
        estimation: Optional[EstimationResult] = None,
    ) -> None:
        self.params = params
        self.data = np.array(data, dtype=float, copy=True)
        if train_size < 0 or train_size > len(self.data):
            raise InvalidParameterError(
                f"train_size must be in [0, {len(self.data)}], got {train_size}"
            )
        self.train_size = train_size
        self.config = config or DEFAULT_CONFIG
        self.estimation = estimation
        self.rmse = -1.0

    def __repr__(self) -> str:
        return (
            f"ArimaModel({self.params.order.summary()}, train_size={self.train_size}, "
            f"rmse={self.rmse:g})"
        )

    def forecast(self, horizon: int) -> ForecastResult:
        """Forecast ``horizon`` points past the training prefix.

        Args:
            horizon: Number of steps ahead.

        Returns:
            ForecastResult carrying this model's RMSE. Bounds are not set.
        """
        result = forecast_arima(
            self.params, self.data, self.train_size, self.train_size + horizon
        )
        result._set_rmse(self.rmse)
        return result


__all__ = ["ArimaModel"]

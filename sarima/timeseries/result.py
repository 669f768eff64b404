"""Forecast output container."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import numpy as np

from ..config import Z_SCORE_95
from ..exceptions import DimensionMismatchError
from .utils import arma_to_ma, cumulative_root_sum_of_squares

if TYPE_CHECKING:
    from .params import ModelParameters

_ZERO_VARIANCE = 1e-7


class ForecastResult:
    """
    Point forecast with confidence bounds and fit diagnostics.

    The bounds start equal to the forecast. The orchestrator fills in the
    RMSE and the confidence interval once, before handing the result to the
    caller; afterwards only :meth:`log` appends to it.

    Args:
        forecast: Point forecasts, shape (h,).
        data_variance: Sample variance of the centered, differenced
            training series.
        rmse: Validation RMSE, -1 when unknown.
    """

    def __init__(self, forecast: np.ndarray, data_variance: float, rmse: float = -1.0) -> None:
        self._forecast = np.array(forecast, dtype=float, copy=True)
        self._upper = self._forecast.copy()
        self._lower = self._forecast.copy()
        self.data_variance = float(data_variance)
        self._rmse = float(rmse)
        self._max_normalized_variance = -1.0
        self._log: List[str] = []

    def __len__(self) -> int:
        return self._forecast.shape[0]

    def __repr__(self) -> str:
        return (
            f"ForecastResult(forecast={self._forecast.tolist()!r}, rmse={self.rmse:g}, "
            f"max_normalized_variance={self.max_normalized_variance:g})"
        )

    @property
    def rmse(self) -> float:
        """Validation RMSE, -1 until set."""
        return self._rmse

    def _set_rmse(self, rmse: float) -> None:
        # Package-internal: the model copies its validation RMSE in.
        self._rmse = float(rmse)

    @property
    def max_normalized_variance(self) -> float:
        """Largest ``bound**2 / data_variance`` over the horizon, -1 until computed."""
        return self._max_normalized_variance

    @property
    def forecast(self) -> np.ndarray:
        return self._forecast.copy()

    @property
    def upper(self) -> np.ndarray:
        return self._upper.copy()

    @property
    def lower(self) -> np.ndarray:
        return self._lower.copy()

    @property
    def conf_int(self) -> np.ndarray:
        """Bounds stacked as shape (2, h): row 0 lower, row 1 upper."""
        return np.vstack([self._lower, self._upper])

    def normalized_variance(self, value: float) -> float:
        """Scale ``value`` by the data variance.

        Returns -1 for negative inputs and ``value`` unchanged when the data
        variance is effectively zero.
        """
        if value < -0.5 or self.data_variance < -0.5:
            return -1.0
        if self.data_variance < _ZERO_VARIANCE:
            return value
        return abs(value / self.data_variance)

    def set_confidence_interval(self, z_score: float, cumulative: np.ndarray) -> float:
        """Set symmetric bounds ``forecast ± z_score * rmse * cumulative``.

        Args:
            z_score: Normal quantile of the two-sided interval.
            cumulative: Per-horizon scale, e.g. root cumulative sum of squared
                psi weights. Length must be at least the horizon.

        Returns:
            Maximum normalized variance over the horizon.
        """
        h = len(self)
        if len(cumulative) < h:
            raise DimensionMismatchError(
                f"need {h} interval scales, got {len(cumulative)}"
            )
        bounds = z_score * self.rmse * np.asarray(cumulative[:h], dtype=float)
        self._upper = self._forecast + bounds
        self._lower = self._forecast - bounds

        max_normalized = -1.0
        for bound in bounds:
            normalized = self.normalized_variance(bound * bound)
            if normalized > max_normalized:
                max_normalized = normalized
        return max_normalized

    def set_sigma2_and_prediction_interval(
        self, params: "ModelParameters", z_score: float = Z_SCORE_95
    ) -> float:
        """Compute bounds from the psi weights of the installed coefficients."""
        psi = arma_to_ma(
            params.current_ar_coefficients(), params.current_ma_coefficients(), len(self)
        )
        self._max_normalized_variance = self.set_confidence_interval(
            z_score, cumulative_root_sum_of_squares(psi)
        )
        return self._max_normalized_variance

    def log(self, message: str) -> None:
        """Append a line to the diagnostic log."""
        self._log.append(message)

    @property
    def log_text(self) -> str:
        return "".join(f"{line}\n" for line in self._log)


__all__ = ["ForecastResult"]

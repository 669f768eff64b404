"""ARMA recursion on a stationary, centered series."""

from __future__ import annotations

import numpy as np

from ..exceptions import InvalidParameterError
from .params import ModelParameters


def forecast_arma(
    params: ModelParameters, data: np.ndarray, start: int, end: int
) -> np.ndarray:
    """Run the ARMA recursion and return the values predicted for ``[start, end)``.

    Residuals are reconstructed for indices ``max(deg AR, deg MA) .. start``
    from ``data``. From ``start`` on, the model's own predictions are fed back
    as history and future residuals are zero, so the output is a multi-step
    forecast.

    Args:
        params: Model with installed AR/MA coefficients.
        data: Stationary, centered series. Only ``data[:start]`` is read.
        start: First forecast index, ``0 <= start <= len(data)``.
        end: One past the last forecast index, ``end > start``.

    Returns:
        Forecasts, shape (end - start,).
    """
    if start < 0 or start > len(data) or end <= start:
        raise InvalidParameterError(
            f"forecast_arma: invalid window start={start}, end={end}, len(data)={len(data)}"
        )
    history = np.zeros(end)
    history[:start] = data[:start]
    errors = np.zeros(end)
    first = max(params.degree_ar, params.degree_ma)

    for j in range(first, start):
        errors[j] = history[j] - params.forecast_one_point(history, errors, j)

    forecasts = np.zeros(end - start)
    for j in range(start, end):
        value = params.forecast_one_point(history, errors, j)
        history[j] = value
        forecasts[j - start] = value
    return forecasts


__all__ = ["forecast_arma"]

"""Utility functions for ARIMA estimation and forecasting.

This module provides the numeric helpers shared by the estimators and the
forecasting pipeline:

- differencing and its exact inverse, integration, with explicit initial
  conditions
- centering helpers (mean, variance, shift)
- empirical autocovariances for Yule-Walker
- root-mean-square error between a forecast and true values
- the ARMA to pure-MA (psi weight) conversion used for confidence bounds

References:
    - Box & Jenkins (1976): Time Series Analysis: Forecasting and Control
    - Brockwell & Davis (2016): Introduction to Time Series and Forecasting
"""

from __future__ import annotations

import numpy as np

from ..exceptions import InvalidParameterError


def _check_buffers(name: str, initial: np.ndarray, order: int) -> None:
    if order <= 0:
        raise InvalidParameterError(f"{name}: order must be > 0, got {order}")
    if initial is None or len(initial) != order:
        size = None if initial is None else len(initial)
        raise InvalidParameterError(f"{name}: invalid initial size={size}, order={order}")


def difference(src: np.ndarray, dst: np.ndarray, initial: np.ndarray, order: int) -> None:
    """Lag-``order`` differencing of ``src`` into ``dst``.

    The first ``order`` values of ``src`` are copied into ``initial`` so that
    :func:`integrate` can undo the operation, and
    ``dst[k] = src[order + k] - src[k]``.

    Args:
        src: Input series, length n > order.
        dst: Output buffer of length n - order. Modified.
        initial: Initial-condition buffer of length ``order``. Modified.
        order: Differencing lag (1 for ordinary, m for seasonal).

    Raises:
        InvalidParameterError: If any buffer size is inconsistent with ``order``.

    Example:
        >>> x = np.array([1.0, 3.0, 6.0, 10.0])
        >>> out, init = np.empty(3), np.empty(1)
        >>> difference(x, out, init, 1)
        >>> out, init
        (array([2., 3., 4.]), array([1.]))
    """
    _check_buffers("difference", initial, order)
    if src is None or len(src) <= order:
        size = None if src is None else len(src)
        raise InvalidParameterError(f"difference: insufficient source size={size}, order={order}")
    if dst is None or len(dst) != len(src) - order:
        size = None if dst is None else len(dst)
        raise InvalidParameterError(
            f"difference: invalid destination size={size}, src={len(src)}, order={order}"
        )
    initial[:] = src[:order]
    dst[:] = src[order:] - src[:-order]


def integrate(src: np.ndarray, dst: np.ndarray, initial: np.ndarray, order: int) -> None:
    """Inverse of :func:`difference`.

    Copies ``initial`` into ``dst[:order]`` and accumulates
    ``dst[order + k] = dst[k] + src[k]``.

    Args:
        src: Differenced series, length n.
        dst: Output buffer of length n + order. Modified.
        initial: Initial conditions captured by :func:`difference`.
        order: Differencing lag.

    Raises:
        InvalidParameterError: If any buffer size is inconsistent with ``order``.
    """
    _check_buffers("integrate", initial, order)
    if dst is None or len(dst) <= order:
        size = None if dst is None else len(dst)
        raise InvalidParameterError(
            f"integrate: insufficient destination size={size}, order={order}"
        )
    if src is None or len(src) != len(dst) - order:
        size = None if src is None else len(src)
        raise InvalidParameterError(
            f"integrate: invalid source size={size}, dst={len(dst)}, order={order}"
        )
    dst[:order] = initial
    # Each step reads a value written `order` steps earlier.
    for k in range(len(src)):
        dst[order + k] = dst[k] + src[k]


def shift(data: np.ndarray, amount: float) -> None:
    """Add ``amount`` to every element of ``data`` in place."""
    data += amount


def mean(data: np.ndarray) -> float:
    """Arithmetic mean, 0.0 for an empty series."""
    if len(data) == 0:
        return 0.0
    return float(np.sum(data) / len(data))


def variance(data: np.ndarray) -> float:
    """Sample variance with an ``n - 1`` denominator, 0.0 below two points."""
    if len(data) < 2:
        return 0.0
    centered = np.asarray(data, dtype=float) - mean(data)
    return float(np.sum(centered * centered) / (len(data) - 1))


def autocovariance(data: np.ndarray, nlags: int) -> np.ndarray:
    """Autocovariances of an already de-meaned series.

    Computes

        r(k) = (1/n) * Σ_{i=0}^{n-k-1} x_i x_{i+k}

    for k = 0, ..., nlags. Every lag is divided by the full length ``n``.

    Args:
        data: Zero-mean 1D series, shape (n,).
        nlags: Largest lag.

    Returns:
        Array [r(0), ..., r(nlags)], shape (nlags + 1,).
    """
    x = np.asarray(data, dtype=float)
    n = len(x)
    if n == 0:
        raise InvalidParameterError("autocovariance: empty series")
    if nlags < 0:
        raise InvalidParameterError(f"nlags must be >= 0, got {nlags}")
    r = np.zeros(nlags + 1)
    for k in range(nlags + 1):
        if k < n:
            r[k] = np.dot(x[: n - k], x[k:]) / n
    return r


def rmse(
    left: np.ndarray,
    right: np.ndarray,
    left_offset: int,
    start: int,
    end: int,
) -> float:
    """Root-mean-square error between ``left[i + left_offset]`` and ``right[i]``.

    Evaluated for ``i`` in ``[start, end)``.

    Raises:
        InvalidParameterError: If the window is empty or falls outside either array.
    """
    len_left = len(left)
    len_right = len(right)
    if (
        start >= end
        or start < 0
        or len_right < end
        or len_left < end + left_offset
        or start + left_offset < 0
    ):
        raise InvalidParameterError(
            f"rmse: invalid arguments start={start}, end={end}, len_left={len_left}, "
            f"len_right={len_right}, left_offset={left_offset}"
        )
    errors = np.asarray(left[start + left_offset : end + left_offset], dtype=float) - np.asarray(
        right[start:end], dtype=float
    )
    return float(np.sqrt(np.sum(errors * errors) / (end - start)))


def arma_to_ma(ar: np.ndarray, ma: np.ndarray, lag_max: int) -> np.ndarray:
    """Psi weights of the pure-MA representation of an ARMA model.

    Runs the recursion

        ψ_i = θ_i + Σ_{j < min(i+1, p)} φ_j ψ_{i-j-1},   ψ_{-1} = 1

    and returns ``[1, ψ_0, ..., ψ_{lag_max-2}]``.

    Args:
        ar: AR coefficients φ.
        ma: MA coefficients θ.
        lag_max: Number of weights returned. Must be >= 1.

    Example:
        >>> arma_to_ma(np.array([1.0, -0.25]), np.array([1.0, 2.0]), 4)
        array([1.  , 2.  , 3.75, 3.25])
    """
    if lag_max < 1:
        raise InvalidParameterError(f"lag_max must be >= 1, got {lag_max}")
    ar = np.asarray(ar, dtype=float)
    ma = np.asarray(ma, dtype=float)
    p = len(ar)
    q = len(ma)
    psi = np.zeros(lag_max)
    for i in range(lag_max):
        value = ma[i] if i < q else 0.0
        for j in range(min(i + 1, p)):
            value += ar[j] * (psi[i - j - 1] if i - j - 1 >= 0 else 1.0)
        psi[i] = value

    weights = np.empty(lag_max)
    weights[0] = 1.0
    weights[1:] = psi[:-1]
    return weights


def cumulative_root_sum_of_squares(coeffs: np.ndarray) -> np.ndarray:
    """Return ``sqrt(cumsum(coeffs**2))``."""
    coeffs = np.asarray(coeffs, dtype=float)
    return np.sqrt(np.cumsum(coeffs * coeffs))


__all__ = [
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

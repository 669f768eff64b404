"""Model order and fitted-state container for seasonal ARIMA models.

:class:`ModelOrder` is the immutable 7-tuple (p, d, q, P, D, Q, m).
:class:`ModelParameters` owns everything that changes while one series is
fitted or forecast: the AR and MA lag polynomials and the differencing
buffers whose initial conditions are replayed during integration.

A ``ModelParameters`` instance belongs to a single fit. Build a new one for
each independent run.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..exceptions import DimensionMismatchError, InvalidParameterError
from ..linalg import Vector
from .backshift import FrozenPolynomial, LagSet
from .utils import difference, integrate


@dataclass(frozen=True)
class ModelOrder:
    """
    Orders of a seasonal ARIMA(p, d, q)(P, D, Q, m) model.

    Attributes:
        p: Non-seasonal AR order.
        d: Non-seasonal differencing order.
        q: Non-seasonal MA order.
        P: Seasonal AR order.
        D: Seasonal differencing order.
        Q: Seasonal MA order.
        m: Seasonal period (0 for no seasonality).
    """

    p: int = 0
    d: int = 0
    q: int = 0
    P: int = 0
    D: int = 0
    Q: int = 0
    m: int = 0

    def __post_init__(self) -> None:
        """Validate ModelOrder invariants."""
        for name in ("p", "d", "q", "P", "D", "Q", "m"):
            value = getattr(self, name)
            if not isinstance(value, (int, np.integer)) or isinstance(value, bool):
                raise InvalidParameterError(f"{name} must be an integer, got {value!r}")
            if value < 0:
                raise InvalidParameterError(f"{name} must be >= 0, got {value}")

    @property
    def has_seasonal_differencing(self) -> bool:
        return self.D > 0 and self.m > 0

    @property
    def has_non_seasonal_differencing(self) -> bool:
        return self.d > 0

    @property
    def initial_condition_size(self) -> int:
        """Number of leading points consumed by differencing."""
        return self.d + self.D * self.m

    def summary(self) -> str:
        return (
            f"p={self.p}, d={self.d}, q={self.q}, "
            f"P={self.P}, D={self.D}, Q={self.Q}, m={self.m}"
        )


class ModelParameters:
    """
    Lag polynomials and differencing state of one seasonal ARIMA fit.

    Args:
        order: Model orders.

    Attributes:
        order: The orders this instance was built from.
        ar: Frozen AR polynomial (lag 0 excluded).
        ma: Frozen MA polynomial (lag 0 excluded).
    """

    def __init__(self, order: ModelOrder) -> None:
        self.order = order
        self.ar: FrozenPolynomial = LagSet.merge_seasonal(order.p, order.P, order.m).freeze(
            include_zero=False
        )
        self.ma: FrozenPolynomial = LagSet.merge_seasonal(order.q, order.Q, order.m).freeze(
            include_zero=False
        )

        seasonal_levels = order.D if order.has_seasonal_differencing else 0
        non_seasonal_levels = order.d
        self._init_seasonal = [np.zeros(order.m) for _ in range(seasonal_levels)]
        self._init_non_seasonal = [np.zeros(1) for _ in range(non_seasonal_levels)]
        self._diff_seasonal: list[Optional[np.ndarray]] = [None] * seasonal_levels
        self._diff_non_seasonal: list[Optional[np.ndarray]] = [None] * non_seasonal_levels
        self._integrate_seasonal: list[Optional[np.ndarray]] = [None] * seasonal_levels
        self._integrate_non_seasonal: list[Optional[np.ndarray]] = [None] * non_seasonal_levels

    @classmethod
    def from_orders(
        cls, p: int, d: int, q: int, P: int = 0, D: int = 0, Q: int = 0, m: int = 0
    ) -> "ModelParameters":
        return cls(ModelOrder(p, d, q, P, D, Q, m))

    def __repr__(self) -> str:
        return f"ModelParameters({self.order.summary()})"

    # ------------------------------------------------------------------
    # Shape of the ARMA part

    @property
    def degree_ar(self) -> int:
        return self.ar.degree

    @property
    def degree_ma(self) -> int:
        return self.ma.degree

    @property
    def num_params_ar(self) -> int:
        return self.ar.num_params

    @property
    def num_params_ma(self) -> int:
        return self.ma.num_params

    @property
    def num_params(self) -> int:
        return self.ar.num_params + self.ma.num_params

    @property
    def offsets_ar(self) -> tuple[int, ...]:
        return self.ar.offsets

    @property
    def offsets_ma(self) -> tuple[int, ...]:
        return self.ma.offsets

    def summary(self) -> str:
        return f"ModelInterface ParamsInterface: {self.order.summary()}"

    # ------------------------------------------------------------------
    # Coefficients

    def forecast_one_point(self, data: np.ndarray, errors: np.ndarray, index: int) -> float:
        """One-step ARMA prediction at ``index`` from past data and residuals."""
        return self.ar.evaluate(data, index) + self.ma.evaluate(errors, index)

    def set_params_from_vector(self, params: Vector) -> None:
        """Install AR coefficients followed by MA coefficients, in offset order."""
        if len(params) != self.num_params:
            raise DimensionMismatchError(
                f"expected {self.num_params} parameters, got {len(params)}"
            )
        index = 0
        for lag in self.ar.offsets:
            self.ar.set(lag, params.get(index))
            index += 1
        for lag in self.ma.offsets:
            self.ma.set(lag, params.get(index))
            index += 1

    def get_params_into_vector(self) -> Vector:
        """Current coefficients as one vector, AR first then MA."""
        return Vector(np.concatenate([self.ar.coefficients, self.ma.coefficients]), copy=False)

    def current_ar_coefficients(self) -> np.ndarray:
        return self.ar.flattened()

    def current_ma_coefficients(self) -> np.ndarray:
        return self.ma.flattened()

    # ------------------------------------------------------------------
    # Differencing and integration

    def difference_seasonal(self, data: np.ndarray) -> np.ndarray:
        """Apply ``D`` seasonal differences, capturing each level's initial window."""
        current = np.asarray(data, dtype=float)
        m = self.order.m
        for level, init in enumerate(self._init_seasonal):
            nxt = np.empty(len(current) - m)
            difference(current, nxt, init, m)
            self._diff_seasonal[level] = nxt
            current = nxt
        return current

    def difference_non_seasonal(self, data: np.ndarray) -> np.ndarray:
        """Apply ``d`` first differences, capturing each level's initial value."""
        current = np.asarray(data, dtype=float)
        for level, init in enumerate(self._init_non_seasonal):
            nxt = np.empty(len(current) - 1)
            difference(current, nxt, init, 1)
            self._diff_non_seasonal[level] = nxt
            current = nxt
        return current

    def integrate_seasonal(self, data: np.ndarray) -> np.ndarray:
        """Undo seasonal differencing using the captured initial windows."""
        current = np.asarray(data, dtype=float)
        m = self.order.m
        for level in reversed(range(len(self._init_seasonal))):
            nxt = np.empty(len(current) + m)
            integrate(current, nxt, self._init_seasonal[level], m)
            self._integrate_seasonal[level] = nxt
            current = nxt
        return current

    def integrate_non_seasonal(self, data: np.ndarray) -> np.ndarray:
        """Undo non-seasonal differencing using the captured initial values."""
        current = np.asarray(data, dtype=float)
        for level in reversed(range(len(self._init_non_seasonal))):
            nxt = np.empty(len(current) + 1)
            integrate(current, nxt, self._init_non_seasonal[level], 1)
            self._integrate_non_seasonal[level] = nxt
            current = nxt
        return current

    @property
    def last_difference_seasonal(self) -> Optional[np.ndarray]:
        return self._diff_seasonal[-1] if self._diff_seasonal else None

    @property
    def last_difference_non_seasonal(self) -> Optional[np.ndarray]:
        return self._diff_non_seasonal[-1] if self._diff_non_seasonal else None

    @property
    def last_integrate_seasonal(self) -> Optional[np.ndarray]:
        return self._integrate_seasonal[0] if self._integrate_seasonal else None

    @property
    def last_integrate_non_seasonal(self) -> Optional[np.ndarray]:
        return self._integrate_non_seasonal[0] if self._integrate_non_seasonal else None


__all__ = ["ModelOrder", "ModelParameters"]

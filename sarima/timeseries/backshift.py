"""Back-shift operator polynomials.

A lag polynomial represents the linear combination

    Σ_k c_k B^k x_t = Σ_k c_k x_{t-k}

over a sparse set of lags ``k``. Building one is a two-phase affair:

1. :class:`LagSet` records only *which* lags are present. Seasonal and
   non-seasonal lag sets are multiplied with :meth:`LagSet.compose`, which
   propagates presence, not coefficient values.
2. :meth:`LagSet.freeze` turns the structure into a :class:`FrozenPolynomial`
   with a fixed, ordered list of offsets and zero coefficients. Coefficients
   are then assigned in place by the estimator.

Example:
    >>> ar = LagSet.merge_seasonal(non_seasonal_order=1, seasonal_order=1, period=4)
    >>> ar.active_lags()
    (0, 1, 4, 5)
    >>> poly = ar.freeze(include_zero=False)
    >>> poly.offsets
    (1, 4, 5)
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ..exceptions import IndexOutOfRangeError, InvalidParameterError


class LagSet:
    """
    Immutable membership set over lags ``0..degree``.

    Lag 0 is always a member while the set is being composed.

    Args:
        degree: Largest lag. Must be >= 0.
        initial: Membership of lags ``1..degree``.
    """

    def __init__(self, degree: int, initial: bool = True) -> None:
        if degree < 0:
            raise InvalidParameterError(f"degree must be >= 0, got {degree}")
        members = [bool(initial)] * (degree + 1)
        members[0] = True
        self._degree = degree
        self._members = tuple(members)

    @classmethod
    def from_members(cls, members: Sequence[bool]) -> "LagSet":
        """Build a lag set from an explicit membership list (index = lag)."""
        if members is None or len(members) == 0:
            raise InvalidParameterError("members must be a non-empty sequence")
        lag_set = cls.__new__(cls)
        lag_set._degree = len(members) - 1
        lag_set._members = tuple(bool(m) for m in members)
        return lag_set

    @classmethod
    def seasonal(cls, order: int, period: int) -> "LagSet":
        """Lag set ``{0, period, 2*period, ..., order*period}``."""
        if order < 0 or period < 0:
            raise InvalidParameterError(
                f"order and period must be >= 0, got order={order}, period={period}"
            )
        lag_set = cls(order * period, initial=False)
        for s in range(1, order + 1):
            lag_set = lag_set.with_lag(s * period, True)
        return lag_set

    @classmethod
    def merge_seasonal(
        cls, non_seasonal_order: int, seasonal_order: int, period: int
    ) -> "LagSet":
        """Product of a dense non-seasonal set and a seasonal set."""
        non_seasonal = cls(non_seasonal_order, initial=True)
        return cls.seasonal(seasonal_order, period).compose(non_seasonal)

    @property
    def degree(self) -> int:
        return self._degree

    def __contains__(self, lag: int) -> bool:
        return 0 <= lag <= self._degree and self._members[lag]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LagSet):
            return NotImplemented
        return self._members == other._members

    def __hash__(self) -> int:
        return hash(self._members)

    def __repr__(self) -> str:
        return f"LagSet(degree={self._degree}, lags={self.active_lags()})"

    def active_lags(self) -> tuple[int, ...]:
        return tuple(j for j, present in enumerate(self._members) if present)

    def with_lag(self, lag: int, enabled: bool) -> "LagSet":
        """Return a copy with ``lag`` switched on or off."""
        if not 0 <= lag <= self._degree:
            raise InvalidParameterError(
                f"lag must be in [0, {self._degree}], got {lag}"
            )
        members = list(self._members)
        members[lag] = bool(enabled)
        return LagSet.from_members(members)

    def compose(self, other: "LagSet") -> "LagSet":
        """Multiply two lag polynomials structurally.

        The result contains lag ``j + k`` whenever ``j`` is active here and
        ``k`` is active in ``other``.
        """
        merged = [False] * (self._degree + other._degree + 1)
        for j, present in enumerate(self._members):
            if not present:
                continue
            for k, other_present in enumerate(other._members):
                if other_present:
                    merged[j + k] = True
        return LagSet.from_members(merged)

    def freeze(self, include_zero: bool = False) -> "FrozenPolynomial":
        """Fix the offsets and return a polynomial with zero coefficients.

        Args:
            include_zero: Whether lag 0 carries a coefficient.
        """
        offsets = [
            j
            for j, present in enumerate(self._members)
            if present and (j != 0 or include_zero)
        ]
        return FrozenPolynomial(self._degree, offsets)


class FrozenPolynomial:
    """
    Lag polynomial with fixed offsets and mutable coefficients.

    Instances are produced by :meth:`LagSet.freeze`.
    """

    def __init__(self, degree: int, offsets: Sequence[int]) -> None:
        self._degree = degree
        self._offsets = tuple(int(o) for o in offsets)
        self._coeffs = np.zeros(len(self._offsets))
        self._position = {offset: i for i, offset in enumerate(self._offsets)}

    def __repr__(self) -> str:
        terms = ", ".join(f"{o}: {c:g}" for o, c in zip(self._offsets, self._coeffs))
        return f"FrozenPolynomial(degree={self._degree}, {{{terms}}})"

    @property
    def degree(self) -> int:
        return self._degree

    @property
    def offsets(self) -> tuple[int, ...]:
        return self._offsets

    @property
    def num_params(self) -> int:
        return len(self._offsets)

    @property
    def coefficients(self) -> np.ndarray:
        """Copy of the coefficients in offset order."""
        return self._coeffs.copy()

    def _index_of(self, lag: int) -> int:
        try:
            return self._position[lag]
        except KeyError:
            raise InvalidParameterError(f"invalid parameter index: {lag}") from None

    def get(self, lag: int) -> float:
        return float(self._coeffs[self._index_of(lag)])

    def set(self, lag: int, value: float) -> None:
        self._coeffs[self._index_of(lag)] = value

    def flattened(self) -> np.ndarray:
        """Dense coefficient array indexed by lag, up to the largest offset.

        Lags without a coefficient are zero. A degree-0 polynomial yields an
        empty array.
        """
        if self._degree <= 0 or not self._offsets:
            return np.zeros(0)
        dense = np.zeros(max(self._offsets) + 1)
        dense[list(self._offsets)] = self._coeffs
        return dense

    def evaluate(self, series: np.ndarray, t: int) -> float:
        """Return ``Σ c_i * series[t - offset_i]``.

        Raises:
            IndexOutOfRangeError: If any ``t - offset_i`` falls outside ``series``.
        """
        total = 0.0
        n = len(series)
        for offset, coeff in zip(self._offsets, self._coeffs):
            idx = t - offset
            if idx < 0 or idx >= n:
                raise IndexOutOfRangeError(
                    f"evaluate: lag {offset} at t={t} needs index {idx}, "
                    f"series has {n} points"
                )
            total += series[idx] * coeff
        return float(total)


__all__ = ["LagSet", "FrozenPolynomial"]

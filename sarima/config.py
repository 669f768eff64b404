"""Tunable constants of the estimation pipeline.

The solver constants are collected in :class:`ForecastConfig` and passed
explicitly into the estimators and the orchestrator.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from scipy import stats

from .exceptions import InvalidParameterError

UNBOUNDED_CONDITION = -1.0
Z_SCORE_95 = 1.959963984540054


@dataclass(frozen=True)
class ForecastConfig:
    """
    Configuration of a fit/forecast run.

    Attributes:
        max_condition_number: Bound used by the SPD solver to regularize
            near-singular normal equations. ``-1`` disables regularization,
            in which case an exactly singular system is reported instead.
        z_score: Two-sided normal quantile used for confidence bounds.
        test_set_fraction: Fraction of the series held out when computing the
            validation RMSE that scales the confidence bounds.
        max_iterations: Number of Hannan-Rissanen refinement rounds.
    """

    max_condition_number: float = 100.0
    z_score: float = Z_SCORE_95
    test_set_fraction: float = 0.15
    max_iterations: int = 5

    def __post_init__(self) -> None:
        """Validate ForecastConfig invariants."""
        if self.max_condition_number < 0 and self.max_condition_number != UNBOUNDED_CONDITION:
            raise InvalidParameterError(
                "max_condition_number must be >= 0 or -1 (unbounded), "
                f"got {self.max_condition_number}"
            )
        if self.z_score <= 0:
            raise InvalidParameterError(f"z_score must be > 0, got {self.z_score}")
        if not 0.0 <= self.test_set_fraction < 1.0:
            raise InvalidParameterError(
                f"test_set_fraction must be in [0, 1), got {self.test_set_fraction}"
            )
        if self.max_iterations < 1:
            raise InvalidParameterError(
                f"max_iterations must be >= 1, got {self.max_iterations}"
            )

    @classmethod
    def from_confidence_level(cls, level: float, **kwargs: Any) -> "ForecastConfig":
        """Build a config whose bounds cover ``level`` two-sided probability.

        Example:
            >>> ForecastConfig.from_confidence_level(0.95).z_score
            1.959963984540054
        """
        if not 0.0 < level < 1.0:
            raise InvalidParameterError(f"level must be in (0, 1), got {level}")
        z_score = float(stats.norm.ppf(0.5 + level / 2.0))
        return cls(z_score=z_score, **kwargs)

    def with_options(self, **changes: Any) -> "ForecastConfig":
        """Return a copy with some fields replaced."""
        return replace(self, **changes)


DEFAULT_CONFIG = ForecastConfig()

__all__ = ["ForecastConfig", "DEFAULT_CONFIG", "UNBOUNDED_CONDITION", "Z_SCORE_95"]

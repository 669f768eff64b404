"""Tests for ModelOrder and ModelParameters."""

from __future__ import annotations

import numpy as np
import pytest

from sarima.exceptions import DimensionMismatchError, InvalidParameterError
from sarima.linalg import Vector
from sarima.timeseries.params import ModelOrder, ModelParameters


class TestModelOrder:
    """Tests for ModelOrder validation."""

    def test_defaults(self):
        """Test that unspecified orders are zero."""
        order = ModelOrder(1, 0, 1)
        assert (order.P, order.D, order.Q, order.m) == (0, 0, 0, 0)

    @pytest.mark.parametrize("field", ["p", "d", "q", "P", "D", "Q", "m"])
    def test_negative_rejected(self, field):
        """Test that every order must be non-negative."""
        with pytest.raises(InvalidParameterError, match=f"{field} must be >= 0"):
            ModelOrder(**{field: -1})

    def test_non_integer_rejected(self):
        """Test that floats are not accepted as orders."""
        with pytest.raises(InvalidParameterError, match="must be an integer"):
            ModelOrder(p=1.5)

    def test_numpy_integers_accepted(self):
        """Test that numpy integer scalars are valid orders."""
        assert ModelOrder(p=np.int64(2)).p == 2

    def test_initial_condition_size(self):
        """Test d + D*m."""
        assert ModelOrder(0, 1, 0, 0, 2, 0, 4).initial_condition_size == 9

    def test_differencing_flags(self):
        """Test that seasonal differencing needs both D and m."""
        assert not ModelOrder(D=1, m=0).has_seasonal_differencing
        assert ModelOrder(D=1, m=4).has_seasonal_differencing
        assert ModelOrder(d=1).has_non_seasonal_differencing

    def test_summary(self):
        """Test the textual summary."""
        assert ModelOrder(1, 2, 3, 4, 5, 6, 7).summary() == (
            "p=1, d=2, q=3, P=4, D=5, Q=6, m=7"
        )


class TestModelParameters:
    """Tests for coefficient bookkeeping."""

    def test_seasonal_offsets(self):
        """Test that seasonal and non-seasonal lags are merged."""
        params = ModelParameters.from_orders(1, 0, 1, 1, 0, 1, 4)
        assert params.offsets_ar == (1, 4, 5)
        assert params.offsets_ma == (1, 4, 5)
        assert params.num_params == 6
        assert params.degree_ar == 5
        assert params.degree_ma == 5

    def test_pure_noise_has_no_params(self):
        """Test that the all-zero order has nothing to estimate."""
        params = ModelParameters(ModelOrder())
        assert params.num_params == 0
        assert params.degree_ar == 0

    def test_set_and_get_vector(self):
        """Test that parameters go in AR first, then MA."""
        params = ModelParameters.from_orders(2, 0, 1)
        params.set_params_from_vector(Vector([0.5, -0.2, 0.3]))
        assert params.ar.get(1) == 0.5
        assert params.ar.get(2) == -0.2
        assert params.ma.get(1) == 0.3
        np.testing.assert_allclose(params.get_params_into_vector().to_array(), [0.5, -0.2, 0.3])

    def test_set_vector_wrong_length(self):
        """Test that a parameter vector of the wrong size is rejected."""
        params = ModelParameters.from_orders(2, 0, 1)
        with pytest.raises(DimensionMismatchError, match="expected 3 parameters"):
            params.set_params_from_vector(Vector([0.5, -0.2]))

    def test_forecast_one_point(self):
        """Test the one-step ARMA prediction."""
        params = ModelParameters.from_orders(1, 0, 1)
        params.set_params_from_vector(Vector([0.5, 0.25]))
        data = np.array([2.0, 4.0])
        errors = np.array([1.0, 0.0])
        assert params.forecast_one_point(data, errors, 1) == pytest.approx(1.25)

    def test_flattened_coefficients(self):
        """Test the dense coefficient views."""
        params = ModelParameters.from_orders(1, 0, 0, 1, 0, 0, 3)
        params.set_params_from_vector(Vector([0.1, 0.2, 0.3]))
        np.testing.assert_allclose(params.current_ar_coefficients(), [0.0, 0.1, 0.0, 0.2, 0.3])
        assert params.current_ma_coefficients().shape == (0,)

    def test_summary(self):
        """Test the summary line."""
        params = ModelParameters.from_orders(1, 1, 1)
        assert params.summary() == (
            "ModelInterface ParamsInterface: p=1, d=1, q=1, P=0, D=0, Q=0, m=0"
        )


class TestDifferencingState:
    """Tests for the per-level differencing buffers."""

    def test_seasonal_then_non_seasonal_round_trip(self):
        """Test that integration restores a doubly differenced series."""
        x = np.array([5.0, 3.0, 8.0, 1.0, 6.0, 6.0, 9.0, 4.0, 10.0, 7.0, 12.0, 2.0])
        params = ModelParameters.from_orders(0, 1, 0, 0, 1, 0, 4)

        seasonal = params.difference_seasonal(x)
        stationary = params.difference_non_seasonal(seasonal)
        assert len(stationary) == len(x) - 5

        restored = params.integrate_seasonal(params.integrate_non_seasonal(stationary))
        np.testing.assert_array_equal(restored, x)

    def test_two_levels_round_trip(self):
        """Test d = 2 with levels replayed in reverse."""
        x = np.array([1.0, 4.0, 9.0, 16.0, 25.0, 36.0])
        params = ModelParameters.from_orders(0, 2, 0)
        stationary = params.difference_non_seasonal(x)
        np.testing.assert_array_equal(stationary, [2.0, 2.0, 2.0, 2.0])
        np.testing.assert_array_equal(params.integrate_non_seasonal(stationary), x)

    def test_last_level_accessors(self):
        """Test the most recent differenced and integrated series."""
        params = ModelParameters.from_orders(0, 1, 0)
        assert params.last_difference_non_seasonal is None
        params.difference_non_seasonal(np.array([1.0, 2.0, 4.0]))
        np.testing.assert_array_equal(params.last_difference_non_seasonal, [1.0, 2.0])
        params.integrate_non_seasonal(np.array([1.0, 2.0, 3.0]))
        np.testing.assert_array_equal(params.last_integrate_non_seasonal, [1.0, 2.0, 4.0, 7.0])
        assert params.last_difference_seasonal is None

    def test_zero_period_skips_seasonal(self):
        """Test that D > 0 with m = 0 allocates no seasonal buffers."""
        params = ModelParameters.from_orders(0, 0, 0, 0, 1, 0, 0)
        x = np.array([1.0, 2.0, 3.0])
        np.testing.assert_array_equal(params.difference_seasonal(x), x)

"""Tests for the estimation and forecasting pipeline."""

from __future__ import annotations

import numpy as np
import pytest

from sarima.config import ForecastConfig
from sarima.exceptions import InsufficientDataError, InvalidParameterError
from sarima.linalg import Vector
from sarima.timeseries import (
    ArimaModel,
    ForecastResult,
    ModelParameters,
    estimate_arima,
    forecast_arima,
    forecast_arma,
    rmse_validation,
)


class TestForecastArma:
    """Tests for forecast_arma()."""

    def test_ar1_recursion(self):
        """Test that predictions are fed back as history."""
        params = ModelParameters.from_orders(1, 0, 0)
        params.set_params_from_vector(Vector([0.5]))
        forecasts = forecast_arma(params, np.array([1.0, 2.0, 4.0]), 3, 6)
        np.testing.assert_allclose(forecasts, [2.0, 1.0, 0.5])

    def test_ma1_uses_reconstructed_residuals(self):
        """Test that the first MA forecast uses the last in-sample residual."""
        params = ModelParameters.from_orders(0, 0, 1)
        params.set_params_from_vector(Vector([0.5]))
        # e1 = 1, e2 = 3 - 0.5 * 1 = 2.5; future residuals are zero.
        forecasts = forecast_arma(params, np.array([0.0, 1.0, 3.0]), 3, 5)
        np.testing.assert_allclose(forecasts, [1.25, 0.0])

    def test_invalid_window(self):
        """Test that empty or out-of-range windows are rejected."""
        params = ModelParameters.from_orders(1, 0, 0)
        with pytest.raises(InvalidParameterError, match="invalid window"):
            forecast_arma(params, np.zeros(5), 3, 3)
        with pytest.raises(InvalidParameterError):
            forecast_arma(params, np.zeros(5), 6, 7)


class TestEstimateArima:
    """Tests for estimate_arima()."""

    def test_returns_model(self, periodic_series):
        """Test that estimation returns a fitted model over the raw series."""
        params = ModelParameters.from_orders(3, 0, 3, 1, 1, 0, 0)
        model = estimate_arima(params, periodic_series, 16, 17)
        assert isinstance(model, ArimaModel)
        assert model.params is params
        assert model.train_size == 16
        assert model.rmse == -1.0
        assert model.estimation is not None
        np.testing.assert_array_equal(model.data, periodic_series)

    def test_periodic_forecast(self, periodic_series):
        """Test that a repeating pattern is continued."""
        params = ModelParameters.from_orders(3, 0, 3, 1, 1, 0, 0)
        model = estimate_arima(params, periodic_series, len(periodic_series), len(periodic_series) + 1)
        result = model.forecast(1)
        assert isinstance(result, ForecastResult)
        assert result.forecast[0] == pytest.approx(2.0, abs=1e-6)

    def test_constant_forecast(self):
        """Test that a constant series forecasts its level exactly."""
        data = np.full(20, 2.0)
        params = ModelParameters.from_orders(0, 0, 1)
        model = estimate_arima(params, data, 20, 21)
        assert model.forecast(1).forecast[0] == 2.0

    def test_config_iterations(self, ar1_series):
        """Test that max_iterations reaches the estimator."""
        params = ModelParameters.from_orders(1, 0, 0)
        config = ForecastConfig(max_iterations=2)
        model = estimate_arima(params, ar1_series, 900, 910, config=config)
        assert model.estimation.iterations == 2
        assert model.config is config

    def test_data_not_modified(self, trend_season_series):
        """Test that the caller's series is left untouched."""
        original = trend_season_series.copy()
        params = ModelParameters.from_orders(0, 1, 1, 0, 1, 0, 4)
        estimate_arima(params, trend_season_series, 24, 25).forecast(4)
        np.testing.assert_array_equal(trend_season_series, original)

    @pytest.mark.parametrize(
        "length, start, end",
        [
            (4, 4, 5),  # shorter than d + D*m
            (24, 3, 10),  # start inside the differencing window
            (24, 10, 10),  # empty horizon
            (24, 25, 26),  # start past the data
        ],
    )
    def test_entry_validation(self, length, start, end):
        """Test that invalid windows raise InsufficientDataError."""
        params = ModelParameters.from_orders(0, 1, 1, 0, 1, 0, 4)
        with pytest.raises(InsufficientDataError, match="not enough data for ARIMA"):
            estimate_arima(params, np.arange(float(length)), start, end)


class TestForecastArima:
    """Tests for forecast_arima()."""

    def test_trend_and_season_continued(self, trend_season_series):
        """Test that d = 1, D = 1 integration extends trend and season exactly."""
        params = ModelParameters.from_orders(0, 1, 1, 0, 1, 0, 4)
        estimate_arima(params, trend_season_series, 24, 25)
        result = forecast_arima(params, trend_season_series, 24, 28)
        season = np.array([3.0, -1.0, 0.0, 5.0])
        np.testing.assert_allclose(result.forecast, np.arange(24, 28) + season, atol=1e-9)

    def test_uses_only_training_prefix(self, trend_season_series):
        """Test that values past forecast_start do not affect the forecast."""
        params = ModelParameters.from_orders(0, 1, 1, 0, 1, 0, 4)
        estimate_arima(params, trend_season_series, 20, 21)
        corrupted = trend_season_series.copy()
        corrupted[20:] = 1000.0
        clean = forecast_arima(params, trend_season_series, 20, 24)
        dirty = forecast_arima(params, corrupted, 20, 24)
        np.testing.assert_allclose(clean.forecast, dirty.forecast)
        np.testing.assert_allclose(clean.forecast, trend_season_series[20:24], atol=1e-9)

    def test_data_variance(self):
        """Test that the result carries the variance of the stationary series."""
        params = ModelParameters.from_orders(0, 1, 1)
        data = np.array([0.0, 1.0, 3.0, 6.0, 10.0, 15.0, 21.0, 28.0])
        estimate_arima(params, data, 8, 9)
        result = forecast_arima(params, data, 8, 9)
        # First differences are 1..7, sample variance 28 / 6.
        assert result.data_variance == pytest.approx(28.0 / 6.0)

    def test_invalid_window(self, trend_season_series):
        """Test that forecast_arima validates its window."""
        params = ModelParameters.from_orders(0, 1, 1, 0, 1, 0, 4)
        with pytest.raises(InsufficientDataError):
            forecast_arima(params, trend_season_series, 24, 24)


class TestRmseValidation:
    """Tests for rmse_validation()."""

    def test_exact_model_scores_zero(self, trend_season_series):
        """Test that a perfectly predictable series validates with zero error."""
        params = ModelParameters.from_orders(0, 1, 1, 0, 1, 0, 4)
        score = rmse_validation(trend_season_series, 0.15, params)
        assert score == pytest.approx(0.0, abs=1e-9)

    def test_positive_on_noise(self, ar1_series):
        """Test that a noisy series has a positive validation error."""
        params = ModelParameters.from_orders(1, 0, 0)
        score = rmse_validation(ar1_series, 0.1, params)
        assert score > 0.0
        assert np.isfinite(score)

    def test_too_small_fraction(self, trend_season_series):
        """Test that an empty test split is rejected."""
        params = ModelParameters.from_orders(0, 1, 1, 0, 1, 0, 4)
        with pytest.raises(InsufficientDataError):
            rmse_validation(trend_season_series, 0.01, params)


class TestArimaModel:
    """Tests for ArimaModel."""

    def test_forecast_carries_rmse(self):
        """Test that forecasts inherit the model RMSE."""
        data = np.full(20, 2.0)
        params = ModelParameters.from_orders(0, 0, 1)
        model = estimate_arima(params, data, 20, 21)
        model.rmse = 0.5
        result = model.forecast(3)
        assert result.rmse == 0.5
        np.testing.assert_allclose(result.forecast, [2.0, 2.0, 2.0])
        np.testing.assert_allclose(result.upper, result.forecast)

    def test_invalid_train_size(self):
        """Test that train_size must lie within the data."""
        params = ModelParameters.from_orders(1, 0, 0)
        with pytest.raises(InvalidParameterError, match="train_size"):
            ArimaModel(params, np.zeros(5), 6)

    def test_repr(self):
        """Test the summary representation."""
        model = ArimaModel(ModelParameters.from_orders(1, 0, 0), np.zeros(5), 5)
        assert "p=1" in repr(model)

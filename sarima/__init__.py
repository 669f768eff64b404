"""sarima - seasonal ARIMA fitting and forecasting via Hannan-Rissanen."""

__version__ = "0.1.0"

# Convenience entry point
from .api import forecast_arima

# Configuration
from .config import DEFAULT_CONFIG, ForecastConfig

# Exceptions
from .exceptions import (
    ArimaError,
    DimensionMismatchError,
    ForecastFailedError,
    IndexOutOfRangeError,
    InsufficientDataError,
    InvalidParameterError,
    SingularSystemError,
)

# Logging
from .logging import configure_logging, get_logger, set_log_level

# Time-series pipeline
from .timeseries import (
    ArimaModel,
    ForecastResult,
    ModelOrder,
    ModelParameters,
    estimate_arima,
    hannan_rissanen,
    rmse_validation,
    yule_walker,
)

__all__ = [
    "__version__",
    # Entry point
    "forecast_arima",
    # Configuration
    "ForecastConfig",
    "DEFAULT_CONFIG",
    # Exceptions
    "ArimaError",
    "DimensionMismatchError",
    "InvalidParameterError",
    "IndexOutOfRangeError",
    "InsufficientDataError",
    "SingularSystemError",
    "ForecastFailedError",
    # Logging
    "get_logger",
    "set_log_level",
    "configure_logging",
    # Pipeline
    "ArimaModel",
    "ForecastResult",
    "ModelOrder",
    "ModelParameters",
    "estimate_arima",
    "rmse_validation",
    "yule_walker",
    "hannan_rissanen",
]

"""
Series Preprocessor

Validates a PriceSeries and converts it to NumPy arrays for the
indicator library. Never mutates the caller's series.
"""

from dataclasses import dataclass
from typing import Optional
import numpy as np

from stocksignal.schemas.series import PriceSeries
from stocksignal.services.base import InsufficientDataError, InvalidSeriesError


@dataclass(frozen=True)
class SeriesArrays:
    """Price data arrays for calculations."""

    timestamps: np.ndarray
    prices: np.ndarray
    volumes: Optional[np.ndarray]


def _json_safe(value: float):
    """NaN and infinity have no JSON form; report them by repr."""
    return value if np.isfinite(value) else repr(value)


def validate_series(series: PriceSeries) -> None:
    """Reject empty, unordered, or non-positive series."""
    observations = series.observations
    if not observations:
        raise InvalidSeriesError("Price series is empty")

    previous_ts = None
    for index, obs in enumerate(observations):
        if not np.isfinite(obs.price) or obs.price <= 0:
            raise InvalidSeriesError(
                f"Price must be positive, got {obs.price} at index {index}",
                {"index": index, "price": _json_safe(obs.price)},
            )
        if obs.volume is not None and (not np.isfinite(obs.volume) or obs.volume < 0):
            raise InvalidSeriesError(
                f"Volume must be non-negative, got {obs.volume} at index {index}",
                {"index": index, "volume": _json_safe(obs.volume)},
            )
        if previous_ts is not None and obs.timestamp <= previous_ts:
            raise InvalidSeriesError(
                f"Timestamps must be strictly increasing (index {index})",
                {"index": index, "timestamp": obs.timestamp, "previous": previous_ts},
            )
        previous_ts = obs.timestamp


def to_arrays(
    series: PriceSeries, required_window: int = 1, indicator: str = "Analysis"
) -> SeriesArrays:
    """
    Validate the series and split it into parallel arrays.

    Args:
        series: Ordered price history
        required_window: Longest window any consumer of the arrays needs
        indicator: Name reported when the series is too short

    Returns:
        SeriesArrays; volumes is None unless every observation has volume

    Raises:
        InvalidSeriesError: Series fails validation
        InsufficientDataError: Fewer observations than required_window
    """
    validate_series(series)

    if len(series.observations) < required_window:
        raise InsufficientDataError(indicator, required_window, len(series.observations))

    timestamps = np.array([o.timestamp for o in series.observations], dtype=np.int64)
    prices = np.array([o.price for o in series.observations], dtype=float)
    volumes = None
    if series.has_volume:
        volumes = np.array([o.volume for o in series.observations], dtype=float)

    return SeriesArrays(timestamps=timestamps, prices=prices, volumes=volumes)


def simple_returns(prices: np.ndarray) -> np.ndarray:
    """Per-step simple returns: (p[i] - p[i-1]) / p[i-1]."""
    if len(prices) < 2:
        raise InsufficientDataError("Returns", 2, len(prices))
    return np.diff(prices) / prices[:-1]

"""
Technical Indicator Calculations

Pure Python/NumPy implementations of technical indicators.
All math is deterministic. Each function declares its minimum window
and raises InsufficientDataError rather than returning a partial value.
"""

import numpy as np
from typing import Optional

from stocksignal.schemas.analysis import VolumeStrength
from stocksignal.services.analysis.preprocessing import simple_returns
from stocksignal.services.base import InsufficientDataError

# Substituted for a zero average loss so RS stays finite
RSI_EPSILON = 1e-10

HIGH_VOLUME_CHANGE = 50.0
LOW_VOLUME_CHANGE = -50.0
NEAR_MA_THRESHOLD = 0.02


def _require(name: str, data: np.ndarray, window: int) -> None:
    if len(data) < window:
        raise InsufficientDataError(name, window, len(data))


# =============================================================================
# MOVING AVERAGES
# =============================================================================


def sma(data: np.ndarray, window: int) -> float:
    """Simple Moving Average of the last `window` values."""
    if window < 1:
        raise ValueError(f"SMA window must be >= 1, got {window}")
    _require(f"SMA({window})", data, window)
    return float(np.mean(data[-window:]))


def ema(data: np.ndarray, period: int) -> np.ndarray:
    """
    Exponential Moving Average.

    Seeded with the first value rather than an SMA, so the output has the
    same length as the input and no leading NaNs. At period=1 the
    multiplier is 1 and the output equals the input.
    """
    if period < 1:
        raise ValueError(f"EMA period must be >= 1, got {period}")

    data = np.asarray(data, dtype=float)
    result = np.empty(len(data))
    if len(data) == 0:
        return result

    multiplier = 2 / (period + 1)
    result[0] = data[0]
    for i in range(1, len(data)):
        result[i] = (data[i] - result[i - 1]) * multiplier + result[i - 1]

    return result


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def rsi(closes: np.ndarray, period: int = 14) -> np.ndarray:
    """
    Relative Strength Index with Wilder smoothing.

    Seed averages are the simple mean of the first `period` gains/losses;
    every later step uses avg = (avg * (period - 1) + new) / period.
    Values before index `period` are NaN.
    """
    if period < 1:
        raise ValueError(f"RSI period must be >= 1, got {period}")
    _require(f"RSI({period})", closes, period + 1)

    # Calculate price changes
    deltas = np.diff(closes)

    # Separate gains and losses
    gains = np.where(deltas > 0, deltas, 0.0)
    losses = np.where(deltas < 0, -deltas, 0.0)

    # First average
    avg_gain = np.mean(gains[:period])
    avg_loss = np.mean(losses[:period])

    result = np.full(len(closes), np.nan)
    result[period] = _rsi_value(avg_gain, avg_loss)

    # Subsequent RSI values using smoothed averages
    for i in range(period, len(deltas)):
        avg_gain = (avg_gain * (period - 1) + gains[i]) / period
        avg_loss = (avg_loss * (period - 1) + losses[i]) / period
        result[i + 1] = _rsi_value(avg_gain, avg_loss)

    return result


def _rsi_value(avg_gain: float, avg_loss: float) -> float:
    rs = avg_gain / (avg_loss if avg_loss != 0 else RSI_EPSILON)
    return 100 - (100 / (1 + rs))


def latest_rsi(closes: np.ndarray, period: int = 14) -> float:
    """RSI at the most recent step."""
    return get_last_valid(rsi(closes, period))


def macd(
    closes: np.ndarray,
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    MACD (Moving Average Convergence Divergence).

    Returns: (macd_line, signal_line, histogram)
    """
    _require(f"MACD({fast_period},{slow_period},{signal_period})", closes, slow_period)

    fast_ema = ema(closes, fast_period)
    slow_ema = ema(closes, slow_period)

    macd_line = fast_ema - slow_ema

    # Signal line is EMA of MACD line
    signal_line = ema(macd_line, signal_period)

    # Histogram
    histogram = macd_line - signal_line

    return macd_line, signal_line, histogram


# =============================================================================
# VOLATILITY INDICATORS
# =============================================================================


def bollinger_bands(
    closes: np.ndarray, period: int = 20, std_dev: float = 2.0
) -> tuple[float, float, float]:
    """
    Bollinger Bands over the last `period` closes.

    Uses the population standard deviation.

    Returns: (upper, middle, lower)
    """
    middle = sma(closes, period)
    std = float(np.std(closes[-period:]))

    upper = middle + (std_dev * std)
    lower = middle - (std_dev * std)

    return upper, middle, lower


def volatility(closes: np.ndarray, trading_days: int = 252) -> float:
    """Annualized realized volatility of simple returns, as a fraction."""
    returns = simple_returns(closes)
    return float(np.std(returns) * np.sqrt(trading_days))


# =============================================================================
# VOLUME INDICATORS
# =============================================================================


def volume_profile(
    volumes: np.ndarray, lookback: int = 10
) -> tuple[float, VolumeStrength]:
    """
    Latest volume compared with the average of the last `lookback` volumes.

    Returns: (volume_change_percent, strength)
    """
    _require(f"Volume Profile({lookback})", volumes, lookback)

    avg_volume = float(np.mean(volumes[-lookback:]))
    current_volume = float(volumes[-1])

    if avg_volume == 0:
        change = 0.0
    else:
        change = ((current_volume - avg_volume) / avg_volume) * 100

    if change > HIGH_VOLUME_CHANGE:
        strength = VolumeStrength.HIGH
    elif change < LOW_VOLUME_CHANGE:
        strength = VolumeStrength.LOW
    else:
        strength = VolumeStrength.NORMAL

    return change, strength


# =============================================================================
# PRICE POSITION
# =============================================================================


def price_position(
    current: float,
    upper: float,
    lower: float,
    short_ma: float,
    near_threshold: float = NEAR_MA_THRESHOLD,
) -> dict:
    """Locate the current price against the bands and the short-term MA."""
    return {
        "current_price": float(current),
        "above_upper_band": bool(current > upper),
        "below_lower_band": bool(current < lower),
        "near_short_term_ma": bool(abs(current - short_ma) / short_ma < near_threshold),
    }


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def get_last_valid(arr: np.ndarray) -> Optional[float]:
    """Get last non-NaN value from array."""
    valid = arr[~np.isnan(arr)]
    return float(valid[-1]) if len(valid) > 0 else None

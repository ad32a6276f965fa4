"""
Analysis Engine

Single entry point: PriceSeries -> AnalysisResult.
Synchronous, side-effect free and re-entrant.
"""

import logging
from typing import Optional

from stocksignal.schemas.series import PriceSeries
from stocksignal.schemas.analysis import (
    AnalysisConfig,
    AnalysisResult,
    IndicatorSet,
    MovingAverageData,
    MACDData,
    BollingerBandsData,
    VolumeProfileData,
    PricePosition,
)
from stocksignal.services.analysis.preprocessing import SeriesArrays, to_arrays
from stocksignal.services.analysis.calculations import (
    sma,
    latest_rsi,
    macd,
    bollinger_bands,
    volatility,
    volume_profile,
    price_position,
)
from stocksignal.services.analysis.synthesizer import SignalInputs, synthesize

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = AnalysisConfig()


def compute_indicators(arrays: SeriesArrays, config: AnalysisConfig) -> IndicatorSet:
    """Run every indicator over the preprocessed arrays."""
    closes = arrays.prices

    rsi_val = latest_rsi(closes, config.rsi_period)

    short_ma = sma(closes, config.short_ma_window)
    long_ma = sma(closes, config.long_ma_window)

    macd_line, signal_line, histogram = macd(
        closes, config.macd_fast, config.macd_slow, config.macd_signal
    )

    upper, middle, lower = bollinger_bands(
        closes, config.bollinger_period, config.bollinger_std_dev
    )

    annual_vol = volatility(closes, config.trading_days_per_year)

    volume_data = None
    if arrays.volumes is not None and len(arrays.volumes) < config.volume_lookback:
        logger.debug(
            f"Volume profile skipped: {len(arrays.volumes)} volumes, "
            f"lookback {config.volume_lookback}"
        )
    elif arrays.volumes is not None:
        change, strength = volume_profile(arrays.volumes, config.volume_lookback)
        volume_data = VolumeProfileData(volume_change=change, volume_strength=strength)

    return IndicatorSet(
        rsi=rsi_val,
        moving_average=MovingAverageData(short_term=short_ma, long_term=long_ma),
        volatility=annual_vol,
        macd=MACDData(
            value=float(macd_line[-1]),
            signal=float(signal_line[-1]),
            histogram=float(histogram[-1]),
        ),
        bollinger_bands=BollingerBandsData(upper=upper, middle=middle, lower=lower),
        volume_profile=volume_data,
        price_position=PricePosition(
            **price_position(closes[-1], upper, lower, short_ma)
        ),
    )


def analyze(
    series: PriceSeries, config: Optional[AnalysisConfig] = None
) -> AnalysisResult:
    """
    Analyze a price series.

    Args:
        series: Ordered price history, oldest first
        config: Indicator windows; defaults to the standard settings

    Returns:
        AnalysisResult with recommendation, confidence, reasons and metrics

    Raises:
        InvalidSeriesError: Empty series, non-positive price, negative
            volume, or timestamps not strictly increasing
        InsufficientDataError: Series shorter than the longest required
            indicator window (30 with the standard settings)
    """
    config = config or DEFAULT_CONFIG

    windows = config.required_windows
    governing = max(windows, key=windows.get)
    arrays = to_arrays(series, windows[governing], governing)
    metrics = compute_indicators(arrays, config)
    verdict = synthesize(SignalInputs.from_metrics(metrics))

    return AnalysisResult(
        recommendation=verdict.recommendation,
        confidence=verdict.confidence,
        reasons=verdict.reasons,
        metrics=metrics,
    )

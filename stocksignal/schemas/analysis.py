"""
CONTRACT 2: Analysis Engine

Input: PriceSeries
Output: AnalysisResult

Indicator values and the recommendation derived from them.
Pure Python/NumPy - all math is deterministic.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, model_validator

from stocksignal.core.config import Settings


# =============================================================================
# ENUMS
# =============================================================================


class Recommendation(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"

    @classmethod
    def from_confidence(cls, confidence: int) -> "Recommendation":
        """BUY at 60 and above, SELL at 40 and below, HOLD in between."""
        if confidence >= BUY_THRESHOLD:
            return cls.BUY
        if confidence <= SELL_THRESHOLD:
            return cls.SELL
        return cls.HOLD


class VolumeStrength(str, Enum):
    HIGH = "HIGH"
    NORMAL = "NORMAL"
    LOW = "LOW"


BUY_THRESHOLD = 60
SELL_THRESHOLD = 40


# =============================================================================
# CONFIGURATION
# =============================================================================


class AnalysisConfig(BaseModel):
    """Indicator windows and thresholds. Defaults are the standard settings."""

    rsi_period: int = Field(default=14, ge=1)
    macd_fast: int = Field(default=12, ge=1)
    macd_slow: int = Field(default=26, ge=1)
    macd_signal: int = Field(default=9, ge=1)
    bollinger_period: int = Field(default=20, ge=1)
    bollinger_std_dev: float = Field(default=2.0, ge=0)
    short_ma_window: int = Field(default=7, ge=1)
    long_ma_window: int = Field(default=30, ge=1)
    volume_lookback: int = Field(default=10, ge=1)
    trading_days_per_year: int = Field(default=252, ge=1)

    class Config:
        frozen = True

    @classmethod
    def from_settings(cls, settings: Settings) -> "AnalysisConfig":
        return cls(
            rsi_period=settings.rsi_period,
            macd_fast=settings.macd_fast,
            macd_slow=settings.macd_slow,
            macd_signal=settings.macd_signal,
            bollinger_period=settings.bollinger_period,
            bollinger_std_dev=settings.bollinger_std_dev,
            short_ma_window=settings.short_ma_window,
            long_ma_window=settings.long_ma_window,
            volume_lookback=settings.volume_lookback,
            trading_days_per_year=settings.trading_days_per_year,
        )

    @property
    def required_windows(self) -> dict[str, int]:
        """Minimum series length per indicator."""
        return {
            "RSI": self.rsi_period + 1,
            "MACD": self.macd_slow,
            "Bollinger Bands": self.bollinger_period,
            "Short-term MA": self.short_ma_window,
            "Long-term MA": self.long_ma_window,
        }

    @property
    def min_observations(self) -> int:
        """Longest required window; governs whether full analysis can run."""
        return max(self.required_windows.values())


# =============================================================================
# OUTPUT: Indicator Components
# =============================================================================


class MovingAverageData(BaseModel):
    """Short and long simple moving averages."""

    short_term: float
    long_term: float

    class Config:
        frozen = True


class MACDData(BaseModel):
    """Latest MACD values."""

    value: float
    signal: float
    histogram: float

    class Config:
        frozen = True


class BollingerBandsData(BaseModel):
    """Bollinger Bands values."""

    upper: float
    middle: float
    lower: float

    class Config:
        frozen = True


class VolumeProfileData(BaseModel):
    """Latest volume versus its recent average."""

    volume_change: float = Field(..., description="Signed % change vs recent average")
    volume_strength: VolumeStrength

    class Config:
        frozen = True


class PricePosition(BaseModel):
    """Where the latest price sits relative to the bands and short MA."""

    current_price: float = Field(..., gt=0)
    above_upper_band: bool
    below_lower_band: bool
    near_short_term_ma: bool = Field(..., description="Within 2% of the short-term MA")

    class Config:
        frozen = True


class IndicatorSet(BaseModel):
    """
    All indicator values for one analysis.
    Returned by: Indicator Library
    Consumed by: Recommendation Synthesizer, presentation layer
    """

    rsi: float = Field(..., ge=0, le=100)
    moving_average: MovingAverageData
    volatility: float = Field(..., ge=0, description="Annualized, as a fraction")
    macd: MACDData
    bollinger_bands: BollingerBandsData
    volume_profile: Optional[VolumeProfileData] = Field(
        default=None,
        description="None when the series carries no volume data or fewer volumes than the lookback",
    )
    price_position: PricePosition

    class Config:
        frozen = True


# =============================================================================
# OUTPUT: AnalysisResult (Complete Response)
# =============================================================================


class AnalysisResult(BaseModel):
    """
    Complete analysis for a price series.
    Returned by: Analysis Engine
    Consumed by: presentation layer (renders as-is, never re-derives)
    """

    recommendation: Recommendation
    confidence: int = Field(..., ge=0, le=100)
    reasons: tuple[str, ...] = Field(default=())
    metrics: IndicatorSet

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "recommendation": "HOLD",
                "confidence": 50,
                "reasons": [
                    "RSI indicates overbought conditions",
                    "Short-term trend is bullish (10.04% above long-term MA)",
                    "MACD above signal line (bullish)",
                ],
                "metrics": {
                    "rsi": 100.0,
                    "moving_average": {"short_term": 126.0, "long_term": 114.5},
                    "volatility": 0.0104,
                    "macd": {"value": 3.12, "signal": 2.71, "histogram": 0.41},
                    "bollinger_bands": {"upper": 131.03, "middle": 119.5, "lower": 107.97},
                    "volume_profile": None,
                    "price_position": {
                        "current_price": 129.0,
                        "above_upper_band": False,
                        "below_lower_band": False,
                        "near_short_term_ma": False,
                    },
                },
            }
        }

    @model_validator(mode="after")
    def _recommendation_follows_confidence(self) -> "AnalysisResult":
        expected = Recommendation.from_confidence(self.confidence)
        if self.recommendation != expected:
            raise ValueError(
                f"recommendation {self.recommendation.value} does not match "
                f"confidence {self.confidence} (expected {expected.value})"
            )
        return self

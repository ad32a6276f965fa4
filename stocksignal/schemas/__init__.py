"""
StockSignal Schema Contracts

JSON contracts between the analysis engine and its collaborators.
"""

from stocksignal.schemas.series import PriceObservation, PriceSeries
from stocksignal.schemas.analysis import (
    AnalysisConfig,
    AnalysisResult,
    IndicatorSet,
    MovingAverageData,
    MACDData,
    BollingerBandsData,
    VolumeProfileData,
    PricePosition,
    Recommendation,
    VolumeStrength,
)

__all__ = [
    "PriceObservation",
    "PriceSeries",
    "AnalysisConfig",
    "AnalysisResult",
    "IndicatorSet",
    "MovingAverageData",
    "MACDData",
    "BollingerBandsData",
    "VolumeProfileData",
    "PricePosition",
    "Recommendation",
    "VolumeStrength",
]

"""
Analysis Engine Service

CONTRACT:
    Input:  PriceSeries (timestamp/price/volume history)
    Output: AnalysisResult

RESPONSIBILITIES:
    - Validate the series and derive price/volume/return arrays
    - Calculate indicators (RSI, EMA, MACD, SMA, Bollinger Bands,
      volatility, volume profile)
    - Score the indicators into a confidence and BUY/SELL/HOLD call

PURE PYTHON - No I/O.
Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from stocksignal.services.analysis.engine import analyze, compute_indicators
from stocksignal.services.analysis.interface import AnalysisServiceInterface
from stocksignal.services.analysis.service import AnalysisService, get_analysis_service

__all__ = [
    "analyze",
    "compute_indicators",
    "AnalysisServiceInterface",
    "AnalysisService",
    "get_analysis_service",
]

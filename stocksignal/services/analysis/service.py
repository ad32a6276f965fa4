"""
Analysis Service Implementation

Wraps the synchronous analysis engine for async hosts.
NO I/O - Pure Python/NumPy calculations.
"""

import logging
from typing import Optional

from stocksignal.core.config import get_settings
from stocksignal.schemas.series import PriceSeries
from stocksignal.schemas.analysis import AnalysisConfig, AnalysisResult
from stocksignal.services.base import InsufficientDataError, InvalidSeriesError
from stocksignal.services.analysis.interface import AnalysisServiceInterface
from stocksignal.services.analysis.engine import analyze

logger = logging.getLogger(__name__)


class AnalysisService(AnalysisServiceInterface):
    """
    Analysis Service.

    Computes indicators and a recommendation for a price series.
    All calculations are deterministic and reproducible.
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or AnalysisConfig.from_settings(get_settings())

    @property
    def name(self) -> str:
        return "AnalysisService"

    async def execute(self, input_data: PriceSeries) -> AnalysisResult:
        """Analyze one price series."""
        symbol = input_data.symbol or "series"
        try:
            result = analyze(input_data, self.config)
        except InvalidSeriesError as e:
            logger.warning(f"Rejected {symbol}: {e.message}")
            raise
        except InsufficientDataError as e:
            logger.warning(
                f"Insufficient history for {symbol}: "
                f"{e.indicator} needs {e.required}, got {e.available}"
            )
            raise

        logger.info(
            f"Analysis for {symbol}: {result.recommendation.value} "
            f"(confidence {result.confidence}, {len(result.reasons)} reasons)"
        )
        return result

    async def health_check(self) -> bool:
        """Analysis service is always healthy (pure computation)."""
        return True


# Singleton instance
_service_instance: Optional[AnalysisService] = None


def get_analysis_service() -> AnalysisService:
    """Get or create analysis service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = AnalysisService()
    return _service_instance

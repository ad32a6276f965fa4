"""
Analysis Service Interface

Defines the contract for the indicator-and-recommendation layer.
"""

from abc import abstractmethod

from stocksignal.services.base import BaseService
from stocksignal.schemas.series import PriceSeries
from stocksignal.schemas.analysis import AnalysisResult


class AnalysisServiceInterface(BaseService[PriceSeries, AnalysisResult]):
    """
    Analysis Service Contract.

    INPUT: PriceSeries
        - observations: timestamp/price/volume history, oldest first

    OUTPUT: AnalysisResult
        - recommendation: BUY / SELL / HOLD (derived from confidence)
        - confidence: 0-100
        - reasons: one entry per scoring rule that fired, in rule order
        - metrics: IndicatorSet

    The data-fetch and symbol-search collaborators sit upstream. Their
    failures never reach this service.
    """

    @property
    def name(self) -> str:
        return "AnalysisService"

    @abstractmethod
    async def execute(self, input_data: PriceSeries) -> AnalysisResult:
        """Analyze one price series."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Analysis service is always healthy (pure computation)."""
        pass

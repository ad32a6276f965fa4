"""
Analysis API Endpoints

Endpoints for running the analysis engine on a supplied price series.
The caller fetches the history; this layer never contacts a quote provider.
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from stocksignal.schemas.series import PriceSeries
from stocksignal.schemas.analysis import AnalysisConfig, AnalysisResult
from stocksignal.services.base import InsufficientDataError, InvalidSeriesError
from stocksignal.services.analysis import get_analysis_service

router = APIRouter()


class AnalysisConfigResponse(BaseModel):
    """Active indicator windows."""
    config: AnalysisConfig
    min_observations: int


@router.post("", response_model=AnalysisResult)
async def analyze_series(series: PriceSeries):
    """
    Analyze a price series.

    Returns:
        - Recommendation (BUY / SELL / HOLD) and confidence (0-100)
        - Reasons, in rule order
        - Metrics: RSI, moving averages, MACD, Bollinger Bands,
          volatility, volume profile, price position

    Errors:
        - 400 invalid_series: empty, unordered or non-positive input
        - 422 insufficient_data: not enough history for every indicator
    """
    service = get_analysis_service()
    try:
        return await service.execute(series)
    except InvalidSeriesError as e:
        raise HTTPException(
            status_code=400,
            detail={"error": "invalid_series", "message": e.message, **e.details},
        )
    except InsufficientDataError as e:
        raise HTTPException(
            status_code=422,
            detail={"error": "insufficient_data", "message": e.message, **e.details},
        )


@router.get("/config", response_model=AnalysisConfigResponse)
async def get_analysis_config():
    """Get the indicator windows the service is running with."""
    config = get_analysis_service().config
    return AnalysisConfigResponse(config=config, min_observations=config.min_observations)

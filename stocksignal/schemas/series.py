"""
CONTRACT 1: Price Series Input

Input: PriceSeries (supplied by the upstream quote collaborator)

The engine never fetches quotes itself. Whatever service retrieves the
history for a ticker normalizes it into this shape before analysis.
Value checks (ordering, positive prices) are enforced by the preprocessor
so that every rejection surfaces as InvalidSeriesError.
"""

from typing import Optional
from pydantic import BaseModel, Field


class PriceObservation(BaseModel):
    """Single point in a price history."""

    timestamp: int = Field(..., description="Epoch milliseconds")
    price: float = Field(..., description="Observed price, must be > 0")
    volume: Optional[float] = Field(
        default=None,
        description="Traded volume for the step, must be >= 0 when present",
    )

    class Config:
        frozen = True


class PriceSeries(BaseModel):
    """
    Ordered price history for one instrument.
    Sent by: Quote fetch collaborator / API
    Received by: Analysis Engine

    Observations run oldest to newest with strictly increasing timestamps.
    """

    symbol: Optional[str] = Field(default=None, description="Ticker, informational only")
    observations: tuple[PriceObservation, ...] = Field(default=())

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "symbol": "AAPL",
                "observations": [
                    {"timestamp": 1704153600000, "price": 185.64, "volume": 82488700},
                    {"timestamp": 1704240000000, "price": 184.25, "volume": 58414500},
                ],
            }
        }

    def __len__(self) -> int:
        return len(self.observations)

    @property
    def has_volume(self) -> bool:
        """True when every observation carries a volume figure."""
        return bool(self.observations) and all(
            o.volume is not None for o in self.observations
        )

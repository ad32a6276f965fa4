"""Shared builders for analysis tests."""

from stocksignal.schemas.series import PriceObservation, PriceSeries

DAY_MS = 86_400_000
START_MS = 1_704_067_200_000  # 2024-01-01


def make_series(prices, volumes=None, symbol="TEST", start=START_MS, step=DAY_MS):
    """Build a PriceSeries with evenly spaced timestamps."""
    observations = []
    for i, price in enumerate(prices):
        volume = volumes[i] if volumes is not None else None
        observations.append(
            PriceObservation(timestamp=start + i * step, price=price, volume=volume)
        )
    return PriceSeries(symbol=symbol, observations=tuple(observations))


def random_walk(rng, count=60, start_price=100.0, sigma=0.02):
    """Geometric random walk of positive prices."""
    prices = [start_price]
    for _ in range(count - 1):
        prices.append(prices[-1] * (1 + rng.normal(0, sigma)))
    return prices

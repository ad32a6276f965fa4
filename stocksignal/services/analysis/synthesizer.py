"""
Recommendation Synthesizer

Folds indicator values into a confidence score, a BUY/SELL/HOLD call and
the reasons behind it. Rules run in a fixed order and the reasons are
returned in that order; changing the order changes observable output.
"""

from dataclasses import dataclass
from typing import Callable, Optional
import numpy as np

from stocksignal.schemas.analysis import IndicatorSet, Recommendation

BASELINE_CONFIDENCE = 50.0

RSI_OVERBOUGHT = 70
RSI_OVERSOLD = 30
RSI_ADJUSTMENT = 20.0

MA_MAX_ADJUSTMENT = 15.0
MACD_ADJUSTMENT = 10.0

NORMAL_VOLATILITY = 0.20
VOLATILITY_MAX_ADJUSTMENT = 15.0
VOLATILITY_EXCESS_DIVISOR = 20.0


@dataclass(frozen=True)
class SignalInputs:
    """Values the scoring rules read. None means the metric is absent."""

    rsi: Optional[float] = None
    short_term_ma: Optional[float] = None
    long_term_ma: Optional[float] = None
    macd: Optional[float] = None
    macd_signal: Optional[float] = None
    volatility: Optional[float] = None

    @classmethod
    def from_metrics(cls, metrics: IndicatorSet) -> "SignalInputs":
        return cls(
            rsi=metrics.rsi,
            short_term_ma=metrics.moving_average.short_term,
            long_term_ma=metrics.moving_average.long_term,
            macd=metrics.macd.value,
            macd_signal=metrics.macd.signal,
            volatility=metrics.volatility,
        )


@dataclass(frozen=True)
class Verdict:
    recommendation: Recommendation
    confidence: int
    reasons: tuple[str, ...]


# A rule returns (confidence delta, reason) when it fires, else None
Rule = Callable[[SignalInputs], Optional[tuple[float, str]]]


def rsi_rule(inputs: SignalInputs) -> Optional[tuple[float, str]]:
    if inputs.rsi is None:
        return None
    if inputs.rsi > RSI_OVERBOUGHT:
        return -RSI_ADJUSTMENT, "RSI indicates overbought conditions"
    if inputs.rsi < RSI_OVERSOLD:
        return RSI_ADJUSTMENT, "RSI indicates oversold conditions"
    return None


def moving_average_rule(inputs: SignalInputs) -> Optional[tuple[float, str]]:
    short_ma, long_ma = inputs.short_term_ma, inputs.long_term_ma
    if short_ma is None or long_ma is None:
        return None

    spread = ((short_ma - long_ma) / long_ma) * 100
    if short_ma > long_ma:
        return (
            min(MA_MAX_ADJUSTMENT, spread),
            f"Short-term trend is bullish ({spread:.2f}% above long-term MA)",
        )
    return (
        -min(MA_MAX_ADJUSTMENT, abs(spread)),
        f"Short-term trend is bearish ({abs(spread):.2f}% below long-term MA)",
    )


def macd_rule(inputs: SignalInputs) -> Optional[tuple[float, str]]:
    if inputs.macd is None or inputs.macd_signal is None:
        return None
    if inputs.macd > inputs.macd_signal:
        return MACD_ADJUSTMENT, "MACD above signal line (bullish)"
    return -MACD_ADJUSTMENT, "MACD below signal line (bearish)"


def volatility_rule(inputs: SignalInputs) -> Optional[tuple[float, str]]:
    if inputs.volatility is None or inputs.volatility <= NORMAL_VOLATILITY:
        return None

    # How far above the normal level, as a percent of that level
    excess = (inputs.volatility - NORMAL_VOLATILITY) / NORMAL_VOLATILITY * 100
    return (
        -min(VOLATILITY_MAX_ADJUSTMENT, excess / VOLATILITY_EXCESS_DIVISOR),
        f"High volatility: {inputs.volatility * 100:.2f}% annually "
        f"({excess:.2f}% above normal)",
    )


RULES: tuple[Rule, ...] = (
    rsi_rule,
    moving_average_rule,
    macd_rule,
    volatility_rule,
)


def clamp_confidence(score: float) -> int:
    """Clamp to [0, 100] and round half up."""
    clamped = min(100.0, max(0.0, score))
    return int(np.floor(clamped + 0.5))


def synthesize(inputs: SignalInputs, rules: tuple[Rule, ...] = RULES) -> Verdict:
    """
    Score the inputs against every rule in order.

    Returns:
        Verdict whose recommendation is derived from the final integer
        confidence
    """
    score = BASELINE_CONFIDENCE
    reasons = []

    for rule in rules:
        fired = rule(inputs)
        if fired is None:
            continue
        delta, reason = fired
        score += delta
        reasons.append(reason)

    confidence = clamp_confidence(score)
    return Verdict(
        recommendation=Recommendation.from_confidence(confidence),
        confidence=confidence,
        reasons=tuple(reasons),
    )

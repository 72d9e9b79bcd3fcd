"""
Volatility estimation (Average True Range).

ATR feeds the impulse and displacement thresholds of the order block
detector. A zero ATR means "not enough data" and callers must not divide
by it.
"""

from typing import Sequence

from .candles import Candle


def true_range(candle: Candle, prev_close: float) -> float:
    """max(high - low, |high - prev_close|, |low - prev_close|)"""
    return max(
        candle.high - candle.low,
        abs(candle.high - prev_close),
        abs(candle.low - prev_close),
    )


def compute_atr(candles: Sequence[Candle], period: int = 14) -> float:
    """
    Compute ATR over the last `period` true ranges.

    Returns:
        Arithmetic mean of the last `period` true ranges, or 0.0 when fewer
        than `period + 1` candles are available.
    """
    if period < 1 or len(candles) < period + 1:
        return 0.0

    total = 0.0
    for i in range(len(candles) - period, len(candles)):
        total += true_range(candles[i], candles[i - 1].close)

    return total / period


class VolatilityEstimator:
    """ATR over a fixed lookback."""

    def __init__(self, period: int = 14):
        self.period = period

    def estimate(self, candles: Sequence[Candle]) -> float:
        return compute_atr(candles, self.period)

    def estimate_before(self, candles: Sequence[Candle], index: int) -> float:
        """ATR of the candles strictly before `index`."""
        return compute_atr(candles[: max(0, index)], self.period)

import math
import os
import sys
from typing import List

import pytest

TESTS_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(TESTS_DIR, "..", ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from smc_analyzer.engines.candles import Candle  # noqa: E402

BAR_SECONDS = 60


def make_candle(index: int, o: float, h: float, l: float, c: float, v: float = 1000.0) -> Candle:
    """Candle at `index` bars after t=0."""
    return Candle(time=index * BAR_SECONDS, open=o, high=h, low=l, close=c, volume=v)


def doji(index: int, price: float, half_range: float = 0.5, v: float = 1000.0) -> Candle:
    """Open == close, so it is neither bullish nor bearish."""
    return make_candle(index, price, price + half_range, price - half_range, price, v)


def bar(index: int, high: float, low: float, v: float = 1000.0) -> Candle:
    """Doji spanning [low, high]."""
    mid = (high + low) / 2
    return make_candle(index, mid, high, low, mid, v)


def wave_series(count: int = 120, drift: float = 0.5, amplitude: float = 5.0, period: int = 20) -> List[Candle]:
    """
    Drifting sine wave with strict peaks and troughs.

    With the defaults, swing highs sit at i = 6 + 20k and swing lows at
    i = 14 + 20k, both rising by 10 per cycle.
    """
    prices = [
        100 + drift * i + amplitude * math.sin(2 * math.pi * i / period) for i in range(count)
    ]
    candles = []
    for i, p in enumerate(prices):
        rising = i == 0 or p >= prices[i - 1]
        close = p + 0.2 if rising else p - 0.2
        open_ = 2 * p - close
        candles.append(make_candle(i, open_, p + 0.5, p - 0.5, close, 1000.0 + (i % 7) * 50))
    return candles


@pytest.fixture
def flat_candles() -> List[Candle]:
    """60 identical candles."""
    return [make_candle(i, 100.0, 100.0, 100.0, 100.0) for i in range(60)]


@pytest.fixture
def uptrend_wave() -> List[Candle]:
    return wave_series()


@pytest.fixture
def range_wave() -> List[Candle]:
    """Mean-reverting oscillation (no drift)."""
    return wave_series(count=100, drift=0.0)


@pytest.fixture
def bullish_ob_candles() -> List[Candle]:
    """
    Doji base, bearish candle (range 1), impulsive bullish candle, higher close.

    Index 10 is the order block candle, 11 the impulse. Only 11 candles
    precede the impulse, so the pre-OB ATR is zero.
    """
    candles = [doji(i, 100.0) for i in range(10)]
    candles.append(make_candle(10, 100.4, 100.5, 99.5, 99.6))
    candles.append(make_candle(11, 99.6, 103.2, 99.5, 103.0))
    candles.append(make_candle(12, 103.0, 104.2, 102.9, 104.0))
    candles.extend(doji(i, 104.0) for i in range(13, 18))
    return candles


def strong_ob_candles(impulse_volume: float = 3000.0) -> List[Candle]:
    """
    20 doji base candles, then bearish OB candle (20), impulse (21),
    continuation (22) and dojis at 106 (23-26).
    """
    candles = [doji(i, 100.0) for i in range(20)]
    candles.append(make_candle(20, 100.4, 100.5, 99.5, 99.6))
    candles.append(make_candle(21, 99.6, 103.2, 99.5, 103.0, impulse_volume))
    candles.append(make_candle(22, 103.0, 104.2, 102.9, 104.0))
    candles.extend(doji(i, 106.0) for i in range(23, 27))
    return candles

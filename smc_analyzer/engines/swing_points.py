"""
Swing point detection.

Swing High: high[i] strictly above the highs of L candles on each side
Swing Low:  low[i] strictly below the lows of L candles on each side

Equal extremes never qualify. A candle may be both a swing high and a
swing low (outside bar).
"""

import logging
from typing import List, Sequence

from .candles import Candle
from .data_types import SwingPoint, SwingType

logger = logging.getLogger(__name__)


class SwingPointDetector:
    """Finds local extrema with a symmetric lookback window."""

    def __init__(self, lookback: int = 5):
        self.lookback = lookback

    def detect(self, candles: Sequence[Candle]) -> List[SwingPoint]:
        """
        Detect swing highs and lows.

        Returns:
            Swing points sorted ascending by time. At the same index the
            high comes before the low.
        """
        L = self.lookback
        swings: List[SwingPoint] = []

        for i in range(L, len(candles) - L):
            candle = candles[i]
            is_high = True
            is_low = True
            strength_high = 0
            strength_low = 0

            for j in range(1, L + 1):
                for neighbour in (candles[i - j], candles[i + j]):
                    if neighbour.high >= candle.high:
                        is_high = False
                    else:
                        strength_high += 1

                    if neighbour.low <= candle.low:
                        is_low = False
                    else:
                        strength_low += 1

            if is_high:
                swings.append(SwingPoint(
                    time=candle.time,
                    price=candle.high,
                    swing_type=SwingType.HIGH,
                    index=i,
                    strength=strength_high,
                ))

            if is_low:
                swings.append(SwingPoint(
                    time=candle.time,
                    price=candle.low,
                    swing_type=SwingType.LOW,
                    index=i,
                    strength=strength_low,
                ))

        swings.sort(key=lambda s: s.time)
        logger.debug(f"Detected {len(swings)} swing points (lookback={L})")
        return swings


def detect_swing_points(candles: Sequence[Candle], lookback: int = 5) -> List[SwingPoint]:
    return SwingPointDetector(lookback).detect(candles)


def split_swings(swings: Sequence[SwingPoint]):
    """Return (highs, lows) preserving time order."""
    highs = [s for s in swings if s.swing_type == SwingType.HIGH]
    lows = [s for s in swings if s.swing_type == SwingType.LOW]
    return highs, lows

"""
Order Block Detection

Bullish OB: last bearish candle before an impulsive bullish candle
Bearish OB: last bullish candle before an impulsive bearish candle

For each impulse candle i the triple (i-1, i, i+1) is examined:
    prev    - opposite colour, becomes the zone
    current - body > impulse_atr_mult * ATR
    next    - closes beyond current (continuation)

Mitigation: the first later candle that trades back into the zone
(bullish: low <= top, bearish: high >= bottom). Mitigation is final.

Respect count: a local extension, not part of the classic OB definition.
Before mitigation, every candle whose wick comes within
respect_tolerance_atr * pre-OB ATR of the zone edge without entering it
counts as one respect. A touch always mitigates, so touches never count.

Strength:
    STRONG  volume_ratio > 1.5 AND displacement_ratio > 2
    MEDIUM  volume_ratio > 1   OR  displacement_ratio > 1.5
    WEAK    otherwise, or when the pre-OB ATR is zero
"""

import logging
from typing import List, Optional, Sequence

from .candles import Candle
from .data_types import Direction, OBStrength, OrderBlock
from .smc_config import OrderBlockThresholds, safe_divide
from .volatility import VolatilityEstimator

logger = logging.getLogger(__name__)


class OrderBlockDetector:
    """
    Finds order blocks and tracks their mitigation.

    `respect_count` is a near-miss tally (see module docstring); it stays 0
    when the pre-OB ATR is zero.
    """

    def __init__(
        self,
        thresholds: Optional[OrderBlockThresholds] = None,
        atr_period: int = 14,
    ):
        self.thresholds = thresholds or OrderBlockThresholds()
        self.volatility = VolatilityEstimator(atr_period)

    def detect(self, candles: Sequence[Candle]) -> List[OrderBlock]:
        cfg = self.thresholds
        order_blocks: List[OrderBlock] = []
        avg_range = self.volatility.estimate(candles)
        impulse_min = avg_range * cfg.impulse_atr_mult

        for i in range(cfg.first_index, len(candles) - 1):
            prev = candles[i - 1]
            current = candles[i]
            nxt = candles[i + 1]

            if (
                prev.is_bearish
                and current.is_bullish
                and current.close - current.open > impulse_min
                and nxt.close > current.close
            ):
                ob = OrderBlock(
                    id=f"ob_bull_{current.time}",
                    kind=Direction.BULLISH,
                    zone_top=max(prev.open, prev.close),
                    zone_bottom=prev.low,
                    start_time=prev.time,
                    end_time=current.time,
                )
                order_blocks.append(self._finalize(candles, i, ob))

            if (
                prev.is_bullish
                and current.is_bearish
                and current.open - current.close > impulse_min
                and nxt.close < current.close
            ):
                ob = OrderBlock(
                    id=f"ob_bear_{current.time}",
                    kind=Direction.BEARISH,
                    zone_top=prev.high,
                    zone_bottom=min(prev.open, prev.close),
                    start_time=prev.time,
                    end_time=current.time,
                )
                order_blocks.append(self._finalize(candles, i, ob))

        logger.debug(f"Detected {len(order_blocks)} order blocks (ATR={avg_range:.4f})")
        return order_blocks

    def _finalize(self, candles: Sequence[Candle], index: int, ob: OrderBlock) -> OrderBlock:
        atr_before = self.volatility.estimate_before(candles, index)
        ob.strength = self.classify_strength(candles, index, ob.kind, atr_before)
        self._scan_mitigation(candles, index, ob, atr_before)
        return ob

    def _scan_mitigation(
        self, candles: Sequence[Candle], index: int, ob: OrderBlock, atr_before: float
    ) -> None:
        """Walk forward until the zone is first re-entered."""
        tolerance = atr_before * self.thresholds.respect_tolerance_atr

        for j in range(index + 1, len(candles)):
            candle = candles[j]
            if ob.kind == Direction.BULLISH:
                if candle.low <= ob.zone_top:
                    ob.mark_mitigated(candle.time)
                    return
                near_edge = candle.low - ob.zone_top <= tolerance
            else:
                if candle.high >= ob.zone_bottom:
                    ob.mark_mitigated(candle.time)
                    return
                near_edge = ob.zone_bottom - candle.high <= tolerance

            if tolerance > 0 and near_edge:
                ob.respect_count += 1

    def classify_strength(
        self,
        candles: Sequence[Candle],
        index: int,
        kind: Direction,
        atr_before: float,
    ) -> OBStrength:
        cfg = self.thresholds

        # Degenerate volatility: the displacement ratio is undefined
        if atr_before <= 0:
            return OBStrength.WEAK

        window = candles[max(0, index - cfg.volume_lookback):index]
        avg_volume = safe_divide(sum(c.volume for c in window), len(window))
        volume_ratio = safe_divide(candles[index].volume, avg_volume)

        origin_close = candles[index].close
        displacement = 0.0
        for j in range(index + 1, min(index + 1 + cfg.displacement_candles, len(candles))):
            if kind == Direction.BULLISH:
                move = candles[j].high - origin_close
            else:
                move = origin_close - candles[j].low
            displacement = max(displacement, move)

        displacement_ratio = displacement / atr_before

        if volume_ratio > cfg.strong_volume_ratio and displacement_ratio > cfg.strong_displacement_ratio:
            return OBStrength.STRONG
        if volume_ratio > cfg.medium_volume_ratio or displacement_ratio > cfg.medium_displacement_ratio:
            return OBStrength.MEDIUM
        return OBStrength.WEAK


def detect_order_blocks(candles: Sequence[Candle], atr_period: int = 14) -> List[OrderBlock]:
    return OrderBlockDetector(atr_period=atr_period).detect(candles)

"""
Liquidity sweep detection.

Buy-side sweep:  high pierces a prior swing high, close back below it,
                 upper wick > 0.5 * body
Sell-side sweep: low pierces a prior swing low, close back above it,
                 lower wick > 0.5 * body

Sweeps are point-in-time events; they are never mitigated or expired.
"""

import logging
from typing import List, Optional, Sequence

from .candles import Candle
from .data_types import LiquiditySweep, SweepSide, SwingPoint
from .smc_config import SweepThresholds
from .swing_points import split_swings

logger = logging.getLogger(__name__)


class LiquiditySweepDetector:
    """Finds wick-through-and-reject patterns at prior swing levels."""

    def __init__(self, thresholds: Optional[SweepThresholds] = None):
        self.thresholds = thresholds or SweepThresholds()

    def detect(
        self, candles: Sequence[Candle], swings: Sequence[SwingPoint]
    ) -> List[LiquiditySweep]:
        ratio = self.thresholds.min_wick_body_ratio
        highs, lows = split_swings(swings)
        sweeps: List[LiquiditySweep] = []

        for i, candle in enumerate(candles):
            min_wick = candle.body * ratio

            for swing in highs:
                if swing.index >= i:
                    break
                if (
                    candle.high > swing.price
                    and candle.close < swing.price
                    and candle.upper_wick > min_wick
                ):
                    sweeps.append(LiquiditySweep(
                        id=f"sweep_buy_{candle.time}_{swing.time}",
                        side=SweepSide.BUY_SIDE,
                        swept_level=swing.price,
                        sweep_time=candle.time,
                        wick_size=candle.high - swing.price,
                        closed_back_above=False,
                    ))

            for swing in lows:
                if swing.index >= i:
                    break
                if (
                    candle.low < swing.price
                    and candle.close > swing.price
                    and candle.lower_wick > min_wick
                ):
                    sweeps.append(LiquiditySweep(
                        id=f"sweep_sell_{candle.time}_{swing.time}",
                        side=SweepSide.SELL_SIDE,
                        swept_level=swing.price,
                        sweep_time=candle.time,
                        wick_size=swing.price - candle.low,
                        closed_back_above=True,
                    ))

        logger.debug(f"Detected {len(sweeps)} liquidity sweeps")
        return sweeps


def detect_liquidity_sweeps(
    candles: Sequence[Candle], swings: Sequence[SwingPoint]
) -> List[LiquiditySweep]:
    return LiquiditySweepDetector().detect(candles, swings)

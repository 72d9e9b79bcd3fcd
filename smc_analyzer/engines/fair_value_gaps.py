"""
Fair Value Gap (FVG) detection.

Bullish FVG: c3.low  > c1.high  -> zone (top=c3.low, bottom=c1.high)
Bearish FVG: c3.high < c1.low   -> zone (top=c1.low, bottom=c3.high)

Size is measured against the middle candle close and must exceed
`min_gap_pct`. After creation the gap is scanned forward: the first candle
that trades through the far edge fills it (and flags an inversion when it
also closes beyond that edge); shallower penetrations raise
`fill_percentage` without filling.
"""

import logging
from typing import List, Optional, Sequence

from .candles import Candle
from .data_types import Direction, FairValueGap
from .smc_config import FairValueGapThresholds

logger = logging.getLogger(__name__)


class FairValueGapDetector:
    """Finds 3-candle imbalances and tracks how far they were filled."""

    def __init__(self, thresholds: Optional[FairValueGapThresholds] = None):
        self.thresholds = thresholds or FairValueGapThresholds()

    def detect(self, candles: Sequence[Candle]) -> List[FairValueGap]:
        fvgs: List[FairValueGap] = []
        min_gap = self.thresholds.min_gap_pct

        for i in range(2, len(candles)):
            c1 = candles[i - 2]
            c2 = candles[i - 1]
            c3 = candles[i]

            if c2.close <= 0:
                continue

            if c3.low > c1.high:
                size = (c3.low - c1.high) / c2.close * 100
                if size > min_gap:
                    fvg = FairValueGap(
                        id=f"fvg_bull_{c2.time}",
                        kind=Direction.BULLISH,
                        zone_top=c3.low,
                        zone_bottom=c1.high,
                        start_time=c2.time,
                        end_time=c3.time,
                        size_percent=size,
                    )
                    self._track_fill(candles, i, fvg)
                    fvgs.append(fvg)

            if c3.high < c1.low:
                size = (c1.low - c3.high) / c2.close * 100
                if size > min_gap:
                    fvg = FairValueGap(
                        id=f"fvg_bear_{c2.time}",
                        kind=Direction.BEARISH,
                        zone_top=c1.low,
                        zone_bottom=c3.high,
                        start_time=c2.time,
                        end_time=c3.time,
                        size_percent=size,
                    )
                    self._track_fill(candles, i, fvg)
                    fvgs.append(fvg)

        logger.debug(f"Detected {len(fvgs)} fair value gaps")
        return fvgs

    @staticmethod
    def _track_fill(candles: Sequence[Candle], index: int, fvg: FairValueGap) -> None:
        height = fvg.height

        for j in range(index + 1, len(candles)):
            candle = candles[j]

            if fvg.kind == Direction.BULLISH:
                if candle.low <= fvg.zone_bottom:
                    fvg.mark_filled(inversion=candle.close < fvg.zone_bottom)
                    return
                if candle.low < fvg.zone_top:
                    fvg.record_penetration((fvg.zone_top - candle.low) / height * 100)
            else:
                if candle.high >= fvg.zone_top:
                    fvg.mark_filled(inversion=candle.close > fvg.zone_top)
                    return
                if candle.high > fvg.zone_bottom:
                    fvg.record_penetration((candle.high - fvg.zone_bottom) / height * 100)


def detect_fair_value_gaps(candles: Sequence[Candle], min_gap_pct: float = 0.1) -> List[FairValueGap]:
    return FairValueGapDetector(FairValueGapThresholds(min_gap_pct=min_gap_pct)).detect(candles)

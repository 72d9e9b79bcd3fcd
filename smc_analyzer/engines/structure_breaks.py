"""
Break of Structure (BOS) / Change of Character (CHoCH) detection.

Trend seed: the two most recent swing highs and lows
    HH + HL -> bullish
    LH + LL -> bearish
    else    -> unset

Each swing is paired with the nearest earlier swing of the same kind. The
candles after that prior swing are scanned for the first one trading beyond
it; the break is a CHoCH when it opposes the tracked trend (the trend then
flips) and a BOS otherwise. Only the first break per
(broken_level, direction) is kept.
"""

import logging
from typing import Dict, List, Optional, Sequence, Set, Tuple

from .candles import Candle
from .data_types import BreakType, Direction, StructureBreak, SwingPoint, SwingType
from .swing_points import split_swings

logger = logging.getLogger(__name__)

_SHORT = {Direction.BULLISH: "bull", Direction.BEARISH: "bear"}


def seed_trend(swings: Sequence[SwingPoint]) -> Optional[Direction]:
    """Trend implied by the two most recent swing highs and lows."""
    highs, lows = split_swings(swings)
    if len(highs) < 2 or len(lows) < 2:
        return None

    h0, h1 = highs[-2].price, highs[-1].price
    l0, l1 = lows[-2].price, lows[-1].price

    if h1 > h0 and l1 > l0:
        return Direction.BULLISH
    if h1 < h0 and l1 < l0:
        return Direction.BEARISH
    return None


class StructureBreakDetector:
    """Finds BOS and CHoCH events from confirmed swing points."""

    def detect(
        self, candles: Sequence[Candle], swings: Sequence[SwingPoint]
    ) -> List[StructureBreak]:
        highs, lows = split_swings(swings)
        if len(highs) < 2 or len(lows) < 2:
            return []

        trend = seed_trend(swings)
        breaks: List[StructureBreak] = []
        seen: Set[Tuple[float, Direction]] = set()

        # Most recent swing of each kind seen so far
        prior: Dict[SwingType, SwingPoint] = {}

        for swing in swings:
            other = SwingType.LOW if swing.is_high else SwingType.HIGH
            previous = prior.get(swing.swing_type)
            has_opposite = other in prior
            prior[swing.swing_type] = swing

            # A leg needs an opposite swing behind it before it can break
            if previous is None or not has_opposite:
                continue

            direction = Direction.BULLISH if previous.is_high else Direction.BEARISH
            confirm = self._first_break(candles, previous)
            if confirm is None:
                continue

            opposite = (
                Direction.BEARISH if direction == Direction.BULLISH else Direction.BULLISH
            )
            is_choch = trend == opposite
            if is_choch:
                trend = direction

            key = (previous.price, direction)
            if key in seen:
                continue
            seen.add(key)

            kind = BreakType.CHOCH if is_choch else BreakType.BOS
            breaks.append(StructureBreak(
                id=f"struct_{kind.value}_{_SHORT[direction]}_{candles[confirm].time}",
                kind=kind,
                direction=direction,
                broken_level=previous.price,
                break_time=candles[confirm].time,
                confirming_candle_index=confirm,
                origin_swing=previous,
            ))

        logger.debug(f"Detected {len(breaks)} structure breaks")
        return breaks

    @staticmethod
    def _first_break(candles: Sequence[Candle], swing: SwingPoint) -> Optional[int]:
        """Index of the first candle after `swing` trading beyond its price."""
        for j in range(swing.index + 1, len(candles)):
            if swing.is_high:
                if candles[j].high > swing.price:
                    return j
            elif candles[j].low < swing.price:
                return j
        return None


def detect_structure_breaks(
    candles: Sequence[Candle], swings: Sequence[SwingPoint]
) -> List[StructureBreak]:
    return StructureBreakDetector().detect(candles, swings)

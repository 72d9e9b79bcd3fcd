"""Premium/discount zone from the recent dealing range."""

from typing import Optional, Sequence

from .data_types import PremiumDiscountZone, PriceBand, SwingPoint
from .swing_points import split_swings


class PremiumDiscountCalculator:
    """Splits the range of the most recent swings at its equilibrium."""

    def __init__(self, recent_swings: int = 3):
        self.recent_swings = recent_swings

    def calculate(self, swings: Sequence[SwingPoint]) -> Optional[PremiumDiscountZone]:
        highs, lows = split_swings(swings)
        recent_highs = highs[-self.recent_swings:]
        recent_lows = lows[-self.recent_swings:]

        if not recent_highs or not recent_lows:
            return None

        swing_high = max(s.price for s in recent_highs)
        swing_low = min(s.price for s in recent_lows)
        equilibrium = swing_low + (swing_high - swing_low) / 2

        return PremiumDiscountZone(
            equilibrium=equilibrium,
            premium_band=PriceBand(top=swing_high, bottom=equilibrium),
            discount_band=PriceBand(top=equilibrium, bottom=swing_low),
            swing_high=swing_high,
            swing_low=swing_low,
        )

"""
Core data types for Smart Money Concepts analysis.

Every detector produces one of the records below. Records hold value copies
(times, prices, indices into the candle series) and never reference the
caller's candles, so a result outlives the input it was computed from.
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

# =============================================================================
# ENUMS
# =============================================================================


class SwingType(Enum):
    """Swing point type."""

    HIGH = "high"
    LOW = "low"


class Direction(Enum):
    """Directional side of a zone or break."""

    BULLISH = "bullish"
    BEARISH = "bearish"


class BreakType(Enum):
    """Structure break classification."""

    BOS = "bos"  # Break of Structure (continuation)
    CHOCH = "choch"  # Change of Character (reversal)


class SweepSide(Enum):
    """Liquidity pool taken by a sweep."""

    BUY_SIDE = "buy-side"  # Stops above swing highs
    SELL_SIDE = "sell-side"  # Stops below swing lows


class OBStrength(Enum):
    """Order block strength."""

    STRONG = "strong"
    MEDIUM = "medium"
    WEAK = "weak"


class OBOrigin(Enum):
    """What produced the order block."""

    DISPLACEMENT = "displacement"


class Trend(Enum):
    """Trend derived from recent structure breaks."""

    BULLISH = "bullish"
    BEARISH = "bearish"
    RANGING = "ranging"


class Bias(Enum):
    """Directional bias."""

    LONG = "long"
    SHORT = "short"
    NEUTRAL = "neutral"


class KeyLevelSource(Enum):
    """Feature a key level was taken from."""

    ORDER_BLOCK = "order_block"
    FAIR_VALUE_GAP = "fair_value_gap"
    SWING_POINT = "swing_point"


# =============================================================================
# FEATURES
# =============================================================================


@dataclass(frozen=True)
class SwingPoint:
    """A swing high or swing low."""

    time: int
    price: float
    swing_type: SwingType
    index: int  # Position in the candle series
    strength: int  # Confirming neighbours, at most 2 * lookback

    @property
    def is_high(self) -> bool:
        return self.swing_type == SwingType.HIGH


@dataclass
class OrderBlock:
    """Last opposing candle before an impulsive move."""

    id: str
    kind: Direction
    zone_top: float
    zone_bottom: float
    start_time: int
    end_time: int
    mitigated: bool = False
    mitigation_time: Optional[int] = None
    strength: OBStrength = OBStrength.WEAK
    respect_count: int = 0
    origin: OBOrigin = OBOrigin.DISPLACEMENT

    @property
    def midpoint(self) -> float:
        return (self.zone_top + self.zone_bottom) / 2

    def contains(self, price: float) -> bool:
        return self.zone_bottom <= price <= self.zone_top

    def mark_mitigated(self, time: int) -> None:
        """Mitigation is final; a second call keeps the first time."""
        if not self.mitigated:
            self.mitigated = True
            self.mitigation_time = time


@dataclass
class FairValueGap:
    """Three-candle imbalance zone."""

    id: str
    kind: Direction
    zone_top: float
    zone_bottom: float
    start_time: int
    end_time: int
    filled: bool = False
    fill_percentage: float = 0.0  # 0-100, non-decreasing while scanning
    size_percent: float = 0.0  # Gap as % of the middle candle close
    is_inversion: bool = False  # Closed through the gap when filled

    @property
    def midpoint(self) -> float:
        return (self.zone_top + self.zone_bottom) / 2

    @property
    def height(self) -> float:
        return self.zone_top - self.zone_bottom

    def contains(self, price: float) -> bool:
        return self.zone_bottom <= price <= self.zone_top

    def record_penetration(self, percentage: float) -> None:
        self.fill_percentage = max(self.fill_percentage, min(100.0, max(0.0, percentage)))

    def mark_filled(self, inversion: bool) -> None:
        self.filled = True
        self.fill_percentage = 100.0
        self.is_inversion = inversion


@dataclass(frozen=True)
class StructureBreak:
    """Record of a structure break (BOS or CHoCH)."""

    id: str
    kind: BreakType
    direction: Direction
    broken_level: float
    break_time: int
    confirming_candle_index: int
    origin_swing: SwingPoint  # Value copy of the swing that was broken


@dataclass(frozen=True)
class LiquiditySweep:
    """Wick through a swing level that closed back on the original side."""

    id: str
    side: SweepSide
    swept_level: float
    sweep_time: int
    wick_size: float
    closed_back_above: bool
    valid: bool = True


@dataclass(frozen=True)
class PriceBand:
    top: float
    bottom: float


@dataclass(frozen=True)
class PremiumDiscountZone:
    """Recent dealing range split at its equilibrium."""

    equilibrium: float
    premium_band: PriceBand
    discount_band: PriceBand
    swing_high: float
    swing_low: float

    def zone_of(self, price: float) -> str:
        """Return "premium", "discount" or "equilibrium" for a price."""
        if price > self.equilibrium:
            return "premium"
        if price < self.equilibrium:
            return "discount"
        return "equilibrium"


@dataclass(frozen=True)
class KeyLevel:
    """Ranked price level of interest."""

    price: float
    label: str  # e.g. "bullish OB", "bearish FVG", "Swing high"
    strength: float
    source: KeyLevelSource


# =============================================================================
# RESULT
# =============================================================================


@dataclass
class AnalysisResult:
    """Complete output of one analysis call."""

    swing_points: List[SwingPoint] = field(default_factory=list)
    order_blocks: List[OrderBlock] = field(default_factory=list)
    fair_value_gaps: List[FairValueGap] = field(default_factory=list)
    structure_breaks: List[StructureBreak] = field(default_factory=list)
    liquidity_sweeps: List[LiquiditySweep] = field(default_factory=list)
    premium_discount: Optional[PremiumDiscountZone] = None
    trend: Trend = Trend.RANGING
    bias: Bias = Bias.NEUTRAL
    key_levels: List[KeyLevel] = field(default_factory=list)
    last_close: Optional[float] = None

    @classmethod
    def neutral(cls) -> "AnalysisResult":
        """Empty result returned when there is not enough data."""
        return cls()

    @property
    def is_empty(self) -> bool:
        return not (
            self.swing_points
            or self.order_blocks
            or self.fair_value_gaps
            or self.structure_breaks
            or self.liquidity_sweeps
        )

    def active_order_blocks(self) -> List[OrderBlock]:
        return [ob for ob in self.order_blocks if not ob.mitigated]

    def open_fair_value_gaps(self) -> List[FairValueGap]:
        return [fvg for fvg in self.fair_value_gaps if not fvg.filled]

    def order_blocks_containing(
        self, price: float, kind: Optional[Direction] = None
    ) -> List[OrderBlock]:
        """
        Unmitigated order blocks whose zone contains `price`.

        Used by alert evaluation, e.g. "is price inside an unmitigated
        bullish OB".
        """
        return [
            ob
            for ob in self.active_order_blocks()
            if ob.contains(price) and (kind is None or ob.kind == kind)
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data view for renderers; enums are replaced by their values."""
        return _enum_values(asdict(self))


def _enum_values(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {key: _enum_values(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_enum_values(item) for item in value]
    return value

"""
Smart Money Concepts Structure Analyzer

Runs every detector over one candle series and packages the result:

    CANDLES
        ↓
    ATR + SWING DETECTION
        ↓
    ORDER BLOCKS / FVGs / BOS-CHoCH / SWEEPS / PREMIUM-DISCOUNT
        ↓
    TREND + BIAS + KEY LEVELS
        ↓
    AnalysisResult

DESIGN:
- Pure function of the input: no state survives between calls, so one
  analyzer may be shared across threads
- Recomputes from scratch on every call
- A detector that fails yields an empty feature list; the others still run
"""

import logging
from typing import Callable, List, Optional, Sequence, TypeVar

from ..logging_config import log_exception
from .candles import Candle, CandleSeries
from .data_types import (
    AnalysisResult,
    Bias,
    Direction,
    FairValueGap,
    KeyLevel,
    KeyLevelSource,
    OBStrength,
    OrderBlock,
    PremiumDiscountZone,
    StructureBreak,
    SwingPoint,
    Trend,
)
from .fair_value_gaps import FairValueGapDetector
from .liquidity_sweeps import LiquiditySweepDetector
from .order_blocks import OrderBlockDetector
from .premium_discount import PremiumDiscountCalculator
from .smc_config import DEFAULT_SMC_CONFIG, SMCConfig
from .structure_breaks import StructureBreakDetector
from .swing_points import SwingPointDetector

logger = logging.getLogger(__name__)

T = TypeVar("T")

OB_WEIGHTS = {
    OBStrength.STRONG: 3,
    OBStrength.MEDIUM: 2,
    OBStrength.WEAK: 1,
}


class StructureAnalyzer:
    """
    Orchestrates the SMC detectors.

    Usage:
        analyzer = StructureAnalyzer()
        result = analyzer.analyze(candles)
        print(result.trend, result.bias)
    """

    def __init__(self, config: Optional[SMCConfig] = None):
        self.config = config or DEFAULT_SMC_CONFIG

        self.swing_detector = SwingPointDetector(self.config.swing.lookback)
        self.order_block_detector = OrderBlockDetector(
            self.config.order_block, atr_period=self.config.atr_period
        )
        self.fvg_detector = FairValueGapDetector(self.config.fair_value_gap)
        self.break_detector = StructureBreakDetector()
        self.sweep_detector = LiquiditySweepDetector(self.config.sweep)
        self.pd_calculator = PremiumDiscountCalculator(
            self.config.key_levels.premium_discount_swings
        )

    def analyze(self, candles: Sequence[Candle]) -> AnalysisResult:
        """
        Analyze a time-ordered candle series.

        Args:
            candles: Candles sorted ascending by time. Malformed candles are
                     dropped before analysis.

        Returns:
            AnalysisResult. Fewer than `min_candles` usable candles gives the
            neutral result (no features, RANGING, NEUTRAL).
        """
        series = CandleSeries.sanitize(candles)

        # An empty series has no last close, whatever min_candles says
        if not series or len(series) < self.config.min_candles:
            logger.debug(
                f"Insufficient data: {len(series)} candles (need {self.config.min_candles})"
            )
            return AnalysisResult.neutral()

        swings = self._run("swing points", lambda: self.swing_detector.detect(series), [])
        order_blocks = self._run(
            "order blocks", lambda: self.order_block_detector.detect(series), []
        )
        fvgs = self._run("fair value gaps", lambda: self.fvg_detector.detect(series), [])
        breaks = self._run(
            "structure breaks", lambda: self.break_detector.detect(series, swings), []
        )
        sweeps = self._run(
            "liquidity sweeps", lambda: self.sweep_detector.detect(series, swings), []
        )
        premium_discount = self._run(
            "premium/discount", lambda: self.pd_calculator.calculate(swings), None
        )

        current_price = series.last_close
        trend = self.derive_trend(breaks)
        bias = self.derive_bias(current_price, trend, premium_discount)

        return AnalysisResult(
            swing_points=swings,
            order_blocks=order_blocks,
            fair_value_gaps=fvgs,
            structure_breaks=breaks,
            liquidity_sweeps=sweeps,
            premium_discount=premium_discount,
            trend=trend,
            bias=bias,
            key_levels=self.rank_key_levels(order_blocks, fvgs, swings),
            last_close=current_price,
        )

    @staticmethod
    def _run(name: str, detector: Callable[[], T], fallback: T) -> T:
        try:
            return detector()
        except Exception as e:
            log_exception(logger, e, f"{name} detection failed")
            return fallback

    def derive_trend(self, breaks: Sequence[StructureBreak]) -> Trend:
        """Majority direction of the most recent structure breaks."""
        window = self.config.key_levels.trend_breaks
        recent = breaks[-window:] if window > 0 else []

        bullish = sum(1 for b in recent if b.direction == Direction.BULLISH)
        bearish = sum(1 for b in recent if b.direction == Direction.BEARISH)

        if bullish > bearish:
            return Trend.BULLISH
        if bearish > bullish:
            return Trend.BEARISH
        return Trend.RANGING

    @staticmethod
    def derive_bias(
        price: float, trend: Trend, premium_discount: Optional[PremiumDiscountZone]
    ) -> Bias:
        """Long in discount with a bullish trend, short in premium with a bearish one."""
        if premium_discount is None:
            return Bias.NEUTRAL

        if price < premium_discount.equilibrium and trend == Trend.BULLISH:
            return Bias.LONG
        if price > premium_discount.equilibrium and trend == Trend.BEARISH:
            return Bias.SHORT
        return Bias.NEUTRAL

    def rank_key_levels(
        self,
        order_blocks: Sequence[OrderBlock],
        fvgs: Sequence[FairValueGap],
        swings: Sequence[SwingPoint],
    ) -> List[KeyLevel]:
        cfg = self.config.key_levels
        levels: List[KeyLevel] = []

        for ob in order_blocks:
            if ob.mitigated:
                continue
            levels.append(KeyLevel(
                price=ob.midpoint,
                label=f"{ob.kind.value} OB",
                strength=OB_WEIGHTS[ob.strength],
                source=KeyLevelSource.ORDER_BLOCK,
            ))

        for fvg in fvgs:
            if fvg.filled:
                continue
            if fvg.size_percent > cfg.fvg_large_pct:
                weight = 3
            elif fvg.size_percent > cfg.fvg_medium_pct:
                weight = 2
            else:
                weight = 1
            levels.append(KeyLevel(
                price=fvg.midpoint,
                label=f"{fvg.kind.value} FVG",
                strength=weight,
                source=KeyLevelSource.FAIR_VALUE_GAP,
            ))

        recent = swings[-cfg.recent_swings:] if cfg.recent_swings > 0 else []
        for swing in recent:
            levels.append(KeyLevel(
                price=swing.price,
                label=f"Swing {swing.swing_type.value}",
                strength=swing.strength / cfg.swing_strength_divisor,
                source=KeyLevelSource.SWING_POINT,
            ))

        # sorted() is stable: equal strengths keep insertion order
        levels = sorted(levels, key=lambda level: level.strength, reverse=True)
        return levels[: cfg.max_levels]


def analyze(candles: Sequence[Candle], config: Optional[SMCConfig] = None) -> AnalysisResult:
    """Run a full SMC analysis over `candles`."""
    return StructureAnalyzer(config).analyze(candles)

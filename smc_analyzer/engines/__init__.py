"""Smart Money Concepts detection engines."""

from .candles import Candle, CandleSeries
from .data_types import (
    AnalysisResult,
    Bias,
    BreakType,
    Direction,
    FairValueGap,
    KeyLevel,
    KeyLevelSource,
    LiquiditySweep,
    OBOrigin,
    OBStrength,
    OrderBlock,
    PremiumDiscountZone,
    PriceBand,
    StructureBreak,
    SweepSide,
    SwingPoint,
    SwingType,
    Trend,
)
from .fair_value_gaps import FairValueGapDetector, detect_fair_value_gaps
from .liquidity_sweeps import LiquiditySweepDetector, detect_liquidity_sweeps
from .order_blocks import OrderBlockDetector, detect_order_blocks
from .premium_discount import PremiumDiscountCalculator
from .smc_config import DEFAULT_SMC_CONFIG, SMCConfig
from .structure_analyzer import StructureAnalyzer, analyze
from .structure_breaks import StructureBreakDetector, detect_structure_breaks
from .swing_points import SwingPointDetector, detect_swing_points
from .volatility import VolatilityEstimator, compute_atr

__all__ = [
    "Candle",
    "CandleSeries",
    "AnalysisResult",
    "Bias",
    "BreakType",
    "Direction",
    "FairValueGap",
    "KeyLevel",
    "KeyLevelSource",
    "LiquiditySweep",
    "OBOrigin",
    "OBStrength",
    "OrderBlock",
    "PremiumDiscountZone",
    "PriceBand",
    "StructureBreak",
    "SweepSide",
    "SwingPoint",
    "SwingType",
    "Trend",
    "FairValueGapDetector",
    "LiquiditySweepDetector",
    "OrderBlockDetector",
    "PremiumDiscountCalculator",
    "StructureAnalyzer",
    "StructureBreakDetector",
    "SwingPointDetector",
    "VolatilityEstimator",
    "SMCConfig",
    "DEFAULT_SMC_CONFIG",
    "analyze",
    "compute_atr",
    "detect_fair_value_gaps",
    "detect_liquidity_sweeps",
    "detect_order_blocks",
    "detect_structure_breaks",
    "detect_swing_points",
]

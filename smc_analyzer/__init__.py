"""Smart Money Concepts (SMC) Market Structure Analyzer.

Public symbols are exposed lazily so importing `smc_analyzer` (for example to
reach `smc_analyzer.logging_config`) does not eagerly import pandas.
"""

from __future__ import annotations

import importlib
from typing import Dict, Tuple

__version__ = "0.1.0"

__all__ = [
    # Input
    "Candle",
    "CandleSeries",
    # Results
    "AnalysisResult",
    "SwingPoint",
    "OrderBlock",
    "FairValueGap",
    "StructureBreak",
    "LiquiditySweep",
    "PremiumDiscountZone",
    "PriceBand",
    "KeyLevel",
    # Variants
    "SwingType",
    "Direction",
    "BreakType",
    "SweepSide",
    "OBStrength",
    "OBOrigin",
    "Trend",
    "Bias",
    "KeyLevelSource",
    # Engines
    "StructureAnalyzer",
    "SwingPointDetector",
    "OrderBlockDetector",
    "FairValueGapDetector",
    "StructureBreakDetector",
    "LiquiditySweepDetector",
    "PremiumDiscountCalculator",
    "VolatilityEstimator",
    "analyze",
    "compute_atr",
    # Config
    "SMCConfig",
    "DEFAULT_SMC_CONFIG",
    # Display
    "describe",
    "print_smc_summary",
    # Scheduling
    "LatestAnalysisRunner",
]


_EXPORT_TO_SOURCE: Dict[str, Tuple[str, str]] = {}


def _register(module: str, names: list[str]) -> None:
    for name in names:
        _EXPORT_TO_SOURCE[name] = (module, name)


_register(".engines.candles", ["Candle", "CandleSeries"])
_register(
    ".engines.data_types",
    [
        "AnalysisResult",
        "SwingPoint",
        "OrderBlock",
        "FairValueGap",
        "StructureBreak",
        "LiquiditySweep",
        "PremiumDiscountZone",
        "PriceBand",
        "KeyLevel",
        "SwingType",
        "Direction",
        "BreakType",
        "SweepSide",
        "OBStrength",
        "OBOrigin",
        "Trend",
        "Bias",
        "KeyLevelSource",
    ],
)
_register(".engines.structure_analyzer", ["StructureAnalyzer", "analyze"])
_register(".engines.swing_points", ["SwingPointDetector"])
_register(".engines.order_blocks", ["OrderBlockDetector"])
_register(".engines.fair_value_gaps", ["FairValueGapDetector"])
_register(".engines.structure_breaks", ["StructureBreakDetector"])
_register(".engines.liquidity_sweeps", ["LiquiditySweepDetector"])
_register(".engines.premium_discount", ["PremiumDiscountCalculator"])
_register(".engines.volatility", ["VolatilityEstimator", "compute_atr"])
_register(".engines.smc_config", ["SMCConfig", "DEFAULT_SMC_CONFIG"])
_register(".display.smc_display", ["describe", "print_smc_summary"])
_register(".continuous.latest_runner", ["LatestAnalysisRunner"])


_missing_exports = [name for name in __all__ if name not in _EXPORT_TO_SOURCE]
if _missing_exports:
    raise RuntimeError(f"Lazy export map incomplete: {_missing_exports}")


def __getattr__(name: str):
    if name not in _EXPORT_TO_SOURCE:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    module_name, symbol_name = _EXPORT_TO_SOURCE[name]
    module = importlib.import_module(module_name, __name__)
    value = getattr(module, symbol_name)

    # Cache resolved symbol on module globals for subsequent fast access.
    globals()[name] = value
    return value


def __dir__() -> list[str]:
    return sorted(set(globals()) | set(__all__))

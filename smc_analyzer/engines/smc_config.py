"""
SMC Configuration Module
Centralizes the thresholds used by the Smart Money Concepts detectors.

Every magic number of the structure engine lives here so the detectors can be
tuned without hunting through multiple files.
"""

import os
from dataclasses import dataclass, field, replace
from typing import Optional

# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================

EPSILON = 1e-9


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """
    Safely divide two numbers, returning default if denominator is near zero.

    Args:
        numerator: The numerator
        denominator: The denominator
        default: Value to return if division is unsafe (default: 0.0)

    Returns:
        numerator / denominator if safe, otherwise default
    """
    return numerator / denominator if abs(denominator) > EPSILON else default


def _env_number(name: str, cast, default):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid value for {name}: {raw!r}") from exc


# =============================================================================
# THRESHOLDS
# =============================================================================


@dataclass
class SwingThresholds:
    """Swing point detection."""

    lookback: int = 5  # Bars required on each side

    def __post_init__(self):
        if self.lookback < 1:
            raise ValueError(f"lookback must be >= 1, got {self.lookback}")


@dataclass
class OrderBlockThresholds:
    """Order block detection and strength classification."""

    impulse_atr_mult: float = 1.5  # Body must exceed this * ATR
    first_index: int = 3  # First candle index examined as the impulse
    volume_lookback: int = 20  # Candles averaged for the volume ratio
    displacement_candles: int = 5  # Forward candles measured for displacement

    # Strength classification
    strong_volume_ratio: float = 1.5
    strong_displacement_ratio: float = 2.0
    medium_volume_ratio: float = 1.0
    medium_displacement_ratio: float = 1.5

    # Wick within this * ATR of the zone edge counts as a respect
    respect_tolerance_atr: float = 0.5

    def __post_init__(self):
        if self.impulse_atr_mult <= 0:
            raise ValueError(f"impulse_atr_mult must be > 0, got {self.impulse_atr_mult}")
        if self.first_index < 1:
            raise ValueError(f"first_index must be >= 1, got {self.first_index}")
        if self.volume_lookback < 1 or self.displacement_candles < 1:
            raise ValueError("volume_lookback and displacement_candles must be >= 1")


@dataclass
class FairValueGapThresholds:
    """Fair value gap detection."""

    min_gap_pct: float = 0.1  # Gap size as % of the middle candle close

    def __post_init__(self):
        if self.min_gap_pct < 0:
            raise ValueError(f"min_gap_pct must be >= 0, got {self.min_gap_pct}")


@dataclass
class SweepThresholds:
    """Liquidity sweep detection."""

    min_wick_body_ratio: float = 0.5  # Wick must exceed this * body

    def __post_init__(self):
        if self.min_wick_body_ratio < 0:
            raise ValueError(f"min_wick_body_ratio must be >= 0, got {self.min_wick_body_ratio}")


@dataclass
class KeyLevelThresholds:
    """Key level ranking."""

    max_levels: int = 10
    recent_swings: int = 6
    swing_strength_divisor: float = 2.0

    # FVG weight by size %
    fvg_large_pct: float = 0.5
    fvg_medium_pct: float = 0.2

    # Premium/discount uses this many recent swings per side
    premium_discount_swings: int = 3

    # Trend is the majority of the last N structure breaks
    trend_breaks: int = 3

    def __post_init__(self):
        if self.max_levels < 0 or self.recent_swings < 0:
            raise ValueError("max_levels and recent_swings must be >= 0")
        if self.swing_strength_divisor <= 0:
            raise ValueError(f"swing_strength_divisor must be > 0, got {self.swing_strength_divisor}")
        if self.fvg_medium_pct > self.fvg_large_pct:
            raise ValueError("fvg_medium_pct must not exceed fvg_large_pct")
        if self.premium_discount_swings < 1 or self.trend_breaks < 1:
            raise ValueError("premium_discount_swings and trend_breaks must be >= 1")


@dataclass
class SMCConfig:
    """
    Master configuration for the structure engine.

    Usage:
        config = SMCConfig()
        # Use defaults

        # Or customize:
        config = SMCConfig(
            swing=SwingThresholds(lookback=3),
            order_block=OrderBlockThresholds(impulse_atr_mult=2.0),
        )
    """

    min_candles: int = 50
    atr_period: int = 14

    swing: SwingThresholds = field(default_factory=SwingThresholds)
    order_block: OrderBlockThresholds = field(default_factory=OrderBlockThresholds)
    fair_value_gap: FairValueGapThresholds = field(default_factory=FairValueGapThresholds)
    sweep: SweepThresholds = field(default_factory=SweepThresholds)
    key_levels: KeyLevelThresholds = field(default_factory=KeyLevelThresholds)

    def __post_init__(self):
        if self.atr_period < 1:
            raise ValueError(f"atr_period must be >= 1, got {self.atr_period}")
        if self.min_candles < 0:
            raise ValueError(f"min_candles must be >= 0, got {self.min_candles}")

    @classmethod
    def from_env(cls, base: Optional["SMCConfig"] = None) -> "SMCConfig":
        """
        Build a configuration from environment variables.

        Reads SMC_SWING_LOOKBACK, SMC_MIN_CANDLES, SMC_ATR_PERIOD,
        SMC_OB_IMPULSE_ATR_MULT and SMC_FVG_MIN_GAP_PCT. Unset variables
        keep the value from `base` (or the defaults).
        """
        base = base or cls()
        return replace(
            base,
            min_candles=_env_number("SMC_MIN_CANDLES", int, base.min_candles),
            atr_period=_env_number("SMC_ATR_PERIOD", int, base.atr_period),
            swing=replace(
                base.swing,
                lookback=_env_number("SMC_SWING_LOOKBACK", int, base.swing.lookback),
            ),
            order_block=replace(
                base.order_block,
                impulse_atr_mult=_env_number(
                    "SMC_OB_IMPULSE_ATR_MULT", float, base.order_block.impulse_atr_mult
                ),
            ),
            fair_value_gap=replace(
                base.fair_value_gap,
                min_gap_pct=_env_number(
                    "SMC_FVG_MIN_GAP_PCT", float, base.fair_value_gap.min_gap_pct
                ),
            ),
        )


# Global default config instance
DEFAULT_SMC_CONFIG = SMCConfig()


def get_config() -> SMCConfig:
    """Get the default configuration."""
    return DEFAULT_SMC_CONFIG

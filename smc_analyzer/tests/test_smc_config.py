"""
Unit tests for SMC configuration.
"""

import pytest

from smc_analyzer.engines.smc_config import (
    DEFAULT_SMC_CONFIG,
    EPSILON,
    FairValueGapThresholds,
    KeyLevelThresholds,
    OrderBlockThresholds,
    SMCConfig,
    SweepThresholds,
    SwingThresholds,
    get_config,
    safe_divide,
)


class TestDefaults:
    def test_values(self):
        config = SMCConfig()
        assert config.min_candles == 50
        assert config.atr_period == 14
        assert config.swing.lookback == 5
        assert config.order_block.impulse_atr_mult == 1.5
        assert config.fair_value_gap.min_gap_pct == 0.1
        assert config.sweep.min_wick_body_ratio == 0.5
        assert config.key_levels.max_levels == 10

    def test_get_config(self):
        assert get_config() is DEFAULT_SMC_CONFIG


class TestValidation:
    def test_lookback(self):
        with pytest.raises(ValueError):
            SwingThresholds(lookback=0)

    def test_impulse_multiplier(self):
        with pytest.raises(ValueError):
            OrderBlockThresholds(impulse_atr_mult=0)

    def test_gap_percent(self):
        with pytest.raises(ValueError):
            FairValueGapThresholds(min_gap_pct=-0.1)

    def test_atr_period(self):
        with pytest.raises(ValueError):
            SMCConfig(atr_period=0)


class TestFromEnv:
    def test_unset_keeps_defaults(self, monkeypatch):
        for name in (
            "SMC_MIN_CANDLES",
            "SMC_ATR_PERIOD",
            "SMC_SWING_LOOKBACK",
            "SMC_OB_IMPULSE_ATR_MULT",
            "SMC_FVG_MIN_GAP_PCT",
        ):
            monkeypatch.delenv(name, raising=False)

        assert SMCConfig.from_env() == SMCConfig()

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("SMC_MIN_CANDLES", "100")
        monkeypatch.setenv("SMC_SWING_LOOKBACK", "3")
        monkeypatch.setenv("SMC_OB_IMPULSE_ATR_MULT", "2.5")
        monkeypatch.setenv("SMC_FVG_MIN_GAP_PCT", "0.25")
        monkeypatch.delenv("SMC_ATR_PERIOD", raising=False)

        config = SMCConfig.from_env()

        assert config.min_candles == 100
        assert config.swing.lookback == 3
        assert config.order_block.impulse_atr_mult == 2.5
        assert config.fair_value_gap.min_gap_pct == 0.25
        assert config.atr_period == 14

    def test_base_is_preserved(self, monkeypatch):
        monkeypatch.delenv("SMC_MIN_CANDLES", raising=False)
        monkeypatch.setenv("SMC_ATR_PERIOD", "21")

        config = SMCConfig.from_env(SMCConfig(min_candles=10))

        assert config.min_candles == 10
        assert config.atr_period == 21

    def test_bad_value(self, monkeypatch):
        monkeypatch.setenv("SMC_SWING_LOOKBACK", "five")
        with pytest.raises(ValueError, match="SMC_SWING_LOOKBACK"):
            SMCConfig.from_env()

    def test_out_of_range_value(self, monkeypatch):
        monkeypatch.setenv("SMC_SWING_LOOKBACK", "0")
        with pytest.raises(ValueError):
            SMCConfig.from_env()


class TestSafeDivide:
    def test_normal(self):
        assert safe_divide(10, 4) == 2.5

    def test_zero_denominator(self):
        assert safe_divide(1, 0) == 0.0
        assert safe_divide(1, EPSILON / 2, default=-1.0) == -1.0


class TestKeyLevelValidation:
    def test_defaults_are_valid(self):
        KeyLevelThresholds()
        SweepThresholds()

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"swing_strength_divisor": 0},
            {"max_levels": -1},
            {"recent_swings": -1},
            {"premium_discount_swings": 0},
            {"trend_breaks": 0},
            {"fvg_medium_pct": 0.6, "fvg_large_pct": 0.5},
        ],
    )
    def test_rejects(self, kwargs):
        with pytest.raises(ValueError):
            KeyLevelThresholds(**kwargs)

    def test_negative_wick_ratio(self):
        with pytest.raises(ValueError):
            SweepThresholds(min_wick_body_ratio=-0.1)

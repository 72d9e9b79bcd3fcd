"""
Unit tests for liquidity sweep detection.
"""

import pytest
from conftest import bar, make_candle

from smc_analyzer.engines.data_types import SweepSide, SwingType
from smc_analyzer.engines.liquidity_sweeps import LiquiditySweepDetector, detect_liquidity_sweeps
from smc_analyzer.engines.smc_config import SweepThresholds
from smc_analyzer.engines.swing_points import detect_swing_points


def peak_then_sweep(sweep_candle):
    """Rising bars to a 110 swing high (index 5), falling bars, then `sweep_candle`."""
    candles = [bar(i, 100 + i, 99 + i) for i in range(5)]
    candles.append(bar(5, 110, 108))
    candles.extend(bar(i, 104 - (i - 6), 103 - (i - 6)) for i in range(6, 11))
    candles.append(sweep_candle)
    return candles


def trough_then_sweep(sweep_candle):
    """Falling bars to a 90 swing low (index 5), rising bars, then `sweep_candle`."""
    candles = [bar(i, 101 - i, 100 - i) for i in range(5)]
    candles.append(bar(5, 92, 90))
    candles.extend(bar(i, 97 + (i - 6), 96 + (i - 6)) for i in range(6, 11))
    candles.append(sweep_candle)
    return candles


class TestBuySideSweep:
    def test_wick_through_swing_high(self):
        candles = peak_then_sweep(make_candle(11, 105.0, 112.0, 104.5, 106.0))
        swings = detect_swing_points(candles, lookback=5)
        assert [(s.swing_type, s.index) for s in swings] == [(SwingType.HIGH, 5)]

        sweeps = detect_liquidity_sweeps(candles, swings)

        assert len(sweeps) == 1
        sweep = sweeps[0]
        assert sweep.side == SweepSide.BUY_SIDE
        assert sweep.swept_level == 110
        assert sweep.sweep_time == candles[11].time
        assert sweep.wick_size == pytest.approx(2.0)
        assert sweep.closed_back_above is False
        assert sweep.valid
        assert sweep.id == f"sweep_buy_{candles[11].time}_{candles[5].time}"

    def test_close_above_level_is_not_a_sweep(self):
        candles = peak_then_sweep(make_candle(11, 105.0, 112.0, 104.5, 110.5))
        swings = detect_swing_points(candles, lookback=5)
        assert detect_liquidity_sweeps(candles, swings) == []

    def test_small_wick_is_not_a_sweep(self):
        # Body 5.0, upper wick 1.5
        candles = peak_then_sweep(make_candle(11, 104.0, 110.5, 103.5, 109.0))
        swings = detect_swing_points(candles, lookback=5)
        assert detect_liquidity_sweeps(candles, swings) == []

    def test_wick_ratio_configurable(self):
        candles = peak_then_sweep(make_candle(11, 104.0, 110.5, 103.5, 109.0))
        swings = detect_swing_points(candles, lookback=5)
        detector = LiquiditySweepDetector(SweepThresholds(min_wick_body_ratio=0.25))
        assert len(detector.detect(candles, swings)) == 1


class TestSellSideSweep:
    def test_wick_through_swing_low(self):
        candles = trough_then_sweep(make_candle(11, 95.0, 95.5, 88.0, 94.0))
        swings = detect_swing_points(candles, lookback=5)
        assert [(s.swing_type, s.index) for s in swings] == [(SwingType.LOW, 5)]

        sweeps = detect_liquidity_sweeps(candles, swings)

        assert len(sweeps) == 1
        sweep = sweeps[0]
        assert sweep.side == SweepSide.SELL_SIDE
        assert sweep.swept_level == 90
        assert sweep.wick_size == pytest.approx(2.0)
        assert sweep.closed_back_above is True


class TestEdgeCases:
    def test_only_prior_swings_count(self):
        candles = peak_then_sweep(make_candle(11, 105.0, 112.0, 104.5, 106.0))
        swings = detect_swing_points(candles, lookback=5)
        # The swing candle itself never sweeps its own level
        assert all(s.sweep_time > candles[5].time for s in detect_liquidity_sweeps(candles, swings))

    def test_no_swings(self, flat_candles):
        assert detect_liquidity_sweeps(flat_candles, []) == []

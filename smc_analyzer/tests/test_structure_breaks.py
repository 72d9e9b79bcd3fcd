"""
Unit tests for BOS / CHoCH detection.

Swings are passed in explicitly so every scenario is exact.
"""

from conftest import bar, wave_series

from smc_analyzer.engines.data_types import BreakType, Direction, SwingPoint, SwingType
from smc_analyzer.engines.structure_breaks import (
    StructureBreakDetector,
    detect_structure_breaks,
    seed_trend,
)
from smc_analyzer.engines.swing_points import detect_swing_points


def high(candles, index):
    return SwingPoint(candles[index].time, candles[index].high, SwingType.HIGH, index, 2)


def low(candles, index):
    return SwingPoint(candles[index].time, candles[index].low, SwingType.LOW, index, 2)


def build(ranges):
    return [bar(i, h, l) for i, (h, l) in enumerate(ranges)]


class TestTrendSeed:
    def test_rising(self):
        candles = build([(105, 103), (110, 106), (104, 100), (112, 104), (106, 101)])
        swings = [high(candles, 1), low(candles, 2), high(candles, 3), low(candles, 4)]
        assert seed_trend(swings) == Direction.BULLISH

    def test_mixed_is_unset(self):
        candles = build([(105, 103), (110, 106), (104, 100), (112, 104), (106, 95)])
        swings = [high(candles, 1), low(candles, 2), high(candles, 3), low(candles, 4)]
        assert seed_trend(swings) is None

    def test_not_enough_swings(self):
        candles = build([(105, 103), (110, 106), (104, 100)])
        assert seed_trend([high(candles, 1), low(candles, 2)]) is None


class TestBreakDetection:
    def test_requires_two_of_each(self):
        candles = build([(105, 103), (110, 106), (104, 100), (112, 104)])
        swings = [high(candles, 1), low(candles, 2), high(candles, 3)]
        assert detect_structure_breaks(candles, swings) == []

    def test_change_of_character_both_ways(self):
        candles = build([
            (105, 103),
            (110, 106),  # H1
            (104, 100),  # L1
            (108, 101),  # H2 (lower high)
            (99, 95),    # L2 (lower low) - breaks L1
            (112, 97),   # breaks H1
            (113, 108),
        ])
        swings = [high(candles, 1), low(candles, 2), high(candles, 3), low(candles, 4)]

        # Seed is bearish (LH + LL)
        breaks = detect_structure_breaks(candles, swings)

        assert len(breaks) == 2
        first, second = breaks

        assert first.kind == BreakType.CHOCH
        assert first.direction == Direction.BULLISH
        assert first.broken_level == 110
        assert first.confirming_candle_index == 5
        assert first.break_time == candles[5].time
        assert first.origin_swing == swings[0]

        # Trend flipped to bullish, so the bearish break is another CHoCH
        assert second.kind == BreakType.CHOCH
        assert second.direction == Direction.BEARISH
        assert second.broken_level == 100
        assert second.confirming_candle_index == 4

    def test_unset_trend_defaults_to_bos(self):
        candles = build([
            (105, 103),
            (110, 106),  # H1
            (104, 100),  # L1
            (112, 104),  # H2 (higher high)
            (106, 95),   # L2 (lower low)
            (107, 97),
        ])
        swings = [high(candles, 1), low(candles, 2), high(candles, 3), low(candles, 4)]
        breaks = detect_structure_breaks(candles, swings)

        assert [b.kind for b in breaks] == [BreakType.BOS, BreakType.BOS]
        assert [b.direction for b in breaks] == [Direction.BULLISH, Direction.BEARISH]

    def test_first_occurrence_wins(self):
        candles = build([
            (105, 103),
            (110, 106),  # H1
            (104, 100),  # L1
            (110, 104),  # H2 (equal high)
            (106, 101),  # L2
            (115, 107),  # breaks 110
            (114, 108),
            (112, 102),  # L3
            (116, 109),
        ])
        swings = [
            high(candles, 1),
            low(candles, 2),
            high(candles, 3),
            low(candles, 4),
            high(candles, 5),
            low(candles, 7),
        ]
        breaks = detect_structure_breaks(candles, swings)

        assert len(breaks) == 1
        brk = breaks[0]
        assert brk.kind == BreakType.BOS
        assert brk.direction == Direction.BULLISH
        assert brk.broken_level == 110
        assert brk.origin_swing.index == 1
        assert brk.id == f"struct_bos_bull_{candles[5].time}"

    def test_equal_price_does_not_break(self):
        candles = build([(105, 103), (110, 106), (104, 100), (110, 104), (106, 101), (109, 102)])
        swings = [high(candles, 1), low(candles, 2), high(candles, 3), low(candles, 4)]
        assert detect_structure_breaks(candles, swings) == []

    def test_needs_opposite_swing_before(self):
        candles = build([(105, 103), (110, 106), (108, 104), (111, 105), (104, 100), (103, 99), (112, 101)])
        # Two highs before any low: the second high has no leg behind it
        swings = [high(candles, 1), high(candles, 3), low(candles, 4), low(candles, 5)]
        breaks = StructureBreakDetector().detect(candles, swings)

        assert all(b.direction == Direction.BEARISH for b in breaks)


class TestOnWave:
    def test_uptrend_breaks_are_bullish(self):
        candles = wave_series()
        breaks = detect_structure_breaks(candles, detect_swing_points(candles))

        assert len(breaks) == 5
        assert all(b.direction == Direction.BULLISH for b in breaks)
        assert all(b.kind == BreakType.BOS for b in breaks)

    def test_no_duplicate_level_direction(self):
        for candles in (wave_series(), wave_series(count=160, drift=0.0), wave_series(drift=-0.4)):
            breaks = detect_structure_breaks(candles, detect_swing_points(candles))
            keys = [(b.broken_level, b.direction) for b in breaks]
            assert len(keys) == len(set(keys))

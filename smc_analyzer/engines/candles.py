"""
Candle input for the structure engine.

A CandleSeries is the validated, time-ordered input of one analysis call.
Candles that would poison later computations (NaN prices, broken OHLC
envelopes, non-increasing timestamps) are dropped here instead of being
propagated through the detectors.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, List, Mapping, Sequence, Union, overload

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("open", "high", "low", "close")


@dataclass(frozen=True)
class Candle:
    """OHLCV candle."""

    time: int  # Unix seconds
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0

    @property
    def is_bullish(self) -> bool:
        return self.close > self.open

    @property
    def is_bearish(self) -> bool:
        return self.close < self.open

    @property
    def body(self) -> float:
        return abs(self.close - self.open)

    @property
    def upper_wick(self) -> float:
        return self.high - max(self.open, self.close)

    @property
    def lower_wick(self) -> float:
        return min(self.open, self.close) - self.low

    @property
    def is_valid(self) -> bool:
        """Finite values, non-negative volume and a consistent OHLC envelope."""
        values = (self.open, self.high, self.low, self.close, self.volume)
        if not all(math.isfinite(v) for v in values):
            return False
        if self.volume < 0:
            return False
        return self.low <= min(self.open, self.close) and self.high >= max(self.open, self.close)


class CandleSeries(Sequence[Candle]):
    """
    Immutable, validated candle sequence.

    Build with `sanitize`, `from_records` or `from_dataframe`. The engine
    borrows the series read-only for the duration of one call.
    """

    __slots__ = ("_candles", "dropped")

    def __init__(self, candles: Iterable[Candle], dropped: int = 0):
        self._candles = tuple(candles)
        self.dropped = dropped

    @overload
    def __getitem__(self, index: int) -> Candle: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[Candle]: ...

    def __getitem__(self, index: Union[int, slice]):
        return self._candles[index]

    def __len__(self) -> int:
        return len(self._candles)

    def __iter__(self) -> Iterator[Candle]:
        return iter(self._candles)

    def __repr__(self) -> str:
        return f"CandleSeries(len={len(self._candles)}, dropped={self.dropped})"

    @property
    def last_close(self) -> float:
        return self._candles[-1].close

    @classmethod
    def sanitize(cls, candles: Iterable[Candle]) -> "CandleSeries":
        """
        Keep only candles that satisfy the input contract.

        Drops candles with NaN/inf values, negative volume, an inconsistent
        OHLC envelope or a timestamp not strictly after the last kept candle.
        The engine does not re-sort; out-of-order candles are dropped.
        """
        if isinstance(candles, CandleSeries):
            return candles

        kept: List[Candle] = []
        dropped = 0
        last_time = None

        for candle in candles:
            if not candle.is_valid:
                dropped += 1
                logger.warning(f"Dropping malformed candle at time={candle.time}")
                continue
            if last_time is not None and candle.time <= last_time:
                dropped += 1
                logger.warning(
                    f"Dropping out-of-order candle at time={candle.time} (last={last_time})"
                )
                continue
            kept.append(candle)
            last_time = candle.time

        return cls(kept, dropped=dropped)

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "CandleSeries":
        """Build a series from mappings with time/open/high/low/close[/volume] keys."""
        candles = []
        for record in records:
            candles.append(
                Candle(
                    time=int(record["time"]),
                    open=float(record["open"]),
                    high=float(record["high"]),
                    low=float(record["low"]),
                    close=float(record["close"]),
                    volume=float(record.get("volume", 0.0) or 0.0),
                )
            )
        return cls.sanitize(candles)

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame) -> "CandleSeries":
        """
        Build a series from a pandas DataFrame.

        Accepts a `time` column in integer seconds, a `timestamp` column
        (parsed as datetime) or a DatetimeIndex. Column names are matched
        case-insensitively; `volume` is optional.
        """
        frame = df.rename(columns={c: str(c).strip().lower() for c in df.columns})

        missing = [c for c in REQUIRED_COLUMNS if c not in frame.columns]
        if missing:
            raise ValueError(f"Missing candle columns: {', '.join(missing)}")

        if "time" in frame.columns:
            times = pd.to_numeric(frame["time"], errors="coerce")
        elif "timestamp" in frame.columns:
            times = _datetime_to_seconds(pd.to_datetime(frame["timestamp"], utc=True, errors="coerce"))
        elif isinstance(frame.index, pd.DatetimeIndex):
            times = _datetime_to_seconds(pd.Series(frame.index, index=frame.index))
        else:
            raise ValueError("Candle frame needs a 'time' or 'timestamp' column or a DatetimeIndex")

        prices = frame[list(REQUIRED_COLUMNS)].apply(pd.to_numeric, errors="coerce").to_numpy(dtype=float)
        if "volume" in frame.columns:
            volumes = pd.to_numeric(frame["volume"], errors="coerce").fillna(0.0).to_numpy(dtype=float)
        else:
            volumes = np.zeros(len(frame))
        times = times.to_numpy(dtype=float)

        usable = np.isfinite(times)
        if not usable.all():
            logger.warning(f"Dropping {int((~usable).sum())} rows without a usable time")

        candles = [
            Candle(
                time=int(times[i]),
                open=float(prices[i, 0]),
                high=float(prices[i, 1]),
                low=float(prices[i, 2]),
                close=float(prices[i, 3]),
                volume=float(volumes[i]),
            )
            for i in np.flatnonzero(usable)
        ]
        series = cls.sanitize(candles)
        series.dropped += int((~usable).sum())
        return series


def _datetime_to_seconds(values: pd.Series) -> pd.Series:
    seconds = values.map(lambda ts: ts.timestamp() if pd.notna(ts) else np.nan)
    return seconds.astype(float)

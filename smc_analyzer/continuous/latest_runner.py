"""
Latest-input-wins analysis runner.

Callers that re-run the analysis on every tick should not queue work: when a
newer candle batch arrives, the in-flight computation is cancelled and its
result (if the worker thread still finishes) is discarded.

Usage:
    async with LatestAnalysisRunner(on_result=render) as runner:
        runner.submit(candles)       # cancels any older computation
        ...
        result = await runner.wait()
"""

import asyncio
import logging
from typing import Any, Callable, Optional, Sequence

from ..engines.candles import Candle
from ..engines.data_types import AnalysisResult
from ..engines.structure_analyzer import StructureAnalyzer
from ..logging_config import log_exception

logger = logging.getLogger(__name__)


class LatestAnalysisRunner:
    """Runs StructureAnalyzer off the event loop, keeping only the newest result."""

    def __init__(
        self,
        analyzer: Optional[StructureAnalyzer] = None,
        on_result: Optional[Callable[[AnalysisResult], Any]] = None,
    ):
        self.analyzer = analyzer or StructureAnalyzer()
        self._on_result = on_result

        self._generation = 0
        self._task: Optional[asyncio.Task] = None
        self._latest_result: Optional[AnalysisResult] = None
        self._latest_generation = 0
        self._stale_results = 0

    @property
    def generation(self) -> int:
        """Number of submissions so far."""
        return self._generation

    @property
    def latest_result(self) -> Optional[AnalysisResult]:
        return self._latest_result

    @property
    def latest_generation(self) -> int:
        """Generation that produced `latest_result` (0 if none)."""
        return self._latest_generation

    @property
    def stale_results(self) -> int:
        """Results computed for superseded submissions and discarded."""
        return self._stale_results

    @property
    def is_busy(self) -> bool:
        return self._task is not None and not self._task.done()

    def submit(self, candles: Sequence[Candle]) -> asyncio.Task:
        """
        Schedule an analysis of `candles`, superseding any in-flight one.

        Must be called from a running event loop. The candles are copied so
        the caller may keep mutating its own buffer.
        """
        self._generation += 1
        generation = self._generation
        snapshot = tuple(candles)

        if self.is_busy:
            logger.debug(f"Superseding analysis #{generation - 1} with #{generation}")
            self._task.cancel()

        self._task = asyncio.create_task(self._compute(generation, snapshot))
        return self._task

    async def _compute(
        self, generation: int, candles: Sequence[Candle]
    ) -> Optional[AnalysisResult]:
        loop = asyncio.get_running_loop()

        try:
            result = await loop.run_in_executor(None, self.analyzer.analyze, candles)
        except asyncio.CancelledError:
            logger.debug(f"Analysis #{generation} cancelled")
            raise
        except Exception as e:
            log_exception(logger, e, f"Analysis #{generation} failed")
            return None

        if generation != self._generation:
            self._stale_results += 1
            logger.debug(f"Discarding stale result #{generation} (latest #{self._generation})")
            return None

        self._latest_result = result
        self._latest_generation = generation

        if self._on_result is not None:
            try:
                outcome = self._on_result(result)
                if asyncio.iscoroutine(outcome):
                    await outcome
            except Exception as e:
                logger.error(f"Result callback error: {e}")

        return result

    async def wait(self) -> Optional[AnalysisResult]:
        """Wait until the newest submission has finished; return the latest result."""
        while self._task is not None and not self._task.done():
            await asyncio.wait({self._task})
        return self._latest_result

    async def stop(self) -> None:
        """Cancel any in-flight analysis."""
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.stop()

"""
Scheduling helpers for callers that recompute on every new candle batch.

The engine itself is a pure function; these helpers only decide which
computation's result is kept ("latest input wins").
"""

from .latest_runner import LatestAnalysisRunner

__all__ = ["LatestAnalysisRunner"]

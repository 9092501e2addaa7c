"""Map health sampling and guardrails."""

from .core import MapStats, ThresholdWatchdog, sample_stats

__all__ = ["MapStats", "ThresholdWatchdog", "sample_stats"]

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Tuple, Union

from chhash.config import WatchdogPolicy
from chhash.core.maps import ChainedHashMap

logger = logging.getLogger("chhash.metrics")

Guardrail = Tuple[str, Union[int, float], Union[int, float, None]]


@dataclass(frozen=True)
class MapStats:
    size: int
    bucket_count: int
    load_factor: float
    max_chain_len: int
    empty_buckets: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def sample_stats(m: ChainedHashMap[Any, Any]) -> MapStats:
    lengths = m.chain_lengths()
    return MapStats(
        size=len(m),
        bucket_count=m.bucket_count,
        load_factor=m.load_factor(),
        max_chain_len=max(lengths, default=0),
        empty_buckets=sum(1 for length in lengths if length == 0),
    )


class ThresholdWatchdog:
    """Raise and clear guardrail alerts for a map that never resizes.

    Each metric is either active or quiet. Only transitions are logged, so
    polling a map that stays overloaded does not repeat the warning.
    """

    def __init__(self, policy: WatchdogPolicy) -> None:
        self.policy = policy
        self._active: Dict[str, bool] = {}

    def _guardrails(self, stats: MapStats) -> List[Guardrail]:
        return [
            ("load_factor", stats.load_factor, self.policy.load_factor_warn),
            ("max_chain_len", stats.max_chain_len, self.policy.max_chain_warn),
        ]

    def evaluate(self, stats: MapStats) -> Tuple[List[Dict[str, Any]], Dict[str, bool]]:
        if not self.policy.enabled:
            active_count = sum(self._active.values())
            if active_count:
                logger.info("Watchdog disabled; clearing %d active alerts", active_count)
            self._active.clear()
            return [], {}

        alerts: List[Dict[str, Any]] = []
        flags: Dict[str, bool] = {}
        for metric, value, threshold in self._guardrails(stats):
            was_active = self._active.pop(metric, False)
            if threshold is None:
                if was_active:
                    logger.info("Watchdog cleared (%s): threshold disabled", metric)
                continue

            active = value >= threshold
            if active and not was_active:
                logger.warning(
                    "Watchdog alert (%s): %s >= %s [buckets=%d, size=%d]",
                    metric,
                    value,
                    threshold,
                    stats.bucket_count,
                    stats.size,
                )
            elif was_active and not active:
                logger.info("Watchdog resolved (%s): %s < %s", metric, value, threshold)

            if active:
                alerts.append(
                    {
                        "metric": metric,
                        "value": value,
                        "threshold": threshold,
                        "bucket_count": stats.bucket_count,
                        "message": f"{metric} {value} reached guardrail {threshold}",
                    }
                )
            self._active[metric] = active
            flags[metric] = active
        return alerts, flags


__all__ = ["MapStats", "ThresholdWatchdog", "sample_stats"]

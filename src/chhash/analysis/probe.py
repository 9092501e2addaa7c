"""Probe-path tracing utilities for chained hash maps."""

from __future__ import annotations

import json
from collections import defaultdict
from typing import Any, Dict, List

from chhash.core.maps import ChainedHashMap

ProbeTrace = Dict[str, Any]

TRACE_SCHEMA = "chhash.trace.v1"


def _json_friendly(value: Any) -> Any:
    """Return a JSON-serialisable representation of ``value``."""

    try:
        json.dumps(value)
        return value
    except (TypeError, ValueError):
        return repr(value)


def trace_get(map_obj: ChainedHashMap[Any, Any], key: Any) -> ProbeTrace:
    """Record every chain entry visited while looking ``key`` up."""

    hash_code, bucket_idx = map_obj._slot(key)  # pylint: disable=protected-access
    chain = map_obj._buckets[bucket_idx]  # pylint: disable=protected-access
    path: List[Dict[str, Any]] = []

    def visit(entry: Any, position: int) -> bool:
        matches = entry.key == key
        path.append(
            {
                "position": position,
                "key_repr": repr(entry.key),
                "value_repr": repr(entry.value),
                "matches": matches,
            }
        )
        return matches

    found = chain.each(visit)
    return {
        "schema": TRACE_SCHEMA,
        "backend": "chained",
        "operation": "get",
        "key_repr": repr(key),
        "hash_code": hash_code,
        "bucket": bucket_idx,
        "bucket_count": map_obj.bucket_count,
        "chain_length": len(chain),
        "found": found,
        "terminal": "match" if found else "miss",
        "path": path,
    }


def trace_set(map_obj: ChainedHashMap[Any, Any], key: Any, value: Any) -> ProbeTrace:
    """Describe what ``set`` would do for ``key`` without mutating the map."""

    trace = trace_get(map_obj, key)
    trace.update(
        {
            "operation": "set",
            "value_repr": _json_friendly(value),
            "terminal": "update" if trace["found"] else "append",
        }
    )
    return trace


def collect_chain_histogram(map_obj: ChainedHashMap[Any, Any]) -> List[List[int]]:
    histogram: Dict[int, int] = defaultdict(int)
    for length in map_obj.chain_lengths():
        histogram[length] += 1
    return [[length, count] for length, count in sorted(histogram.items())]


def format_trace_lines(trace: Dict[str, Any]) -> List[str]:
    """Return a human-friendly rendering of a probe trace."""

    lines: List[str] = []
    operation = str(trace.get("operation", "?"))
    lines.append(
        f"Probe visualization [{trace.get('backend', '?')}] {operation.upper()} "
        f"key={trace.get('key_repr', '?')}"
    )
    lines.append(f"Found: {trace.get('found')} | Terminal: {trace.get('terminal')}")
    if "bucket" in trace:
        lines.append(
            f"Hash: {trace.get('hash_code')} -> bucket {trace['bucket']}"
            f"/{trace.get('bucket_count')} (chain length {trace.get('chain_length')})"
        )
    lines.append("Steps:")
    path = trace.get("path")
    if not isinstance(path, list) or not path:
        lines.append("  (empty chain)")
        return lines
    for item in path:
        if not isinstance(item, dict):
            lines.append(f"  {item!r}")
            continue
        attrs: List[str] = []
        for name in ("key_repr", "value_repr", "matches"):
            if name in item and item[name] is not None:
                value = item[name]
                if isinstance(value, bool):
                    value = str(value).lower()
                attrs.append(f"{name}={value}")
        lines.append(f"  Entry {item.get('position', '?')}: " + ", ".join(attrs))
    return lines


__all__ = [
    "TRACE_SCHEMA",
    "collect_chain_histogram",
    "format_trace_lines",
    "trace_get",
    "trace_set",
]

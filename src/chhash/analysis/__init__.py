"""Diagnostic helpers for chained hash maps."""

from .probe import TRACE_SCHEMA, collect_chain_histogram, format_trace_lines, trace_get, trace_set
from .verify import verify_map

__all__ = [
    "TRACE_SCHEMA",
    "collect_chain_histogram",
    "format_trace_lines",
    "trace_get",
    "trace_set",
    "verify_map",
]

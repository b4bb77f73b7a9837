"""Main-thread task analysis of Chrome trace files."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any


def _is_unsigned(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def top_run_task_durations(trace: Any, limit: int = 5) -> list[float]:
    """Longest ``RunTask`` durations of a parsed trace, in milliseconds, longest first."""
    events = trace.get("traceEvents") if isinstance(trace, Mapping) else None
    if not isinstance(events, list):
        return []
    durations = [
        event["dur"] / 1000.0
        for event in events
        if isinstance(event, Mapping)
        and event.get("name") == "RunTask"
        and _is_unsigned(event.get("dur"))
    ]
    return sorted(durations, reverse=True)[:limit]


def parse_trace_json(trace_path: str | Path) -> list[float]:
    """Print the five longest main-thread tasks of a trace file and return them."""
    trace = json.loads(Path(trace_path).read_text(encoding="utf-8"))
    events = trace.get("traceEvents") if isinstance(trace, Mapping) else None
    if not isinstance(events, list):
        print("No traceEvents found.")
        return []

    durations = top_run_task_durations(trace)
    if not durations:
        print("No RunTask events found in trace.")
        return []

    print("Top 5 Main Thread Task Durations (ms):")
    for duration in durations:
        print(f"- {duration:.2f} ms")
    return durations
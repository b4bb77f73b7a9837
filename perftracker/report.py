"""Plain-text metric logs."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from perftracker.metrics import LighthouseMetrics


def _log_path() -> Path:
    return Path(f"metrics_log_{datetime.now().strftime('%Y-%m-%d')}.txt")


def save_metrics_to_txt(metrics: LighthouseMetrics, url: str, fetch_time: str) -> Path:
    """Write a human-readable summary of ``metrics`` to today's log file."""
    path = _log_path()
    path.write_text(
        f"URL: {url}\nFetch Time: {fetch_time}\n{metrics.evaluate()}\n", encoding="utf-8"
    )
    return path


def save_metrics_to_db(metrics: LighthouseMetrics, url: str, time: str) -> Path:
    """Write the bare URL, fetch time and summary to today's log file."""
    path = _log_path()
    path.write_text(f"{url}\nFetch Time: {time}\n{metrics.evaluate()}\n", encoding="utf-8")
    return path
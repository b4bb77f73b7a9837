"""Accumulated JSON summaries and tables of saved Lighthouse reports."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any

from perftracker.metrics import LighthouseMetrics

SUMMARY_FILE = "summary.json"
_REPORT_PREFIX = "lighthouse_report_"


def _load_entries(path: Path) -> list[Any]:
    """Existing summary entries; an unreadable or non-list document counts as empty."""
    if not path.exists():
        return []
    text = path.read_text(encoding="utf-8")
    try:
        entries = json.loads(text)
    except json.JSONDecodeError:
        return []
    return entries if isinstance(entries, list) else []


def update_summary(
    scenario: str,
    url: str,
    fetch_time: str,
    metrics: LighthouseMetrics,
    path: str | Path = SUMMARY_FILE,
) -> list[Any]:
    """Append one performance entry to the summary file, creating it if needed.

    Returns the full list of entries as written.
    """
    summary_path = Path(path)
    entries = _load_entries(summary_path)
    entries.append(
        {
            "scenario": scenario,
            "url": url,
            "fetch_time": fetch_time,
            "metrics": metrics.to_dict(),
        }
    )
    summary_path.write_text(
        json.dumps(entries, indent=2, sort_keys=True, ensure_ascii=False),
        encoding="utf-8",
    )
    return entries


def append_to_summary_json(
    scenario: str, url: str, fetch_time: str, metrics: LighthouseMetrics
) -> list[Any]:
    """Append an entry to ``summary.json`` in the working directory."""
    return update_summary(scenario, url, fetch_time, metrics)


def write_summary_entry(
    scenario: str, url: str, fetch_time: str, metrics: LighthouseMetrics
) -> list[Any]:
    """Write one entry with every metric field to ``summary.json``."""
    return update_summary(scenario, url, fetch_time, metrics, SUMMARY_FILE)


def list_local_reports(directory: str | Path = ".") -> list[Path]:
    """Print and return the Lighthouse report files found in ``directory``."""
    reports = [
        path
        for path in sorted(Path(directory).iterdir())
        if path.is_file() and "lighthouse_report" in str(path)
    ]
    for path in reports:
        print(f"Found report: {path}")
    return reports


def summary_row(scenario: str, report: Any) -> str:
    """One table row with the headline metrics of a parsed Lighthouse report."""
    metrics = LighthouseMetrics.from_report(report).to_seconds()
    return (
        f"{scenario:<18} | Perf: {metrics.performance_score:>5.1f}"
        f" | FCP: {metrics.first_contentful_paint:>4.2f}s"
        f" | LCP: {metrics.largest_contentful_paint:>4.2f}s"
        f" | TTI: {metrics.time_to_interactive:>4.2f}s"
        f" | TBT: {metrics.total_blocking_time:>4.2f}s"
    )


def _scenario_name(file_name: str, today: str) -> str:
    name = file_name.removeprefix(_REPORT_PREFIX)
    suffix = f"_{today}.json"
    if not name.endswith(suffix):
        return "unknown"
    return name[: -len(suffix)]


def summarize_local_json_reports(directory: str | Path = ".") -> list[str]:
    """Print a table row for each of today's Lighthouse reports and return the rows."""
    print("\n=== Performance Summary Table ===")
    today = datetime.now().strftime("%Y-%m-%d")
    rows = []
    for path in sorted(Path(directory).iterdir()):
        name = path.name
        if not (name.startswith(_REPORT_PREFIX) and name.endswith(f"{today}.json")):
            continue
        report = json.loads(path.read_text(encoding="utf-8"))
        row = summary_row(_scenario_name(name, today), report)
        print(row)
        rows.append(row)
    return rows
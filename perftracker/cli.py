"""Command-line entry point: audit every scenario several times and report."""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone
from pathlib import Path

from dotenv import load_dotenv

from perftracker.lighthouse import fetch_lighthouse_metrics
from perftracker.metrics import LighthouseMetrics
from perftracker.report import save_metrics_to_txt
from perftracker.scenarios import SCENARIOS, target_url
from perftracker.summary import append_to_summary_json, summarize_local_json_reports
from perftracker.trace import parse_trace_json

DEFAULT_RUNS = 3
TRACE_FILE = "trace.json"


def run_scenario(
    label: str, url: str, blocked: Iterable[str], num_runs: int = DEFAULT_RUNS
) -> LighthouseMetrics | None:
    """Audit one scenario ``num_runs`` times and record the averaged result.

    Returns the averaged metrics in seconds, or None when every run failed.
    """
    blocked = tuple(blocked)
    print(f"\n=== Running Scenario: {label} ===")

    total = LighthouseMetrics()
    successful_runs = 0
    for run in range(1, num_runs + 1):
        print(f"-> Run {run}/{num_runs} for {label}")
        try:
            metrics = fetch_lighthouse_metrics(label, url, blocked)
        except (OSError, RuntimeError, ValueError) as error:
            print(f"❌ Run {run} failed: {error}", file=sys.stderr)
            continue
        total.add(metrics)
        successful_runs += 1

    if not successful_runs:
        print(f"\n❌ All runs failed for scenario: {label}\n", file=sys.stderr)
        return None

    total.average(float(successful_runs))
    seconds = total.to_seconds()
    fetch_time = datetime.now(timezone.utc).isoformat()

    save_metrics_to_txt(seconds, url, fetch_time)
    append_to_summary_json(label, url, fetch_time, seconds)

    print(f"\nSummary for scenario '{label}':")
    print(seconds.evaluate())
    print("Top 5 Performance Bottlenecks:")
    for metric, value in seconds.top_offenders():
        print(f"- {metric}: {value:.2f}")
    print(f"\n✅ Completed scenario: {label}\n")
    return seconds


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="perftracker", description="Run Lighthouse audits under blocking scenarios."
    )
    parser.add_argument("--url", help="URL to audit (default: $PERFTRACKER_URL)")
    parser.add_argument(
        "--runs", type=int, default=DEFAULT_RUNS, help="audits per scenario (default: 3)"
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Run all scenarios, summarise today's reports and analyse ``trace.json``."""
    print("🚀 Performance Tracker starting...")
    load_dotenv()
    args = _parse_args(argv)
    url = args.url or target_url()

    try:
        for label, blocked in SCENARIOS:
            run_scenario(label, url, blocked, args.runs)

        print("✅ All Lighthouse scenarios completed.")
        summarize_local_json_reports()

        if Path(TRACE_FILE).exists():
            parse_trace_json(TRACE_FILE)
        else:
            print("⚠️ No trace.json found to parse.")
    except (OSError, ValueError, json.JSONDecodeError) as error:
        print(f"Error: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
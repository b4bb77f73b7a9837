"""Scenario comparison: one audit per blocking scenario, summarised as Markdown."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv

from perftracker.metrics import LighthouseMetrics, _run_lighthouse

DEFAULT_URL = "https://example.com"
URL_VARIABLE = "PERFTRACKER_URL"

# Scenario label -> URL patterns blocked while auditing.
SCENARIOS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("baseline", ()),
    ("no-tealium", ("*.tealiumiq.com",)),
    ("no-appd", ("*.appdynamics.com",)),
    ("no-optimizely", ("*.optimizely.com",)),
    ("no-header-footer", ("*/header*", "*/footer*")),
    ("no-quantum", ("*.quantummetric.com",)),
)

_SCENARIO_OPTIONS = (
    "--output=json",
    "--output-path=stdout",
    "--quiet",
    "--window-size=1000,1000",
    "--preset=desktop",
    "--headless",
    "--only-categories=performance,accessibility,seo,best-practices",
)

_HEADER = (
    "# Lighthouse Performance Summary\n\n"
    "| Scenario           | Perf | ΔPerf | FCP   | LCP   | TTI   | TBT  |\n"
    "|--------------------|------|-------|-------|-------|-------|------|\n"
)


@dataclass
class ScenarioMetrics:
    """Headline metrics of one scenario, timings in seconds."""

    name: str
    perf_score: float
    fcp: float
    lcp: float
    tti: float
    tbt: float
    delta_perf: float = 0.0


def target_url() -> str:
    """The audited URL, taken from the environment when set."""
    return os.environ.get(URL_VARIABLE, DEFAULT_URL)


def build_summary(results: Iterable[tuple[str, LighthouseMetrics]]) -> list[ScenarioMetrics]:
    """Rows for each scenario, with the score change against ``baseline``, best first."""
    baseline_score = 0.0
    rows = []
    for label, metrics in results:
        if label == "baseline":
            baseline_score = metrics.performance_score
        seconds = metrics.to_seconds()
        rows.append(
            ScenarioMetrics(
                name=label,
                perf_score=metrics.performance_score,
                fcp=seconds.first_contentful_paint,
                lcp=seconds.largest_contentful_paint,
                tti=seconds.time_to_interactive,
                tbt=seconds.total_blocking_time,
            )
        )
    for row in rows:
        row.delta_perf = row.perf_score - baseline_score
    return sorted(rows, key=lambda row: row.delta_perf, reverse=True)


def render_markdown(rows: Iterable[ScenarioMetrics]) -> str:
    """A Markdown table of scenario rows."""
    lines = [
        f"| {row.name:<18} | {row.perf_score:>4.1f} | {row.delta_perf:>+6.1f}"
        f" | {row.fcp:>4.2f}s | {row.lcp:>4.2f}s | {row.tti:>4.2f}s | {row.tbt:>4.2f}s |\n"
        for row in rows
    ]
    return _HEADER + "".join(lines)


def _fetch_scenario_metrics(
    label: str, url: str, blocked: Iterable[str]
) -> LighthouseMetrics:
    report, _ = _run_lighthouse(
        label, url, _SCENARIO_OPTIONS, blocked, "Lighthouse command failed with status"
    )
    print(f"Saved full report for scenario '{label}'")
    return LighthouseMetrics.from_report(report)


def run_lighthouse_scenarios() -> Path:
    """Audit every scenario once and write ``summary_<date>.md``; return its path."""
    load_dotenv()
    url = target_url()
    date = datetime.now().strftime("%Y-%m-%d")

    results = []
    for label, blocked in SCENARIOS:
        print(f"\n=== Running Scenario: {label} ===")
        results.append((label, _fetch_scenario_metrics(label, url, blocked)))

    path = Path(f"summary_{date}.md")
    path.write_text(render_markdown(build_summary(results)), encoding="utf-8")
    print(f"Markdown summary written to {path}")
    return path
"""Lighthouse performance metrics and the audit run that collects them."""

from __future__ import annotations

import json
import math
import subprocess
from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass, fields, replace
from datetime import datetime
from pathlib import Path
from typing import Any

# Metric field -> Lighthouse audit id whose "numericValue" feeds it.
_AUDIT_KEYS: dict[str, str] = {
    "first_contentful_paint": "first-contentful-paint",
    "largest_contentful_paint": "largest-contentful-paint",
    "time_to_interactive": "interactive",
    "total_blocking_time": "total-blocking-time",
    "cumulative_layout_shift": "cumulative-layout-shift",
    "speed_index": "speed-index",
    "first_meaningful_paint": "first-meaningful-paint",
    "first_cpu_idle": "first-cpu-idle",
    "max_potential_fid": "max-potential-fid",
    "estimated_input_latency": "estimated-input-latency",
    "server_response_time": "server-response-time",
    "javascript_bootup_time": "bootup-time",
    "total_byte_weight": "total-byte-weight",
    "render_blocking_resources": "render-blocking-resources",
    "unused_javascript": "unused-javascript",
    "unused_css": "unused-css",
    "dom_size": "dom-size",
    "preconnect_origins": "preconnect-to-required-origins",
    "properly_sized_images": "uses-responsive-images",
    "efficiently_encoded_images": "uses-optimized-images",
    "minimize_main_thread_work": "mainthread-work-breakdown",
    "minimize_render_blocking_stylesheets": "uses-rel-preload",
    "avoid_large_layout_shifts": "layout-shift-elements",
}

# Fields measured in milliseconds that to_seconds() converts.
_TIMING_FIELDS = (
    "first_contentful_paint",
    "largest_contentful_paint",
    "time_to_interactive",
    "total_blocking_time",
    "speed_index",
    "first_meaningful_paint",
    "first_cpu_idle",
    "max_potential_fid",
    "estimated_input_latency",
    "server_response_time",
    "javascript_bootup_time",
    "minimize_main_thread_work",
    "minimize_render_blocking_stylesheets",
)

_PERFORMANCE_OPTIONS = (
    "--output=json",
    "--output-path=stdout",
    "--quiet",
    "--preset=desktop",
    "--only-categories=performance",
    "--save-assets",
    "--headless",
)


def _lookup(document: Any, *keys: str) -> Any:
    """Walk nested JSON objects, yielding None where a level is missing."""
    for key in keys:
        if not isinstance(document, Mapping):
            return None
        document = document.get(key)
    return document


def _number(value: Any) -> float:
    """Return a JSON number as float, anything else as 0.0."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return float(value)


def _run_lighthouse(
    label: str,
    url: str,
    options: Iterable[str],
    blocked: Iterable[str],
    failure_message: str,
) -> tuple[Any, Path]:
    """Run the lighthouse command, save its pretty JSON report and return both."""
    command = ["lighthouse", url, *options]
    for pattern in blocked:
        command.extend(("--blocked-url-patterns", pattern))

    result = subprocess.run(command, capture_output=True, check=False)
    if result.returncode != 0:
        raise RuntimeError(f"{failure_message}: exit status: {result.returncode}")

    report = json.loads(result.stdout.decode("utf-8"))
    date = datetime.now().strftime("%Y-%m-%d")
    path = Path(f"lighthouse_report_{label}_{date}.json")
    path.write_text(json.dumps(report, indent=2, ensure_ascii=False), encoding="utf-8")
    return report, path


@dataclass
class LighthouseMetrics:
    """Numeric results of one Lighthouse audit (or an aggregate of several)."""

    first_contentful_paint: float = 0.0
    largest_contentful_paint: float = 0.0
    time_to_interactive: float = 0.0
    total_blocking_time: float = 0.0
    cumulative_layout_shift: float = 0.0
    speed_index: float = 0.0
    performance_score: float = 0.0
    first_meaningful_paint: float = 0.0
    first_cpu_idle: float = 0.0
    max_potential_fid: float = 0.0
    estimated_input_latency: float = 0.0
    server_response_time: float = 0.0
    javascript_bootup_time: float = 0.0
    total_byte_weight: float = 0.0
    render_blocking_resources: float = 0.0
    unused_javascript: float = 0.0
    unused_css: float = 0.0
    dom_size: float = 0.0
    preconnect_origins: float = 0.0
    properly_sized_images: float = 0.0
    efficiently_encoded_images: float = 0.0
    minimize_main_thread_work: float = 0.0
    minimize_render_blocking_stylesheets: float = 0.0
    avoid_large_layout_shifts: float = 0.0

    @classmethod
    def from_report(cls, report: Any) -> LighthouseMetrics:
        """Build metrics from a parsed Lighthouse JSON report; missing values are 0."""
        values = {
            name: _number(_lookup(report, "audits", audit, "numericValue"))
            for name, audit in _AUDIT_KEYS.items()
        }
        score = _number(_lookup(report, "categories", "performance", "score"))
        values["performance_score"] = score * 100.0
        return cls(**values)

    def add(self, other: LighthouseMetrics) -> None:
        """Add every field of ``other`` to this instance."""
        for field in fields(self):
            setattr(self, field.name, getattr(self, field.name) + getattr(other, field.name))

    def average(self, count: float) -> None:
        """Divide every field by ``count``."""
        for field in fields(self):
            setattr(self, field.name, getattr(self, field.name) / count)

    def to_seconds(self) -> LighthouseMetrics:
        """Return a copy with the millisecond timings expressed in seconds."""
        return replace(self, **{name: getattr(self, name) / 1000.0 for name in _TIMING_FIELDS})

    def evaluate(self) -> str:
        """Short human-readable summary of the headline metrics."""
        return (
            f"Performance Score: {self.performance_score:.2f}\n"
            f"FCP: {self.first_contentful_paint:.2f}s\n"
            f"LCP: {self.largest_contentful_paint:.2f}s\n"
            f"TTI: {self.time_to_interactive:.2f}s\n"
            f"TBT: {self.total_blocking_time:.2f}s"
        )

    def top_offenders(self) -> list[tuple[str, float]]:
        """The bottleneck metrics, largest value first."""
        offenders = [
            ("TBT", self.total_blocking_time),
            ("TTI", self.time_to_interactive),
            ("JS Bootup", self.javascript_bootup_time),
            ("DOM Size", self.dom_size),
            ("Byte Weight", self.total_byte_weight),
        ]
        if any(math.isnan(value) for _, value in offenders):
            raise ValueError("cannot rank metrics containing NaN")
        return sorted(offenders, key=lambda item: item[1], reverse=True)

    def to_dict(self) -> dict[str, float]:
        """All fields as a plain dictionary, in declaration order."""
        return asdict(self)


def fetch_lighthouse_metrics(
    label: str, url: str, blocked: Iterable[str] = ()
) -> LighthouseMetrics:
    """Run a performance-only Lighthouse audit of ``url`` and return its metrics.

    The full report is saved as ``lighthouse_report_<label>_<date>.json``.
    """
    report, _ = _run_lighthouse(label, url, _PERFORMANCE_OPTIONS, blocked, "Lighthouse failed")
    return LighthouseMetrics.from_report(report)
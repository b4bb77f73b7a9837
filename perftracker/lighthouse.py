"""Full Lighthouse audits covering all main categories."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from perftracker.metrics import LighthouseMetrics, _run_lighthouse

_AUDITED_CATEGORIES = ("performance", "accessibility", "seo", "best-practices")
_WINDOW = (1000, 1000)


def _flag(name: str, value: str | None = None) -> str:
    return f"--{name}" if value is None else f"--{name}={value}"


_FULL_AUDIT_OPTIONS = tuple(
    _flag(name, value)
    for name, value in (
        ("output", "json"),
        ("output-path", "stdout"),
        ("quiet", None),
        ("window-size", ",".join(str(side) for side in _WINDOW)),
        ("preset", "desktop"),
        ("headless", None),
        ("only-categories", ",".join(_AUDITED_CATEGORIES)),
        ("save-assets", None),
    )
)

_FAILURE_PREFIX = "Lighthouse command failed with status"


def extract_metrics(report: Any) -> LighthouseMetrics:
    """Parse performance metrics from a Lighthouse JSON report."""
    return LighthouseMetrics.from_report(report)


def fetch_lighthouse_metrics(
    label: str, url: str, blocked_patterns: Iterable[str] = ()
) -> LighthouseMetrics:
    """Audit ``url`` with Lighthouse and return its performance metrics.

    The full report is saved under a file name built from ``label``;
    ``blocked_patterns`` lists URL patterns the audit blocks.
    """
    report, path = _run_lighthouse(
        label,
        url,
        _FULL_AUDIT_OPTIONS,
        blocked_patterns,
        _FAILURE_PREFIX,
    )
    print(f"✅ Saved report: {path}")
    return extract_metrics(report)
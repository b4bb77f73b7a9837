import json
import subprocess

import pytest

from perftracker.metrics import LighthouseMetrics
from perftracker.scenarios import (
    SCENARIOS,
    ScenarioMetrics,
    build_summary,
    render_markdown,
    run_lighthouse_scenarios,
)


def bench_metrics(score):
    return LighthouseMetrics(
        first_contentful_paint=2200.0,
        largest_contentful_paint=3300.0,
        time_to_interactive=5000.0,
        total_blocking_time=150.0,
        performance_score=score,
    )


def test_build_summary_converts_to_seconds():
    metrics = bench_metrics(80.0)
    (row,) = build_summary([("baseline", metrics)])
    seconds = metrics.to_seconds()
    assert row.name == "baseline"
    assert row.perf_score == 80.0
    assert row.fcp == seconds.first_contentful_paint
    assert row.lcp == seconds.largest_contentful_paint
    assert row.tti == seconds.time_to_interactive
    assert row.tbt == seconds.total_blocking_time
    assert row.delta_perf == 0.0


def test_build_summary_sorts_by_delta():
    rows = build_summary(
        [("baseline", bench_metrics(80.0)), ("better", bench_metrics(90.0)), ("worse", bench_metrics(70.0))]
    )
    assert [r.name for r in rows] == ["better", "baseline", "worse"]
    for row in rows:
        assert row.delta_perf == row.perf_score - 80.0


def test_build_summary_without_baseline():
    rows = build_summary([("a", bench_metrics(60.0))])
    assert rows[0].delta_perf == rows[0].perf_score


def test_build_summary_is_stable_for_ties():
    rows = build_summary([("first", bench_metrics(50.0)), ("second", bench_metrics(50.0))])
    assert [r.name for r in rows] == ["first", "second"]


def test_render_markdown_layout():
    rows = [
        ScenarioMetrics("baseline", 80.0, 2.2, 3.3, 5.0, 0.15, 0.0),
        ScenarioMetrics("no-appd", 85.0, 2.0, 3.0, 4.5, 0.1, 5.0),
    ]
    text = render_markdown(rows)
    lines = text.splitlines()
    assert lines[0] == "# Lighthouse Performance Summary"
    assert lines[2].startswith("| Scenario")
    assert len(lines) == 4 + len(rows)
    assert lines[4].startswith("| " + "baseline".ljust(18) + " |")
    assert "|   +0.0 |" in lines[4]
    assert all(line.endswith("s |") for line in lines[4:])


def test_render_markdown_empty():
    assert render_markdown([]).count("\n") == 4


def _fake_run_factory(calls, returncode=0):
    report = {
        "categories": {"performance": {"score": 0.5}},
        "audits": {"first-contentful-paint": {"numericValue": 1000}},
    }

    def fake_run(command, capture_output, check):
        calls.append(command)
        return subprocess.CompletedProcess(
            command, returncode, stdout=json.dumps(report).encode(), stderr=b""
        )

    return fake_run


def test_run_lighthouse_scenarios(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("PERFTRACKER_URL", "https://example.com")
    calls = []
    monkeypatch.setattr(subprocess, "run", _fake_run_factory(calls))
    path = run_lighthouse_scenarios()
    assert path.exists()
    assert len(calls) == len(SCENARIOS)
    assert all(cmd[1] == "https://example.com" for cmd in calls)
    assert all("--save-assets" not in cmd for cmd in calls)
    assert calls[1][-2:] == ["--blocked-url-patterns", "*.tealiumiq.com"]
    content = path.read_text(encoding="utf-8")
    for label, _ in SCENARIOS:
        assert f"| {label}" in content
    assert len(list(tmp_path.glob("lighthouse_report_*.json"))) == len(SCENARIOS)


def test_run_lighthouse_scenarios_failure(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    calls = []
    monkeypatch.setattr(subprocess, "run", _fake_run_factory(calls, returncode=1))
    with pytest.raises(RuntimeError, match="Lighthouse command failed"):
        run_lighthouse_scenarios()
    assert len(calls) == 1
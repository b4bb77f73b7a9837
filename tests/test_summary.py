import json
from datetime import datetime, timedelta

import pytest

from perftracker.metrics import LighthouseMetrics
from perftracker.summary import (
    append_to_summary_json,
    list_local_reports,
    summarize_local_json_reports,
    summary_row,
    update_summary,
    write_summary_entry,
)


def make_report(score=0.5, fcp=1500.0, lcp=2500.0, tti=4000.0, tbt=250.0):
    return {
        "categories": {"performance": {"score": score}},
        "audits": {
            "first-contentful-paint": {"numericValue": fcp},
            "largest-contentful-paint": {"numericValue": lcp},
            "interactive": {"numericValue": tti},
            "total-blocking-time": {"numericValue": tbt},
        },
    }


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_update_summary_creates_file(tmp_path):
    metrics = LighthouseMetrics(first_contentful_paint=2.2, performance_score=75.0)
    path = tmp_path / "summary.json"
    update_summary("baseline", "https://example.com", "now", metrics, path)
    entries = json.loads(path.read_text(encoding="utf-8"))
    assert len(entries) == 1
    entry = entries[0]
    assert entry["scenario"] == "baseline"
    assert entry["url"] == "https://example.com"
    assert entry["fetch_time"] == "now"
    assert entry["metrics"] == metrics.to_dict()


def test_update_summary_keys_sorted(tmp_path):
    path = tmp_path / "summary.json"
    update_summary("a", "https://example.com", "t", LighthouseMetrics(), path)
    entry = json.loads(path.read_text(encoding="utf-8"))[0]
    assert list(entry) == ["fetch_time", "metrics", "scenario", "url"]
    assert list(entry["metrics"]) == sorted(LighthouseMetrics().to_dict())


def test_update_summary_appends(tmp_path):
    path = tmp_path / "summary.json"
    update_summary("one", "https://example.com", "t1", LighthouseMetrics(), path)
    returned = update_summary("two", "https://example.com", "t2", LighthouseMetrics(), path)
    entries = json.loads(path.read_text(encoding="utf-8"))
    assert [e["scenario"] for e in entries] == ["one", "two"]
    assert returned == entries


@pytest.mark.parametrize("content", ["not json", '{"a": 1}'])
def test_update_summary_replaces_unusable_content(tmp_path, content):
    path = tmp_path / "summary.json"
    path.write_text(content, encoding="utf-8")
    update_summary("fresh", "https://example.com", "t", LighthouseMetrics(), path)
    entries = json.loads(path.read_text(encoding="utf-8"))
    assert [e["scenario"] for e in entries] == ["fresh"]


def test_append_to_summary_json_uses_working_directory(workdir):
    metrics = LighthouseMetrics(dom_size=900.0)
    returned = append_to_summary_json("no-appd", "https://example.com", "t", metrics)
    entries = json.loads((workdir / "summary.json").read_text(encoding="utf-8"))
    assert returned == entries
    assert [e["scenario"] for e in returned] == ["no-appd"]
    assert returned[0]["metrics"]["dom_size"] == 900.0


def test_write_summary_entry_matches_update_summary(workdir, tmp_path_factory):
    metrics = LighthouseMetrics(speed_index=3.1, unused_css=12.0)
    write_summary_entry("s", "https://example.com", "t", metrics)
    other = tmp_path_factory.mktemp("other") / "summary.json"
    update_summary("s", "https://example.com", "t", metrics, other)
    assert (workdir / "summary.json").read_text(encoding="utf-8") == other.read_text(
        encoding="utf-8"
    )


def test_list_local_reports(tmp_path, capsys):
    (tmp_path / "lighthouse_report_a_2024-01-01.json").write_text("{}")
    (tmp_path / "other.json").write_text("{}")
    (tmp_path / "lighthouse_report_dir").mkdir()
    found = list_local_reports(tmp_path)
    assert [p.name for p in found] == ["lighthouse_report_a_2024-01-01.json"]
    assert "Found report:" in capsys.readouterr().out


def test_summary_row_format():
    row = summary_row("baseline", make_report())
    assert row.startswith("baseline".ljust(18) + " | Perf:")
    assert "Perf:  50.0 |" in row
    assert "FCP: 1.50s" in row


def test_summary_row_missing_values_are_zero():
    assert summary_row("x", {}) == summary_row("x", make_report(0, 0, 0, 0, 0))


def test_summarize_local_json_reports(tmp_path, capsys):
    today = datetime.now().strftime("%Y-%m-%d")
    yesterday = (datetime.now() - timedelta(days=1)).strftime("%Y-%m-%d")
    report = make_report()
    (tmp_path / f"lighthouse_report_mobile_{today}.json").write_text(json.dumps(report))
    (tmp_path / f"lighthouse_report_old_{yesterday}.json").write_text(json.dumps(report))
    (tmp_path / f"lighthouse_report_{today}.json").write_text(json.dumps(report))
    rows = summarize_local_json_reports(tmp_path)
    assert sorted(rows) == sorted(
        [summary_row("mobile", report), summary_row("unknown", report)]
    )
    out = capsys.readouterr().out
    assert "=== Performance Summary Table ===" in out
    assert "old" not in out


def test_summarize_local_json_reports_invalid_json(tmp_path):
    today = datetime.now().strftime("%Y-%m-%d")
    (tmp_path / f"lighthouse_report_bad_{today}.json").write_text("{broken")
    with pytest.raises(json.JSONDecodeError):
        summarize_local_json_reports(tmp_path)
# perftracker

perftracker runs the `lighthouse` command against a site several times, once
for each scenario. Each scenario blocks a different set of third-party URL
patterns, and the results show what each blocked dependency costs in page
performance.

The scenarios, in the order they run, are:

| Scenario           | Blocked URL patterns            |
|--------------------|---------------------------------|
| `baseline`         | none                            |
| `no-tealium`       | `*.tealiumiq.com`               |
| `no-appd`          | `*.appdynamics.com`             |
| `no-optimizely`    | `*.optimizely.com`              |
| `no-header-footer` | `*/header*`, `*/footer*`        |
| `no-quantum`       | `*.quantummetric.com`           |

## Requirements

- Python 3.10 or later
- The `lighthouse` command on your `PATH`, together with a Chrome or Chromium
  that it can run headless

## Installation

```
pip install .
```

To install the test dependencies as well, use `pip install .[test]`.

## Usage

```
perftracker [--url URL] [--runs N]
```

- `--url` sets the URL to audit. If you leave it out, the value of the
  `PERFTRACKER_URL` environment variable is used, and if that is not set,
  `https://example.com`.
- `--runs` sets the number of audits per scenario. The default is 3.

A `.env` file in the working directory is loaded at startup, so
`PERFTRACKER_URL` can be set there.

For each scenario, perftracker does the following:

1. It runs the audit `--runs` times. Each run saves the full Lighthouse JSON
   report as `lighthouse_report_<scenario>_<YYYY-MM-DD>.json`, so a later
   run on the same day replaces it. If a run fails, perftracker reports it on
   standard error and skips it.
2. It averages the successful runs and converts the timing metrics from
   milliseconds to seconds.
3. It writes the URL, the fetch time (UTC, ISO 8601) and the headline
   metrics to `metrics_log_<YYYY-MM-DD>.txt`. Each scenario overwrites this
   file, so it ends up holding the last scenario.
4. It appends an entry to `summary.json` with the scenario, URL, fetch time
   and every metric.
5. It prints the performance score, FCP, LCP, TTI and TBT, followed by the
   bottleneck metrics (TBT, TTI, JS bootup, DOM size and byte weight),
   largest first.

If every run of a scenario fails, perftracker reports this and moves on to
the next scenario.

When all scenarios are done, perftracker prints a table with one row for
each of today's `lighthouse_report_*` files in the current directory. If a
`trace.json` file is present, it also prints the five longest `RunTask`
durations in that file, in milliseconds.

The command exits with status 0 on success. It exits with status 1 if a
file cannot be read or written, or if a report or trace is not valid JSON.

## Library use

```python
from perftracker.metrics import LighthouseMetrics
from perftracker.trace import top_run_task_durations

metrics = LighthouseMetrics(first_contentful_paint=2200.0, total_blocking_time=150.0)
print(metrics.to_seconds().evaluate())

for name, value in metrics.top_offenders():
    print(name, value)

trace = {"traceEvents": [{"name": "RunTask", "dur": 12000}]}
print(top_run_task_durations(trace, 5))  # [12.0]
```

- `LighthouseMetrics.from_report(report)` builds metrics from a parsed
  Lighthouse report. Any value that is missing or not a number becomes 0,
  and the performance score is scaled to 0–100.
- `perftracker.lighthouse.fetch_lighthouse_metrics(label, url, blocked_patterns)`
  runs one full audit and returns its metrics.
- `perftracker.metrics.fetch_lighthouse_metrics(label, url, blocked)` runs
  one audit limited to the performance category.
- `perftracker.summary.update_summary(...)` appends an entry to a summary
  JSON file of your choice.
- `perftracker.summary.summarize_local_json_reports(directory)` returns the
  table rows for today's reports in that directory.
- `perftracker.scenarios.run_lighthouse_scenarios()` audits each scenario
  once and writes `summary_<YYYY-MM-DD>.md`. This is a Markdown table of the
  scenarios, ranked by the change in performance score against `baseline`.
  `build_summary` and `render_markdown` build the same table from metrics
  you already have.

## What it does not do

- perftracker does not keep results in a database. All output goes to JSON,
  text and Markdown files in the working directory.
  `perftracker.report.save_metrics_to_db` writes the same daily text log as
  `save_metrics_to_txt`.
- It does not install or manage Lighthouse or the browser.
- It does not record traces. It only reads an existing `trace.json`.
- It does not draw charts.
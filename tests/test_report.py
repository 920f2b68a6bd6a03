"""Tests for the ranked reports and chart output."""

import os

import pytest

from storm_impact.models import CategorySummary, TidyRecord
from storm_impact.report import (
    REPORTS,
    ReportConfig,
    as_pairs,
    build_impact_reports,
    format_report,
    render_bar_chart,
    write_charts,
)


TIDY = [
    TidyRecord("Tornado", 3, 10, 1e6, 0.0),
    TidyRecord("Flood", 1, 0, 2e6, 1e6),
    TidyRecord("Heat", 5, 2, 0.0, 0.0),
]


def test_three_reports_in_fixed_order():
    reports = build_impact_reports(TIDY)
    assert list(reports) == list(REPORTS) == ["fatalities", "injuries", "economic_damage"]
    assert as_pairs(reports["fatalities"]) == [("Heat", 5.0), ("Tornado", 3.0), ("Flood", 1.0)]
    assert as_pairs(reports["injuries"])[0] == ("Tornado", 10.0)
    assert as_pairs(reports["economic_damage"])[0] == ("Flood", 3e6)


def test_top_n_from_config():
    reports = build_impact_reports(TIDY, ReportConfig(top_n=1))
    assert all(len(v) == 1 for v in reports.values())


def test_empty_tidy_set_gives_empty_reports():
    reports = build_impact_reports([])
    assert all(v == [] for v in reports.values())


def test_format_report():
    text = format_report("Average fatalities per event", [
        CategorySummary("Heat", "avg_fatalities", 5.0),
        CategorySummary("Tornado", "avg_fatalities", 1234.5),
    ])
    lines = text.splitlines()
    assert lines[0] == "Average fatalities per event"
    assert lines[2].startswith(" 1. Heat")
    assert lines[3].endswith("1,234.50")


def test_format_empty_report():
    assert "(no events)" in format_report("x", [])


def test_render_bar_chart_writes_png(tmp_path):
    pytest.importorskip("matplotlib")
    out = render_bar_chart(build_impact_reports(TIDY)["fatalities"], str(tmp_path / "c" / "f.png"),
                           title="t", xlabel="x")
    with open(out, "rb") as f:
        assert f.read(8) == b"\x89PNG\r\n\x1a\n"


def test_render_empty_report_raises(tmp_path):
    pytest.importorskip("matplotlib")
    with pytest.raises(ValueError):
        render_bar_chart([], str(tmp_path / "f.png"))


def test_write_charts_skips_empty_reports(tmp_path):
    pytest.importorskip("matplotlib")
    reports = build_impact_reports(TIDY)
    reports["injuries"] = []
    paths = write_charts(reports, str(tmp_path))
    assert [os.path.basename(p) for p in paths] == ["top_fatalities.png", "top_economic_damage.png"]

from __future__ import annotations

"""
Impact reports
--------------
This module turns tidy records into the three ranked reports:

- average fatalities per event type
- average injuries per event type
- average economic damage (property + crop, US$) per event type

Each report is an ordered list of `CategorySummary` rows. Any renderer can
consume it via `as_pairs` (label, value). A plain text table is provided for
the CLI and a horizontal bar chart for image output.

Design goals:
- Keep the core usable without plotting dependencies (lazy imports).
- Largest value on top of the chart, same order as the text table.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple
import os

from .aggregate import top_event_types
from .models import CategorySummary, TidyRecord


# -----------------------------
# Configuration
# -----------------------------

@dataclass
class ReportConfig:
    """High-level knobs for the ranked reports."""
    # How many event types to keep per report
    top_n: int = 10

    # If set, a PNG bar chart per report is written here
    chart_dir: Optional[str] = None


# metric -> (title, value axis label)
REPORTS: Dict[str, Tuple[str, str]] = {
    "fatalities": ("Average fatalities per event", "Fatalities per event"),
    "injuries": ("Average injuries per event", "Injuries per event"),
    "economic_damage": ("Average economic damage per event", "Property + crop damage (US$)"),
}


# -----------------------------
# Building reports
# -----------------------------

def build_impact_reports(
    tidy: Sequence[TidyRecord],
    config: Optional[ReportConfig] = None,
) -> Dict[str, List[CategorySummary]]:
    """Return {metric: top-N summaries} for the three impact metrics."""
    config = config or ReportConfig()
    return {metric: top_event_types(tidy, metric, config.top_n) for metric in REPORTS}


def as_pairs(summaries: Sequence[CategorySummary]) -> List[Tuple[str, float]]:
    """Ordered (event_type, value) table for an external renderer."""
    return [(s.event_type, s.value) for s in summaries]


def format_report(title: str, summaries: Sequence[CategorySummary]) -> str:
    """Plain-text ranked table."""
    lines = [title, "-" * len(title)]
    if not summaries:
        lines.append("(no events)")
        return "\n".join(lines)
    width = max(len(s.event_type) for s in summaries)
    for rank, s in enumerate(summaries, start=1):
        lines.append(f"{rank:>2}. {s.event_type:<{width}}  {s.value:,.2f}")
    return "\n".join(lines)


# -----------------------------
# Chart output
# -----------------------------

def render_bar_chart(
    summaries: Sequence[CategorySummary],
    out_path: str,
    *,
    title: str = "",
    xlabel: str = "",
) -> str:
    """
    Write a horizontal bar chart (category axis, value axis) to `out_path`.
    The first summary (largest value) is drawn on top.
    """
    # Lazy import: only required when charts are requested.
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
    except ImportError as e:
        raise ImportError(
            "Missing dependency: matplotlib.\n"
            "Install it with: python -m pip install matplotlib"
        ) from e

    if not summaries:
        raise ValueError("No event types to chart (report is empty).")

    labels = [s.event_type for s in summaries][::-1]
    values = [s.value for s in summaries][::-1]

    plt.figure()
    plt.barh(labels, values)
    plt.title(title)
    plt.xlabel(xlabel)
    plt.tight_layout()
    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    plt.savefig(out_path, dpi=200)
    plt.close()
    return out_path


def write_charts(
    reports: Dict[str, List[CategorySummary]],
    chart_dir: str,
) -> List[str]:
    """Render one PNG per non-empty report. Returns the written paths."""
    paths: List[str] = []
    for metric, summaries in reports.items():
        if not summaries:
            continue
        title, xlabel = REPORTS.get(metric, (metric, metric))
        path = os.path.join(chart_dir, f"top_{metric}.png")
        paths.append(render_bar_chart(summaries, path, title=title, xlabel=xlabel))
    return paths

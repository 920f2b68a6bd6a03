"""
Aggregator
==========

Group tidy records by canonical event type, average one metric per group,
rank descending and keep the top N.

Groups appear in first-seen order before sorting, and the sort is stable,
so ties always come out in the same order.
"""

from __future__ import annotations
from typing import Callable, Dict, Iterable, List, Tuple
from .dsa import merge_sort
from .models import CategorySummary, TidyRecord

METRICS = ("fatalities", "injuries", "economic_damage")

def _metric_key(metric: str) -> Tuple[str, Callable[[TidyRecord], float]]:
    m = metric.lower().strip()
    if m in ("fatalities", "deaths"):
        return "fatalities", lambda r: r.fatalities
    if m == "injuries":
        return "injuries", lambda r: r.injuries
    if m in ("economic_damage", "damage", "damages"):
        return "economic_damage", lambda r: r.economic_damage()
    raise ValueError("metric must be: fatalities, injuries, economic_damage")

def mean_by_event_type(records: Iterable[TidyRecord], metric: str) -> List[CategorySummary]:
    """Arithmetic mean of `metric` per event type (first-seen order)."""
    name, key = _metric_key(metric)
    sums: Dict[str, float] = {}
    counts: Dict[str, int] = {}
    for r in records:
        sums[r.event_type] = sums.get(r.event_type, 0.0) + key(r)
        counts[r.event_type] = counts.get(r.event_type, 0) + 1
    return [
        CategorySummary(event_type=t, metric_name=f"avg_{name}", value=sums[t] / counts[t])
        for t in sums
    ]

def rank_top_n(summaries: List[CategorySummary], n: int) -> List[CategorySummary]:
    """Sort descending by value (stable) and truncate to n."""
    if n < 0:
        raise ValueError("n must be >= 0")
    return merge_sort(summaries, key=lambda s: s.value, reverse=True)[:n]

def top_event_types(records: Iterable[TidyRecord], metric: str, n: int = 10) -> List[CategorySummary]:
    return rank_top_n(mean_by_event_type(records, metric), n)

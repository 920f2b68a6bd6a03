"""
Event-type normalizer
=====================

Maps raw `EVTYPE` text onto a canonical label using the rules from
`taxonomy.build_rules`.

Rules are applied in declaration order and every matching rule overwrites the
running assignment, so when a raw label matches several rules the LAST one
wins. Example: "FLASH FLOOD" matches both "Flash Flood" and "Flood"; since
"Flood" comes later in the taxonomy, the record becomes "Flood".

Records are independent of each other; the rules for one record are always
applied in order.
"""

from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Sequence
from .taxonomy import MatchRule

# Assignment for a raw label that no rule matches.
UNRESOLVED: Optional[str] = None

def resolve_event_type(raw: Optional[str], rules: Sequence[MatchRule]) -> Optional[str]:
    """Fold the ordered rules over one raw label; last match wins."""
    text = raw if isinstance(raw, str) else ""
    assigned = UNRESOLVED
    for rule in rules:
        if rule.matches(text):
            assigned = rule.label
    return assigned

def normalize_event_types(raw_labels: Iterable[Optional[str]],
                          rules: Sequence[MatchRule]) -> List[Optional[str]]:
    """Resolve every raw label, preserving input order.

    Distinct labels are resolved once and reused (the raw column repeats the
    same few hundred spellings across ~900k rows).
    """
    memo: Dict[Optional[str], Optional[str]] = {}
    out: List[Optional[str]] = []
    for raw in raw_labels:
        if raw not in memo:
            memo[raw] = resolve_event_type(raw, rules)
        out.append(memo[raw])
    return out

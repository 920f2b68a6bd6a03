"""
Event-type taxonomy and match rules
===================================

NOAA publishes a fixed list of 48 storm event types (Storm Data Directive
10-1605). The raw `EVTYPE` column, however, holds almost a thousand distinct
free-text spellings ("TSTM WIND", "HURRICANE ERIN", "flash flooding", ...).

For every canonical label we derive a `MatchRule`:
- a parenthetical synonym becomes an alternative term
  ("Hurricane (Typhoon)" -> "Hurricane|Typhoon"),
- a slash-separated synonym is treated the same way
  ("Storm Surge/Tide" -> "Storm Surge|Tide"),
- matching is case-insensitive and unanchored: a rule matches if any term
  occurs anywhere in the raw label.

The taxonomy is plain data so tests and callers can substitute their own.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence
import re

# Table order of the directive. Rule evaluation order follows this tuple.
NOAA_EVENT_TYPES = (
    "Astronomical Low Tide",
    "Avalanche",
    "Blizzard",
    "Coastal Flood",
    "Cold/Wind Chill",
    "Debris Flow",
    "Dense Fog",
    "Dense Smoke",
    "Drought",
    "Dust Devil",
    "Dust Storm",
    "Excessive Heat",
    "Extreme Cold/Wind Chill",
    "Flash Flood",
    "Flood",
    "Frost/Freeze",
    "Funnel Cloud",
    "Freezing Fog",
    "Hail",
    "Heat",
    "Heavy Rain",
    "Heavy Snow",
    "High Surf",
    "High Wind",
    "Hurricane (Typhoon)",
    "Ice Storm",
    "Lake-Effect Snow",
    "Lakeshore Flood",
    "Lightning",
    "Marine Hail",
    "Marine High Wind",
    "Marine Strong Wind",
    "Marine Thunderstorm Wind",
    "Rip Current",
    "Seiche",
    "Sleet",
    "Storm Surge/Tide",
    "Strong Wind",
    "Thunderstorm Wind",
    "Tornado",
    "Tropical Depression",
    "Tropical Storm",
    "Tsunami",
    "Volcanic Ash",
    "Waterspout",
    "Wildfire",
    "Winter Storm",
    "Winter Weather",
)

_SYNONYM_RE = re.compile(r"\s*\(\s*([^)]*?)\s*\)\s*|\s*/\s*")

@dataclass(frozen=True)
class MatchRule:
    """Compiled pattern for one canonical label."""
    label: str
    pattern: re.Pattern

    def matches(self, raw: str) -> bool:
        return self.pattern.search(raw) is not None

def label_terms(label: str) -> List[str]:
    """Split a canonical label into its alternative terms.

    Example:
        "Hurricane (Typhoon)" -> ["Hurricane", "Typhoon"]
        "Storm Surge/Tide"    -> ["Storm Surge", "Tide"]
    """
    # re.split keeps the captured parenthetical as its own element
    parts = _SYNONYM_RE.split(label)
    return [p.strip() for p in parts if p and p.strip()]

def rule_pattern(label: str, extra_terms: Sequence[str] = ()) -> str:
    """Return the alternation text for a label ("Hurricane|Typhoon")."""
    terms = label_terms(label) + [t.strip() for t in extra_terms if t.strip()]
    return "|".join(re.escape(t) for t in terms)

def build_rules(labels: Sequence[str] = NOAA_EVENT_TYPES,
                aliases: Optional[Mapping[str, Sequence[str]]] = None) -> List[MatchRule]:
    """Build one MatchRule per canonical label, in declaration order.

    `aliases` maps a canonical label to extra literal terms (for example
    {"Thunderstorm Wind": ["TSTM Wind"]}). The rule keeps the canonical label.
    """
    seen: Dict[str, int] = {}
    for i, label in enumerate(labels):
        if label in seen:
            raise ValueError(f"Duplicate taxonomy label: {label!r}")
        seen[label] = i

    aliases = aliases or {}
    unknown = [k for k in aliases if k not in seen]
    if unknown:
        raise ValueError(f"Aliases given for labels outside the taxonomy: {unknown}")

    rules: List[MatchRule] = []
    for label in labels:
        text = rule_pattern(label, aliases.get(label, ()))
        rules.append(MatchRule(label=label, pattern=re.compile(text, re.IGNORECASE)))
    return rules

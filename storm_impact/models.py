"""
Data model (RawEventRecord -> TidyRecord)
========================================

Each row of the NOAA Storm Data table is converted into a `RawEventRecord`.
The pipeline turns the records it can classify into `TidyRecord` objects.

All records are immutable (`frozen=True`) so that:
- raw rows cannot be accidentally modified while they are being cleaned, and
- the aggregator can only read tidy records, never edit them.
"""

from dataclasses import dataclass

@dataclass(frozen=True)
class RawEventRecord:
    """One storm event exactly as ingested.

    `event_type_raw` is free text (any casing, typos, abbreviations).
    Damage is split into a magnitude and an exponent code (see `damage.py`).
    """
    event_type_raw: str
    fatalities: int
    injuries: int
    property_damage_magnitude: float
    property_damage_exponent_code: str
    crop_damage_magnitude: float
    crop_damage_exponent_code: str

@dataclass(frozen=True)
class TidyRecord:
    """Cleaned record: canonical event type and damage in US$."""
    event_type: str
    fatalities: int
    injuries: int
    property_damage: float
    crop_damage: float

    def economic_damage(self) -> float:
        """Return property + crop damage (US$)."""
        return self.property_damage + self.crop_damage

@dataclass(frozen=True)
class CategorySummary:
    """One row of a ranked report, e.g. ("Tornado", "avg_fatalities", 0.09)."""
    event_type: str
    metric_name: str
    value: float

@dataclass(frozen=True)
class RejectedRecord:
    """Identity of a raw row skipped because of a malformed exponent code."""
    index: int
    event_type_raw: str
    exponent_code: str
    reason: str

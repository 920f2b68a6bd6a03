"""
Pipeline orchestrator
=====================

Raw records -> tidy records, in three steps:

1) Decode property and crop damage for every record (`damage.py`).
   A malformed exponent code rejects that row only; it is logged and kept in
   `PipelineResult.rejected`.
2) Normalize the raw event type of the surviving rows (`normalizer.py`).
3) Emit a `TidyRecord` for each resolved row. Unresolved rows are dropped and
   only counted.

Invariant: len(tidy) + unresolved_count == normalized_count.

The result is built locally and returned whole, so a failed run never exposes
a partial record set.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple
import logging
from .damage import UnknownExponentCode, reconstruct_damage
from .models import RawEventRecord, RejectedRecord, TidyRecord
from .normalizer import UNRESOLVED, normalize_event_types
from .taxonomy import MatchRule, build_rules

logger = logging.getLogger(__name__)

@dataclass
class PipelineResult:
    """Output of one pipeline run plus data-quality counters."""
    tidy: List[TidyRecord] = field(default_factory=list)
    total_input: int = 0
    rejected: List[RejectedRecord] = field(default_factory=list)
    unresolved_count: int = 0

    @property
    def normalized_count(self) -> int:
        """Records that reached the normalizer."""
        return self.total_input - len(self.rejected)

    @property
    def drop_rate(self) -> float:
        """Fraction of all input records dropped for an unresolved type.

        Denominator is `total_input`, rejected rows included.
        """
        if self.total_input == 0:
            return 0.0
        return self.unresolved_count / self.total_input

    @property
    def unresolved_rate(self) -> float:
        """Fraction of normalized records left unresolved (denominator `normalized_count`)."""
        if self.normalized_count == 0:
            return 0.0
        return self.unresolved_count / self.normalized_count

def _decode(index: int, rec: RawEventRecord) -> Tuple[Optional[Tuple[float, float]], Optional[RejectedRecord]]:
    code = rec.property_damage_exponent_code
    try:
        prop = reconstruct_damage(rec.property_damage_magnitude, code)
        code = rec.crop_damage_exponent_code
        crop = reconstruct_damage(rec.crop_damage_magnitude, code)
    except UnknownExponentCode as e:
        return None, RejectedRecord(index=index, event_type_raw=rec.event_type_raw,
                                    exponent_code=str(code), reason=str(e))
    return (prop, crop), None

def run_pipeline(records: Iterable[RawEventRecord],
                 rules: Optional[Sequence[MatchRule]] = None) -> PipelineResult:
    """Run decode -> normalize -> filter over a batch of raw records.

    `rules` defaults to the full NOAA taxonomy.
    """
    if rules is None:
        rules = build_rules()

    result = PipelineResult()
    decoded: List[Tuple[RawEventRecord, float, float]] = []

    for i, rec in enumerate(records):
        result.total_input += 1
        damages, rejected = _decode(i, rec)
        if rejected is not None:
            logger.warning("Skipping row %d (%r): %s", i, rec.event_type_raw, rejected.reason)
            result.rejected.append(rejected)
            continue
        decoded.append((rec, damages[0], damages[1]))

    labels = normalize_event_types([rec.event_type_raw for rec, _, _ in decoded], rules)

    for (rec, prop, crop), label in zip(decoded, labels):
        if label is UNRESOLVED:
            result.unresolved_count += 1
            continue
        result.tidy.append(TidyRecord(
            event_type=label,
            fatalities=rec.fatalities,
            injuries=rec.injuries,
            property_damage=prop,
            crop_damage=crop,
        ))

    logger.info(
        "Pipeline: %d input, %d rejected, %d unresolved (%.2f%% of input dropped), %d tidy",
        result.total_input, len(result.rejected), result.unresolved_count,
        result.drop_rate * 100, len(result.tidy),
    )
    return result

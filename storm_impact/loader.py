"""
Dataset loader (Storm Data CSV -> RawEventRecord list)
======================================================

This module reads the NOAA Storm Data table and converts each row into a
`RawEventRecord` object.

Key ideas:
- We try multiple possible column names because exports vary
  (EVTYPE vs EVENT_TYPE, upper vs lower case).
- We keep conversion helpers (_to_int/_to_float/_to_str) to safely handle blanks.
- Only the 7 columns the pipeline needs are selected.
- The raw file never changes once downloaded, so parsed records are memoized:
  one entry per file, replaced when its mtime or size changes.
"""

from __future__ import annotations
from typing import Dict, List, Tuple
import logging
import os
import re
import pandas as pd
from .models import RawEventRecord

logger = logging.getLogger(__name__)

# field -> accepted column names (first match wins)
COLUMNS = {
    "event_type_raw": ("EVTYPE", "EVENT_TYPE", "Event Type"),
    "fatalities": ("FATALITIES", "DEATHS", "DEATHS_DIRECT"),
    "injuries": ("INJURIES", "INJURIES_DIRECT"),
    "property_damage_magnitude": ("PROPDMG", "PROP_DMG"),
    "property_damage_exponent_code": ("PROPDMGEXP", "PROP_DMG_EXP"),
    "crop_damage_magnitude": ("CROPDMG", "CROP_DMG"),
    "crop_damage_exponent_code": ("CROPDMGEXP", "CROP_DMG_EXP"),
}

_EXP_FIELDS = ("property_damage_exponent_code", "crop_damage_exponent_code")

# absolute path -> ((path, mtime, size), records); one entry per file
_cache: Dict[str, Tuple[Tuple[str, float, int], Tuple[RawEventRecord, ...]]] = {}

def _to_int(x) -> int:
    """Convert a cell to int, returning 0 if missing/invalid."""
    if pd.isna(x): return 0
    try: return int(float(x))
    except (TypeError, ValueError): return 0

def _to_float(x) -> float:
    """Convert a cell to float, returning 0.0 if missing/invalid."""
    if pd.isna(x): return 0.0
    try: return float(x)
    except (TypeError, ValueError): return 0.0

def _to_str(x) -> str:
    if pd.isna(x): return ""
    return str(x).strip()

def _to_code(x) -> str:
    """Exponent-code cell as text. A numeric column holds 5.0 for code "5"."""
    if pd.isna(x): return ""
    if isinstance(x, float) and x.is_integer(): return str(int(x))
    return str(x).strip()

def _norm(s: str) -> str:
    return re.sub(r"[^a-z0-9]+", "", str(s).lower())

def _col(columns, *names: str) -> str:
    cols = list(columns)
    for n in names:
        if n in cols:
            return n
    norm_map = {_norm(c): c for c in cols}
    for n in names:
        nn = _norm(n)
        if nn in norm_map:
            return norm_map[nn]
    raise KeyError(f"Missing required column. Tried={names}. Available={cols}")

def resolve_columns(columns) -> Dict[str, str]:
    """Map each RawEventRecord field to the matching column of a table."""
    return {field: _col(columns, *names) for field, names in COLUMNS.items()}

def records_from_frame(df: pd.DataFrame) -> List[RawEventRecord]:
    """Select the 7 pipeline fields from an already-parsed table."""
    cols = resolve_columns(df.columns)
    fields = list(cols)
    sub = df[[cols[f] for f in fields]]

    records: List[RawEventRecord] = []
    for row in sub.itertuples(index=False, name=None):
        v = dict(zip(fields, row))
        records.append(RawEventRecord(
            event_type_raw=_to_str(v["event_type_raw"]),
            fatalities=_to_int(v["fatalities"]),
            injuries=_to_int(v["injuries"]),
            property_damage_magnitude=_to_float(v["property_damage_magnitude"]),
            property_damage_exponent_code=_to_code(v["property_damage_exponent_code"]),
            crop_damage_magnitude=_to_float(v["crop_damage_magnitude"]),
            crop_damage_exponent_code=_to_code(v["crop_damage_exponent_code"]),
        ))
    return records

def _cache_key(path: str) -> Tuple[str, float, int]:
    st = os.stat(path)
    return (os.path.abspath(path), st.st_mtime, st.st_size)

def load_storm_csv(path: str, use_cache: bool = True) -> List[RawEventRecord]:
    """
    Load the (optionally bz2/gzip compressed) Storm Data file.
    Exponent-code columns are read as text so "0".."8" stay codes, not numbers.
    """
    key = _cache_key(path)
    cached = _cache.get(key[0]) if use_cache else None
    if cached is not None and cached[0] == key:
        logger.debug("Using cached records for %s", path)
        return list(cached[1])

    header = pd.read_csv(path, compression="infer", nrows=0)
    # read_csv matches usecols against the raw header, so keep a map back to it
    raw_names = {str(c).strip(): c for c in header.columns}
    cols = resolve_columns(raw_names)
    usecols = [raw_names[cols[f]] for f in COLUMNS]
    dtype = {raw_names[cols[f]]: str for f in _EXP_FIELDS}

    logger.info("Reading %s", path)
    df = pd.read_csv(path, compression="infer", usecols=usecols, dtype=dtype,
                     keep_default_na=False, na_values=[""])
    df.rename(columns={c: str(c).strip() for c in df.columns}, inplace=True)
    records = records_from_frame(df)
    logger.info("Loaded %d raw records from %s", len(records), path)

    if use_cache:
        _cache[key[0]] = (key, tuple(records))
    return records

def clear_cache() -> None:
    _cache.clear()

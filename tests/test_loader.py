"""Tests for the Storm Data loader."""

import io
import os

import pandas as pd
import pytest

from storm_impact import loader
from storm_impact.loader import clear_cache, load_storm_csv, records_from_frame, resolve_columns
from storm_impact.models import RawEventRecord
from storm_impact.pipeline import run_pipeline


@pytest.fixture(autouse=True)
def _fresh_cache():
    clear_cache()
    yield
    clear_cache()


def test_load_selects_the_seven_fields(storm_csv):
    records = load_storm_csv(str(storm_csv))

    assert len(records) == 5
    assert records[0] == RawEventRecord("TORNADO", 3, 10, 2.5, "K", 0.0, "")
    assert records[1].crop_damage_exponent_code == "M"
    # digit codes stay text
    assert records[2].crop_damage_exponent_code == "5"
    assert records[3].property_damage_exponent_code == ""


def test_load_compressed_file(tmp_path, storm_csv):
    df = pd.read_csv(storm_csv, dtype=str)
    path = tmp_path / "storm.csv.bz2"
    df.to_csv(path, index=False, compression="bz2")

    records = load_storm_csv(str(path))
    assert [r.event_type_raw for r in records][:2] == ["TORNADO", "TSTM WIND"]


def test_load_is_memoized(storm_csv, monkeypatch):
    first = load_storm_csv(str(storm_csv))

    def _fail(*args, **kwargs):
        raise AssertionError("file was read again")

    monkeypatch.setattr(loader.pd, "read_csv", _fail)
    assert load_storm_csv(str(storm_csv)) == first


def test_changed_file_is_reloaded(storm_csv):
    load_storm_csv(str(storm_csv))
    with open(storm_csv, "a", encoding="utf-8") as f:
        f.write("1,4/18/1950 0:00:00,HAIL,0,0,0,,0,\n")
    st = os.stat(storm_csv)
    os.utime(storm_csv, (st.st_atime, st.st_mtime + 5))

    assert len(load_storm_csv(str(storm_csv))) == 6


def test_records_from_frame_tolerates_blanks_and_column_variants():
    df = pd.DataFrame({
        "event_type": ["Tornado", None],
        "fatalities": [None, 2],
        "injuries": [1, None],
        "propdmg": [None, 4.0],
        "propdmgexp": ["k", None],
        "cropdmg": [0, None],
        "cropdmgexp": [None, "?"],
    })
    records = records_from_frame(df)
    assert records == [
        RawEventRecord("Tornado", 0, 1, 0.0, "k", 0.0, ""),
        RawEventRecord("", 2, 0, 4.0, "", 0.0, "?"),
    ]


def test_missing_column_raises_key_error():
    with pytest.raises(KeyError):
        resolve_columns(["EVTYPE", "FATALITIES"])


def test_digit_only_code_column_from_default_dtype():
    df = pd.read_csv(io.StringIO(
        "EVTYPE,FATALITIES,INJURIES,PROPDMG,PROPDMGEXP,CROPDMG,CROPDMGEXP\n"
        "TORNADO,0,0,3,5,0,\n"
        "HAIL,0,0,2,,0,\n"
    ))
    assert df["PROPDMGEXP"].dtype == "float64"

    records = records_from_frame(df)
    assert [r.property_damage_exponent_code for r in records] == ["5", ""]

    result = run_pipeline(records)
    assert result.rejected == []
    assert [r.property_damage for r in result.tidy] == [30.0, 0.0]


def test_changed_file_replaces_cached_entry(storm_csv):
    load_storm_csv(str(storm_csv))
    with open(storm_csv, "a", encoding="utf-8") as f:
        f.write("1,4/18/1950 0:00:00,HAIL,0,0,0,,0,\n")
    load_storm_csv(str(storm_csv))

    assert len(loader._cache) == 1
    (key, records), = loader._cache.values()
    assert key[0] == os.path.abspath(str(storm_csv))
    assert len(records) == 6

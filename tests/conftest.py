"""Pytest configuration and fixtures."""

import pytest

from storm_impact.models import RawEventRecord
from storm_impact.taxonomy import build_rules


@pytest.fixture
def rules():
    """Rules for the full NOAA taxonomy."""
    return build_rules()


@pytest.fixture
def make_raw():
    """Factory for raw records with harmless defaults."""
    def _make(event_type_raw="TORNADO", fatalities=0, injuries=0,
              prop_mag=0.0, prop_exp="", crop_mag=0.0, crop_exp=""):
        return RawEventRecord(
            event_type_raw=event_type_raw,
            fatalities=fatalities,
            injuries=injuries,
            property_damage_magnitude=prop_mag,
            property_damage_exponent_code=prop_exp,
            crop_damage_magnitude=crop_mag,
            crop_damage_exponent_code=crop_exp,
        )
    return _make


STORM_CSV = (
    "STATE__,BGN_DATE,EVTYPE,FATALITIES,INJURIES,PROPDMG,PROPDMGEXP,CROPDMG,CROPDMGEXP\n"
    "1,4/18/1950 0:00:00,TORNADO,3,10,2.5,K,0,\n"
    "1,4/18/1950 0:00:00,TSTM WIND,1,0,5,K,1,M\n"
    "1,4/18/1950 0:00:00,HURRICANE ERIN,0,2,1,B,5,5\n"
    "1,4/18/1950 0:00:00,Summary of March 24,0,0,0,,0,\n"
    "1,4/18/1950 0:00:00,FLOOD,0,0,7,x,0,\n"
)


@pytest.fixture
def storm_csv(tmp_path):
    """Small Storm Data file with one unresolved and one malformed row."""
    path = tmp_path / "storm.csv"
    path.write_text(STORM_CSV, encoding="utf-8")
    return path

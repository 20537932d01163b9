"""
Row Formatting - Display Helpers

How one earthquake is shown in the list: magnitude, location split into an
offset and a primary place, and the event date and time (UTC).
"""

from dataclasses import dataclass
from typing import Tuple

from quakereport.coreutils.time import format_date, format_time
from quakereport.transformation.schemas import EarthquakeRecord

LOCATION_SEPARATOR = " of "
NEAR_THE = "Near the"


@dataclass(frozen=True)
class EarthquakeRow:
    magnitude: str
    location_offset: str
    primary_location: str
    date: str
    time: str


def format_magnitude(magnitude: float) -> str:
    """6.48 -> '6.5'"""
    return f"{magnitude:.1f}"


def split_location(place: str) -> Tuple[str, str]:
    """
    Split a USGS place description into (offset, primary location)

    '10km SW of Testville' -> ('10km SW of', 'Testville')
    'Pacific-Antarctic Ridge' -> ('Near the', 'Pacific-Antarctic Ridge')
    """
    if LOCATION_SEPARATOR in place:
        offset, primary = place.split(LOCATION_SEPARATOR, 1)
        return offset + LOCATION_SEPARATOR.rstrip(), primary
    return NEAR_THE, place


def format_row(record: EarthquakeRecord) -> EarthquakeRow:
    offset, primary = split_location(record.location)
    return EarthquakeRow(
        magnitude=format_magnitude(record.magnitude),
        location_offset=offset,
        primary_location=primary,
        date=format_date(record.time_epoch_millis),
        time=format_time(record.time_epoch_millis),
    )

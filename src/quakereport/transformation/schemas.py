"""
Transformation Layer Schemas

The earthquake record built from one feed feature, and the tabular schema
used when the records are shown as a table.
"""

from dataclasses import dataclass
from datetime import datetime

import polars as pl

from quakereport.coreutils.time import dt_from_epoch_millis


@dataclass(frozen=True)
class EarthquakeRecord:
    """One seismic event from the USGS feed"""

    magnitude: float
    location: str
    time_epoch_millis: int
    detail_url: str

    @property
    def occurred_at(self) -> datetime:
        """Event time as an aware UTC datetime"""
        return dt_from_epoch_millis(self.time_epoch_millis)


RECORD_FRAME_SCHEMA = pl.Schema(
    [
        ("magnitude", pl.Float64()),
        ("location", pl.String()),
        ("time_epoch_millis", pl.Int64()),
        ("detail_url", pl.String()),
    ]
)

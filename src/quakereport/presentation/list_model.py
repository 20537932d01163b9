"""
Earthquake List Model - Display State

Owns the sequence of records on screen. The sequence is only ever replaced
as a whole, via replace_all, after a load completes.
"""

import threading
import webbrowser
from typing import Callable, Iterable, List, Optional, Tuple

import polars as pl

from quakereport.transformation.schemas import EarthquakeRecord
from quakereport.transformation.transformers import records_to_frame
from .formatting import EarthquakeRow, format_row
import logging

logger = logging.getLogger(__name__)


class EarthquakeListModel:
    """The displayed list of earthquakes"""

    def __init__(self, records: Iterable[EarthquakeRecord] = ()):
        self._lock = threading.Lock()
        self._records: Tuple[EarthquakeRecord, ...] = tuple(records)

    def __len__(self) -> int:
        return len(self._records)

    @property
    def items(self) -> Tuple[EarthquakeRecord, ...]:
        return self._records

    def item(self, position: int) -> EarthquakeRecord:
        return self._records[position]

    def replace_all(self, records: Iterable[EarthquakeRecord]) -> None:
        """Drop the current records and show records instead"""
        new_records = tuple(records)
        with self._lock:
            self._records = new_records
        logger.info(f"Displaying {len(new_records)} earthquakes")

    def rows(self) -> List[EarthquakeRow]:
        return [format_row(record) for record in self._records]

    def to_frame(self) -> pl.DataFrame:
        return records_to_frame(self._records)

    def open_detail(
        self, position: int, opener: Optional[Callable[[str], bool]] = None
    ) -> str:
        """
        Open the detail page of the record at position in the browser

        Returns:
            str: The URL that was opened
        """
        url = self.item(position).detail_url
        logger.info(f"Opening {url}")
        (opener or webbrowser.open)(url)
        return url

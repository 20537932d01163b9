"""
Pipeline Orchestrator - Fetch, Parse, Hand Off

One load is one fetch followed by one parse, run on a background worker.
Only the finished list of records crosses back to the caller, through a
Future. The loader has a single worker, so a load requested while another
is running waits for it instead of running alongside it.
"""

import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import List, Optional, Protocol
import logging

# Extract layer imports
from quakereport.extract.usgs_api import USGSAPIClient

# Transform layer imports
from quakereport.transformation.schemas import EarthquakeRecord
from quakereport.transformation.transformers import extract_records

logger = logging.getLogger(__name__)


class RecordSink(Protocol):
    """Anything that can take over a whole new list of records"""

    def replace_all(self, records: List[EarthquakeRecord]) -> None: ...


def load_records(
    url: str, client: Optional[USGSAPIClient] = None
) -> List[EarthquakeRecord]:
    """
    Run one complete load: fetch the feed at url and parse it

    Never raises for fetch or parse failures; those are logged by the layer
    where they happen and leave the result empty.

    Args:
        url: Absolute query URL
        client: API client to use (a one-off client is created if not provided)

    Returns:
        List[EarthquakeRecord]: Records in feed order, possibly empty
    """
    start_time = time.time()

    if client is None:
        with USGSAPIClient() as one_off:
            json_response = one_off.fetch(url)
    else:
        json_response = client.fetch(url)

    earthquakes = extract_records(json_response)
    if earthquakes is None:
        logger.warning(f"No earthquake data received from {url}")
        earthquakes = []

    elapsed = time.time() - start_time
    logger.info(f"✅ Loaded {len(earthquakes)} earthquakes in {elapsed:.2f} seconds")
    return earthquakes


class EarthquakeLoader:
    """Runs loads on a single background worker"""

    def __init__(self, client: Optional[USGSAPIClient] = None):
        """
        Initialize the loader

        Args:
            client: API client shared by all loads (a one-off client per load if not provided)
        """
        self.client = client
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="quakereport-load"
        )

    def __enter__(self) -> "EarthquakeLoader":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def load(self, url: str) -> "Future[List[EarthquakeRecord]]":
        """
        Start a load in the background

        Args:
            url: Absolute query URL

        Returns:
            Future resolving to the loaded records
        """
        logger.info(f"🔄 Queuing load for {url}")
        return self._executor.submit(load_records, url, self.client)

    def load_into(self, url: str, sink: RecordSink) -> "Future[List[EarthquakeRecord]]":
        """
        Start a load and replace the sink's records once it finishes

        The sink is only touched after the load completes, once, with the
        whole result, and before the returned Future resolves.

        Args:
            url: Absolute query URL
            sink: Display model whose records are replaced

        Returns:
            Future resolving to the loaded records
        """
        logger.info(f"🔄 Queuing load for {url}")
        return self._executor.submit(_load_and_deliver, url, self.client, sink)

    def close(self, wait: bool = True) -> None:
        """Stop accepting loads and release the worker"""
        self._executor.shutdown(wait=wait)


def _load_and_deliver(
    url: str, client: Optional[USGSAPIClient], sink: RecordSink
) -> List[EarthquakeRecord]:
    earthquakes = load_records(url, client)
    sink.replace_all(earthquakes)
    return earthquakes

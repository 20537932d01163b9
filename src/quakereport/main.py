"""
Main Entry Point - Quake Report

Runs one load against the USGS event service, shows the resulting list,
and optionally opens the detail page of one of the earthquakes.
"""

import sys
from typing import List, Optional

from quakereport.coreutils.env import setting
from quakereport.coreutils.logging import setup_logging
from quakereport.extract.usgs_api import (
    DEFAULT_LIMIT,
    DEFAULT_MIN_MAGNITUDE,
    DEFAULT_REQUEST_URL,
    build_query_url,
)
from quakereport.orchestration.pipeline import EarthquakeLoader
from quakereport.presentation.list_model import EarthquakeListModel


def resolve_request_url(
    url: Optional[str] = None,
    min_magnitude: Optional[float] = None,
    limit: Optional[int] = None,
) -> str:
    """
    Pick the URL to load

    An explicit url wins, then query options, then QUAKEREPORT_REQUEST_URL,
    then the default query.
    """
    if url:
        return url
    if min_magnitude is not None or limit is not None:
        return build_query_url(
            min_magnitude=DEFAULT_MIN_MAGNITUDE if min_magnitude is None else min_magnitude,
            limit=DEFAULT_LIMIT if limit is None else limit,
        )
    return setting("request_url", DEFAULT_REQUEST_URL)


def render(model: EarthquakeListModel) -> str:
    """Render the list as plain text, one earthquake per line"""
    if not len(model):
        return "No earthquakes found."

    lines = []
    for position, row in enumerate(model.rows(), start=1):
        lines.append(
            f"{position:>3}. {row.magnitude:>4}  {row.location_offset:<16} "
            f"{row.primary_location:<40} {row.date}  {row.time}"
        )
    return "\n".join(lines)


def run(
    url: str, open_position: Optional[int] = None, model: Optional[EarthquakeListModel] = None
) -> EarthquakeListModel:
    """
    Load earthquakes from url into the list model

    Args:
        url: Absolute query URL
        open_position: 1-based position of an earthquake to open in the browser
        model: List model to fill (a new one if not provided)

    Returns:
        EarthquakeListModel: The filled model
    """
    model = model if model is not None else EarthquakeListModel()

    with EarthquakeLoader() as loader:
        loader.load_into(url, model).result()

    print(render(model))

    if open_position is not None:
        if 1 <= open_position <= len(model):
            model.open_detail(open_position - 1)
        else:
            print(f"No earthquake at position {open_position}", file=sys.stderr)

    return model


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    import argparse

    parser = argparse.ArgumentParser(description="Recent earthquakes from USGS")
    parser.add_argument("--url", help="Full query URL (overrides the query options)")
    parser.add_argument(
        "--min-magnitude",
        type=float,
        help=f"Smallest magnitude to include (default {DEFAULT_MIN_MAGNITUDE})",
    )
    parser.add_argument(
        "--limit", type=int, help=f"Maximum number of earthquakes (default {DEFAULT_LIMIT})"
    )
    parser.add_argument(
        "--open",
        dest="open_position",
        type=int,
        metavar="N",
        help="Open the detail page of the N-th earthquake in the browser",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )

    args = parser.parse_args(argv)

    # Setup logging
    log_level = "DEBUG" if args.verbose else setting("log_level", "INFO")
    setup_logging(log_level, log_file=setting("log_file"))

    url = resolve_request_url(args.url, args.min_magnitude, args.limit)
    run(url, open_position=args.open_position)
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Data Transformers - Feed Parsing

Pure functions that turn the USGS GeoJSON feed text into earthquake records.

Only four values of each feature are read, all from its "properties" object:
mag, place, time and url. Everything else in the feed is ignored.

Failure policy:
- empty input is not parsed at all
- a feed that is not a JSON object with a "features" array yields no records
- a feature with a missing or mistyped value stops the parse; the records
  built before it are kept
"""

import json
import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

import polars as pl

from quakereport.coreutils.errors import MalformedResponse
from .schemas import EarthquakeRecord, RECORD_FRAME_SCHEMA
import logging

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParseResult:
    """Records parsed from one feed, and the failure that stopped the parse"""

    records: Tuple[EarthquakeRecord, ...] = ()
    error: Optional[MalformedResponse] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_earthquakes(json_text: Optional[str]) -> ParseResult:
    """
    Parse feed text into earthquake records

    Args:
        json_text: Raw response body

    Returns:
        ParseResult: Records in feature order; error set if the parse was abandoned
    """
    if not json_text:
        return ParseResult()

    try:
        features = _features_from_text(json_text)
    except MalformedResponse as e:
        return ParseResult(error=e)

    earthquakes: List[EarthquakeRecord] = []
    for index, feature in enumerate(features):
        try:
            earthquakes.append(record_from_feature(feature, index))
        except MalformedResponse as e:
            return ParseResult(records=tuple(earthquakes), error=e)

    return ParseResult(records=tuple(earthquakes))


def extract_records(json_text: Optional[str]) -> Optional[List[EarthquakeRecord]]:
    """
    Return the earthquake records built from the feed text

    Args:
        json_text: Raw response body

    Returns:
        None for empty input, otherwise the records parsed before any failure
    """
    if not json_text:
        return None

    result = parse_earthquakes(json_text)
    if not result.ok:
        logger.error(f"❌ Problem parsing the earthquake JSON results: {result.error}")
        if result.records:
            logger.warning(f"Keeping {len(result.records)} records parsed before the failure")

    logger.info(f"Parsed {len(result.records)} earthquake records")
    return list(result.records)


def record_from_feature(feature: Any, index: int = 0) -> EarthquakeRecord:
    """
    Build one record from a feed feature

    Raises:
        MalformedResponse: If the properties object or one of its values is missing or mistyped
    """
    if not isinstance(feature, dict):
        raise MalformedResponse("feature is not an object", index)

    properties = feature.get("properties")
    if not isinstance(properties, dict):
        raise MalformedResponse("missing 'properties' object", index)

    return EarthquakeRecord(
        magnitude=_get_double(properties, "mag", index),
        location=_get_string(properties, "place", index),
        time_epoch_millis=_get_long(properties, "time", index),
        detail_url=_get_string(properties, "url", index),
    )


def records_to_frame(records: Iterable[EarthquakeRecord]) -> pl.DataFrame:
    """
    Convert records to a DataFrame, preserving order

    Returns:
        pl.DataFrame: One row per record with RECORD_FRAME_SCHEMA
    """
    rows = [
        {
            "magnitude": record.magnitude,
            "location": record.location,
            "time_epoch_millis": record.time_epoch_millis,
            "detail_url": record.detail_url,
        }
        for record in records
    ]
    return pl.DataFrame(rows, schema=RECORD_FRAME_SCHEMA)


def _features_from_text(json_text: str) -> List[Any]:
    try:
        document = json.loads(json_text)
    except (ValueError, RecursionError) as e:
        raise MalformedResponse(f"invalid JSON: {e}") from e

    if not isinstance(document, dict):
        raise MalformedResponse("top-level value is not an object")

    features = document.get("features")
    if not isinstance(features, list):
        raise MalformedResponse("missing 'features' array")

    return features


def _require(properties: Dict[str, Any], key: str, index: int) -> Any:
    if key not in properties:
        raise MalformedResponse(f"no value for '{key}'", index)
    value = properties[key]
    if value is None:
        raise MalformedResponse(f"'{key}' is null", index)
    return value


def _get_double(properties: Dict[str, Any], key: str, index: int) -> float:
    value = _require(properties, key, index)

    # bool is an int subclass
    if isinstance(value, bool):
        raise MalformedResponse(f"'{key}' is not a number: {value!r}", index)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            pass

    raise MalformedResponse(f"'{key}' is not a number: {value!r}", index)


def _get_long(properties: Dict[str, Any], key: str, index: int) -> int:
    value = _require(properties, key, index)

    if isinstance(value, bool):
        raise MalformedResponse(f"'{key}' is not an integer: {value!r}", index)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            pass

    raise MalformedResponse(f"'{key}' is not an integer: {value!r}", index)


def _get_string(properties: Dict[str, Any], key: str, index: int) -> str:
    value = _require(properties, key, index)

    if not isinstance(value, str):
        raise MalformedResponse(f"'{key}' is not a string: {value!r}", index)
    return value

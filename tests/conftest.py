"""Shared feed samples for the pipeline tests"""

import json

import pytest


SINGLE_FEATURE_JSON = (
    '{"features":[{"properties":{"mag":6.5,"place":"10km SW of Testville",'
    '"time":1609459200000,"url":"https://example.com/eq/1"}}]}'
)


def _feature(index: int, **overrides) -> dict:
    properties = {
        "mag": 6.0 + index / 10,
        "place": f"{index + 1}km N of Sampletown",
        "time": 1609459200000 + index * 60_000,
        "url": f"https://earthquake.usgs.gov/earthquakes/eventpage/us{index:04d}",
        "magType": "mww",
        "tsunami": 0,
    }
    properties.update(overrides)
    return {
        "type": "Feature",
        "id": f"us{index:04d}",
        "properties": properties,
        "geometry": {"type": "Point", "coordinates": [142.1, 38.3, 10.0]},
    }


@pytest.fixture
def single_feature_json() -> str:
    return SINGLE_FEATURE_JSON


@pytest.fixture
def make_feed():
    """Build a GeoJSON feed with count realistic features"""

    def _make(count: int) -> str:
        features = [_feature(i) for i in range(count)]
        return json.dumps(
            {"type": "FeatureCollection", "metadata": {"count": count}, "features": features}
        )

    return _make

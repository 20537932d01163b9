"""
Quake Report - recent earthquakes from the USGS event feed

Fetches the USGS FDSN event query as GeoJSON, parses each feature into an
immutable EarthquakeRecord, and hands the ordered list to a display model.
"""

__version__ = "1.0.0"

"""Length and area labels for measured geometries.

Geometries live in the map's planar frame; measurements are geodesic on the
WGS84 ellipsoid.
"""

from __future__ import annotations

import math

import shapely
from pyproj import Geod
from shapely.geometry import LineString, Polygon

from trackmap.surface.projection import (
    DEFAULT_PROJECTION,
    GEOGRAPHIC_CRS,
    get_transformer,
)

GEOD = Geod(ellps="WGS84")

_KM_THRESHOLD_M = 100.0
_KM2_THRESHOLD_M2 = 10_000.0


def _round2(value: float) -> float:
    """Round half-up to two decimals."""
    return math.floor(value * 100 + 0.5) / 100


def _format_number(value: float) -> str:
    """Print *value* with no trailing zeros (``2.50`` → ``'2.5'``)."""
    if value == int(value):
        return str(int(value))
    return str(value)


def _to_lonlat(geometry, projection: str):
    to_geo = get_transformer(projection, GEOGRAPHIC_CRS)
    return shapely.transform(geometry, to_geo.transform, interleaved=False)


# ---------------------------------------------------------------------------
# Measurements
# ---------------------------------------------------------------------------


def geodesic_length(line: LineString, projection: str = DEFAULT_PROJECTION) -> float:
    """Return the geodesic length of *line* in metres."""
    return GEOD.geometry_length(_to_lonlat(line, projection))


def geodesic_area(polygon: Polygon, projection: str = DEFAULT_PROJECTION) -> float:
    """Return the geodesic area of *polygon* in square metres (always >= 0)."""
    area, _ = GEOD.geometry_area_perimeter(_to_lonlat(polygon, projection))
    return abs(area)


# ---------------------------------------------------------------------------
# Labels
# ---------------------------------------------------------------------------


def length_label(meters: float) -> str:
    """Format a length in metres.

    Examples
    --------
    >>> length_label(45.678)
    '45.68 m'
    >>> length_label(2500)
    '2.5 km'
    """
    if meters > _KM_THRESHOLD_M:
        return f"{_format_number(_round2(meters / 1000))} km"
    return f"{_format_number(_round2(meters))} m"


def area_label(square_meters: float) -> str:
    """Format an area in square metres.

    Examples
    --------
    >>> area_label(9999)
    '9999 m²'
    >>> area_label(250000)
    '0.25 km²'
    """
    if square_meters > _KM2_THRESHOLD_M2:
        return f"{_format_number(_round2(square_meters / 1_000_000))} km²"
    return f"{_format_number(_round2(square_meters))} m²"


def format_length(line: LineString, projection: str = DEFAULT_PROJECTION) -> str:
    """Return the geodesic length label of *line*, e.g. ``'12.5 m'``."""
    return length_label(geodesic_length(line, projection))


def format_area(polygon: Polygon, projection: str = DEFAULT_PROJECTION) -> str:
    """Return the geodesic area label of *polygon*, e.g. ``'0.25 km²'``."""
    return area_label(geodesic_area(polygon, projection))

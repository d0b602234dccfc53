"""In-memory map surface: feature store, marker overlays and projection.

Public API
----------
Feature         - geometry + properties drawn on a vector layer
FeatureStore    - shared store of committed features
MarkerOverlay   - screen-anchored marker positioned by projected coordinate
MapSurface      - projection + overlays + render bookkeeping
get_transformer - cached pyproj transformer between two CRS
"""

from trackmap.surface.map import FeatureStore, MapSurface
from trackmap.surface.models import Feature, MarkerOverlay
from trackmap.surface.projection import get_transformer

__all__ = [
    "Feature",
    "FeatureStore",
    "MapSurface",
    "MarkerOverlay",
    "get_transformer",
]

"""Cached pyproj transformers between the geographic and map frames."""

from __future__ import annotations

from functools import lru_cache

from pyproj import Transformer

GEOGRAPHIC_CRS = "EPSG:4326"
DEFAULT_PROJECTION = "EPSG:3857"


@lru_cache(maxsize=16)
def get_transformer(source_crs: str, target_crs: str) -> Transformer:
    """Return a lon/lat-ordered transformer from *source_crs* to *target_crs*."""
    return Transformer.from_crs(source_crs, target_crs, always_xy=True)

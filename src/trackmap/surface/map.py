"""MapSurface — the rendering collaborator shared by measurement and replay."""

from __future__ import annotations

import logging

from trackmap.surface.models import Feature, MarkerOverlay
from trackmap.surface.projection import (
    DEFAULT_PROJECTION,
    GEOGRAPHIC_CRS,
    get_transformer,
)

_logger = logging.getLogger(__name__)


class FeatureStore:
    """Ordered store of committed features (the measurement vector layer).

    ``revision`` increases on every mutation so renderers can tell when the
    layer changed.
    """

    def __init__(self) -> None:
        self._features: list[Feature] = []
        self.revision = 0

    def __len__(self) -> int:
        return len(self._features)

    def features(self) -> list[Feature]:
        """Return a copy of the committed features, oldest first."""
        return list(self._features)

    def add(self, feature: Feature) -> None:
        self._features.append(feature)
        self.revision += 1

    def remove(self, feature: Feature) -> None:
        """Remove *feature*; raises ``ValueError`` if it is not stored."""
        self._features.remove(feature)
        self.revision += 1

    def clear(self) -> None:
        self._features.clear()
        self.revision += 1

    def changed(self) -> None:
        """Mark a stored feature's geometry as edited in place."""
        self.revision += 1


class MapSurface:
    """A 2-D map surface with a planar reference frame.

    Parameters
    ----------
    projection:
        CRS of the planar frame.  Default Web Mercator, as used by tiled maps.
    center:
        Initial view centre as ``(longitude, latitude)``.
    zoom:
        Initial zoom level.
    """

    def __init__(
        self,
        projection: str = DEFAULT_PROJECTION,
        center: tuple[float, float] = (-74.006, 40.712),
        zoom: float = 7,
    ) -> None:
        self.projection = projection
        self.zoom = zoom
        self.store = FeatureStore()
        self._overlays: dict[str, MarkerOverlay] = {}
        self._to_map = get_transformer(GEOGRAPHIC_CRS, projection)
        self._to_geo = get_transformer(projection, GEOGRAPHIC_CRS)
        self.center = self.from_lonlat(*center)
        self.render_count = 0

    # ------------------------------------------------------------------
    # Projection
    # ------------------------------------------------------------------

    def from_lonlat(self, longitude: float, latitude: float) -> tuple[float, float]:
        """Project a geographic coordinate into the surface frame."""
        x, y = self._to_map.transform(longitude, latitude)
        return (x, y)

    def to_lonlat(self, x: float, y: float) -> tuple[float, float]:
        """Inverse of :meth:`from_lonlat`."""
        lon, lat = self._to_geo.transform(x, y)
        return (lon, lat)

    # ------------------------------------------------------------------
    # Overlays
    # ------------------------------------------------------------------

    @property
    def overlays(self) -> list[MarkerOverlay]:
        return list(self._overlays.values())

    def add_overlay(self, overlay_id: str) -> MarkerOverlay:
        """Create and register an overlay; ``ValueError`` if the id is taken."""
        if overlay_id in self._overlays:
            raise ValueError(f"Overlay {overlay_id!r} already exists")
        overlay = MarkerOverlay(overlay_id=overlay_id)
        self._overlays[overlay_id] = overlay
        _logger.debug("Overlay %s added", overlay_id)
        return overlay

    def render(self) -> None:
        """Request a repaint of layers and overlays."""
        self.render_count += 1

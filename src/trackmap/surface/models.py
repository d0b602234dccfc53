"""Surface data structures."""

from __future__ import annotations

from dataclasses import dataclass, field

from shapely.geometry.base import BaseGeometry


@dataclass
class Feature:
    """A geometry drawn on a vector layer.

    Coordinates are in the surface's planar frame (metres in EPSG:3857).
    """

    geometry: BaseGeometry
    properties: dict = field(default_factory=dict)

    @property
    def geometry_type(self) -> str:
        """Type tag: ``'Polygon'``, ``'LineString'`` or ``'Point'``."""
        return self.geometry.geom_type


@dataclass
class MarkerOverlay:
    """A marker element anchored at a projected coordinate.

    Created once per vehicle and repositioned in place on every replay tick.
    """

    overlay_id: str
    position: tuple[float, float] | None = None
    moves: int = field(default=0, repr=False)

    def set_position(self, position: tuple[float, float]) -> None:
        self.position = position
        self.moves += 1

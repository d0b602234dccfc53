"""Drawing primitive and modify session."""

from __future__ import annotations

from shapely.geometry import LineString, Point, Polygon

from trackmap.measure.models import DRAW_TYPES, LINE_STRING, POLYGON
from trackmap.surface.models import Feature

MIN_VERTICES: dict[str, int] = {LINE_STRING: 2, POLYGON: 3}


def build_geometry(draw_type: str, coords: list[tuple[float, float]]):
    """Build the sketch geometry for *coords*.

    A polygon with fewer than three coordinates is sketched as a line and a
    single coordinate as a point, as a user sees it while clicking.
    """
    if draw_type == POLYGON and len(coords) >= 3:
        return Polygon(coords)
    if len(coords) >= 2:
        return LineString(coords)
    return Point(coords[0])


class DrawPrimitive:
    """Click-to-add-vertex drawing of a polygon or line.

    The first click emits ``drawstart`` with the sketch feature; :meth:`finish`
    emits ``drawend`` with the completed feature.  Minimum vertex counts are
    enforced here, so geometries handed to listeners are always well formed.

    Parameters
    ----------
    draw_type:
        ``'Polygon'`` or ``'LineString'``.
    on_drawstart, on_drawend:
        Callables receiving the :class:`~trackmap.surface.models.Feature`.
    """

    def __init__(self, draw_type: str, on_drawstart=None, on_drawend=None) -> None:
        if draw_type not in DRAW_TYPES:
            raise ValueError(f"Unsupported draw type: {draw_type!r}")
        self.draw_type = draw_type
        self._on_drawstart = on_drawstart
        self._on_drawend = on_drawend
        self._vertices: list[tuple[float, float]] = []
        self._cursor: tuple[float, float] | None = None
        self._feature: Feature | None = None

    @property
    def drawing(self) -> bool:
        return bool(self._vertices)

    @property
    def vertex_count(self) -> int:
        return len(self._vertices)

    def move(self, coordinate) -> None:
        """Move the cursor; the sketch follows it while drawing."""
        self._cursor = (float(coordinate[0]), float(coordinate[1]))
        self._update_sketch()

    def click(self, coordinate) -> None:
        """Add a vertex at *coordinate*."""
        vertex = (float(coordinate[0]), float(coordinate[1]))
        self._cursor = vertex
        self._vertices.append(vertex)
        if len(self._vertices) == 1:
            self._feature = Feature(geometry=Point(vertex))
            if self._on_drawstart is not None:
                self._on_drawstart(self._feature)
        else:
            self._update_sketch()

    def finish(self) -> Feature:
        """Complete the drawing and emit ``drawend``.

        Raises:
            ValueError: If fewer than the minimum vertices were placed.
        """
        needed = MIN_VERTICES[self.draw_type]
        if len(self._vertices) < needed:
            raise ValueError(
                f"A {self.draw_type} needs at least {needed} vertices, "
                f"got {len(self._vertices)}"
            )
        feature = self._feature
        feature.geometry = build_geometry(self.draw_type, self._vertices)
        self._reset()
        if self._on_drawend is not None:
            self._on_drawend(feature)
        return feature

    def abort(self) -> None:
        """Drop the sketch without emitting ``drawend``."""
        self._reset()

    def sketch(self) -> list[Feature]:
        """Return the sketch features: the shape in progress and the cursor."""
        features: list[Feature] = []
        if self._feature is not None and self._feature.geometry.geom_type != "Point":
            features.append(self._feature)
        if self._cursor is not None:
            features.append(Feature(geometry=Point(self._cursor)))
        return features

    def _sketch_coords(self) -> list[tuple[float, float]]:
        coords = list(self._vertices)
        if self._cursor is not None and coords and coords[-1] != self._cursor:
            coords.append(self._cursor)
        return coords

    def _update_sketch(self) -> None:
        if self._feature is not None:
            self._feature.geometry = build_geometry(self.draw_type, self._sketch_coords())

    def _reset(self) -> None:
        self._vertices = []
        self._feature = None


class ModifySession:
    """Drags vertices of features already committed to the shared store."""

    def __init__(self, store) -> None:
        self._store = store
        self.active = True

    def set_active(self, active: bool) -> None:
        self.active = active

    def move_vertex(self, feature: Feature, index: int, coordinate) -> Feature:
        """Move vertex *index* of *feature* to *coordinate*.

        Polygon indices address the ring without its closing point.

        Raises:
            RuntimeError: If the session is disabled (a draw is in progress).
            ValueError: If *feature* is not in the store.
            IndexError: If *index* is out of range.
        """
        if not self.active:
            raise RuntimeError("Modify session is not active")
        if not any(f is feature for f in self._store.features()):
            raise ValueError("Feature is not in the store")

        geometry = feature.geometry
        if geometry.geom_type == POLYGON:
            coords = list(geometry.exterior.coords)[:-1]
        else:
            coords = list(geometry.coords)
        if not 0 <= index < len(coords):
            raise IndexError(f"Vertex index {index} out of range")
        coords[index] = (float(coordinate[0]), float(coordinate[1]))

        feature.geometry = build_geometry(geometry.geom_type, coords)
        self._store.changed()
        return feature

"""StyleResolver — decides which style layers a measured feature gets."""

from __future__ import annotations

from shapely.geometry import LineString

from trackmap.measure.formatter import format_area, format_length
from trackmap.measure.models import LINE_STRING, POLYGON, Style, TextStyle
from trackmap.surface.projection import DEFAULT_PROJECTION


def base_style() -> Style:
    return Style(
        kind="base",
        fill="rgba(255, 255, 255, 0.2)",
        stroke="rgba(0, 0, 0, 0.5)",
        line_dash=(10, 10),
        point_radius=5,
    )


def label_style() -> Style:
    return Style(
        kind="label",
        text=TextStyle(offset_y=-15),
        fill="rgba(0, 0, 0, 0.7)",
    )


def tip_style() -> Style:
    return Style(
        kind="tip",
        text=TextStyle(
            font="12px Calibri,sans-serif",
            background="rgba(0, 0, 0, 0.4)",
            padding=(2, 2, 2, 2),
            text_align="left",
            text_baseline="middle",
            offset_x=15,
        ),
    )


def segment_style() -> Style:
    return Style(
        kind="segment",
        text=TextStyle(
            font="12px Calibri,sans-serif",
            background="rgba(0, 0, 0, 0.4)",
            padding=(2, 2, 2, 2),
            offset_y=-12,
        ),
        fill="rgba(0, 0, 0, 0.4)",
    )


def modify_style() -> Style:
    return Style(
        kind="modify",
        text=TextStyle(
            text="Drag to modify",
            font="12px Calibri,sans-serif",
            background="rgba(0, 0, 0, 0.7)",
            padding=(2, 2, 2, 2),
            text_align="left",
            offset_x=15,
        ),
        fill="rgba(0, 0, 0, 0.4)",
        stroke="rgba(0, 0, 0, 0.7)",
        point_radius=5,
    )


def _outline(geometry) -> LineString | None:
    """Return the line whose segments get labels, or None."""
    if geometry.geom_type == POLYGON:
        return LineString(geometry.exterior.coords)
    if geometry.geom_type == LINE_STRING:
        return geometry
    return None


class StyleResolver:
    """Produces the ordered style layers for a feature, later entries on top.

    One resolver exists per map.  It owns the shared label/tip/modify styles
    and a pool of segment styles that are updated in place, so repeated
    resolution while the pointer moves does not allocate a style per segment
    per frame.

    Parameters
    ----------
    store:
        The shared :class:`~trackmap.surface.map.FeatureStore`.  The cursor
        tooltip is suppressed once it holds a committed feature.
    modify:
        The :class:`~trackmap.measure.draw.ModifySession`; the modify hint is
        only shown while it is active.
    projection:
        CRS of feature coordinates.
    """

    def __init__(self, store, modify, projection: str = DEFAULT_PROJECTION) -> None:
        self._store = store
        self._modify = modify
        self._projection = projection

        self.base = base_style()
        self.label = label_style()
        self.tip = tip_style()
        self.modify_hint = modify_style()
        self._segment_template = segment_style()
        self._segment_pool: list[Style] = []

        self.tip_point: tuple[float, float] | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def pool_size(self) -> int:
        return len(self._segment_pool)

    def resolve(
        self,
        feature,
        show_segments: bool = False,
        draw_type: str | None = None,
        tip: str | None = None,
    ) -> list[Style]:
        """Return the style layers for *feature*.

        Args:
            feature: A :class:`~trackmap.surface.models.Feature`.
            show_segments: Label every segment with its length.
            draw_type: The active draw type, or None for committed features.
                The summary label is only drawn for matching geometries.
            tip: Tooltip text for the live draw cursor.
        """
        geometry = feature.geometry
        geom_type = geometry.geom_type
        styles = [self.base]

        line = _outline(geometry)
        if show_segments and line is not None:
            styles.extend(self._segment_styles(line))

        if draw_type is None or draw_type == geom_type:
            if geom_type == POLYGON:
                point = geometry.representative_point()
                self.label.anchor = (point.x, point.y)
                self.label.text.text = format_area(geometry, self._projection)
                styles.append(self.label)
            elif geom_type == LINE_STRING:
                self.label.anchor = tuple(geometry.coords[-1])
                self.label.text.text = format_length(geometry, self._projection)
                styles.append(self.label)

        if tip and geom_type == "Point":
            self.tip_point = (geometry.x, geometry.y)
            if not len(self._store):
                self.tip.anchor = self.tip_point
                self.tip.text.text = tip
                styles.append(self.tip)

        return styles

    def anchor_modify_hint(self, point: tuple[float, float] | None) -> None:
        self.modify_hint.anchor = point

    def clear_modify_hint(self) -> None:
        self.modify_hint.anchor = None

    def modify_styles(self) -> list[Style]:
        """Styles drawn by the modify session's own overlay."""
        if self._modify.active and self.modify_hint.anchor is not None:
            return [self.modify_hint]
        return []

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _segment_styles(self, line: LineString) -> list[Style]:
        coords = list(line.coords)
        styles: list[Style] = []
        for i, (a, b) in enumerate(zip(coords, coords[1:])):
            if i >= len(self._segment_pool):
                self._segment_pool.append(self._segment_template.clone())
            style = self._segment_pool[i]
            style.anchor = ((a[0] + b[0]) / 2, (a[1] + b[1]) / 2)
            style.text.text = format_length(LineString([a, b]), self._projection)
            styles.append(style)
        return styles

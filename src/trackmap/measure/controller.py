"""MeasurementController — the draw → label → modify interaction cycle."""

from __future__ import annotations

import logging

from trackmap.measure.draw import DrawPrimitive, ModifySession
from trackmap.measure.models import (
    DRAW_TYPES,
    POLYGON,
    SESSION_ACTIVE,
    SESSION_FINISHED,
    DrawSession,
    Style,
)
from trackmap.measure.styles import StyleResolver

_logger = logging.getLogger(__name__)

IDLE = "idle"
DRAWING = "drawing"

IDLE_TIP = "Click to start measuring"


def active_tip(draw_type: str) -> str:
    shape = "polygon" if draw_type == POLYGON else "line"
    return f"Click to continue drawing the {shape}"


class MeasurementController:
    """Owns the draw and modify sessions of one map.

    ``IDLE``: no draw in progress, modify enabled.  ``DRAWING``: a draw
    session was started or is active, modify disabled.  Finishing a shape
    commits it to the surface's store and returns to ``IDLE``; the draw
    primitive stays registered so the next click starts a new shape of the
    same type.

    Parameters
    ----------
    surface:
        The :class:`~trackmap.surface.map.MapSurface` holding the shared store.
    show_segments:
        Label every segment with its length.
    clear_previous:
        Clear the store when a new shape is started.
    """

    def __init__(
        self,
        surface,
        show_segments: bool = True,
        clear_previous: bool = False,
    ) -> None:
        self._store = surface.store
        self.modify = ModifySession(self._store)
        self.resolver = StyleResolver(self._store, self.modify, surface.projection)
        self.show_segments = show_segments
        self.clear_previous = clear_previous

        self._session: DrawSession | None = None
        self._draw: DrawPrimitive | None = None
        self._clear_hint_on_move = False

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> str:
        if self._session is not None and self._session.state != SESSION_FINISHED:
            return DRAWING
        return IDLE

    @property
    def session(self) -> DrawSession | None:
        return self._session

    @property
    def draw(self) -> DrawPrimitive | None:
        return self._draw

    @property
    def tip(self) -> str:
        return self._session.tip if self._session is not None else IDLE_TIP

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def start_draw(self, draw_type: str) -> DrawPrimitive:
        """Begin measuring a ``'Polygon'`` or ``'LineString'``.

        Any draw already in progress is discarded without touching the store.
        """
        if draw_type not in DRAW_TYPES:
            raise ValueError(f"Unsupported draw type: {draw_type!r}")
        if self._draw is not None:
            self._draw.abort()
            _logger.debug("Replacing %s draw session", self._draw.draw_type)

        self.modify.set_active(False)
        self._session = DrawSession(draw_type=draw_type, tip=IDLE_TIP, store=self._store)
        self._draw = DrawPrimitive(
            draw_type,
            on_drawstart=self.handle_drawstart,
            on_drawend=self.handle_drawend,
        )
        return self._draw

    def stop_draw(self) -> None:
        """Remove the draw primitive and hand control back to modify."""
        if self._draw is not None:
            self._draw.abort()
        self._draw = None
        self._session = None
        self.modify.set_active(True)

    def set_show_segments(self, show: bool) -> None:
        self.show_segments = show

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def handle_drawstart(self, feature) -> None:
        session = self._session
        if session is None:
            _logger.debug("drawstart without a draw session ignored")
            return
        if self.clear_previous:
            self._store.clear()
        self.modify.set_active(False)
        session.state = SESSION_ACTIVE
        session.sketch = feature
        session.tip = active_tip(session.draw_type)

    def handle_drawend(self, feature) -> None:
        session = self._session
        if session is None:
            _logger.debug("drawend without a draw session ignored")
            return
        self._store.add(feature)

        anchor = self.resolver.tip_point
        if anchor is None:
            anchor = _last_coordinate(feature.geometry)
        self.resolver.anchor_modify_hint(anchor)
        self.modify.set_active(True)
        self._clear_hint_on_move = True

        session.state = SESSION_FINISHED
        session.sketch = None
        session.tip = IDLE_TIP
        _logger.info(
            "Committed %s measurement (%d in store)", feature.geometry_type, len(self._store)
        )

    def handle_pointermove(self, coordinate) -> None:
        """Pointer moved over the map: hide a pending modify hint, move the sketch."""
        if self._clear_hint_on_move:
            self.resolver.clear_modify_hint()
            self._clear_hint_on_move = False
        if self._draw is not None:
            self._draw.move(coordinate)

    # ------------------------------------------------------------------
    # Styling
    # ------------------------------------------------------------------

    def sketch_styles(self, feature) -> list[Style]:
        """Styles for a feature of the draw overlay (shape in progress or cursor)."""
        session = self._session
        if session is None:
            return self.resolver.resolve(feature, self.show_segments)
        return self.resolver.resolve(
            feature, self.show_segments, session.draw_type, session.tip
        )

    def layer_styles(self, feature) -> list[Style]:
        """Styles for a committed feature of the measurement layer."""
        return self.resolver.resolve(feature, self.show_segments)


def _last_coordinate(geometry) -> tuple[float, float]:
    if geometry.geom_type == POLYGON:
        coords = geometry.exterior.coords[-2]
    else:
        coords = geometry.coords[-1]
    return (coords[0], coords[1])

"""Measurement data structures: draw types, session states and styles."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field

from trackmap.surface.map import FeatureStore
from trackmap.surface.models import Feature

POLYGON = "Polygon"
LINE_STRING = "LineString"
DRAW_TYPES = (POLYGON, LINE_STRING)

# DrawSession.state values
SESSION_IDLE = "idle"
SESSION_ACTIVE = "active"
SESSION_FINISHED = "just_finished"


@dataclass
class TextStyle:
    """Text part of a style.  Offsets are in screen pixels."""

    text: str = ""
    font: str = "14px Calibri,sans-serif"
    fill: str = "rgba(255, 255, 255, 1)"
    background: str | None = "rgba(0, 0, 0, 0.7)"
    padding: tuple[int, int, int, int] = (3, 3, 3, 3)
    text_align: str = "center"
    text_baseline: str = "bottom"
    offset_x: int = 0
    offset_y: int = 0


@dataclass
class Style:
    """One visual layer for a feature.

    ``kind`` is one of ``'base'``, ``'segment'``, ``'label'``, ``'tip'`` or
    ``'modify'``.  ``anchor`` overrides the feature geometry when set; the
    base style has no anchor and draws the feature itself.
    """

    kind: str
    anchor: tuple[float, float] | None = None
    text: TextStyle | None = None
    fill: str | None = None
    stroke: str | None = None
    stroke_width: float = 2.0
    line_dash: tuple[int, ...] | None = None
    point_radius: float | None = None

    def clone(self) -> Style:
        return copy.deepcopy(self)

    @property
    def label(self) -> str:
        return self.text.text if self.text is not None else ""


@dataclass
class DrawSession:
    """State of one draw gesture sequence.

    The sketch feature belongs to the session while ``state`` is
    ``'active'``; it moves to the shared store only on drawend.
    """

    draw_type: str
    tip: str
    store: FeatureStore = field(repr=False)
    state: str = SESSION_IDLE
    sketch: Feature | None = None

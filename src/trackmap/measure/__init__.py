"""Interactive measurement: labels, styles and the draw/modify cycle."""

from trackmap.measure.controller import DRAWING, IDLE, MeasurementController
from trackmap.measure.draw import DrawPrimitive, ModifySession
from trackmap.measure.formatter import (
    area_label,
    format_area,
    format_length,
    geodesic_area,
    geodesic_length,
    length_label,
)
from trackmap.measure.models import DrawSession, Style, TextStyle
from trackmap.measure.styles import StyleResolver

__all__ = [
    "DRAWING",
    "DrawPrimitive",
    "DrawSession",
    "IDLE",
    "MeasurementController",
    "ModifySession",
    "Style",
    "StyleResolver",
    "TextStyle",
    "area_label",
    "format_area",
    "format_length",
    "geodesic_area",
    "geodesic_length",
    "length_label",
]

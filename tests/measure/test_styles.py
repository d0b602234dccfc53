"""StyleResolver — style layers, segment pooling, tooltip and modify hint."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from shapely.geometry import LineString, Point, Polygon

from trackmap.measure.styles import StyleResolver
from trackmap.surface.map import FeatureStore
from trackmap.surface.models import Feature


def _resolver(store: FeatureStore | None = None, modify_active: bool = True) -> StyleResolver:
    modify = MagicMock()
    modify.active = modify_active
    return StyleResolver(store if store is not None else FeatureStore(), modify)


def _line(n: int) -> Feature:
    return Feature(geometry=LineString([(i * 10.0, (i % 2) * 10.0) for i in range(n)]))


def _kinds(styles) -> list[str]:
    return [s.kind for s in styles]


# ---------------------------------------------------------------------------
# Segments
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("points", [2, 3, 5, 8])
def test_segment_count_is_points_minus_one(points):
    styles = _resolver().resolve(_line(points), show_segments=True)
    assert _kinds(styles).count("segment") == points - 1


def test_no_segments_when_disabled():
    styles = _resolver().resolve(_line(4), show_segments=False)
    assert "segment" not in _kinds(styles)


def test_point_gets_no_segments():
    styles = _resolver().resolve(Feature(geometry=Point(0, 0)), show_segments=True)
    assert _kinds(styles) == ["base"]


def test_polygon_ring_includes_closing_segment():
    triangle = Feature(geometry=Polygon([(0, 0), (100, 0), (0, 100)]))
    styles = _resolver().resolve(triangle, show_segments=True)
    assert _kinds(styles).count("segment") == 3


def test_segment_label_and_midpoint():
    styles = _resolver().resolve(
        Feature(geometry=LineString([(0, 0), (50, 0)])), show_segments=True
    )
    segment = styles[1]
    assert segment.kind == "segment"
    assert segment.label == "50 m"
    assert segment.anchor == (25.0, 0.0)


def test_segment_styles_reused_by_index():
    resolver = _resolver()
    first = [s for s in resolver.resolve(_line(3), show_segments=True) if s.kind == "segment"]
    second = [s for s in resolver.resolve(_line(5), show_segments=True) if s.kind == "segment"]

    assert second[0] is first[0]
    assert second[1] is first[1]
    assert resolver.pool_size == 4


def test_segment_pool_does_not_shrink():
    resolver = _resolver()
    resolver.resolve(_line(5), show_segments=True)
    styles = [s for s in resolver.resolve(_line(2), show_segments=True) if s.kind == "segment"]
    assert len(styles) == 1
    assert resolver.pool_size == 4


def test_pooled_segments_are_distinct_objects():
    styles = _resolver().resolve(_line(4), show_segments=True)
    segments = [s for s in styles if s.kind == "segment"]
    assert len({id(s) for s in segments}) == 3


# ---------------------------------------------------------------------------
# Summary label
# ---------------------------------------------------------------------------


def test_base_first_label_last():
    styles = _resolver().resolve(_line(3), show_segments=True)
    assert styles[0].kind == "base"
    assert styles[-1].kind == "label"


def test_line_label_anchored_at_last_coordinate():
    feature = Feature(geometry=LineString([(0, 0), (50, 0), (80, 0)]))
    label = _resolver().resolve(feature)[-1]
    assert label.anchor == (80.0, 0.0)
    assert label.label == "80 m"


def test_polygon_label_anchored_inside():
    polygon = Polygon([(0, 0), (1000, 0), (1000, 1000), (0, 1000)])
    label = _resolver().resolve(Feature(geometry=polygon))[-1]
    assert label.kind == "label"
    assert polygon.contains(Point(label.anchor))
    assert label.label == "0.99 km²"


def test_label_suppressed_for_other_draw_type():
    styles = _resolver().resolve(_line(3), draw_type="Polygon")
    assert "label" not in _kinds(styles)


def test_label_kept_for_matching_draw_type():
    styles = _resolver().resolve(_line(3), draw_type="LineString")
    assert "label" in _kinds(styles)


# ---------------------------------------------------------------------------
# Tooltip
# ---------------------------------------------------------------------------


def test_tip_on_cursor_point():
    resolver = _resolver()
    styles = resolver.resolve(Feature(geometry=Point(5, 6)), draw_type="Polygon", tip="hello")
    tip = styles[-1]
    assert tip.kind == "tip"
    assert tip.label == "hello"
    assert tip.anchor == (5.0, 6.0)
    assert tip.text.text_align == "left"
    assert tip.text.offset_x == 15
    assert resolver.tip_point == (5.0, 6.0)


def test_no_tip_once_store_has_feature():
    store = FeatureStore()
    store.add(_line(2))
    styles = _resolver(store).resolve(Feature(geometry=Point(5, 6)), tip="hello")
    assert "tip" not in _kinds(styles)


def test_cursor_point_tracked_while_tip_hidden():
    store = FeatureStore()
    store.add(_line(2))
    resolver = _resolver(store)
    resolver.resolve(Feature(geometry=Point(5, 6)), tip="hello")
    resolver.resolve(Feature(geometry=Point(7, 8)), tip="hello")
    assert resolver.tip_point == (7.0, 8.0)


def test_no_tip_on_line():
    styles = _resolver().resolve(_line(3), tip="hello")
    assert "tip" not in _kinds(styles)


# ---------------------------------------------------------------------------
# Modify hint
# ---------------------------------------------------------------------------


def test_modify_hint_when_anchored_and_active():
    resolver = _resolver()
    resolver.anchor_modify_hint((1.0, 2.0))
    styles = resolver.modify_styles()
    assert len(styles) == 1
    assert styles[0].label == "Drag to modify"
    assert styles[0].anchor == (1.0, 2.0)


def test_modify_hint_hidden_when_cleared_or_inactive():
    resolver = _resolver()
    resolver.anchor_modify_hint((1.0, 2.0))
    resolver.clear_modify_hint()
    assert resolver.modify_styles() == []

    inactive = _resolver(modify_active=False)
    inactive.anchor_modify_hint((1.0, 2.0))
    assert inactive.modify_styles() == []

"""MapSurface, FeatureStore and MarkerOverlay."""

from __future__ import annotations

import pytest
from shapely.geometry import LineString

from trackmap.surface.map import FeatureStore, MapSurface
from trackmap.surface.models import Feature


def test_from_lonlat_origin_is_origin():
    surface = MapSurface()
    x, y = surface.from_lonlat(0.0, 0.0)
    assert x == pytest.approx(0.0, abs=1e-6)
    assert y == pytest.approx(0.0, abs=1e-6)


def test_from_lonlat_one_degree_east():
    surface = MapSurface()
    x, _ = surface.from_lonlat(1.0, 0.0)
    assert x == pytest.approx(111319.49, abs=0.01)


def test_to_lonlat_inverts_from_lonlat():
    surface = MapSurface()
    lon, lat = surface.to_lonlat(*surface.from_lonlat(-74.006, 40.712))
    assert lon == pytest.approx(-74.006)
    assert lat == pytest.approx(40.712)


def test_default_center_is_projected():
    surface = MapSurface()
    assert surface.center == pytest.approx(surface.from_lonlat(-74.006, 40.712))


def test_add_overlay_registers_once():
    surface = MapSurface()
    overlay = surface.add_overlay("marker-a")
    assert surface.overlays == [overlay]
    with pytest.raises(ValueError):
        surface.add_overlay("marker-a")


def test_overlay_set_position_counts_moves():
    overlay = MapSurface().add_overlay("m")
    overlay.set_position((1.0, 2.0))
    overlay.set_position((3.0, 4.0))
    assert overlay.position == (3.0, 4.0)
    assert overlay.moves == 2


def test_render_counts():
    surface = MapSurface()
    surface.render()
    surface.render()
    assert surface.render_count == 2


# ---------------------------------------------------------------------------
# FeatureStore
# ---------------------------------------------------------------------------


def _feature() -> Feature:
    return Feature(geometry=LineString([(0, 0), (1, 1)]))


def test_store_add_and_features_copy():
    store = FeatureStore()
    f = _feature()
    store.add(f)
    features = store.features()
    features.clear()
    assert len(store) == 1
    assert store.features()[0] is f


def test_store_clear_and_remove_bump_revision():
    store = FeatureStore()
    f = _feature()
    store.add(f)
    store.remove(f)
    store.add(_feature())
    store.clear()
    assert len(store) == 0
    assert store.revision == 4


def test_feature_geometry_type():
    assert _feature().geometry_type == "LineString"

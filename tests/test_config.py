"""MapSettings.from_env."""

from __future__ import annotations

import pytest

from trackmap.config import MapSettings


def test_defaults_from_empty_environment():
    settings = MapSettings.from_env({})
    assert settings.serial_numbers == []
    assert settings.tick_ms == 1000
    assert settings.show_segments is True
    assert settings.clear_previous is False
    assert settings.projection == "EPSG:3857"
    assert settings.center == (-74.006, 40.712)
    assert settings.zoom == 7


def test_parses_all_variables():
    settings = MapSettings.from_env(
        {
            "TRACKMAP_SERIAL_NUMBERS": " sn1, sn2 ,,",
            "TRACKMAP_TICK_MS": "500",
            "TRACKMAP_SHOW_SEGMENTS": "off",
            "TRACKMAP_CLEAR_PREVIOUS": "Yes",
            "TRACKMAP_PROJECTION": "EPSG:3395",
            "TRACKMAP_CENTER": "2.35,48.85",
            "TRACKMAP_ZOOM": "12.5",
        }
    )
    assert settings.serial_numbers == ["sn1", "sn2"]
    assert settings.tick_ms == 500
    assert settings.show_segments is False
    assert settings.clear_previous is True
    assert settings.projection == "EPSG:3395"
    assert settings.center == (2.35, 48.85)
    assert settings.zoom == 12.5


@pytest.mark.parametrize(
    "env",
    [
        {"TRACKMAP_SHOW_SEGMENTS": "maybe"},
        {"TRACKMAP_TICK_MS": "fast"},
        {"TRACKMAP_TICK_MS": "0"},
        {"TRACKMAP_CENTER": "1,2,3"},
        {"TRACKMAP_CENTER": "east,north"},
    ],
)
def test_malformed_values_raise(env):
    with pytest.raises(ValueError):
        MapSettings.from_env(env)


def test_reads_os_environ_by_default(monkeypatch):
    monkeypatch.setenv("TRACKMAP_SERIAL_NUMBERS", "abc")
    assert MapSettings.from_env().serial_numbers == ["abc"]

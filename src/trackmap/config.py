"""Runtime settings read from the environment (``.env`` supported)."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def _parse_float(name: str, raw: str) -> float:
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


@dataclass
class MapSettings:
    """Map, measurement and replay settings.

    Parameters
    ----------
    serial_numbers:
        Vehicle ids whose tracks are replayed.
    tick_ms:
        Replay period in milliseconds.
    show_segments:
        Label each segment of a measured shape.
    clear_previous:
        Remove earlier measurements when a new one starts.
    projection:
        CRS of the map's planar frame.
    center:
        Initial view centre ``(longitude, latitude)``; New York by default.
    zoom:
        Initial zoom level.
    """

    serial_numbers: list[str] = field(default_factory=list)
    tick_ms: int = 1000
    show_segments: bool = True
    clear_previous: bool = False
    projection: str = "EPSG:3857"
    center: tuple[float, float] = (-74.006, 40.712)
    zoom: float = 7

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> MapSettings:
        """Build settings from ``TRACKMAP_*`` variables.

        Raises:
            ValueError: If a variable is set to a malformed value.
        """
        env = os.environ if environ is None else environ
        settings = cls()

        serials = env.get("TRACKMAP_SERIAL_NUMBERS", "")
        settings.serial_numbers = [s.strip() for s in serials.split(",") if s.strip()]

        if "TRACKMAP_TICK_MS" in env:
            tick = _parse_float("TRACKMAP_TICK_MS", env["TRACKMAP_TICK_MS"])
            if tick <= 0:
                raise ValueError("TRACKMAP_TICK_MS must be > 0")
            settings.tick_ms = int(tick)
        if "TRACKMAP_SHOW_SEGMENTS" in env:
            settings.show_segments = _parse_bool(
                "TRACKMAP_SHOW_SEGMENTS", env["TRACKMAP_SHOW_SEGMENTS"]
            )
        if "TRACKMAP_CLEAR_PREVIOUS" in env:
            settings.clear_previous = _parse_bool(
                "TRACKMAP_CLEAR_PREVIOUS", env["TRACKMAP_CLEAR_PREVIOUS"]
            )
        if env.get("TRACKMAP_PROJECTION"):
            settings.projection = env["TRACKMAP_PROJECTION"]
        if "TRACKMAP_CENTER" in env:
            parts = env["TRACKMAP_CENTER"].split(",")
            if len(parts) != 2:
                raise ValueError("TRACKMAP_CENTER must be 'lon,lat'")
            settings.center = (
                _parse_float("TRACKMAP_CENTER", parts[0]),
                _parse_float("TRACKMAP_CENTER", parts[1]),
            )
        if "TRACKMAP_ZOOM" in env:
            settings.zoom = _parse_float("TRACKMAP_ZOOM", env["TRACKMAP_ZOOM"])

        return settings

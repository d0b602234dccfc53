"""TrackReplayEngine — replays recorded tracks by moving one marker per vehicle."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from trackmap.replay.models import ReplayCursor, TrackSeries
from trackmap.surface.models import MarkerOverlay

_logger = logging.getLogger(__name__)


class TrackReplayEngine:
    """Advances a cursor per vehicle and moves its marker on a fixed period.

    Each period the engine runs :meth:`tick` and then increments every
    tracked cursor by one, whether or not the vehicle had data.  Cursors past
    the end of their series leave the marker at its last position.

    Parameters
    ----------
    surface:
        A :class:`~trackmap.surface.map.MapSurface` providing ``from_lonlat``,
        ``add_overlay`` and ``render``.
    scheduler:
        Timer with ``after(ms, callback)`` / ``after_cancel(handle)``.
    serial_numbers:
        Vehicle ids to replay.
    """

    def __init__(self, surface, scheduler, serial_numbers: Iterable[str]) -> None:
        self._surface = surface
        self._scheduler = scheduler
        self._serials = list(dict.fromkeys(serial_numbers))
        self._cursors = {sn: ReplayCursor(vehicle_id=sn) for sn in self._serials}
        self._dataset: dict[str, TrackSeries] = {}
        self._markers: dict[str, MarkerOverlay] = {}
        self._timer = None
        self._period_ms: int | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def serial_numbers(self) -> list[str]:
        return list(self._serials)

    @property
    def running(self) -> bool:
        return self._timer is not None

    def cursor(self, vehicle_id: str) -> ReplayCursor:
        """Return the cursor of a tracked vehicle; ``KeyError`` if untracked."""
        return self._cursors[vehicle_id]

    def marker(self, vehicle_id: str) -> MarkerOverlay | None:
        """Return the vehicle's marker, or None before it was first positioned."""
        return self._markers.get(vehicle_id)

    def series(self, vehicle_id: str) -> TrackSeries | None:
        return self._dataset.get(vehicle_id)

    def load(self, dataset: Mapping[str, TrackSeries]) -> None:
        """Replace the data set.  Cursor positions are kept."""
        self._dataset = dict(dataset)
        _logger.info(
            "Loaded track data for %d vehicle(s): %s",
            len(self._dataset),
            ", ".join(sorted(self._dataset)),
        )

    def refresh(self, source) -> bool:
        """Load the tracked vehicles from *source*.

        Returns False, keeping the previous data set, if the source fails.
        """
        try:
            dataset = source.fetch(self._serials)
        except Exception as exc:
            _logger.warning("Track data retrieval failed: %s", exc)
            return False
        self.load(dataset)
        return True

    def tick(self) -> int:
        """Move each in-bounds vehicle's marker to its cursor's point.

        Returns the number of markers moved.
        """
        moved = 0
        for sn in self._serials:
            series = self._dataset.get(sn)
            if series is None:
                continue
            index = self._cursors[sn].index
            if not 0 <= index < len(series):
                continue
            point = series[index]
            position = self._surface.from_lonlat(point.longitude, point.latitude)
            self._marker_for(sn).set_position(position)
            moved += 1

        if moved:
            self._surface.render()
        _logger.debug("Replay tick moved %d marker(s)", moved)
        return moved

    def start(self, period_ms: int = 1000) -> None:
        """Tick every *period_ms*.  Restarting cancels the running timer first."""
        if period_ms <= 0:
            raise ValueError("period_ms must be > 0")
        if self._timer is not None:
            self._scheduler.after_cancel(self._timer)
        self._period_ms = period_ms
        self._timer = self._scheduler.after(period_ms, self._on_timer)
        _logger.info("Replay started (%d ms) for %s", period_ms, ", ".join(self._serials))

    def stop(self) -> None:
        """Cancel the periodic tick.  Safe to call when not running."""
        if self._timer is None:
            return
        self._scheduler.after_cancel(self._timer)
        self._timer = None
        self._period_ms = None
        _logger.info("Replay stopped")

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _on_timer(self) -> None:
        try:
            self.tick()
            for cursor in self._cursors.values():
                cursor.index += 1
        finally:
            if self._period_ms is not None:
                self._timer = self._scheduler.after(self._period_ms, self._on_timer)

    def _marker_for(self, vehicle_id: str) -> MarkerOverlay:
        marker = self._markers.get(vehicle_id)
        if marker is None:
            marker = self._surface.add_overlay(f"marker-{vehicle_id}")
            self._markers[vehicle_id] = marker
        return marker

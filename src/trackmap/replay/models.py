"""Track replay data structures."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class TrackPoint:
    """One recorded GPS sample of a vehicle."""

    timestamp_ms: int
    """Sample time in epoch milliseconds."""

    longitude: float
    """Longitude in degrees (WGS84)."""

    latitude: float
    """Latitude in degrees (WGS84)."""


@dataclass(frozen=True)
class TrackSeries:
    """Time-ordered, immutable sequence of :class:`TrackPoint` for one vehicle."""

    points: tuple[TrackPoint, ...]

    def __len__(self) -> int:
        return len(self.points)

    def __getitem__(self, index: int) -> TrackPoint:
        return self.points[index]

    @classmethod
    def from_arrays(
        cls,
        timestamps: Sequence[int],
        longitudes: Sequence[float],
        latitudes: Sequence[float],
    ) -> TrackSeries:
        """Build a series from index-aligned column arrays.

        Raises:
            ValueError: If the arrays differ in length.
        """
        if not len(timestamps) == len(longitudes) == len(latitudes):
            raise ValueError(
                "Track arrays must have equal length "
                f"(time={len(timestamps)}, lon={len(longitudes)}, lat={len(latitudes)})"
            )
        return cls(
            points=tuple(
                TrackPoint(timestamp_ms=int(t), longitude=float(lon), latitude=float(lat))
                for t, lon, lat in zip(timestamps, longitudes, latitudes)
            )
        )


@dataclass
class ReplayCursor:
    """Position of the replay in one vehicle's series.

    ``index`` only ever grows; values past the end of the series are a valid
    idle state in which the marker stays where it last was.
    """

    vehicle_id: str
    index: int = 0

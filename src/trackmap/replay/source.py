"""Track data sources.

A source is any object with ``fetch(serial_numbers) -> dict[str, TrackSeries]``.
Retrieval errors propagate to the caller; the replay engine logs them and
keeps its previous data set.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from trackmap.replay.models import TrackSeries


def dataset_from_columns(columns: Mapping[str, Mapping[str, list]]) -> dict[str, TrackSeries]:
    """Convert ``{serial: {"time": [...], "lon": [...], "lat": [...]}}`` to series.

    Raises:
        ValueError: If a vehicle's columns are missing or differ in length.
    """
    dataset: dict[str, TrackSeries] = {}
    for serial, cols in columns.items():
        missing = [k for k in ("time", "lon", "lat") if k not in cols]
        if missing:
            raise ValueError(f"Vehicle {serial!r} is missing columns: {', '.join(missing)}")
        dataset[str(serial)] = TrackSeries.from_arrays(cols["time"], cols["lon"], cols["lat"])
    return dataset


class StaticTrackSource:
    """Serves an in-memory data set, restricted to the requested vehicles."""

    def __init__(self, dataset: Mapping[str, TrackSeries]) -> None:
        self._dataset = dict(dataset)

    def fetch(self, serial_numbers: Iterable[str]) -> dict[str, TrackSeries]:
        return {sn: self._dataset[sn] for sn in serial_numbers if sn in self._dataset}

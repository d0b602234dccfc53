"""Recorded track replay.

Public API
----------
TrackPoint          - one GPS sample
TrackSeries         - a vehicle's time-ordered samples
ReplayCursor        - replay position per vehicle
TrackReplayEngine   - periodic marker animation
ManualScheduler     - virtual-clock timers
AsyncioScheduler    - timers on an asyncio loop
StaticTrackSource   - in-memory data source
"""

from trackmap.replay.engine import TrackReplayEngine
from trackmap.replay.models import ReplayCursor, TrackPoint, TrackSeries
from trackmap.replay.scheduler import AsyncioScheduler, ManualScheduler
from trackmap.replay.source import StaticTrackSource, dataset_from_columns

__all__ = [
    "AsyncioScheduler",
    "ManualScheduler",
    "ReplayCursor",
    "StaticTrackSource",
    "TrackPoint",
    "TrackReplayEngine",
    "TrackSeries",
    "dataset_from_columns",
]

"""MapService — binds the measurement controller and replay engine to one map."""

from __future__ import annotations

from trackmap.config import MapSettings
from trackmap.measure.controller import MeasurementController
from trackmap.measure.models import Style
from trackmap.replay.engine import TrackReplayEngine
from trackmap.replay.source import dataset_from_columns
from trackmap.surface.map import MapSurface
from trackmap.surface.models import Feature
from trackmap.web.schemas import (
    FeatureRecord,
    MarkerRecord,
    MeasureStateResponse,
    StyleRecord,
)


class MapService:
    """One map: surface, measurement controller and replay engine.

    Coordinates cross the API as ``(lon, lat)``; the core works in the
    surface's planar frame.

    Parameters
    ----------
    settings:
        :class:`~trackmap.config.MapSettings`.
    scheduler:
        Timer used by the replay engine.
    """

    def __init__(self, settings: MapSettings, scheduler) -> None:
        self.settings = settings
        self.surface = MapSurface(settings.projection, settings.center, settings.zoom)
        self.controller = MeasurementController(
            self.surface,
            show_segments=settings.show_segments,
            clear_previous=settings.clear_previous,
        )
        self.engine = TrackReplayEngine(self.surface, scheduler, settings.serial_numbers)

    # ------------------------------------------------------------------
    # Replay
    # ------------------------------------------------------------------

    def start_replay(self) -> None:
        self.engine.start(self.settings.tick_ms)

    def stop_replay(self) -> None:
        self.engine.stop()

    def load_dataset(self, columns: dict) -> list[str]:
        """Load ``{serial: {"time", "lon", "lat"}}`` columns into the engine."""
        dataset = dataset_from_columns(columns)
        self.engine.load(dataset)
        return sorted(dataset)

    def markers(self) -> list[MarkerRecord]:
        return [self.marker(sn) for sn in self.engine.serial_numbers]

    def marker(self, vehicle_id: str) -> MarkerRecord:
        """Raises ``KeyError`` if *vehicle_id* is not replayed."""
        cursor = self.engine.cursor(vehicle_id)
        series = self.engine.series(vehicle_id)
        overlay = self.engine.marker(vehicle_id)
        position = None
        if overlay is not None and overlay.position is not None:
            position = list(self.surface.to_lonlat(*overlay.position))
        return MarkerRecord(
            vehicle_id=vehicle_id,
            index=cursor.index,
            length=len(series) if series is not None else 0,
            position=position,
        )

    # ------------------------------------------------------------------
    # Measurement
    # ------------------------------------------------------------------

    def start_draw(self, draw_type: str) -> None:
        self.controller.start_draw(draw_type)

    def click(self, lon: float, lat: float) -> None:
        self._require_draw().click(self.surface.from_lonlat(lon, lat))

    def move(self, lon: float, lat: float) -> None:
        self.controller.handle_pointermove(self.surface.from_lonlat(lon, lat))

    def finish(self) -> FeatureRecord:
        """Complete the current shape.  ``ValueError`` if it has too few vertices."""
        feature = self._require_draw().finish()
        return self._feature_record(len(self.surface.store) - 1, feature)

    def set_show_segments(self, show: bool) -> None:
        self.controller.set_show_segments(show)

    def clear_features(self) -> None:
        self.surface.store.clear()

    def features(self) -> list[FeatureRecord]:
        return [
            self._feature_record(i, f)
            for i, f in enumerate(self.surface.store.features())
        ]

    def measure_state(self) -> MeasureStateResponse:
        ctl = self.controller
        draw = ctl.draw
        sketch: list[StyleRecord] = []
        if draw is not None:
            for feature in draw.sketch():
                sketch.extend(
                    self._style_record(s) for s in ctl.sketch_styles(feature) if s.kind != "base"
                )
        return MeasureStateResponse(
            state=ctl.state,
            draw_type=draw.draw_type if draw is not None else None,
            tip=ctl.tip,
            modify_active=ctl.modify.active,
            show_segments=ctl.show_segments,
            vertex_count=draw.vertex_count if draw is not None else 0,
            feature_count=len(self.surface.store),
            sketch=sketch,
            modify=[self._style_record(s) for s in ctl.resolver.modify_styles()],
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _require_draw(self):
        draw = self.controller.draw
        if draw is None:
            raise ValueError("No draw session; start one with POST /api/measure/draw")
        return draw

    def _style_record(self, style: Style) -> StyleRecord:
        anchor = None
        if style.anchor is not None:
            anchor = list(self.surface.to_lonlat(*style.anchor))
        return StyleRecord(kind=style.kind, text=style.label, anchor=anchor)

    def _feature_record(self, feature_id: int, feature: Feature) -> FeatureRecord:
        styles = self.controller.layer_styles(feature)
        label = next((s.label for s in styles if s.kind == "label"), "")
        segments = [s.label for s in styles if s.kind == "segment"]
        geometry = feature.geometry
        coords = geometry.exterior.coords if geometry.geom_type == "Polygon" else geometry.coords
        return FeatureRecord(
            id=feature_id,
            type=feature.geometry_type,
            label=label,
            segments=segments,
            coordinates=[list(self.surface.to_lonlat(x, y)) for x, y, *_ in coords],
        )

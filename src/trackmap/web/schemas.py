"""Pydantic request/response schemas for the map API."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str
    version: str


class DrawRequest(BaseModel):
    type: Literal["Polygon", "LineString"]


class PointerRequest(BaseModel):
    lon: float = Field(ge=-180.0, le=180.0)
    lat: float = Field(ge=-85.06, le=85.06)


class SegmentsRequest(BaseModel):
    show: bool


class StyleRecord(BaseModel):
    kind: str
    text: str = ""
    anchor: list[float] | None = None


class FeatureRecord(BaseModel):
    id: int
    type: str
    label: str
    segments: list[str]
    coordinates: list[list[float]]


class MeasureStateResponse(BaseModel):
    state: str
    draw_type: str | None
    tip: str
    modify_active: bool
    show_segments: bool
    vertex_count: int
    feature_count: int
    sketch: list[StyleRecord]
    modify: list[StyleRecord]


class FeaturesResponse(BaseModel):
    features: list[FeatureRecord]


class TrackColumns(BaseModel):
    time: list[int]
    lon: list[float]
    lat: list[float]


class DatasetRequest(BaseModel):
    vehicles: dict[str, TrackColumns]


class DatasetResponse(BaseModel):
    loaded: list[str]


class MarkerRecord(BaseModel):
    vehicle_id: str
    index: int
    length: int
    position: list[float] | None = None


class MarkersResponse(BaseModel):
    running: bool
    markers: list[MarkerRecord]

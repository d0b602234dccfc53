"""FastAPI web application — measurement and replay over HTTP."""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from trackmap.config import MapSettings
from trackmap.replay.scheduler import AsyncioScheduler
from trackmap.web.schemas import (
    DatasetRequest,
    DatasetResponse,
    DrawRequest,
    FeatureRecord,
    FeaturesResponse,
    HealthResponse,
    MarkerRecord,
    MarkersResponse,
    MeasureStateResponse,
    PointerRequest,
    SegmentsRequest,
)
from trackmap.web.service import MapService

load_dotenv()  # loads .env from project root; must run before env vars are consumed

_logger = logging.getLogger(__name__)

VERSION = "0.1.0"

# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

_HERE = Path(__file__).parent


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Handlers are async so they share this loop with the replay timer.
    settings = MapSettings.from_env()
    service = MapService(settings, AsyncioScheduler(asyncio.get_running_loop()))
    app.state.map_service = service
    _logger.info(
        "Map service ready: projection=%s, vehicles=%d",
        settings.projection,
        len(settings.serial_numbers),
    )
    service.start_replay()
    try:
        yield
    finally:
        service.stop_replay()


app = FastAPI(title="Track Map", version=VERSION, lifespan=lifespan)

templates = Jinja2Templates(directory=str(_HERE / "templates"))


def _service(request: Request) -> MapService:
    return request.app.state.map_service


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    return HealthResponse(status="ok", version=VERSION)


@app.get("/", response_class=HTMLResponse)
async def map_page(request: Request) -> HTMLResponse:
    """Render the measurement and replay summary page."""
    svc = _service(request)
    return templates.TemplateResponse(
        request,
        "map.html",
        {
            "center": svc.settings.center,
            "zoom": svc.settings.zoom,
            "state": svc.measure_state(),
            "features": svc.features(),
            "markers": svc.markers(),
        },
    )


@app.post("/api/measure/draw", response_model=MeasureStateResponse)
async def start_draw(req: DrawRequest, request: Request) -> MeasureStateResponse:
    svc = _service(request)
    svc.start_draw(req.type)
    return svc.measure_state()


@app.post("/api/measure/click", response_model=MeasureStateResponse)
async def click(req: PointerRequest, request: Request) -> MeasureStateResponse:
    svc = _service(request)
    try:
        svc.click(req.lon, req.lat)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return svc.measure_state()


@app.post("/api/measure/move", response_model=MeasureStateResponse)
async def move(req: PointerRequest, request: Request) -> MeasureStateResponse:
    svc = _service(request)
    svc.move(req.lon, req.lat)
    return svc.measure_state()


@app.post("/api/measure/finish", response_model=FeatureRecord)
async def finish(request: Request) -> FeatureRecord:
    """Commit the shape being drawn."""
    svc = _service(request)
    try:
        return svc.finish()
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@app.post("/api/measure/segments", response_model=MeasureStateResponse)
async def segments(req: SegmentsRequest, request: Request) -> MeasureStateResponse:
    svc = _service(request)
    svc.set_show_segments(req.show)
    return svc.measure_state()


@app.get("/api/measure/state", response_model=MeasureStateResponse)
async def measure_state(request: Request) -> MeasureStateResponse:
    return _service(request).measure_state()


@app.get("/api/measure/features", response_model=FeaturesResponse)
async def list_features(request: Request) -> FeaturesResponse:
    return FeaturesResponse(features=_service(request).features())


@app.delete("/api/measure/features", response_model=FeaturesResponse)
async def clear_features(request: Request) -> FeaturesResponse:
    svc = _service(request)
    svc.clear_features()
    return FeaturesResponse(features=[])


@app.post("/api/replay/dataset", response_model=DatasetResponse)
async def load_dataset(req: DatasetRequest, request: Request) -> DatasetResponse:
    """Replace the replayed track data."""
    columns = {sn: cols.model_dump() for sn, cols in req.vehicles.items()}
    try:
        loaded = _service(request).load_dataset(columns)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return DatasetResponse(loaded=loaded)


@app.get("/api/replay/markers", response_model=MarkersResponse)
async def list_markers(request: Request) -> MarkersResponse:
    svc = _service(request)
    return MarkersResponse(running=svc.engine.running, markers=svc.markers())


@app.get("/api/replay/markers/{vehicle_id}", response_model=MarkerRecord)
async def get_marker(vehicle_id: str, request: Request) -> MarkerRecord:
    try:
        return _service(request).marker(vehicle_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Vehicle not replayed") from exc

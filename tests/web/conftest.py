"""Shared fixtures for web tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from trackmap.web.app import app

TRACK = {
    "time": [0, 1000, 2000],
    "lon": [-74.00, -73.99, -73.98],
    "lat": [40.70, 40.71, 40.72],
}


@pytest.fixture
def client(monkeypatch):
    """FastAPI test client replaying vehicle ``sn1``; the timer never fires in a test."""
    monkeypatch.setenv("TRACKMAP_SERIAL_NUMBERS", "sn1")
    monkeypatch.setenv("TRACKMAP_TICK_MS", "3600000")
    monkeypatch.delenv("TRACKMAP_CLEAR_PREVIOUS", raising=False)
    monkeypatch.delenv("TRACKMAP_SHOW_SEGMENTS", raising=False)
    with TestClient(app) as c:
        yield c


def map_service(client):
    return client.app.state.map_service


def draw_shape(client, draw_type: str, points: list[tuple[float, float]]) -> dict:
    """Draw and finish a shape through the API; return the committed feature."""
    client.post("/api/measure/draw", json={"type": draw_type})
    for lon, lat in points:
        client.post("/api/measure/click", json={"lon": lon, "lat": lat})
    resp = client.post("/api/measure/finish")
    assert resp.status_code == 200
    return resp.json()

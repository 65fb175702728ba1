"""
EcoKiosk - API Tests
Drives the kiosk through the HTTP event surface.
"""

import time
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from ecokiosk.facts.orchestrator import FactOrchestrator
from ecokiosk.fsm.controller import KioskController
from ecokiosk.main import app
from ecokiosk.routers.kiosk import get_controller
from ecokiosk.state.session import KioskSession, Language

FLOOR = 0.05
DWELL = 0.3


@pytest.fixture
def controller():
    return KioskController(
        orchestrator=FactOrchestrator(AsyncMock(return_value="Great recycling!"), floor_seconds=FLOOR),
        card_read_delay=0.01,
        success_dwell=DWELL,
        session=KioskSession(language=Language.ENG),
    )


@pytest.fixture
def client(controller):
    app.dependency_overrides[get_controller] = lambda: controller
    # context manager keeps one event loop alive across requests, so timers fire
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def send(client, event, **extra):
    resp = client.post("/api/kiosk/events", json={"event": event, **extra})
    assert resp.status_code == 200, resp.text
    return resp.json()


def wait_for_step(client, step, timeout=3.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        state = client.get("/api/kiosk/state").json()
        if state["step"] == step:
            return state
        time.sleep(0.01)
    raise AssertionError(f"kiosk never reached {step}")


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_healthz_not_mounted(client):
    assert client.get("/healthz").status_code == 404


def test_initial_state(client):
    state = client.get("/api/kiosk/state").json()
    assert state["step"] == "welcome"
    assert state["count"] == 0
    assert state["points"] == 0
    assert state["fact_text"] is None
    assert set(state["allowed_events"]) == {"select_language", "start"}
    assert state["labels"]["welcome"] == "Welcome"


def test_select_language_switches_labels(client):
    data = send(client, "select_language", language="ru")
    assert data["accepted"]
    assert data["state"]["language"] == "ru"
    assert data["state"]["labels"]["confirm"] == "Подтвердить"


def test_materials(client):
    materials = {m["material"]: m for m in client.get("/api/kiosk/materials").json()}
    assert materials["plastic"]["rate"] == 10
    assert materials["paper"]["rate"] == 5
    assert materials["paper"]["label"] == "Paper"


def test_illegal_event_not_accepted(client):
    data = send(client, "increment")
    assert not data["accepted"]
    assert data["state"]["step"] == "welcome"
    assert data["state"]["count"] == 0


def test_missing_language(client):
    resp = client.post("/api/kiosk/events", json={"event": "select_language"})
    assert resp.status_code == 422


def test_missing_material(client):
    resp = client.post("/api/kiosk/events", json={"event": "choose_material"})
    assert resp.status_code == 422


def test_unknown_event(client):
    resp = client.post("/api/kiosk/events", json={"event": "teleport"})
    assert resp.status_code == 422


def test_internal_event_rejected(client):
    resp = client.post("/api/kiosk/events", json={"event": "timeout"})
    assert resp.status_code == 422


def test_confirm_at_zero_is_noop(client):
    send(client, "start")
    send(client, "card_detected")
    wait_for_step(client, "select_type")
    send(client, "choose_material", material="plastic")

    data = send(client, "confirm")
    assert not data["accepted"]
    assert data["state"]["step"] == "inserting"


def test_full_flow(client):
    send(client, "select_language", language="eng")
    assert send(client, "start")["state"]["step"] == "scan_card"

    data = send(client, "card_detected")
    assert data["accepted"]
    assert data["state"]["card_read_pending"]
    wait_for_step(client, "select_type")

    assert send(client, "choose_material", material="plastic")["state"]["step"] == "inserting"
    for _ in range(3):
        send(client, "increment")
    data = send(client, "decrement")
    assert data["state"]["count"] == 2
    data = send(client, "increment")
    assert data["state"]["points"] == 30

    data = send(client, "confirm")
    assert data["accepted"]
    assert data["state"]["step"] == "processing"
    assert data["state"]["allowed_events"] == []

    state = wait_for_step(client, "success")
    assert state["count"] == 3
    assert state["points"] == 30
    assert state["fact_text"] == "Great recycling!"

    state = wait_for_step(client, "welcome")
    assert state["count"] == 0
    assert state["fact_text"] is None


def test_cancel_returns_to_welcome(client):
    send(client, "start")
    data = send(client, "cancel")
    assert data["accepted"]
    assert data["state"]["step"] == "welcome"

"""Tests for the FastAPI server endpoints."""

import pytest
from asgi_lifespan import LifespanManager
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from equilibrium.api.middleware import parse_origins, setup_middleware
from equilibrium.api.server import app
from equilibrium.config import get_settings
from equilibrium.engine.state import SignalEngine

_ADA = {
    "name": "Ada",
    "email": "ada@example.com",
    "password": "secret1",
    "confirm_password": "secret1",
}


@pytest.fixture
async def client():
    """Async test client with lifespan (startup / shutdown) fully executed."""
    async with LifespanManager(app) as manager:
        transport = ASGITransport(app=manager.app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            yield c


@pytest.fixture
async def signed_in(client: AsyncClient):
    resp = await client.post("/auth/signup", json=_ADA)
    assert resp.status_code == 201
    return client


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
    assert resp.json()["signed_in"] is False


@pytest.mark.asyncio
async def test_signal_routes_require_session(client: AsyncClient):
    for path in ("/signals", "/derived", "/outline", "/captions", "/dashboard"):
        resp = await client.get(path)
        assert resp.status_code == 401
    resp = await client.put("/signals/steps", json={"value": 10})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_signup_validation_message(client: AsyncClient):
    resp = await client.post("/auth/signup", json={**_ADA, "confirm_password": "other12"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Passwords do not match"


@pytest.mark.asyncio
async def test_signup_starts_default_dashboard(signed_in: AsyncClient):
    resp = await signed_in.get("/auth/session")
    assert resp.json()["signed_in"] is True
    assert resp.json()["session"]["email"] == "ada@example.com"

    resp = await signed_in.get("/dashboard")
    assert resp.status_code == 200
    body = resp.json()
    assert body["signals"] == {"screen_time": 3.2, "steps": 1200, "mood_x": 50.0, "mood_y": 50.0}
    assert body["derived"]["tension_score"] == 51
    assert body["derived"]["vibe_score"] == 50
    assert body["derived"]["intervention"] is None
    assert body["tension_label"] == "Tension Rising"
    assert body["vibe_label"] == "Good Mood"
    assert body["outline_path"].endswith("Z")


@pytest.mark.asyncio
async def test_set_signals_recomputes(signed_in: AsyncClient):
    resp = await signed_in.put("/signals/screen_time", json={"value": 5})
    assert resp.status_code == 200
    resp = await signed_in.put("/signals/steps", json={"value": 50})
    assert resp.json()["intervention"]["type"] == "Digital Paralysis"

    resp = await signed_in.get("/derived")
    assert resp.json()["intervention"]["action"] == "The Shake Out"

    resp = await signed_in.patch("/signals", json={"screen_time": 2, "steps": 6000})
    assert resp.status_code == 200
    assert resp.json()["intervention"] is None

    resp = await signed_in.put("/signals/mood_x", json={"value": 180})
    assert resp.status_code == 200
    resp = await signed_in.get("/signals")
    assert resp.json()["mood_x"] == 100.0


@pytest.mark.asyncio
async def test_unknown_signal_field(signed_in: AsyncClient):
    resp = await signed_in.put("/signals/heart_rate", json={"value": 70})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_outline_and_captions(signed_in: AsyncClient):
    resp = await signed_in.get("/outline")
    body = resp.json()
    assert body["point_count"] == 8
    assert body["vertices"][0] == body["vertices"][-1]

    resp = await signed_in.get("/outline.svg")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("image/svg+xml")
    assert resp.text.startswith("<svg")

    resp = await signed_in.get("/captions")
    assert set(resp.json()) == {"screen_positive", "steps", "screen", "mood"}


@pytest.mark.asyncio
async def test_logout_and_login_reset_signals(signed_in: AsyncClient):
    await signed_in.put("/signals/steps", json={"value": 9000})

    resp = await signed_in.post("/auth/logout")
    assert resp.json() == {"signed_out": True}
    assert (await signed_in.get("/signals")).status_code == 401

    resp = await signed_in.post("/auth/login", json={"email": "ada@example.com", "password": "wrong12"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Incorrect password"

    resp = await signed_in.post("/auth/login", json={"email": "ada@example.com", "password": "secret1"})
    assert resp.status_code == 200
    assert resp.json()["message"] == "Welcome back!"
    assert (await signed_in.get("/signals")).json()["steps"] == 1200


# ── API key gate ──────────────────────────────────────────────


@pytest.fixture
async def keyed_client(monkeypatch):
    monkeypatch.setenv("EQUILIBRIUM_API_SECRET_KEY", "s3cret")
    get_settings.cache_clear()
    async with LifespanManager(app) as manager:
        transport = ASGITransport(app=manager.app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            yield c
    monkeypatch.undo()
    get_settings.cache_clear()


@pytest.mark.asyncio
async def test_api_key_missing_or_wrong(keyed_client: AsyncClient):
    for headers in ({}, {"X-API-Key": "nope"}, {"Authorization": "Bearer nope"}):
        resp = await keyed_client.get("/derived", headers=headers)
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Invalid or missing API key."

    resp = await keyed_client.post("/auth/signup", json=_ADA)
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid or missing API key."


@pytest.mark.asyncio
async def test_api_key_accepted(keyed_client: AsyncClient):
    resp = await keyed_client.post("/auth/signup", json=_ADA, headers={"X-API-Key": "s3cret"})
    assert resp.status_code == 201

    resp = await keyed_client.get("/derived", headers={"Authorization": "Bearer s3cret"})
    assert resp.status_code == 200
    assert resp.json()["tension_score"] == 51


@pytest.mark.asyncio
async def test_health_and_docs_skip_api_key(keyed_client: AsyncClient):
    assert (await keyed_client.get("/health")).status_code == 200
    assert (await keyed_client.get("/openapi.json")).status_code == 200


def test_parse_origins():
    assert parse_origins(" * ") == ["*"]
    assert parse_origins("http://a.test, ,http://b.test") == ["http://a.test", "http://b.test"]


# ── Error mapping ─────────────────────────────────────────────


@pytest.fixture
async def faulty_client():
    faulty = FastAPI()
    setup_middleware(faulty)
    engine = SignalEngine()

    @faulty.get("/bad-field")
    async def bad_field():
        return engine.set_signal("heart_rate", 70)

    @faulty.get("/crash")
    async def crash():
        raise RuntimeError("database exploded")

    transport = ASGITransport(app=faulty)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.mark.asyncio
async def test_engine_value_error_is_422(faulty_client: AsyncClient):
    resp = await faulty_client.get("/bad-field")
    assert resp.status_code == 422
    assert "heart_rate" in resp.json()["detail"]


@pytest.mark.asyncio
async def test_unhandled_error_is_clean_500(faulty_client: AsyncClient):
    resp = await faulty_client.get("/crash")
    assert resp.status_code == 500
    assert resp.json() == {"detail": "Internal server error."}
    assert "exploded" not in resp.text

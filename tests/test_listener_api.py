import pytest
from fastapi.testclient import TestClient

from conftest import auth_header, make_session_payload, register

from app.core.dependencies import get_storage
from app.main import app


@pytest.fixture
def session_id(client):
    resp = client.post("/api/sessions", json=make_session_payload())
    assert resp.status_code == 201, resp.text
    return resp.json()["id"]


# ─────────────────────────────────────────────────────────────
# Favorites
# ─────────────────────────────────────────────────────────────

def test_toggle_favorite_round_trip(client, listener, session_id):
    headers = listener["headers"]
    check_url = f"/api/favorites/{session_id}/check"
    assert client.get(check_url, headers=headers).json() == {"isFavorite": False}

    resp = client.post(f"/api/favorites/{session_id}", headers=headers)
    assert resp.status_code == 200
    assert resp.json() == {"isFavorite": True}
    assert client.get(check_url, headers=headers).json() == {"isFavorite": True}

    favorites = client.get("/api/favorites", headers=headers).json()
    assert [s["id"] for s in favorites] == [session_id]
    assert "teacher" in favorites[0]

    assert client.post(f"/api/favorites/{session_id}", headers=headers).json() == {"isFavorite": False}
    assert client.get("/api/favorites", headers=headers).json() == []


def test_favorites_are_per_user(client, listener, session_id):
    client.post(f"/api/favorites/{session_id}", headers=listener["headers"])
    other = register(client, email="lake@stillwater.io", name="Lake")
    assert client.get("/api/favorites", headers=auth_header(other["token"])).json() == []


def test_toggle_favorite_on_missing_session(client, listener):
    resp = client.post("/api/favorites/999", headers=listener["headers"])
    assert resp.status_code == 404
    assert resp.json() == {"message": "Session not found"}


def test_check_on_missing_session_is_false(client, listener):
    resp = client.get("/api/favorites/999/check", headers=listener["headers"])
    assert resp.status_code == 200
    assert resp.json() == {"isFavorite": False}


@pytest.mark.parametrize(
    "method, url",
    [
        ("GET", "/api/favorites"),
        ("POST", "/api/favorites/1"),
        ("GET", "/api/favorites/1/check"),
        ("GET", "/api/progress/stats"),
    ],
)
def test_listener_routes_require_a_token(client, method, url):
    resp = client.request(method, url)
    assert resp.status_code == 401
    assert resp.json() == {"message": "Unauthorized"}


# ─────────────────────────────────────────────────────────────
# Progress
# ─────────────────────────────────────────────────────────────

def test_record_progress_updates_stats(client, listener, session_id):
    headers = listener["headers"]
    resp = client.post("/api/progress", json={"sessionId": session_id, "minutesListened": 12}, headers=headers)
    assert resp.status_code == 201
    assert resp.json() == {"success": True}
    client.post("/api/progress", json={"sessionId": session_id, "minutesListened": 8}, headers=headers)

    stats = client.get("/api/progress/stats", headers=headers).json()
    assert stats == {"totalMinutes": 20, "currentStreak": 1, "sessionsCompleted": 2}

    me = client.get("/api/auth/me", headers=headers).json()
    assert me["totalMinutes"] == 20
    assert me["currentStreak"] == 1
    assert me["lastSessionDate"] is not None


def test_stats_for_new_listener(client, listener):
    stats = client.get("/api/progress/stats", headers=listener["headers"]).json()
    assert stats == {"totalMinutes": 0, "currentStreak": 0, "sessionsCompleted": 0}


def test_progress_for_missing_session(client, listener):
    resp = client.post("/api/progress", json={"sessionId": 999, "minutesListened": 5}, headers=listener["headers"])
    assert resp.status_code == 404
    assert resp.json() == {"message": "Session not found"}
    stats = client.get("/api/progress/stats", headers=listener["headers"]).json()
    assert stats["sessionsCompleted"] == 0


def test_progress_rejects_negative_minutes(client, listener, session_id):
    resp = client.post(
        "/api/progress",
        json={"sessionId": session_id, "minutesListened": -3},
        headers=listener["headers"],
    )
    assert resp.status_code == 400
    assert resp.json()["field"] == "minutesListened"


def test_progress_requires_a_token(client, session_id):
    resp = client.post("/api/progress", json={"sessionId": session_id, "minutesListened": 5})
    assert resp.status_code == 401


# ─────────────────────────────────────────────────────────────
# Unexpected failures
# ─────────────────────────────────────────────────────────────

class _BrokenStorage:
    async def get_teachers(self):
        raise RuntimeError("connection reset")


def test_unhandled_error_is_a_generic_500():
    app.dependency_overrides[get_storage] = lambda: _BrokenStorage()
    try:
        with TestClient(app, raise_server_exceptions=False) as c:
            resp = c.get("/api/teachers")
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 500
    assert resp.json() == {"message": "Internal server error"}


def test_oversized_values_are_rejected(client, listener, session_id):
    headers = listener["headers"]
    resp = client.post(
        "/api/progress",
        json={"sessionId": session_id, "minutesListened": 3_000_000_000},
        headers=headers,
    )
    assert resp.status_code == 400
    assert resp.json()["field"] == "minutesListened"

    resp = client.post("/api/progress", json={"sessionId": 99_999_999_999, "minutesListened": 5}, headers=headers)
    assert resp.status_code == 400
    assert resp.json()["field"] == "sessionId"

    assert client.post("/api/favorites/99999999999", headers=headers).status_code == 400
    assert client.get("/api/favorites/99999999999/check", headers=headers).status_code == 400

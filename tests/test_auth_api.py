from conftest import auth_header, register

from app.core.security import create_access_token, decode_access_token
from app.services.storage import DatabaseStorage


def test_register_returns_user_and_token(client):
    body = register(client)
    user = body["user"]
    assert user["email"] == "river@stillwater.io"
    assert user["name"] == "River"
    assert user["isPremium"] is False
    assert user["totalMinutes"] == 0
    assert user["currentStreak"] == 0
    assert "password" not in user
    assert decode_access_token(body["token"])["sub"] == str(user["id"])


def test_me_returns_the_registered_user(client):
    body = register(client)
    resp = client.get("/api/auth/me", headers=auth_header(body["token"]))
    assert resp.status_code == 200
    assert resp.json()["id"] == body["user"]["id"]


def test_duplicate_email_is_rejected(client):
    first = register(client)
    resp = client.post(
        "/api/auth/register",
        json={"email": "river@stillwater.io", "password": "another-pass", "name": "Impostor"},
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "Email already registered"

    # the original account still logs in with its own password
    login = client.post("/api/auth/login", json={"email": "river@stillwater.io", "password": "calm-breath"})
    assert login.status_code == 200
    assert login.json()["user"]["id"] == first["user"]["id"]
    assert login.json()["user"]["name"] == "River"


def test_duplicate_email_is_rejected_by_unique_index(client, monkeypatch):
    first = register(client)

    # both requests passed the lookup before either inserted
    async def no_existing_user(self, email):
        return None

    monkeypatch.setattr(DatabaseStorage, "get_user_by_email", no_existing_user)
    resp = client.post(
        "/api/auth/register",
        json={"email": "river@stillwater.io", "password": "another-pass", "name": "Impostor"},
    )
    monkeypatch.undo()

    assert resp.status_code == 400
    assert resp.json() == {"message": "Email already registered"}
    login = client.post("/api/auth/login", json={"email": "river@stillwater.io", "password": "calm-breath"})
    assert login.status_code == 200
    assert login.json()["user"]["id"] == first["user"]["id"]


def test_login_failures_do_not_reveal_which_part_was_wrong(client):
    register(client)
    wrong_password = client.post("/api/auth/login", json={"email": "river@stillwater.io", "password": "nope-nope"})
    unknown_email = client.post("/api/auth/login", json={"email": "lake@stillwater.io", "password": "calm-breath"})
    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()


def test_malformed_login_body_is_unauthorized(client):
    resp = client.post("/api/auth/login", json={"email": "not-an-email"})
    assert resp.status_code == 401
    assert resp.json() == {"message": "Invalid credentials"}


def test_register_validation_names_the_field(client):
    resp = client.post(
        "/api/auth/register",
        json={"email": "river@stillwater.io", "password": "short", "name": "River"},
    )
    assert resp.status_code == 400
    assert resp.json()["field"] == "password"

    resp = client.post("/api/auth/register", json={"email": "nope", "password": "calm-breath", "name": "River"})
    assert resp.status_code == 400
    assert resp.json()["field"] == "email"


def test_me_without_token(client):
    resp = client.get("/api/auth/me")
    assert resp.status_code == 401
    assert resp.json() == {"message": "Unauthorized"}


def test_me_with_garbage_token(client):
    resp = client.get("/api/auth/me", headers=auth_header("not.a.jwt"))
    assert resp.status_code == 401
    assert resp.json() == {"message": "Invalid token"}


def test_me_with_expired_token(client):
    body = register(client)
    expired = create_access_token(body["user"]["id"], expires_minutes=-1)
    resp = client.get("/api/auth/me", headers=auth_header(expired))
    assert resp.status_code == 401
    assert resp.json()["message"] == "Invalid token"


def test_token_for_missing_user(client):
    resp = client.get("/api/auth/me", headers=auth_header(create_access_token(4242)))
    assert resp.status_code == 401
    assert resp.json()["message"] == "User not found"


def test_logout_is_stateless(client):
    body = register(client)
    resp = client.post("/api/auth/logout")
    assert resp.status_code == 200
    assert "message" in resp.json()
    # nothing is revoked server-side
    assert client.get("/api/auth/me", headers=auth_header(body["token"])).status_code == 200

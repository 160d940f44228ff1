"""HTTP behaviour of the auth, project, heart and comment routes."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from gallery.crud.projects import update_project_status

COOKIE = "augment_session"
PROJECT = {
    "title": "Rules generator",
    "description": "Generates editor rules",
    "website_url": "https://rules.example.com",
}


def _login(client, name="Ada", **extra):
    response = client.post("/api/auth/login", json={"name": name, **extra})
    assert response.status_code == 200
    return response.json()["user"]


def _approved_project(client, session_factory):
    response = client.post("/api/projects", json=PROJECT)
    assert response.status_code == 201
    project_id = response.json()["project"]["id"]
    db = session_factory()
    try:
        update_project_status(db, project_id, "approved")
    finally:
        db.close()
    return project_id


def test_login_sets_session_cookie_and_me_resolves_it(client):
    response = client.post("/api/auth/login", json={"name": "  Ada ", "xProfile": "https://x.com/ada"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["user"]["name"] == "Ada"
    assert body["user"]["is_admin"] is False
    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith(f"{COOKIE}=")
    assert "HttpOnly" in set_cookie
    assert "samesite=lax" in set_cookie.lower()

    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.json() == {"user": body["user"]}


def test_login_requires_name(client):
    response = client.post("/api/auth/login", json={"name": "   "})

    assert response.status_code == 400
    assert response.json() == {"error": "Name is required", "code": "invalid_input"}


def test_login_with_email_reuses_account(client):
    first = _login(client, email="ada@example.com")
    second = _login(client, name="Someone else", email="ada@example.com")

    assert first["id"] == second["id"]
    assert _login(client)["id"] != _login(client)["id"]


def test_me_without_or_with_forged_session(client):
    assert client.get("/api/auth/me").status_code == 401

    client.cookies.set(COOKIE, "forged")
    response = client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.json()["error"] == "Not authenticated"


def test_logout_revokes_server_session(client):
    _login(client)
    token = client.cookies.get(COOKIE)

    assert client.post("/api/auth/logout").json() == {"success": True}

    client.cookies.set(COOKIE, token)
    assert client.get("/api/auth/me").status_code == 401


def test_admin_login(client):
    ok = client.post("/api/auth/admin-login", json={"email": "admin@example.com", "password": "letmein"})
    bad = client.post("/api/auth/admin-login", json={"email": "admin@example.com", "password": "nope"})

    assert ok.json() == {"success": True}
    assert bad.status_code == 401
    assert bad.json()["error"] == "Invalid admin credentials"


def test_project_routes_require_authentication(client):
    response = client.post("/api/projects", json=PROJECT)

    assert response.status_code == 401
    assert response.json()["error"] == "Authentication required"


def test_project_lifecycle(client):
    owner = _login(client)
    created = client.post("/api/projects", json=PROJECT)
    assert created.status_code == 201
    project = created.json()["project"]
    assert project["status"] == "pending"
    assert project["hearts_count"] == 0
    assert project["user"] == {"id": owner["id"], "name": "Ada", "x_profile": None}

    listed = client.get("/api/projects", params={"userId": owner["id"]}).json()["projects"]
    assert [p["id"] for p in listed] == [project["id"]]

    updated = client.put(f"/api/projects/{project['id']}", json={"title": "Renamed"})
    assert updated.json()["project"]["title"] == "Renamed"

    # Only admins change status.
    forbidden = client.put(f"/api/projects/{project['id']}", json={"status": "approved"})
    assert forbidden.status_code == 403

    invalid = client.post("/api/projects", json={"title": "x", "description": "y", "github_url": "https://gitlab.com/a"})
    assert invalid.status_code == 400
    assert invalid.json()["error"] == "GitHub URL must be from github.com"

    assert client.delete(f"/api/projects/{project['id']}").json() == {"success": True}
    missing = client.get(f"/api/projects/{project['id']}")
    assert missing.status_code == 404
    assert missing.json()["error"] == "Project not found"


def test_hearts_flow(client, session_factory):
    _login(client)
    project_id = _approved_project(client, session_factory)

    assert client.get(f"/api/projects/{project_id}/hearts/check").json() == {"hearted": False}
    assert client.post(f"/api/projects/{project_id}/hearts").json() == {"success": True}
    assert client.get(f"/api/projects/{project_id}/hearts/check").json() == {"hearted": True}

    duplicate = client.post(f"/api/projects/{project_id}/hearts")
    assert duplicate.status_code == 400
    assert duplicate.json()["error"] == "Already hearted"

    assert client.delete(f"/api/projects/{project_id}/hearts").json() == {"success": True}
    assert client.get(f"/api/projects/{project_id}/hearts/check").json() == {"hearted": False}


def test_heart_check_is_false_when_signed_out(client, session_factory):
    _login(client)
    project_id = _approved_project(client, session_factory)
    client.post(f"/api/projects/{project_id}/hearts")
    client.cookies.clear()

    assert client.get(f"/api/projects/{project_id}/hearts/check").json() == {"hearted": False}
    assert client.post(f"/api/projects/{project_id}/hearts").status_code == 401


def test_heart_check_never_fails(client, session_factory, monkeypatch):
    _login(client)
    project_id = _approved_project(client, session_factory)

    def _boom(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("db down"))

    monkeypatch.setattr("gallery.routers.api_hearts.has_user_heart", _boom)
    response = client.get(f"/api/projects/{project_id}/hearts/check")

    assert response.status_code == 200
    assert response.json() == {"hearted": False}


def test_guest_heart_routes(client, session_factory):
    _login(client)
    project_id = _approved_project(client, session_factory)
    client.cookies.clear()
    base = f"/api/projects/{project_id}"

    missing = client.post(f"{base}/guest-heart", json={})
    assert missing.status_code == 400
    assert missing.json()["error"] == "Guest ID is required"

    added = client.post(f"{base}/guest-heart", json={"guest_id": "guest_1"})
    assert added.json() == {"success": True, "heartsCount": 1}
    assert client.post(f"{base}/guest-heart", json={"guest_id": "guest_1"}).status_code == 400
    assert client.post(f"{base}/guest-heart-status", json={"guest_id": "guest_1"}).json() == {"hearted": True}

    removed = client.request("DELETE", f"{base}/guest-heart", json={"guest_id": "guest_1"})
    assert removed.json() == {"success": True, "heartsCount": 0}
    assert client.post(f"{base}/guest-heart-status", json={"guest_id": "guest_1"}).json() == {"hearted": False}


def test_comments(client, session_factory):
    _login(client)
    project_id = _approved_project(client, session_factory)
    base = f"/api/projects/{project_id}/comments"

    blank = client.post(base, json={"content": "  "})
    assert blank.status_code == 400
    assert blank.json()["error"] == "Comment content is required"

    first = client.post(base, json={"content": " First! "})
    assert first.status_code == 201
    assert first.json()["comment"]["content"] == "First!"
    client.post(base, json={"content": "Second"})

    comments = client.get(base).json()["comments"]
    assert [c["content"] for c in comments] == ["First!", "Second"]
    assert comments[0]["user"]["name"] == "Ada"

    assert client.get("/api/projects/unknown/comments").status_code == 404


def test_malformed_body_is_rejected_without_echo(client):
    response = client.post(
        "/api/auth/login",
        content=b"<script>alert(1)</script>",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid request body", "code": "invalid_input"}
    assert "script" not in response.text


def test_unexpected_handler_failure_is_generic(client, session_factory, monkeypatch):
    _login(client)
    project_id = _approved_project(client, session_factory)

    def _boom(*args, **kwargs):
        raise RuntimeError("secret stack detail")

    monkeypatch.setattr("gallery.routers.api_hearts.add_user_heart", _boom)
    response = client.post(f"/api/projects/{project_id}/hearts")

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to add heart", "code": "internal"}
    assert "secret" not in response.text


def test_identity_resolution_failure_maps_to_500(app, monkeypatch):
    def _boom(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("db down"))

    monkeypatch.setattr("gallery.deps.auth.validate_session", _boom)
    with TestClient(app, raise_server_exceptions=False) as client:
        client.cookies.set(COOKIE, "abc123")
        response = client.get("/api/auth/me")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error", "code": "internal"}


@pytest.mark.parametrize("path", ["/api/health"])
def test_health_is_reachable_without_session(client, path):
    response = client.get(path, follow_redirects=False)

    assert response.status_code == 200
    assert response.json() == {"ok": True}

"""Admission gate decisions and the middleware that enforces them."""

from fastapi.testclient import TestClient

from gallery.core.admission import AdmissionGate, Proceed, Redirect
from gallery.core.config import AppSettings
from gallery.core.routing import GateConfig
from gallery.factory import create_app

COOKIE = "augment_session"


def test_protected_path_without_cookie_redirects_to_login():
    gate = AdmissionGate(GateConfig())

    assert gate.admit("/settings", {}) == Redirect(target="/login")
    assert gate.admit("/settings", {COOKIE: ""}) == Redirect(target="/login")
    assert gate.admit("/settings", {"other_cookie": "abc"}) == Redirect(target="/login")


def test_any_non_empty_token_is_enough():
    gate = AdmissionGate(GateConfig())

    assert gate.admit("/settings", {COOKIE: "abc123"}) == Proceed()
    assert gate.admit("/settings", {COOKIE: "not-a-real-token!!"}) == Proceed()


def test_public_paths_never_look_at_cookies():
    class ExplodingCookies(dict):
        def get(self, *args, **kwargs):
            raise AssertionError("cookies read on a public path")

    gate = AdmissionGate(GateConfig())

    for path in ("/", "/login", "/a-access", "/projects/42", "/api/anything", "/favicon.ico"):
        assert gate.admit(path, ExplodingCookies()) == Proceed()


def test_redirect_target_follows_config():
    gate = AdmissionGate(GateConfig(login_path="/signin", cookie_name="sid"))

    assert gate.admit("/settings", {COOKIE: "abc123"}) == Redirect(target="/signin")
    assert gate.admit("/settings", {"sid": "abc123"}) == Proceed()


def test_middleware_end_to_end(client):
    # Public prefix: reaches routing, which has no such page.
    response = client.get("/projects/42", follow_redirects=False)
    assert response.status_code == 404

    response = client.get("/settings", follow_redirects=False)
    assert response.status_code == 302
    assert response.headers["location"] == "/login"

    client.cookies.set(COOKIE, "abc123")
    response = client.get("/settings", follow_redirects=False)
    assert response.status_code == 404
    client.cookies.clear()

    response = client.get("/api/anything", follow_redirects=False)
    assert response.status_code == 404
    assert response.json()["code"] == "http_error"


def test_redirects_still_carry_request_headers(client):
    response = client.get("/settings", headers={"X-Request-ID": "req-1"}, follow_redirects=False)

    assert response.status_code == 302
    assert response.headers["X-Request-ID"] == "req-1"
    assert response.headers["X-Content-Type-Options"] == "nosniff"


def test_app_uses_substituted_gate_settings():
    settings = AppSettings(
        DB_URL="sqlite://",
        SESSION_COOKIE_NAME="sid",
        GATE_LOGIN_PATH="/signin",
        GATE_PUBLIC_PAGES="/docs,/blog/",
    )
    with TestClient(create_app(settings)) as client:
        response = client.get("/blog/post", follow_redirects=False)
        assert response.status_code == 404

        response = client.get("/projects", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "/signin"

        client.cookies.set("sid", "x")
        response = client.get("/projects", follow_redirects=False)
        assert response.status_code == 404

"""
Critical Integration Tests for linkpage
=======================================

Focused tests covering the integration points most likely to break:
extension wiring, blueprint registration, JSON error handling and the CLI.
Run with: pytest tests/test_critical.py -v

NOTE: pytest is listed under extras_require["dev"] in setup.py.
Install with: pip install -e ".[dev]"
"""

import json
import os

from flask import Flask

from linkpage import LinkPage, create_app
from linkpage.modules.auth.utils import verify_password


# ---------------------------------------------------------------------------
# 1. Extension initialisation -- LinkPage(app) does not raise
# ---------------------------------------------------------------------------

def test_extension_initialisation(tmp_path):
    """LinkPage(app) boots on a bare Flask app and stores itself on the app."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"
    app.config["DATA_DIR"] = str(tmp_path)

    linkpage = LinkPage(app)

    assert app.extensions["linkpage"] is linkpage
    assert linkpage.store.data_dir == str(tmp_path)
    assert app.config["LOGIN_MAX_ATTEMPTS"] == 5
    assert app.config["LOGIN_LOCKOUT_SECONDS"] == 900


# ---------------------------------------------------------------------------
# 2. Blueprint registration -- every feature module is registered
# ---------------------------------------------------------------------------

EXPECTED_MODULES = ["auth", "links", "settings", "icons"]


def test_all_modules_registered(app):
    assert app.extensions["linkpage"].get_registered_modules() == EXPECTED_MODULES

    rules = {rule.rule for rule in app.url_map.iter_rules()}
    for path in (
        "/api/login",
        "/api/logout",
        "/api/auth/status",
        "/api/links",
        "/api/theme",
        "/api/profile",
        "/api/admin/links",
        "/api/admin/links/reorder",
        "/api/admin/links/<link_id>",
        "/api/admin/theme",
        "/api/admin/profile",
        "/api/admin/config",
        "/api/admin/icons/search",
    ):
        assert path in rules, f"{path} not registered. Routes: {sorted(rules)}"


# ---------------------------------------------------------------------------
# 3. JSON errors for unknown API routes
# ---------------------------------------------------------------------------

def test_unknown_api_route_is_json_404(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.get_json()["code"] == "NOT_FOUND"


def test_wrong_method_is_json_405(client):
    response = client.delete("/api/links")
    assert response.status_code == 405
    assert response.get_json()["code"] == "METHOD_NOT_ALLOWED"


def test_unexpected_exception_is_generic_500(app, client):
    @app.route("/api/boom")
    def boom():
        raise RuntimeError("secret internals")

    response = client.get("/api/boom")
    assert response.status_code == 500
    assert response.get_json() == {"error": "An unexpected error occurred", "code": "SERVER_ERROR"}


# ---------------------------------------------------------------------------
# 4. Static landing page
# ---------------------------------------------------------------------------

def test_index_served_from_static_folder(tmp_path):
    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text("<h1>links</h1>")

    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "DATA_DIR": str(tmp_path / "data"),
        "STATIC_FOLDER": str(public),
    })
    response = app.test_client().get("/")
    assert response.status_code == 200
    assert b"<h1>links</h1>" in response.data


# ---------------------------------------------------------------------------
# 5. Session cookie settings
# ---------------------------------------------------------------------------

def test_session_cookie_is_http_only(app):
    assert app.config["SESSION_COOKIE_HTTPONLY"] is True
    assert app.config["PERMANENT_SESSION_LIFETIME"].total_seconds() == 24 * 3600


# ---------------------------------------------------------------------------
# 6. CLI -- setup seeds the data directory and creates credentials
# ---------------------------------------------------------------------------

def test_cli_setup_creates_data_files(tmp_path):
    data_dir = tmp_path / "data"
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "DATA_DIR": str(data_dir),
        "STATIC_FOLDER": str(tmp_path / "public"),
    })

    result = app.test_cli_runner().invoke(args=[
        "setup", "--non-interactive", "--username", "owner", "--password", "s3cret-pass",
    ])
    assert result.exit_code == 0, result.output

    for name in ("links.json", "theme.json", "profile.json", "config.json", "auth.json"):
        assert os.path.isfile(data_dir / name), f"{name} was not created"

    with open(data_dir / "auth.json") as f:
        auth = json.load(f)
    assert auth["username"] == "owner"
    assert verify_password("s3cret-pass", auth["passwordHash"])


def test_cli_setup_keeps_existing_credentials(app, store):
    before = store.read("auth")
    result = app.test_cli_runner().invoke(args=["setup", "--non-interactive"])
    assert result.exit_code == 0, result.output
    assert store.read("auth") == before


def test_cli_set_password(app, store):
    result = app.test_cli_runner().invoke(args=[
        "set-password", "--username", "admin", "--password", "rotated-pass",
    ])
    assert result.exit_code == 0, result.output
    assert verify_password("rotated-pass", store.read("auth")["passwordHash"])


def test_cli_migrate_links(app, store):
    store.write("links", [
        {"id": "old", "label": "Old", "url": "https://old.example.com", "imageUrl": "https://x.com/a.png"},
    ])
    result = app.test_cli_runner().invoke(args=["migrate-links"])
    assert result.exit_code == 0, result.output

    [link] = store.read("links")
    assert link["visualType"] == "image"
    assert link["iconId"] == ""
    assert link["iconUrl"] == ""


# ---------------------------------------------------------------------------
# 7. Startup -- a hand-edited links.json does not stop the app
# ---------------------------------------------------------------------------

def test_startup_with_malformed_link(tmp_path):
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    (data_dir / "links.json").write_text(json.dumps([
        {"id": "a", "label": "A", "url": "https://a.com", "imageUrl": 5, "order": 0, "active": True},
    ]))

    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "DATA_DIR": str(data_dir),
        "STATIC_FOLDER": str(tmp_path / "public"),
    })

    [link] = app.extensions["linkpage"].store.read("links")
    assert link["visualType"] == "none"
    assert app.test_client().get("/api/links").status_code == 200

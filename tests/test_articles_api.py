import logging

import pytest
from fastapi.testclient import TestClient

from articletree.server.api import create_app
from articletree.server.settings import Settings


@pytest.fixture()
def client(tmp_path):
    settings = Settings(sqlite_db_path=tmp_path / "articles.db")
    with TestClient(create_app(settings)) as test_client:
        yield test_client


def _login(client):
    response = client.post("/api/auth/signup", json={"email": "editor@example.com", "password": "hunter22"})
    assert response.status_code == 200
    return response


def _create(client, title, parent_id=None, **extra):
    payload = {"title": title, "content": f"<p>{title}</p>", "parent_id": parent_id, **extra}
    response = client.post("/api/articles", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_healthz(client):
    assert client.get("/api/healthz").json() == {"status": "ok"}


def test_anonymous_visitors_can_read_but_not_write(client):
    assert client.get("/api/articles").json() == {"items": [], "total": 0}
    assert client.get("/api/articles/tree").json() == {"items": []}

    response = client.post("/api/articles", json={"title": "T", "content": "c"})
    assert response.status_code == 401
    assert client.get("/api/articles/parent-options").status_code == 401
    assert client.delete("/api/articles/anything").status_code == 401


def test_signup_sets_session_cookie(client):
    response = _login(client)

    assert response.json()["user"]["email"] == "editor@example.com"
    assert "articletree_session" in response.cookies
    assert client.get("/api/auth/me").json()["user"]["email"] == "editor@example.com"


def test_login_and_logout(client):
    _login(client)
    client.post("/api/auth/logout")
    assert client.get("/api/auth/me").status_code == 401

    bad = client.post("/api/auth/login", json={"email": "editor@example.com", "password": "nope-nope"})
    assert bad.status_code == 401
    assert bad.json()["detail"] == "Invalid login credentials"

    good = client.post("/api/auth/login", json={"email": "editor@example.com", "password": "hunter22"})
    assert good.status_code == 200
    assert client.get("/api/auth/me").status_code == 200


def test_duplicate_signup_is_rejected(client):
    _login(client)

    response = client.post("/api/auth/signup", json={"email": "editor@example.com", "password": "hunter22"})

    assert response.status_code == 400


def test_article_lifecycle(client):
    _login(client)
    guides = _create(client, "Guides")
    install = _create(client, "Install", parent_id=guides["id"])
    linux = _create(client, "Linux", parent_id=install["id"])
    upgrade = _create(client, "Upgrade", parent_id=guides["id"])

    listing = client.get("/api/articles").json()
    assert listing["total"] == 4
    assert [item["slug"] for item in listing["items"]] == ["upgrade", "linux", "install", "guides"]
    assert {item["slug"]: item["child_count"] for item in listing["items"]}["guides"] == 2

    tree = client.get("/api/articles/tree").json()["items"]
    assert [node["slug"] for node in tree] == ["guides"]
    assert [child["slug"] for child in tree[0]["children"]] == ["install", "upgrade"]
    assert tree[0]["children"][0]["children"][0]["id"] == linux["id"]

    options = client.get("/api/articles/parent-options", params={"exclude": "install"}).json()["items"]
    assert [(option["id"], option["depth"]) for option in options] == [(guides["id"], 0), (upgrade["id"], 1)]
    assert options[1]["label"] == "  ↳ Upgrade"

    detail = client.get("/api/articles/linux").json()
    assert detail["content"] == "<p>Linux</p>"
    assert detail["parent_id"] == install["id"]

    updated = client.put(
        "/api/articles/linux",
        json={"title": "Linux", "slug": "linux-setup", "content": "<p>new</p>", "parent_id": upgrade["id"]},
    )
    assert updated.status_code == 200
    assert updated.json()["slug"] == "linux-setup"
    assert client.get("/api/articles/linux").status_code == 404

    assert client.delete("/api/articles/guides").json() == {"status": "deleted"}
    roots = [node["slug"] for node in client.get("/api/articles/tree").json()["items"]]
    assert roots == ["install", "upgrade"]


def test_article_error_mapping(client):
    _login(client)
    guides = _create(client, "Guides")
    child = _create(client, "Child", parent_id=guides["id"])

    duplicate = client.post("/api/articles", json={"title": "Guides", "content": "again"})
    assert duplicate.status_code == 409
    assert duplicate.json()["detail"] == "Slug already exists. Please choose a unique slug."

    missing_fields = client.post("/api/articles", json={"title": "Empty", "content": ""})
    assert missing_fields.status_code == 400
    assert missing_fields.json()["detail"] == "Title, slug, and content are required"

    cycle = client.put(
        "/api/articles/guides",
        json={"title": "Guides", "slug": "guides", "content": "x", "parent_id": child["id"]},
    )
    assert cycle.status_code == 400

    unknown_parent = client.post("/api/articles", json={"title": "Orphan", "content": "x", "parent_id": "nope"})
    assert unknown_parent.status_code == 400

    assert client.get("/api/articles/missing").status_code == 404
    assert client.delete("/api/articles/missing").status_code == 404
    assert client.get("/api/articles/parent-options", params={"exclude": "missing"}).status_code == 404
    assert client.post("/api/articles", json={"title": "No content"}).status_code == 422


def test_create_app_leaves_root_handlers_alone(tmp_path):
    root = logging.getLogger()
    marker = logging.NullHandler()
    root.addHandler(marker)
    try:
        create_app(Settings(sqlite_db_path=tmp_path / "articles.db"))
        assert marker in root.handlers
    finally:
        root.removeHandler(marker)

"""Tests for /api/admin content CRUD and the public portfolio endpoints"""
from unittest.mock import AsyncMock, patch

import pytest


@pytest.mark.parametrize(
    "method, path",
    [
        ("get", "/api/admin/profile"),
        ("get", "/api/admin/skills"),
        ("post", "/api/admin/projects/abc/featured"),
        ("get", "/api/admin/conversations"),
    ],
)
def test_admin_requires_auth(client, method, path):
    r = getattr(client, method)(path)
    assert r.status_code == 401


def test_admin_rejects_bad_token(client):
    r = client.get("/api/admin/skills", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401


def test_profile_upsert_and_photo(admin_client):
    assert admin_client.get("/api/admin/profile").json() is None

    r = admin_client.put(
        "/api/admin/profile",
        json={"name": "Ada", "title": "Engineer", "about": "Hi", "email": "ada@example.com"},
    )
    assert r.status_code == 200
    assert r.json()["name"] == "Ada"

    # Null fields are not written, so email survives a partial update
    r = admin_client.put("/api/admin/profile", json={"name": "Ada L.", "title": "Engineer", "about": "Hi"})
    assert r.json()["email"] == "ada@example.com"

    r = admin_client.patch("/api/admin/profile/photo", json={"photoUrl": "https://cdn.example/p.jpg"})
    assert r.json()["photoURL"] == "https://cdn.example/p.jpg"
    assert admin_client.get("/api/admin/profile").json()["name"] == "Ada L."


def test_skills_crud(admin_client):
    r = admin_client.post("/api/admin/skills", json={"name": "Python", "level": 90})
    assert r.status_code == 201
    skill_id = r.json()["id"]

    assert [s["name"] for s in admin_client.get("/api/admin/skills").json()] == ["Python"]

    assert admin_client.delete(f"/api/admin/skills/{skill_id}").json() == {"ok": True}
    assert admin_client.get("/api/admin/skills").json() == []
    assert admin_client.delete(f"/api/admin/skills/{skill_id}").status_code == 404


def test_skill_level_bounds(admin_client):
    r = admin_client.post("/api/admin/skills", json={"name": "Go", "level": 150})
    assert r.status_code == 422


def test_project_crud_and_icon_fallback(admin_client):
    r = admin_client.post(
        "/api/admin/projects",
        json={"name": "Engine", "description": "<p>Gears</p>", "slug": "engine", "icon": "rocket", "tags": ["math"]},
    )
    assert r.status_code == 201
    project = r.json()
    assert project["icon"] == "code"
    assert project["isFeatured"] is False

    r = admin_client.put(
        f"/api/admin/projects/{project['id']}",
        json={"name": "Engine v2", "slug": "engine", "icon": "Database"},
    )
    assert r.json()["name"] == "Engine v2"
    assert r.json()["icon"] == "database"

    assert admin_client.put("/api/admin/projects/missing", json={"name": "x"}).status_code == 404
    assert admin_client.delete(f"/api/admin/projects/{project['id']}").json() == {"ok": True}
    assert admin_client.get("/api/admin/projects").json() == []


def test_featured_project_is_singleton(admin_client):
    a = admin_client.post("/api/admin/projects", json={"name": "A"}).json()
    b = admin_client.post("/api/admin/projects", json={"name": "B"}).json()

    assert admin_client.post(f"/api/admin/projects/{a['id']}/featured").json()["isFeatured"] is True
    assert admin_client.post(f"/api/admin/projects/{b['id']}/featured").json()["isFeatured"] is True

    featured = [p["name"] for p in admin_client.get("/api/admin/projects").json() if p["isFeatured"]]
    assert featured == ["B"]


def test_create_featured_project_unsets_previous(admin_client):
    admin_client.post("/api/admin/projects", json={"name": "A", "isFeatured": True})
    admin_client.post("/api/admin/projects", json={"name": "B", "isFeatured": True})
    featured = [p["name"] for p in admin_client.get("/api/admin/projects").json() if p["isFeatured"]]
    assert featured == ["B"]


def test_featured_unknown_project(admin_client):
    assert admin_client.post("/api/admin/projects/nope/featured").status_code == 404


def test_experiences_sorted_by_order_desc(admin_client):
    admin_client.post("/api/admin/experiences", json={"title": "Intern", "company": "Acme", "order": 1})
    r = admin_client.post(
        "/api/admin/experiences",
        json={"title": "Engineer", "company": "Acme", "order": 2, "technologies": ["Python"]},
    )
    exp_id = r.json()["id"]

    titles = [e["title"] for e in admin_client.get("/api/admin/experiences").json()]
    assert titles == ["Engineer", "Intern"]

    r = admin_client.put(f"/api/admin/experiences/{exp_id}", json={"title": "Senior Engineer", "order": 0})
    assert r.json()["technologies"] == []
    titles = [e["title"] for e in admin_client.get("/api/admin/experiences").json()]
    assert titles == ["Intern", "Senior Engineer"]

    assert admin_client.delete(f"/api/admin/experiences/{exp_id}").json() == {"ok": True}


def test_mutations_invalidate_portfolio_cache(admin_client):
    with patch("portfolio.app.utils.cache.delete", new_callable=AsyncMock) as mock_delete:
        admin_client.post("/api/admin/skills", json={"name": "Rust"})
    mock_delete.assert_awaited_with("portfolio:content")


# --- Public surface ---


def test_public_portfolio(admin_client):
    admin_client.put("/api/admin/profile", json={"name": "Ada", "title": "Engineer", "about": "Hi"})
    admin_client.post("/api/admin/skills", json={"name": "Python"})
    admin_client.post("/api/admin/projects", json={"name": "Engine", "slug": "engine"})

    admin_client.headers.pop("Authorization")
    data = admin_client.get("/api/portfolio").json()
    assert data["profile"]["name"] == "Ada"
    assert [s["name"] for s in data["skills"]] == ["Python"]
    assert [p["name"] for p in data["projects"]] == ["Engine"]
    assert data["experiences"] == []

    assert admin_client.get("/api/projects/engine").json()["name"] == "Engine"
    assert admin_client.get("/api/projects/missing").status_code == 404


def test_public_portfolio_served_from_cache(client):
    cached = {"profile": None, "projects": [], "skills": [{"id": "s1", "name": "Cached", "level": None}], "experiences": []}
    with patch("portfolio.app.utils.cache.get", new_callable=AsyncMock, return_value=cached):
        data = client.get("/api/portfolio").json()
    assert data["skills"][0]["name"] == "Cached"


def test_root_and_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").json()["message"] == "Portfolio API"

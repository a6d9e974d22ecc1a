# tests/v1/test_site.py
"""Tests for site settings, notes, common data and stats."""

from fastapi import status


def test_config_is_super_admin_only(client, auth_headers, super_headers) -> None:
    assert client.get("/api/v1/site/config").status_code == status.HTTP_401_UNAUTHORIZED
    assert client.get("/api/v1/site/config", headers=auth_headers).status_code == 403

    r = client.get("/api/v1/site/config", headers=super_headers)
    assert r.status_code == status.HTTP_200_OK
    assert r.json()["forum_name"] == "Orange Forum"
    assert r.json()["signup_disabled"] is False


def test_config_update_refreshes_snapshot(client, super_headers) -> None:
    r = client.put(
        "/api/v1/site/config",
        json={"forum_name": "Orchard", "signup_disabled": True, "smtp_port": 587},
        headers=super_headers,
    )
    assert r.status_code == status.HTTP_200_OK
    assert r.json()["forum_name"] == "Orchard"
    assert r.json()["smtp_port"] == "587"
    assert r.json()["header_msg"] == ""

    assert client.get("/api/v1/site/common").json()["forum_name"] == "Orchard"
    r = client.post(
        "/api/v1/auth/signup", json={"username": "late", "password": "long-enough"}
    )
    assert r.status_code == status.HTTP_403_FORBIDDEN


def test_config_update_rejects_bad_port(client, super_headers) -> None:
    r = client.put("/api/v1/site/config", json={"smtp_port": 70000}, headers=super_headers)
    assert r.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_notes(client, auth_headers, super_headers) -> None:
    payload = {"name": "Rules", "content": "Be kind."}
    assert client.post("/api/v1/site/notes", json=payload, headers=auth_headers).status_code == 403

    r = client.post("/api/v1/site/notes", json=payload, headers=super_headers)
    assert r.status_code == status.HTTP_201_CREATED
    note_id = r.json()["id"]

    r = client.put(
        f"/api/v1/site/notes/{note_id}",
        json={"name": "Rules", "content": "Be very kind."},
        headers=super_headers,
    )
    assert r.json()["content"] == "Be very kind."
    assert [n["name"] for n in client.get("/api/v1/site/notes").json()] == ["Rules"]

    assert client.delete(f"/api/v1/site/notes/{note_id}", headers=super_headers).status_code == 204
    r = client.get(f"/api/v1/site/notes/{note_id}")
    assert r.status_code == status.HTTP_404_NOT_FOUND
    assert r.json()["detail"] == "No note with that ID found"


def test_common_data(client, auth_headers) -> None:
    r = client.get("/api/v1/site/common", headers={**auth_headers, "X-CSRF-Token": "abc"})
    body = r.json()
    assert body["csrf"] == "abc"
    assert body["username"] == "alice"
    assert body["karma"] == 0
    assert body["msg"] == ""

    anon = client.get("/api/v1/site/common").json()
    assert anon["username"] == ""
    assert anon["csrf"]


def test_stats(client, other_user, topic) -> None:
    assert client.get("/api/v1/site/stats").json() == {
        "users": 2,
        "groups": 1,
        "topics": 1,
        "comments": 0,
    }

# tests/v1/test_groups.py
"""Tests for group endpoints."""

from fastapi import status

from orange_forum.services import config_service
from orange_forum.services.config_service import ConfigKey


def _create(client, headers, name="golang"):
    return client.post("/api/v1/groups/", json={"name": name, "description": "Gophers"}, headers=headers)


def test_creator_becomes_admin(client, auth_headers) -> None:
    r = _create(client, auth_headers)
    assert r.status_code == status.HTTP_201_CREATED
    group_id = r.json()["id"]

    r = client.get(f"/api/v1/groups/{group_id}/roles")
    assert r.json() == {"admins": ["alice"], "mods": []}


def test_duplicate_group(client, auth_headers) -> None:
    _create(client, auth_headers)
    assert _create(client, auth_headers).status_code == status.HTTP_409_CONFLICT


def test_group_creation_disabled(client, seeded_db, auth_headers, super_headers) -> None:
    config_service.write_config(seeded_db, ConfigKey.GROUP_CREATION_DISABLED, "1")
    assert _create(client, auth_headers).status_code == status.HTTP_403_FORBIDDEN
    assert _create(client, super_headers).status_code == status.HTTP_201_CREATED


def test_only_group_admin_updates(client, auth_headers, other_headers) -> None:
    group_id = _create(client, auth_headers).json()["id"]
    payload = {"name": "golang", "description": "Gophers only", "header_msg": ""}

    r = client.put(f"/api/v1/groups/{group_id}", json=payload, headers=other_headers)
    assert r.status_code == status.HTTP_403_FORBIDDEN

    r = client.put(f"/api/v1/groups/{group_id}", json=payload, headers=auth_headers)
    assert r.status_code == status.HTTP_200_OK
    assert r.json()["description"] == "Gophers only"


def test_sticky_needs_super_admin(client, auth_headers, super_headers) -> None:
    group_id = _create(client, auth_headers).json()["id"]
    payload = {"name": "golang", "is_sticky": True}

    r = client.put(f"/api/v1/groups/{group_id}", json=payload, headers=auth_headers)
    assert r.status_code == status.HTTP_403_FORBIDDEN
    assert client.get(f"/api/v1/groups/{group_id}").json()["is_sticky"] is False

    r = client.put(f"/api/v1/groups/{group_id}", json=payload, headers=super_headers)
    assert r.json()["is_sticky"] is True


def test_replace_roles(client, auth_headers, other_user) -> None:
    group_id = _create(client, auth_headers).json()["id"]
    r = client.put(
        f"/api/v1/groups/{group_id}/roles",
        json={"admins": ["alice"], "mods": ["bob", "ghost"]},
        headers=auth_headers,
    )
    assert r.status_code == status.HTTP_200_OK
    assert r.json() == {"admins": ["alice"], "mods": ["bob"]}


def test_delete_and_undelete(client, auth_headers) -> None:
    group_id = _create(client, auth_headers).json()["id"]

    r = client.delete(f"/api/v1/groups/{group_id}", headers=auth_headers)
    assert r.status_code == status.HTTP_204_NO_CONTENT
    assert client.get("/api/v1/groups/").json() == []
    assert client.get(f"/api/v1/groups/{group_id}").json()["is_closed"] is True

    r = client.post(f"/api/v1/groups/{group_id}/undelete", headers=auth_headers)
    assert r.json()["is_closed"] is False


def test_topics_in_group(client, auth_headers, other_headers) -> None:
    group_id = _create(client, auth_headers).json()["id"]

    r = client.post(
        f"/api/v1/groups/{group_id}/topics",
        json={"title": "Generics?", "content": "Finally."},
        headers=other_headers,
    )
    assert r.status_code == status.HTTP_201_CREATED
    topic = r.json()
    assert topic["group_id"] == group_id
    assert topic["num_comments"] == 0

    listed = client.get(f"/api/v1/groups/{group_id}/topics").json()
    assert [t["id"] for t in listed] == [topic["id"]]


def test_deleted_topics_listing_needs_mod(client, auth_headers, other_headers) -> None:
    group_id = _create(client, auth_headers).json()["id"]
    url = f"/api/v1/groups/{group_id}/topics?include_deleted=true"

    assert client.get(url, headers=other_headers).status_code == status.HTTP_403_FORBIDDEN
    assert client.get(url, headers=auth_headers).status_code == status.HTTP_200_OK


def test_group_subscription_follows_settings(client, seeded_db, auth_headers) -> None:
    group_id = _create(client, auth_headers).json()["id"]
    url = f"/api/v1/groups/{group_id}/subscription"

    assert client.post(url, headers=auth_headers).status_code == status.HTTP_403_FORBIDDEN

    config_service.write_config(seeded_db, ConfigKey.ALLOW_GROUP_SUBSCRIPTION, "1")
    client.app.state.forum_config = None
    assert client.post(url, headers=auth_headers).status_code == status.HTTP_201_CREATED
    assert client.delete(url, headers=auth_headers).status_code == status.HTTP_204_NO_CONTENT

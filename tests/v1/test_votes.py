# tests/v1/test_votes.py
"""Tests for vote endpoints."""

from fastapi import status

from orange_forum.services import group_service


def test_upvote_topic(client, topic, other_headers) -> None:
    r = client.post(f"/api/v1/votes/topics/{topic.id}", json={"vote": "up"}, headers=other_headers)
    assert r.status_code == status.HTTP_201_CREATED

    assert client.get(f"/api/v1/topics/{topic.id}").json()["upvotes"] == 1
    assert client.get("/api/v1/users/alice").json()["karma"] == 1

    mine = client.get(f"/api/v1/votes/topics/{topic.id}/my-vote", headers=other_headers)
    assert mine.json() == {"vote": "up"}


def test_no_vote_yet(client, topic, other_headers) -> None:
    mine = client.get(f"/api/v1/votes/topics/{topic.id}/my-vote", headers=other_headers)
    assert mine.json() == {"vote": None}


def test_double_vote_rejected(client, topic, other_headers) -> None:
    url = f"/api/v1/votes/topics/{topic.id}"
    assert client.post(url, json={"vote": "down"}, headers=other_headers).status_code == 201

    r = client.post(url, json={"vote": "up"}, headers=other_headers)
    assert r.status_code == status.HTTP_409_CONFLICT
    assert client.get("/api/v1/users/alice").json()["karma"] == -1


def test_invalid_vote(client, topic, other_headers) -> None:
    r = client.post(f"/api/v1/votes/topics/{topic.id}", json={"vote": "meh"}, headers=other_headers)
    assert r.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_vote_nonexistent_topic(client, other_headers) -> None:
    r = client.post("/api/v1/votes/topics/99999", json={"vote": "up"}, headers=other_headers)
    assert r.status_code == status.HTTP_404_NOT_FOUND


def test_vote_requires_auth(client, topic) -> None:
    r = client.post(f"/api/v1/votes/topics/{topic.id}", json={"vote": "up"})
    assert r.status_code == status.HTTP_401_UNAUTHORIZED


def test_flag_comment(client, topic, auth_headers, other_headers) -> None:
    comment_id = client.post(
        f"/api/v1/topics/{topic.id}/comments", json={"content": "spam"}, headers=other_headers
    ).json()["id"]

    r = client.post(f"/api/v1/votes/comments/{comment_id}", json={"vote": "flag"}, headers=auth_headers)
    assert r.status_code == status.HTTP_201_CREATED

    comment = client.get(f"/api/v1/comments/{comment_id}").json()
    assert (comment["upvotes"], comment["downvotes"], comment["flagvotes"]) == (0, 0, 1)
    assert client.get("/api/v1/users/bob").json()["karma"] == 0

    mine = client.get(f"/api/v1/votes/comments/{comment_id}/my-vote", headers=auth_headers)
    assert mine.json() == {"vote": "flag"}


def test_vote_in_closed_group(client, db_session, group, topic, other_headers) -> None:
    group_service.delete_group(db_session, group.id)
    r = client.post(f"/api/v1/votes/topics/{topic.id}", json={"vote": "up"}, headers=other_headers)
    assert r.status_code == status.HTTP_404_NOT_FOUND
    assert client.get("/api/v1/users/alice").json()["karma"] == 0

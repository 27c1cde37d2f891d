"""HTTP tests for the friends and users endpoints."""

from __future__ import annotations

import uuid

from tests.conftest import auth_headers, create_friendship, create_pending

PREFIX = "/api/v1"


class TestFriendRequests:
    def test_full_lifecycle(self, client, alice, bob):
        response = client.post(
            f"{PREFIX}/friends/request",
            json={"friend_id": str(bob.id)},
            headers=auth_headers(alice),
        )
        assert response.status_code == 201
        friendship_id = response.json()["id"]
        assert response.json()["status"] == "pending"

        pending = client.get(f"{PREFIX}/friends/pending", headers=auth_headers(bob)).json()
        assert pending["incoming_count"] == 1
        assert pending["incoming"][0]["user"]["username"] == "alice"

        response = client.put(f"{PREFIX}/friends/{friendship_id}/accept", headers=auth_headers(bob))
        assert response.status_code == 200
        assert response.json()["status"] == "accepted"

        friends = client.get(f"{PREFIX}/friends", headers=auth_headers(alice)).json()
        assert friends["total_count"] == 1
        assert friends["friends"][0]["friend"]["id"] == str(bob.id)

        check = client.get(f"{PREFIX}/friends/check/{alice.id}", headers=auth_headers(bob)).json()
        assert check["is_friend"] is True

        response = client.delete(f"{PREFIX}/friends/{friendship_id}", headers=auth_headers(alice))
        assert response.status_code == 200
        assert client.get(f"{PREFIX}/friends/count", headers=auth_headers(bob)).json() == {"count": 0}

    def test_duplicate_request_is_conflict(self, db, client, alice, bob):
        create_pending(db, bob, alice)

        response = client.post(
            f"{PREFIX}/friends/request",
            json={"friend_id": str(bob.id)},
            headers=auth_headers(alice),
        )

        assert response.status_code == 409

    def test_accept_by_requester_is_forbidden(self, db, client, alice, bob):
        request = create_pending(db, alice, bob)

        response = client.put(f"{PREFIX}/friends/{request.id}/accept", headers=auth_headers(alice))

        assert response.status_code == 403

    def test_accept_twice_is_conflict(self, db, client, alice, bob):
        edge = create_friendship(db, alice, bob)

        response = client.put(f"{PREFIX}/friends/{edge.id}/accept", headers=auth_headers(bob))

        assert response.status_code == 409

    def test_reject_unknown_is_not_found(self, client, bob):
        response = client.put(f"{PREFIX}/friends/{uuid.uuid4()}/reject", headers=auth_headers(bob))

        assert response.status_code == 404


class TestAuth:
    def test_missing_token(self, client):
        assert client.get(f"{PREFIX}/friends").status_code == 401

    def test_garbage_token(self, client):
        response = client.get(f"{PREFIX}/friends", headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401

    def test_token_for_unknown_user(self, client):
        from pinmap.core.security import create_access_token

        token = create_access_token(str(uuid.uuid4()))
        response = client.get(f"{PREFIX}/users/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_me(self, client, alice):
        response = client.get(f"{PREFIX}/users/me", headers=auth_headers(alice))

        assert response.status_code == 200
        assert response.json()["username"] == "alice"


def test_user_search(client, alice, bob, carol):
    response = client.get(f"{PREFIX}/users/search", params={"q": "bo"}, headers=auth_headers(alice))

    assert response.status_code == 200
    assert [u["username"] for u in response.json()] == ["bob"]

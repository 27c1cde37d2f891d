"""Tests for the friendship lifecycle."""

from __future__ import annotations

import uuid

import pytest

from pinmap.core.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    ValidationFailedError,
)
from pinmap.models.social import FRIENDSHIP_ACCEPTED, FRIENDSHIP_PENDING
from pinmap.services.friendship_service import FriendshipService
from pinmap.store import PinStore
from tests.conftest import create_friendship, create_pending, create_user


class StaleReadStore(PinStore):
    """Misses an existing edge on the first lookup, like a concurrent requester would"""

    def __init__(self, db):
        super().__init__(db)
        self.stale = True

    def find_friendship_between(self, user_a, user_b, status=None):
        if self.stale:
            self.stale = False
            return None
        return super().find_friendship_between(user_a, user_b, status)


# ---------------------------------------------------------------------------
# send_request
# ---------------------------------------------------------------------------


class TestSendRequest:
    def test_creates_pending_edge_owned_by_requester(self, friendships, alice, bob):
        friendship = friendships.send_request(alice.id, bob.id)

        assert friendship.status == FRIENDSHIP_PENDING
        assert friendship.user_id == alice.id
        assert friendship.friend_id == bob.id

    def test_duplicate_request_conflicts(self, friendships, alice, bob):
        friendships.send_request(alice.id, bob.id)

        with pytest.raises(ConflictError):
            friendships.send_request(alice.id, bob.id)

    def test_mirror_request_conflicts(self, friendships, alice, bob):
        friendships.send_request(alice.id, bob.id)

        with pytest.raises(ConflictError):
            friendships.send_request(bob.id, alice.id)

    def test_racing_duplicate_request_conflicts(self, db, friendships, alice, bob):
        friendships.send_request(alice.id, bob.id)
        racing = FriendshipService(StaleReadStore(db))

        with pytest.raises(ConflictError):
            racing.send_request(alice.id, bob.id)

        assert friendships.list_pending(bob.id).incoming_count == 1

    def test_request_to_existing_friend_conflicts(self, db, friendships, alice, bob):
        create_friendship(db, bob, alice)

        with pytest.raises(ConflictError, match="Already friends"):
            friendships.send_request(alice.id, bob.id)

    def test_request_to_self_is_rejected(self, friendships, alice):
        with pytest.raises(ValidationFailedError):
            friendships.send_request(alice.id, alice.id)

    def test_unknown_recipient_not_found(self, friendships, alice):
        with pytest.raises(NotFoundError):
            friendships.send_request(alice.id, uuid.uuid4())

    def test_resubmit_after_reject_creates_fresh_request(self, friendships, alice, bob):
        first = friendships.send_request(alice.id, bob.id)
        friendships.reject(first.id, bob.id)

        second = friendships.send_request(alice.id, bob.id)

        assert second.id != first.id
        assert second.status == FRIENDSHIP_PENDING


# ---------------------------------------------------------------------------
# accept / reject / remove
# ---------------------------------------------------------------------------


class TestAccept:
    def test_recipient_accepts(self, db, friendships, alice, bob):
        request = create_pending(db, alice, bob)

        accepted = friendships.accept(request.id, bob.id)

        assert accepted.status == FRIENDSHIP_ACCEPTED
        assert friendships.are_friends(alice.id, bob.id)

    def test_second_accept_is_invalid_state(self, db, friendships, alice, bob):
        request = create_pending(db, alice, bob)
        friendships.accept(request.id, bob.id)

        with pytest.raises(InvalidStateError):
            friendships.accept(request.id, bob.id)

    def test_requester_cannot_accept(self, db, friendships, alice, bob):
        request = create_pending(db, alice, bob)

        with pytest.raises(ForbiddenError):
            friendships.accept(request.id, alice.id)
        assert not friendships.are_friends(alice.id, bob.id)

    def test_unknown_request_not_found(self, friendships, bob):
        with pytest.raises(NotFoundError):
            friendships.accept(uuid.uuid4(), bob.id)


class TestReject:
    def test_recipient_rejects_and_edge_is_gone(self, db, store, friendships, alice, bob):
        request = create_pending(db, alice, bob)

        friendships.reject(request.id, bob.id)

        assert store.find_friendship_between(alice.id, bob.id) is None

    def test_second_reject_not_found(self, db, friendships, alice, bob):
        request = create_pending(db, alice, bob)
        friendships.reject(request.id, bob.id)

        with pytest.raises(NotFoundError):
            friendships.reject(request.id, bob.id)

    def test_requester_cannot_reject(self, db, friendships, alice, bob):
        request = create_pending(db, alice, bob)

        with pytest.raises(ForbiddenError):
            friendships.reject(request.id, alice.id)


class TestRemove:
    def test_either_party_can_unfriend(self, db, friendships, alice, bob):
        edge = create_friendship(db, alice, bob)

        friendships.remove(edge.id, bob.id)

        assert not friendships.are_friends(alice.id, bob.id)

    def test_requester_can_cancel_pending(self, db, store, friendships, alice, bob):
        request = create_pending(db, alice, bob)

        friendships.remove(request.id, alice.id)

        assert store.get_friendship(request.id) is None

    def test_outsider_cannot_remove(self, db, friendships, alice, bob, carol):
        edge = create_friendship(db, alice, bob)

        with pytest.raises(ForbiddenError):
            friendships.remove(edge.id, carol.id)
        assert friendships.are_friends(alice.id, bob.id)


# ---------------------------------------------------------------------------
# Listing and checks
# ---------------------------------------------------------------------------


class TestListing:
    def test_list_friends_returns_other_party_in_both_orientations(self, db, friendships, alice, bob, carol):
        create_friendship(db, alice, bob)
        create_friendship(db, carol, alice)

        result = friendships.list_friends(alice.id)

        friend_ids = {f.friend.id for f in result.friends}
        assert friend_ids == {bob.id, carol.id}
        assert alice.id not in friend_ids
        assert result.total_count == 2

    def test_list_friends_excludes_pending(self, db, friendships, alice, bob):
        create_pending(db, alice, bob)

        assert friendships.list_friends(alice.id).friends == []

    def test_list_pending_splits_incoming_and_outgoing(self, db, friendships, alice, bob, carol):
        outgoing = create_pending(db, alice, bob)
        incoming = create_pending(db, carol, alice)

        pending = friendships.list_pending(alice.id)

        assert [r.request_id for r in pending.outgoing] == [outgoing.id]
        assert pending.outgoing[0].user.id == bob.id
        assert [r.request_id for r in pending.incoming] == [incoming.id]
        assert pending.incoming[0].user.id == carol.id
        assert pending.incoming_count == 1
        assert pending.outgoing_count == 1

    def test_are_friends_is_symmetric(self, db, friendships, alice, bob, carol):
        create_friendship(db, alice, bob)
        create_pending(db, alice, carol)

        assert friendships.are_friends(alice.id, bob.id)
        assert friendships.are_friends(bob.id, alice.id)
        assert not friendships.are_friends(alice.id, carol.id)
        assert not friendships.are_friends(carol.id, alice.id)

    def test_count_friends(self, db, friendships, alice, bob, carol):
        create_friendship(db, alice, bob)
        create_friendship(db, carol, alice)

        assert friendships.count_friends(alice.id) == 2
        assert friendships.count_friends(bob.id) == 1


class TestSearchUsers:
    def test_matches_case_insensitively_and_excludes_caller(self, db, friendships, alice):
        create_user(db, "alicia")
        create_user(db, "zed", display_name="Ali Zed")

        results = friendships.search_users("ALI", alice.id)

        usernames = {u.username for u in results}
        assert usernames == {"alicia", "zed"}

    def test_blank_query_rejected(self, friendships, alice):
        with pytest.raises(ValidationFailedError):
            friendships.search_users("   ", alice.id)

    def test_wildcards_match_literally(self, db, friendships, alice):
        create_user(db, "under_score")
        create_user(db, "percent")

        assert [u.username for u in friendships.search_users("_", alice.id)] == ["under_score"]
        assert friendships.search_users("%", alice.id) == []

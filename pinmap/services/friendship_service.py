"""
Friendship service - friend request lifecycle and friend lists
"""
import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from pinmap.core.config import settings
from pinmap.core.exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    ValidationFailedError,
)
from pinmap.models.social import Friendship, FRIENDSHIP_ACCEPTED, FRIENDSHIP_PENDING
from pinmap.models.user import User
from pinmap.schemas.social import (
    FriendWithRequestInfo,
    FriendListResponse,
    FriendRequestWithUser,
    PendingRequestsResponse,
)
from pinmap.schemas.user import UserInfo
from pinmap.store import PinStore

logger = logging.getLogger(__name__)


class FriendshipService:
    """Service for social/friend operations"""

    def __init__(self, store: PinStore):
        self.store = store

    def send_request(self, requester_id: UUID, recipient_id: UUID) -> Friendship:
        """
        Send a friend request.

        Any existing edge between the two users blocks a new one, whichever
        way it points and whatever its status.
        """
        if requester_id == recipient_id:
            raise ValidationFailedError("Cannot send friend request to yourself")

        if not self.store.user_exists(recipient_id):
            raise NotFoundError("User not found")

        existing = self.store.find_friendship_between(requester_id, recipient_id)
        if existing:
            if existing.status == FRIENDSHIP_ACCEPTED:
                raise ConflictError("Already friends")
            if existing.user_id == requester_id:
                raise ConflictError("Friend request already sent")
            raise ConflictError("This user already sent you a friend request")

        try:
            friendship = self.store.create_friendship(requester_id, recipient_id, FRIENDSHIP_PENDING)
        except IntegrityError:
            # A concurrent identical request won the unique key
            raise ConflictError("Friend request already sent")
        logger.info(f"Friend request {friendship.id}: {requester_id} -> {recipient_id}")
        return friendship

    def _get_friendship(self, friendship_id: UUID) -> Friendship:
        friendship = self.store.get_friendship(friendship_id)
        if not friendship:
            raise NotFoundError("Friend request not found")
        return friendship

    def accept(self, friendship_id: UUID, caller_id: UUID) -> Friendship:
        """Accept a friend request (recipient only)"""
        friendship = self._get_friendship(friendship_id)

        if friendship.friend_id != caller_id:
            raise ForbiddenError("Only the recipient can accept this request")

        if friendship.status != FRIENDSHIP_PENDING:
            raise InvalidStateError("Friend request is not pending")

        return self.store.set_friendship_status(friendship, FRIENDSHIP_ACCEPTED)

    def reject(self, friendship_id: UUID, caller_id: UUID) -> None:
        """Reject a friend request (recipient only). The edge is deleted."""
        friendship = self._get_friendship(friendship_id)

        if friendship.friend_id != caller_id:
            raise ForbiddenError("Only the recipient can reject this request")

        self.store.delete_friendship(friendship)

    def remove(self, friendship_id: UUID, caller_id: UUID) -> None:
        """Unfriend, or cancel a request you sent. Either party may do it."""
        friendship = self._get_friendship(friendship_id)

        if caller_id not in (friendship.user_id, friendship.friend_id):
            raise ForbiddenError("You are not part of this friendship")

        self.store.delete_friendship(friendship)

    def list_friends(self, user_id: UUID) -> FriendListResponse:
        """Get list of friends"""
        friends = []
        for fs in self.store.list_friendships(user_id, FRIENDSHIP_ACCEPTED):
            # Get the friend (the other person)
            friend_user = self.store.get_user(fs.other_party(user_id))
            if friend_user:
                friends.append(FriendWithRequestInfo(
                    friend=UserInfo.model_validate(friend_user),
                    friendship_id=fs.id,
                    since=fs.created_at
                ))

        return FriendListResponse(
            friends=friends,
            total_count=len(friends)
        )

    def list_pending(self, user_id: UUID) -> PendingRequestsResponse:
        """Get pending friend requests (both incoming and outgoing)"""
        incoming_requests = self._with_users(
            self.store.list_incoming(user_id, FRIENDSHIP_PENDING), user_id
        )
        outgoing_requests = self._with_users(
            self.store.list_outgoing(user_id, FRIENDSHIP_PENDING), user_id
        )

        return PendingRequestsResponse(
            incoming=incoming_requests,
            outgoing=outgoing_requests,
            incoming_count=len(incoming_requests),
            outgoing_count=len(outgoing_requests)
        )

    def _with_users(self, friendships: List[Friendship], user_id: UUID) -> List[FriendRequestWithUser]:
        requests = []
        for fs in friendships:
            other = self.store.get_user(fs.other_party(user_id))
            if other:
                requests.append(FriendRequestWithUser(
                    request_id=fs.id,
                    user=UserInfo.model_validate(other),
                    created_at=fs.created_at
                ))
        return requests

    def are_friends(self, user_id: UUID, other_user_id: UUID) -> bool:
        """Check if two users are friends"""
        friendship = self.store.find_friendship_between(
            user_id, other_user_id, status=FRIENDSHIP_ACCEPTED
        )
        return friendship is not None

    def count_friends(self, user_id: UUID) -> int:
        """Get count of friends"""
        return len(self.store.list_friendships(user_id, FRIENDSHIP_ACCEPTED))

    def search_users(self, query: str, current_user_id: UUID, limit: Optional[int] = None) -> List[User]:
        """Find users by username, email or display name (case-insensitive)"""
        query = (query or "").strip()
        if not query:
            raise ValidationFailedError("Search query is required")
        return self.store.search_users(query, current_user_id, limit or settings.USER_SEARCH_LIMIT)

"""
Friends API endpoints
"""
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, status

from pinmap.core.dependencies import get_current_user, get_friendship_service
from pinmap.core.exceptions import ServiceError
from pinmap.models.user import User
from pinmap.schemas.social import (
    FriendRequestCreate,
    FriendRequestResponse,
    FriendListResponse,
    PendingRequestsResponse,
    FriendActionResponse,
)
from pinmap.services.friendship_service import FriendshipService

router = APIRouter(prefix="/friends", tags=["friends"])


@router.get("", response_model=FriendListResponse)
async def get_friends(
    current_user: User = Depends(get_current_user),
    friendships: FriendshipService = Depends(get_friendship_service)
):
    """Get current user's friends list"""
    return friendships.list_friends(current_user.id)


@router.get("/pending", response_model=PendingRequestsResponse)
async def get_pending_requests(
    current_user: User = Depends(get_current_user),
    friendships: FriendshipService = Depends(get_friendship_service)
):
    """Get pending friend requests (incoming and outgoing)"""
    return friendships.list_pending(current_user.id)


@router.get("/count")
async def get_friend_count(
    current_user: User = Depends(get_current_user),
    friendships: FriendshipService = Depends(get_friendship_service)
):
    """Get friend count for current user"""
    return {"count": friendships.count_friends(current_user.id)}


@router.get("/check/{user_id}")
async def check_friendship(
    user_id: UUID,
    current_user: User = Depends(get_current_user),
    friendships: FriendshipService = Depends(get_friendship_service)
):
    """Check if you are friends with another user"""
    is_friend = friendships.are_friends(current_user.id, user_id)
    return {"is_friend": is_friend, "user_id": user_id}


@router.post("/request", response_model=FriendRequestResponse, status_code=status.HTTP_201_CREATED)
async def send_friend_request(
    request: FriendRequestCreate,
    current_user: User = Depends(get_current_user),
    friendships: FriendshipService = Depends(get_friendship_service)
):
    """Send a friend request to another user"""
    try:
        return friendships.send_request(current_user.id, request.friend_id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.put("/{friendship_id}/accept", response_model=FriendRequestResponse)
async def accept_friend_request(
    friendship_id: UUID,
    current_user: User = Depends(get_current_user),
    friendships: FriendshipService = Depends(get_friendship_service)
):
    """Accept a friend request"""
    try:
        return friendships.accept(friendship_id, current_user.id)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.put("/{friendship_id}/reject", response_model=FriendActionResponse)
async def reject_friend_request(
    friendship_id: UUID,
    current_user: User = Depends(get_current_user),
    friendships: FriendshipService = Depends(get_friendship_service)
):
    """Reject a friend request"""
    try:
        friendships.reject(friendship_id, current_user.id)
        return FriendActionResponse(
            success=True,
            message="Friend request rejected",
            friendship_id=friendship_id
        )
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.delete("/{friendship_id}", response_model=FriendActionResponse)
async def remove_friend(
    friendship_id: UUID,
    current_user: User = Depends(get_current_user),
    friendships: FriendshipService = Depends(get_friendship_service)
):
    """Remove a friend, or cancel a request you sent"""
    try:
        friendships.remove(friendship_id, current_user.id)
        return FriendActionResponse(
            success=True,
            message="Friend removed",
            friendship_id=friendship_id
        )
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
